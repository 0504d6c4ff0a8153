import pytest

from fakes import make_issue


@pytest.fixture
def issue_factory():
    return make_issue
