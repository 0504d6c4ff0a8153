"""
Domain Layer: Interfaces (Abstract Contracts)
---------------------------------------------
The application layer depends on these, never on the concrete client.
Tests can pass a FakeIssueFetcher to IssueReportService without any
network access.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from .entities import IssueRecord


class IIssueFetcher(ABC):
    """
    Contract that any issue source must fulfil.
    """

    @abstractmethod
    async def fetch_issues(self, owner: str, repo: str, limit: int = 5) -> list[IssueRecord]:
        """
        Fetch at most `limit` issues of owner/repo, newest first.

        Returns an empty list when the repository has no issues.
        Raises an IssueFetchError subclass on any failure.
        """
        ...
