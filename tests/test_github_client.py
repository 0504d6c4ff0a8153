# Exercises the REST client against canned responses served by httpx.MockTransport
import asyncio

import httpx
import pytest

from fakes import RecordingHandler
from issue_report.domain.entities import IssueState
from issue_report.domain.errors import (
    AuthenticationRequiredError,
    ErrorKind,
    HttpStatusError,
    IssueFetchError,
    RateLimitedError,
    RepositoryNotFoundError,
    TransportError,
    UnexpectedPayloadError,
)
from issue_report.infrastructure import github_client
from issue_report.infrastructure.github_client import GitHubIssueClient


def fetch(handler, owner="org", repo="repo", **kwargs):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await GitHubIssueClient(client, base_url="https://api.test").fetch_issues(owner, repo, **kwargs)
    return asyncio.run(run())


def test_request_shape_and_default_limit():
    handler = RecordingHandler(payload=[])
    fetch(handler)

    (request,) = handler.requests
    assert request.method == "GET"
    assert request.url.path == "/repos/org/repo/issues"
    assert request.url.host == "api.test"
    assert dict(request.url.params) == {
        "state": "all",
        "per_page": "5",
        "sort": "created",
        "direction": "desc",
    }
    assert request.headers["Accept"] == "application/vnd.github.v3+json"


@pytest.mark.parametrize("limit", [1, 7, 100])
def test_limit_forwarded_as_per_page(limit):
    handler = RecordingHandler(payload=[])
    fetch(handler, limit=limit)
    assert handler.requests[0].url.params["per_page"] == str(limit)


@pytest.mark.parametrize("count", [1, 3, 5])
def test_records_keep_server_order_and_fields(issue_factory, count):
    payload = [issue_factory(n, state="closed" if n % 2 else "open") for n in range(count, 0, -1)]
    issues = fetch(RecordingHandler(payload=payload))

    assert [i.number for i in issues] == [n["number"] for n in payload]
    first, raw = issues[0], payload[0]
    assert first.id == raw["id"]
    assert first.title == raw["title"]
    assert first.state is IssueState(raw["state"])
    assert first.created_at == raw["created_at"]
    assert first.url == raw["html_url"]
    assert first.author.login == raw["user"]["login"]
    assert first.author.avatar_url == raw["user"]["avatar_url"]


def test_empty_array_is_success():
    assert fetch(RecordingHandler(payload=[])) == []


@pytest.mark.parametrize("breakage", ["null_user", "missing_key", "unknown_state"])
def test_malformed_node_fails_the_whole_call(issue_factory, breakage):
    broken = issue_factory(2, state="draft" if breakage == "unknown_state" else "open")
    if breakage == "null_user":
        broken["user"] = None
    elif breakage == "missing_key":
        del broken["html_url"]
    payload = [issue_factory(3), broken, issue_factory(1)]

    with pytest.raises(UnexpectedPayloadError) as info:
        fetch(RecordingHandler(payload=payload))
    assert "malformed issue node 1002" in str(info.value)
    assert "org/repo" in str(info.value)
    assert info.value.kind is ErrorKind.BAD_PAYLOAD


def test_not_found_names_the_repository():
    with pytest.raises(RepositoryNotFoundError) as info:
        fetch(RecordingHandler(404, {"message": "Not Found"}), owner="someone", repo="secret")
    assert "someone/secret" in str(info.value)
    assert "not found or is private" in str(info.value)
    assert info.value.kind is ErrorKind.NOT_FOUND


def test_forbidden_is_rate_limited():
    with pytest.raises(RateLimitedError) as info:
        fetch(RecordingHandler(403, {"message": "API rate limit exceeded for 1.2.3.4"}))
    assert "rate limit" in str(info.value)
    assert info.value.kind is ErrorKind.RATE_LIMITED


def test_unauthorized_asks_for_authentication():
    with pytest.raises(AuthenticationRequiredError) as info:
        fetch(RecordingHandler(401, {"message": "Requires authentication"}))
    assert "Authentication required" in str(info.value)
    assert info.value.kind is ErrorKind.UNAUTHORIZED


def test_other_status_uses_server_message():
    with pytest.raises(HttpStatusError) as info:
        fetch(RecordingHandler(500, {"message": "Server Error"}))
    assert info.value.status_code == 500
    assert str(info.value) == "Failed to fetch GitHub issues (500): Server Error"


def test_other_status_without_body_falls_back():
    with pytest.raises(HttpStatusError) as info:
        fetch(RecordingHandler(502))
    assert "(502)" in str(info.value)
    assert "Request failed with status code 502" in str(info.value)


def test_redirect_is_not_followed():
    handler = RecordingHandler(301, headers={"Location": "https://api.test/repositories/1/issues"})
    with pytest.raises(HttpStatusError) as info:
        fetch(handler)
    assert info.value.status_code == 301
    assert len(handler.requests) == 1


def test_transport_failure_keeps_message():
    handler = RecordingHandler(raises=httpx.ConnectError("Connection refused"))
    with pytest.raises(TransportError) as info:
        fetch(handler)
    assert "Connection refused" in str(info.value)
    assert isinstance(info.value.__cause__, httpx.ConnectError)
    assert info.value.kind is ErrorKind.TRANSPORT_ERROR


def test_no_retry_after_rate_limit():
    handler = RecordingHandler(403)
    with pytest.raises(RateLimitedError):
        fetch(handler)
    assert len(handler.requests) == 1


def test_non_list_payload_is_rejected():
    with pytest.raises(UnexpectedPayloadError) as info:
        fetch(RecordingHandler(payload={"message": "not a list"}))
    assert isinstance(info.value, IssueFetchError)
    assert info.value.kind is ErrorKind.BAD_PAYLOAD


def test_non_json_body_is_rejected():
    def handler(request):
        return httpx.Response(200, text="<html>")

    with pytest.raises(UnexpectedPayloadError) as info:
        fetch(handler)
    assert "non-JSON" in str(info.value)
    assert info.value.kind is ErrorKind.BAD_PAYLOAD


def test_transport_failure_without_message_names_the_exception():
    handler = RecordingHandler(raises=httpx.ConnectError(""))
    with pytest.raises(TransportError) as info:
        fetch(handler)
    assert "ConnectError" in str(info.value)


def test_fetch_issues_closes_its_own_client(monkeypatch, issue_factory):
    handler = RecordingHandler(payload=[issue_factory(1)])
    clients = []

    class TrackingClient(httpx.AsyncClient):
        def __init__(self, *args, **kwargs):
            super().__init__(transport=httpx.MockTransport(handler))
            clients.append(self)

    monkeypatch.setattr(github_client.httpx, "AsyncClient", TrackingClient)

    issues = asyncio.run(github_client.fetch_issues("org", "repo"))

    assert [i.number for i in issues] == [1]
    assert clients and clients[0].is_closed
