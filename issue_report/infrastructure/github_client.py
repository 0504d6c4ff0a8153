from __future__ import annotations

import logging

import httpx

from issue_report.domain.entities import IssueAuthor, IssueRecord, IssueState
from issue_report.domain.errors import (
    AuthenticationRequiredError,
    HttpStatusError,
    IssueFetchError,
    RateLimitedError,
    RepositoryNotFoundError,
    TransportError,
    UnexpectedPayloadError,
)
from issue_report.domain.interfaces import IIssueFetcher

log = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
ACCEPT_HEADER  = "application/vnd.github.v3+json"
DEFAULT_LIMIT  = 5


class GitHubIssueClient(IIssueFetcher):
    """
    Concrete implementation of IIssueFetcher for GitHub's REST issues API.

    The constructor receives an httpx.AsyncClient (injected) rather than
    creating one internally, so the caller controls the client lifecycle
    and tests can hand in a client backed by httpx.MockTransport.

    One request per call. No pagination, no retries.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str = GITHUB_API_URL) -> None:
        self._client   = client
        self._base_url = base_url.rstrip("/")
        self._headers  = {"Accept": ACCEPT_HEADER}

    # Anti-Corruption Layer
    @staticmethod
    def _parse_node(node: dict, owner: str, repo: str) -> IssueRecord:
        """
        Translate one raw issue object into an IssueRecord.

        GitHub sends:       We store as:
          "html_url"     →  url
          "created_at"   →  created_at (string, untouched)
          "user"         →  author (login, avatar_url)

        A node that doesn't match the shape fails the whole call.
        """
        try:
            return IssueRecord(
                id         = node["id"],
                number     = node["number"],
                title      = node["title"],
                state      = IssueState(node["state"]),
                created_at = node["created_at"],
                url        = node["html_url"],
                author     = IssueAuthor(
                    login      = node["user"]["login"],
                    avatar_url = node["user"]["avatar_url"],
                ),
            )
        except (KeyError, TypeError, ValueError) as exc:
            node_id = node.get("id") if isinstance(node, dict) else None
            log.warning("Malformed issue node %s in %s/%s: %r", node_id, owner, repo, exc)
            raise UnexpectedPayloadError(
                f"GitHub returned a malformed issue node {node_id} for {owner}/{repo}"
            ) from exc

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Server-provided message if the body carries one, else a generic line."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"Request failed with status code {response.status_code}"

    def _classify(self, response: httpx.Response, owner: str, repo: str) -> IssueFetchError:
        status = response.status_code
        if status == 404:
            return RepositoryNotFoundError(owner, repo)
        if status == 403:
            return RateLimitedError()
        if status == 401:
            return AuthenticationRequiredError()
        return HttpStatusError(status, self._error_detail(response))

    # IIssueFetcher implementation
    async def fetch_issues(self, owner: str, repo: str, limit: int = DEFAULT_LIMIT) -> list[IssueRecord]:
        """
        Fetch the `limit` most recently created issues of owner/repo.

        Returns IssueRecords in the order GitHub sent them (newest first).
        Raises an IssueFetchError subclass for every HTTP or transport failure.
        """
        log.info("Fetching issues for %s/%s...", owner, repo)
        url = f"{self._base_url}/repos/{owner}/{repo}/issues"
        log.info("API URL: %s", url)

        params = {
            "state":     "all",
            "per_page":  limit,
            "sort":      "created",
            "direction": "desc",
        }

        try:
            response = await self._client.get(url, params=params, headers=self._headers)
        except httpx.RequestError as exc:
            log.warning("Request to %s failed: %s", url, exc)
            raise TransportError(str(exc) or type(exc).__name__) from exc

        # Only 200 counts as success; a redirect is a failure too
        if response.status_code != 200:
            error = self._classify(response, owner, repo)
            log.warning("GitHub answered %d for %s/%s", response.status_code, owner, repo)
            raise error

        try:
            data = response.json()
        except ValueError as exc:
            raise UnexpectedPayloadError(f"GitHub returned a non-JSON body for {owner}/{repo}") from exc

        if not isinstance(data, list):
            raise UnexpectedPayloadError(f"GitHub returned an unexpected payload for {owner}/{repo}")

        if not data:
            log.info("No issues found in the repository.")
            return []

        issues = [self._parse_node(node, owner, repo) for node in data]
        log.debug("Parsed %d issue nodes", len(issues))
        return issues


async def fetch_issues(owner: str, repo: str, limit: int = DEFAULT_LIMIT) -> list[IssueRecord]:
    """
    One-shot convenience: open a client, fetch, close.
    The connection is released whether the call succeeds or fails.
    """
    async with httpx.AsyncClient() as client:
        return await GitHubIssueClient(client).fetch_issues(owner, repo, limit)
