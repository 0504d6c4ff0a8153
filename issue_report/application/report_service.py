from __future__ import annotations

import logging

from issue_report.domain.entities import ReportResult
from issue_report.domain.errors import IssueFetchError
from issue_report.domain.interfaces import IIssueFetcher

log = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


class IssueReportService:
    """
    The top-level use case: fetch one page of issues for a repository.

    Receives the fetcher via constructor injection. Runs exactly once per
    call to execute(): Idle → Fetching → Done | Failed. Never raises;
    every outcome comes back as a ReportResult.
    """

    def __init__(self, fetcher: IIssueFetcher) -> None:
        self._fetcher = fetcher

    async def execute(self, owner: str, repo: str, limit: int) -> ReportResult:
        log.info("IssueReportService | %s/%s | limit: %d", owner, repo, limit)

        try:
            issues = await self._fetcher.fetch_issues(owner, repo, limit)
        except IssueFetchError as exc:
            log.error("Fetch failed (%s): %s", exc.kind.value, exc)
            return ReportResult(
                owner         = owner,
                repo          = repo,
                status        = "failed",
                error_message = str(exc),
            )
        except Exception:
            log.error("Fetch failed with an unexpected error", exc_info=True)
            return ReportResult(
                owner         = owner,
                repo          = repo,
                status        = "failed",
                error_message = UNKNOWN_ERROR,
            )

        log.info("Fetched %d issues for %s/%s", len(issues), owner, repo)
        return ReportResult(
            owner  = owner,
            repo   = repo,
            status = "success",
            issues = tuple(issues),
        )
