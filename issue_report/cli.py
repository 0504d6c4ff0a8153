"""
cli.py: Dependency Wiring (Composition Root)
--------------------------------------------
This file has ONE job: wire the pieces together, run the report once,
and print the outcome.

It does NOT contain any business logic. It just:
  1. Reads configuration (constants, optionally overridden by flags)
  2. Creates the httpx client and the concrete GitHubIssueClient
  3. Injects it into IssueReportService
  4. Prints the rendered issues, or the error message to stderr
  5. Exits non-zero on any failure

Dependency graph:
              cli.py  (wires everything)
                 │
                 ▼
       IssueReportService
                 │
                 ▼
          IIssueFetcher
         (GitHubIssueClient ── httpx.AsyncClient)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import httpx

from issue_report.application.formatter import render_report
from issue_report.application.report_service import IssueReportService
from issue_report.infrastructure.github_client import DEFAULT_LIMIT, GitHubIssueClient

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_OWNER = "ahmadalbourhan"
DEFAULT_REPO  = "second-chance-app"

LOG_FORMAT      = "%(asctime)s [%(levelname)s] %(name)s — %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level   = logging.DEBUG if verbose else logging.INFO,
        format  = LOG_FORMAT,
        datefmt = LOG_DATE_FORMAT,
        stream  = sys.stdout,
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print the latest issues of a GitHub repository"
    )
    parser.add_argument(
        "--owner",
        default = DEFAULT_OWNER,
        help    = f"Repository owner (default: {DEFAULT_OWNER})",
    )
    parser.add_argument(
        "--repo",
        default = DEFAULT_REPO,
        help    = f"Repository name (default: {DEFAULT_REPO})",
    )
    parser.add_argument(
        "--limit",
        type    = _positive_int,
        default = DEFAULT_LIMIT,
        help    = f"Maximum number of issues to fetch (default: {DEFAULT_LIMIT})",
    )
    parser.add_argument(
        "--verbose",
        action = "store_true",
        help   = "Log at DEBUG level",
    )
    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Dependency wiring
# ---------------------------------------------------------------------------

async def build_and_run(owner: str, repo: str, limit: int, client: httpx.AsyncClient | None = None) -> bool:
    """
    Wires the dependencies together, runs the report and prints it.
    Returns True on success.

    A caller-supplied client is used as-is and left open; otherwise one
    is created here and always closed.
    """
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient()

    try:
        fetcher = GitHubIssueClient(client=client)   # injected
        service = IssueReportService(fetcher=fetcher)

        result = await service.execute(owner, repo, limit)
    finally:
        if owns_client:
            await client.aclose()

    log.debug("Report run finished | %s/%s | status=%s", owner, repo, result.status)

    if result.succeeded:
        print(render_report(result.issues))
        return True

    print(f"Error: {result.error_message}", file=sys.stderr)
    return False


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    _configure_logging(args.verbose)

    if not asyncio.run(build_and_run(args.owner, args.repo, args.limit)):
        sys.exit(1)

