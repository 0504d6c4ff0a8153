from __future__ import annotations

from typing import Iterable

from issue_report.domain.entities import IssueRecord

REPORT_HEADER = "Latest GitHub Issues:"

ISSUE_TEMPLATE = """
#{number} - {title}
State: {state}
Created by: {author}
URL: {url}
---"""


def render_issue(issue: IssueRecord) -> str:
    return ISSUE_TEMPLATE.format(
        number = issue.number,
        title  = issue.title,
        state  = issue.state.value,
        author = issue.author.login,
        url    = issue.url,
    )


def render_report(issues: Iterable[IssueRecord]) -> str:
    """Header line followed by one block per issue, in the given order."""
    return "\n".join([REPORT_HEADER, *(render_issue(i) for i in issues)])
