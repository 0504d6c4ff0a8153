from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class IssueState(str, Enum):
    """Issue state exactly as GitHub reports it. Never derived locally."""
    OPEN   = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class IssueAuthor:
    login:      str
    avatar_url: str


@dataclass(frozen=True)
class IssueRecord:
    """
    Immutable domain entity representing one GitHub issue.

    Field names are OURS (snake_case), not GitHub's. The translation
    ("html_url" → url, "user" → author) happens in the anti-corruption
    layer of the client, not here.

    created_at is kept as the ISO 8601 string the API sent; it is only
    ever displayed, so it is not parsed.
    """
    id:         int
    number:     int
    title:      str
    state:      IssueState
    created_at: str
    url:        str
    author:     IssueAuthor


@dataclass(frozen=True)
class ReportResult:
    """
    Immutable value object summarising one report run.
    Returned by the application service; issues is empty on failure.
    """
    owner:         str
    repo:          str
    status:        str
    issues:        tuple[IssueRecord, ...] = ()
    error_message: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "success"
