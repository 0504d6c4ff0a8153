"""
Domain Layer: Error Taxonomy
----------------------------
Every failure of an issue fetch surfaces as one of these. The client
classifies raw HTTP / transport failures at its boundary; nothing above
the infrastructure layer ever sees an httpx exception.

  IssueFetchError
    ├── RepositoryNotFoundError      HTTP 404
    ├── RateLimitedError             HTTP 403
    ├── AuthenticationRequiredError  HTTP 401
    ├── HttpStatusError              any other non-200 status
    ├── TransportError               DNS, connection refused, timeout …
    └── UnexpectedPayloadError       200 with a body that is not a list of issues
"""

from __future__ import annotations
from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND       = "not_found"
    RATE_LIMITED    = "rate_limited"
    UNAUTHORIZED    = "unauthorized"
    HTTP_ERROR      = "http_error"
    TRANSPORT_ERROR = "transport_error"
    BAD_PAYLOAD     = "bad_payload"
    UNKNOWN         = "unknown"


class IssueFetchError(Exception):
    """Base class. str(exc) is the human-readable message shown to users."""
    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RepositoryNotFoundError(IssueFetchError):
    """Raised on HTTP 404. GitHub answers 404 for private repos too."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, owner: str, repo: str) -> None:
        super().__init__(f"Repository {owner}/{repo} not found or is private")
        self.owner = owner
        self.repo  = repo


class RateLimitedError(IssueFetchError):
    """Raised on HTTP 403. No retry is attempted."""
    kind = ErrorKind.RATE_LIMITED

    def __init__(self) -> None:
        super().__init__("API rate limit exceeded. Please try again later")


class AuthenticationRequiredError(IssueFetchError):
    """Raised on HTTP 401."""
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self) -> None:
        super().__init__("Authentication required. Consider adding a GitHub token")


class HttpStatusError(IssueFetchError):
    """Raised on any other non-200 status, redirects included."""
    kind = ErrorKind.HTTP_ERROR

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"Failed to fetch GitHub issues ({status_code}): {detail}")
        self.status_code = status_code
        self.detail      = detail


class TransportError(IssueFetchError):
    """Raised when the request never got an HTTP response."""
    kind = ErrorKind.TRANSPORT_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to fetch GitHub issues: {detail}")
        self.detail = detail


class UnexpectedPayloadError(IssueFetchError):
    """
    Raised on a 200 whose body can't be mapped: not JSON, not an array,
    or an issue node missing fields. The whole call fails; nothing partial
    is returned.
    """
    kind = ErrorKind.BAD_PAYLOAD
