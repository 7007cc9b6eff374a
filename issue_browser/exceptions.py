"""
Error taxonomy for the issue browser.

GraphQL-level errors (the ``errors`` array of a successful response) are not
exceptions: they are kept as data on the snapshot. Everything here is raised
to the caller of an intent.
"""

from collections.abc import Sequence
from typing import Any, Optional


class IssueBrowserError(Exception):
    """Base class for all issue browser errors."""


class TransportError(IssueBrowserError):
    """Network or HTTP failure, non-2xx status, or an unreadable response body."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class MalformedMutationResult(IssueBrowserError):
    """A star mutation response carried neither ``addStar`` nor ``removeStar``."""

    def __init__(self, message: str, errors: Sequence[Any] = ()):
        self.errors = tuple(errors)
        if self.errors:
            message = f"{message}: " + " ".join(_error_messages(self.errors))
        super().__init__(message)


class IncompletePageError(IssueBrowserError):
    """A next-page response did not include the organization's repository."""

    def __init__(self, errors: Sequence[Any] = ()):
        self.errors = tuple(errors)
        message = "Next page response is missing organization.repository"
        if self.errors:
            message = f"{message}: " + " ".join(_error_messages(self.errors))
        super().__init__(message)


class MalformedPageError(IssueBrowserError):
    """An issues page response does not have the shape of the issues query."""

    def __init__(self, message: str, errors: Sequence[Any] = ()):
        self.errors = tuple(errors)
        super().__init__(message)


class MissingTokenError(IssueBrowserError, ValueError):
    """No GitHub token configured."""


class PreconditionViolation(IssueBrowserError):
    """An intent was invoked in a state that does not allow it."""


class InvalidPathError(PreconditionViolation):
    """Path is not of the form ``organization/repository``."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Invalid path {path!r}: expected 'organization/repository'")


class RequestInFlightError(PreconditionViolation):
    """A page request is already in flight for this session."""


def _error_messages(errors: Sequence[Any]) -> list[str]:
    return [getattr(error, "message", None) or str(error) for error in errors]


__all__ = [
    "IssueBrowserError",
    "TransportError",
    "MalformedMutationResult",
    "IncompletePageError",
    "MalformedPageError",
    "MissingTokenError",
    "PreconditionViolation",
    "InvalidPathError",
    "RequestInFlightError",
]
