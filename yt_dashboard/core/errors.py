"""Error taxonomy for channel data acquisition."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for yt-dashboard errors."""


class InputValidationError(DashboardError):
    """Raised when the identifier list is rejected before any network call."""


class ApiUnavailableError(DashboardError):
    """Raised when the API rejects calls as disabled or misconfigured.

    Aborts the whole batch. ``remediation`` is a user-facing hint for fixing
    the key configuration.
    """

    def __init__(self, message: str, *, reason: str | None = None, remediation: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.remediation = remediation

    def __str__(self) -> str:
        base = super().__str__()
        if self.remediation:
            return f"{base} {self.remediation}"
        return base


class ChannelNotFoundError(DashboardError):
    """Raised when an identifier cannot be resolved to a channel."""


class TransientFetchError(DashboardError):
    """Raised on network, HTTP, or decode failures of a single request."""

    def __init__(self, message: str, *, status_code: int | None = None, reason: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
