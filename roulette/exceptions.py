"""Exception hierarchy for the channel roulette.

Hierarchy::

    RouletteError
    ├── ConfigurationError
    └── ApiError                 (status_code, reason)
        ├── QuotaExceededError
        ├── AuthorizationError
        └── RequestFailedError
"""

from typing import Optional

# Error reasons the YouTube Data API reports when the caller must back off.
QUOTA_REASONS = frozenset({"quotaExceeded", "rateLimitExceeded", "userRateLimitExceeded"})


class RouletteError(Exception):
    """Base class for all channel roulette exceptions."""


class ConfigurationError(RouletteError):
    """Raised when the API credential is missing or the configuration is unusable."""


class ApiError(RouletteError):
    """Raised when the upstream search API rejects or fails a request.

    Args:
        message: Human-readable description of the failure.
        status_code: HTTP status of the response, or ``None`` for transport errors.
        reason: Error reason reported by the API body (e.g. ``"quotaExceeded"``).
    """

    def __init__(
        self, message: str, status_code: Optional[int] = None, reason: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class QuotaExceededError(ApiError):
    """Raised when the upstream API reports quota exhaustion or rate limiting."""


class AuthorizationError(ApiError):
    """Raised on HTTP 401 or a non-quota HTTP 403."""


class RequestFailedError(ApiError):
    """Raised on any other non-2xx response, transport error or unreadable body."""
