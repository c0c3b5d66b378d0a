"""Error taxonomy shared by services and translated to HTTP by the app."""

from __future__ import annotations

from typing import Any


class CatalogError(Exception):
    """Base class for every failure surfaced to callers."""

    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(CatalogError):
    """Malformed payload or a reference that does not resolve."""

    status_code = 422


class AuthenticationError(CatalogError):
    status_code = 401


class AuthorizationError(CatalogError):
    """Caller is known but does not own the target."""

    status_code = 403


class NotFoundError(CatalogError):
    status_code = 404


class ConflictError(CatalogError):
    """A uniqueness constraint was violated."""

    status_code = 409


class InternalConsistencyError(CatalogError):
    """A write that should have touched one row touched none."""

    status_code = 500


class RateLimitedError(CatalogError):
    """Too many attempts from one client inside the current window."""

    status_code = 429

    def __init__(self, message: str, retry_after: int):
        super().__init__(message, {"retryAfter": retry_after})
        self.retry_after = retry_after
