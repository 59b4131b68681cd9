from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` holds one ``{"field": ..., "message": ...}`` descriptor per
    violated rule.
    """

    def __init__(self, message: str = "Validation failed", errors: Optional[Sequence[dict]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class DuplicateUsernameError(DomainError):
    """Raised when registering a username that is already taken."""


class DuplicateEmailError(DomainError):
    """Raised when an employee email is already in use."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class InvalidTokenError(DomainError):
    """Raised when a bearer token is missing, malformed or badly signed."""

    status_code = 401


class TokenExpiredError(InvalidTokenError):
    """Raised when a bearer token is past its expiration."""


class NotFoundError(DomainError):
    status_code = 404


class InvalidFileError(DomainError):
    """Raised when an uploaded file breaks one or more upload rules."""

    def __init__(self, reasons: Sequence[str]):
        super().__init__("Invalid file: " + "; ".join(reasons))
        self.reasons = list(reasons)


class StoreError(DomainError):
    """Raised on unexpected persistence failures."""

    status_code = 500


class ConfigurationError(RuntimeError):
    """Raised at startup when a required setting is missing or malformed."""
