"""
Base exception classes for application-wide error handling.

Every domain error raised by a service derives from BaseApplicationError.
Each class carries the HTTP status it maps to, so the API layer can render
any of them without knowing the concrete type (see core.exception_handlers).

Exception Hierarchy:
    BaseApplicationError (500)
    ├── ValidationError (400) - Input or business-rule failures
    ├── AuthenticationError (401) - Bad credentials or tokens
    ├── PermissionDeniedError (403) - Authorization failures
    ├── NotFoundError (404) - Resource not found
    ├── ConflictError (409) - Duplicates and state conflicts
    ├── GoneError (410) - Resource existed but was removed
    ├── RateLimitError (429) - Rate limit exceeded
    └── ExternalServiceError (502) - Third-party service failures

Usage:
    from core.exceptions import NotFoundError

    raise NotFoundError("User not found.", error_code="USER_NOT_FOUND")

    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=e.status_code)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
        status_code: HTTP status used when the error reaches the API layer

    Example:
        try:
            OTPService.verify(email, "email", code)
        except NotFoundError as e:
            logger.warning(f"Lookup failed: {e.error_code}")
            return Response(e.to_dict(), status=e.status_code)
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and (when present) details keys

        Example:
            {
                "error": "OTP did not match.",
                "error_code": "OTP_MISMATCH",
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation or a business rule fails.

    Note:
        For DRF serializer validation, use DRF's built-in validation.
        Use this for service-layer checks.
    """

    default_error_code: str = "VALIDATION_ERROR"
    status_code: int = 400


class AuthenticationError(BaseApplicationError):
    """Raised when credentials or tokens are rejected."""

    default_error_code: str = "AUTHENTICATION_FAILED"
    status_code: int = 401


class PermissionDeniedError(BaseApplicationError):
    """Raised when the caller lacks permission for an operation."""

    default_error_code: str = "PERMISSION_DENIED"
    status_code: int = 403


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Use for single-resource lookups where existence is expected,
    e.g. the user an OTP is addressed to.
    """

    default_error_code: str = "NOT_FOUND"
    status_code: int = 404


class ConflictError(BaseApplicationError):
    """
    Raised when an operation conflicts with current resource state.

    Example:
        if User.objects.filter(email__iexact=email).exists():
            raise ConflictError(
                "Email already registered",
                error_code="EMAIL_EXISTS",
            )
    """

    default_error_code: str = "CONFLICT"
    status_code: int = 409


class GoneError(BaseApplicationError):
    """Raised when a resource existed but has been removed (soft-deleted accounts)."""

    default_error_code: str = "GONE"
    status_code: int = 410


class RateLimitError(BaseApplicationError):
    """
    Raised when a rate limit is exceeded.

    Include retry_after in details when possible to help clients.
    """

    default_error_code: str = "RATE_LIMIT_EXCEEDED"
    status_code: int = 429


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an external service call fails (mail server, OAuth provider).

    Log the original error for debugging but don't expose internal
    details to clients in production.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    status_code: int = 502
