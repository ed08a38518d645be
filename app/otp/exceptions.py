"""
OTP-specific exceptions.

Exception Hierarchy:
    OTPError (base, 500)
    ├── UserNotFoundError (404) - No user for the submitted email
    ├── AlreadyVerifiedError (400) - Email verification requested twice
    ├── CodeMismatchError (400) - No active code, wrong code, or lost race
    ├── CodeExpiredError (400) - Code matched but is past its window
    ├── PersistenceError (500) - Database failure while issuing/consuming
    └── DeliveryError - Delivery channel failure (logged, never raised to callers)

Each class mixes in the matching core.exceptions type so generic handlers
(`except NotFoundError`) keep working.

Usage:
    from otp.exceptions import CodeExpiredError

    try:
        OTPService.verify(email, "email", code)
    except CodeExpiredError:
        OTPService.issue(email, "email")
"""

from core.exceptions import BaseApplicationError, NotFoundError, ValidationError


class OTPError(BaseApplicationError):
    """Base exception for the OTP workflow."""

    default_error_code: str = "OTP_ERROR"


class UserNotFoundError(OTPError, NotFoundError):
    default_error_code: str = "USER_NOT_FOUND"
    status_code: int = 404

    def __init__(self, message: str = "User not found.", **kwargs):
        super().__init__(message, **kwargs)


class AlreadyVerifiedError(OTPError, ValidationError):
    default_error_code: str = "USER_ALREADY_VERIFIED"
    status_code: int = 400

    def __init__(self, message: str = "User is already verified.", **kwargs):
        super().__init__(message, **kwargs)


class CodeMismatchError(OTPError, ValidationError):
    """
    Raised when no active code exists, the code differs, or a concurrent
    verification consumed it first. Callers cannot tell these apart.
    """

    default_error_code: str = "OTP_MISMATCH"
    status_code: int = 400

    def __init__(self, message: str = "OTP did not match.", **kwargs):
        super().__init__(message, **kwargs)


class CodeExpiredError(OTPError, ValidationError):
    default_error_code: str = "OTP_EXPIRED"
    status_code: int = 400

    def __init__(self, message: str = "OTP has expired.", **kwargs):
        super().__init__(message, **kwargs)


class PersistenceError(OTPError):
    """Raised when the database rejects an OTP write; wraps the driver error."""

    default_error_code: str = "OTP_PERSISTENCE_ERROR"
    status_code: int = 500

    def __init__(self, message: str = "Could not save one-time password.", **kwargs):
        super().__init__(message, **kwargs)


class DeliveryError(OTPError):
    """Raised by dispatchers when a code cannot be handed to its channel."""

    default_error_code: str = "OTP_DELIVERY_ERROR"
    status_code: int = 502
