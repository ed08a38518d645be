"""
Authentication-specific exceptions.

Exception Hierarchy:
    EmailAlreadyRegisteredError (409) - Registration with a taken email
    InvalidCredentialsError (401) - Wrong email/password or inactive account
    InvalidTokenError (401) - Refresh token malformed, expired or blacklisted
    AccountDeletedError (410) - Social sign-in to a deactivated account
"""

from core.exceptions import AuthenticationError, ConflictError, GoneError


class EmailAlreadyRegisteredError(ConflictError):
    default_error_code: str = "EMAIL_EXISTS"

    def __init__(self, message: str = "A user with this email already exists.", **kwargs):
        super().__init__(message, **kwargs)


class InvalidCredentialsError(AuthenticationError):
    default_error_code: str = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid email or password.", **kwargs):
        super().__init__(message, **kwargs)


class InvalidTokenError(AuthenticationError):
    default_error_code: str = "INVALID_TOKEN"

    def __init__(self, message: str = "Token is invalid or expired.", **kwargs):
        super().__init__(message, **kwargs)


class AccountDeletedError(GoneError):
    default_error_code: str = "ACCOUNT_DELETED"

    def __init__(self, message: str = "Your account has been deleted.", **kwargs):
        super().__init__(message, **kwargs)
