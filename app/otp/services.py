"""
OTP services.

This module provides OTPService, which issues codes and verifies them.

Issue:
    1. Look up the user by email (UserNotFoundError)
    2. In one transaction, delete every code for (user, operation) and
       store a fresh active one
    3. Hand the code to the delivery dispatcher

Verify:
    1. Look up the user by email (UserNotFoundError)
    2. "email" only: refuse if the address is already verified
    3. Compare against the newest active code (CodeMismatchError)
    4. Check the expiry window (CodeExpiredError)
    5. In one transaction, consume the code and run the activation hook

Related files:
    - managers.py: OTP store
    - hooks.py: activation hook registry
    - dispatchers.py: delivery implementations
    - exceptions.py: error taxonomy

Configuration:
    - OTP_EXPIRY_SECONDS: validity window (default 60)
    - OTP_DELIVERY_DISPATCHER: dotted path of the dispatcher class
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.utils import timezone
from django.utils.module_loading import import_string

from core.services import BaseService
from otp.exceptions import (
    AlreadyVerifiedError,
    CodeExpiredError,
    CodeMismatchError,
    DeliveryError,
    PersistenceError,
    UserNotFoundError,
)
from otp.hooks import activation_hooks
from otp.models import OneTimePassword
from toolkit.helpers import mask_email

if TYPE_CHECKING:
    from typing import Any

    from authentication.models import User
    from otp.protocols import DeliveryDispatcher


@dataclass(frozen=True)
class VerificationResult:
    """
    Outcome of a successful verification.

    Attributes:
        operation: Operation the code was verified for
        user: Owner of the code
        artifact: Whatever the activation hook returned (None without a hook)
    """

    operation: str
    user: User
    artifact: Any = None


def get_dispatcher() -> DeliveryDispatcher:
    """Instantiate the dispatcher named by settings.OTP_DELIVERY_DISPATCHER."""
    dispatcher_class = import_string(settings.OTP_DELIVERY_DISPATCHER)
    return dispatcher_class()


class OTPService(BaseService):
    """
    Issue and verify one-time passwords.

    Usage:
        from otp.services import OTPService

        OTPService.issue("user@example.com", "email")

        result = OTPService.verify("user@example.com", "email", "482913")
        tokens = result.artifact  # TokenPair for "email"
    """

    @staticmethod
    def generate_code() -> int:
        """Uniform random integer in [111111, 999999] from the OS CSPRNG."""
        span = OneTimePassword.CODE_MAX - OneTimePassword.CODE_MIN + 1
        return OneTimePassword.CODE_MIN + secrets.randbelow(span)

    @staticmethod
    def expiry_window() -> timedelta:
        return timedelta(seconds=settings.OTP_EXPIRY_SECONDS)

    @classmethod
    def is_expired(cls, otp: OneTimePassword) -> bool:
        """True once more than the expiry window has passed since issuance."""
        return timezone.now() - otp.created_at > cls.expiry_window()

    @staticmethod
    def codes_match(expected: int, submitted: Any) -> bool:
        """
        Numeric comparison of a submitted code against the stored one.

        "012345" and 12345 compare equal; anything that is not an integer
        (letters, empty string, None) never matches.
        """
        try:
            return int(str(submitted).strip()) == expected
        except (TypeError, ValueError):
            return False

    @classmethod
    def get_user(cls, email: str) -> User:
        User = get_user_model()
        try:
            return User.objects.get_by_email(email)
        except User.DoesNotExist:
            cls.get_logger().info(
                f"OTP requested for unknown email {mask_email(email)}"
            )
            raise UserNotFoundError() from None

    @classmethod
    def issue(
        cls,
        email: str,
        operation: str,
        dispatcher: DeliveryDispatcher | None = None,
    ) -> OneTimePassword:
        """
        Create a fresh code for (user, operation) and dispatch it.

        Any earlier code for the same pair stops working the moment this
        returns, whether it was active, used, or expired.

        Args:
            email: Address of the recipient account
            operation: Operation tag the code authorizes
            dispatcher: Override for settings.OTP_DELIVERY_DISPATCHER

        Returns:
            The stored OneTimePassword

        Raises:
            UserNotFoundError: No account for `email`
            PersistenceError: The delete/insert failed (nothing was changed)
        """
        logger = cls.get_logger()
        user = cls.get_user(email)
        code = cls.generate_code()

        try:
            with cls.atomic():
                # Row lock: concurrent issues for one user run one at a time,
                # keeping a single active code per (user, operation)
                get_user_model().objects.select_for_update().get(pk=user.pk)
                replaced = OneTimePassword.objects.invalidate_all(user, operation)
                otp = OneTimePassword.objects.issue(user, operation, code)
        except DatabaseError as exc:
            logger.error(
                f"Failed to store {operation} OTP for user {user.pk}: {exc}",
                extra={"user_id": user.pk, "operation": operation},
            )
            raise PersistenceError(details={"operation": operation}) from exc

        logger.info(
            f"Issued {operation} OTP for {mask_email(user.email)}",
            extra={"user_id": user.pk, "operation": operation, "replaced": replaced},
        )

        dispatcher = dispatcher or get_dispatcher()
        try:
            dispatcher.deliver(user, code, operation)
        except DeliveryError as exc:
            # The code is stored; the user can ask for another one.
            logger.warning(
                f"Delivery of {operation} OTP failed for user {user.pk}: {exc.message}",
                extra={"user_id": user.pk, "operation": operation},
            )

        return otp

    @classmethod
    def verify(cls, email: str, operation: str, code: Any) -> VerificationResult:
        """
        Check `code` and, on success, consume it and run the activation hook.

        Only a matching code is checked for expiry, so a wrong guess always
        reads as a mismatch. Failed verifications write nothing; an expired
        code stays active until the next issue() replaces it.

        Args:
            email: Address of the account
            operation: Operation tag the code was issued for
            code: Submitted code (int or numeric string)

        Returns:
            VerificationResult carrying the hook artifact

        Raises:
            UserNotFoundError: No account for `email`
            AlreadyVerifiedError: "email" operation on a verified account
            CodeMismatchError: No active code, wrong code, or a concurrent
                verification consumed it first
            CodeExpiredError: Correct code past its window
            PersistenceError: Database failure while consuming (rolled back)
        """
        logger = cls.get_logger()
        user = cls.get_user(email)
        log_extra = {"user_id": user.pk, "operation": operation}

        if (
            operation == OneTimePassword.Operation.EMAIL
            and getattr(user, "email_verified_at", None) is not None
        ):
            raise AlreadyVerifiedError()

        otp = OneTimePassword.objects.active_for(user, operation)
        if otp is None or not cls.codes_match(otp.code, code):
            logger.info(f"OTP mismatch for user {user.pk}", extra=log_extra)
            raise CodeMismatchError()

        if cls.is_expired(otp):
            logger.info(f"Expired OTP submitted by user {user.pk}", extra=log_extra)
            raise CodeExpiredError(
                details={"expiry_seconds": settings.OTP_EXPIRY_SECONDS}
            )

        hook = activation_hooks.get(operation)
        try:
            with cls.atomic():
                if not OneTimePassword.objects.consume(otp):
                    raise CodeMismatchError()
                artifact = hook(user) if hook is not None else None
        except CodeMismatchError:
            logger.info(
                f"OTP {otp.pk} consumed concurrently for user {user.pk}",
                extra=log_extra,
            )
            raise
        except DatabaseError as exc:
            logger.error(
                f"Failed to consume OTP {otp.pk} for user {user.pk}: {exc}",
                extra=log_extra,
            )
            raise PersistenceError(details={"operation": operation}) from exc

        logger.info(
            f"Verified {operation} OTP for {mask_email(user.email)}", extra=log_extra
        )
        return VerificationResult(operation=operation, user=user, artifact=artifact)
