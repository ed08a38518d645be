"""
Authentication services.

This module provides:
- AuthService: account creation, registration, login, logout
- PasswordService: OTP-gated password change

Related files:
    - models.py: User, Profile, LinkedAccount
    - tokens.py: JWT pair issuance
    - hooks.py: "email" activation hook (marks the address verified)
    - otp/services.py: OTPService used for verification codes

Security:
    - Passwords hashed with Django's hashers and checked against
      AUTH_PASSWORD_VALIDATORS
    - Logout and password change blacklist refresh tokens (SimpleJWT)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import authenticate, password_validation, user_logged_in
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.token_blacklist.models import (
    BlacklistedToken,
    OutstandingToken,
)
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from authentication.tokens import TokenPair, issue_tokens
from core.exceptions import ValidationError
from core.services import BaseService
from otp.models import OneTimePassword
from otp.services import OTPService
from toolkit.helpers import mask_email, slugify_unique

if TYPE_CHECKING:
    from authentication.models import LinkedAccount, Profile, User


class AuthService(BaseService):
    """
    Centralized authentication business logic.

    Usage:
        from authentication.services import AuthService

        user, tokens = AuthService.register(
            email="jane@example.com",
            password="s3cure-Passw0rd",
            first_name="Jane",
            last_name="Doe",
        )
        user, tokens = AuthService.login("jane@example.com", "s3cure-Passw0rd")
        AuthService.logout(tokens["refresh"])
    """

    @classmethod
    def create_user(
        cls,
        email: str,
        password: str | None = None,
        first_name: str = "",
        last_name: str = "",
        address: str = "",
        **kwargs,
    ) -> User:
        """
        Create a user with profile and email LinkedAccount.

        Args:
            email: User's email address
            password: Password (None for OAuth users)
            first_name, last_name, address: Profile data
            **kwargs: Additional user fields

        Returns:
            Created User instance

        Raises:
            EmailAlreadyRegisteredError: Email is taken (case-insensitive)
        """
        from authentication.models import LinkedAccount, User

        email = email.lower().strip()

        if User.objects.filter(email__iexact=email).exists():
            raise EmailAlreadyRegisteredError(details={"email": mask_email(email)})

        try:
            with cls.atomic():
                user = User.objects.create_user(email=email, password=password, **kwargs)
                cls.ensure_profile(user, first_name, last_name, address)
                if password:
                    cls.create_linked_account(
                        user, LinkedAccount.Provider.EMAIL, email
                    )
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same email
            raise EmailAlreadyRegisteredError(
                details={"email": mask_email(email)}
            ) from exc

        cls.get_logger().info(
            f"User created: {mask_email(user.email)}", extra={"user_id": user.pk}
        )
        return user

    @classmethod
    def ensure_profile(
        cls,
        user: User,
        first_name: str = "",
        last_name: str = "",
        address: str = "",
    ) -> Profile:
        """
        Get or create the user's profile, filling blank fields.

        The handle is generated once, from the first name (or the email local
        part when no name is known), and never changes afterwards.
        """
        from authentication.models import Profile

        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        address = (address or "").strip()

        try:
            profile = user.profile
        except Profile.DoesNotExist:
            handle = slugify_unique(
                first_name or user.email.split("@")[0],
                Profile,
                field_name="handle",
                fallback="user",
                max_length=Profile._meta.get_field("handle").max_length,
            )
            profile = Profile.objects.create(
                user=user,
                first_name=first_name,
                last_name=last_name,
                address=address,
                handle=handle,
            )
            cls.get_logger().debug(f"Profile {handle} created for user {user.pk}")
            return profile

        changed = []
        for field, value in (
            ("first_name", first_name),
            ("last_name", last_name),
            ("address", address),
        ):
            if value and not getattr(profile, field):
                setattr(profile, field, value)
                changed.append(field)
        if changed:
            profile.save(update_fields=[*changed, "updated_at"])
        return profile

    @classmethod
    def create_linked_account(
        cls,
        user: User,
        provider: str,
        provider_user_id: str,
    ) -> LinkedAccount:
        """Create or get a linked account for a user."""
        from authentication.models import LinkedAccount

        linked_account, created = LinkedAccount.objects.get_or_create(
            provider=provider,
            provider_user_id=provider_user_id,
            defaults={"user": user},
        )

        if created:
            cls.get_logger().info(
                f"Linked {provider} account for user {user.pk}",
                extra={"user_id": user.pk, "provider": provider},
            )

        return linked_account

    @classmethod
    def register(
        cls,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
        address: str = "",
    ) -> tuple[User, TokenPair]:
        """
        Create an account, issue an email verification code, sign the user in.

        All of it happens in one transaction: if the code cannot be stored,
        the user is not created and no email is sent.

        Returns:
            (user, tokens)

        Raises:
            EmailAlreadyRegisteredError: Email is taken
            otp.exceptions.PersistenceError: Code could not be stored
        """
        with cls.atomic():
            user = cls.create_user(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                address=address,
            )
            OTPService.issue(user.email, OneTimePassword.Operation.EMAIL)
            tokens = issue_tokens(user)

        cls.get_logger().info(
            f"User registered: {mask_email(user.email)}", extra={"user_id": user.pk}
        )
        return user, tokens

    @classmethod
    def login(cls, email: str, password: str, request=None) -> tuple[User, TokenPair]:
        """
        Check credentials and issue a JWT pair.

        Raises:
            InvalidCredentialsError: Unknown email, wrong password, or
                deactivated account (indistinguishable on purpose)
        """
        user = authenticate(request, email=email.lower().strip(), password=password)
        if user is None:
            cls.get_logger().info(f"Failed login for {mask_email(email)}")
            raise InvalidCredentialsError()

        user_logged_in.send(sender=user.__class__, request=request, user=user)
        cls.get_logger().info(f"User logged in: {user.pk}", extra={"user_id": user.pk})
        return user, issue_tokens(user)

    @classmethod
    def logout(cls, refresh_token: str) -> None:
        """
        Blacklist a refresh token so it can no longer be rotated.

        Raises:
            InvalidTokenError: Token malformed, expired, or already blacklisted
        """
        try:
            token = RefreshToken(refresh_token)
            token.blacklist()
        except TokenError as exc:
            raise InvalidTokenError() from exc

        cls.get_logger().info(
            f"User logged out: {token.payload.get('user_id')}",
        )

    @classmethod
    def revoke_all_tokens(cls, user: User) -> int:
        """
        Blacklist every outstanding refresh token of `user`.

        Returns:
            Number of tokens newly blacklisted
        """
        revoked = 0
        for outstanding in OutstandingToken.objects.filter(user=user):
            _, created = BlacklistedToken.objects.get_or_create(token=outstanding)
            revoked += int(created)
        return revoked

    @classmethod
    def deactivate_user(cls, user: User, reason: str = "") -> None:
        """
        Soft-delete user account.

        Social sign-in to a deactivated account is refused with
        AccountDeletedError (see adapters.py).
        """
        user.is_active = False
        user.save(update_fields=["is_active", "updated_at"])
        cls.revoke_all_tokens(user)

        cls.get_logger().warning(
            f"User deactivated: {user.pk}",
            extra={"user_id": user.pk, "reason": reason},
        )


class PasswordService(BaseService):
    """
    OTP-gated password change.

    Flow:
        1. POST /api/v1/auth/otp/send/ {"email": ..., "operation": "password"}
        2. POST /api/v1/auth/password/change/ {"email", "otp", "password"}
    """

    @classmethod
    def change_password(cls, email: str, code, password: str) -> User:
        """
        Verify a "password" code and set the new password.

        Code consumption and the password update share one transaction:
        a password rejected by the validators leaves the code usable.

        Raises:
            otp.exceptions.UserNotFoundError / CodeMismatchError /
                CodeExpiredError: From OTPService.verify
            core.exceptions.ValidationError: Password fails
                AUTH_PASSWORD_VALIDATORS
        """
        with cls.atomic():
            result = OTPService.verify(email, OneTimePassword.Operation.PASSWORD, code)
            user = result.user

            try:
                password_validation.validate_password(password, user)
            except DjangoValidationError as exc:
                raise ValidationError(
                    "Password does not meet requirements.",
                    error_code="INVALID_PASSWORD",
                    details={"password": list(exc.messages)},
                ) from exc

            user.set_password(password)
            user.save(update_fields=["password", "updated_at"])
            revoked = AuthService.revoke_all_tokens(user)

        cls.get_logger().info(
            f"Password changed for user {user.pk}",
            extra={"user_id": user.pk, "revoked_tokens": revoked},
        )
        return user
