"""
Custom adapters for django-allauth.

This module provides custom adapters that handle special logic for
email/password accounts and social authentication (Google, Apple).

Related files:
    - models.py: User, Profile and LinkedAccount models
    - services.py: AuthService.ensure_profile / create_linked_account
    - settings.py: ACCOUNT_ADAPTER and SOCIALACCOUNT_ADAPTER settings

Security:
    - OAuth users get email_verified_at set (the provider verified it)
    - Deleted (inactive) accounts cannot come back through social sign-in
    - Apple Sign-In quirk handled (name only sent on first login)
"""

import logging

from allauth.account.adapter import DefaultAccountAdapter
from allauth.account.utils import user_email
from allauth.socialaccount.adapter import DefaultSocialAccountAdapter
from django.utils import timezone

from authentication.exceptions import AccountDeletedError
from toolkit.helpers import mask_email

logger = logging.getLogger(__name__)


class CustomAccountAdapter(DefaultAccountAdapter):
    """
    Adapter for allauth account flows (admin/allauth signup forms).

    Records an email LinkedAccount and a profile for users created through
    allauth's own signup, matching what AuthService.create_user does.

    Usage:
        ACCOUNT_ADAPTER = 'authentication.adapters.CustomAccountAdapter'
    """

    def save_user(self, request, user, form, commit=True):
        user = super().save_user(request, user, form, commit=commit)

        if commit:
            from authentication.models import LinkedAccount
            from authentication.services import AuthService

            AuthService.ensure_profile(user)
            AuthService.create_linked_account(
                user, LinkedAccount.Provider.EMAIL, user.email
            )
            logger.info("Email user registered", extra={"user_id": user.pk})

        return user


class CustomSocialAccountAdapter(DefaultSocialAccountAdapter):
    """
    Adapter for social authentication (Google, Apple).

    This adapter handles:
    - Refusing sign-in to deleted accounts (410)
    - Creating LinkedAccount and Profile for the social user
    - Marking the email verified
    - Handling Apple Sign-In quirk (name only sent on first login)

    Usage:
        SOCIALACCOUNT_ADAPTER = 'authentication.adapters.CustomSocialAccountAdapter'
    """

    def pre_social_login(self, request, sociallogin):
        """
        Refuse sign-in when the matching local account was deleted.

        Raises:
            AccountDeletedError: The linked user, or the user owning the
                provider's email address, is inactive
        """
        from authentication.models import User

        user = sociallogin.user if sociallogin.is_existing else None
        if user is None:
            email = user_email(sociallogin.user)
            if email:
                user = User.objects.filter(email__iexact=email).first()

        if user is not None and not user.is_active:
            logger.warning(
                f"Social sign-in refused for deleted account {mask_email(user.email)}",
                extra={"user_id": user.pk, "provider": sociallogin.account.provider},
            )
            raise AccountDeletedError()

        super().pre_social_login(request, sociallogin)

    def save_user(self, request, sociallogin, form=None):
        """
        Save the user from social login with profile and LinkedAccount.
        """
        from authentication.services import AuthService

        user = super().save_user(request, sociallogin, form)

        provider = sociallogin.account.provider
        extra = sociallogin.account.extra_data

        if user.email_verified_at is None:
            user.email_verified_at = timezone.now()
            user.save(update_fields=["email_verified_at", "updated_at"])

        AuthService.ensure_profile(
            user,
            first_name=extra.get("first_name", ""),
            last_name=extra.get("last_name", ""),
        )
        AuthService.create_linked_account(user, provider, sociallogin.account.uid)

        logger.info(
            "Social user created",
            extra={"user_id": user.pk, "provider": provider},
        )
        return user

    def populate_user(self, request, sociallogin, data):
        """
        Populate user data from social provider response.

        Names belong to Profile, so they are stashed in extra_data for
        save_user to pick up.
        """
        user = super().populate_user(request, sociallogin, data)
        provider = sociallogin.account.provider

        first_name = ""
        last_name = ""

        if provider == "apple":
            first_name, last_name = self._extract_apple_name(request, data)
        elif provider == "google":
            first_name, last_name = self._extract_google_name(data)

        # Fall back to a split full name ("Jane Q Doe" -> "Jane", "Q Doe")
        if not first_name and data.get("name"):
            first_name, _, last_name = data["name"].strip().partition(" ")

        sociallogin.account.extra_data["first_name"] = first_name
        sociallogin.account.extra_data["last_name"] = last_name

        return user

    def _extract_apple_name(self, request, data):
        """
        Apple only sends the user's name on the first authentication,
        in the request body rather than the token.
        """
        first_name = data.get("first_name", "")
        last_name = data.get("last_name", "")

        apple_user = getattr(request, "data", {}).get("user", {})
        if isinstance(apple_user, dict):
            name = apple_user.get("name", {})
            if isinstance(name, dict):
                first_name = name.get("firstName", first_name)
                last_name = name.get("lastName", last_name)

        return first_name, last_name

    def _extract_google_name(self, data):
        first_name = data.get("first_name") or data.get("given_name", "")
        last_name = data.get("last_name") or data.get("family_name", "")
        return first_name, last_name

