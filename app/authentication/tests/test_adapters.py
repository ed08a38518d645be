"""
Tests for the allauth adapters.

This module tests:
- CustomAccountAdapter: profile and email LinkedAccount for allauth signups
- CustomSocialAccountAdapter: deleted-account refusal, social user setup,
  provider-specific name extraction

Testing Philosophy:
    The allauth infrastructure (request, sociallogin) is mocked; our models
    are real, so the ORM operates naturally.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from authentication.adapters import CustomAccountAdapter, CustomSocialAccountAdapter
from authentication.exceptions import AccountDeletedError
from authentication.models import LinkedAccount, Profile
from authentication.tests.factories import UserFactory


# =============================================================================
# CustomAccountAdapter Tests
# =============================================================================


@pytest.mark.django_db
class TestCustomAccountAdapter:
    """Tests for CustomAccountAdapter.save_user()."""

    @pytest.fixture
    def adapter(self):
        return CustomAccountAdapter()

    def test_save_user_creates_profile_and_email_linked_account(self, adapter):
        user = UserFactory(email="newuser@example.com", profile=None)

        with patch.object(
            CustomAccountAdapter.__bases__[0], "save_user", return_value=user
        ):
            result = adapter.save_user(MagicMock(), user, MagicMock(), commit=True)

        assert result == user
        assert Profile.objects.get(user=user).handle == "newuser"
        linked = LinkedAccount.objects.get(user=user)
        assert linked.provider == LinkedAccount.Provider.EMAIL
        assert linked.provider_user_id == "newuser@example.com"

    def test_commit_false_creates_nothing(self, adapter):
        """
        With commit=False the user is not saved yet, so no related rows
        are written.

        Why it matters: writing a LinkedAccount for an unsaved user raises
        an integrity error.
        """
        user = UserFactory.build(email="uncommitted@example.com", profile=None)

        with patch.object(
            CustomAccountAdapter.__bases__[0], "save_user", return_value=user
        ):
            adapter.save_user(MagicMock(), user, MagicMock(), commit=False)

        assert LinkedAccount.objects.count() == 0
        assert Profile.objects.count() == 0

    def test_save_user_logs_registration(self, adapter, caplog):
        user = UserFactory(profile=None)

        with patch.object(
            CustomAccountAdapter.__bases__[0], "save_user", return_value=user
        ):
            with caplog.at_level(logging.INFO, logger="authentication.adapters"):
                adapter.save_user(MagicMock(), user, MagicMock(), commit=True)

        assert "Email user registered" in caplog.text


# =============================================================================
# CustomSocialAccountAdapter Tests
# =============================================================================


@pytest.mark.django_db
class TestCustomSocialAccountAdapter:
    """Tests for CustomSocialAccountAdapter."""

    # -------------------------------------------------------------------------
    # Setup Fixtures
    # -------------------------------------------------------------------------

    @pytest.fixture
    def adapter(self):
        return CustomSocialAccountAdapter()

    @pytest.fixture
    def mock_request(self):
        """
        Mock HTTP request.

        For Apple Sign-In, the first-login name arrives in request.data.
        """
        request = MagicMock()
        request.data = {}
        return request

    def make_sociallogin(self, user, provider="google", uid="google-uid-123456", **extra):
        sociallogin = MagicMock()
        sociallogin.account.provider = provider
        sociallogin.account.uid = uid
        sociallogin.account.extra_data = {"sub": uid, "email": user.email, **extra}
        sociallogin.user = user
        sociallogin.is_existing = False
        return sociallogin

    # -------------------------------------------------------------------------
    # pre_social_login Tests
    # -------------------------------------------------------------------------

    def test_pre_social_login_refuses_deleted_account_by_email(
        self, adapter, mock_request, deactivated_user
    ):
        """
        A provider email matching a deactivated account is refused with 410.

        Why it matters: deletion must not be undone by signing in with
        Google or Apple.
        """
        incoming = UserFactory.build(email=deactivated_user.email.upper(), profile=None)
        sociallogin = self.make_sociallogin(incoming)

        with pytest.raises(AccountDeletedError) as exc_info:
            adapter.pre_social_login(mock_request, sociallogin)

        assert exc_info.value.status_code == 410

    def test_pre_social_login_refuses_deleted_linked_user(
        self, adapter, mock_request, deactivated_user
    ):
        sociallogin = self.make_sociallogin(deactivated_user)
        sociallogin.is_existing = True

        with pytest.raises(AccountDeletedError):
            adapter.pre_social_login(mock_request, sociallogin)

    def test_pre_social_login_allows_active_user(self, adapter, mock_request, user):
        sociallogin = self.make_sociallogin(user)

        adapter.pre_social_login(mock_request, sociallogin)

    def test_pre_social_login_allows_new_email(self, adapter, mock_request):
        incoming = UserFactory.build(email="brand-new@gmail.com", profile=None)

        adapter.pre_social_login(mock_request, self.make_sociallogin(incoming))

    # -------------------------------------------------------------------------
    # save_user Tests
    # -------------------------------------------------------------------------

    def test_save_user_marks_email_verified(self, adapter, mock_request):
        """
        OAuth users are verified on creation.

        Why it matters: the provider already verified the address, so no
        email OTP is required.
        """
        user = UserFactory(email="googleuser@gmail.com", profile=None)
        sociallogin = self.make_sociallogin(user, first_name="Google", last_name="User")

        with patch.object(
            CustomSocialAccountAdapter.__bases__[0], "save_user", return_value=user
        ):
            result = adapter.save_user(mock_request, sociallogin)

        result.refresh_from_db()
        assert result.is_email_verified

    def test_save_user_creates_profile_from_names(self, adapter, mock_request):
        user = UserFactory(email="googleuser@gmail.com", profile=None)
        sociallogin = self.make_sociallogin(user, first_name="Google", last_name="User")

        with patch.object(
            CustomSocialAccountAdapter.__bases__[0], "save_user", return_value=user
        ):
            adapter.save_user(mock_request, sociallogin)

        profile = Profile.objects.get(user=user)
        assert profile.first_name == "Google"
        assert profile.last_name == "User"
        assert profile.handle == "google"

    @pytest.mark.parametrize(
        "provider,uid",
        [("google", "google-uid-123456"), ("apple", "apple-uid-789012")],
    )
    def test_save_user_creates_linked_account(self, adapter, mock_request, provider, uid):
        user = UserFactory(profile=None)
        sociallogin = self.make_sociallogin(user, provider=provider, uid=uid)

        with patch.object(
            CustomSocialAccountAdapter.__bases__[0], "save_user", return_value=user
        ):
            adapter.save_user(mock_request, sociallogin)

        linked = LinkedAccount.objects.get(user=user)
        assert linked.provider == provider
        assert linked.provider_user_id == uid

    # -------------------------------------------------------------------------
    # populate_user Tests
    # -------------------------------------------------------------------------

    def test_populate_user_google_names(self, adapter, mock_request):
        user = UserFactory.build(profile=None)
        sociallogin = self.make_sociallogin(user)
        data = {"given_name": "Jane", "family_name": "Doe", "email": user.email}

        with patch.object(
            CustomSocialAccountAdapter.__bases__[0], "populate_user", return_value=user
        ):
            adapter.populate_user(mock_request, sociallogin, data)

        assert sociallogin.account.extra_data["first_name"] == "Jane"
        assert sociallogin.account.extra_data["last_name"] == "Doe"

    def test_populate_user_apple_name_from_request_body(self, adapter, mock_request):
        """
        Apple sends the name only on the first sign-in, in the request body.

        Why it matters: missing it leaves the profile nameless for good.
        """
        user = UserFactory.build(profile=None)
        sociallogin = self.make_sociallogin(user, provider="apple", uid="apple-uid-1")
        mock_request.data = {
            "user": {"name": {"firstName": "Ada", "lastName": "Lovelace"}}
        }

        with patch.object(
            CustomSocialAccountAdapter.__bases__[0], "populate_user", return_value=user
        ):
            adapter.populate_user(mock_request, sociallogin, {"email": user.email})

        assert sociallogin.account.extra_data["first_name"] == "Ada"
        assert sociallogin.account.extra_data["last_name"] == "Lovelace"

    def test_populate_user_splits_full_name(self, adapter, mock_request):
        user = UserFactory.build(profile=None)
        sociallogin = self.make_sociallogin(user, provider="apple", uid="apple-uid-2")

        with patch.object(
            CustomSocialAccountAdapter.__bases__[0], "populate_user", return_value=user
        ):
            adapter.populate_user(mock_request, sociallogin, {"name": "Jane Q Doe"})

        assert sociallogin.account.extra_data["first_name"] == "Jane"
        assert sociallogin.account.extra_data["last_name"] == "Q Doe"
