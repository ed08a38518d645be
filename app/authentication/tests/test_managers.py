"""
Tests for UserManager.
"""

import pytest

from authentication.models import User


@pytest.mark.django_db
class TestCreateUser:
    def test_lowercases_and_strips_email(self):
        user = User.objects.create_user(email="  Jane@Example.COM ", password="x-Passw0rd")

        assert user.email == "jane@example.com"

    def test_hashes_password(self):
        user = User.objects.create_user(email="jane@example.com", password="x-Passw0rd")

        assert user.password != "x-Passw0rd"
        assert user.check_password("x-Passw0rd")

    def test_without_password_is_unusable(self):
        user = User.objects.create_user(email="oauth@example.com")

        assert not user.has_usable_password()

    def test_new_users_are_unverified(self):
        user = User.objects.create_user(email="jane@example.com", password="x-Passw0rd")

        assert user.email_verified_at is None
        assert user.is_active
        assert not user.is_staff

    def test_ignores_profile_fields(self):
        """Names and address belong to Profile and are dropped here."""
        user = User.objects.create_user(
            email="jane@example.com", first_name="Jane", address="1 Main St"
        )

        assert user.pk is not None

    def test_requires_email(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email="", password="x-Passw0rd")


@pytest.mark.django_db
class TestCreateSuperuser:
    def test_superuser_is_staff_and_verified(self, superuser):
        assert superuser.is_staff
        assert superuser.is_superuser
        assert superuser.is_email_verified

    def test_rejects_is_staff_false(self):
        with pytest.raises(ValueError):
            User.objects.create_superuser(
                email="admin@example.com", password="x-Passw0rd", is_staff=False
            )


@pytest.mark.django_db
class TestGetByEmail:
    def test_is_case_insensitive(self, user):
        assert User.objects.get_by_email(user.email.upper()) == user

    def test_strips_whitespace(self, user):
        assert User.objects.get_by_email(f"  {user.email} ") == user

    def test_missing_raises_does_not_exist(self, db):
        with pytest.raises(User.DoesNotExist):
            User.objects.get_by_email("nobody@example.com")

    def test_natural_key_lookup_is_case_insensitive(self, user):
        """
        ModelBackend resolves logins through get_by_natural_key.

        Why it matters: "Jane@Example.com" and "jane@example.com" must log
        into the same account.
        """
        assert User.objects.get_by_natural_key(user.email.upper()) == user
