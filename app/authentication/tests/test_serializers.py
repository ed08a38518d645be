"""
Tests for authentication serializers.
"""

import pytest

from authentication.models import LinkedAccount
from authentication.serializers import RegisterSerializer, UserSerializer
from authentication.tests.factories import LinkedAccountFactory


@pytest.mark.django_db
class TestUserSerializer:
    def test_linked_providers_lists_each_sign_in_method(self, user):
        LinkedAccountFactory(user=user)
        LinkedAccountFactory(
            user=user,
            provider=LinkedAccount.Provider.GOOGLE,
            provider_user_id="google-uid-1",
        )

        data = UserSerializer(user).data

        assert sorted(data["linked_providers"]) == ["email", "google"]

    def test_profile_fields_are_flattened(self, user):
        data = UserSerializer(user).data

        assert data["handle"] == user.profile.handle
        assert data["first_name"] == user.profile.first_name
        assert data["email_verified"] is True


class TestRegisterSerializer:
    payload = {"email": "  Jane@Example.COM ", "password": "s3cure-Passw0rd", "first_name": "Jane"}

    def test_email_is_lowercased(self):
        serializer = RegisterSerializer(data=self.payload)

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["email"] == "jane@example.com"

    def test_weak_password_is_rejected(self):
        serializer = RegisterSerializer(data={**self.payload, "password": "123"})

        assert not serializer.is_valid()
        assert "password" in serializer.errors
