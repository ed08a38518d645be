"""
Serializers for authentication models.

This module provides DRF serializers for:
- User model (read operations, also dj-rest-auth USER_DETAILS_SERIALIZER)
- Registration, login, logout
- OTP-gated password change
- Token responses (schema)

Related files:
    - views.py: Views that use these serializers
    - services.py: AuthService / PasswordService
    - settings.py: REST_AUTH serializer configuration

Security:
    - Password fields are write-only
    - Passwords are checked against AUTH_PASSWORD_VALIDATORS
"""

from django.contrib.auth import password_validation
from rest_framework import serializers

from authentication.models import User


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model (read operations).

    Used by dj-rest-auth for /api/v1/auth/user/ and the social login
    response, and by the register/login responses.
    """

    full_name = serializers.SerializerMethodField()
    first_name = serializers.CharField(source="profile.first_name", read_only=True)
    last_name = serializers.CharField(source="profile.last_name", read_only=True)
    handle = serializers.CharField(source="profile.handle", read_only=True)
    address = serializers.CharField(source="profile.address", read_only=True)
    email_verified = serializers.BooleanField(source="is_email_verified", read_only=True)
    linked_providers = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "full_name",
            "first_name",
            "last_name",
            "handle",
            "address",
            "email_verified",
            "email_verified_at",
            "linked_providers",
            "date_joined",
        ]
        read_only_fields = fields

    def get_full_name(self, obj):
        return obj.get_full_name()

    def get_linked_providers(self, obj):
        return list(obj.linked_accounts.values_list("provider", flat=True))


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for email/password registration.

    Email uniqueness is enforced by AuthService (409), not here, so a
    duplicate never leaks as a field error with a different status.
    """

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="Must satisfy the configured password validators.",
    )
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    address = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default=""
    )

    def validate_email(self, value):
        return value.lower().strip()

    def validate(self, attrs):
        candidate = User(email=attrs["email"])
        password_validation.validate_password(attrs["password"], candidate)
        return attrs


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(help_text="Refresh token to invalidate.")


class PasswordChangeSerializer(serializers.Serializer):
    """
    Change a password with a code issued for operation "password".

    Password validators run in PasswordService, against the real user.
    """

    email = serializers.EmailField()
    otp = serializers.CharField(max_length=12)
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate_email(self, value):
        return value.lower().strip()


class AuthResponseSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()
    user = UserSerializer()
