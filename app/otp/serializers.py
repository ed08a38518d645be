"""
Serializers for the OTP endpoints.

Request:
    - OTPSendSerializer: email + operation
    - OTPVerifySerializer: email + operation + otp

Response (schema only):
    - OTPVerifyResponseSerializer
"""

from rest_framework import serializers

from otp.models import OneTimePassword


class OTPSendSerializer(serializers.Serializer):
    """Request a new code for an operation."""

    email = serializers.EmailField()
    operation = serializers.ChoiceField(
        choices=OneTimePassword.Operation.choices,
        default=OneTimePassword.Operation.EMAIL,
    )

    def validate_email(self, value):
        return value.lower().strip()


class OTPVerifySerializer(OTPSendSerializer):
    """Submit a code for verification."""

    # Compared numerically by OTPService; non-numeric input reads as a mismatch.
    otp = serializers.CharField(
        max_length=12,
        help_text="The 6-digit code from the email.",
    )


class OTPVerifyResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
    access = serializers.CharField(required=False)
    refresh = serializers.CharField(required=False)
