"""
Tests for the OTP endpoints.

Endpoints:
    POST /api/v1/auth/otp/send/
    POST /api/v1/auth/otp/verify/

Error responses are produced by core.exception_handlers and carry
{"error", "error_code"} with the status each exception declares.
"""

from datetime import timedelta

import pytest
from django.core import mail
from django.urls import reverse
from freezegun import freeze_time
from rest_framework import status

from otp.models import OneTimePassword
from otp.services import OTPService

SEND_URL = "/api/v1/auth/otp/send/"
VERIFY_URL = "/api/v1/auth/otp/verify/"


@pytest.fixture(autouse=True)
def record_deliveries(settings):
    """Send codes inline so no on-commit callback has to run."""
    settings.OTP_DELIVERY_DISPATCHER = "otp.dispatchers.EmailDispatcher"


def sent_code():
    """Last code emailed through EmailDispatcher."""
    return OneTimePassword.objects.order_by("-created_at", "-pk").first().code


# =============================================================================
# TestOTPSendView
# =============================================================================


@pytest.mark.django_db
class TestOTPSendView:
    """Tests for POST /api/v1/auth/otp/send/."""

    def test_url_name_resolves(self):
        assert reverse("authentication:otp:send") == SEND_URL

    def test_send_issues_code_and_emails_it(self, api_client, unverified_user):
        response = api_client.post(SEND_URL, {"email": unverified_user.email})

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"detail": "OTP sent"}
        otp = OneTimePassword.objects.active_for(unverified_user, "email")
        assert otp is not None
        assert len(mail.outbox) == 1
        assert f"{otp.code:06d}" in mail.outbox[0].body

    def test_operation_defaults_to_email(self, api_client, unverified_user):
        api_client.post(SEND_URL, {"email": unverified_user.email})

        assert OneTimePassword.objects.filter(
            user=unverified_user, operation="email"
        ).exists()

    def test_send_password_code(self, api_client, verified_user):
        response = api_client.post(
            SEND_URL, {"email": verified_user.email, "operation": "password"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert OneTimePassword.objects.active_for(verified_user, "password")

    def test_email_is_normalized(self, api_client, unverified_user):
        response = api_client.post(
            SEND_URL, {"email": f"  {unverified_user.email.upper()}  "}
        )

        assert response.status_code == status.HTTP_200_OK

    def test_unknown_email_returns_404(self, api_client, db):
        response = api_client.post(SEND_URL, {"email": "nobody@example.com"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "USER_NOT_FOUND"

    def test_unknown_operation_returns_400(self, api_client, unverified_user):
        response = api_client.post(
            SEND_URL, {"email": unverified_user.email, "operation": "unlock"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "operation" in response.data

    def test_invalid_email_returns_400(self, api_client, db):
        response = api_client.post(SEND_URL, {"email": "not-an-email"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# TestOTPVerifyView
# =============================================================================


@pytest.mark.django_db
class TestOTPVerifyView:
    """Tests for POST /api/v1/auth/otp/verify/."""

    def test_email_verification_returns_tokens(self, api_client, unverified_user):
        """
        Verifying an email code marks the user verified and signs them in.

        Why it matters: this is the registration completion step clients
        depend on.
        """
        OTPService.issue(unverified_user.email, "email")

        response = api_client.post(
            VERIFY_URL,
            {"email": unverified_user.email, "operation": "email", "otp": str(sent_code())},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["detail"] == "OTP verified"
        assert response.data["access"]
        assert response.data["refresh"]
        unverified_user.refresh_from_db()
        assert unverified_user.is_email_verified

    def test_password_verification_returns_detail_only(self, api_client, verified_user):
        OTPService.issue(verified_user.email, "password")

        response = api_client.post(
            VERIFY_URL,
            {"email": verified_user.email, "operation": "password", "otp": sent_code()},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"detail": "OTP verified"}

    def test_wrong_code_returns_400_mismatch(self, api_client, unverified_user):
        OTPService.issue(unverified_user.email, "email")
        wrong = 111111 if sent_code() != 111111 else 111112

        response = api_client.post(
            VERIFY_URL, {"email": unverified_user.email, "otp": wrong}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {
            "error": "OTP did not match.",
            "error_code": "OTP_MISMATCH",
        }

    def test_non_numeric_code_returns_400_mismatch(self, api_client, unverified_user):
        OTPService.issue(unverified_user.email, "email")

        response = api_client.post(
            VERIFY_URL, {"email": unverified_user.email, "otp": "12ab56"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "OTP_MISMATCH"

    def test_expired_code_returns_400_expired(self, api_client, unverified_user):
        with freeze_time("2026-01-01 12:00:00") as frozen:
            OTPService.issue(unverified_user.email, "email")
            frozen.tick(timedelta(minutes=2))

            response = api_client.post(
                VERIFY_URL, {"email": unverified_user.email, "otp": sent_code()}
            )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "OTP_EXPIRED"
        assert response.data["details"] == {"expiry_seconds": 60}

    def test_already_verified_returns_400(self, api_client, verified_user):
        response = api_client.post(
            VERIFY_URL, {"email": verified_user.email, "otp": "123456"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "USER_ALREADY_VERIFIED"

    def test_unknown_email_returns_404(self, api_client, db):
        response = api_client.post(
            VERIFY_URL, {"email": "nobody@example.com", "otp": "123456"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_reused_code_returns_400(self, api_client, verified_user):
        OTPService.issue(verified_user.email, "password")
        payload = {"email": verified_user.email, "operation": "password", "otp": sent_code()}

        first = api_client.post(VERIFY_URL, payload)
        second = api_client.post(VERIFY_URL, payload)

        assert first.status_code == status.HTTP_200_OK
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert second.data["error_code"] == "OTP_MISMATCH"

    def test_missing_otp_field_returns_400(self, api_client, unverified_user):
        response = api_client.post(VERIFY_URL, {"email": unverified_user.email})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "otp" in response.data
