"""
Tests for core.exception_handlers.api_exception_handler.

Domain errors render as {"error", "error_code"[, "details"]} with the status
each class declares; DRF's own exceptions keep DRF's rendering.
"""

import pytest
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated
from rest_framework.exceptions import ValidationError as DRFValidationError

from core.exception_handlers import api_exception_handler
from core.exceptions import (
    AuthenticationError,
    BaseApplicationError,
    ConflictError,
    GoneError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)


@pytest.fixture
def context(mocker):
    return {"view": mocker.Mock(), "request": mocker.Mock()}


class TestApplicationErrors:
    @pytest.mark.parametrize(
        "exc_class,expected_status",
        [
            (ValidationError, status.HTTP_400_BAD_REQUEST),
            (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
            (NotFoundError, status.HTTP_404_NOT_FOUND),
            (ConflictError, status.HTTP_409_CONFLICT),
            (GoneError, status.HTTP_410_GONE),
            (RateLimitError, status.HTTP_429_TOO_MANY_REQUESTS),
            (BaseApplicationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
        ],
    )
    def test_status_follows_exception_class(self, context, exc_class, expected_status):
        response = api_exception_handler(exc_class("boom"), context)

        assert response.status_code == expected_status

    def test_body_has_message_and_code(self, context):
        response = api_exception_handler(
            NotFoundError("User not found.", error_code="USER_NOT_FOUND"), context
        )

        assert response.data == {"error": "User not found.", "error_code": "USER_NOT_FOUND"}

    def test_details_included_when_present(self, context):
        exc = ValidationError(
            "OTP has expired.", error_code="OTP_EXPIRED", details={"expiry_seconds": 60}
        )

        response = api_exception_handler(exc, context)

        assert response.data["details"] == {"expiry_seconds": 60}

    def test_server_errors_are_logged_at_error_level(self, context, caplog):
        api_exception_handler(BaseApplicationError("db down"), context)

        assert any(r.levelname == "ERROR" for r in caplog.records)


class TestDRFPassthrough:
    def test_drf_validation_error_keeps_field_errors(self, context):
        response = api_exception_handler(
            DRFValidationError({"email": ["This field is required."]}), context
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {"email": ["This field is required."]}

    def test_not_authenticated_is_401(self, context):
        response = api_exception_handler(NotAuthenticated(), context)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unhandled_exception_returns_none(self, context):
        """
        Unknown exceptions are left for Django to turn into a 500.

        Why it matters: swallowing them would hide programming errors.
        """
        assert api_exception_handler(RuntimeError("bug"), context) is None
