"""
OTP views.

Endpoints (mounted under /api/v1/auth/otp/):
    - send/: Issue a code and email it
    - verify/: Check a code and run the operation's activation hook

Both are public: the caller proves identity with the code itself.
Errors are raised by OTPService and rendered by
core.exception_handlers.api_exception_handler:

    404 USER_NOT_FOUND         unknown email
    400 USER_ALREADY_VERIFIED  email operation on a verified account
    400 OTP_MISMATCH           no active code / wrong code
    400 OTP_EXPIRED            right code, too late
"""

from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from otp.serializers import (
    OTPSendSerializer,
    OTPVerifyResponseSerializer,
    OTPVerifySerializer,
)
from otp.services import OTPService


class OTPSendView(APIView):
    """
    API view to issue a one-time password.

    POST: Issue a code for (email, operation) and email it

    URL: /api/v1/auth/otp/send/
    """

    permission_classes = []

    @extend_schema(
        summary="Send one-time password",
        description=(
            "Issue a new 6-digit code for the given operation and email it. "
            "Any earlier code for the same operation stops working."
        ),
        tags=["Auth - OTP"],
        request=OTPSendSerializer,
        responses={
            200: OpenApiResponse(description="Code issued"),
            404: OpenApiResponse(description="User not found"),
        },
    )
    def post(self, request):
        serializer = OTPSendSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        OTPService.issue(
            email=serializer.validated_data["email"],
            operation=serializer.validated_data["operation"],
        )
        return Response({"detail": "OTP sent"})


class OTPVerifyView(APIView):
    """
    API view to verify a one-time password.

    POST: Verify a code; for "email" this marks the address verified and
    returns a JWT pair.

    URL: /api/v1/auth/otp/verify/
    """

    permission_classes = []

    @extend_schema(
        summary="Verify one-time password",
        description=(
            "Check a code issued for the given operation. Codes expire after "
            "OTP_EXPIRY_SECONDS and can be used once. Verifying an 'email' code "
            "marks the address verified and signs the user in."
        ),
        tags=["Auth - OTP"],
        request=OTPVerifySerializer,
        responses={
            200: OTPVerifyResponseSerializer,
            400: OpenApiResponse(description="Mismatch, expired, or already verified"),
            404: OpenApiResponse(description="User not found"),
        },
        examples=[
            OpenApiExample(
                "Verify email",
                value={"email": "user@example.com", "operation": "email", "otp": "482913"},
                request_only=True,
            ),
            OpenApiExample(
                "Mismatch",
                value={"error": "OTP did not match.", "error_code": "OTP_MISMATCH"},
                response_only=True,
                status_codes=["400"],
            ),
        ],
    )
    def post(self, request):
        serializer = OTPVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = OTPService.verify(
            email=serializer.validated_data["email"],
            operation=serializer.validated_data["operation"],
            code=serializer.validated_data["otp"],
        )

        data = {"detail": "OTP verified"}
        if result.artifact:
            data.update(result.artifact)
        return Response(data)
