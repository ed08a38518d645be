"""
Authentication views.

This module provides API views for:
- Email/password registration, login and logout
- OTP-gated password change
- Social authentication (Google, Apple)

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (AuthService, PasswordService)
    - urls.py: URL routing
    - adapters.py: Social auth adapters

Note:
    Two endpoints come straight from libraries and are wired in urls.py:
    - Token refresh: /api/v1/auth/token/refresh/ (SimpleJWT)
    - Current user: /api/v1/auth/user/ (dj-rest-auth)

    Verification codes live in the otp app:
    - Send: /api/v1/auth/otp/send/
    - Verify: /api/v1/auth/otp/verify/

    Service errors (core.exceptions.BaseApplicationError) are rendered by
    core.exception_handlers.api_exception_handler, so views only handle
    the happy path.
"""

from allauth.socialaccount.providers.apple.views import AppleOAuth2Adapter
from allauth.socialaccount.providers.google.views import GoogleOAuth2Adapter
from dj_rest_auth.registration.views import SocialLoginView
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import (
    AuthResponseSerializer,
    LoginSerializer,
    LogoutSerializer,
    PasswordChangeSerializer,
    RegisterSerializer,
    UserSerializer,
)
from authentication.services import AuthService, PasswordService


def _auth_response(user, tokens, request):
    return {
        "access": tokens["access"],
        "refresh": tokens["refresh"],
        "user": UserSerializer(user, context={"request": request}).data,
    }


# =============================================================================
# Email/Password Authentication Views
# =============================================================================


class RegisterView(APIView):
    """
    API view for email/password registration.

    POST: Create an account and sign the user in

    URL: /api/v1/auth/register/

    Request body:
        {
            "email": "jane@example.com",
            "password": "s3cure-Passw0rd",
            "first_name": "Jane",
            "last_name": "Doe",       // Optional
            "address": "1 Main St"    // Optional
        }

    Returns (201):
        {
            "access": "jwt_access_token",
            "refresh": "jwt_refresh_token",
            "user": { ... }
        }

    A 6-digit email verification code is sent once the account is saved.
    """

    permission_classes = []
    authentication_classes = []

    @extend_schema(
        summary="Register with email and password",
        description=(
            "Create an account, email a verification code and return a JWT pair. "
            "The account stays unverified until the code is checked at "
            "/api/v1/auth/otp/verify/."
        ),
        tags=["Auth"],
        request=RegisterSerializer,
        responses={
            201: AuthResponseSerializer,
            400: OpenApiResponse(description="Invalid input or weak password"),
            409: OpenApiResponse(description="Email already registered"),
        },
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, tokens = AuthService.register(**serializer.validated_data)

        return Response(
            _auth_response(user, tokens, request), status=status.HTTP_201_CREATED
        )


class LoginView(APIView):
    """
    API view for email/password login.

    POST: Exchange credentials for a JWT pair

    URL: /api/v1/auth/login/
    """

    permission_classes = []
    authentication_classes = []

    @extend_schema(
        summary="Log in with email and password",
        tags=["Auth"],
        request=LoginSerializer,
        responses={
            200: AuthResponseSerializer,
            401: OpenApiResponse(description="Invalid email or password"),
        },
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, tokens = AuthService.login(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
            request=request,
        )

        return Response(_auth_response(user, tokens, request))


class LogoutView(APIView):
    """
    API view for logout.

    POST: Blacklist the given refresh token

    URL: /api/v1/auth/logout/

    Request body:
        {
            "refresh": "jwt_refresh_token"
        }
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Log out",
        description="Invalidate a refresh token. The access token expires on its own.",
        tags=["Auth"],
        request=LogoutSerializer,
        responses={
            200: OpenApiResponse(description="Logged out"),
            401: OpenApiResponse(description="Token is invalid or expired"),
        },
    )
    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        AuthService.logout(serializer.validated_data["refresh"])

        return Response({"detail": "Successfully logged out."})


class PasswordChangeView(APIView):
    """
    API view for OTP-gated password change.

    POST: Set a new password using a code issued for operation "password"

    URL: /api/v1/auth/password/change/

    Request body:
        {
            "email": "jane@example.com",
            "otp": "123456",
            "password": "n3w-s3cure-Passw0rd"
        }

    Works for signed-out users too (forgotten password): the code proves
    control of the mailbox. Every refresh token of the user is revoked.
    """

    permission_classes = []
    authentication_classes = []

    @extend_schema(
        summary="Change password with a verification code",
        description=(
            "Request a code first with operation=password at "
            "/api/v1/auth/otp/send/."
        ),
        tags=["Auth"],
        request=PasswordChangeSerializer,
        responses={
            200: OpenApiResponse(description="Password changed"),
            400: OpenApiResponse(
                description="Code mismatch, expired code or weak password"
            ),
            404: OpenApiResponse(description="User not found"),
        },
    )
    def post(self, request):
        serializer = PasswordChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        PasswordService.change_password(
            email=serializer.validated_data["email"],
            code=serializer.validated_data["otp"],
            password=serializer.validated_data["password"],
        )

        return Response({"detail": "Password changed."})


# =============================================================================
# Social Authentication Views
# =============================================================================


@extend_schema(
    summary="Sign in with Google",
    description=(
        "Authenticate using a Google OAuth2 token. For mobile apps, use the id_token "
        "from Google Sign-In SDK. For web apps, use the authorization code flow."
    ),
    tags=["Auth"],
)
class GoogleLoginView(SocialLoginView):
    """
    API view for Google OAuth2 authentication.

    URL: /api/v1/auth/google/

    Request body:
        {"access_token": "..."} OR {"id_token": "..."} OR {"code": "..."}

    Returns:
        {
            "access": "jwt_access_token",
            "refresh": "jwt_refresh_token",
            "user": { ... }
        }

    Deleted accounts get 410 (see CustomSocialAccountAdapter).
    """

    adapter_class = GoogleOAuth2Adapter


@extend_schema(
    summary="Sign in with Apple",
    description=(
        "Authenticate using Apple Sign-In. Apple only sends the user's name on the "
        "first authentication, so it's captured and stored at that time."
    ),
    tags=["Auth"],
)
class AppleLoginView(SocialLoginView):
    """
    API view for Apple Sign-In authentication.

    URL: /api/v1/auth/apple/

    Request body:
        {
            "id_token": "apple_identity_token",
            "access_token": "apple_authorization_code",
            "user": {"name": {"firstName": "Jane", "lastName": "Doe"}}  // first login only
        }
    """

    adapter_class = AppleOAuth2Adapter
