"""
URL configuration for authentication app.

URL structure (mounted at /api/v1/auth/ in config/urls.py):
    register/         - Email/password registration
    login/            - Email/password login
    logout/           - Refresh token blacklisting
    token/refresh/    - Refresh token rotation (SimpleJWT)
    user/             - Current user (dj-rest-auth)
    password/change/  - OTP-gated password change
    otp/send/         - Issue a verification code (otp app)
    otp/verify/       - Check a verification code (otp app)
    google/           - Google OAuth2 login
    apple/            - Apple Sign-In login
"""

from dj_rest_auth.views import UserDetailsView
from django.urls import include, path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.views import (
    AppleLoginView,
    GoogleLoginView,
    LoginView,
    LogoutView,
    PasswordChangeView,
    RegisterView,
)

app_name = "authentication"

urlpatterns = [
    # Email/password
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("user/", UserDetailsView.as_view(), name="user"),
    path("password/change/", PasswordChangeView.as_view(), name="password-change"),
    # Verification codes
    path("otp/", include("otp.urls")),
    # Social authentication
    path("google/", GoogleLoginView.as_view(), name="google-login"),
    path("apple/", AppleLoginView.as_view(), name="apple-login"),
]
