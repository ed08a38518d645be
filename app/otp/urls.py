"""
URL configuration for the otp app.

Included from authentication.urls under /api/v1/auth/otp/:
    send/    - Issue a code
    verify/  - Verify a code
"""

from django.urls import path

from otp.views import OTPSendView, OTPVerifyView

app_name = "otp"

urlpatterns = [
    path("send/", OTPSendView.as_view(), name="send"),
    path("verify/", OTPVerifyView.as_view(), name="verify"),
]
