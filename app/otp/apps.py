"""
Django app configuration for otp.
"""

from django.apps import AppConfig


class OtpConfig(AppConfig):
    """Configuration for the one-time password application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "otp"
    verbose_name = "One-Time Passwords"
