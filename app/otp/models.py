"""
One-time password model.

Related files:
    - managers.py: OneTimePasswordManager (the code store)
    - services.py: OTPService issue/verify logic

Lifecycle:
    - Created active by OTPService.issue (prior codes for the pair are deleted)
    - Flipped inactive exactly once by OTPService.verify
    - Deleted on the next issue for the same pair, or by purge_stale_otps
"""

from django.conf import settings
from django.db import models

from core.models import BaseModel
from otp.managers import OneTimePasswordManager


class OneTimePassword(BaseModel):
    """
    A numeric code proving control of the user's email for a short window.

    Fields:
        user: Owner of the code
        operation: Purpose tag the code authorizes ("email", "password", ...)
        code: 6-digit integer in [111111, 999999]
        is_active: True until the code is consumed
        created_at: Start of the expiry window (from BaseModel)
    """

    class Operation(models.TextChoices):
        """Operations that currently issue codes over the API."""

        EMAIL = "email", "Email verification"
        PASSWORD = "password", "Password change"

    CODE_MIN = 111111
    CODE_MAX = 999999

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="otps",
        help_text="User this code was issued to",
    )
    operation = models.CharField(
        max_length=32,
        choices=Operation.choices,
        help_text="What this code authorizes",
    )
    code = models.PositiveIntegerField(
        help_text="6-digit numeric code",
    )
    is_active = models.BooleanField(
        default=True,
        help_text="False once the code has been used",
    )

    objects = OneTimePasswordManager()

    class Meta:
        db_table = "otp_one_time_password"
        verbose_name = "one-time password"
        verbose_name_plural = "one-time passwords"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["user", "operation", "is_active"],
                name="otp_user_operation_active_idx",
            ),
        ]

    def __str__(self):
        state = "active" if self.is_active else "used"
        return f"{self.operation} code for {self.user} ({state})"
