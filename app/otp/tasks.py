"""
Celery tasks for one-time passwords.

This module defines async tasks for:
- Emailing an issued code (queued by CeleryEmailDispatcher)
- Purging consumed and old codes (scheduled by celery-beat)

Related files:
    - dispatchers.py: Queues send_otp_email after commit
    - migrations/0002_add_celery_beat_schedules.py: Purge schedule

Usage:
    from otp.tasks import send_otp_email
    send_otp_email.delay(user_id=123, code=482913, operation="email")
"""

import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.contrib.auth import get_user_model
from django.utils import timezone

from toolkit.helpers import mask_email
from toolkit.services.email import EmailService

logger = logging.getLogger(__name__)


def send_code_email(user, code, operation) -> bool:
    """
    Render and send the code email for `operation`.

    Templates: otp/code_email.txt and otp/code_email.html.

    Raises:
        smtplib.SMTPException / OSError: Transport failures
    """
    subject = settings.OTP_EMAIL_SUBJECTS.get(operation, settings.OTP_EMAIL_SUBJECT)
    return EmailService.send(
        to=user.email,
        subject=subject,
        template_name="otp/code_email",
        context={
            "user": user,
            "code": f"{code:06d}",
            "operation": operation,
            "expiry_minutes": max(1, settings.OTP_EXPIRY_SECONDS // 60),
        },
    )


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def send_otp_email(self, user_id: int, code: int, operation: str) -> bool:
    """
    Email an issued code to its user.

    Args:
        user_id: ID of the recipient
        code: The plaintext code
        operation: Operation tag the code authorizes

    Returns:
        True if the email was sent, False if the user no longer exists
    """
    User = get_user_model()

    try:
        user = User.objects.get(pk=user_id)
    except User.DoesNotExist:
        logger.error(f"User {user_id} not found for {operation} OTP email")
        return False

    send_code_email(user, code, operation)
    logger.info(
        f"{operation} OTP email sent to {mask_email(user.email)}",
        extra={"user_id": user_id, "operation": operation},
    )
    return True


@shared_task
def purge_stale_otps() -> int:
    """
    Delete consumed codes and codes older than OTP_RETENTION_HOURS.

    Active codes inside the retention window are kept even if expired,
    so a user can still be told "expired" rather than "did not match".

    Returns:
        Number of rows deleted
    """
    from otp.models import OneTimePassword

    cutoff = timezone.now() - timedelta(hours=settings.OTP_RETENTION_HOURS)
    deleted, _ = OneTimePassword.objects.stale(cutoff).delete()

    logger.info(f"Purged {deleted} stale one-time passwords", extra={"cutoff": cutoff})
    return deleted
