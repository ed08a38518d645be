"""
Django signals for authentication.

This module defines:
- email_verified: Sent when a user proves control of their email address
- Handler that queues the welcome email once that transaction commits

Related files:
    - hooks.py: Sends email_verified from the "email" OTP activation hook
    - tasks.py: send_welcome_email
    - apps.py: Signal import in ready()
"""

import logging
from functools import partial

from django.db import transaction
from django.dispatch import Signal, receiver
from kombu.exceptions import OperationalError

logger = logging.getLogger(__name__)

# Sent with kwargs: user
email_verified = Signal()


def _enqueue_welcome_email(user_id):
    from authentication.tasks import send_welcome_email

    try:
        send_welcome_email.delay(user_id=user_id)
    except OperationalError as exc:
        logger.error(
            f"Could not enqueue welcome email for user {user_id}: {exc}",
            extra={"user_id": user_id},
        )
    except Exception:
        # Eager Celery runs the task inline; the verification has already committed
        logger.exception(
            f"Welcome email failed for user {user_id}", extra={"user_id": user_id}
        )


@receiver(email_verified)
def send_welcome_on_verification(sender, user, **kwargs):
    """
    Queue the welcome email after the verification commits.

    Nothing is queued if the verification transaction rolls back.
    """
    transaction.on_commit(partial(_enqueue_welcome_email, user.pk))
    logger.debug(f"Welcome email scheduled for user {user.pk}")
