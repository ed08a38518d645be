"""
Celery tasks for authentication.

This module defines async tasks for:
- Sending the welcome email once a user's address is verified

Related files:
    - signals.py: Queues send_welcome_email after verification commits

Usage:
    from authentication.tasks import send_welcome_email
    send_welcome_email.delay(user_id=123)
"""

import logging

from celery import shared_task

from toolkit.helpers import mask_email
from toolkit.services.email import EmailService

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def send_welcome_email(self, user_id: int) -> bool:
    """
    Send welcome email after email verification.

    Args:
        user_id: ID of the user to send email to

    Returns:
        True if email was sent, False if the user no longer exists
    """
    from authentication.models import User

    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        logger.error(f"User {user_id} not found for welcome email")
        return False

    EmailService.send(
        to=user.email,
        subject="Welcome!",
        template_name="authentication/welcome_email",
        context={"user": user},
    )

    logger.info(f"Welcome email sent to {mask_email(user.email)}")
    return True
