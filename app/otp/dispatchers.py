"""
Delivery dispatchers for issued codes.

Select one with settings.OTP_DELIVERY_DISPATCHER:

    OTP_DELIVERY_DISPATCHER = "otp.dispatchers.CeleryEmailDispatcher"

Available:
    CeleryEmailDispatcher: Queue a Celery task after commit (default)
    EmailDispatcher: Send inline from the request, for setups without a worker

Related files:
    - protocols.py: DeliveryDispatcher contract
    - tasks.py: send_otp_email Celery task and the email builder
"""

import logging
from functools import partial
from smtplib import SMTPException

from django.db import transaction
from kombu.exceptions import OperationalError

from otp.exceptions import DeliveryError
from otp.tasks import send_code_email, send_otp_email

logger = logging.getLogger(__name__)


class CeleryEmailDispatcher:
    """
    Email the code from a Celery worker.

    The task is enqueued only after the surrounding transaction commits,
    so a rolled-back registration never emails a code that was not stored.
    Broker failures, and task failures when Celery runs eagerly, are
    logged; the caller never sees them.
    """

    def deliver(self, user, code, operation):
        transaction.on_commit(partial(self._enqueue, user.pk, code, operation))

    def _enqueue(self, user_id, code, operation):
        try:
            send_otp_email.delay(user_id=user_id, code=code, operation=operation)
        except OperationalError as exc:
            logger.error(
                f"Could not enqueue {operation} OTP email for user {user_id}: {exc}",
                extra={"user_id": user_id, "operation": operation},
            )
            return
        except Exception:
            # CELERY_TASK_ALWAYS_EAGER runs the task here and re-raises its error
            logger.exception(
                f"Delivery of {operation} OTP email failed for user {user_id}",
                extra={"user_id": user_id, "operation": operation},
            )
            return

        logger.debug(
            f"Queued {operation} OTP email for user {user_id}",
            extra={"user_id": user_id, "operation": operation},
        )


class EmailDispatcher:
    """
    Email the code synchronously from the request.

    SMTP failures surface as DeliveryError, which OTPService.issue logs.
    """

    def deliver(self, user, code, operation):
        try:
            send_code_email(user, code, operation)
        except (SMTPException, OSError) as exc:
            raise DeliveryError(
                f"Could not email {operation} code: {exc}",
                details={"user_id": user.pk, "operation": operation},
            ) from exc
