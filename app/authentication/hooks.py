"""
Activation hooks this app contributes to the otp workflow.

Imported from AuthenticationConfig.ready() so the registration happens
once at startup.

Registered:
    "email": mark the address verified and sign the user in
"""

import logging

from django.utils import timezone

from authentication.signals import email_verified
from authentication.tokens import TokenPair, issue_tokens
from otp.hooks import activation_hooks
from otp.models import OneTimePassword

logger = logging.getLogger(__name__)


@activation_hooks.register(OneTimePassword.Operation.EMAIL)
def mark_email_verified(user) -> TokenPair:
    """
    Set email_verified_at and return a fresh JWT pair.

    Runs inside the verification transaction; the email_verified signal
    receivers defer their side effects until commit.
    """
    user.email_verified_at = timezone.now()
    user.save(update_fields=["email_verified_at", "updated_at"])

    email_verified.send(sender=user.__class__, user=user)
    logger.info(f"Email verified for user {user.pk}", extra={"user_id": user.pk})

    return issue_tokens(user)
