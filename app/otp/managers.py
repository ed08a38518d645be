"""
QuerySet and Manager for one-time passwords.

The manager is the OTP store: it persists codes, finds the active one for a
(user, operation) pair, and flips codes to consumed. It holds no business
rules; expiry and code comparison live in otp.services.

Usage:
    OneTimePassword.objects.invalidate_all(user, "email")
    otp = OneTimePassword.objects.issue(user, "email", 482913)

    otp = OneTimePassword.objects.active_for(user, "email")
    if OneTimePassword.objects.consume(otp):
        ...  # this caller won the code

Related files:
    - models.py: OneTimePassword
    - services.py: OTPService (issue/verify rules)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import models
from django.utils import timezone

if TYPE_CHECKING:
    from datetime import datetime

    from authentication.models import User
    from otp.models import OneTimePassword


class OneTimePasswordQuerySet(models.QuerySet):
    """Chainable filters for OTP rows."""

    def for_pair(self, user: User, operation: str) -> OneTimePasswordQuerySet:
        return self.filter(user=user, operation=operation)

    def active(self) -> OneTimePasswordQuerySet:
        return self.filter(is_active=True)

    def consumed(self) -> OneTimePasswordQuerySet:
        return self.filter(is_active=False)

    def stale(self, before: datetime) -> OneTimePasswordQuerySet:
        """
        Rows safe to purge: consumed codes plus anything created before `before`.

        Args:
            before: Cutoff timestamp (retention window start)
        """
        return self.filter(models.Q(is_active=False) | models.Q(created_at__lt=before))


class OneTimePasswordManager(models.Manager.from_queryset(OneTimePasswordQuerySet)):
    """
    Store operations for OneTimePassword.

    The queryset filters (for_pair, active, consumed, stale) are available
    on the manager too. Every mutating method runs a single SQL statement;
    callers that need several of them to be atomic wrap the calls in a
    transaction.
    """

    def active_for(self, user: User, operation: str) -> OneTimePassword | None:
        """
        Return the most recent active code for (user, operation), or None.

        Issuance keeps at most one active row per pair; ordering by
        created_at still picks the newest if that ever fails to hold.
        """
        return (
            self.get_queryset()
            .for_pair(user, operation)
            .active()
            .order_by("-created_at", "-pk")
            .first()
        )

    def invalidate_all(self, user: User, operation: str) -> int:
        """
        Delete every code for (user, operation), active or consumed.

        Returns:
            Number of rows deleted
        """
        deleted, _ = self.get_queryset().for_pair(user, operation).delete()
        return deleted

    def issue(self, user: User, operation: str, code: int) -> OneTimePassword:
        """Persist a new active code."""
        return self.create(user=user, operation=operation, code=code, is_active=True)

    def consume(self, otp: OneTimePassword) -> bool:
        """
        Mark `otp` inactive if it is still active.

        The UPDATE is conditional on is_active=True, so when two requests
        race for the same code exactly one of them sees a row count of 1.

        Returns:
            True if this call consumed the code, False if it was already gone
        """
        updated = (
            self.get_queryset()
            .filter(pk=otp.pk, is_active=True)
            .update(is_active=False, updated_at=timezone.now())
        )
        if updated:
            otp.is_active = False
        return updated == 1
