"""
Protocol definitions for the OTP workflow's pluggable edges.

Available Protocols:
    DeliveryDispatcher: Hands an issued code to a delivery channel
    ActivationHook: Effect run when a code for an operation is verified

Usage:
    from otp.protocols import DeliveryDispatcher

    class SmsDispatcher:
        def deliver(self, user, code, operation):
            sms_client.send(user.phone, f"Your code is {code}")

    # SmsDispatcher is a valid DeliveryDispatcher without inheriting from it
    dispatcher: DeliveryDispatcher = SmsDispatcher()

Note:
    - @runtime_checkable allows isinstance() checks
    - The active dispatcher is chosen by settings.OTP_DELIVERY_DISPATCHER
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import Any

    from authentication.models import User


@runtime_checkable
class DeliveryDispatcher(Protocol):
    """
    Delivery channel for issued codes.

    deliver() must return quickly. It may raise otp.exceptions.DeliveryError;
    OTPService.issue logs that and still reports success, since the code is
    already persisted and the user can request another.
    """

    def deliver(self, user: User, code: int, operation: str) -> None:
        """
        Send `code` for `operation` to `user`.

        Args:
            user: Recipient
            code: The plaintext 6-digit code
            operation: Operation tag the code authorizes
        """
        ...


@runtime_checkable
class ActivationHook(Protocol):
    """
    Effect run inside the verification transaction.

    Returns an artifact for the caller (e.g. a token pair) or None.
    Raising rolls back the code consumption.
    """

    def __call__(self, user: User) -> Any: ...
