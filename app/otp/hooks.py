"""
Registry of activation hooks keyed by operation tag.

Apps register the effect that should run when a code for one of their
operations is verified. The registry is filled once at startup (from
AppConfig.ready) and only read afterwards.

Usage:
    from otp.hooks import activation_hooks

    @activation_hooks.register("email")
    def mark_email_verified(user):
        ...
        return token_pair

    hook = activation_hooks.get("email")     # None when unregistered
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from otp.protocols import ActivationHook

logger = logging.getLogger(__name__)


class ActivationHookRegistry:
    """Maps operation tags to ActivationHook callables."""

    def __init__(self):
        self._hooks: dict[str, ActivationHook] = {}

    def register(self, operation: str) -> Callable[[ActivationHook], ActivationHook]:
        """
        Decorator registering `hook` for `operation`.

        Raises:
            ValueError: If a different hook is already registered for it
        """

        def decorator(hook: ActivationHook) -> ActivationHook:
            existing = self._hooks.get(operation)
            if existing is not None and existing is not hook:
                raise ValueError(
                    f"Activation hook for '{operation}' already registered: {existing!r}"
                )
            self._hooks[operation] = hook
            logger.debug(f"Activation hook registered for operation '{operation}'")
            return hook

        return decorator

    def unregister(self, operation: str) -> None:
        self._hooks.pop(operation, None)

    def get(self, operation: str) -> ActivationHook | None:
        return self._hooks.get(operation)

    def operations(self) -> list[str]:
        return sorted(self._hooks)


activation_hooks = ActivationHookRegistry()
