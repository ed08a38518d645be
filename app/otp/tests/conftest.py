"""
Test configuration and fixtures for otp tests.

This module provides:
- Users in the states the OTP workflow cares about
- A recording dispatcher so tests can read the issued code
- A helper to register a throwaway activation hook

Usage:
    def test_example(unverified_user, dispatcher):
        OTPService.issue(unverified_user.email, "email", dispatcher=dispatcher)
        code = dispatcher.last_code
"""

import pytest
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from otp.hooks import activation_hooks


class RecordingDispatcher:
    """DeliveryDispatcher that keeps deliveries in memory."""

    def __init__(self):
        self.deliveries = []

    def deliver(self, user, code, operation):
        self.deliveries.append((user, code, operation))

    @property
    def last_code(self):
        return self.deliveries[-1][1]


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def unverified_user(db):
    """User that has registered but not verified their email."""
    return UserFactory()


@pytest.fixture
def verified_user(db):
    return UserFactory(verified=True)


# =============================================================================
# Delivery / Hook Fixtures
# =============================================================================


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def register_hook():
    """
    Register a hook for an operation for the duration of one test.

    Usage:
        def test_x(register_hook):
            register_hook("test-op", lambda user: {"ok": True})
    """
    registered = []

    def _register(operation, hook):
        activation_hooks.register(operation)(hook)
        registered.append(operation)
        return hook

    yield _register

    for operation in registered:
        activation_hooks.unregister(operation)


@pytest.fixture
def api_client():
    return APIClient()
