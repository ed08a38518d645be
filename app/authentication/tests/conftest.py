"""
Test configuration and fixtures for authentication tests.

This module provides:
- User fixtures (verified, unverified, deactivated)
- API client helpers for authenticated requests
- Token fixtures

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get("/api/v1/auth/user/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import LinkedAccount, User
from authentication.tests.factories import LinkedAccountFactory, UserFactory

PASSWORD = "TestPass123!"


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def password():
    """Password every factory user is created with."""
    return PASSWORD


@pytest.fixture
def user(db):
    """Create a verified, active user with a profile."""
    return UserFactory(verified=True)


@pytest.fixture
def unverified_user(db):
    """Create a user whose email has not been verified yet."""
    return UserFactory()


@pytest.fixture
def deactivated_user(db):
    """Create a deactivated user (is_active=False)."""
    return UserFactory(is_active=False, verified=True)


@pytest.fixture
def superuser(db):
    return User.objects.create_superuser(
        email="admin@example.com", password="AdminPass123!"
    )


# =============================================================================
# LinkedAccount Fixtures
# =============================================================================


@pytest.fixture
def linked_account_google(db, user):
    """Create Google-linked account for user."""
    return LinkedAccountFactory(
        user=user,
        provider=LinkedAccount.Provider.GOOGLE,
        provider_user_id="google-uid-123",
    )


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    return APIClient()


@pytest.fixture
def refresh_token(user):
    """Outstanding refresh token for the default user fixture."""
    return RefreshToken.for_user(user)


@pytest.fixture
def authenticated_client(refresh_token):
    """
    API client authenticated with a JWT for the default user fixture.

    Use this for tests that need a logged-in user.
    """
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh_token.access_token}")
    return client
