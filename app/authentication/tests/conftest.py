"""
Test configuration and fixtures for authentication tests.

This module provides:
- User fixtures
- API client helpers for authenticated requests
- Test data fixtures

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get('/api/v1/users/me/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient

from authentication.models import User
from authentication.tests.factories import DEFAULT_PASSWORD, UserFactory
from authentication.tokens import issue_tokens


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def password():
    """Password every UserFactory user is created with."""
    return DEFAULT_PASSWORD


@pytest.fixture
def user(db):
    """Create a basic active user."""
    return UserFactory(email="alice@example.com", display_name="alice")


@pytest.fixture
def other_user(db):
    """Create a second user."""
    return UserFactory(email="bob@example.com", display_name="bob")


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com", password="AdminPass123!"
    )


@pytest.fixture
def deactivated_user(db):
    """Create a deactivated user (is_active=False)."""
    return UserFactory(is_active=False)


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    return APIClient()


@pytest.fixture
def tokens(user):
    """Token pair issued for the default user fixture."""
    return issue_tokens(user)


@pytest.fixture
def authenticated_client(tokens):
    """
    API client authenticated with JWT token for the default user fixture.

    Use this for tests that need a logged-in user.
    """
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
    return client


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
            response = client.get('/api/v1/users/me/')
    """

    def _make_client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_tokens(user)['access']}")
        return client

    return _make_client


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def valid_registration_data():
    """Valid data for user registration endpoint."""
    return {
        "email": "newuser@example.com",
        "display_name": "newcomer",
        "password": "Str0ng-Passw0rd!",
    }
