"""
Test configuration and fixtures for chat tests.

This module provides:
- User fixtures for members and outsiders
- Room fixtures with memberships
- API client helpers for authenticated requests

Usage:
    def test_example(room, member_client):
        response = member_client.get(f'/api/v1/chat/rooms/{room.id}/messages/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from authentication.tokens import issue_tokens
from chat.tests.factories import RoomFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def member_user(db):
    """Create a user who will be a member of the room fixture."""
    return UserFactory(display_name="alice")


@pytest.fixture
def second_member(db):
    """Create a second member of the room fixture."""
    return UserFactory(display_name="bob")


@pytest.fixture
def outsider(db):
    """Create a user who is not a member of any test room."""
    return UserFactory(display_name="mallory")


# =============================================================================
# Room Fixtures
# =============================================================================


@pytest.fixture
def room(db, member_user):
    """Room with member_user as its only member."""
    return RoomFactory.with_members(member_user, name="general")


@pytest.fixture
def shared_room(db, member_user, second_member):
    """Room with both member_user and second_member."""
    return RoomFactory.with_members(member_user, second_member, name="team")


# =============================================================================
# API Client Fixtures
# =============================================================================


def _client_for(user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_tokens(user)['access']}")
    return client


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def member_client(member_user):
    return _client_for(member_user)


@pytest.fixture
def second_member_client(second_member):
    return _client_for(second_member)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)
