"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Room, Membership, Message model tests
- test_membership.py: MembershipStore tests
- test_authorization.py: Membership and sender checks
- test_services.py: RoomService and MessageService tests
- test_views.py: API endpoint tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_services.py
"""
