"""
Tests for the User model and UserManager.

Test Organization:
    - Each class covers one model or manager
    - Tests use descriptive names following the pattern: test_<scenario>_<expected_outcome>
"""

import pytest
from django.db import IntegrityError

from authentication.models import User
from authentication.tests.factories import UserFactory


# =============================================================================
# User Model Tests
# =============================================================================


class TestUserModel:
    """Tests for the User model."""

    def test_str_returns_email(self, db):
        user = UserFactory(email="carol@example.com")

        assert str(user) == "carol@example.com"

    def test_email_is_unique(self, db):
        UserFactory(email="dup@example.com")

        with pytest.raises(IntegrityError):
            UserFactory(email="dup@example.com")

    def test_token_generation_starts_at_zero(self, db):
        user = UserFactory()

        assert user.token_generation == 0

    def test_rotate_token_generation_increments_in_memory(self, db):
        """
        rotate_token_generation() does not save.

        Why it matters: AccountService saves the rotation together with the
        credential change, in a single UPDATE.
        """
        user = UserFactory()

        user.rotate_token_generation()

        assert user.token_generation == 1
        user.refresh_from_db()
        assert user.token_generation == 0

    def test_full_name_is_display_name(self, db):
        user = UserFactory(display_name="Carol")

        assert user.get_full_name() == "Carol"
        assert user.get_short_name() == "Carol"


# =============================================================================
# UserManager Tests
# =============================================================================


class TestUserManager:
    """Tests for UserManager.create_user() / create_superuser()."""

    def test_create_user_hashes_password(self, db):
        user = User.objects.create_user(email="dan@example.com", password="Pa55-word-xyz")

        assert user.password != "Pa55-word-xyz"
        assert user.check_password("Pa55-word-xyz")

    def test_create_user_normalizes_email_domain(self, db):
        user = User.objects.create_user(email="Dan@EXAMPLE.COM", password="x")

        assert user.email == "Dan@example.com"

    def test_display_name_defaults_to_email_local_part(self, db):
        user = User.objects.create_user(email="erin@example.com", password="x")

        assert user.display_name == "erin"

    def test_create_user_without_password_is_unusable(self, db):
        user = User.objects.create_user(email="nopass@example.com")

        assert user.has_usable_password() is False

    def test_create_user_requires_email(self, db):
        with pytest.raises(ValueError):
            User.objects.create_user(email="", password="x")

    def test_create_superuser_sets_flags(self, db):
        admin = User.objects.create_superuser(email="root@example.com", password="x")

        assert admin.is_staff is True
        assert admin.is_superuser is True

    def test_create_superuser_rejects_is_staff_false(self, db):
        with pytest.raises(ValueError):
            User.objects.create_superuser(
                email="root@example.com", password="x", is_staff=False
            )
