"""
Authentication models.

This module defines the identity record used across the application:
- User: Custom user model with email-based authentication

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: AccountService business logic
    - tokens.py: JWT issuing and generation checks

Security:
    - User passwords hashed with Django's PBKDF2
    - token_generation is bumped on every credential change; tokens minted
      for an older generation are rejected
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Chat code only needs the identifier and the display name; everything
    else here belongs to authentication.

    Fields:
        email: Primary identifier, unique, used for login
        display_name: Name shown next to messages
        token_generation: Credential generation embedded in issued tokens
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created
        updated_at: When the user record was last modified

    Usage:
        user = User.objects.create_user(
            email='user@example.com',
            password='securepassword',
            display_name='alice',
        )
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    display_name = models.CharField(
        max_length=150,
        help_text="Public name shown next to the user's messages",
    )

    token_generation = models.PositiveIntegerField(
        default=0,
        help_text="Incremented on credential changes to invalidate issued tokens",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"

    # Prompted by createsuperuser in addition to email and password
    REQUIRED_FIELDS = ["display_name"]

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    def get_full_name(self):
        return self.display_name or self.email

    def get_short_name(self):
        return self.display_name or self.email.split("@")[0]

    def rotate_token_generation(self):
        """
        Invalidate every token issued so far.

        Callers are expected to save the instance (the increment is
        applied in memory only).
        """
        self.token_generation += 1
