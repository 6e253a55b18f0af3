"""
Serializers for authentication models.

This module provides DRF serializers for:
- User model (read operations)
- Registration and login input
- Token pair output
- Self-service account changes (display name, email, password)

Related files:
    - models.py: User model
    - views.py: Views that use these serializers
    - services.py: AccountService performs the actual changes

Security:
    - Password fields are write-only
    - token_generation is never exposed
"""

from rest_framework import serializers

from authentication.models import User


class UserSerializer(serializers.ModelSerializer):
    """Public user representation."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "display_name",
            "date_joined",
        ]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """
    Input for account registration.

    Only shape checks happen here; uniqueness and password strength are
    enforced by AccountService.register().
    """

    email = serializers.EmailField()
    display_name = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class TokenPairSerializer(serializers.Serializer):
    """JWT pair returned by login."""

    access = serializers.CharField(read_only=True)
    refresh = serializers.CharField(read_only=True)


class DisplayNameUpdateSerializer(serializers.Serializer):
    display_name = serializers.CharField(max_length=150)


class EmailUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField()


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True, style={"input_type": "password"})
    new_password = serializers.CharField(write_only=True, style={"input_type": "password"})
