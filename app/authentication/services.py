"""
Authentication services.

This module provides the AccountService class for registration, login and
the self-service account changes. It is the Identity Provider for the
chat app: chat code only ever sees the `User` resolved from a token.

Related files:
    - models.py: User
    - tokens.py: JWT issuing with the token generation claim

Security:
    - Passwords hashed with Django's configured hasher
    - Passwords checked with AUTH_PASSWORD_VALIDATORS
    - Display name, email and password changes rotate the token generation
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.models import update_last_login
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError

from authentication.tokens import issue_tokens
from core.exceptions import ConflictError, NotFoundError, ValidationError
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from authentication.models import User


class AccountService(BaseService):
    """
    Account lifecycle and credential management.

    Usage:
        from authentication.services import AccountService

        result = AccountService.register("a@example.com", "S3cure-pass!", "alice")
        tokens = AccountService.login("a@example.com", "S3cure-pass!").data

    Error Codes:
        VALIDATION_ERROR: Blank fields or rejected password
        EMAIL_EXISTS: Another account already uses the email
        INVALID_CREDENTIALS: Email/password pair not accepted
        INVALID_PASSWORD: Current password did not match
        USER_NOT_FOUND: No user with the given id
    """

    @classmethod
    def register(
        cls,
        email: str,
        password: str,
        display_name: str,
    ) -> ServiceResult["User"]:
        """Create an account. Emails are unique (case-insensitive)."""
        User = get_user_model()

        validation = cls.validate_required(
            email=email, password=password, display_name=display_name
        )
        if validation is not None:
            return validation

        email = User.objects.normalize_email(email.strip())
        if User.objects.filter(email__iexact=email).exists():
            return ServiceResult.from_exception(
                ConflictError("Email already registered", error_code="EMAIL_EXISTS")
            )

        password_error = cls._check_password(password, User(email=email, display_name=display_name))
        if password_error is not None:
            return password_error

        try:
            with cls.atomic():
                user = User.objects.create_user(
                    email=email,
                    password=password,
                    display_name=display_name.strip(),
                )
        except IntegrityError:
            return ServiceResult.from_exception(
                ConflictError("Email already registered", error_code="EMAIL_EXISTS")
            )
        except DatabaseError as exc:
            return cls.handle_exception(exc, "register")

        cls.get_logger().info(f"Registered user {user.id}")
        return ServiceResult.success(user)

    @classmethod
    def login(cls, email: str, password: str) -> ServiceResult[dict]:
        """
        Exchange credentials for a token pair.

        Inactive accounts are rejected by the authentication backend.
        """
        user = authenticate(email=email, password=password)
        if user is None:
            cls.get_logger().info("Rejected login attempt")
            return ServiceResult.failure(
                "Invalid email or password",
                error_code="INVALID_CREDENTIALS",
                status_code=401,
            )

        update_last_login(None, user)
        return ServiceResult.success(issue_tokens(user))

    @staticmethod
    def list_users():
        return get_user_model().objects.filter(is_active=True).order_by("id")

    @classmethod
    def get_user(cls, user_id) -> ServiceResult["User"]:
        user = get_user_model().objects.filter(id=user_id, is_active=True).first()
        if user is None:
            return ServiceResult.from_exception(
                NotFoundError("User not found", error_code="USER_NOT_FOUND")
            )
        return ServiceResult.success(user)

    @classmethod
    def change_display_name(cls, user: "User", display_name: str) -> ServiceResult["User"]:
        validation = cls.validate_required(display_name=display_name)
        if validation is not None:
            return validation

        user.display_name = display_name.strip()
        user.rotate_token_generation()
        return cls._save_credentials(user, ["display_name"], "change_display_name")

    @classmethod
    def change_email(cls, user: "User", email: str) -> ServiceResult["User"]:
        User = get_user_model()

        validation = cls.validate_required(email=email)
        if validation is not None:
            return validation

        email = User.objects.normalize_email(email.strip())
        if User.objects.filter(email__iexact=email).exclude(id=user.id).exists():
            return ServiceResult.from_exception(
                ConflictError("Email already registered", error_code="EMAIL_EXISTS")
            )

        user.email = email
        user.rotate_token_generation()
        return cls._save_credentials(user, ["email"], "change_email")

    @classmethod
    def change_password(
        cls,
        user: "User",
        current_password: str,
        new_password: str,
    ) -> ServiceResult["User"]:
        """Replace the password after verifying the current one."""
        if not user.check_password(current_password):
            return ServiceResult.from_exception(
                ValidationError(
                    "Current password is incorrect",
                    error_code="INVALID_PASSWORD",
                    details={"current_password": ["Current password is incorrect."]},
                )
            )

        password_error = cls._check_password(new_password, user)
        if password_error is not None:
            return password_error

        user.set_password(new_password)
        user.rotate_token_generation()
        return cls._save_credentials(user, ["password"], "change_password")

    @classmethod
    def delete_account(cls, user: "User") -> ServiceResult[None]:
        """
        Delete the account.

        Memberships go with the user; messages the user sent stay in their
        rooms without a sender.
        """
        user_id = user.id
        try:
            with cls.atomic():
                user.delete()
        except DatabaseError as exc:
            return cls.handle_exception(exc, "delete_account")

        cls.get_logger().info(f"Deleted user {user_id}")
        return ServiceResult.success(None)

    @classmethod
    def _check_password(cls, password: str, user: "User") -> ServiceResult | None:
        try:
            validate_password(password, user=user)
        except DjangoValidationError as exc:
            return ServiceResult.from_exception(
                ValidationError(
                    "Password does not meet requirements",
                    details={"password": list(exc.messages)},
                )
            )
        return None

    @classmethod
    def _save_credentials(cls, user: "User", fields: list[str], context: str) -> ServiceResult["User"]:
        try:
            with cls.atomic():
                user.save(update_fields=[*fields, "token_generation", "updated_at"])
        except IntegrityError:
            return ServiceResult.from_exception(
                ConflictError("Email already registered", error_code="EMAIL_EXISTS")
            )
        except DatabaseError as exc:
            return cls.handle_exception(exc, context)

        cls.get_logger().info(
            f"{context} for user {user.id}; token generation now {user.token_generation}"
        )
        return ServiceResult.success(user)
