"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with logging, transactions and storage error handling

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Pattern Comparison:
    - ServiceResult: Use for expected failures (validation, membership, ownership)
    - Exceptions: Use for unexpected failures (database errors, bugs)

Usage:
    from core.exceptions import ValidationError
    from core.services import BaseService, ServiceResult

    class RoomService(BaseService):
        @classmethod
        def create_room(cls, user, name: str) -> ServiceResult[Room]:
            if not name.strip():
                return ServiceResult.from_exception(
                    ValidationError("Room name is required")
                )

            with cls.atomic():
                room = Room.objects.create(name=name)
                Membership.objects.create(user=user, room=room)

            cls.get_logger().info(f"Created room {room.id}")
            return ServiceResult.success(room)

    # In view
    result = RoomService.create_room(request.user, name)
    if result.success:
        return Response(RoomSerializer(result.data).data, status=201)
    return Response(result.to_response(), status=result.http_status)

Related:
    - core.exceptions: Typed errors carried by failed results
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import DatabaseError, connection, transaction

from core.exceptions import BaseApplicationError, StorageError

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.
    Use this for expected failures (validation errors, business rule violations).

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors for validation failures
        status_code: HTTP status for the failure (None means 400)

    Usage:
        # Success case
        return ServiceResult.success(room)

        # Failure case
        return ServiceResult.failure("Room not found", "ROOM_NOT_FOUND", status_code=404)

        # Failure from a typed error
        return ServiceResult.from_exception(
            PermissionDeniedError("Not a member", error_code="NOT_MEMBER")
        )

        # Check result
        result = RoomService.rename_room(user, room_id, name)
        if result.success:
            room = result.data
        else:
            print(f"Error: {result.error} ({result.error_code})")
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)
    status_code: int | None = None

    @classmethod
    def ok(cls, data: T) -> ServiceResult[T]:
        """Alias for success() - use whichever reads better in context."""
        return cls(success=True, data=data)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
        status_code: int | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)
            status_code: HTTP status for the API layer (defaults to 400)

        Returns:
            ServiceResult with success=False and error details
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
            status_code=status_code,
        )

    @classmethod
    def from_exception(cls, exc: Exception, error_code: str | None = None) -> ServiceResult[T]:
        """
        Create a failed result from an exception.

        Application errors keep their own error code, field details and HTTP
        status. Any other exception becomes a 400 with the class name as code.

        Args:
            exc: The caught (or constructed) exception
            error_code: Optional error code override

        Returns:
            ServiceResult with error details from exception

        Example:
            return ServiceResult.from_exception(
                NotFoundError("Message not found", error_code="MESSAGE_NOT_FOUND")
            )
        """
        if isinstance(exc, BaseApplicationError):
            return cls(
                success=False,
                error=exc.message,
                error_code=error_code or exc.error_code,
                errors=exc.details or None,
                status_code=exc.status_code,
            )
        return cls(
            success=False,
            error=str(exc),
            error_code=error_code or exc.__class__.__name__.upper(),
        )

    @property
    def http_status(self) -> int:
        """HTTP status for this result: 200 on success, the failure's status otherwise."""
        if self.success:
            return 200
        return self.status_code or 400

    def to_response(self) -> dict[str, Any]:
        """
        Convert to API response format.

        Returns:
            Dict with success status and data or error details

        Example:
            result = RoomService.delete_room(user, room_id)
            if not result.success:
                return Response(result.to_response(), status=result.http_status)
        """
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def map(self, func) -> ServiceResult:
        """
        Transform the data if successful.

        Example:
            result = RoomService.list_rooms_for_user(user)
            ids = result.map(lambda rooms: [room.id for room in rooms])
        """
        if self.success and self.data is not None:
            return ServiceResult.success(func(self.data))
        return self  # type: ignore

    def __bool__(self) -> bool:
        """Allow using result in boolean context (same as result.success)."""
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transactions with an optional statement deadline
    - Conversion of database failures into STORAGE_ERROR results

    Usage:
        class RoomService(BaseService):
            @classmethod
            def delete_room(cls, user, room_id) -> ServiceResult[None]:
                try:
                    with cls.atomic(timeout_ms=2000):
                        Membership.objects.filter(room_id=room_id).delete()
                        Room.objects.filter(id=room_id).delete()
                except DatabaseError as exc:
                    return cls.handle_exception(exc, "delete_room")

                cls.get_logger().info(f"Deleted room {room_id}")
                return ServiceResult.success(None)

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Use ServiceResult for expected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls, timeout_ms: int | None = None) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back.

        Args:
            timeout_ms: Deadline for every statement in the transaction.
                Applied with SET LOCAL statement_timeout on PostgreSQL, where
                an expired statement is cancelled and raises OperationalError.
                Other backends ignore it. SET LOCAL lasts until the outermost
                transaction ends, so when nested inside another atomic block
                the previous value is restored on a clean exit. On error the
                savepoint rollback discards the setting.

        Example:
            with cls.atomic():
                room = Room.objects.create(name=name)
                Membership.objects.create(user=user, room=room)
                # If the membership insert fails, the room is rolled back too
        """
        nested = connection.in_atomic_block
        with transaction.atomic():
            previous = None
            if timeout_ms and connection.vendor == "postgresql":
                with connection.cursor() as cursor:
                    if nested:
                        cursor.execute("SHOW statement_timeout")
                        previous = cursor.fetchone()[0]
                    cursor.execute(f"SET LOCAL statement_timeout = {int(timeout_ms)}")
            yield
            if previous is not None:
                with connection.cursor() as cursor:
                    cursor.execute(
                        "SELECT set_config('statement_timeout', %s, true)", [previous]
                    )

    @classmethod
    def handle_exception(
        cls,
        exc: Exception,
        context: str = "",
        log_level: int = logging.ERROR,
    ) -> ServiceResult:
        """
        Convert exception to ServiceResult with logging.

        Database errors become a STORAGE_ERROR result with a generic message;
        the original error is only written to the log.

        Args:
            exc: The caught exception
            context: Operation name for the log line
            log_level: Logging level (default ERROR)

        Returns:
            ServiceResult with error details
        """
        message = f"{context}: {exc}" if context else str(exc)
        cls.get_logger().log(log_level, message, exc_info=True)

        if isinstance(exc, DatabaseError):
            return ServiceResult.from_exception(
                StorageError("Storage is temporarily unavailable")
            )
        return ServiceResult.from_exception(exc)

    @classmethod
    def validate_required(cls, **kwargs) -> ServiceResult | None:
        """
        Validate that required fields are provided.

        A value counts as missing when it is None or a blank string.

        Returns:
            ServiceResult.failure if validation fails, None otherwise

        Example:
            validation = cls.validate_required(name=name)
            if validation is not None:
                return validation
        """
        errors = {}
        for field_name, value in kwargs.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                errors[field_name] = ["This field is required."]

        if errors:
            missing = ", ".join(errors)
            return ServiceResult.failure(
                f"Required fields missing: {missing}",
                error_code="VALIDATION_ERROR",
                errors=errors,
                status_code=400,
            )
        return None
