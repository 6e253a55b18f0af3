"""
Base exception classes for application-wide error handling.

Every domain error carries a human-readable message, a machine-readable
error code, optional details, and the HTTP status the API layer should use
when the error reaches a client.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Malformed or empty input (400)
    ├── PermissionDeniedError - Authenticated but not allowed (403)
    ├── NotFoundError - Referenced resource does not exist (404)
    ├── ConflictError - Duplicates and state conflicts (409)
    └── StorageError - Persistence failures (503)

Usage:
    from core.exceptions import NotFoundError, PermissionDeniedError

    # Raise with message only
    raise NotFoundError("Room not found")

    # Raise with a specific error code
    raise PermissionDeniedError("Not a member of this room", error_code="NOT_MEMBER")

    # Wrap as an expected failure in a service
    return ServiceResult.from_exception(
        ValidationError("Room name is required", details={"name": ["Required"]})
    )

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, authentication, etc.).
    Authentication failures come from simplejwt (InvalidToken) and are
    rendered by DRF unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, identifiers, etc.)
        status_code: HTTP status used when rendered by the API layer

    Example:
        try:
            ...
        except NotFoundError as e:
            logger.warning(f"Lookup failed: {e.error_code}")
            return Response(e.to_dict(), status=e.status_code)
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and (when present) details keys
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input is malformed or empty.

    The caller's fault; never retried.

    Example:
        raise ValidationError(
            "Message content cannot be empty",
            details={"content": ["This field may not be blank."]},
        )
    """

    default_error_code: str = "VALIDATION_ERROR"
    status_code: int = 400


class NotFoundError(BaseApplicationError):
    """
    Raised when a referenced resource does not exist.

    Example:
        if room is None:
            raise NotFoundError("Room not found", error_code="ROOM_NOT_FOUND")
    """

    default_error_code: str = "NOT_FOUND"
    status_code: int = 404


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when an authenticated caller lacks the right to an operation.

    Covers both room membership and resource ownership rejections; the
    error code tells them apart (NOT_MEMBER, NOT_SENDER).

    Note:
        For authentication failures (missing/invalid token), DRF's
        AuthenticationFailed / simplejwt's InvalidToken are used instead.
    """

    default_error_code: str = "PERMISSION_DENIED"
    status_code: int = 403


class ConflictError(BaseApplicationError):
    """
    Raised when an operation conflicts with current state.

    Example:
        if User.objects.filter(email=email).exists():
            raise ConflictError("Email already registered", error_code="EMAIL_EXISTS")
    """

    default_error_code: str = "CONFLICT"
    status_code: int = 409


class StorageError(BaseApplicationError):
    """
    Raised when the database fails (connectivity, timeouts, constraints).

    Fatal to the current request only. The original database exception is
    logged by the service that caught it; clients only see a generic
    message.
    """

    default_error_code: str = "STORAGE_ERROR"
    status_code: int = 503
