"""
Chat service layer.

This module contains the business logic for rooms and messages:
- RoomService: Room creation, listing, renaming and deletion
- MessageService: Sending, listing, editing and deleting messages

All methods are classmethods returning ServiceResult for expected failures
(validation, membership, ownership). Database errors are logged and
returned as STORAGE_ERROR results.

Design Decisions:
    - Every write runs in BaseService.atomic() with a statement deadline
      (CHAT_STATEMENT_TIMEOUT_MS unless the caller passes timeout_ms)
    - Room rename/delete and message send lock the room row, so a send
      racing a delete either commits before the cascade or sees the room
      gone; no orphaned message survives
    - Message edit/delete lock the message row
    - sent_at is stamped here, never taken from the client, and never
      touched by an edit
    - Any member may rename or delete a room
    - Listing methods return lazy querysets ordered for display; callers
      paginate them

Usage:
    from chat.services import RoomService, MessageService

    room = RoomService.create_room(user=user, name="general").data
    MessageService.send_message(user=user, room_id=room.id, content="hello")
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from chat.authorization import ChatAuthorizationService, require_room_membership
from chat.constants import CHAT_ERRORS, MESSAGE_CONFIG, ROOM_CONFIG
from chat.membership import MembershipStore
from chat.models import Message, Room
from core.exceptions import ValidationError
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from authentication.models import User


class ChatService(BaseService):
    """Shared helpers for chat services."""

    @staticmethod
    def deadline(timeout_ms: int | None) -> int | None:
        if timeout_ms is not None:
            return timeout_ms
        return getattr(settings, "CHAT_STATEMENT_TIMEOUT_MS", None)

    @classmethod
    @contextmanager
    def read_deadline(cls, timeout_ms: int | None = None) -> Generator[None, None, None]:
        """
        Scope for read queries bound by the statement deadline.

        Read operations return lazy querysets, so callers that paginate them
        should evaluate the page inside this scope.
        """
        with cls.atomic(timeout_ms=cls.deadline(timeout_ms)):
            yield

    @staticmethod
    def validate_text(
        field_name: str,
        value: str | None,
        max_length: int,
        strip: bool = False,
    ) -> ServiceResult | None:
        """
        Reject blank or oversized text.

        With strip=True the length limit applies to the stripped value,
        for fields that are stored stripped.

        Returns:
            VALIDATION_ERROR failure, or None when the value is acceptable
        """
        if value is None or not value.strip():
            return ServiceResult.from_exception(
                ValidationError(
                    f"{field_name.capitalize()} cannot be empty",
                    error_code=CHAT_ERRORS.VALIDATION_ERROR,
                    details={field_name: ["This field may not be blank."]},
                )
            )
        measured = value.strip() if strip else value
        if len(measured) > max_length:
            return ServiceResult.from_exception(
                ValidationError(
                    f"{field_name.capitalize()} exceeds {max_length} characters",
                    error_code=CHAT_ERRORS.VALIDATION_ERROR,
                    details={field_name: [f"Ensure this field has no more than {max_length} characters."]},
                )
            )
        return None


class RoomService(ChatService):
    """
    Service for room lifecycle.

    Error Codes:
        VALIDATION_ERROR: Blank or oversized room name
        ROOM_NOT_FOUND: Room does not exist
        NOT_MEMBER: Caller is not a member of the room
        STORAGE_ERROR: Database failure
    """

    @classmethod
    def create_room(
        cls,
        user: "User",
        name: str,
        timeout_ms: int | None = None,
    ) -> ServiceResult[Room]:
        """
        Create a room with the creator as its first member.

        The room and the membership are written in one transaction; if the
        membership insert fails the room is rolled back.

        Args:
            user: Creator
            name: Room name (non-blank)
            timeout_ms: Statement deadline override

        Returns:
            ServiceResult with the created Room
        """
        invalid = cls.validate_text("name", name, ROOM_CONFIG.MAX_NAME_LENGTH, strip=True)
        if invalid is not None:
            return invalid

        try:
            with cls.atomic(timeout_ms=cls.deadline(timeout_ms)):
                room = Room.objects.create(name=name.strip())
                MembershipStore.add_membership(user, room)
        except DatabaseError as exc:
            return cls.handle_exception(exc, "create_room")

        cls.get_logger().info(f"Room {room.id} created by user {user.id}")
        return ServiceResult.success(room)

    @classmethod
    def list_rooms_for_user(
        cls,
        user: "User",
        timeout_ms: int | None = None,
    ) -> ServiceResult["QuerySet[Room]"]:
        """Rooms the user belongs to, ordered by id."""
        with cls.read_deadline(timeout_ms):
            room_ids = list(MembershipStore.room_ids_for_user(user))
        rooms = Room.objects.filter(id__in=room_ids).order_by("id")
        return ServiceResult.success(rooms)

    @classmethod
    def rename_room(
        cls,
        user: "User",
        room_id: int,
        name: str,
        timeout_ms: int | None = None,
    ) -> ServiceResult[Room]:
        """
        Rename a room. Any member may rename; concurrent renames are last-write-wins.

        Returns:
            ServiceResult with the updated Room
        """
        invalid = cls.validate_text("name", name, ROOM_CONFIG.MAX_NAME_LENGTH, strip=True)
        if invalid is not None:
            return invalid

        try:
            with cls.atomic(timeout_ms=cls.deadline(timeout_ms)):
                access = ChatAuthorizationService.authorize_room(user, room_id, lock=True)
                if not access:
                    cls.get_logger().info(
                        f"Rename of room {room_id} by user {user.id} rejected: {access.error_code}"
                    )
                    return access

                room = access.data
                room.name = name.strip()
                room.save(update_fields=["name", "updated_at"])
        except DatabaseError as exc:
            return cls.handle_exception(exc, "rename_room")

        cls.get_logger().info(f"Room {room.id} renamed by user {user.id}")
        return ServiceResult.success(room)

    @classmethod
    def delete_room(
        cls,
        user: "User",
        room_id: int,
        timeout_ms: int | None = None,
    ) -> ServiceResult[None]:
        """
        Delete a room. Any member may delete it.

        Memberships are removed first, then the room; messages go with the
        room through the foreign-key cascade. All of it commits or none of it.
        """
        try:
            with cls.atomic(timeout_ms=cls.deadline(timeout_ms)):
                access = ChatAuthorizationService.authorize_room(user, room_id, lock=True)
                if not access:
                    cls.get_logger().info(
                        f"Delete of room {room_id} by user {user.id} rejected: {access.error_code}"
                    )
                    return access

                removed = MembershipStore.remove_all_for_room(room_id)
                access.data.delete()
        except DatabaseError as exc:
            return cls.handle_exception(exc, "delete_room")

        cls.get_logger().info(
            f"Room {room_id} deleted by user {user.id} ({removed} memberships removed)"
        )
        return ServiceResult.success(None)


class MessageService(ChatService):
    """
    Service for messages.

    Error Codes:
        VALIDATION_ERROR: Blank or oversized content
        ROOM_NOT_FOUND: Room does not exist
        MESSAGE_NOT_FOUND: Message does not exist
        NOT_MEMBER: Caller is not a member of the room
        NOT_SENDER: Caller did not send the message
        STORAGE_ERROR: Database failure
    """

    @classmethod
    def list_room_messages(
        cls,
        user: "User",
        room_id: int,
        timeout_ms: int | None = None,
    ) -> ServiceResult["QuerySet[Message]"]:
        """
        Transcript of a room, oldest first.

        Ordered by (sent_at, id) so messages sharing a timestamp still sort
        deterministically. The membership check runs under the deadline.
        """
        with cls.read_deadline(timeout_ms):
            return cls._room_transcript(user=user, room_id=room_id)

    @classmethod
    @require_room_membership()
    def _room_transcript(
        cls,
        user: "User",
        room_id: int,
        _room: Room | None = None,
    ) -> ServiceResult["QuerySet[Message]"]:
        messages = (
            Message.objects.filter(room=_room)
            .select_related("sender")
            .order_by("sent_at", "id")
        )
        return ServiceResult.success(messages)

    @classmethod
    def list_messages_by_sender(cls, user: "User") -> ServiceResult["QuerySet[Message]"]:
        """
        Personal history across all rooms, newest first.

        Needs no lookup of its own; evaluate the queryset inside
        read_deadline() to bound the fetch.
        """
        messages = (
            Message.objects.filter(sender=user)
            .select_related("sender")
            .order_by("-sent_at", "-id")
        )
        return ServiceResult.success(messages)

    @classmethod
    def send_message(
        cls,
        user: "User",
        room_id: int,
        content: str,
        timeout_ms: int | None = None,
    ) -> ServiceResult[Message]:
        """
        Post a message to a room the user belongs to.

        The room row is locked for the duration of the insert so the send
        cannot interleave with a room deletion.

        Returns:
            ServiceResult with the created Message
        """
        invalid = cls.validate_text("content", content, MESSAGE_CONFIG.MAX_CONTENT_LENGTH)
        if invalid is not None:
            return invalid

        try:
            with cls.atomic(timeout_ms=cls.deadline(timeout_ms)):
                access = ChatAuthorizationService.authorize_room(user, room_id, lock=True)
                if not access:
                    cls.get_logger().info(
                        f"Send to room {room_id} by user {user.id} rejected: {access.error_code}"
                    )
                    return access

                message = Message.objects.create(
                    room=access.data,
                    sender=user,
                    content=content,
                    sent_at=timezone.now(),
                )
        except DatabaseError as exc:
            return cls.handle_exception(exc, "send_message")

        cls.get_logger().info(f"Message {message.id} sent to room {room_id} by user {user.id}")
        return ServiceResult.success(message)

    @classmethod
    def edit_message(
        cls,
        user: "User",
        message_id: int,
        content: str,
        timeout_ms: int | None = None,
    ) -> ServiceResult[Message]:
        """
        Replace a message's content. Only the sender may edit.

        sent_at, sender and room are left untouched.
        """
        invalid = cls.validate_text("content", content, MESSAGE_CONFIG.MAX_CONTENT_LENGTH)
        if invalid is not None:
            return invalid

        try:
            with cls.atomic(timeout_ms=cls.deadline(timeout_ms)):
                access = ChatAuthorizationService.authorize_message_sender(
                    user, message_id, lock=True
                )
                if not access:
                    cls.get_logger().info(
                        f"Edit of message {message_id} by user {user.id} rejected: {access.error_code}"
                    )
                    return access

                message = access.data
                message.content = content
                message.save(update_fields=["content", "updated_at"])
        except DatabaseError as exc:
            return cls.handle_exception(exc, "edit_message")

        cls.get_logger().info(f"Message {message.id} edited by user {user.id}")
        return ServiceResult.success(message)

    @classmethod
    def delete_message(
        cls,
        user: "User",
        message_id: int,
        timeout_ms: int | None = None,
    ) -> ServiceResult[None]:
        """Delete a single message. Only the sender may delete."""
        try:
            with cls.atomic(timeout_ms=cls.deadline(timeout_ms)):
                access = ChatAuthorizationService.authorize_message_sender(
                    user, message_id, lock=True
                )
                if not access:
                    cls.get_logger().info(
                        f"Delete of message {message_id} by user {user.id} rejected: {access.error_code}"
                    )
                    return access

                access.data.delete()
        except DatabaseError as exc:
            return cls.handle_exception(exc, "delete_message")

        cls.get_logger().info(f"Message {message_id} deleted by user {user.id}")
        return ServiceResult.success(None)
