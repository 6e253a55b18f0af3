"""
Chat system models.

This module defines the data models for membership-gated chat rooms:

Models:
    Room: Named conversation scope; any member may rename or delete it
    Membership: The (user, room) fact that grants access to a room
    Message: Text entry authored by one member in one room

Design Decisions:
    - Rooms have no owner; membership is the only access unit
    - A room is created together with its creator's membership, so outside
      the creating transaction every room has at least one member
    - Deleting a room cascades memberships and messages at the database level
    - Deleting a user cascades memberships but keeps the user's messages
      (sender becomes NULL) so other members' history survives
    - sent_at is stamped by the server and never changes, not even on edit
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import BaseModel


class Room(BaseModel):
    """
    A named chat room.

    Fields:
        name: Display name, non-blank

    Relationships:
        memberships: Membership records granting access
        messages: Messages posted in the room
    """

    name = models.CharField(
        max_length=100,
        help_text="Room name (non-blank)",
    )

    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="Membership",
        related_name="rooms",
        help_text="Users with access to this room",
    )

    class Meta:
        db_table = "chat_room"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.name} (#{self.pk})"


class Membership(models.Model):
    """
    Join record between a user and a room.

    Unique per (user, room). Created when a user creates a room; removed
    only by cascade when either the room or the user is deleted.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="memberships",
        help_text="Member",
    )
    room = models.ForeignKey(
        Room,
        on_delete=models.CASCADE,
        related_name="memberships",
        help_text="Room the user belongs to",
    )
    joined_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the membership was created",
    )

    class Meta:
        db_table = "chat_membership"
        ordering = ["room_id", "user_id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "room"],
                name="chat_membership_unique_user_room",
            ),
        ]
        indexes = [
            # Membership lookups from the room side (rename/delete/list checks)
            models.Index(fields=["room", "user"], name="chat_member_room_user_idx"),
        ]

    def __str__(self) -> str:
        return f"user {self.user_id} in room {self.room_id}"


class Message(BaseModel):
    """
    A text message posted in a room.

    Fields:
        room: Room the message belongs to (immutable)
        sender: Author (immutable; NULL once the author's account is deleted)
        content: Message text; the only mutable field
        sent_at: Server timestamp at acceptance; never updated

    Ordering:
        Chronological by (sent_at, id). Equal timestamps fall back to id so
        listings are deterministic.
    """

    room = models.ForeignKey(
        Room,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Room this message was posted in",
    )

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sent_messages",
        help_text="User who sent the message (NULL if the account was deleted)",
    )

    content = models.TextField(
        help_text="Message text (non-blank)",
    )

    sent_at = models.DateTimeField(
        default=timezone.now,
        editable=False,
        help_text="Server time when the message was accepted",
    )

    class Meta:
        db_table = "chat_message"
        ordering = ["sent_at", "id"]
        indexes = [
            # Room transcript, oldest first
            models.Index(
                fields=["room", "sent_at", "id"],
                name="chat_msg_room_sent_idx",
            ),
            # Personal history, newest first
            models.Index(
                fields=["sender", "-sent_at"],
                name="chat_msg_sender_sent_idx",
            ),
        ]

    def __str__(self) -> str:
        preview = self.content[:50] + "..." if len(self.content) > 50 else self.content
        return f"Message {self.pk} in room {self.room_id}: {preview}"

    def is_sent_by(self, user) -> bool:
        return self.sender_id is not None and self.sender_id == user.id
