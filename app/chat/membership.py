"""
Membership data access.

MembershipStore is the only code that reads or writes Membership rows.
It holds no business rules: RoomService and MessageService decide when to
call it, and wrap its writes in the same transaction as the Room/Message
writes they belong with.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chat.models import Membership

if TYPE_CHECKING:
    from authentication.models import User
    from chat.models import Room


class MembershipStore:
    """Stateless accessors over the Membership table."""

    @classmethod
    def is_member(cls, user: "User", room_id: int) -> bool:
        return Membership.objects.filter(user=user, room_id=room_id).exists()

    @classmethod
    def add_membership(cls, user: "User", room: "Room") -> Membership:
        """
        Record that the user belongs to the room.

        The (user, room) pair is unique; adding it twice raises IntegrityError.
        """
        return Membership.objects.create(user=user, room=room)

    @classmethod
    def remove_all_for_room(cls, room_id: int) -> int:
        """Delete every membership of the room and return how many were removed."""
        deleted, _ = Membership.objects.filter(room_id=room_id).delete()
        return deleted

    @classmethod
    def room_ids_for_user(cls, user: "User"):
        return Membership.objects.filter(user=user).values_list("room_id", flat=True)
