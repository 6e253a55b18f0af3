"""
Service-level authorization for chat operations.

Two predicates are used, and never substituted for one another:

    Room-scoped access: the caller has a Membership in the room.
        Governs room rename/delete and message listing/sending.
    Message ownership: the caller is the message's sender.
        Governs message edit/delete only. Membership alone is not enough.

Rooms have no owner: any member may rename or delete a room.

Key Components:
    ChatAuthorizationService: Stateless predicates and authorized lookups
    require_room_membership: Decorator for read operations scoped to a room

Error Codes:
    ROOM_NOT_FOUND: Room does not exist
    MESSAGE_NOT_FOUND: Message does not exist
    NOT_MEMBER: Caller has no membership in the room
    NOT_SENDER: Caller did not send the message
    INVALID_REQUEST: Missing required parameters (user or ID)

Usage:
    # Inside a transaction, locking the row
    access = ChatAuthorizationService.authorize_room(user, room_id, lock=True)
    if not access:
        return access
    room = access.data

    # Decorator usage
    class MessageService(BaseService):
        @classmethod
        @require_room_membership()
        def _room_transcript(cls, user, room_id, _room=None):
            return ServiceResult.success(_room.messages.all())
"""

from __future__ import annotations

from functools import wraps
from typing import TYPE_CHECKING, Callable, TypeVar

from chat.constants import CHAT_ERRORS
from chat.membership import MembershipStore
from chat.models import Message, Room
from core.exceptions import NotFoundError, PermissionDeniedError
from core.services import ServiceResult

if TYPE_CHECKING:
    from authentication.models import User


T = TypeVar("T")


class ChatAuthorizationService:
    """
    Stateless authorization checks for chat operations.

    Lookups check existence before access, so a missing room or message is
    reported as not found whatever the caller's rights.
    """

    @classmethod
    def can_access_room(cls, user: "User", room_id: int) -> bool:
        return MembershipStore.is_member(user, room_id)

    @classmethod
    def is_message_sender(cls, user: "User", message: Message) -> bool:
        """Deleted senders (sender=NULL) match no user."""
        return message.is_sent_by(user)

    @classmethod
    def authorize_room(
        cls,
        user: "User",
        room_id: int,
        lock: bool = False,
    ) -> ServiceResult[Room]:
        """
        Fetch a room the user is a member of.

        Args:
            user: Caller
            room_id: Room to fetch
            lock: Take a row lock (SELECT ... FOR UPDATE); only valid inside
                a transaction

        Returns:
            Success with the room, or ROOM_NOT_FOUND / NOT_MEMBER failure
        """
        queryset = Room.objects.select_for_update() if lock else Room.objects.all()
        room = queryset.filter(id=room_id).first()
        if room is None:
            return ServiceResult.from_exception(
                NotFoundError("Room not found", error_code=CHAT_ERRORS.ROOM_NOT_FOUND)
            )

        if not cls.can_access_room(user, room.id):
            return ServiceResult.from_exception(
                PermissionDeniedError(
                    "You are not a member of this room",
                    error_code=CHAT_ERRORS.NOT_MEMBER,
                )
            )

        return ServiceResult.success(room)

    @classmethod
    def authorize_message_sender(
        cls,
        user: "User",
        message_id: int,
        lock: bool = False,
    ) -> ServiceResult[Message]:
        """
        Fetch a message the user sent.

        Returns:
            Success with the message, or MESSAGE_NOT_FOUND / NOT_SENDER failure
        """
        queryset = Message.objects.select_for_update() if lock else Message.objects.all()
        message = queryset.filter(id=message_id).first()
        if message is None:
            return ServiceResult.from_exception(
                NotFoundError("Message not found", error_code=CHAT_ERRORS.MESSAGE_NOT_FOUND)
            )

        if not cls.is_message_sender(user, message):
            return ServiceResult.from_exception(
                PermissionDeniedError(
                    "Only the sender can modify this message",
                    error_code=CHAT_ERRORS.NOT_SENDER,
                )
            )

        return ServiceResult.success(message)


def require_room_membership(
    room_id_param: str = "room_id",
    user_param: str = "user",
) -> Callable:
    """
    Decorator that requires the user to be a member of an existing room.

    Extracts user and room_id from method kwargs. On success, injects the
    room object as the _room kwarg.

    Returns:
        ServiceResult.failure with ROOM_NOT_FOUND if the room doesn't exist
        ServiceResult.failure with NOT_MEMBER if the user isn't a member
        ServiceResult.failure with INVALID_REQUEST if required params missing
    """

    def decorator(
        func: Callable[..., ServiceResult[T]],
    ) -> Callable[..., ServiceResult[T]]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> ServiceResult[T]:
            user = kwargs.get(user_param)
            room_id = kwargs.get(room_id_param)

            if user is None or room_id is None:
                return ServiceResult.failure(
                    "Missing required parameters",
                    error_code="INVALID_REQUEST",
                )

            access = ChatAuthorizationService.authorize_room(user, room_id)
            if not access:
                return access

            kwargs["_room"] = access.data
            return func(*args, **kwargs)

        return wrapper

    return decorator
