"""
Chat app for room-based messaging.

This app handles:
- Rooms and their memberships
- Message sending, history, editing and deletion
- Authorization: membership for room access, sender for message changes

Related apps:
    - authentication: User model and JWT identity

Usage:
    from chat.services import MessageService, RoomService

    room = RoomService.create_room(user=user, name="general").data

    MessageService.send_message(
        user=user,
        room_id=room.id,
        content="Hello!",
    )
"""
