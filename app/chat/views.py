"""
ViewSets for chat API.

This module provides REST API endpoints for the chat system:
- RoomViewSet: Room list/create/rename/delete and the room transcript
- MessageViewSet: The caller's own messages, message edit and delete

URL Structure:
    /api/v1/chat/rooms/                  GET, POST
    /api/v1/chat/rooms/{id}/             PUT, PATCH, DELETE
    /api/v1/chat/rooms/{id}/messages/    GET, POST
    /api/v1/chat/messages/me/            GET
    /api/v1/chat/messages/{id}/          PUT, PATCH, DELETE

Design Decisions:
    - Views only parse input and render output; membership, ownership and
      text validation live in chat.services so the rules hold for every caller
    - request.user is resolved once by authentication and passed explicitly
      into each service call
    - Service failures map to 400 (validation), 403 (membership/ownership),
      404 (missing room/message) and 503 (storage)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from chat.models import Message, Room
from chat.pagination import (
    MessageCursorPagination,
    RoomCursorPagination,
    SentMessageCursorPagination,
)
from chat.serializers import (
    MessageCreateSerializer,
    MessageEditSerializer,
    MessageSerializer,
    RoomSerializer,
    RoomWriteSerializer,
)
from chat.services import MessageService, RoomService
from core.views import service_error_response

ROOM_ERRORS = {
    400: OpenApiResponse(description="Blank or too long room name"),
    403: OpenApiResponse(description="Not a member of the room"),
    404: OpenApiResponse(description="Room not found"),
}

MESSAGE_ERRORS = {
    400: OpenApiResponse(description="Blank or too long content"),
    403: OpenApiResponse(description="Not the sender of the message"),
    404: OpenApiResponse(description="Message not found"),
}


@extend_schema_view(
    list=extend_schema(
        operation_id="list_rooms",
        summary="List my rooms",
        tags=["Chat - Rooms"],
        responses={200: RoomSerializer(many=True)},
    ),
    create=extend_schema(
        operation_id="create_room",
        summary="Create room",
        description="Create a room. The caller becomes its first member.",
        tags=["Chat - Rooms"],
        request=RoomWriteSerializer,
        responses={201: RoomSerializer, 400: ROOM_ERRORS[400]},
    ),
    update=extend_schema(
        operation_id="rename_room",
        summary="Rename room",
        description="Any member may rename the room.",
        tags=["Chat - Rooms"],
        request=RoomWriteSerializer,
        responses={200: RoomSerializer, **ROOM_ERRORS},
    ),
    partial_update=extend_schema(
        operation_id="rename_room_partial",
        summary="Rename room",
        tags=["Chat - Rooms"],
        request=RoomWriteSerializer,
        responses={200: RoomSerializer, **ROOM_ERRORS},
    ),
    destroy=extend_schema(
        operation_id="delete_room",
        summary="Delete room",
        description=(
            "Any member may delete the room. Deletes all memberships and "
            "all messages in the room."
        ),
        tags=["Chat - Rooms"],
        responses={
            204: None,
            403: ROOM_ERRORS[403],
            404: ROOM_ERRORS[404],
        },
    ),
)
class RoomViewSet(viewsets.GenericViewSet):
    """
    ViewSet for room operations.

    list:
        Rooms the caller belongs to, in id order.

    create:
        Create a room; the caller becomes a member in the same transaction.

    update / partial_update:
        Rename a room. Members only.

    destroy:
        Delete a room with its memberships and messages. Members only.

    messages:
        GET the room transcript (oldest first) or POST a new message.
        Members only.
    """

    permission_classes = [IsAuthenticated]
    pagination_class = RoomCursorPagination
    serializer_class = RoomSerializer
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        """Rooms the current user belongs to."""
        if not self.request.user.is_authenticated:
            return Room.objects.none()
        return RoomService.list_rooms_for_user(self.request.user).data

    def get_serializer_class(self):
        """Return appropriate serializer based on action."""
        if self.action in ("create", "update", "partial_update"):
            return RoomWriteSerializer
        return RoomSerializer

    def list(self, request):
        with RoomService.read_deadline():
            page = self.paginate_queryset(self.get_queryset())
            data = RoomSerializer(page, many=True).data
        return self.get_paginated_response(data)

    def create(self, request):
        serializer = RoomWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = RoomService.create_room(
            user=request.user,
            name=serializer.validated_data["name"],
        )
        if not result.success:
            return service_error_response(result)

        return Response(RoomSerializer(result.data).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        serializer = RoomWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = RoomService.rename_room(
            user=request.user,
            room_id=int(pk),
            name=serializer.validated_data["name"],
        )
        if not result.success:
            return service_error_response(result)

        return Response(RoomSerializer(result.data).data)

    def partial_update(self, request, pk=None):
        # A room has a single writable field, so PATCH behaves like PUT
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        result = RoomService.delete_room(user=request.user, room_id=int(pk))
        if not result.success:
            return service_error_response(result)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        methods=["GET"],
        operation_id="list_room_messages",
        summary="List room messages",
        description="Messages in the room, oldest first. Members only.",
        tags=["Chat - Messages"],
        responses={
            200: MessageSerializer(many=True),
            403: ROOM_ERRORS[403],
            404: ROOM_ERRORS[404],
        },
    )
    @extend_schema(
        methods=["POST"],
        operation_id="send_message",
        summary="Send message",
        description="Post a message to the room. The server sets sent_at. Members only.",
        tags=["Chat - Messages"],
        request=MessageCreateSerializer,
        responses={
            201: MessageSerializer,
            400: MESSAGE_ERRORS[400],
            403: ROOM_ERRORS[403],
            404: ROOM_ERRORS[404],
        },
    )
    @action(
        detail=True,
        methods=["get", "post"],
        pagination_class=MessageCursorPagination,
    )
    def messages(self, request, pk=None):
        """
        GET/POST /api/v1/chat/rooms/{id}/messages/
        """
        if request.method == "POST":
            return self._send_message(request, int(pk))

        result = MessageService.list_room_messages(user=request.user, room_id=int(pk))
        if not result.success:
            return service_error_response(result)

        with MessageService.read_deadline():
            page = self.paginate_queryset(result.data)
            data = MessageSerializer(page, many=True).data
        return self.get_paginated_response(data)

    def _send_message(self, request, room_id):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.send_message(
            user=request.user,
            room_id=room_id,
            content=serializer.validated_data["content"],
        )
        if not result.success:
            return service_error_response(result)

        return Response(MessageSerializer(result.data).data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    update=extend_schema(
        operation_id="edit_message",
        summary="Edit message",
        description="Replace the content of a message you sent. sent_at does not change.",
        tags=["Chat - Messages"],
        request=MessageEditSerializer,
        responses={200: MessageSerializer, **MESSAGE_ERRORS},
    ),
    partial_update=extend_schema(
        operation_id="edit_message_partial",
        summary="Edit message",
        tags=["Chat - Messages"],
        request=MessageEditSerializer,
        responses={200: MessageSerializer, **MESSAGE_ERRORS},
    ),
    destroy=extend_schema(
        operation_id="delete_message",
        summary="Delete message",
        description="Delete a message you sent.",
        tags=["Chat - Messages"],
        responses={
            204: None,
            403: MESSAGE_ERRORS[403],
            404: MESSAGE_ERRORS[404],
        },
    ),
)
class MessageViewSet(viewsets.GenericViewSet):
    """
    ViewSet for operations addressed by message id.

    me:
        The caller's own messages across all rooms, newest first.

    update / partial_update:
        Edit content. Sender only, even for other members of the room.

    destroy:
        Delete the message. Sender only.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = MessageSerializer
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        """Messages sent by the current user."""
        if not self.request.user.is_authenticated:
            return Message.objects.none()
        return MessageService.list_messages_by_sender(self.request.user).data

    def get_serializer_class(self):
        """Return appropriate serializer based on action."""
        if self.action in ("update", "partial_update"):
            return MessageEditSerializer
        return MessageSerializer

    @extend_schema(
        operation_id="list_my_messages",
        summary="List my messages",
        description="Messages you sent in any room, newest first.",
        tags=["Chat - Messages"],
        responses={200: MessageSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], pagination_class=SentMessageCursorPagination)
    def me(self, request):
        """
        GET /api/v1/chat/messages/me/
        """
        with MessageService.read_deadline():
            page = self.paginate_queryset(self.get_queryset())
            data = MessageSerializer(page, many=True).data
        return self.get_paginated_response(data)

    def update(self, request, pk=None):
        serializer = MessageEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.edit_message(
            user=request.user,
            message_id=int(pk),
            content=serializer.validated_data["content"],
        )
        if not result.success:
            return service_error_response(result)

        return Response(MessageSerializer(result.data).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        result = MessageService.delete_message(user=request.user, message_id=int(pk))
        if not result.success:
            return service_error_response(result)

        return Response(status=status.HTTP_204_NO_CONTENT)
