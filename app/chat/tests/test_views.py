"""
API tests for chat endpoints.

URL Structure:
    /api/v1/chat/rooms/                  GET, POST
    /api/v1/chat/rooms/{id}/             PUT, PATCH, DELETE
    /api/v1/chat/rooms/{id}/messages/    GET, POST
    /api/v1/chat/messages/me/            GET
    /api/v1/chat/messages/{id}/          PUT, PATCH, DELETE
"""

from datetime import timedelta

from django.conf import settings
from django.db import OperationalError
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from chat.models import Message, Room
from chat.services import ChatService
from chat.tests.factories import MessageFactory, RoomFactory


def room_messages_url(room_id):
    return reverse("chat:room-messages", kwargs={"pk": room_id})


def room_url(room_id):
    return reverse("chat:room-detail", kwargs={"pk": room_id})


def message_url(message_id):
    return reverse("chat:message-detail", kwargs={"pk": message_id})


# =============================================================================
# Authentication
# =============================================================================


class TestAuthenticationRequired:
    def test_room_list_requires_token(self, api_client, db):
        response = api_client.get(reverse("chat:room-list"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_invalid_token_is_rejected(self, api_client, db):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")

        response = api_client.get(reverse("chat:room-list"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Rooms
# =============================================================================


class TestRoomList:
    def test_lists_only_my_rooms_in_id_order(self, member_client, member_user, outsider):
        first = RoomFactory.with_members(member_user, name="a")
        RoomFactory.with_members(outsider, name="hidden")
        second = RoomFactory.with_members(member_user, name="b")

        response = member_client.get(reverse("chat:room-list"))

        assert response.status_code == status.HTTP_200_OK
        assert [r["id"] for r in response.data["results"]] == [first.id, second.id]
        assert response.data["results"][0] == {"id": first.id, "name": "a"}


class TestRoomCreate:
    def test_create_room_returns_201(self, member_client, member_user):
        response = member_client.post(reverse("chat:room-list"), {"name": "general"}, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["name"] == "general"
        room = Room.objects.get(id=response.data["id"])
        assert list(room.members.all()) == [member_user]

    def test_blank_name_returns_400(self, member_client):
        response = member_client.post(reverse("chat:room-list"), {"name": "  "}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "VALIDATION_ERROR"

    def test_missing_name_returns_400(self, member_client):
        response = member_client.post(reverse("chat:room-list"), {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestRoomRenameAndDelete:
    def test_member_renames_room(self, member_client, room):
        response = member_client.put(room_url(room.id), {"name": "random"}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"id": room.id, "name": "random"}

    def test_patch_renames_room(self, member_client, room):
        response = member_client.patch(room_url(room.id), {"name": "patched"}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["name"] == "patched"

    def test_outsider_rename_returns_403(self, outsider_client, room):
        response = outsider_client.put(room_url(room.id), {"name": "mine now"}, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "NOT_MEMBER"

    def test_rename_missing_room_returns_404(self, member_client):
        response = member_client.put(room_url(999999), {"name": "x"}, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_any_member_deletes_room(self, second_member_client, shared_room, member_user):
        MessageFactory(room=shared_room, sender=member_user)

        response = second_member_client.delete(room_url(shared_room.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Room.objects.filter(id=shared_room.id).exists()
        assert not Message.objects.filter(room_id=shared_room.id).exists()

    def test_outsider_delete_returns_403(self, outsider_client, room):
        response = outsider_client.delete(room_url(room.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Room.objects.filter(id=room.id).exists()


# =============================================================================
# Room Messages
# =============================================================================


class TestRoomMessages:
    def test_send_message_returns_201(self, member_client, room, member_user):
        response = member_client.post(
            room_messages_url(room.id), {"content": "hello"}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["content"] == "hello"
        assert response.data["sender_id"] == member_user.id
        assert response.data["room_id"] == room.id
        assert response.data["sender_display_name"] == "alice"

    def test_client_supplied_sent_at_is_ignored(self, member_client, room):
        response = member_client.post(
            room_messages_url(room.id),
            {"content": "hello", "sent_at": "2000-01-01T00:00:00Z"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert not response.data["sent_at"].startswith("2000-")

    def test_outsider_send_returns_403(self, outsider_client, room):
        response = outsider_client.post(room_messages_url(room.id), {"content": "hi"}, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Message.objects.count() == 0

    def test_blank_content_returns_400(self, member_client, room):
        response = member_client.post(room_messages_url(room.id), {"content": ""}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["errors"]["content"]

    def test_list_messages_oldest_first(self, member_client, room, member_user):
        now = timezone.now()
        newer = MessageFactory(room=room, sender=member_user, sent_at=now)
        older = MessageFactory(room=room, sender=member_user, sent_at=now - timedelta(minutes=1))

        response = member_client.get(room_messages_url(room.id))

        assert response.status_code == status.HTTP_200_OK
        assert [m["id"] for m in response.data["results"]] == [older.id, newer.id]

    def test_list_messages_paginates_with_cursor(self, member_client, room, member_user):
        for i in range(3):
            MessageFactory(room=room, sender=member_user, content=f"m{i}")

        first_page = member_client.get(room_messages_url(room.id), {"page_size": 2})
        assert len(first_page.data["results"]) == 2
        assert first_page.data["next"] is not None

        second_page = member_client.get(first_page.data["next"])
        assert [m["content"] for m in second_page.data["results"]] == ["m2"]

    def test_outsider_list_returns_403(self, outsider_client, room):
        response = outsider_client.get(room_messages_url(room.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_after_room_deleted_returns_404(self, member_client, room):
        member_client.delete(room_url(room.id))

        response = member_client.get(room_messages_url(room.id))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "ROOM_NOT_FOUND"

    def test_orphaned_message_has_null_sender(self, member_client, room, second_member):
        MessageFactory(room=room, sender=second_member, content="bye")
        second_member.delete()

        response = member_client.get(room_messages_url(room.id))

        message = response.data["results"][0]
        assert message["sender_id"] is None
        assert message["sender_display_name"] is None


# =============================================================================
# My Messages
# =============================================================================


class TestMyMessages:
    def test_lists_my_messages_newest_first(self, member_client, room, shared_room, member_user, second_member):
        now = timezone.now()
        old = MessageFactory(room=room, sender=member_user, sent_at=now - timedelta(hours=1))
        new = MessageFactory(room=shared_room, sender=member_user, sent_at=now)
        MessageFactory(room=shared_room, sender=second_member)

        response = member_client.get(reverse("chat:message-me"))

        assert response.status_code == status.HTTP_200_OK
        assert [m["id"] for m in response.data["results"]] == [new.id, old.id]


# =============================================================================
# Message Edit / Delete
# =============================================================================


class TestMessageEditAndDelete:
    def test_sender_edits_message(self, member_client, room, member_user):
        message = MessageFactory(room=room, sender=member_user, content="hello")

        response = member_client.put(message_url(message.id), {"content": "hello!"}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["content"] == "hello!"
        assert response.data["id"] == message.id

    def test_other_member_edit_returns_403(self, second_member_client, shared_room, member_user):
        message = MessageFactory(room=shared_room, sender=member_user)

        response = second_member_client.patch(
            message_url(message.id), {"content": "edited"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "NOT_SENDER"

    def test_edit_missing_message_returns_404(self, member_client):
        response = member_client.put(message_url(999999), {"content": "x"}, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "MESSAGE_NOT_FOUND"

    def test_sender_deletes_message(self, member_client, room, member_user):
        message = MessageFactory(room=room, sender=member_user)

        response = member_client.delete(message_url(message.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Message.objects.filter(id=message.id).exists()

    def test_other_member_delete_returns_403(self, second_member_client, shared_room, member_user):
        message = MessageFactory(room=shared_room, sender=member_user)

        response = second_member_client.delete(message_url(message.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Message.objects.filter(id=message.id).exists()


# =============================================================================
# Storage Failures and Deadlines
# =============================================================================


class TestStorageFailures:
    def test_create_room_storage_failure_returns_503(self, mocker, member_client):
        mocker.patch.object(ChatService, "atomic", side_effect=OperationalError("timeout"))

        response = member_client.post(reverse("chat:room-list"), {"name": "general"}, format="json")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data["error_code"] == "STORAGE_ERROR"
        assert not Room.objects.exists()

    def test_send_message_storage_failure_returns_503(self, mocker, member_client, room):
        mocker.patch(
            "chat.services.Message.objects.create",
            side_effect=OperationalError("canceling statement due to statement timeout"),
        )

        response = member_client.post(room_messages_url(room.id), {"content": "hi"}, format="json")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data["error_code"] == "STORAGE_ERROR"

    def test_read_failure_returns_503(self, mocker, member_client, room):
        mocker.patch.object(ChatService, "atomic", side_effect=OperationalError("timeout"))

        response = member_client.get(reverse("chat:room-list"))

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data["error_code"] == "STORAGE_ERROR"

    def test_reads_use_configured_deadline(self, mocker, member_client, room):
        atomic = mocker.patch.object(ChatService, "atomic")

        response = member_client.get(room_messages_url(room.id))

        assert response.status_code == status.HTTP_200_OK
        atomic.assert_called_with(timeout_ms=settings.CHAT_STATEMENT_TIMEOUT_MS)
