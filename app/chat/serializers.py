"""
Serializers for chat API.

Input serializers only check request shape; blank/oversized text,
membership and ownership are enforced by the chat services so every
caller of the services gets the same rules.

Output serializers:
    RoomSerializer: id, name
    MessageSerializer: id, room_id, sender_id, sender_display_name, content, sent_at
"""

from rest_framework import serializers

from chat.models import Message, Room


class RoomSerializer(serializers.ModelSerializer):
    """Room representation."""

    class Meta:
        model = Room
        fields = ["id", "name"]
        read_only_fields = fields


class RoomWriteSerializer(serializers.Serializer):
    """Input for creating or renaming a room."""

    name = serializers.CharField(allow_blank=True, trim_whitespace=False)


class MessageSerializer(serializers.ModelSerializer):
    """
    Message representation.

    sender_id and sender_display_name are null once the sender's account
    has been deleted.
    """

    room_id = serializers.IntegerField(read_only=True)
    sender_id = serializers.IntegerField(read_only=True, allow_null=True)
    sender_display_name = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = [
            "id",
            "room_id",
            "sender_id",
            "sender_display_name",
            "content",
            "sent_at",
        ]
        read_only_fields = fields

    def get_sender_display_name(self, obj) -> str | None:
        if obj.sender is None:
            return None
        return obj.sender.display_name


class MessageCreateSerializer(serializers.Serializer):
    """
    Input for sending a message.

    Only content is accepted. Timestamps and sender come from the server.
    """

    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class MessageEditSerializer(serializers.Serializer):
    """Input for editing a message's content."""

    content = serializers.CharField(allow_blank=True, trim_whitespace=False)
