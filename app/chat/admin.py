"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Room management with inline memberships
- Message moderation
"""

from django.contrib import admin

from chat.models import Membership, Message, Room


class MembershipInline(admin.TabularInline):
    """Inline display of memberships in room admin."""

    model = Membership
    extra = 0
    readonly_fields = ["joined_at"]
    raw_id_fields = ["user"]


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    """Admin interface for Room model."""

    list_display = ["id", "name", "created_at", "updated_at"]
    search_fields = ["name", "id"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [MembershipInline]
    ordering = ["id"]


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    """Admin interface for Membership model."""

    list_display = ["id", "room", "user", "joined_at"]
    raw_id_fields = ["room", "user"]
    readonly_fields = ["joined_at"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = ["id", "room", "sender", "content_preview", "sent_at"]
    list_filter = ["sent_at"]
    search_fields = ["content", "sender__email"]
    raw_id_fields = ["room", "sender"]
    readonly_fields = ["sent_at", "created_at", "updated_at"]
    ordering = ["-sent_at", "-id"]

    @admin.display(description="Content")
    def content_preview(self, obj):
        return obj.content[:50] + "..." if len(obj.content) > 50 else obj.content
