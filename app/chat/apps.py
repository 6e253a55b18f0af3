"""
Chat application configuration.

This app provides membership-gated chat rooms:
- Rooms created by any user, who becomes the first member
- Messages readable and writable by room members
- Edit and delete restricted to the message sender
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
