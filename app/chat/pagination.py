"""
Pagination classes for chat API.

This module provides cursor-based pagination for the chat system:
- RoomCursorPagination: Room lists, in id order
- MessageCursorPagination: Room transcripts (oldest first)
- SentMessageCursorPagination: Personal history (newest first)

Cursor-based pagination keeps pages stable while new messages arrive.
Orderings repeat the (sent_at, id) tie-break used by the services.
"""

from rest_framework.pagination import CursorPagination

from chat.constants import MESSAGE_CONFIG


class RoomCursorPagination(CursorPagination):
    """
    Cursor pagination for room lists.

    Default: 20 rooms per page
    Maximum: 50 rooms per page
    """

    page_size = 20
    max_page_size = 50
    page_size_query_param = "page_size"
    ordering = ("id",)
    cursor_query_param = "cursor"


class MessageCursorPagination(CursorPagination):
    """
    Cursor pagination for room transcripts, oldest first.

    Query parameters:
        cursor: Encoded cursor for position
        page_size: Number of messages (optional override)
    """

    page_size = MESSAGE_CONFIG.DEFAULT_PAGE_SIZE
    max_page_size = MESSAGE_CONFIG.MAX_PAGE_SIZE
    page_size_query_param = "page_size"
    ordering = ("sent_at", "id")
    cursor_query_param = "cursor"


class SentMessageCursorPagination(MessageCursorPagination):
    """Cursor pagination for the caller's own messages, newest first."""

    ordering = ("-sent_at", "-id")
