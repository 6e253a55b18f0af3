"""
Constants and configuration for chat module features.

Import example:
    from chat.constants import MESSAGE_CONFIG, ROOM_CONFIG
"""

from typing import Final


# =============================================================================
# Room Configuration
# =============================================================================


class ROOM_CONFIG:
    """Configuration for room operations."""

    MAX_NAME_LENGTH: Final[int] = 100  # Matches Room.name max_length


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    MAX_CONTENT_LENGTH: Final[int] = 10000  # Characters

    # Page sizes for cursor pagination
    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 100


# =============================================================================
# Error Codes
# =============================================================================


class CHAT_ERRORS:
    """Error codes returned by chat services."""

    VALIDATION_ERROR: Final[str] = "VALIDATION_ERROR"
    ROOM_NOT_FOUND: Final[str] = "ROOM_NOT_FOUND"
    MESSAGE_NOT_FOUND: Final[str] = "MESSAGE_NOT_FOUND"
    NOT_MEMBER: Final[str] = "NOT_MEMBER"
    NOT_SENDER: Final[str] = "NOT_SENDER"
