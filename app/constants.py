"""Project-wide constant values."""
from __future__ import annotations

DELETED_MESSAGE_TOMBSTONE = "This message has been deleted."

MESSAGE_TIMESTAMP_FORMAT = "%d %b %Y, %H:%M"

EDIT_HINT = "Press escape to cancel, enter to save"

MEMBER_NAME_DISPLAY_LIMIT = 15

__all__ = [
    "DELETED_MESSAGE_TOMBSTONE",
    "MESSAGE_TIMESTAMP_FORMAT",
    "EDIT_HINT",
    "MEMBER_NAME_DISPLAY_LIMIT",
]
