"""Convenience exports for schema layer."""
from .messages import MessageAuthor, MessageEditForm, MessageResponse
from .servers import (
    ChannelResponse,
    DirectoryEntry,
    DirectoryGroup,
    ServerDirectory,
    ServerSidebarResponse,
    SidebarMember,
)

__all__ = [
    "MessageAuthor",
    "MessageEditForm",
    "MessageResponse",
    "ChannelResponse",
    "DirectoryEntry",
    "DirectoryGroup",
    "ServerDirectory",
    "ServerSidebarResponse",
    "SidebarMember",
]
