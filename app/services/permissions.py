"""Role policy for chat messages.

Everything here is a pure function of its inputs: the viewer's membership, the
message and the membership that authored it. Memberships are compared by their
server-scoped id, never by the account behind them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from ..models import ChannelType, MemberRole


class MembershipLike(Protocol):
    id: UUID
    role: MemberRole


class MessageLike(Protocol):
    deleted: bool
    file_url: str | None


@dataclass(frozen=True, slots=True)
class MessagePermissions:
    can_edit: bool = False
    can_delete: bool = False

    @property
    def shows_actions(self) -> bool:
        return self.can_edit or self.can_delete


NO_PERMISSIONS = MessagePermissions()

# "Role ascending" ordering used when listing members.
ROLE_PRECEDENCE: dict[MemberRole, int] = {
    MemberRole.ADMIN: 0,
    MemberRole.MODERATOR: 1,
    MemberRole.GUEST: 2,
}

MODERATION_ROLES = frozenset({MemberRole.ADMIN, MemberRole.MODERATOR})

ROLE_BADGES: dict[MemberRole, str | None] = {
    MemberRole.GUEST: None,
    MemberRole.MODERATOR: "shield-check",
    MemberRole.ADMIN: "shield-alert",
}

CHANNEL_ICONS: dict[ChannelType, str] = {
    ChannelType.TEXT: "hash",
    ChannelType.AUDIO: "mic",
    ChannelType.VIDEO: "video",
}


def role_precedence(role: MemberRole) -> int:
    return ROLE_PRECEDENCE[role]


def outranks(role: MemberRole, other: MemberRole) -> bool:
    """Return True when ``role`` sits strictly above ``other``."""

    return role_precedence(role) < role_precedence(other)


def role_badge(role: MemberRole) -> str | None:
    """Icon shown next to a member's name. Guests carry no badge."""

    return ROLE_BADGES[role]


def channel_icon(channel_type: ChannelType) -> str:
    return CHANNEL_ICONS[channel_type]


def is_author(viewer: MembershipLike | None, author: MembershipLike | None) -> bool:
    if viewer is None or author is None:
        return False
    return viewer.id == author.id


def compute_permissions(
    viewer: MembershipLike | None,
    message: MessageLike,
    author: MembershipLike | None,
) -> MessagePermissions:
    """Decide whether ``viewer`` may edit or delete ``message``.

    A viewer that is not a member of the server (``None``) gets no privileged
    actions at all. Deletion is open to admins, moderators and the author;
    editing is author-only and limited to messages without an attachment.
    """

    if viewer is None or bool(message.deleted):
        return NO_PERMISSIONS

    owns_message = is_author(viewer, author)
    can_delete = viewer.role in MODERATION_ROLES or owns_message
    can_edit = owns_message and not message.file_url
    return MessagePermissions(can_edit=can_edit, can_delete=can_delete)


__all__ = [
    "MembershipLike",
    "MessageLike",
    "MessagePermissions",
    "NO_PERMISSIONS",
    "ROLE_PRECEDENCE",
    "MODERATION_ROLES",
    "ROLE_BADGES",
    "CHANNEL_ICONS",
    "role_precedence",
    "outranks",
    "role_badge",
    "channel_icon",
    "is_author",
    "compute_permissions",
]
