"""Build the categorized search directory shown in a server's sidebar."""
from __future__ import annotations

from typing import Iterable, Protocol, Sequence
from uuid import UUID

from ..constants import MEMBER_NAME_DISPLAY_LIMIT
from ..models import ChannelType, MemberRole
from ..schemas import DirectoryEntry, DirectoryGroup, ServerDirectory
from .permissions import channel_icon, role_badge

TEXT_CHANNELS_LABEL = "Text Channels"
AUDIO_CHANNELS_LABEL = "Audio Channels"
VIDEO_CHANNELS_LABEL = "Video Channels"
MEMBERS_LABEL = "Members"

_CHANNEL_GROUPS: tuple[tuple[ChannelType, str], ...] = (
    (ChannelType.TEXT, TEXT_CHANNELS_LABEL),
    (ChannelType.AUDIO, AUDIO_CHANNELS_LABEL),
    (ChannelType.VIDEO, VIDEO_CHANNELS_LABEL),
)


class ChannelLike(Protocol):
    id: UUID
    name: str
    type: ChannelType


class ProfileLike(Protocol):
    id: UUID
    name: str


class MemberLike(Protocol):
    id: UUID
    profile_id: UUID
    role: MemberRole
    profile: ProfileLike


def partition_channels(channels: Iterable[ChannelLike]) -> dict[ChannelType, list[ChannelLike]]:
    """Split channels by medium, keeping the incoming order inside each bucket."""

    buckets: dict[ChannelType, list[ChannelLike]] = {channel_type: [] for channel_type in ChannelType}
    for channel in channels:
        buckets[ChannelType(channel.type)].append(channel)
    return buckets


def exclude_viewer(members: Iterable[MemberLike], viewer_id: UUID) -> list[MemberLike]:
    """Drop the viewer's own membership; ``viewer_id`` is the viewer's profile id."""

    return [member for member in members if member.profile_id != viewer_id]


def member_label(name: str) -> str:
    if len(name) > MEMBER_NAME_DISPLAY_LIMIT:
        return f"{name[:MEMBER_NAME_DISPLAY_LIMIT]}..."
    return name


def _channel_entry(channel: ChannelLike) -> DirectoryEntry:
    return DirectoryEntry(id=channel.id, name=channel.name, icon=channel_icon(ChannelType(channel.type)))


def _member_entry(member: MemberLike) -> DirectoryEntry:
    return DirectoryEntry(id=member.id, name=member.profile.name, icon=role_badge(MemberRole(member.role)))


def build_directory(
    channels: Sequence[ChannelLike],
    members: Sequence[MemberLike],
    viewer_id: UUID,
) -> ServerDirectory:
    """Return the four directory groups, always all present and in fixed order."""

    buckets = partition_channels(channels)
    groups = [
        DirectoryGroup(
            label=label,
            type="channel",
            data=[_channel_entry(channel) for channel in buckets[channel_type]],
        )
        for channel_type, label in _CHANNEL_GROUPS
    ]
    groups.append(
        DirectoryGroup(
            label=MEMBERS_LABEL,
            type="member",
            data=[_member_entry(member) for member in exclude_viewer(members, viewer_id)],
        )
    )
    return ServerDirectory(groups=groups)


__all__ = [
    "TEXT_CHANNELS_LABEL",
    "AUDIO_CHANNELS_LABEL",
    "VIDEO_CHANNELS_LABEL",
    "MEMBERS_LABEL",
    "partition_channels",
    "exclude_viewer",
    "member_label",
    "build_directory",
]
