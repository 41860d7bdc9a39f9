"""Unit tests for the server sidebar directory."""
from __future__ import annotations

import uuid
from types import SimpleNamespace

from app.models import ChannelType, MemberRole
from app.services.directory import (
    AUDIO_CHANNELS_LABEL,
    MEMBERS_LABEL,
    TEXT_CHANNELS_LABEL,
    VIDEO_CHANNELS_LABEL,
    build_directory,
    member_label,
)


def _channel(name: str, channel_type: ChannelType) -> SimpleNamespace:
    return SimpleNamespace(id=uuid.uuid4(), name=name, type=channel_type)


def _member(name: str, role: MemberRole, profile_id: uuid.UUID | None = None) -> SimpleNamespace:
    profile_id = profile_id or uuid.uuid4()
    return SimpleNamespace(
        id=uuid.uuid4(),
        profile_id=profile_id,
        role=role,
        profile=SimpleNamespace(id=profile_id, name=name),
    )


def test_directory_groups_channels_and_excludes_viewer() -> None:
    viewer_profile = uuid.uuid4()
    channels = [
        _channel("general", ChannelType.TEXT),
        _channel("lounge", ChannelType.AUDIO),
        _channel("random", ChannelType.TEXT),
    ]
    members = [
        _member("ada", MemberRole.ADMIN, viewer_profile),
        _member("mod", MemberRole.MODERATOR),
        _member("guest", MemberRole.GUEST),
    ]

    directory = build_directory(channels, members, viewer_profile)

    assert [group.label for group in directory.groups] == [
        TEXT_CHANNELS_LABEL,
        AUDIO_CHANNELS_LABEL,
        VIDEO_CHANNELS_LABEL,
        MEMBERS_LABEL,
    ]
    assert [len(group.data) for group in directory.groups] == [2, 1, 0, 2]
    assert [group.type for group in directory.groups] == ["channel", "channel", "channel", "member"]
    assert [entry.name for entry in directory.group(TEXT_CHANNELS_LABEL).data] == ["general", "random"]
    assert [entry.name for entry in directory.group(MEMBERS_LABEL).data] == ["mod", "guest"]


def test_directory_entries_carry_icons() -> None:
    channels = [_channel("stage", ChannelType.VIDEO)]
    members = [_member("mod", MemberRole.MODERATOR), _member("guest", MemberRole.GUEST)]

    directory = build_directory(channels, members, uuid.uuid4())

    assert directory.group(VIDEO_CHANNELS_LABEL).data[0].icon == "video"
    assert [entry.icon for entry in directory.group(MEMBERS_LABEL).data] == ["shield-check", None]
    assert directory.group(MEMBERS_LABEL).data[0].id == members[0].id


def test_empty_server_still_produces_four_groups() -> None:
    directory = build_directory([], [], uuid.uuid4())

    assert len(directory.groups) == 4
    assert all(group.data == [] for group in directory.groups)


def test_member_order_is_preserved() -> None:
    members = [
        _member("zed", MemberRole.ADMIN),
        _member("amy", MemberRole.MODERATOR),
        _member("bob", MemberRole.GUEST),
    ]

    directory = build_directory([], members, uuid.uuid4())

    assert [entry.name for entry in directory.group(MEMBERS_LABEL).data] == ["zed", "amy", "bob"]


def test_member_label_truncates_long_names() -> None:
    assert member_label("short") == "short"
    assert member_label("a" * 15) == "a" * 15
    assert member_label("abcdefghijklmnopqrst") == "abcdefghijklmno..."
