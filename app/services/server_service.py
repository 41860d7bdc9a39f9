"""Load everything a server page needs for its sidebar."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import case, select
from sqlalchemy.orm import Session, selectinload

from ..models import Channel, ChannelType, Member, MemberRole, Profile, Server
from ..schemas import ServerDirectory
from .directory import build_directory, exclude_viewer, partition_channels
from .permissions import ROLE_PRECEDENCE

logger = logging.getLogger(__name__)


class ServerNotFoundError(LookupError):
    """Raised when a server page is requested for a server that does not exist."""


@dataclass(frozen=True, slots=True)
class ServerSidebar:
    server: Server
    role: MemberRole | None
    text_channels: list[Channel]
    audio_channels: list[Channel]
    video_channels: list[Channel]
    members: list[Member]
    directory: ServerDirectory


def _role_order():
    return case(ROLE_PRECEDENCE, value=Member.role)


def list_server_channels(db: Session, *, server_id: UUID) -> list[Channel]:
    stmt = select(Channel).where(Channel.server_id == server_id).order_by(Channel.created_at.asc())
    return list(db.scalars(stmt))


def list_server_members(db: Session, *, server_id: UUID) -> list[Member]:
    """Members with their profiles, ordered by role precedence (admins first)."""

    stmt = (
        select(Member)
        .where(Member.server_id == server_id)
        .options(selectinload(Member.profile))
        .order_by(_role_order().asc(), Member.created_at.asc())
    )
    return list(db.scalars(stmt))


def find_member(members: list[Member], profile_id: UUID) -> Member | None:
    for member in members:
        if member.profile_id == profile_id:
            return member
    return None


def load_server_sidebar(db: Session, *, server_id: UUID, profile: Profile) -> ServerSidebar:
    server = db.get(Server, server_id)
    if server is None:
        raise ServerNotFoundError(str(server_id))

    channels = list_server_channels(db, server_id=server_id)
    members = list_server_members(db, server_id=server_id)
    viewer = find_member(members, profile.id)
    if viewer is None:
        logger.info("Profile %s opened server %s without a membership", profile.id, server_id)

    buckets = partition_channels(channels)
    return ServerSidebar(
        server=server,
        role=MemberRole(viewer.role) if viewer is not None else None,
        text_channels=list(buckets[ChannelType.TEXT]),
        audio_channels=list(buckets[ChannelType.AUDIO]),
        video_channels=list(buckets[ChannelType.VIDEO]),
        members=exclude_viewer(members, profile.id),
        directory=build_directory(channels, members, profile.id),
    )


__all__ = [
    "ServerNotFoundError",
    "ServerSidebar",
    "list_server_channels",
    "list_server_members",
    "find_member",
    "load_server_sidebar",
]
