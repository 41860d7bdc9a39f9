"""Schemas used by the server sidebar and its search directory."""
from __future__ import annotations

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..models import ChannelType, MemberRole


class DirectoryEntry(BaseModel):
    id: UUID
    name: str
    icon: str | None = None


class DirectoryGroup(BaseModel):
    label: str
    type: Literal["channel", "member"]
    data: list[DirectoryEntry] = Field(default_factory=list)


class ServerDirectory(BaseModel):
    groups: list[DirectoryGroup]

    def group(self, label: str) -> DirectoryGroup:
        for candidate in self.groups:
            if candidate.label == label:
                return candidate
        raise KeyError(label)


class ChannelResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    type: ChannelType


class SidebarMember(BaseModel):
    id: UUID
    profile_id: UUID
    role: MemberRole
    name: str
    label: str
    image_url: str | None = None
    icon: str | None = None


class ServerSidebarResponse(BaseModel):
    id: UUID
    name: str
    image_url: str | None = None
    role: MemberRole | None = None
    text_channels: list[ChannelResponse]
    audio_channels: list[ChannelResponse]
    video_channels: list[ChannelResponse]
    members: list[SidebarMember]
    directory: ServerDirectory


__all__ = [
    "DirectoryEntry",
    "DirectoryGroup",
    "ServerDirectory",
    "ChannelResponse",
    "SidebarMember",
    "ServerSidebarResponse",
]
