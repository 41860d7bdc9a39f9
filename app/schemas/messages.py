"""Schemas used by messaging endpoints and the inline message editor."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import MemberRole


class MessageEditForm(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)

    @field_validator("content", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


class MessageAuthor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    profile_id: UUID
    role: MemberRole
    name: str
    image_url: str | None = None


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    channel_id: UUID
    member_id: UUID
    content: str
    file_url: str | None = None
    deleted: bool = False
    updated: bool = False
    created_at: datetime
    updated_at: datetime
    member: MessageAuthor | None = None


__all__ = [
    "MessageEditForm",
    "MessageAuthor",
    "MessageResponse",
]
