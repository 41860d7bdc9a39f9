"""SQLAlchemy ORM model for server channels."""
from __future__ import annotations

from enum import StrEnum

from sqlalchemy import Column, Enum, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base
from .base import TimestampMixin, UUIDPrimaryKeyMixin


class ChannelType(StrEnum):
    TEXT = "TEXT"
    AUDIO = "AUDIO"
    VIDEO = "VIDEO"


class Channel(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "channels"

    name = Column(String(100), nullable=False)
    type = Column(Enum(ChannelType, name="channel_type"), nullable=False, default=ChannelType.TEXT)
    profile_id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    server_id = Column(UUID(as_uuid=True), ForeignKey("servers.id", ondelete="CASCADE"), nullable=False, index=True)

    server = relationship("Server", back_populates="channels")
    messages = relationship("Message", back_populates="channel", cascade="all, delete-orphan")


__all__ = ["Channel", "ChannelType"]
