"""SQLAlchemy ORM model for chat servers."""
from __future__ import annotations

import secrets

from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base
from .base import TimestampMixin, UUIDPrimaryKeyMixin


def _generate_invite_code() -> str:
    return secrets.token_urlsafe(12)


class Server(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "servers"

    name = Column(String(120), nullable=False)
    image_url = Column(Text, nullable=True)
    invite_code = Column(String(64), nullable=False, unique=True, default=_generate_invite_code)
    profile_id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    profile = relationship("Profile", back_populates="servers")
    channels = relationship("Channel", back_populates="server", cascade="all, delete-orphan")
    members = relationship("Member", back_populates="server", cascade="all, delete-orphan")


__all__ = ["Server"]
