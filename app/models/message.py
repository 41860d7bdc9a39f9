"""SQLAlchemy ORM model for channel messages."""
from __future__ import annotations

from sqlalchemy import Boolean, Column, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from app.database import Base
from .base import TimestampMixin, UUIDPrimaryKeyMixin


class Message(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "messages"

    content = Column(Text, nullable=False)
    file_url = Column(Text, nullable=True)
    member_id = Column(UUID(as_uuid=True), ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    channel_id = Column(UUID(as_uuid=True), ForeignKey("channels.id", ondelete="CASCADE"), nullable=False, index=True)
    deleted = Column(Boolean, nullable=False, server_default=expression.false(), default=False)
    updated = Column(Boolean, nullable=False, server_default=expression.false(), default=False)

    member = relationship("Member", back_populates="messages")
    channel = relationship("Channel", back_populates="messages")


__all__ = ["Message"]
