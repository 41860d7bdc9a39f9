"""SQLAlchemy ORM model for server memberships."""
from __future__ import annotations

from enum import StrEnum

from sqlalchemy import Column, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base
from .base import TimestampMixin, UUIDPrimaryKeyMixin


class MemberRole(StrEnum):
    ADMIN = "ADMIN"
    MODERATOR = "MODERATOR"
    GUEST = "GUEST"


class Member(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "members"
    __table_args__ = (UniqueConstraint("server_id", "profile_id", name="uq_members_server_profile"),)

    role = Column(Enum(MemberRole, name="member_role"), nullable=False, default=MemberRole.GUEST)
    profile_id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    server_id = Column(UUID(as_uuid=True), ForeignKey("servers.id", ondelete="CASCADE"), nullable=False, index=True)

    profile = relationship("Profile", back_populates="members")
    server = relationship("Server", back_populates="members")
    messages = relationship("Message", back_populates="member", cascade="all, delete-orphan")


__all__ = ["Member", "MemberRole"]
