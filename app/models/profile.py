"""SQLAlchemy ORM model for user profiles (the account behind every membership)."""
from __future__ import annotations

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from app.database import Base
from .base import TimestampMixin, UUIDPrimaryKeyMixin


class Profile(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "profiles"

    user_id = Column(String(191), unique=True, nullable=False, index=True)
    name = Column(String(150), nullable=False)
    image_url = Column(Text, nullable=True)
    email = Column(String(255), nullable=True)

    servers = relationship("Server", back_populates="profile", cascade="all, delete-orphan")
    members = relationship("Member", back_populates="profile", cascade="all, delete-orphan")


__all__ = ["Profile"]
