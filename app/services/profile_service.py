"""Resolve the viewer's profile handed over by the external auth layer."""
from __future__ import annotations

from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import Profile

PROFILE_HEADER = "X-Profile-Id"


def get_profile(db: Session, profile_id: UUID) -> Profile | None:
    return db.get(Profile, profile_id)


async def get_current_profile(
    profile_id: str | None = Header(default=None, alias=PROFILE_HEADER),
    db: Session = Depends(get_session),
) -> Profile:
    """FastAPI dependency returning the signed-in profile or raising 401."""

    if not profile_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    try:
        profile_uuid = UUID(profile_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized") from exc

    profile = get_profile(db, profile_uuid)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return profile


__all__ = ["PROFILE_HEADER", "get_profile", "get_current_profile"]
