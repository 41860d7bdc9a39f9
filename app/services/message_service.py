"""Server side of the message update and delete endpoints."""
from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..constants import DELETED_MESSAGE_TOMBSTONE
from ..models import Channel, Member, Message, Profile, Server
from .permissions import MessagePermissions, compute_permissions

logger = logging.getLogger(__name__)


def _require_context(server_id: UUID | None, channel_id: UUID | None) -> tuple[UUID, UUID]:
    if server_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Server ID missing")
    if channel_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Channel ID missing")
    return server_id, channel_id


def _load_message_context(
    db: Session,
    *,
    message_id: UUID,
    profile: Profile,
    server_id: UUID | None,
    channel_id: UUID | None,
) -> tuple[Member, Message, MessagePermissions]:
    server_uuid, channel_uuid = _require_context(server_id, channel_id)

    server = db.scalar(
        select(Server).where(Server.id == server_uuid, Server.members.any(Member.profile_id == profile.id))
    )
    if server is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Server not found")

    channel = db.scalar(select(Channel).where(Channel.id == channel_uuid, Channel.server_id == server_uuid))
    if channel is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Channel not found")

    viewer = db.scalar(select(Member).where(Member.server_id == server_uuid, Member.profile_id == profile.id))
    if viewer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")

    message = db.scalar(
        select(Message)
        .where(Message.id == message_id, Message.channel_id == channel_uuid)
        .options(selectinload(Message.member).selectinload(Member.profile))
    )
    if message is None or message.deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")

    return viewer, message, compute_permissions(viewer, message, message.member)


def _commit(db: Session, message: Message, *, failure_detail: str) -> Message:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("%s | message=%s", failure_detail, message.id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_detail) from exc
    db.refresh(message)
    return message


def update_message(
    db: Session,
    *,
    message_id: UUID,
    profile: Profile,
    server_id: UUID | None,
    channel_id: UUID | None,
    content: str,
) -> Message:
    """Replace the text of a message the requester authored.

    Resubmitting identical content leaves the record untouched.
    """

    _viewer, message, permissions = _load_message_context(
        db,
        message_id=message_id,
        profile=profile,
        server_id=server_id,
        channel_id=channel_id,
    )
    if not permissions.can_edit:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only edit your own text messages")

    if message.content == content:
        return message

    setattr(message, "content", content)
    setattr(message, "updated", True)
    return _commit(db, message, failure_detail="Failed to update message")


def delete_message(
    db: Session,
    *,
    message_id: UUID,
    profile: Profile,
    server_id: UUID | None,
    channel_id: UUID | None,
) -> Message:
    """Tombstone a message: the text is replaced and the attachment dropped."""

    viewer, message, permissions = _load_message_context(
        db,
        message_id=message_id,
        profile=profile,
        server_id=server_id,
        channel_id=channel_id,
    )
    if not permissions.can_delete:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You cannot delete this message")

    setattr(message, "deleted", True)
    setattr(message, "content", DELETED_MESSAGE_TOMBSTONE)
    setattr(message, "file_url", None)
    deleted = _commit(db, message, failure_detail="Failed to delete message")
    logger.info("Message %s deleted by member %s (%s)", message.id, viewer.id, viewer.role)
    return deleted


__all__ = ["update_message", "delete_message"]
