"""Message update/delete routes addressed as ``{MESSAGES_SOCKET_ROUTE}/{message_id}``."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_session
from ..models import Member, Message, Profile
from ..schemas import MessageAuthor, MessageEditForm, MessageResponse
from ..services import delete_message, get_current_profile, message_update_feed, update_message

router = APIRouter(prefix=get_settings().messages_socket_route, tags=["messages"])


def _to_author(member: Member) -> MessageAuthor:
    profile = member.profile
    return MessageAuthor(
        id=member.id,
        profile_id=member.profile_id,
        role=member.role,
        name=profile.name if profile else "",
        image_url=profile.image_url if profile else None,
    )


def _to_message_response(message: Message) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        channel_id=message.channel_id,
        member_id=message.member_id,
        content=message.content,
        file_url=message.file_url,
        deleted=message.deleted,
        updated=message.updated,
        created_at=message.created_at,
        updated_at=message.updated_at,
        member=_to_author(message.member) if message.member is not None else None,
    )


def _publish(response: MessageResponse) -> None:
    message_update_feed.publish(response)


@router.patch("/{message_id}", response_model=MessageResponse)
async def update_message_endpoint(
    message_id: UUID,
    payload: MessageEditForm,
    server_id: UUID | None = Query(default=None, alias="serverId"),
    channel_id: UUID | None = Query(default=None, alias="channelId"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_session),
) -> MessageResponse:
    record = update_message(
        db,
        message_id=message_id,
        profile=current_profile,
        server_id=server_id,
        channel_id=channel_id,
        content=payload.content,
    )
    response = _to_message_response(record)
    _publish(response)
    return response


@router.delete("/{message_id}", response_model=MessageResponse)
async def delete_message_endpoint(
    message_id: UUID,
    server_id: UUID | None = Query(default=None, alias="serverId"),
    channel_id: UUID | None = Query(default=None, alias="channelId"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_session),
) -> MessageResponse:
    record = delete_message(
        db,
        message_id=message_id,
        profile=current_profile,
        server_id=server_id,
        channel_id=channel_id,
    )
    response = _to_message_response(record)
    _publish(response)
    return response
