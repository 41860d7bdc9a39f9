"""Server page routes."""
from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import Member, MemberRole, Profile
from ..schemas import ChannelResponse, ServerSidebarResponse, SidebarMember
from ..services import ServerNotFoundError, get_current_profile, load_server_sidebar, member_label, role_badge

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/servers", tags=["servers"])


def _to_sidebar_member(member: Member) -> SidebarMember:
    name = member.profile.name
    role = MemberRole(member.role)
    return SidebarMember(
        id=member.id,
        profile_id=member.profile_id,
        role=role,
        name=name,
        label=member_label(name),
        image_url=member.profile.image_url,
        icon=role_badge(role),
    )


@router.get("/{server_id}/sidebar", response_model=ServerSidebarResponse)
async def server_sidebar_endpoint(
    server_id: UUID,
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_session),
) -> ServerSidebarResponse | RedirectResponse:
    try:
        sidebar = load_server_sidebar(db, server_id=server_id, profile=current_profile)
    except ServerNotFoundError:
        logger.info("Server %s not found; redirecting profile %s home", server_id, current_profile.id)
        return RedirectResponse(url="/", status_code=307)

    return ServerSidebarResponse(
        id=sidebar.server.id,
        name=sidebar.server.name,
        image_url=sidebar.server.image_url,
        role=sidebar.role,
        text_channels=[ChannelResponse.model_validate(channel) for channel in sidebar.text_channels],
        audio_channels=[ChannelResponse.model_validate(channel) for channel in sidebar.audio_channels],
        video_channels=[ChannelResponse.model_validate(channel) for channel in sidebar.video_channels],
        members=[_to_sidebar_member(member) for member in sidebar.members],
        directory=sidebar.directory,
    )
