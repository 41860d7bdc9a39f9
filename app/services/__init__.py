"""Convenience exports for service layer."""
from .attachments import AttachmentKind, classify_attachment
from .directory import (
    AUDIO_CHANNELS_LABEL,
    MEMBERS_LABEL,
    TEXT_CHANNELS_LABEL,
    VIDEO_CHANNELS_LABEL,
    build_directory,
    exclude_viewer,
    member_label,
    partition_channels,
)
from .message_events import KeyboardEvents, KeyEvent, MessageUpdateFeed, message_update_feed
from .message_service import delete_message, update_message
from .message_view import (
    DeleteRequested,
    MessageBusyError,
    MessageEditError,
    MessageRender,
    MessageSubmitError,
    MessageValidationError,
    MessageView,
    ViewState,
    conversation_route,
)
from .permissions import (
    MessagePermissions,
    channel_icon,
    compute_permissions,
    outranks,
    role_badge,
    role_precedence,
)
from .profile_service import PROFILE_HEADER, get_current_profile
from .server_service import ServerNotFoundError, ServerSidebar, load_server_sidebar

__all__ = [
    "AttachmentKind",
    "classify_attachment",
    "AUDIO_CHANNELS_LABEL",
    "MEMBERS_LABEL",
    "TEXT_CHANNELS_LABEL",
    "VIDEO_CHANNELS_LABEL",
    "build_directory",
    "exclude_viewer",
    "member_label",
    "partition_channels",
    "KeyboardEvents",
    "KeyEvent",
    "MessageUpdateFeed",
    "message_update_feed",
    "delete_message",
    "update_message",
    "DeleteRequested",
    "MessageBusyError",
    "MessageEditError",
    "MessageRender",
    "MessageSubmitError",
    "MessageValidationError",
    "MessageView",
    "ViewState",
    "conversation_route",
    "MessagePermissions",
    "channel_icon",
    "compute_permissions",
    "outranks",
    "role_badge",
    "role_precedence",
    "PROFILE_HEADER",
    "get_current_profile",
    "ServerNotFoundError",
    "ServerSidebar",
    "load_server_sidebar",
]
