"""Client-side state for a single rendered chat message.

A ``MessageView`` is either VIEWING or EDITING. Entering EDITING needs the
edit permission computed by :mod:`app.services.permissions`; leaving it happens
on Escape, on a successful submit, or whenever a canonical copy of the message
arrives from the update feed (last writer wins, the local draft is dropped).

The view never deletes anything itself: it emits ``DeleteRequested`` for the
owning coordinator, which runs the confirmation flow.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Callable, Mapping, Protocol
from uuid import UUID

from pydantic import ValidationError

from ..constants import DELETED_MESSAGE_TOMBSTONE, EDIT_HINT, MESSAGE_TIMESTAMP_FORMAT
from ..models import MemberRole
from ..schemas import MessageAuthor, MessageEditForm, MessageResponse
from .attachments import AttachmentKind, classify_attachment
from .message_events import KeyboardEvents, KeyEvent, MessageUpdateFeed
from .permissions import MembershipLike, MessagePermissions, compute_permissions, role_badge

logger = logging.getLogger(__name__)

SUBMIT_FAILED_DETAIL = "Could not save your changes. Please try again."


class ViewState(StrEnum):
    VIEWING = "viewing"
    EDITING = "editing"


class MessageEditError(RuntimeError):
    """Base class for failures raised by the inline editor."""


class MessageValidationError(MessageEditError):
    """The draft was rejected before anything was sent."""


class MessageBusyError(MessageEditError):
    """A submit is already in flight for this message."""


class MessageSubmitError(MessageEditError):
    """The update endpoint failed; the editor stays open."""


class MessageUpdater(Protocol):
    async def update(self, api_url: str, query: Mapping[str, str], content: str) -> MessageResponse:
        ...


class Navigator(Protocol):
    def push(self, route: str) -> None:
        ...


@dataclass(frozen=True, slots=True)
class DeleteRequested:
    message_id: UUID
    api_url: str
    query: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class MessageRender:
    message_id: UUID
    author_name: str
    author_role: MemberRole
    role_badge: str | None
    timestamp: str
    attachment: AttachmentKind
    file_url: str | None
    body: str | None
    deleted: bool
    show_edited_marker: bool
    state: ViewState
    draft: str | None
    edit_hint: str | None
    is_submitting: bool
    error: str | None
    permissions: MessagePermissions


def format_timestamp(value: datetime) -> str:
    return value.strftime(MESSAGE_TIMESTAMP_FORMAT)


def conversation_route(server_id: UUID, member_id: UUID) -> str:
    return f"/servers/{server_id}/conversations/{member_id}"


def _not_older(candidate: MessageResponse, current: MessageResponse) -> bool:
    try:
        return candidate.updated_at >= current.updated_at
    except TypeError:
        # naive vs aware timestamps; trust the endpoint
        return True


class MessageView:
    def __init__(
        self,
        message: MessageResponse,
        *,
        viewer: MembershipLike | None,
        server_id: UUID,
        socket_url: str,
        socket_query: Mapping[str, str],
        updater: MessageUpdater,
        keyboard: KeyboardEvents,
        feed: MessageUpdateFeed | None = None,
        navigator: Navigator | None = None,
        on_delete_requested: Callable[[DeleteRequested], None] | None = None,
        author: MessageAuthor | None = None,
    ) -> None:
        resolved_author = author or message.member
        if resolved_author is None:
            raise ValueError("A message view needs the authoring member")
        self.message = message
        self.author = resolved_author
        self.viewer = viewer
        self.server_id = server_id
        self.socket_url = socket_url.rstrip("/")
        self.socket_query = dict(socket_query)
        self.state = ViewState.VIEWING
        self.draft = message.content
        self.is_submitting = False
        self.error: str | None = None
        self._updater = updater
        self._keyboard = keyboard
        self._feed = feed
        self._navigator = navigator
        self._on_delete_requested = on_delete_requested
        self._unsubscribe: Callable[[], None] | None = None
        self._mounted = False

    # lifecycle

    def mount(self) -> None:
        if self._mounted:
            return
        self._keyboard.add_listener(self._handle_key)
        if self._feed is not None:
            self._unsubscribe = self._feed.subscribe(self.message.id, self.apply_external_update)
        self._mounted = True

    def unmount(self) -> None:
        if not self._mounted:
            return
        self._keyboard.remove_listener(self._handle_key)
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._mounted = False

    def __enter__(self) -> MessageView:
        self.mount()
        return self

    def __exit__(self, *_exc: object) -> None:
        self.unmount()

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    # derived values

    @property
    def permissions(self) -> MessagePermissions:
        return compute_permissions(self.viewer, self.message, self.author)

    @property
    def api_url(self) -> str:
        return f"{self.socket_url}/{self.message.id}"

    @property
    def is_editing(self) -> bool:
        return self.state is ViewState.EDITING

    # transitions

    def request_edit(self) -> bool:
        """Open the inline editor; returns False when editing is not allowed."""

        if not self.permissions.can_edit:
            return False
        if self.state is ViewState.EDITING:
            return True
        self.state = ViewState.EDITING
        self.draft = self.message.content
        self.error = None
        return True

    def set_draft(self, content: str) -> None:
        if self.state is not ViewState.EDITING:
            raise MessageEditError("The message is not being edited")
        self.draft = content

    def cancel_edit(self) -> None:
        self._reset(self.message)

    def _handle_key(self, event: KeyEvent) -> None:
        if event.is_escape:
            self.cancel_edit()

    def apply_external_update(self, message: MessageResponse) -> None:
        """Adopt a canonical copy of this message and drop any local draft."""

        if message.id != self.message.id:
            return
        if message.member is not None:
            self.author = message.member
        self._reset(message)

    def _reset(self, message: MessageResponse) -> None:
        self.message = message
        self.state = ViewState.VIEWING
        self.draft = message.content
        self.error = None

    async def submit(self) -> MessageResponse:
        """Send the draft to the update endpoint.

        On success the view returns to VIEWING with the canonical message; on
        failure it stays in EDITING, ``error`` is set and the failure is raised.
        """

        if self.state is not ViewState.EDITING:
            raise MessageEditError("The message is not being edited")
        if self.is_submitting:
            raise MessageBusyError("A save is already in progress")

        try:
            form = MessageEditForm(content=self.draft)
        except ValidationError as exc:
            if (self.draft or "").strip():
                self.error = "Message content is too long"
            else:
                self.error = "Message content cannot be empty"
            raise MessageValidationError(self.error) from exc

        self.is_submitting = True
        self.error = None
        try:
            canonical = await self._updater.update(self.api_url, self.socket_query, form.content)
        except Exception as exc:
            logger.exception("Failed to save edit for message %s", self.message.id)
            # An edit abandoned mid-flight (Escape or a feed update) has no editor to show the error in.
            if self.state is ViewState.EDITING:
                self.error = SUBMIT_FAILED_DETAIL
            raise MessageSubmitError(SUBMIT_FAILED_DETAIL) from exc
        finally:
            self.is_submitting = False

        # The feed may already have delivered something newer during the round trip.
        if _not_older(canonical, self.message):
            self.apply_external_update(canonical)
        else:
            self._reset(self.message)
        return canonical

    def request_delete(self) -> DeleteRequested | None:
        if not self.permissions.can_delete:
            return None
        event = DeleteRequested(message_id=self.message.id, api_url=self.api_url, query=dict(self.socket_query))
        if self._on_delete_requested is not None:
            self._on_delete_requested(event)
        return event

    def member_click(self) -> str | None:
        """Navigate to a direct conversation with the author, unless it is the viewer."""

        if self.viewer is not None and self.viewer.id == self.author.id:
            return None
        route = conversation_route(self.server_id, self.author.id)
        if self._navigator is not None:
            self._navigator.push(route)
        return route

    # rendering

    def render(self) -> MessageRender:
        message = self.message
        deleted = bool(message.deleted)
        editing = self.state is ViewState.EDITING
        file_url = None if deleted else message.file_url
        attachment = classify_attachment(file_url)
        if attachment is not AttachmentKind.NONE or editing:
            body = None
        else:
            body = DELETED_MESSAGE_TOMBSTONE if deleted else message.content
        return MessageRender(
            message_id=message.id,
            author_name=self.author.name,
            author_role=self.author.role,
            role_badge=role_badge(self.author.role),
            timestamp=format_timestamp(message.created_at),
            attachment=attachment,
            file_url=file_url,
            body=body,
            deleted=deleted,
            show_edited_marker=bool(message.updated) and not deleted,
            state=self.state,
            draft=self.draft if editing else None,
            edit_hint=EDIT_HINT if editing else None,
            is_submitting=self.is_submitting,
            error=self.error if editing else None,
            permissions=self.permissions,
        )


__all__ = [
    "SUBMIT_FAILED_DETAIL",
    "ViewState",
    "MessageEditError",
    "MessageValidationError",
    "MessageBusyError",
    "MessageSubmitError",
    "MessageUpdater",
    "Navigator",
    "DeleteRequested",
    "MessageRender",
    "format_timestamp",
    "conversation_route",
    "MessageView",
]
