"""Tests for the per-message view state machine."""
from __future__ import annotations

import asyncio
import uuid
from datetime import datetime, timedelta, timezone
from typing import Mapping

import pytest

from app.clients import MessageUpdateError
from app.constants import DELETED_MESSAGE_TOMBSTONE, EDIT_HINT
from app.models import MemberRole
from app.schemas import MessageAuthor, MessageResponse
from app.services.attachments import AttachmentKind
from app.services.message_events import KeyboardEvents, KeyEvent, MessageUpdateFeed
from app.services.message_view import (
    SUBMIT_FAILED_DETAIL,
    DeleteRequested,
    MessageBusyError,
    MessageSubmitError,
    MessageValidationError,
    MessageView,
    ViewState,
)

SOCKET_URL = "/api/socket/messages"
CREATED = datetime(2026, 10, 18, 9, 30)


class FakeUpdater:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, str], str]] = []
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.edited_marker = True
        self.updated_at: datetime | None = None

    async def update(self, api_url: str, query: Mapping[str, str], content: str) -> MessageResponse:
        self.calls.append((api_url, dict(query), content))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        message_id = uuid.UUID(api_url.rsplit("/", 1)[-1])
        return _message(
            id=message_id,
            content=content,
            updated=self.edited_marker,
            updated_at=self.updated_at or CREATED + timedelta(minutes=len(self.calls)),
        )


class RecordingNavigator:
    def __init__(self) -> None:
        self.routes: list[str] = []

    def push(self, route: str) -> None:
        self.routes.append(route)


AUTHOR = MessageAuthor(
    id=uuid.uuid4(),
    profile_id=uuid.uuid4(),
    role=MemberRole.GUEST,
    name="Grace",
    image_url=None,
)
MESSAGE_ID = uuid.uuid4()
CHANNEL_ID = uuid.uuid4()
SERVER_ID = uuid.uuid4()


def _message(**overrides: object) -> MessageResponse:
    data: dict[str, object] = {
        "id": MESSAGE_ID,
        "channel_id": CHANNEL_ID,
        "member_id": AUTHOR.id,
        "content": "hello there",
        "file_url": None,
        "deleted": False,
        "updated": False,
        "created_at": CREATED,
        "updated_at": CREATED,
        "member": AUTHOR,
    }
    data.update(overrides)
    return MessageResponse.model_validate(data)


def _viewer(role: MemberRole = MemberRole.GUEST) -> MessageAuthor:
    return AUTHOR.model_copy(update={"id": uuid.uuid4(), "profile_id": uuid.uuid4(), "role": role, "name": "Viewer"})


@pytest.fixture
def keyboard() -> KeyboardEvents:
    return KeyboardEvents()


@pytest.fixture
def feed() -> MessageUpdateFeed:
    return MessageUpdateFeed()


@pytest.fixture
def updater() -> FakeUpdater:
    return FakeUpdater()


@pytest.fixture
def make_view(keyboard: KeyboardEvents, feed: MessageUpdateFeed, updater: FakeUpdater):
    created: list[MessageView] = []

    def _factory(message: MessageResponse | None = None, viewer=AUTHOR, **kwargs) -> MessageView:
        view = MessageView(
            message or _message(),
            viewer=viewer,
            server_id=SERVER_ID,
            socket_url=SOCKET_URL,
            socket_query={"serverId": str(SERVER_ID), "channelId": str(CHANNEL_ID)},
            updater=updater,
            keyboard=keyboard,
            feed=feed,
            **kwargs,
        )
        view.mount()
        created.append(view)
        return view

    yield _factory
    for view in created:
        view.unmount()


def test_starts_viewing_and_enters_editing_with_seeded_draft(make_view) -> None:
    view = make_view()

    assert view.state is ViewState.VIEWING
    assert view.request_edit() is True
    assert view.state is ViewState.EDITING
    assert view.draft == "hello there"
    assert view.render().draft == "hello there"
    assert view.render().body is None
    assert view.render().edit_hint == EDIT_HINT


def test_edit_hint_hidden_while_viewing(make_view) -> None:
    view = make_view()

    assert view.render().edit_hint is None
    assert view.render().draft is None


def test_edit_request_without_permission_is_ignored(make_view) -> None:
    view = make_view(viewer=_viewer(MemberRole.ADMIN))

    assert view.request_edit() is False
    assert view.state is ViewState.VIEWING


def test_attachment_and_deleted_messages_never_enter_editing(make_view) -> None:
    with_file = make_view(_message(file_url="https://cdn.test/cat.png"))
    deleted = make_view(_message(id=uuid.uuid4(), deleted=True, content=DELETED_MESSAGE_TOMBSTONE))

    assert with_file.request_edit() is False
    assert deleted.request_edit() is False
    assert with_file.state is ViewState.VIEWING
    assert deleted.state is ViewState.VIEWING


def test_escape_discards_the_draft(make_view, keyboard: KeyboardEvents) -> None:
    view = make_view()
    view.request_edit()
    view.set_draft("half-typed thought")

    keyboard.dispatch(KeyEvent(key="Escape"))

    assert view.state is ViewState.VIEWING
    assert view.draft == "hello there"
    assert view.render().body == "hello there"


def test_escape_key_code_is_recognised(make_view, keyboard: KeyboardEvents) -> None:
    view = make_view()
    view.request_edit()

    keyboard.dispatch(KeyEvent(key="Esc", key_code=27))

    assert view.state is ViewState.VIEWING


def test_other_keys_do_not_cancel(make_view, keyboard: KeyboardEvents) -> None:
    view = make_view()
    view.request_edit()

    keyboard.dispatch(KeyEvent(key="Enter", key_code=13))

    assert view.state is ViewState.EDITING


def test_successful_submit_returns_to_viewing(make_view, updater: FakeUpdater) -> None:
    view = make_view()
    view.request_edit()
    view.set_draft("  hello everyone  ")

    canonical = asyncio.run(view.submit())

    assert updater.calls == [
        (
            f"{SOCKET_URL}/{MESSAGE_ID}",
            {"serverId": str(SERVER_ID), "channelId": str(CHANNEL_ID)},
            "hello everyone",
        )
    ]
    assert canonical.content == "hello everyone"
    assert view.state is ViewState.VIEWING
    rendered = view.render()
    assert rendered.body == "hello everyone"
    assert rendered.show_edited_marker is True
    assert rendered.error is None


def test_submitting_identical_content_twice_is_stable(make_view, updater: FakeUpdater) -> None:
    updater.edited_marker = False
    view = make_view()

    view.request_edit()
    asyncio.run(view.submit())
    first = view.render()
    view.request_edit()
    asyncio.run(view.submit())
    second = view.render()

    assert view.state is ViewState.VIEWING
    assert first.body == second.body == "hello there"
    assert first.show_edited_marker == second.show_edited_marker is False


def test_failed_submit_keeps_editing_and_surfaces_error(make_view, updater: FakeUpdater) -> None:
    updater.error = MessageUpdateError("boom", status_code=500)
    view = make_view()
    view.request_edit()
    view.set_draft("new words")

    with pytest.raises(MessageSubmitError):
        asyncio.run(view.submit())

    assert view.state is ViewState.EDITING
    assert view.draft == "new words"
    assert view.error == SUBMIT_FAILED_DETAIL
    assert view.render().error == SUBMIT_FAILED_DETAIL
    assert view.is_submitting is False


def test_unexpected_updater_failure_is_surfaced(make_view, updater: FakeUpdater) -> None:
    updater.error = ConnectionError("net down")
    view = make_view()
    view.request_edit()
    view.set_draft("new words")

    with pytest.raises(MessageSubmitError) as excinfo:
        asyncio.run(view.submit())

    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert view.state is ViewState.EDITING
    assert view.draft == "new words"
    assert view.render().error == SUBMIT_FAILED_DETAIL
    assert view.is_submitting is False


def test_failure_after_escape_leaves_no_stale_error(make_view, updater: FakeUpdater, keyboard: KeyboardEvents) -> None:
    updater.error = MessageUpdateError("boom", status_code=503)
    view = make_view()
    view.request_edit()
    view.set_draft("abandoned")

    async def scenario() -> None:
        updater.gate = asyncio.Event()
        pending = asyncio.create_task(view.submit())
        await asyncio.sleep(0)
        keyboard.dispatch(KeyEvent(key="Escape"))
        updater.gate.set()
        with pytest.raises(MessageSubmitError):
            await pending

    asyncio.run(scenario())

    assert view.state is ViewState.VIEWING
    assert view.error is None
    assert view.render().error is None
    assert view.render().body == "hello there"


def test_newer_feed_update_wins_over_in_flight_response(
    make_view, updater: FakeUpdater, feed: MessageUpdateFeed
) -> None:
    view = make_view()
    view.request_edit()
    view.set_draft("local edit")

    async def scenario() -> MessageResponse:
        updater.gate = asyncio.Event()
        pending = asyncio.create_task(view.submit())
        await asyncio.sleep(0)
        feed.publish(_message(content="remote newer", updated=True, updated_at=CREATED + timedelta(days=1)))
        updater.gate.set()
        return await pending

    response = asyncio.run(scenario())

    assert response.content == "local edit"
    assert view.state is ViewState.VIEWING
    assert view.message.content == "remote newer"
    assert view.render().body == "remote newer"


def test_response_with_incomparable_timestamp_is_adopted(make_view, updater: FakeUpdater) -> None:
    updater.updated_at = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)
    view = make_view()
    view.request_edit()
    view.set_draft("aware clock")

    asyncio.run(view.submit())

    assert view.state is ViewState.VIEWING
    assert view.render().body == "aware clock"


def test_empty_draft_is_rejected_before_submission(make_view, updater: FakeUpdater) -> None:
    view = make_view()
    view.request_edit()
    view.set_draft("   ")

    with pytest.raises(MessageValidationError):
        asyncio.run(view.submit())

    assert updater.calls == []
    assert view.state is ViewState.EDITING
    assert view.error


def test_double_submit_is_refused_while_in_flight(make_view, updater: FakeUpdater) -> None:
    view = make_view()
    view.request_edit()
    view.set_draft("once")

    async def scenario() -> None:
        updater.gate = asyncio.Event()
        first = asyncio.create_task(view.submit())
        await asyncio.sleep(0)
        assert view.is_submitting is True
        assert view.render().is_submitting is True
        with pytest.raises(MessageBusyError):
            await view.submit()
        updater.gate.set()
        await first

    asyncio.run(scenario())

    assert len(updater.calls) == 1
    assert view.state is ViewState.VIEWING


def test_external_update_forces_viewing_and_replaces_draft(make_view, feed: MessageUpdateFeed) -> None:
    view = make_view()
    view.request_edit()
    view.set_draft("my unsaved local text")

    feed.publish(_message(content="edited elsewhere", updated=True, updated_at=CREATED + timedelta(hours=1)))

    assert view.state is ViewState.VIEWING
    assert view.draft == "edited elsewhere"
    assert view.render().body == "edited elsewhere"
    assert view.render().show_edited_marker is True


def test_external_delete_shows_tombstone(make_view, feed: MessageUpdateFeed) -> None:
    view = make_view(viewer=_viewer(MemberRole.MODERATOR))

    feed.publish(_message(content=DELETED_MESSAGE_TOMBSTONE, deleted=True))

    rendered = view.render()
    assert rendered.body == DELETED_MESSAGE_TOMBSTONE
    assert rendered.deleted is True
    assert rendered.show_edited_marker is False
    assert rendered.permissions.can_delete is False


def test_listeners_are_released_on_unmount(make_view, keyboard: KeyboardEvents, feed: MessageUpdateFeed) -> None:
    view = make_view()
    assert keyboard.listener_count == 1
    assert feed.subscriber_count(MESSAGE_ID) == 1

    view.unmount()
    view.unmount()

    assert keyboard.listener_count == 0
    assert feed.subscriber_count(MESSAGE_ID) == 0
    view.request_edit()
    keyboard.dispatch(KeyEvent(key="Escape"))
    assert view.state is ViewState.EDITING


def test_delete_request_is_emitted_to_the_coordinator(make_view) -> None:
    events: list[DeleteRequested] = []
    view = make_view(viewer=_viewer(MemberRole.MODERATOR), on_delete_requested=events.append)

    event = view.request_delete()

    assert events == [event]
    assert event is not None
    assert event.api_url == f"{SOCKET_URL}/{MESSAGE_ID}"
    assert event.query == {"serverId": str(SERVER_ID), "channelId": str(CHANNEL_ID)}


def test_guest_cannot_request_delete_of_others_message(make_view) -> None:
    events: list[DeleteRequested] = []
    view = make_view(viewer=_viewer(MemberRole.GUEST), on_delete_requested=events.append)

    assert view.request_delete() is None
    assert events == []


def test_member_click_navigates_to_conversation(make_view) -> None:
    navigator = RecordingNavigator()
    view = make_view(viewer=_viewer(), navigator=navigator)

    route = view.member_click()

    assert route == f"/servers/{SERVER_ID}/conversations/{AUTHOR.id}"
    assert navigator.routes == [route]


def test_clicking_yourself_does_nothing(make_view) -> None:
    navigator = RecordingNavigator()
    view = make_view(navigator=navigator)

    assert view.member_click() is None
    assert navigator.routes == []


def test_render_classifies_attachments(make_view) -> None:
    pdf = make_view(_message(file_url="https://cdn.test/handbook.pdf")).render()
    image = make_view(_message(id=uuid.uuid4(), file_url="https://cdn.test/cat.png")).render()

    assert pdf.attachment is AttachmentKind.DOCUMENT
    assert image.attachment is AttachmentKind.IMAGE
    assert pdf.body is None
    assert pdf.timestamp == "18 Oct 2026, 09:30"
    assert pdf.role_badge is None
    assert pdf.author_name == "Grace"
