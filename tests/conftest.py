"""Pytest configuration and shared fixtures."""
from pathlib import Path

import pytest

from dggtui.config import ChatConfig
from dggtui.core.commands import InputView
from dggtui.core.dispatcher import Renderer
from dggtui.errors import SessionError
from dggtui.events import ChatUser, Join, Quit
from dggtui.session.base import ChatSession


class FakeSession(ChatSession):
    """In-process session: tests push events and control the roster."""

    def __init__(self, users=None, fail_send: bool = False) -> None:
        super().__init__()
        self.opened = False
        self.closed = False
        self.sent: list[str] = []
        self.fail_send = fail_send
        if users:
            self._set_users(users)

    def open(self) -> None:
        self.opened = True

    def close(self) -> None:
        self.closed = True

    def send_message(self, text: str) -> None:
        if self.fail_send:
            raise SessionError("not connected")
        self.sent.append(text)

    def emit(self, event) -> None:
        """Deliver an event the way the transport would, roster first."""
        if isinstance(event, (Join, Quit)):
            event = self._apply_presence(event)
        self._emit(event)

    def set_users(self, users) -> None:
        self._set_users(users)


class RecordingRenderer(Renderer):
    """Renderer that records every call as (name, payload)."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def render_chat(self, message):
        self.calls.append(("render_chat", message))

    def render_error(self, notice):
        self.calls.append(("render_error", notice))

    def render_mute(self, mute):
        self.calls.append(("render_mute", mute))

    def render_unmute(self, unmute):
        self.calls.append(("render_unmute", unmute))

    def render_ban(self, ban):
        self.calls.append(("render_ban", ban))

    def render_unban(self, unban):
        self.calls.append(("render_unban", unban))

    def render_join(self, join):
        self.calls.append(("render_join", join))

    def render_quit(self, quit):
        self.calls.append(("render_quit", quit))

    def render_sub_only(self, toggle):
        self.calls.append(("render_sub_only", toggle))

    def render_broadcast(self, broadcast):
        self.calls.append(("render_broadcast", broadcast))

    def render_users(self, users):
        self.calls.append(("render_users", frozenset(users)))


class RecordingView(InputView):
    """InputView that records what the input field would show."""

    def __init__(self) -> None:
        self.text = ""
        self.clears = 0

    def clear_input(self) -> None:
        self.text = ""
        self.clears += 1

    def show_input(self, text: str) -> None:
        self.text = text


@pytest.fixture
def alice():
    return ChatUser(nick="alice", features=("subscriber",))


@pytest.fixture
def bob():
    return ChatUser(nick="bob")


@pytest.fixture
def session(alice, bob):
    """Session that already reports two users."""
    return FakeSession(users=[alice, bob])


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def config():
    return ChatConfig(username="alice", highlighted=["dggtui"], show_join_leave=True)


@pytest.fixture
def config_file(tmp_path) -> Path:
    """Write a valid JSON configuration file."""
    path = tmp_path / "config.json"
    path.write_text(
        '{"dgg_key": "secret", "custom_url": "", "username": "alice", '
        '"highlighted": ["dggtui", "tui"], "showjoinleave": true}'
    )
    return path
