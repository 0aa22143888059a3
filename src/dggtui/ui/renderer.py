"""Renderer and input view backed by the Textual app.

Hides the details of how dispatcher output reaches the widgets.
The dispatcher runs on a worker thread, so every widget update goes through
call_from_thread unless it is already on the app thread.
"""

import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from ..core.commands import InputView
from ..core.dispatcher import Renderer
from ..events import (
    Ban,
    Broadcast,
    ChatMessage,
    ChatUser,
    ErrorNotice,
    Join,
    Mute,
    Quit,
    SubOnlyToggle,
    Unban,
    Unmute,
)
from . import formatting

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import ChatInputBar, ChatLog, UserList


def call_thread_safe(app: "App | None", func: Any, *args: Any, **kwargs: Any) -> None:
    """Call a function in a thread-safe manner for UI updates."""
    if app is not None and app._thread_id != threading.get_ident():
        app.call_from_thread(func, *args, **kwargs)
    else:
        func(*args, **kwargs)


class TUIRenderer(Renderer):
    """Writes formatted events to the chat log and user list."""

    def __init__(
        self,
        chat_log: "ChatLog",
        user_list: "UserList",
        highlight_terms: Iterable[str] = (),
        app: "App | None" = None,
    ) -> None:
        self.chat_log = chat_log
        self.user_list = user_list
        self.highlight_terms = tuple(highlight_terms)
        self.app = app

    def _write(self, line: str) -> None:
        call_thread_safe(self.app, self.chat_log.add_line, line)

    def render_chat(self, message: ChatMessage) -> None:
        self._write(formatting.format_chat(message, self.highlight_terms))

    def render_error(self, notice: ErrorNotice) -> None:
        self._write(formatting.format_error(notice))

    def render_mute(self, mute: Mute) -> None:
        self._write(formatting.format_mute(mute))

    def render_unmute(self, unmute: Unmute) -> None:
        self._write(formatting.format_unmute(unmute))

    def render_ban(self, ban: Ban) -> None:
        self._write(formatting.format_ban(ban))

    def render_unban(self, unban: Unban) -> None:
        self._write(formatting.format_unban(unban))

    def render_join(self, join: Join) -> None:
        self._write(formatting.format_join(join))

    def render_quit(self, quit: Quit) -> None:
        self._write(formatting.format_quit(quit))

    def render_sub_only(self, toggle: SubOnlyToggle) -> None:
        self._write(formatting.format_sub_only(toggle))

    def render_broadcast(self, broadcast: Broadcast) -> None:
        self._write(formatting.format_broadcast(broadcast))

    def render_users(self, users: Iterable[ChatUser]) -> None:
        call_thread_safe(self.app, self.user_list.set_users, list(users))


class TUIInputView(InputView):
    """InputView over the ChatInputBar; used on the app thread only."""

    def __init__(self, input_bar: "ChatInputBar") -> None:
        self.input_bar = input_bar

    def clear_input(self) -> None:
        self.input_bar.clear()

    def show_input(self, text: str) -> None:
        self.input_bar.set_value(text)
