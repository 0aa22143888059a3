"""Abstract chat session.

This module hides the design decision of how the client talks to the chat
service. The rest of the client only sees:
- one handler registration per event kind
- a synchronous roster query
- a synchronous send of an outbound chat line
- an open/close lifecycle

Hidden design decisions:
- Transport, framing and authentication
- Which thread handlers are invoked from
- How the roster is tracked between NAMES/JOIN/QUIT updates
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import replace

from ..events import ChatUser, Event, EventKind, Join, Quit

EventHandler = Callable[[Event], None]


class ChatSession(ABC):
    """Base class for chat sessions.

    Subclasses implement the transport and call `_emit` for every decoded
    notification, `_set_users` whenever the server reports the roster, and
    `_apply_presence` on Join/Quit before emitting them.
    Handlers may be invoked from the session's own thread.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventKind, list[EventHandler]] = {kind: [] for kind in EventKind}
        self._handlers_lock = threading.Lock()
        self._users: dict[str, ChatUser] = {}
        self._users_lock = threading.Lock()
        self._ready = threading.Event()

    @abstractmethod
    def open(self) -> None:
        """Open the connection.

        Raises:
            SessionOpenError: If the connection cannot be established
        """

    @abstractmethod
    def close(self) -> None:
        """Close the connection and stop invoking handlers."""

    @abstractmethod
    def send_message(self, text: str) -> None:
        """Send a chat line to the room."""

    @property
    def ready(self) -> threading.Event:
        """Set once the first non-empty roster has been received."""
        return self._ready

    def get_users(self) -> list[ChatUser]:
        """Snapshot of the users currently present."""
        with self._users_lock:
            return list(self._users.values())

    # Handler registration

    def add_handler(self, kind: EventKind, handler: EventHandler) -> None:
        with self._handlers_lock:
            self._handlers[kind].append(handler)

    def add_message_handler(self, handler: EventHandler) -> None:
        self.add_handler(EventKind.CHAT_MESSAGE, handler)

    def add_error_handler(self, handler: EventHandler) -> None:
        self.add_handler(EventKind.ERROR, handler)

    def add_mute_handler(self, handler: EventHandler) -> None:
        self.add_handler(EventKind.MUTE, handler)

    def add_unmute_handler(self, handler: EventHandler) -> None:
        self.add_handler(EventKind.UNMUTE, handler)

    def add_ban_handler(self, handler: EventHandler) -> None:
        self.add_handler(EventKind.BAN, handler)

    def add_unban_handler(self, handler: EventHandler) -> None:
        self.add_handler(EventKind.UNBAN, handler)

    def add_join_handler(self, handler: EventHandler) -> None:
        self.add_handler(EventKind.JOIN, handler)

    def add_quit_handler(self, handler: EventHandler) -> None:
        self.add_handler(EventKind.QUIT, handler)

    def add_sub_only_handler(self, handler: EventHandler) -> None:
        self.add_handler(EventKind.SUB_ONLY, handler)

    def add_broadcast_handler(self, handler: EventHandler) -> None:
        self.add_handler(EventKind.BROADCAST, handler)

    def add_ping_handler(self, handler: EventHandler) -> None:
        self.add_handler(EventKind.PING, handler)

    # Helpers for subclasses

    def _emit(self, event: Event) -> None:
        """Invoke every handler registered for the event's kind."""
        with self._handlers_lock:
            handlers = list(self._handlers[event.kind])
        for handler in handlers:
            handler(event)

    def _set_users(self, users: Iterable[ChatUser]) -> None:
        with self._users_lock:
            self._users = {u.nick: u for u in users}
            if self._users:
                self._ready.set()

    def _apply_presence(self, event: Join | Quit) -> Join | Quit:
        """Update the roster for a presence event and stamp the resulting snapshot.

        The snapshot travels with the event, so the dispatcher renders the
        roster as it was right after this event even when later presence
        events are already applied by the time it is dispatched.
        """
        with self._users_lock:
            if isinstance(event, Join):
                self._users[event.user.nick] = event.user
            else:
                self._users.pop(event.user.nick, None)
            snapshot = frozenset(self._users.values())
        return replace(event, roster=snapshot)
