"""Event classification and dispatch.

Hides how a queued event is turned into a render call. The dispatcher drains
the channel on a single thread, one event at a time in arrival order, and
calls exactly one render behaviour per known event kind. Presence events
additionally re-render the roster snapshot the session took when it applied
them.

Event types without a route are ignored.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from ..config import ChatConfig
from ..errors import ChannelClosed
from ..events import (
    Ban,
    Broadcast,
    ChatMessage,
    ChatUser,
    ErrorNotice,
    Join,
    Mute,
    Ping,
    Quit,
    SubOnlyToggle,
    Unban,
    Unmute,
)
from .channel import EventChannel
from .roster import RosterCache


class Renderer(ABC):
    """Render behaviours invoked by the dispatcher, one per event kind."""

    @abstractmethod
    def render_chat(self, message: ChatMessage) -> None: ...

    @abstractmethod
    def render_error(self, notice: ErrorNotice) -> None: ...

    @abstractmethod
    def render_mute(self, mute: Mute) -> None: ...

    @abstractmethod
    def render_unmute(self, unmute: Unmute) -> None: ...

    @abstractmethod
    def render_ban(self, ban: Ban) -> None: ...

    @abstractmethod
    def render_unban(self, unban: Unban) -> None: ...

    @abstractmethod
    def render_join(self, join: Join) -> None: ...

    @abstractmethod
    def render_quit(self, quit: Quit) -> None: ...

    @abstractmethod
    def render_sub_only(self, toggle: SubOnlyToggle) -> None: ...

    @abstractmethod
    def render_broadcast(self, broadcast: Broadcast) -> None: ...

    @abstractmethod
    def render_users(self, users: Iterable[ChatUser]) -> None: ...


class EventDispatcher:
    """Consumes an EventChannel and routes each event to a Renderer.

    Example:
        dispatcher = EventDispatcher(channel, renderer, roster, config)
        thread = threading.Thread(target=dispatcher.run, daemon=True)
        thread.start()
        ...
        channel.close()  # dispatcher drains remaining events and returns
    """

    def __init__(
        self,
        channel: EventChannel,
        renderer: Renderer,
        roster: RosterCache,
        config: ChatConfig,
        debug_callback: Any = None,
    ) -> None:
        self._channel = channel
        self._renderer = renderer
        self._roster = roster
        self._show_join_leave = config.show_join_leave
        self._debug_callback = debug_callback
        self._last_ping: datetime | None = None
        self._dispatched = 0
        self._routes: dict[type, Callable[[Any], None]] = {
            ChatMessage: renderer.render_chat,
            ErrorNotice: renderer.render_error,
            Ping: self._on_ping,
            Mute: renderer.render_mute,
            Unmute: renderer.render_unmute,
            Ban: renderer.render_ban,
            Unban: renderer.render_unban,
            Join: self._on_join,
            Quit: self._on_quit,
            SubOnlyToggle: renderer.render_sub_only,
            Broadcast: renderer.render_broadcast,
        }

    @property
    def last_ping(self) -> datetime | None:
        """Timestamp of the most recent ping, reserved for latency display."""
        return self._last_ping

    @property
    def dispatched(self) -> int:
        """Number of events routed to a behaviour so far."""
        return self._dispatched

    def set_debug_callback(self, callback: Any) -> None:
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Dispatch", message)

    def dispatch(self, event: object) -> bool:
        """Route a single event.

        Returns:
            True if the event had a route, False if it was ignored
        """
        handler = self._routes.get(type(event))
        if handler is None:
            self._debug("debug", f"Ignored unknown event {type(event).__name__}")
            return False
        handler(event)
        self._dispatched += 1
        return True

    def run(self) -> None:
        """Drain the channel until it is closed.

        Render failures are reported as error lines and never stop the loop.
        """
        self._debug("info", "Dispatch loop started")
        while True:
            try:
                event = self._channel.get()
            except ChannelClosed:
                break
            try:
                self.dispatch(event)
            except Exception as e:
                self._debug("error", f"Render failed for {type(event).__name__}: {e}")
                self._report_render_failure(e)
        self._debug("info", f"Dispatch loop stopped after {self._dispatched} events")

    def _report_render_failure(self, error: Exception) -> None:
        try:
            self._renderer.render_error(ErrorNotice(message=f"render failed: {error}"))
        except Exception as e:
            # The UI may already be gone during shutdown; keep draining
            self._debug("error", f"Cannot render error line: {e}")

    def _on_ping(self, ping: Ping) -> None:
        self._last_ping = ping.timestamp

    def _presence_roster(self, event: Join | Quit) -> frozenset[ChatUser]:
        """Roster as of the presence event, queried from the session if not attached."""
        if event.roster is not None:
            return self._roster.set(event.roster)
        return self._roster.refresh()

    def _on_join(self, join: Join) -> None:
        if self._show_join_leave:
            self._renderer.render_join(join)
        self._renderer.render_users(self._presence_roster(join))

    def _on_quit(self, quit: Quit) -> None:
        if self._show_join_leave:
            self._renderer.render_quit(quit)
        self._renderer.render_users(self._presence_roster(quit))
