"""Event data model.

Hides how heterogeneous session notifications are represented while they
travel from producer callbacks to the dispatcher. Every variant is a frozen
dataclass; the union `Event` is closed and each variant reports its `kind`.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar


class EventKind(str, Enum):
    """The eleven notification kinds delivered by a chat session."""

    CHAT_MESSAGE = "chat_message"
    ERROR = "error"
    MUTE = "mute"
    UNMUTE = "unmute"
    BAN = "ban"
    UNBAN = "unban"
    JOIN = "join"
    QUIT = "quit"
    SUB_ONLY = "sub_only"
    BROADCAST = "broadcast"
    PING = "ping"


@dataclass(frozen=True)
class ChatUser:
    """A user present in the chat room."""

    nick: str
    features: tuple[str, ...] = ()

    def has_feature(self, feature: str) -> bool:
        return feature in self.features


def _now() -> datetime:
    return datetime.now()


@dataclass(frozen=True)
class ChatMessage:
    """A regular chat line."""

    kind: ClassVar[EventKind] = EventKind.CHAT_MESSAGE

    sender: ChatUser
    body: str
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class ErrorNotice:
    """An error string reported by the session (never fatal)."""

    kind: ClassVar[EventKind] = EventKind.ERROR

    message: str
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class Mute:
    kind: ClassVar[EventKind] = EventKind.MUTE

    target: str
    sender: ChatUser
    timestamp: datetime = field(default_factory=_now)
    duration: int | None = None  # seconds


@dataclass(frozen=True)
class Unmute:
    kind: ClassVar[EventKind] = EventKind.UNMUTE

    target: str
    sender: ChatUser
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class Ban:
    kind: ClassVar[EventKind] = EventKind.BAN

    target: str
    sender: ChatUser
    timestamp: datetime = field(default_factory=_now)
    reason: str | None = None
    duration: int | None = None  # seconds, None means permanent


@dataclass(frozen=True)
class Unban:
    kind: ClassVar[EventKind] = EventKind.UNBAN

    target: str
    sender: ChatUser
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class Join:
    """Presence event: a user entered the room."""

    kind: ClassVar[EventKind] = EventKind.JOIN

    user: ChatUser
    timestamp: datetime = field(default_factory=_now)
    # Roster as the session held it right after applying this event
    roster: frozenset[ChatUser] | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Quit:
    """Presence event: a user left the room."""

    kind: ClassVar[EventKind] = EventKind.QUIT

    user: ChatUser
    timestamp: datetime = field(default_factory=_now)
    roster: frozenset[ChatUser] | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class SubOnlyToggle:
    """Room switched in or out of subscriber-only mode."""

    kind: ClassVar[EventKind] = EventKind.SUB_ONLY

    sender: ChatUser
    active: bool
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class Broadcast:
    kind: ClassVar[EventKind] = EventKind.BROADCAST

    message: str
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class Ping:
    kind: ClassVar[EventKind] = EventKind.PING

    timestamp: datetime = field(default_factory=_now)


Event = (
    ChatMessage
    | ErrorNotice
    | Mute
    | Unmute
    | Ban
    | Unban
    | Join
    | Quit
    | SubOnlyToggle
    | Broadcast
    | Ping
)
