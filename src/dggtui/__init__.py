"""
dggtui: A terminal client for destiny.gg-style chat.

Session notifications are funnelled through one bounded event channel and
dispatched to a Textual UI on a single thread.
"""

__version__ = "0.1.0"

from .config import ChatConfig, load_config
from .errors import (
    ChannelClosed,
    ConfigError,
    DggTuiError,
    SessionError,
    SessionOpenError,
    StartupTimeoutError,
)
from .events import ChatUser, Event, EventKind

__all__ = [
    "ChannelClosed",
    "ChatConfig",
    "ChatUser",
    "ConfigError",
    "DggTuiError",
    "Event",
    "EventKind",
    "SessionError",
    "SessionOpenError",
    "StartupTimeoutError",
    "load_config",
]
