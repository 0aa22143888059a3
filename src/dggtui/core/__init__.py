"""Core of the chat client.

Following the information hiding principle, each module hides one decision:
- history.py: Input history cursor arithmetic
- roster.py: Roster snapshot caching and ordering
- channel.py: Event queueing, backpressure and shutdown
- dispatcher.py: Event classification and render routing
- barrier.py: Startup readiness wait
- commands.py: Submitted line handling
"""

from .barrier import wait_for_roster
from .channel import EventChannel
from .commands import InputCommandHandler, InputView
from .dispatcher import EventDispatcher, Renderer
from .history import HistoryBuffer
from .roster import RosterCache, sort_users

__all__ = [
    "EventChannel",
    "EventDispatcher",
    "HistoryBuffer",
    "InputCommandHandler",
    "InputView",
    "Renderer",
    "RosterCache",
    "sort_users",
    "wait_for_roster",
]
