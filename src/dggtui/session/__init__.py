"""Chat session boundary.

Following the information hiding principle:
- base.py: ChatSession interface (handlers, roster query, send, lifecycle)
- protocol.py: Wire frame codec
- dgg.py: Websocket implementation
- factory.py: Session creation
"""

from .base import ChatSession, EventHandler
from .dgg import DggSession
from .factory import create_session
from .protocol import Names, encode_message, parse_frame

__all__ = [
    "ChatSession",
    "DggSession",
    "EventHandler",
    "Names",
    "create_session",
    "encode_message",
    "parse_frame",
]
