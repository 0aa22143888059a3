"""Terminal UI module for dggtui.

Provides a Textual-based TUI for a chat room.

Module structure (Parnas principle - each module hides a design decision):
- formatting.py: How events become Rich markup lines
- widgets.py: Custom widgets (chat log, user list, input bar, debug log)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- renderer.py: How dispatcher output reaches the widgets
- app.py: Application orchestration (startup, dispatch, input flow)
"""

from .app import ChatTextualApp, run_textual_tui
from .config import LogLevel
from .renderer import TUIInputView, TUIRenderer
from .widgets import ChatInputBar, ChatLog, DebugPanel, UserList

__all__ = [
    "ChatInputBar",
    "ChatLog",
    "ChatTextualApp",
    "DebugPanel",
    "LogLevel",
    "TUIInputView",
    "TUIRenderer",
    "UserList",
    "run_textual_tui",
]
