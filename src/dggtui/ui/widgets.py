"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat log rendering and scrolling
- User list layout
- Input field key handling
- Debug log filtering
"""

from collections.abc import Iterable
from datetime import datetime

from rich.markup import escape
from rich.text import Text
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Input, RichLog, Static

from ..core.roster import sort_users
from ..events import ChatUser
from .config import CHAT_LOG_MAX_LINES, LOG_TIMESTAMP_FORMAT, LogLevel
from .formatting import format_user


class ChatLog(RichLog):
    """Scrolling chat log with markup support."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Connecting..."
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            max_lines=CHAT_LOG_MAX_LINES,
            **kwargs
        )
        self._line_count = 0

    @property
    def line_count(self) -> int:
        """Lines written since the last clear."""
        return self._line_count

    def add_line(self, content: str, markup: bool = True) -> None:
        """Write one line to the log.

        Args:
            content: Line to write
            markup: If True, parse Rich markup. Set False for raw text.
        """
        if markup:
            self.write(content)
        else:
            self.write(Text(content))
        self._line_count += 1

    def clear(self) -> "ChatLog":
        """Clear the log and reset the line count."""
        super().clear()
        self._line_count = 0
        return self


class UserList(Static):
    """Panel listing the users present in the room."""

    BORDER_TITLE = "Users"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._users: list[ChatUser] = []

    @property
    def users(self) -> list[ChatUser]:
        return list(self._users)

    def set_users(self, users: Iterable[ChatUser]) -> None:
        """Replace the displayed roster."""
        self._users = sort_users(users)
        self.update("\n".join(format_user(u) for u in self._users))
        self.border_subtitle = f"{len(self._users)} online"


class ChatInputBar(Horizontal):
    """Single-line chat input with a Send button.

    Enter submits; Up/Down request history navigation from the app.
    """

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class HistoryNavigate(Message):
        """Message sent when Up (-1) or Down (+1) is pressed in the input."""

        def __init__(self, direction: int) -> None:
            super().__init__()
            self.direction = direction

    def compose(self):
        yield Input(id="chat-input", placeholder="Write something...")
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Enter)"
        )

    def on_mount(self) -> None:
        self.query_one("#chat-input", Input).cursor_blink = False

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self.post_message(self.Submitted(self.value))

    def on_key(self, event) -> None:
        """Handle history navigation keys."""
        if event.key == "up":
            self.post_message(self.HistoryNavigate(-1))
            event.prevent_default()
            event.stop()
        elif event.key == "down":
            self.post_message(self.HistoryNavigate(1))
            event.prevent_default()
            event.stop()

    @property
    def value(self) -> str:
        return self.query_one("#chat-input", Input).value

    def set_value(self, text: str) -> None:
        """Show text in the input with the cursor at its end."""
        text_input = self.query_one("#chat-input", Input)
        text_input.value = text
        text_input.cursor_position = len(text)

    def clear(self) -> None:
        """Empty the input and move cursor and scroll back to the origin."""
        text_input = self.query_one("#chat-input", Input)
        text_input.value = ""
        text_input.cursor_position = 0
        text_input.scroll_home(animate=False)

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", Input).focus()


LEVEL_COLORS = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}
COMPONENT_COLORS = {
    "TUI": "cyan",
    "Session": "green",
    "Dispatch": "magenta",
    "Input": "bright_yellow",
}


class DebugPanel(RichLog):
    """Trace log fed by the components' debug callbacks.

    Hidden until --log-level is given or Ctrl+D is pressed.
    """

    BORDER_TITLE = "Log"

    def __init__(self, *args, log_level: LogLevel = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=True, highlight=False, auto_scroll=True, wrap=False, **kwargs)
        self._log_level = log_level

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._log_level = level
        if self.display:
            self.border_subtitle = f"Level: {level.name}"

    def on_mount(self) -> None:
        self.display = False

    def log(self, component: str, message: str, level: LogLevel = LogLevel.DEBUG) -> None:
        """Append an entry unless it is below the panel's level."""
        if level < self._log_level:
            return
        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{LEVEL_COLORS.get(level, 'white')}]{level.name:<5}[/] "
            f"[{COMPONENT_COLORS.get(component, 'white')}]\\[{component}][/] {escape(message)}"
        )

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        self.display = not self.display
        self.border_subtitle = f"Level: {self._log_level.name}" if self.display else "Hidden"
        return self.display
