"""Main Textual TUI application.

Orchestrates the widgets, the startup barrier, the dispatch loop and the
input path. The session and event channel are created and opened by
`run_textual_tui`, which brackets the app's lifetime.
"""

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..config import ROSTER_POLL_INTERVAL, STARTUP_TIMEOUT, ChatConfig
from ..core import (
    EventChannel,
    EventDispatcher,
    HistoryBuffer,
    InputCommandHandler,
    RosterCache,
    wait_for_roster,
)
from ..errors import DggTuiError, StartupTimeoutError
from ..session import ChatSession, create_session
from .config import INPUT_HISTORY_MAX_SIZE, LogLevel
from .renderer import TUIInputView, TUIRenderer, call_thread_safe
from .styles import APP_CSS
from .themes import DGG_DARK
from .widgets import ChatInputBar, ChatLog, DebugPanel, UserList


class ChatTextualApp(App):
    """Textual TUI for a chat room."""

    CSS = APP_CSS
    TITLE = "dggtui"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+l", "clear_chat", "Clear Chat"),
        Binding("ctrl+b", "toggle_maximize_chat", "Max Chat"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(
        self,
        config: ChatConfig,
        session: ChatSession,
        channel: EventChannel,
        log_level: str | None = None,
        startup_timeout: float | None = STARTUP_TIMEOUT,
        poll_interval: float = ROSTER_POLL_INTERVAL,
    ) -> None:
        super().__init__()
        self._config = config
        self._session = session
        self._channel = channel
        self._log_level = log_level
        self._startup_timeout = startup_timeout
        self._poll_interval = poll_interval
        self._roster = RosterCache(session)
        self._history = HistoryBuffer(max_size=INPUT_HISTORY_MAX_SIZE)
        self._renderer: TUIRenderer | None = None
        self._input_handler: InputCommandHandler | None = None
        self._dispatcher: EventDispatcher | None = None
        self._log_panel: DebugPanel | None = None
        self.startup_error: DggTuiError | None = None

    @property
    def dispatcher(self) -> EventDispatcher | None:
        return self._dispatcher

    @property
    def input_handler(self) -> InputCommandHandler | None:
        return self._input_handler

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatLog(id="chat-log")
        yield UserList(id="user-list")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(DGG_DARK)
        self.theme = "dgg-dark"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        self._log_panel = log_panel
        if self._log_level is not None:
            log_panel.display = True
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.log("TUI", f"Log panel enabled with level: {log_panel.log_level.name}", LogLevel.INFO)

        chat_log = self.query_one("#chat-log", ChatLog)
        user_list = self.query_one("#user-list", UserList)
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)

        self._renderer = TUIRenderer(
            chat_log, user_list, highlight_terms=self._config.highlight_terms, app=self
        )
        self._input_handler = InputCommandHandler(
            session=self._session,
            history=self._history,
            view=TUIInputView(input_bar),
            renderer=self._renderer,
            debug_callback=self._debug,
        )
        self._dispatcher = EventDispatcher(
            channel=self._channel,
            renderer=self._renderer,
            roster=self._roster,
            config=self._config,
            debug_callback=self._debug,
        )

        if hasattr(self._session, "set_debug_callback"):
            self._session.set_debug_callback(self._debug)

        self.sub_title = self._config.username or "anonymous"
        input_bar.focus_input()
        self._run_dispatch()

    def on_unmount(self) -> None:
        """Stop the dispatch loop; queued events are drained first."""
        self._channel.close()

    def _debug(self, level: str, component: str, message: str) -> None:
        """Route debug messages to the log panel from any thread."""
        if self._log_panel is None or not self.is_running:
            return
        call_thread_safe(self, self._log_panel.log, component, message, LogLevel.from_string(level))

    @work(thread=True, exclusive=True, exit_on_error=False, name="dispatch")
    def _run_dispatch(self) -> None:
        """Wait for the first roster, render it, then drain events until shutdown."""
        chat_log = self._renderer.chat_log
        self._debug("info", "TUI", "Waiting for user list...")
        try:
            users = wait_for_roster(
                self._session,
                interval=self._poll_interval,
                timeout=self._startup_timeout,
            )
        except StartupTimeoutError as e:
            self.startup_error = e
            self.call_from_thread(self.exit, return_code=1, message=str(e))
            return

        self._renderer.render_users(self._roster.set(users))
        self.call_from_thread(setattr, chat_log, "border_subtitle", self._config.chat_url)
        self._dispatcher.run()

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._input_handler.submit(event.value)

    def on_chat_input_bar_history_navigate(self, event: ChatInputBar.HistoryNavigate) -> None:
        if event.direction < 0:
            self._input_handler.history_up()
        else:
            self._input_handler.history_down()

    def action_clear_chat(self) -> None:
        """Clear the chat log."""
        self.query_one("#chat-log", ChatLog).clear()
        self.notify("Chat cleared", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_toggle_maximize_chat(self) -> None:
        """Toggle maximize for the chat log."""
        chat_log = self.query_one("#chat-log", ChatLog)
        user_list = self.query_one("#user-list", UserList)
        if chat_log.has_class("-maximized"):
            chat_log.remove_class("-maximized")
            user_list.display = True
        else:
            chat_log.add_class("-maximized")
            user_list.display = False


def run_textual_tui(config: ChatConfig, log_level: str | None = None) -> None:
    """Open the session and run the TUI until the user quits.

    Args:
        config: Loaded client configuration
        log_level: Log level for panel (debug/info/warning/error), None to hide

    Raises:
        SessionOpenError: If the session cannot be opened
        StartupTimeoutError: If the session never reports a roster
    """
    session = create_session(config)
    channel = EventChannel()
    # Handlers must be registered before opening so no event is missed
    channel.attach(session)
    session.open()
    try:
        app = ChatTextualApp(config=config, session=session, channel=channel, log_level=log_level)
        app.run()
    finally:
        channel.close()
        session.close()

    if app.startup_error is not None:
        raise app.startup_error
