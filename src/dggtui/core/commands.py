"""Input command handling.

Hides what happens to a submitted line: trimming, history bookkeeping and
forwarding to the session. Also drives history navigation for the Up/Down
keys. Every non-empty line is sent as typed; interpreting commands is the
server's business.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..errors import DggTuiError
from ..events import ErrorNotice
from .history import HistoryBuffer

if TYPE_CHECKING:
    from ..session.base import ChatSession
    from .dispatcher import Renderer


class InputView(ABC):
    """The input field as seen by the command handler."""

    @abstractmethod
    def clear_input(self) -> None:
        """Empty the input field and reset its cursor and scroll to origin."""

    @abstractmethod
    def show_input(self, text: str) -> None:
        """Replace the input field contents (history navigation)."""


class InputCommandHandler:
    """Handles lines submitted from the input field.

    Example:
        handler = InputCommandHandler(session, history, view, renderer)
        handler.submit("  hello  ")   # sends "hello", appends to history
        handler.history_up()          # input now shows "hello"
    """

    def __init__(
        self,
        session: "ChatSession",
        history: HistoryBuffer,
        view: InputView,
        renderer: "Renderer",
        debug_callback: Any = None,
    ) -> None:
        self._session = session
        self._history = history
        self._view = view
        self._renderer = renderer
        self._debug_callback = debug_callback

    @property
    def history(self) -> HistoryBuffer:
        return self._history

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Input", message)

    def submit(self, raw: str) -> bool:
        """Handle a submitted line.

        Args:
            raw: Input field contents

        Returns:
            True if the line was accepted, False if it was empty
        """
        line = raw.strip()
        if not line:
            return False

        self._history.append(line)
        try:
            self._session.send_message(line)
        except DggTuiError as e:
            self._debug("error", f"Send failed: {e}")
            self._renderer.render_error(ErrorNotice(message=f"message not sent: {e}"))

        self._view.clear_input()
        return True

    def history_up(self) -> None:
        entry = self._history.up()
        if entry is not None:
            self._view.show_input(entry)

    def history_down(self) -> None:
        entry = self._history.down()
        if entry is not None:
            self._view.show_input(entry)
