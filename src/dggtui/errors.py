"""Exception hierarchy for dggtui.

Anything raised before the dispatch loop starts is fatal and reported by the
CLI; anything raised inside the loop is rendered and the loop continues.
"""


class DggTuiError(Exception):
    """Base class for all dggtui errors."""


class ConfigError(DggTuiError):
    """Configuration file is missing, unreadable or malformed."""


class SessionError(DggTuiError):
    """The chat session failed or is not connected."""


class SessionOpenError(SessionError):
    """The chat session could not be opened."""


class StartupTimeoutError(DggTuiError):
    """The session never reported a roster within the startup timeout."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"No users reported by the chat session after {timeout:.1f}s")
        self.timeout = timeout


class ChannelClosed(DggTuiError):
    """Raised by the event channel once it is closed (and drained, for readers)."""
