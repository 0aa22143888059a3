"""UI configuration constants.

Centralizes magic numbers and configuration values for the client.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    """Log panel thresholds; an entry is shown when its level >= the panel's."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def from_string(cls, value: str) -> "LogLevel":
        """Parse a level name such as "info"; unknown names mean DEBUG."""
        return cls.__members__.get(value.upper(), cls.DEBUG)


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Chat log configuration
CHAT_TIMESTAMP_FORMAT = "%H:%M"
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
CHAT_LOG_MAX_LINES = 2000  # Lines kept in the chat log before trimming
