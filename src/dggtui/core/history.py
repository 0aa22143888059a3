"""Input history buffer.

Hides the navigation cursor arithmetic behind Up/Down transitions. The cursor
is always in [0, len(entries)]; len(entries) is the live slot, meaning the
user is not browsing history.
"""


class HistoryBuffer:
    """Submitted input lines plus a navigation cursor.

    Example:
        history = HistoryBuffer()
        history.append("hello")
        history.up()    # -> "hello"
        history.down()  # -> "" (back to the live slot)
    """

    def __init__(self, max_size: int | None = None) -> None:
        self._entries: list[str] = []
        self._cursor = 0
        self._max_size = max_size

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def at_live_slot(self) -> bool:
        return self._cursor == len(self._entries)

    def append(self, line: str) -> None:
        """Add a submitted line at the tail and return to the live slot."""
        self._entries.append(line)
        if self._max_size is not None and len(self._entries) > self._max_size:
            del self._entries[: len(self._entries) - self._max_size]
        self._cursor = len(self._entries)

    def up(self) -> str | None:
        """Move towards older entries.

        Returns:
            The entry to display, or None when the buffer is empty.
            At the oldest entry the cursor holds and the oldest entry is returned.
        """
        if not self._entries:
            return None
        if self._cursor > 0:
            self._cursor -= 1
        return self._entries[self._cursor]

    def down(self) -> str | None:
        """Move towards newer entries.

        Returns:
            The entry to display, "" when reaching the live slot, or None
            when already at the live slot (input left untouched).
        """
        if self._cursor >= len(self._entries):
            return None
        self._cursor += 1
        if self._cursor == len(self._entries):
            return ""
        return self._entries[self._cursor]
