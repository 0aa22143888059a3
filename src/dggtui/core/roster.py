"""Roster cache.

Holds the most recent user snapshot queried from the session. The dispatcher
refreshes it after every presence event so rendering never uses a stale copy.
"""

from typing import TYPE_CHECKING

from ..events import ChatUser

if TYPE_CHECKING:
    from ..session.base import ChatSession

# Lower rank sorts first in the user list
FEATURE_RANKS = {
    "admin": 0,
    "moderator": 1,
    "vip": 2,
    "protected": 3,
    "subscriber": 4,
    "bot": 5,
}
DEFAULT_RANK = 10


def user_rank(user: ChatUser) -> int:
    """Rank of the highest-ranked feature a user carries."""
    return min((FEATURE_RANKS.get(f, DEFAULT_RANK) for f in user.features), default=DEFAULT_RANK)


class RosterCache:
    """Latest roster snapshot of a chat session."""

    def __init__(self, session: "ChatSession") -> None:
        self._session = session
        self._users: frozenset[ChatUser] = frozenset()

    @property
    def users(self) -> frozenset[ChatUser]:
        return self._users

    def refresh(self) -> frozenset[ChatUser]:
        """Query the session and replace the cached snapshot."""
        self._users = frozenset(self._session.get_users())
        return self._users

    def set(self, users) -> frozenset[ChatUser]:
        """Replace the snapshot with one obtained elsewhere (e.g. the startup barrier)."""
        self._users = frozenset(users)
        return self._users

    def __len__(self) -> int:
        return len(self._users)


def sort_users(users) -> list[ChatUser]:
    """Order users for display: by role rank, then case-insensitive nick."""
    return sorted(users, key=lambda u: (user_rank(u), u.nick.lower()))
