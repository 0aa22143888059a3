"""Startup barrier.

Withholds dispatch and rendering until the session reports its first
non-empty roster. The session is polled at a fixed interval; when it exposes
a readiness event the interval is spent waiting on that event instead of
sleeping, so the barrier releases as soon as the roster arrives.
"""

import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..config import ROSTER_POLL_INTERVAL, STARTUP_TIMEOUT
from ..errors import StartupTimeoutError
from ..events import ChatUser

if TYPE_CHECKING:
    from ..session.base import ChatSession


def wait_for_roster(
    session: "ChatSession",
    interval: float = ROSTER_POLL_INTERVAL,
    timeout: float | None = STARTUP_TIMEOUT,
    sleep: Callable[[float], Any] | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> list[ChatUser]:
    """Block until the session reports at least one user.

    Args:
        session: Opened chat session
        interval: Seconds between roster polls
        timeout: Seconds before giving up, None to wait forever
        sleep: Replacement for the wait between polls (tests)
        clock: Monotonic clock used for the timeout (tests)

    Returns:
        The first non-empty roster snapshot

    Raises:
        StartupTimeoutError: If no users were reported within timeout
    """
    if sleep is None:
        ready = getattr(session, "ready", None)
        sleep = ready.wait if isinstance(ready, threading.Event) else time.sleep

    deadline = None if timeout is None else clock() + timeout
    while True:
        users = session.get_users()
        if users:
            return list(users)
        if deadline is not None and clock() >= deadline:
            raise StartupTimeoutError(timeout)
        sleep(interval)
