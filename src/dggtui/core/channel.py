"""Event channel.

Bounded multi-producer/single-consumer FIFO between session callbacks and the
dispatcher. Relies on `queue.Queue` for synchronization.

Guarantees:
- events from one producer keep their relative order
- events from different producers are ordered by arrival at the queue
- nothing is dropped or deduplicated while open; producers block when full

Shutdown: `close()` refuses further pushes. The consumer keeps receiving the
events already queued and gets ChannelClosed once the queue is drained.
"""

import queue
import threading
from typing import TYPE_CHECKING

from ..config import EVENT_QUEUE_CAPACITY
from ..errors import ChannelClosed
from ..events import Event, EventKind

if TYPE_CHECKING:
    from ..session.base import ChatSession

# How often blocked producers/consumer re-check for close
_POLL_INTERVAL = 0.1


class EventChannel:
    """Bounded FIFO of events."""

    def __init__(self, capacity: int = EVENT_QUEUE_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._queue: queue.Queue[Event] = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def __len__(self) -> int:
        return self._queue.qsize()

    def put(self, event: Event) -> None:
        """Push an event, blocking while the channel is full.

        Raises:
            ChannelClosed: If the channel is (or becomes) closed
        """
        while True:
            if self._closed.is_set():
                raise ChannelClosed("event channel is closed")
            try:
                self._queue.put(event, timeout=_POLL_INTERVAL)
                return
            except queue.Full:
                continue

    def get(self, timeout: float | None = None) -> Event:
        """Pop the oldest event, blocking while the channel is empty.

        Args:
            timeout: Seconds to wait, None to wait until an event or close

        Raises:
            ChannelClosed: Once the channel is closed and drained
            TimeoutError: If timeout elapses with no event
        """
        waited = 0.0
        while True:
            try:
                return self._queue.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                if self._closed.is_set():
                    raise ChannelClosed("event channel is closed") from None
                waited += _POLL_INTERVAL
                if timeout is not None and waited >= timeout:
                    raise TimeoutError(f"no event within {timeout}s") from None

    def close(self) -> None:
        """Stop accepting events; queued events remain readable."""
        self._closed.set()

    def attach(self, session: "ChatSession") -> None:
        """Register one producer callback per event kind on a session."""
        for kind in EventKind:
            session.add_handler(kind, self._produce)

    def _produce(self, event: Event) -> None:
        # Events arriving after close are discarded
        try:
            self.put(event)
        except ChannelClosed:
            pass
