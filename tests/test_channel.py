"""Unit tests for the event channel."""
import threading
import time

import pytest

from conftest import FakeSession

from dggtui.core.channel import EventChannel
from dggtui.errors import ChannelClosed
from dggtui.events import Broadcast, ChatMessage, ChatUser, EventKind, Ping


def _msg(n: int, nick: str = "bob") -> ChatMessage:
    return ChatMessage(sender=ChatUser(nick), body=str(n))


class TestEventChannel:
    """Tests for EventChannel ordering, backpressure and shutdown."""

    def test_fifo_order(self):
        """Test that events come out in the order they went in."""
        channel = EventChannel()
        events = [_msg(i) for i in range(10)]
        for event in events:
            channel.put(event)

        assert [channel.get() for _ in events] == events

    def test_invalid_capacity_fails(self):
        """Test that a channel needs room for at least one event."""
        with pytest.raises(ValueError):
            EventChannel(capacity=0)

    def test_default_capacity(self):
        """Test the reference capacity."""
        assert EventChannel().capacity == 100

    def test_put_blocks_when_full(self):
        """Test that producers block until the consumer makes room."""
        channel = EventChannel(capacity=2)
        channel.put(_msg(0))
        channel.put(_msg(1))
        done = threading.Event()

        def producer():
            channel.put(_msg(2))
            done.set()

        thread = threading.Thread(target=producer, daemon=True)
        thread.start()

        assert not done.wait(0.3)
        assert channel.get().body == "0"
        assert done.wait(2.0)
        assert [channel.get().body for _ in range(2)] == ["1", "2"]

    def test_get_times_out(self):
        """Test that get with a timeout raises when nothing arrives."""
        channel = EventChannel()
        with pytest.raises(TimeoutError):
            channel.get(timeout=0.2)

    def test_close_drains_then_raises(self):
        """Test that queued events survive close and the reader then stops."""
        channel = EventChannel()
        channel.put(_msg(1))
        channel.put(_msg(2))
        channel.close()

        assert channel.get().body == "1"
        assert channel.get().body == "2"
        with pytest.raises(ChannelClosed):
            channel.get()

    def test_put_after_close_fails(self):
        """Test that a closed channel refuses new events."""
        channel = EventChannel()
        channel.close()

        assert channel.closed
        with pytest.raises(ChannelClosed):
            channel.put(_msg(1))

    def test_close_wakes_blocked_consumer(self):
        """Test that a consumer waiting on an empty channel is released by close."""
        channel = EventChannel()
        result = []

        def consumer():
            try:
                channel.get()
            except ChannelClosed:
                result.append("closed")

        thread = threading.Thread(target=consumer, daemon=True)
        thread.start()
        time.sleep(0.2)
        channel.close()
        thread.join(timeout=2.0)

        assert result == ["closed"]

    def test_per_producer_order_with_concurrent_producers(self):
        """Test that each producer's events keep their relative order."""
        channel = EventChannel(capacity=5)
        producers = ["p1", "p2", "p3"]
        per_producer = 50

        def produce(nick: str):
            for i in range(per_producer):
                channel.put(_msg(i, nick))

        threads = [threading.Thread(target=produce, args=(p,), daemon=True) for p in producers]
        for thread in threads:
            thread.start()

        received = [channel.get(timeout=5.0) for _ in range(len(producers) * per_producer)]
        for thread in threads:
            thread.join(timeout=2.0)

        for nick in producers:
            bodies = [int(e.body) for e in received if e.sender.nick == nick]
            assert bodies == list(range(per_producer))

    def test_nothing_dropped_or_deduplicated(self):
        """Test that identical events are all delivered."""
        channel = EventChannel()
        ping = Ping()
        for _ in range(3):
            channel.put(ping)
        assert len(channel) == 3

    def test_attach_registers_every_kind(self, alice):
        """Test that attaching a session funnels every kind into the channel."""
        session = FakeSession()
        channel = EventChannel()
        channel.attach(session)

        session.emit(_msg(1))
        session.emit(Broadcast(message="hello"))

        assert channel.get().body == "1"
        assert channel.get().message == "hello"
        assert all(len(session._handlers[kind]) == 1 for kind in EventKind)

    def test_events_after_close_do_not_reach_session_thread(self):
        """Test that emitting into a closed channel does not raise in the producer."""
        session = FakeSession()
        channel = EventChannel()
        channel.attach(session)
        channel.close()

        session.emit(_msg(1))

        assert len(channel) == 0
