"""Unit tests for the startup barrier."""
import threading

import pytest

from conftest import FakeSession, RecordingRenderer

from dggtui.config import ChatConfig
from dggtui.core.barrier import wait_for_roster
from dggtui.core.channel import EventChannel
from dggtui.core.dispatcher import EventDispatcher
from dggtui.core.roster import RosterCache
from dggtui.errors import StartupTimeoutError
from dggtui.events import ChatMessage, ChatUser


class ScriptedRosterSession(FakeSession):
    """Reports an empty roster for a number of polls, then real users."""

    def __init__(self, empty_polls: int, users) -> None:
        super().__init__()
        self.empty_polls = empty_polls
        self.final_users = list(users)
        self.polls = 0

    def get_users(self):
        self.polls += 1
        if self.polls <= self.empty_polls:
            return []
        return list(self.final_users)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class TestWaitForRoster:
    """Tests for wait_for_roster."""

    def test_returns_immediately_when_users_present(self, session):
        """Test that a ready session releases the barrier without sleeping."""
        clock = FakeClock()
        users = wait_for_roster(session, sleep=clock.sleep, clock=clock)

        assert len(users) == 2
        assert clock.sleeps == []

    def test_polls_until_roster_non_empty(self):
        """Test three empty polls followed by a two-user roster."""
        u1, u2 = ChatUser("u1"), ChatUser("u2")
        session = ScriptedRosterSession(empty_polls=3, users=[u1, u2])
        clock = FakeClock()

        users = wait_for_roster(session, interval=0.3, sleep=clock.sleep, clock=clock)

        assert set(users) == {u1, u2}
        assert session.polls == 4
        assert clock.sleeps == [0.3, 0.3, 0.3]

    def test_times_out(self):
        """Test that a session that never reports users is a startup failure."""
        session = ScriptedRosterSession(empty_polls=10**6, users=[])
        clock = FakeClock()

        with pytest.raises(StartupTimeoutError) as exc_info:
            wait_for_roster(session, interval=0.5, timeout=2.0, sleep=clock.sleep, clock=clock)

        assert exc_info.value.timeout == 2.0
        assert clock.now >= 2.0

    def test_ready_event_releases_early(self, alice):
        """Test that the session's ready signal is used instead of a blind sleep."""
        session = FakeSession()
        threading.Timer(0.1, session.set_users, args=([alice],)).start()

        users = wait_for_roster(session, interval=5.0, timeout=10.0)

        assert users == [alice]

    def test_first_render_is_roster_before_chat(self):
        """Test that chat is never rendered before the first roster snapshot."""
        u1, u2 = ChatUser("u1"), ChatUser("u2")
        session = ScriptedRosterSession(empty_polls=3, users=[u1, u2])
        channel = EventChannel()
        channel.attach(session)
        renderer = RecordingRenderer()
        roster = RosterCache(session)
        dispatcher = EventDispatcher(channel, renderer, roster, ChatConfig())

        # Chat arrives while the barrier is still closed
        session.emit(ChatMessage(sender=u1, body="early"))

        clock = FakeClock()
        users = wait_for_roster(session, sleep=clock.sleep, clock=clock)
        renderer.render_users(roster.set(users))
        channel.close()
        dispatcher.run()

        assert renderer.names == ["render_users", "render_chat"]
        assert renderer.calls[0][1] == frozenset({u1, u2})
