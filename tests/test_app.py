"""Tests for the Textual application using the headless pilot."""
import pytest
from textual.widgets import Input

from dggtui.core.channel import EventChannel
from dggtui.events import ChatMessage
from dggtui.ui import ChatLog, ChatTextualApp, LogLevel, UserList


async def wait_until(pilot, predicate, attempts: int = 50) -> bool:
    for _ in range(attempts):
        if predicate():
            return True
        await pilot.pause(0.05)
    return predicate()


@pytest.fixture
def channel(session):
    channel = EventChannel()
    channel.attach(session)
    yield channel
    channel.close()


class TestLogLevel:
    """Tests for LogLevel parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("debug", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        ("Warning", LogLevel.WARNING),
        ("error", LogLevel.ERROR),
        ("verbose", LogLevel.DEBUG),
    ])
    def test_from_string(self, value, expected):
        assert LogLevel.from_string(value) is expected

    def test_levels_are_ordered(self):
        assert LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARNING < LogLevel.ERROR


class TestChatTextualApp:
    """Tests for ChatTextualApp."""

    @pytest.mark.asyncio
    async def test_roster_rendered_after_startup(self, session, channel, config):
        """Test that the user list shows the first roster."""
        app = ChatTextualApp(config=config, session=session, channel=channel, startup_timeout=5.0)

        async with app.run_test() as pilot:
            user_list = app.query_one("#user-list", UserList)
            assert await wait_until(pilot, lambda: len(user_list.users) == 2)

    @pytest.mark.asyncio
    async def test_incoming_message_reaches_chat_log(self, session, channel, config, alice):
        app = ChatTextualApp(config=config, session=session, channel=channel, startup_timeout=5.0)

        async with app.run_test() as pilot:
            session.emit(ChatMessage(sender=alice, body="hello tui"))
            chat_log = app.query_one("#chat-log", ChatLog)
            assert await wait_until(pilot, lambda: chat_log.line_count == 1)

    @pytest.mark.asyncio
    async def test_submit_sends_clears_and_recalls(self, session, channel, config):
        """Test typing a line, sending it and recalling it with Up."""
        app = ChatTextualApp(config=config, session=session, channel=channel, startup_timeout=5.0)

        async with app.run_test() as pilot:
            text_input = app.query_one("#chat-input", Input)
            await pilot.press(*"hello")
            await pilot.press("enter")
            await pilot.pause()

            assert session.sent == ["hello"]
            assert text_input.value == ""

            await pilot.press("up")
            await pilot.pause()
            assert text_input.value == "hello"

            await pilot.press("down")
            await pilot.pause()
            assert text_input.value == ""
