"""Text formatting utilities for the TUI.

Hides how events become Rich markup lines: timestamp layout, nick colours,
highlighting of mentions, and the styles of moderation and system notices.
"""

import re
from collections.abc import Iterable
from datetime import datetime

from rich.markup import escape

from ..events import (
    Ban,
    Broadcast,
    ChatMessage,
    ChatUser,
    ErrorNotice,
    Join,
    Mute,
    Quit,
    SubOnlyToggle,
    Unban,
    Unmute,
)
from .config import CHAT_TIMESTAMP_FORMAT

# First matching feature decides the nick colour
FEATURE_COLORS = [
    ("admin", "bold red"),
    ("moderator", "bold yellow"),
    ("vip", "bold magenta"),
    ("protected", "cyan"),
    ("subscriber", "bright_blue"),
    ("bot", "green"),
]
DEFAULT_NICK_COLOR = "white"
HIGHLIGHT_STYLE = "on #3a3320"


def nick_color(user: ChatUser) -> str:
    """Colour for a nick based on the user's features."""
    for feature, color in FEATURE_COLORS:
        if user.has_feature(feature):
            return color
    return DEFAULT_NICK_COLOR


def format_timestamp(ts: datetime) -> str:
    return ts.strftime(CHAT_TIMESTAMP_FORMAT)


def format_duration(seconds: int | None) -> str:
    """Format a duration in seconds as e.g. 1h30m, or 'permanently' for None."""
    if seconds is None:
        return "permanently"
    if seconds <= 0:
        return "0s"

    parts = []
    for unit, size in (("d", 86400), ("h", 3600), ("m", 60), ("s", 1)):
        count, seconds = divmod(seconds, size)
        if count:
            parts.append(f"{count}{unit}")
    return "".join(parts)


def is_highlighted(body: str, terms: Iterable[str]) -> bool:
    """Check whether a message mentions any term (case-insensitive, whole word)."""
    for term in terms:
        if term and re.search(rf"(?<!\w){re.escape(term)}(?!\w)", body, re.IGNORECASE):
            return True
    return False


def _prefix(ts: datetime) -> str:
    return f"[dim]{format_timestamp(ts)}[/] "


def format_chat(message: ChatMessage, highlight_terms: Iterable[str] = ()) -> str:
    """Format a chat line; /me messages are rendered as actions."""
    color = nick_color(message.sender)
    nick = escape(message.sender.nick)
    body = message.body

    if body.startswith("/me "):
        line = f"[italic][{color}]{nick}[/] {escape(body[4:])}[/italic]"
    elif body.startswith(">"):
        line = f"[{color}]{nick}[/]: [green]{escape(body)}[/]"
    else:
        line = f"[{color}]{nick}[/]: {escape(body)}"

    if is_highlighted(body, highlight_terms):
        line = f"[{HIGHLIGHT_STYLE}]{line}[/]"
    return _prefix(message.timestamp) + line


def format_error(notice: ErrorNotice) -> str:
    return _prefix(notice.timestamp) + f"[bold red]Error:[/] [red]{escape(notice.message)}[/]"


def format_mute(mute: Mute) -> str:
    line = f"[yellow]{escape(mute.target)} muted by {escape(mute.sender.nick)}"
    if mute.duration is not None:
        line += f" for {format_duration(mute.duration)}"
    return _prefix(mute.timestamp) + line + "[/]"


def format_unmute(unmute: Unmute) -> str:
    return _prefix(unmute.timestamp) + (
        f"[yellow]{escape(unmute.target)} unmuted by {escape(unmute.sender.nick)}[/]"
    )


def format_ban(ban: Ban) -> str:
    line = f"[bold red]{escape(ban.target)} banned by {escape(ban.sender.nick)}"
    if ban.duration is not None:
        line += f" for {format_duration(ban.duration)}"
    if ban.reason:
        line += f" ({escape(ban.reason)})"
    return _prefix(ban.timestamp) + line + "[/]"


def format_unban(unban: Unban) -> str:
    return _prefix(unban.timestamp) + (
        f"[yellow]{escape(unban.target)} unbanned by {escape(unban.sender.nick)}[/]"
    )


def format_join(join: Join) -> str:
    return _prefix(join.timestamp) + f"[dim green]{escape(join.user.nick)} joined[/]"


def format_quit(quit: Quit) -> str:
    return _prefix(quit.timestamp) + f"[dim red]{escape(quit.user.nick)} left[/]"


def format_sub_only(toggle: SubOnlyToggle) -> str:
    state = "enabled" if toggle.active else "disabled"
    return _prefix(toggle.timestamp) + (
        f"[bold cyan]Subscriber only mode {state} by {escape(toggle.sender.nick)}[/]"
    )


def format_broadcast(broadcast: Broadcast) -> str:
    return _prefix(broadcast.timestamp) + f"[bold magenta]{escape(broadcast.message)}[/]"


def format_user(user: ChatUser) -> str:
    return f"[{nick_color(user)}]{escape(user.nick)}[/]"
