"""Chat frame codec.

Hides the wire format of the chat service: every websocket text frame is a
verb followed by a space and a JSON payload, e.g.

    MSG {"nick":"Bob","features":["subscriber"],"timestamp":1700000000000,"data":"hi"}

Malformed or unknown frames decode to None and are ignored by the session.
"""

import json
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..events import (
    Ban,
    Broadcast,
    ChatMessage,
    ChatUser,
    ErrorNotice,
    Event,
    Join,
    Mute,
    Ping,
    Quit,
    SubOnlyToggle,
    Unban,
    Unmute,
)


@dataclass(frozen=True)
class Names:
    """Full roster snapshot sent by the server after connecting."""

    users: tuple[ChatUser, ...]
    connection_count: int = 0


def _timestamp(value: Any) -> datetime:
    if isinstance(value, (int, float)) and value > 0:
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            pass
    return datetime.now()


def _user(payload: dict[str, Any]) -> ChatUser:
    features = payload.get("features")
    if not isinstance(features, list):
        features = []
    return ChatUser(
        nick=str(payload.get("nick", "")),
        features=tuple(f for f in features if isinstance(f, str)),
    )


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    return int(value)


def split_frame(raw: str) -> tuple[str, str] | None:
    """Split a raw frame into verb and payload text."""
    verb, sep, payload = raw.partition(" ")
    if not sep or not verb.isupper():
        return None
    return verb, payload


def parse_frame(raw: str) -> Event | Names | None:
    """Decode one websocket text frame.

    Args:
        raw: Frame text as received

    Returns:
        The decoded event, a Names roster snapshot, or None for frames the
        client does not understand. Never raises on malformed input.
    """
    parts = split_frame(raw)
    if parts is None:
        return None
    verb, text = parts

    try:
        payload = json.loads(text)
        return _decode(verb, payload)
    except (ValueError, TypeError, OverflowError):
        return None


def _decode(verb: str, payload: Any) -> Event | Names | None:
    if verb == "ERR":
        # Errors carry a bare JSON string, e.g. ERR "needlogin"
        if isinstance(payload, dict):
            payload = payload.get("description") or payload.get("data") or ""
        return ErrorNotice(message=str(payload))

    if not isinstance(payload, dict):
        return None

    ts = _timestamp(payload.get("timestamp"))
    data = payload.get("data")

    if verb == "NAMES":
        users = payload.get("users")
        if not isinstance(users, list):
            users = []
        return Names(
            users=tuple(_user(u) for u in users if isinstance(u, dict)),
            connection_count=_optional_int(payload.get("connectioncount")) or 0,
        )
    if verb == "MSG":
        return ChatMessage(sender=_user(payload), body=str(data or ""), timestamp=ts)
    if verb == "JOIN":
        return Join(user=_user(payload), timestamp=ts)
    if verb == "QUIT":
        return Quit(user=_user(payload), timestamp=ts)
    if verb == "MUTE":
        return Mute(
            target=str(data or ""),
            sender=_user(payload),
            timestamp=ts,
            duration=_optional_int(payload.get("duration")),
        )
    if verb == "UNMUTE":
        return Unmute(target=str(data or ""), sender=_user(payload), timestamp=ts)
    if verb == "BAN":
        reason = payload.get("reason")
        return Ban(
            target=str(data or ""),
            sender=_user(payload),
            timestamp=ts,
            reason=reason if isinstance(reason, str) and reason else None,
            duration=_optional_int(payload.get("duration")),
        )
    if verb == "UNBAN":
        return Unban(target=str(data or ""), sender=_user(payload), timestamp=ts)
    if verb == "SUBONLY":
        return SubOnlyToggle(sender=_user(payload), active=data == "on", timestamp=ts)
    if verb == "BROADCAST":
        return Broadcast(message=str(data or ""), timestamp=ts)
    if verb in ("PING", "PONG"):
        return Ping(timestamp=_timestamp(data))
    return None


def encode_frame(verb: str, payload: dict[str, Any]) -> str:
    return f"{verb} {json.dumps(payload, ensure_ascii=False)}"


def encode_message(text: str) -> str:
    """Encode an outbound chat line."""
    return encode_frame("MSG", {"data": text})
