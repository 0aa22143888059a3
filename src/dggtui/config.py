"""Chat client configuration.

Hides the configuration file format (a flat JSON object) and the environment
overrides. The loaded `ChatConfig` is immutable and passed explicitly to the
components that need it.
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError

DEFAULT_CHAT_URL = "wss://chat.destiny.gg/ws"
DEFAULT_CONFIG_FILE = "config.json"

# Event channel
EVENT_QUEUE_CAPACITY = 100  # Events buffered before producers block

# Startup barrier
ROSTER_POLL_INTERVAL = 0.3  # Seconds between roster polls at startup
STARTUP_TIMEOUT = 30.0  # Seconds to wait for the first roster before giving up

# Session reconnect backoff
RECONNECT_INITIAL_BACKOFF = 0.5
RECONNECT_MAX_BACKOFF = 5.0


class ChatConfig(BaseModel):
    """Read-only process-wide settings."""

    dgg_key: str = Field(default="", description="Login key sent as the authtoken cookie")
    custom_url: str = Field(default="", description="Websocket URL overriding the default chat server")
    username: str = Field(default="", description="Local nick, highlighted when mentioned")
    highlighted: list[str] = Field(default_factory=list, description="Extra terms to highlight")
    show_join_leave: bool = Field(
        default=False,
        alias="showjoinleave",
        description="Render join/quit notices in the chat log",
    )
    reconnect_attempts: int = Field(
        default=5,
        ge=0,
        le=100,
        description="Reconnects attempted after an established connection drops",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def chat_url(self) -> str:
        return self.custom_url or DEFAULT_CHAT_URL

    @property
    def highlight_terms(self) -> tuple[str, ...]:
        """Terms that highlight a chat line: username first, then configured terms."""
        terms = [self.username] if self.username else []
        terms.extend(term for term in self.highlighted if term and term not in terms)
        return tuple(terms)


def load_config(path: str | Path) -> ChatConfig:
    """Load and validate a configuration file.

    Args:
        path: Location of the JSON configuration file

    Returns:
        Validated, frozen configuration

    Raises:
        ConfigError: If the file cannot be read or is malformed
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read configuration file {config_path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"malformed configuration file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"malformed configuration file {config_path}: expected a JSON object")

    # Environment key wins over an empty file key so secrets can stay in .env
    if not data.get("dgg_key") and os.getenv("DGG_KEY"):
        data["dgg_key"] = os.getenv("DGG_KEY")

    try:
        return ChatConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"malformed configuration file {config_path}: {e}") from e
