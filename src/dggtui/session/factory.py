from ..config import ChatConfig
from .base import ChatSession
from .dgg import DggSession


def create_session(config: ChatConfig, **kwargs) -> ChatSession:
    """Create a chat session from configuration.

    This factory function hides which session implementation is used.

    Args:
        config: Loaded client configuration
        **kwargs: Extra options forwarded to the session
            - connect_timeout: float (default: 10.0)
            - heartbeat: float (default: 30.0)

    Returns:
        Unopened chat session
    """
    return DggSession(
        url=config.chat_url,
        auth_key=config.dgg_key,
        reconnect_attempts=config.reconnect_attempts,
        **kwargs,
    )
