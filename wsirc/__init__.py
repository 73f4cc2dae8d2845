"""WebSocket-to-IRC bridge client.

Turns newline-terminated IRC lines delivered over a WebSocket bridge into
structured events, and caller intents into framed outgoing IRC lines.
"""

from .client import WsIrcClient  # noqa: F401
from .config import ClientConfig, load_config  # noqa: F401
from .irc import ConnectionEngine, HandlerSet, ParsedLine, parse_line  # noqa: F401

__all__ = [
    "WsIrcClient",
    "ClientConfig",
    "load_config",
    "ConnectionEngine",
    "HandlerSet",
    "ParsedLine",
    "parse_line",
]
