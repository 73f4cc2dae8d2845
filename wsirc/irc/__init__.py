"""IRC protocol package.

Line parsing, the per-connection engine, outbound line builders and the
caller hook registry.
"""

from . import commands  # noqa: F401
from .engine import ConnectionEngine  # noqa: F401
from .handlers import HandlerSet  # noqa: F401
from .models import (  # noqa: F401
    ConnectEvent,
    ConnectionState,
    EventKind,
    JoinEvent,
    LineResult,
    MessageEvent,
    NamesEvent,
    NickInUseEvent,
    Phase,
)
from .parser import ParsedLine, nick_from_prefix, parse_line  # noqa: F401

__all__ = [
    "commands",
    "ConnectionEngine",
    "HandlerSet",
    "ConnectEvent",
    "ConnectionState",
    "EventKind",
    "JoinEvent",
    "LineResult",
    "MessageEvent",
    "NamesEvent",
    "NickInUseEvent",
    "Phase",
    "ParsedLine",
    "nick_from_prefix",
    "parse_line",
]
