"""Bridge transport package."""

from .protocols import Transport  # noqa: F401
from .websocket import WebSocketTransport, split_lines  # noqa: F401

__all__ = ["Transport", "WebSocketTransport", "split_lines"]
