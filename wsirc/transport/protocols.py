"""Protocol definition for the line transport the client runs over.

Any object with these members can carry the client: the WebSocket bridge
connection in production, an in-memory fake in tests.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol


class Transport(Protocol):
    """Ordered, line-delimited, bidirectional text channel."""

    @property
    def is_open(self) -> bool:
        """Whether lines can currently be sent."""
        ...

    async def open(self) -> None:
        """Establish the connection."""
        ...

    async def send(self, line: str) -> None:
        """Send one protocol line (no terminator)."""
        ...

    def lines(self) -> AsyncIterator[str]:
        """Yield inbound protocol lines in arrival order until the peer closes."""
        ...

    async def close(self) -> None:
        """Close the connection; safe to call more than once."""
        ...
