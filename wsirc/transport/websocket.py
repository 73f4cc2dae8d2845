"""WebSocket bridge transport."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException

from ..constants import WEBSOCKET_CLOSE_TIMEOUT_SECONDS, WEBSOCKET_OPEN_TIMEOUT_SECONDS
from ..errors.internal import NotConnectedError, TransportError
from ..logs.logger import logger

WEBSOCKET_NOT_CONNECTED_ERROR = "WebSocket not connected"


def split_lines(data: str | bytes) -> list[str]:
    """Split one received frame into its non-empty protocol lines."""
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    return [line for line in data.replace("\r\n", "\n").split("\n") if line.strip("\r")]


class WebSocketTransport:
    """Carries IRC lines over a WebSocket-to-IRC bridge.

    Each outbound line goes out as one text frame; the bridge terminates it
    for the IRC server. Inbound frames may carry one or more CRLF-terminated
    lines.

    Attributes:
        url (str): Bridge URL, ``ws://`` or ``wss://``.
        ws: Active connection, or None.
    """

    def __init__(
        self,
        url: str,
        *,
        open_timeout: float = WEBSOCKET_OPEN_TIMEOUT_SECONDS,
        close_timeout: float = WEBSOCKET_CLOSE_TIMEOUT_SECONDS,
    ) -> None:
        self.url = url
        self.open_timeout = open_timeout
        self.close_timeout = close_timeout
        self.ws = None
        self._open = False

    @property
    def is_open(self) -> bool:
        return self.ws is not None and self._open

    async def open(self) -> None:
        """Connect to the bridge.

        Raises:
            TransportError: If the connection cannot be established.
        """
        logger.log_event("transport", "connecting", level=logging.DEBUG, url=self.url)
        try:
            self.ws = await websockets.connect(
                self.url,
                open_timeout=self.open_timeout,
                close_timeout=self.close_timeout,
            )
        except (OSError, TimeoutError, asyncio.TimeoutError, WebSocketException) as e:
            self.ws = None
            raise TransportError(
                f"WebSocket connection failed: {str(e)}",
                operation_type="connect",
                data={"url": self.url},
            ) from e
        self._open = True

    async def send(self, line: str) -> None:
        """Send one line as a text frame.

        Raises:
            NotConnectedError: If the transport is not open.
            TransportError: If the frame could not be written.
        """
        if not self.is_open:
            raise NotConnectedError(WEBSOCKET_NOT_CONNECTED_ERROR, operation_type="send")
        try:
            await self.ws.send(line)
        except ConnectionClosed as e:
            self._open = False
            raise TransportError(
                f"WebSocket closed while sending: {str(e)}", operation_type="send"
            ) from e

    async def lines(self) -> AsyncIterator[str]:
        """Yield inbound lines until the bridge closes the connection.

        A clean close ends iteration; an abnormal one raises TransportError.
        Cancellation leaves the transport open so the caller can still QUIT.
        """
        if self.ws is None:
            raise NotConnectedError(WEBSOCKET_NOT_CONNECTED_ERROR, operation_type="receive")
        while True:
            try:
                frame = await self.ws.recv()
            except ConnectionClosedOK:
                self._open = False
                return
            except ConnectionClosed as e:
                self._open = False
                raise TransportError(
                    f"WebSocket closed abnormally: {str(e)}", operation_type="receive"
                ) from e
            for line in split_lines(frame):
                yield line

    async def close(self) -> None:
        if self.ws is None:
            return
        ws, self.ws = self.ws, None
        self._open = False
        try:
            await ws.close(code=1000)
        except (OSError, WebSocketException) as e:
            logger.log_event(
                "transport", "close_error", level=logging.WARNING, error=str(e)
            )
