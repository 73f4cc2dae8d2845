"""High-level WebSocket IRC client.

Wires a bridge transport to a fresh ConnectionEngine per connection and
delivers engine events to the caller's hooks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .config.model import ClientConfig
from .diagnostics import probe_bridge
from .errors.handling import log_error
from .errors.internal import ConfigurationError, NotConnectedError, TransportError
from .irc import commands
from .irc.engine import ConnectionEngine
from .irc.handlers import HandlerSet
from .irc.models import EventKind
from .logs.logger import logger
from .transport.protocols import Transport
from .transport.websocket import WebSocketTransport

TransportFactory = Callable[[str], Transport]


class WsIrcClient:
    """IRC client speaking through a WebSocket-to-IRC bridge.

    Example:
        >>> client = WsIrcClient({"server": "bridge.example", "port": 7667, "nick": "bot"})
        >>> client.handle().on_connect(lambda: client.join("#room"))
        >>> await client.connect()

    Args:
        config: ClientConfig or a mapping accepted by ``ClientConfig.from_dict``.
        transport_factory: Builds the transport for a URL; defaults to
            WebSocketTransport.

    Raises:
        ConfigurationError: If no server or port is configured.
    """

    def __init__(
        self,
        config: ClientConfig | Mapping[str, Any],
        *,
        transport_factory: TransportFactory | None = None,
    ) -> None:
        if isinstance(config, Mapping):
            config = ClientConfig.from_dict(config)
        elif not isinstance(config, ClientConfig):
            raise ConfigurationError("No server or port specified")
        self.config = config
        self.handler = HandlerSet()
        self.engine: ConnectionEngine | None = None
        self.transport: Transport | None = None
        self._transport_factory = transport_factory or WebSocketTransport
        if config.debug:
            logger.set_debug(True)

    def handle(self) -> HandlerSet:
        return self.handler

    @property
    def nickname(self) -> str:
        return self.engine.nickname if self.engine else self.config.nick

    @property
    def registered(self) -> bool:
        return self.engine is not None and self.engine.registered

    @property
    def is_connected(self) -> bool:
        return self.transport is not None and self.transport.is_open

    async def connect(self, transport: Transport | None = None) -> None:
        """Open the bridge, register, and process lines until it closes.

        A new engine is created for every call, so registration always
        starts over. Transport failures are reported through the error and
        close hooks rather than raised.
        """
        self.engine = ConnectionEngine(
            self.config.nick,
            self.config.username,
            log_raw=self.config.debug or logger.is_debug_enabled(),
        )
        self.transport = transport or self._transport_factory(self.config.url)
        try:
            await self.transport.open()
            for line in self.engine.handshake():
                await self._send(line)
        except TransportError as e:
            await self._report_error(e)
            await self._finish()
            return

        logger.log_event("transport", "open", nick=self.nickname, url=self.config.url)
        await self.handler.dispatch(EventKind.OPEN)
        await self.run()

    async def run(self) -> None:
        """Consume inbound lines in order until the transport ends."""
        if self.transport is None or self.engine is None:
            raise NotConnectedError("Client not connected", operation_type="receive")
        try:
            async for line in self.transport.lines():
                await self.process_line(line)
        except TransportError as e:
            await self._report_error(e)
        await self._finish()

    async def process_line(self, line: str) -> None:
        """Feed one inbound line to the engine, send its replies, deliver its events."""
        if self.engine is None:
            raise NotConnectedError("Client not connected", operation_type="receive")
        result = self.engine.on_line(line)
        for outbound in result.outbound:
            await self._send(outbound)
        for event in result.events:
            await self.handler.deliver(event)

    async def _send(self, line: str) -> None:
        if self.transport is None or not self.transport.is_open:
            raise NotConnectedError("WebSocket not connected", operation_type="send")
        if self.config.debug:
            logger.log_event(
                "irc", "outbound", level=logging.DEBUG, nick=self.nickname, line=line
            )
        await self.transport.send(line)

    async def _report_error(self, error: TransportError) -> None:
        log_error("Transport failure", error, {"url": self.config.url})
        logger.log_event(
            "transport", "error", level=logging.ERROR, nick=self.nickname, error=str(error)
        )
        await self.handler.dispatch(EventKind.ERROR, error)
        if self.config.probe_on_error:
            await probe_bridge(self.config.server, self.config.port)

    async def _finish(self) -> None:
        if self.transport is not None:
            await self.transport.close()
        logger.log_event("transport", "closed", nick=self.nickname)
        await self.handler.dispatch(EventKind.CLOSE)

    async def send(self, nick_or_channel: str, message: str) -> None:
        await self._send(commands.build_privmsg(nick_or_channel, message))

    async def change_nick(self, new_nick: str) -> None:
        # The engine adopts the new nickname once the server echoes NICK back
        await self._send(commands.build_nick(new_nick))

    async def join(self, channel: str) -> None:
        await self._send(commands.build_join(channel))

    async def part(self, channel: str) -> None:
        await self._send(commands.build_part(channel))

    async def quit(self, message: str) -> None:
        await self._send(commands.build_quit(message))

    async def mode(self, channel: str, mode: str) -> None:
        await self._send(commands.build_mode(channel, mode))

    async def kick(self, channel: str, nick: str, message: str) -> None:
        await self._send(commands.build_kick(channel, nick, message))

    async def topic(self, channel: str, topic: str) -> None:
        await self._send(commands.build_topic(channel, topic))

    async def names(self, channel: str) -> None:
        await self._send(commands.build_names(channel))

    async def close(self, message: str | None = None) -> None:
        """Send QUIT and close the transport."""
        if self.transport is None:
            return
        if self.transport.is_open:
            await self.quit(self.config.quit_message if message is None else message)
        await self.transport.close()

    async def __aenter__(self) -> WsIrcClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
