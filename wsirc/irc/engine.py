"""Connection engine: per-connection registration state and line dispatch."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..constants import (
    DEFAULT_USERNAME,
    ERR_NICKNAMEINUSE,
    NICK_COLLISION_SUFFIX,
    RPL_ENDOFMOTD,
    RPL_NAMREPLY,
)
from ..logs.logger import logger
from .commands import build_nick, build_pong, handshake
from .models import (
    ConnectEvent,
    ConnectionState,
    JoinEvent,
    LineResult,
    MessageEvent,
    NamesEvent,
    NickInUseEvent,
    Phase,
)
from .parser import ParsedLine, nick_from_prefix, parse_line

_CHANNEL_TYPE_MARKERS = ("=", "*", "@")


def is_ping(line: str) -> bool:
    return line == "PING" or line.startswith("PING ")


class ConnectionEngine:
    """Consumes inbound lines in arrival order and reports events and replies.

    One instance per transport connection; a new connection needs a new
    engine so the phase starts over at UNREGISTERED. Not safe for concurrent
    use: callers feed a single ordered stream.
    """

    def __init__(
        self,
        nickname: str,
        username: str = DEFAULT_USERNAME,
        *,
        collision_suffix: str = NICK_COLLISION_SUFFIX,
        log_raw: bool = False,
    ) -> None:
        self.state = ConnectionState(nickname=nickname, username=username)
        self.collision_suffix = collision_suffix
        self.log_raw = log_raw
        self._registered_handlers: dict[
            str, Callable[[ParsedLine, LineResult], None]
        ] = {
            "PRIVMSG": self._handle_privmsg,
            "JOIN": self._handle_join,
            "NICK": self._handle_nick,
            ERR_NICKNAMEINUSE: self._handle_nick_in_use,
            RPL_NAMREPLY: self._handle_names,
        }

    @property
    def nickname(self) -> str:
        return self.state.nickname

    @property
    def username(self) -> str:
        return self.state.username

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def registered(self) -> bool:
        return self.state.registered

    def handshake(self) -> list[str]:
        return handshake(self.state.username, self.state.nickname)

    def on_line(self, raw: str) -> LineResult:
        result = LineResult()
        line = raw.rstrip("\r\n")
        if not line.strip():
            return result

        # Keepalive is answered in every phase and never reaches the parser
        if is_ping(line):
            result.outbound.append(build_pong(line))
            logger.log_event("irc", "pong", level=logging.DEBUG, nick=self.nickname)
            return result

        if self.log_raw:
            logger.log_event(
                "irc", "raw", level=logging.DEBUG, nick=self.nickname, raw=line
            )

        parsed = parse_line(line)
        if not parsed.command:
            return result

        if parsed.command == RPL_ENDOFMOTD:
            self._handle_registration(result)

        if self.state.phase is Phase.REGISTERED:
            handler = self._registered_handlers.get(parsed.command)
            if handler is not None:
                handler(parsed, result)
        elif parsed.command == ERR_NICKNAMEINUSE:
            self._retry_nick(result)

        return result

    def _handle_registration(self, result: LineResult) -> None:
        if self.state.phase is Phase.REGISTERED:
            logger.log_event(
                "irc", "already_registered", level=logging.DEBUG, nick=self.nickname
            )
            return
        self.state.phase = Phase.REGISTERED
        result.events.append(ConnectEvent())
        logger.log_event("irc", "connected", nick=self.nickname)

    def _retry_nick(self, result: LineResult) -> None:
        old_nick = self.state.nickname
        self.state.nickname = f"{old_nick}{self.collision_suffix}"
        result.outbound.append(build_nick(self.state.nickname))
        logger.log_event(
            "irc",
            "nick_retry",
            level=logging.WARNING,
            nick=self.state.nickname,
            old_nick=old_nick,
        )

    def _handle_privmsg(self, parsed: ParsedLine, result: LineResult) -> None:
        sender = nick_from_prefix(parsed.prefix)
        target = parsed.params[0] if parsed.params else ""
        if parsed.trailing is not None:
            text = parsed.trailing
        else:
            text = parsed.params[1] if len(parsed.params) > 1 else ""
        result.events.append(MessageEvent(sender=sender, text=text, target=target))
        logger.log_event(
            "irc",
            "privmsg",
            level=logging.DEBUG,
            nick=self.nickname,
            sender=sender,
            text=text,
            target=target,
        )

    def _handle_join(self, parsed: ParsedLine, result: LineResult) -> None:
        if parsed.trailing is not None:
            channel = parsed.trailing.strip()
        else:
            channel = parsed.params[0] if parsed.params else ""
        if not channel:
            return
        who = nick_from_prefix(parsed.prefix)
        result.events.append(JoinEvent(channel=channel, nick=who))
        logger.log_event(
            "irc",
            "joined",
            level=logging.DEBUG,
            nick=self.nickname,
            joined=channel,
            who=who,
        )

    def _handle_nick_in_use(self, parsed: ParsedLine, result: LineResult) -> None:
        # After registration a 433 only means a requested rename failed
        rejected = parsed.params[1] if len(parsed.params) > 1 else self.nickname
        result.events.append(NickInUseEvent(nick=rejected))
        logger.log_event(
            "irc", "nick_in_use", level=logging.WARNING, nick=rejected
        )

    def _handle_names(self, parsed: ParsedLine, result: LineResult) -> None:
        channel = _names_channel(parsed.params)
        if not channel:
            return
        names = tuple((parsed.trailing or "").split())
        result.events.append(NamesEvent(channel=channel, names=names))
        logger.log_event(
            "irc",
            "names",
            level=logging.DEBUG,
            nick=self.nickname,
            target=channel,
            count=len(names),
        )

    def _handle_nick(self, parsed: ParsedLine, result: LineResult) -> None:
        if nick_from_prefix(parsed.prefix).casefold() != self.nickname.casefold():
            return
        new_nick = parsed.last_param
        if not new_nick:
            return
        old_nick = self.state.nickname
        self.state.nickname = new_nick
        logger.log_event("irc", "nick_changed", nick=new_nick, old_nick=old_nick)


def _names_channel(params: tuple[str, ...]) -> str:
    for index, token in enumerate(params[:-1]):
        if token in _CHANNEL_TYPE_MARKERS:
            return params[index + 1]
    # Some servers omit the channel-type marker
    if len(params) > 1:
        return params[-1]
    return ""
