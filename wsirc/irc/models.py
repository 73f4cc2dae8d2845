"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar


class Phase(Enum):
    UNREGISTERED = auto()
    REGISTERED = auto()


class EventKind(Enum):
    MESSAGE = "message"
    JOIN = "join"
    CONNECT = "connect"
    NAMES = "names"
    NICK_IN_USE = "nick_in_use"
    OPEN = "open"
    CLOSE = "close"
    ERROR = "error"


@dataclass(slots=True)
class ConnectionState:
    nickname: str
    username: str
    phase: Phase = Phase.UNREGISTERED

    @property
    def registered(self) -> bool:
        return self.phase is Phase.REGISTERED


@dataclass(frozen=True, slots=True)
class ConnectEvent:
    kind: ClassVar[EventKind] = EventKind.CONNECT

    def args(self) -> tuple:
        return ()


@dataclass(frozen=True, slots=True)
class MessageEvent:
    kind: ClassVar[EventKind] = EventKind.MESSAGE
    sender: str
    text: str
    target: str = ""

    def args(self) -> tuple:
        return (self.sender, self.text)


@dataclass(frozen=True, slots=True)
class JoinEvent:
    kind: ClassVar[EventKind] = EventKind.JOIN
    channel: str
    nick: str = ""

    def args(self) -> tuple:
        return (self.channel,)


@dataclass(frozen=True, slots=True)
class NamesEvent:
    kind: ClassVar[EventKind] = EventKind.NAMES
    channel: str
    names: tuple[str, ...] = ()

    def args(self) -> tuple:
        return (self.channel, list(self.names))


@dataclass(frozen=True, slots=True)
class NickInUseEvent:
    kind: ClassVar[EventKind] = EventKind.NICK_IN_USE
    nick: str = ""

    def args(self) -> tuple:
        return ()


DomainEvent = ConnectEvent | MessageEvent | JoinEvent | NamesEvent | NickInUseEvent


@dataclass(slots=True)
class LineResult:
    """What one inbound line produced, both lists in emission order."""

    events: list[DomainEvent] = field(default_factory=list)
    outbound: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.events or self.outbound)
