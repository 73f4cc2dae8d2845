"""Caller-registered event hooks."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..logs.logger import logger
from .models import DomainEvent, EventKind

Hook = Callable[..., Awaitable[None] | None]


def _noop(*_args: Any) -> None:
    return None


class HandlerSet:
    """One callback slot per event kind.

    Registering a kind again replaces the previous callback. The ``on_*``
    helpers return the set itself so registrations can be chained.
    """

    def __init__(self) -> None:
        self._hooks: dict[EventKind, Hook] = {kind: _noop for kind in EventKind}

    def register(self, kind: EventKind, hook: Hook | None) -> HandlerSet:
        self._hooks[kind] = hook if hook is not None else _noop
        return self

    def get(self, kind: EventKind) -> Hook:
        return self._hooks[kind]

    def is_registered(self, kind: EventKind) -> bool:
        return self._hooks[kind] is not _noop

    def on_message(self, hook: Hook) -> HandlerSet:
        return self.register(EventKind.MESSAGE, hook)

    def on_join(self, hook: Hook) -> HandlerSet:
        return self.register(EventKind.JOIN, hook)

    def on_connect(self, hook: Hook) -> HandlerSet:
        return self.register(EventKind.CONNECT, hook)

    def on_names(self, hook: Hook) -> HandlerSet:
        return self.register(EventKind.NAMES, hook)

    def on_nick_in_use(self, hook: Hook) -> HandlerSet:
        return self.register(EventKind.NICK_IN_USE, hook)

    def on_open(self, hook: Hook) -> HandlerSet:
        return self.register(EventKind.OPEN, hook)

    def on_close(self, hook: Hook) -> HandlerSet:
        return self.register(EventKind.CLOSE, hook)

    def on_error(self, hook: Hook) -> HandlerSet:
        return self.register(EventKind.ERROR, hook)

    async def dispatch(self, kind: EventKind, *args: Any) -> None:
        """Invoke the hook for ``kind``; a failing hook is logged, not raised."""
        hook = self._hooks[kind]
        if hook is _noop:
            return
        try:
            if inspect.iscoroutinefunction(hook):
                await hook(*args)
            else:
                maybe = hook(*args)
                if inspect.isawaitable(maybe):
                    await maybe
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "irc",
                "handler_error",
                level=logging.ERROR,
                kind=kind.value,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def deliver(self, event: DomainEvent) -> None:
        await self.dispatch(event.kind, *event.args())
