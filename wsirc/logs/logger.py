"""Structured event logger."""

from __future__ import annotations

import logging

from ..logging_config import debug_enabled


class ClientLogger:
    def __init__(self, name: str = "wsirc") -> None:
        # Fixed width for event name column when in debug (alignment)
        self._event_name_width = 32
        self._force_debug = False
        self.logger = logging.getLogger(name)

    def set_debug(self, enabled: bool) -> None:
        """Turn verbose (debug-format) output on regardless of the DEBUG env var."""
        self._force_debug = enabled
        if enabled:
            self.logger.setLevel(logging.DEBUG)

    def is_debug_enabled(self) -> bool:
        return self._force_debug or debug_enabled()

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        event_name = f"{domain}_{action}".lower()
        human_text = human
        derived = False
        if human_text is None:
            # Local import to avoid cyclic import issues during module init.
            from .event_catalog import EVENT_TEMPLATES as _event_templates

            template = _event_templates.get((domain, action))
            if template:
                try:
                    human_text = template.format(**kwargs)
                except (KeyError, IndexError, ValueError):
                    human_text = template
            else:
                human_text = f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
                derived = True
        kwargs.setdefault("_human_text", human_text)
        if derived:
            kwargs.setdefault("derived", True)
        self._log(level, event_name, exc_info=exc_info, **kwargs)

    def _log(
        self, level: int, event_name: str, exc_info: bool = False, **kwargs: object
    ) -> None:
        kw: dict[str, object] = dict(kwargs)  # copy for mutation in extract
        nick, channel, human_text = self._extract_reserved(kw)
        prefix = self._build_prefix(nick, channel)
        if self.is_debug_enabled():
            msg = self._build_debug_message(
                event_name, prefix, human_text, kw, self._event_name_width
            )
        else:
            msg = f"{prefix} {human_text or event_name}"
        self.logger.log(level, msg, exc_info=exc_info)

    @staticmethod
    def _extract_reserved(
        kwargs: dict[str, object],
    ) -> tuple[str | None, str | None, str | None]:
        nick_o = kwargs.pop("nick", None)
        channel_o = kwargs.pop("channel", None)
        human_text_o = kwargs.pop("_human_text", None)
        nick = nick_o if isinstance(nick_o, str) else None
        channel = channel_o if isinstance(channel_o, str) else None
        human_text = human_text_o if isinstance(human_text_o, str) else None
        return nick, channel, human_text

    @staticmethod
    def _build_prefix(nick: str | None, channel: str | None) -> str:
        core = nick or "system"
        if channel:
            core = f"{core}@{channel}"
        padded = core.ljust(24)[:24]
        return f"[{padded}]"

    @staticmethod
    def _build_debug_message(
        event_name: str,
        prefix: str,
        human_text: str | None,
        kwargs: dict[str, object],
        width: int,
    ) -> str:
        context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        if len(event_name) <= width:
            ev = event_name.ljust(width)
        else:
            ev = event_name[: width - 1] + "…"
        base = f"{ev} {prefix}"
        if human_text:
            base = f"{base} {human_text}"
        if context:
            base = f"{base} ({context})"
        return base


logger = ClientLogger()
