"""Configuration loading from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from .model import ClientConfig

ENV_PREFIX = "WSIRC_"
_FIELDS = (
    "server",
    "port",
    "nick",
    "username",
    "debug",
    "secure",
    "quit_message",
    "probe_on_error",
)
_TRUTHY = ("true", "1", "yes", "on")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def load_config(env: Mapping[str, str] | None = None) -> ClientConfig:
    """Build a ClientConfig from ``WSIRC_*`` environment variables.

    Raises:
        ConfigurationError: If ``WSIRC_SERVER`` or ``WSIRC_PORT`` is missing
            or invalid.
    """
    env = os.environ if env is None else env
    data: dict[str, Any] = {}
    for field in _FIELDS:
        value = env.get(f"{ENV_PREFIX}{field.upper()}")
        if value is None or value == "":
            continue
        if field in ("debug", "secure", "probe_on_error"):
            data[field] = _parse_bool(value)
        else:
            data[field] = value
    return ClientConfig.from_dict(data)


def load_channels(env: Mapping[str, str] | None = None) -> list[str]:
    """Channels to join after registration, from ``WSIRC_CHANNELS``."""
    env = os.environ if env is None else env
    raw = env.get(f"{ENV_PREFIX}CHANNELS", "")
    channels = []
    for item in raw.split(","):
        name = item.strip()
        if not name:
            continue
        if name[0] not in "#&+!":
            name = f"#{name}"
        if name not in channels:
            channels.append(name)
    return channels
