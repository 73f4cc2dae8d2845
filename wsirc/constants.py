"""
Configuration constants for the WebSocket IRC client

This module contains all configurable constants used throughout the client.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is not None and value.strip():
        return value
    return default


# Identity defaults used when the caller leaves them out
DEFAULT_USERNAME = _get_env_str("DEFAULT_USERNAME", "websocket")
DEFAULT_NICK_PREFIX = _get_env_str("DEFAULT_NICK_PREFIX", "nick_")

# Appended to the requested nickname when the server rejects it before registration
NICK_COLLISION_SUFFIX = _get_env_str("NICK_COLLISION_SUFFIX", "_")

DEFAULT_QUIT_MESSAGE = _get_env_str("DEFAULT_QUIT_MESSAGE", "bye")

# Numeric replies acted on by the engine (compared as strings)
RPL_ENDOFMOTD = "376"
RPL_NAMREPLY = "353"
ERR_NICKNAMEINUSE = "433"

# Transport timeouts
WEBSOCKET_OPEN_TIMEOUT_SECONDS = _get_env_float("WEBSOCKET_OPEN_TIMEOUT_SECONDS", 10.0)
WEBSOCKET_CLOSE_TIMEOUT_SECONDS = _get_env_float("WEBSOCKET_CLOSE_TIMEOUT_SECONDS", 5.0)
BRIDGE_PROBE_TIMEOUT_SECONDS = _get_env_float("BRIDGE_PROBE_TIMEOUT_SECONDS", 5.0)
BRIDGE_PROBE_SNIPPET_CHARS = _get_env_int("BRIDGE_PROBE_SNIPPET_CHARS", 200)
