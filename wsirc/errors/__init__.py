"""Error hierarchy and error logging helpers."""

from .handling import log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigurationError,
    InternalError,
    NotConnectedError,
    TransportError,
)

__all__ = [
    "InternalError",
    "ConfigurationError",
    "TransportError",
    "NotConnectedError",
    "log_error",
]
