"""Centralized internal error hierarchy.

Inbound protocol data never raises: the parser and engine drop what they
cannot interpret. These exceptions cover the two places that may fail.

Classes:
  InternalError        – Base for all internal errors.
  ConfigurationError   – Missing or invalid client configuration.
  TransportError       – The bridge connection failed to open, send or close.
  NotConnectedError    – A command was issued with no open transport.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal client errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ConfigurationError(InternalError):
    """Raised synchronously when the client is constructed without a usable target.

    Raised before any connection attempt is made, so callers can surface it
    directly.
    """


class TransportError(InternalError):
    """Raised for failures of the underlying bridge connection.

    Args:
        message: Error message.
        operation_type: Operation that failed (e.g., 'connect', 'send', 'close').
        data: Optional mapping of additional context data.
    """

    def __init__(
        self,
        message: str,
        *,
        operation_type: str | None = None,
        data: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(message, data=data)
        self.operation_type = operation_type


class NotConnectedError(TransportError):
    """Raised when a line is sent while no transport is open."""


__all__ = [
    "InternalError",
    "ConfigurationError",
    "TransportError",
    "NotConnectedError",
]
