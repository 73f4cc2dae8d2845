from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import ConfigurationError, InternalError, TransportError


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The exception is classified into a coarse category so the error
    aggregator can group occurrences.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    error_type = "unknown"
    if isinstance(error, TransportError | OSError | ConnectionError):
        error_type = "transport"
    elif isinstance(error, ConfigurationError):
        error_type = "config"
    elif isinstance(error, InternalError):
        error_type = "internal"

    merged: dict = dict(getattr(error, "data", None) or {})
    if context:
        merged.update(context)

    log_structured_error(
        error_type=error_type,
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
    )
