r"""
Logging configuration module for the WebSocket IRC client.

Provides a colorlog-based root logger setup plus structured error logging
with a small in-process aggregator.
"""

import atexit
import logging
import os
import sys
import threading
import time
from collections import defaultdict
from typing import Any

import colorlog


def debug_enabled() -> bool:
    return os.environ.get("DEBUG", "").lower() in ("true", "1", "yes")


class ErrorAggregator:
    """Aggregates error occurrences per category.

    Keeps the most recent entries of each type so a summary can be logged
    when the client shuts down.
    """

    MAX_ENTRIES = 1000

    def __init__(self):
        self.errors: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.lock = threading.Lock()
        self.start_time = time.time()

    def record_error(
        self, error_type: str, message: str, context: dict[str, Any] | None = None
    ) -> None:
        with self.lock:
            self.errors[error_type].append(
                {
                    "timestamp": time.time(),
                    "message": message,
                    "context": context or {},
                }
            )
            if len(self.errors[error_type]) > self.MAX_ENTRIES:
                self.errors[error_type] = self.errors[error_type][-self.MAX_ENTRIES :]

    def get_error_summary(self) -> dict[str, Any]:
        with self.lock:
            summary = {}
            current_time = time.time()
            for error_type, occurrences in self.errors.items():
                recent_count = len(
                    [e for e in occurrences if current_time - e["timestamp"] < 3600]
                )
                summary[error_type] = {
                    "total_count": len(occurrences),
                    "recent_count": recent_count,
                    "last_occurrence": occurrences[-1] if occurrences else None,
                }
            return summary

    def clear(self) -> None:
        with self.lock:
            self.errors.clear()
            self.start_time = time.time()

    def log_summary_report(self) -> None:
        summary = self.get_error_summary()
        if not summary:
            logging.info("No errors recorded in current session")
            return

        logging.warning("🚨 ERROR SUMMARY REPORT")
        for error_type, stats in summary.items():
            logging.warning(
                f"  {error_type}: {stats['total_count']} total, "
                f"{stats['recent_count']} in last hour"
            )
            if stats["last_occurrence"]:
                logging.warning(f"    Last: {stats['last_occurrence']['message']}")


# Global error aggregator instance
error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log an error with structured context and record it for aggregation.

    Args:
        error_type: Category of the error (e.g., 'transport', 'config')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional context data for debugging
        level: Logging level (default: ERROR)
    """
    structured_message = f"[{error_type.upper()}] {message}"

    if exception:
        structured_message += f" | Exception: {type(exception).__name__}: {str(exception)}"

    if context:
        context_str = " | ".join(f"{k}={v}" for k, v in context.items())
        structured_message += f" | Context: {context_str}"

    logging.log(level, structured_message)
    error_aggregator.record_error(error_type, message, context)


class LoggerConfigurator:
    """Handles logging configuration cleanly using colorlog.

    Supports environment variable configuration for log levels.
    """

    def __init__(self, config=None):
        """Initialize the configurator.

        Args:
            config: Optional dict; ``debug`` forces DEBUG level.
        """
        self.config = config or {}
        self._configured = False

    def configure(self):
        """Configure logging with colored output using colorlog.

        Uses environment variables:
        - DEBUG: Set to 'true', '1', or 'yes' for DEBUG level, otherwise INFO
        """
        verbose = debug_enabled() or bool(self.config.get("debug"))
        log_level = logging.DEBUG if verbose else logging.INFO

        formatter = colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={
                "message": {
                    "ERROR": "red",
                    "CRITICAL": "magenta",
                }
            },
            reset=True,
        )

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        logging.basicConfig(
            level=log_level,
            handlers=[handler],
            format="%(message)s",
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)

        # Frame-level chatter from the websockets library is not useful here
        logging.getLogger("websockets").setLevel(logging.INFO)

        for h in root_logger.handlers:
            h.setFormatter(formatter)

        if not self._configured:
            atexit.register(self._log_final_error_summary)
            self._configured = True

    def _log_final_error_summary(self):
        try:
            logging.info("📊 Final error summary before shutdown:")
            error_aggregator.log_summary_report()
        except Exception as e:
            logging.error(f"Failed to log final error summary: {e}")
