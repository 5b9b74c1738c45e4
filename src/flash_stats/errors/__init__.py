"""
Centralized error handling for flash-stats

Every error raised by the instrumentation derives from ``FlashStatsError`` so
callers can tell caller-protocol violations (fatal) apart from recoverable
conditions such as an empty sample or an unknown metric name.
"""

import sys
import traceback
from datetime import datetime
from typing import Any


def _capture_traceback() -> str:
    """Return the active traceback or, if none, a snapshot of the current stack."""

    exc_type, exc_value, exc_tb = sys.exc_info()
    if exc_type is not None and exc_tb is not None:
        return "".join(traceback.format_exception(exc_type, exc_value, exc_tb))

    stack = traceback.format_stack()
    if not stack:
        return ""
    # Drop the last frame so the helper itself does not appear in the stack trace
    return "".join(stack[:-1])


class FlashStatsError(Exception):
    """Base exception class for all instrumentation errors"""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        recoverable: bool = True,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.recoverable = recoverable
        self.timestamp = datetime.now()
        self.traceback = _capture_traceback()
        self.original_error = original_error

    def add_context(self, **kwargs: Any) -> "FlashStatsError":
        """Add additional context to the error"""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "recoverable": self.recoverable,
            "timestamp": self.timestamp.isoformat(),
            "traceback": self.traceback,
        }


class ProtocolViolationError(FlashStatsError):
    """Raised when the simulator issues events in an order the classifier cannot accept.

    These always indicate a bug in the caller and are never recoverable.
    """

    def __init__(
        self,
        message: str,
        event: str,
        key: int | None = None,
        size: int | None = None,
        flags: dict[str, bool] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code="PROTOCOL_VIOLATION", recoverable=False, **kwargs)
        self.add_context(event=event, key=key, size=size, flags=flags)


class UnknownMetricError(FlashStatsError):
    """Raised when a strict lookup names a metric outside the well-known set"""

    def __init__(self, message: str, metric: str, **kwargs: Any) -> None:
        super().__init__(message, error_code="UNKNOWN_METRIC", **kwargs)
        self.add_context(metric=metric)


class EmptyInputError(FlashStatsError, ValueError):
    """Raised when sample statistics are requested for an empty sample"""

    def __init__(
        self, message: str = "cannot compute statistics of an empty sample", **kwargs: Any
    ) -> None:
        super().__init__(message, error_code="EMPTY_INPUT", **kwargs)


class ConfigurationError(FlashStatsError):
    """Raised when there are configuration issues"""

    def __init__(self, message: str, config_key: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, error_code="CONFIG_ERROR", recoverable=False, **kwargs)
        if config_key:
            self.add_context(config_key=config_key)


class TraceFormatError(FlashStatsError):
    """Raised when a recorded event log line cannot be parsed"""

    def __init__(
        self, message: str, line_number: int | None = None, line: str | None = None, **kwargs: Any
    ) -> None:
        super().__init__(message, error_code="TRACE_FORMAT_ERROR", recoverable=False, **kwargs)
        if line_number is not None:
            self.add_context(line_number=line_number, line=line)


__all__ = [
    "FlashStatsError",
    "ProtocolViolationError",
    "UnknownMetricError",
    "EmptyInputError",
    "ConfigurationError",
    "TraceFormatError",
]
