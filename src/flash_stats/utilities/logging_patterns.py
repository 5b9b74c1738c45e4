"""
Structured logging helpers shared by the classifier, reporting and CLI.
"""

import contextlib
import logging
import time
from collections.abc import Generator
from typing import Any

# Keyword arguments forwarded to ``Logger.log`` instead of ``extra``
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})


class StructuredLogger:
    """Logger wrapper whose keyword arguments become ``extra`` fields tagged with a component."""

    def __init__(self, name: str, component: str | None = None):
        self.logger = logging.getLogger(name)
        self.component = component
        self.name = name

    def _split_kwargs(self, kwargs: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        passthrough = {k: v for k, v in kwargs.items() if k in _LOGGING_KWARGS}
        extra = {k: v for k, v in kwargs.items() if k not in _LOGGING_KWARGS}
        if self.component:
            extra["component"] = self.component
        return passthrough, extra

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        passthrough, extra = self._split_kwargs(kwargs)
        self.logger.log(level, msg, *args, extra=extra, **passthrough)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.CRITICAL, msg, *args, **kwargs)


def get_logger(name: str, component: str | None = None) -> StructuredLogger:
    return StructuredLogger(name, component=component)


def _ensure_structured(logger: Any) -> StructuredLogger | None:
    if logger is None:
        return None
    if isinstance(logger, StructuredLogger):
        return logger
    if isinstance(logger, logging.Logger):
        return StructuredLogger(logger.name)
    if hasattr(logger, "name"):
        return StructuredLogger(logger.name)
    return StructuredLogger("unknown")


@contextlib.contextmanager
def log_operation(
    operation: str, logger: Any = None, level: int = logging.INFO, **context: Any
) -> Generator[None, None, None]:
    if logger is None:
        logger = get_logger("operation")
    else:
        logger = _ensure_structured(logger)

    start_context = {"operation": operation}
    start_context.update(context)

    logger.log(level, f"Started {operation}", **start_context)

    start_time = time.time()
    try:
        yield
    finally:
        duration = (time.time() - start_time) * 1000
        end_context = {"duration_ms": f"{duration:.2f}", "operation": operation}

        final_context = start_context.copy()
        final_context.update(end_context)
        logger.log(level, f"Completed {operation}", **final_context)


def log_error_with_context(
    exc: Exception, operation: str, component: str | None = None, logger: Any = None, **kwargs: Any
) -> None:
    if logger is None:
        logger = get_logger("error")
    else:
        logger = _ensure_structured(logger)

    context: dict[str, Any] = {"operation": operation, "error_type": type(exc).__name__}
    if component:
        context["component"] = component
    context.update(kwargs)
    logger.error(str(exc), **context)


def log_segment_collected(segment: int, logger: Any = None, **metrics: Any) -> None:
    if logger is None:
        logger = get_logger("segments")
    else:
        logger = _ensure_structured(logger)

    context: dict[str, Any] = {"operation": "collect_periodic_stats", "segment": segment}
    context.update(metrics)
    logger.debug(f"Segment {segment} collected", **context)


__all__ = [
    "StructuredLogger",
    "get_logger",
    "log_operation",
    "log_error_with_context",
    "log_segment_collected",
]
