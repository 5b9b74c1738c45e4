"""JSON logging formatter with run correlation and structured field support."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from .correlation import get_log_context

# LogRecord attributes that never count as extra fields
_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "asctime",
    }
)


class StructuredJSONFormatter(logging.Formatter):
    """JSON formatter that merges StructuredLogger fields and the run context."""

    def __init__(
        self,
        *,
        ensure_ascii: bool = False,
        default: Any = str,
        sort_keys: bool = False,
        timestamp_format: str = "%Y-%m-%dT%H:%M:%S.%fZ",
    ) -> None:
        """Initialize the JSON formatter.

        Args:
            ensure_ascii: Whether to ensure ASCII encoding in JSON output
            default: Default function for JSON serialization of non-serializable objects
            sort_keys: Whether to sort keys in the JSON output
            timestamp_format: Format string for timestamps
        """
        super().__init__()
        self.ensure_ascii = ensure_ascii
        self.default = default
        self.sort_keys = sort_keys
        self.timestamp_format = timestamp_format

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self._format_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName if record.funcName is not None else "<module>",
            "line": record.lineno,
        }

        run_context = get_log_context()
        if run_context:
            log_entry.update(run_context)

        if record.exc_info:
            log_entry["exception"] = self._format_exception(record.exc_info)

        if record.stack_info:
            log_entry["stack_trace"] = record.stack_info

        for key, value in self._extract_extra_fields(record).items():
            # Avoid overwriting standard fields
            if key not in log_entry:
                log_entry[key] = value

        log_entry = self._redact_data(log_entry)

        try:
            return json.dumps(
                log_entry,
                ensure_ascii=self.ensure_ascii,
                default=self.default,
                sort_keys=self.sort_keys,
            )
        except (TypeError, ValueError) as exc:
            fallback_entry = {
                "timestamp": log_entry["timestamp"],
                "level": log_entry["level"],
                "logger": log_entry["logger"],
                "message": f"JSON serialization failed: {exc}",
                "original_message": str(log_entry.get("message", "")),
            }
            return json.dumps(fallback_entry, ensure_ascii=self.ensure_ascii)

    # Compared after lower-casing and dropping "_" and "-"; the cache "key" field is not sensitive
    SENSITIVE_KEYS = frozenset(
        {
            "apikey",
            "privatekey",
            "secret",
            "password",
            "token",
            "accesstoken",
            "authorization",
            "cookie",
            "credentials",
            "passphrase",
        }
    )

    def _redact_data(self, data: Any) -> Any:
        """Recursively redact sensitive keys in dictionaries."""
        if isinstance(data, dict):
            return {
                k: "[REDACTED]" if self._is_sensitive(k) else self._redact_data(v)
                for k, v in data.items()
            }
        if isinstance(data, list | tuple):
            return [self._redact_data(item) for item in data]
        return data

    def _is_sensitive(self, key: Any) -> bool:
        if not isinstance(key, str):
            return False
        return key.lower().replace("_", "").replace("-", "") in self.SENSITIVE_KEYS

    def _format_timestamp(self, created: float) -> str:
        dt = datetime.fromtimestamp(created, UTC)
        return dt.strftime(self.timestamp_format)

    def _format_exception(self, exc_info: Any) -> dict[str, Any]:
        if not exc_info:
            return {}

        exc_type, exc_value, _ = exc_info
        formatted: dict[str, Any] = {
            "type": exc_type.__name__ if exc_type else "Unknown",
            "message": str(exc_value) if exc_value else "",
        }
        # FlashStatsError carries the offending key/event in its context
        context = getattr(exc_value, "context", None)
        if isinstance(context, dict) and context:
            formatted["context"] = context
        return formatted

    def _extract_extra_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
