"""Logging setup for simulation runs: console, rotating file and JSON handlers."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from flash_stats.config.constants import LOG_BACKUP_COUNT, LOG_MAX_BYTES
from flash_stats.logging.json_formatter import StructuredJSONFormatter
from flash_stats.settings import Settings

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """
    Configure console logging and, when ``settings.log_dir`` is set, rotating
    text and JSON log files under that directory.

    Calling this more than once does not duplicate handlers.
    """

    root = logging.getLogger()
    root.setLevel(logging.getLevelName(settings.log_level))

    existing_targets = {
        getattr(handler, "baseFilename", None)
        for handler in root.handlers
        if hasattr(handler, "baseFilename")
    }

    # Exclude file handlers and pytest capture handlers
    console_handlers = [
        h
        for h in root.handlers
        if isinstance(h, logging.StreamHandler)
        and not isinstance(h, logging.FileHandler)
        and type(h).__name__ not in {"LogCaptureHandler", "_LiveLoggingNullHandler"}
    ]
    if not console_handlers:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(_TEXT_FORMAT))
        root.addHandler(console)

    if settings.log_dir is None:
        return

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    text_path = str((log_dir / "flash_stats.log").resolve())
    if text_path not in existing_targets:
        text_handler = logging.handlers.RotatingFileHandler(
            text_path,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
        )
        text_handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
        root.addHandler(text_handler)

    json_path = str((log_dir / "flash_stats.jsonl").resolve())
    if json_path not in existing_targets:
        json_handler = logging.handlers.RotatingFileHandler(
            json_path,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
        )
        json_handler.setFormatter(StructuredJSONFormatter())
        root.addHandler(json_handler)


__all__ = ["configure_logging"]
