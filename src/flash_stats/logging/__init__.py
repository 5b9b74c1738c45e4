"""Centralised logging configuration for the ``flash_stats`` package."""

from __future__ import annotations

from .correlation import get_correlation_id, run_context
from .setup import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "run_context"]
