"""
flash-stats - event classification and segment metrics for flash cache simulators.

The simulator drives a ``FlashStats`` instance with lifecycle events; the
instance classifies misses, counts writes, and records per-segment deltas
that the reporting helpers turn into JSON.
"""

from __future__ import annotations

__version__ = "1.0.0"

from .classifier import CacheStats, FlashStats, KeyFlagsView
from .errors import (
    EmptyInputError,
    FlashStatsError,
    ProtocolViolationError,
    UnknownMetricError,
)
from .metrics import WELL_KNOWN_COUNTERS, Counter, CounterRegistry, CounterSnapshot
from .stats import compute_sample_stats
from .windowing import SegmentRecord, SegmentWindow

__all__ = [
    "__version__",
    "CacheStats",
    "FlashStats",
    "KeyFlagsView",
    "EmptyInputError",
    "FlashStatsError",
    "ProtocolViolationError",
    "UnknownMetricError",
    "WELL_KNOWN_COUNTERS",
    "Counter",
    "CounterRegistry",
    "CounterSnapshot",
    "compute_sample_stats",
    "SegmentRecord",
    "SegmentWindow",
]
