"""Counters and the named counter registry."""

from .counter import Counter, CounterSnapshot
from .registry import WELL_KNOWN_COUNTERS, CounterRegistry

__all__ = ["Counter", "CounterSnapshot", "CounterRegistry", "WELL_KNOWN_COUNTERS"]
