"""
Named counter registry for the flash cache instrumentation.

A fixed set of well-known names is created up front so reports always carry
them, even when zero. Callers may add ad-hoc counters on first increment
unless the registry runs in strict mode.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from flash_stats.errors import UnknownMetricError
from flash_stats.metrics.counter import ZERO, Counter, CounterSnapshot

WELL_KNOWN_COUNTERS: tuple[str, ...] = (
    "total_reads",
    "total_misses",
    "total_hits",
    "compulsory_misses",
    "capacity_misses",
    "wa_skip_misses",
    "one_hit_misses",
    "copyfwd_hits",
    "copy_forwards",
    "inserts",
    "reinserts",
    "skipped_copyfwds",
    "skipped_inserts",
    "objects_written",
    "total_placements",
    "dram_hits",
    "dram_misses",
)


class CounterRegistry:
    """Mapping from metric name to ``Counter``."""

    def __init__(self, names: Iterable[str] = WELL_KNOWN_COUNTERS, strict: bool = False) -> None:
        self.strict = strict
        self._well_known = frozenset(names)
        self._counters: dict[str, Counter] = {name: Counter() for name in names}

    def increment(self, name: str, size: int) -> None:
        """Increment the named counter, creating it if allowed.

        Raises:
            UnknownMetricError: strict mode is on and ``name`` is not well known.
        """
        counter = self._counters.get(name)
        if counter is None:
            if self.strict and name not in self._well_known:
                raise UnknownMetricError(f"Unknown metric name: {name}", metric=name)
            counter = self._counters[name] = Counter()
        counter.increment(size)

    def get(self, name: str) -> CounterSnapshot:
        """Return a read-only view; absent names read as zero."""
        counter = self._counters.get(name)
        return counter.snapshot() if counter is not None else ZERO

    def names(self) -> list[str]:
        return list(self._counters)

    def as_dict(self) -> dict[str, CounterSnapshot]:
        return {name: counter.snapshot() for name, counter in self._counters.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._counters

    def __iter__(self) -> Iterator[str]:
        return iter(self._counters)

    def __len__(self) -> int:
        return len(self._counters)
