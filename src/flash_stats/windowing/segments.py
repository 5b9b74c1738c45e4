"""
Segment windowing over the counter registry.

Each call to ``SegmentWindow.collect`` closes one segment: it diffs the
tracked counters against the snapshot taken at the previous call and appends
exactly one ``SegmentRecord``. Per-metric sequences are read back from the
records, so every sequence always has one entry per collected segment.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from flash_stats.errors import UnknownMetricError
from flash_stats.metrics.counter import ZERO, CounterSnapshot
from flash_stats.metrics.registry import CounterRegistry

# Counters whose deltas feed a segment record
TRACKED_COUNTERS: tuple[str, ...] = ("total_reads", "total_hits", "total_misses", "inserts")


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator``, or 0.0 when the denominator is zero."""
    if not denominator:
        return 0.0
    return numerator / denominator


@dataclass(frozen=True)
class SegmentRecord:
    """Deltas and derived ratios for one segment."""

    bytes_read: int = 0
    objects_read: int = 0
    bytes_hit: int = 0
    objects_hit: int = 0
    bytes_missed: int = 0
    objects_missed: int = 0
    inserted_bytes: int = 0
    flash_bytes_written: int = 0
    utilization: int = 0
    byte_hit_ratio: float = 0.0
    object_hit_ratio: float = 0.0
    write_amplification: float = 0.0
    # all-time flash bytes written over all-time inserted bytes at collection time
    cumulative_write_amplification: float = 0.0

    @property
    def byte_miss_ratio(self) -> float:
        return 1.0 - self.byte_hit_ratio if self.bytes_read else 0.0

    @property
    def object_miss_ratio(self) -> float:
        return 1.0 - self.object_hit_ratio if self.objects_read else 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


SEGMENT_METRICS: tuple[str, ...] = tuple(f.name for f in fields(SegmentRecord)) + (
    "byte_miss_ratio",
    "object_miss_ratio",
)


class SegmentWindow:
    """Ordered per-period records plus the snapshots needed for the next delta."""

    def __init__(self, period: int) -> None:
        self.period = period
        self._records: list[SegmentRecord] = []
        self._last: dict[str, CounterSnapshot] = {name: ZERO for name in TRACKED_COUNTERS}
        self._last_flash_bytes_written = 0

    @property
    def records(self) -> tuple[SegmentRecord, ...]:
        return tuple(self._records)

    def collect(
        self,
        registry: CounterRegistry,
        total_size: int = 0,
        flash_bytes_written: int = 0,
    ) -> SegmentRecord:
        """Close the current segment and start the next one.

        Args:
            registry: Counters to diff against the previous snapshot.
            total_size: Caller-supplied cache occupancy for this segment.
            flash_bytes_written: All-time flash bytes written so far.

        Returns:
            The record appended for the segment just closed.
        """
        current = {name: registry.get(name) for name in TRACKED_COUNTERS}
        reads = current["total_reads"] - self._last["total_reads"]
        hits = current["total_hits"] - self._last["total_hits"]
        misses = current["total_misses"] - self._last["total_misses"]
        inserts = current["inserts"] - self._last["inserts"]
        fbw = flash_bytes_written - self._last_flash_bytes_written

        record = SegmentRecord(
            bytes_read=reads.byte_count,
            objects_read=reads.object_count,
            bytes_hit=hits.byte_count,
            objects_hit=hits.object_count,
            bytes_missed=misses.byte_count,
            objects_missed=misses.object_count,
            inserted_bytes=inserts.byte_count,
            flash_bytes_written=fbw,
            utilization=total_size,
            byte_hit_ratio=safe_ratio(hits.byte_count, reads.byte_count),
            object_hit_ratio=safe_ratio(hits.object_count, reads.object_count),
            write_amplification=safe_ratio(fbw, inserts.byte_count),
            cumulative_write_amplification=safe_ratio(
                flash_bytes_written, current["inserts"].byte_count
            ),
        )
        self._records.append(record)

        self._last = current
        self._last_flash_bytes_written = flash_bytes_written
        return record

    def sequence(self, metric: str) -> list[Any]:
        """Return the per-segment values of ``metric``, one entry per segment."""
        if metric not in SEGMENT_METRICS:
            raise UnknownMetricError(f"Unknown segment metric: {metric}", metric=metric)
        return [getattr(record, metric) for record in self._records]

    def last(self) -> SegmentRecord | None:
        return self._records[-1] if self._records else None

    def average_utilization(self) -> float:
        return safe_ratio(sum(r.utilization for r in self._records), len(self._records))

    def __len__(self) -> int:
        return len(self._records)
