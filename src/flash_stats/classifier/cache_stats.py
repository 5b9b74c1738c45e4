"""Plain counters for the DRAM cache tier; no per-key classification."""

from __future__ import annotations

from flash_stats.config.constants import DEFAULT_INST_STATS_PERIOD
from flash_stats.metrics.registry import CounterRegistry
from flash_stats.utilities.logging_patterns import get_logger, log_segment_collected
from flash_stats.windowing.segments import SegmentRecord, SegmentWindow, safe_ratio

logger = get_logger(__name__, component="cache_stats")

CACHE_COUNTERS: tuple[str, ...] = (
    "total_reads",
    "total_misses",
    "total_hits",
    "inserts",
    "dram_hits",
    "dram_misses",
)


class CacheStats:
    def __init__(
        self, inst_stats_period: int = DEFAULT_INST_STATS_PERIOD, *, strict_metrics: bool = False
    ) -> None:
        self.inst_stats_period = inst_stats_period
        self.counters = CounterRegistry(CACHE_COUNTERS, strict=strict_metrics)
        self.segments = SegmentWindow(inst_stats_period)

    def on_access(self, size: int) -> None:
        self.counters.increment("total_reads", size)

    def on_miss(self, size: int) -> None:
        self.counters.increment("total_misses", size)

    def on_insert(self, size: int) -> None:
        self.counters.increment("inserts", size)

    def on_hit(self, size: int) -> None:
        self.counters.increment("total_hits", size)

    def on_dram_hit(self, size: int) -> None:
        self.counters.increment("dram_hits", size)

    def on_dram_miss(self, size: int) -> None:
        self.counters.increment("dram_misses", size)

    def collect_periodic_stats(self) -> SegmentRecord:
        record = self.segments.collect(self.counters)
        log_segment_collected(
            len(self.segments),
            logger=logger,
            byte_hit_ratio=record.byte_hit_ratio,
            object_hit_ratio=record.object_hit_ratio,
            inserted_bytes=record.inserted_bytes,
        )
        return record

    def overall_byte_hit_ratio(self) -> float:
        return safe_ratio(
            self.counters.get("total_hits").byte_count,
            self.counters.get("total_reads").byte_count,
        )

    def overall_object_hit_ratio(self) -> float:
        return safe_ratio(
            self.counters.get("total_hits").object_count,
            self.counters.get("total_reads").object_count,
        )
