from __future__ import annotations

import pytest

from flash_stats.classifier.cache_stats import CACHE_COUNTERS, CacheStats
from flash_stats.errors import UnknownMetricError


def test_cache_counters_prepopulated() -> None:
    stats = CacheStats(inst_stats_period=5)
    assert stats.counters.names() == list(CACHE_COUNTERS)


def test_segment_hit_ratios_and_inserts() -> None:
    stats = CacheStats(inst_stats_period=5)
    for _ in range(4):
        stats.on_access(10)
    stats.on_hit(10)
    stats.on_miss(10)
    stats.on_miss(10)
    stats.on_miss(10)
    stats.on_insert(10)
    stats.on_dram_hit(10)
    stats.on_dram_miss(10)

    first = stats.collect_periodic_stats()
    assert first.byte_hit_ratio == pytest.approx(0.25)
    assert first.object_hit_ratio == pytest.approx(0.25)
    assert first.inserted_bytes == 10

    stats.on_access(10)
    stats.on_hit(10)
    second = stats.collect_periodic_stats()
    assert second.object_hit_ratio == 1.0
    assert second.inserted_bytes == 0

    assert stats.overall_object_hit_ratio() == pytest.approx(0.4)
    assert stats.counters.get("dram_hits").object_count == 1


def test_strict_cache_stats_rejects_flash_only_counters() -> None:
    stats = CacheStats(strict_metrics=True)
    with pytest.raises(UnknownMetricError):
        stats.counters.increment("copy_forwards", 1)
