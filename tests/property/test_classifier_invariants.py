"""Property-based tests for FlashStats event classification invariants."""

from __future__ import annotations

from hypothesis import given, seed, settings

from flash_stats.classifier.flash_stats import FlashStats
from flash_stats.metrics.registry import WELL_KNOWN_COUNTERS
from tests.property.classifier_invariants_test_helpers import (
    apply_event,
    event_list_strategy,
    miss_parts,
)


@seed(5101)
@settings(max_examples=150, deadline=None)
@given(events=event_list_strategy)
def test_miss_classes_sum_to_total_misses(events: list[tuple[str, int, int]]) -> None:
    """
    Property: compulsory + capacity + WA-skip misses always equal total misses.
    """
    stats = FlashStats(inst_stats_period=10)

    for op, key, size in events:
        apply_event(stats, op, key, size)
        parts, total = miss_parts(stats)
        assert parts == total, f"after {op} on key {key}: parts={parts} total={total}"

    byte_parts = sum(
        stats.counters.get(name).byte_count
        for name in ("compulsory_misses", "capacity_misses", "wa_skip_misses")
    )
    assert byte_parts == stats.counters.get("total_misses").byte_count


@seed(5102)
@settings(max_examples=150, deadline=None)
@given(events=event_list_strategy)
def test_inserted_flag_is_never_cleared(events: list[tuple[str, int, int]]) -> None:
    """
    Property: once a key's INSERTED flag is set it stays set.

    Erased keys keep their record here so the flag stays observable.
    """
    stats = FlashStats(inst_stats_period=10, retain_erased_keys=True)
    ever_inserted: set[int] = set()

    for op, key, size in events:
        apply_event(stats, op, key, size)
        flags = stats.flags_for(key)
        if flags is not None and flags.inserted:
            ever_inserted.add(key)
        for seen in ever_inserted:
            seen_flags = stats.flags_for(seen)
            assert seen_flags is not None and seen_flags.inserted


@seed(5103)
@settings(max_examples=150, deadline=None)
@given(events=event_list_strategy)
def test_histogram_total_matches_erase_count(events: list[tuple[str, int, int]]) -> None:
    """
    Property: the copy-forward histogram holds exactly one entry per erase.
    """
    stats = FlashStats(inst_stats_period=10)
    erases = 0

    for op, key, size in events:
        if apply_event(stats, op, key, size) and op == "erase":
            erases += 1
            assert stats.flags_for(key) is None, "erased key should be forgotten"
            assert stats.copyfwd_count(key) == 0

    assert stats.copyfwd_hist.total() == erases


@seed(5104)
@settings(max_examples=100, deadline=None)
@given(events=event_list_strategy)
def test_counters_are_monotonic(events: list[tuple[str, int, int]]) -> None:
    """
    Property: no event ever lowers a counter's byte or object count.
    """
    stats = FlashStats(inst_stats_period=10)
    previous = stats.counters.as_dict()

    for op, key, size in events:
        apply_event(stats, op, key, size)
        current = stats.counters.as_dict()
        for name, snapshot in previous.items():
            assert current[name].byte_count >= snapshot.byte_count
            assert current[name].object_count >= snapshot.object_count
        previous = current

    assert set(WELL_KNOWN_COUNTERS) <= set(stats.counters.names())


@seed(5105)
@settings(max_examples=100, deadline=None)
@given(events=event_list_strategy)
def test_one_hit_misses_bounded_by_erases(events: list[tuple[str, int, int]]) -> None:
    """
    Property: one-hit misses are a subset of erased objects.
    """
    stats = FlashStats(inst_stats_period=10)

    for op, key, size in events:
        apply_event(stats, op, key, size)

    assert stats.counters.get("one_hit_misses").object_count <= stats.copyfwd_hist.total()
    assert stats.counters.get("copyfwd_hits").object_count <= stats.counters.get(
        "total_hits"
    ).object_count
