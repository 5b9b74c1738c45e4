"""Shared strategies and a guard-respecting driver for classifier property tests."""

from __future__ import annotations

from hypothesis import strategies as st

from flash_stats.classifier.flash_stats import FlashStats

key_strategy = st.integers(min_value=0, max_value=7)
size_strategy = st.integers(min_value=1, max_value=4096)
op_strategy = st.sampled_from(
    [
        "miss",
        "insert",
        "skip_insert",
        "redundant_insert",
        "hit",
        "copyfwd",
        "skip_copyfwd",
        "erase",
        "write",
        "flush",
    ]
)
event_strategy = st.tuples(op_strategy, key_strategy, size_strategy)
event_list_strategy = st.lists(event_strategy, min_size=1, max_size=200)
period_count_strategy = st.integers(min_value=0, max_value=30)


def apply_event(stats: FlashStats, op: str, key: int, size: int) -> bool:
    """Apply ``op`` if a real cache could issue it now; return whether it was applied."""
    flags = stats.flags_for(key)

    if op == "miss":
        if flags is not None and not (flags.inserted or flags.skipped_insert or flags.skipped_cf):
            return False
        stats.on_access(size)
        stats.on_miss(key, size)
    elif op == "insert":
        stats.on_insert_attempt(key, size, inserted=True, redundant=False)
    elif op == "skip_insert":
        stats.on_insert_attempt(key, size, inserted=False, redundant=False)
    elif op == "redundant_insert":
        stats.on_insert_attempt(key, size, inserted=False, redundant=True)
    elif op == "hit":
        if flags is None or not flags.inserted:
            return False
        stats.on_access(size)
        stats.on_hit(key, size)
    elif op == "copyfwd":
        if flags is None or not flags.inserted:
            return False
        stats.on_copyfwd_attempt(key, size, copied=True, skipped=False)
    elif op == "skip_copyfwd":
        if flags is None or not flags.inserted:
            return False
        stats.on_copyfwd_attempt(key, size, copied=False, skipped=True)
    elif op == "erase":
        if flags is None or not flags.inserted:
            return False
        stats.on_erase(key, size)
    elif op == "write":
        stats.on_write(size)
    elif op == "flush":
        stats.on_container_flush(size)
    else:  # pragma: no cover - strategy only yields the ops above
        raise AssertionError(op)
    return True


def miss_parts(stats: FlashStats) -> tuple[int, int]:
    """Return (sum of classified miss objects, total miss objects)."""
    parts = sum(
        stats.counters.get(name).object_count
        for name in ("compulsory_misses", "capacity_misses", "wa_skip_misses")
    )
    return parts, stats.counters.get("total_misses").object_count
