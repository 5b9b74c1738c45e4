"""
Event classifier for the flash cache simulator.

The simulator reports every lifecycle event of a cached object (access, miss,
insert attempt, copy-forward attempt, hit, erase) and every physical write.
``FlashStats`` keeps just enough per-key state to explain *why* a later miss
happened (first access, capacity eviction, or a deliberate skip to avoid
write amplification), bumps the matching named counters, and folds counters
into per-segment records on request.

Misses are classified as follows:

- compulsory: the key has never been seen.
- WA-skip: the previous insert or copy-forward of the key was skipped.
- capacity: the key was inserted before and has since been evicted.

Events must arrive in an order a real cache could produce. Orders that
cannot happen (erasing a key that was never inserted, skipping the
copy-forward of a key that was never inserted) are simulator bugs and raise
``ProtocolViolationError``.
"""

from __future__ import annotations

from typing import NoReturn

from flash_stats.classifier.histogram import CopyForwardHistogram, CopyForwardTally
from flash_stats.classifier.key_state import KeyFlagsView, KeyLifecycleState
from flash_stats.config.constants import DEFAULT_INST_STATS_PERIOD
from flash_stats.errors import ProtocolViolationError
from flash_stats.metrics.registry import CounterRegistry
from flash_stats.settings import Settings
from flash_stats.utilities.logging_patterns import get_logger, log_segment_collected
from flash_stats.windowing.segments import SegmentRecord, SegmentWindow, safe_ratio

logger = get_logger(__name__, component="flash_stats")


class FlashStats:
    """Counters, per-key lifecycle state and segment records for one simulation run."""

    def __init__(
        self,
        inst_stats_period: int = DEFAULT_INST_STATS_PERIOD,
        *,
        strict_metrics: bool = False,
        retain_erased_keys: bool = False,
        classify_misses: bool = True,
    ) -> None:
        self.inst_stats_period = inst_stats_period
        self.retain_erased_keys = retain_erased_keys
        self.classify_misses = classify_misses

        self.counters = CounterRegistry(strict=strict_metrics)
        self.copyfwd_hist = CopyForwardHistogram()
        self.segments = SegmentWindow(inst_stats_period)

        self.flash_bytes_written = 0
        self.containers_erased = 0
        self.containers_written = 0

        self._keys: dict[int, KeyLifecycleState] = {}
        self._copyfwds = CopyForwardTally()

        logger.info(
            "Flash stats initialised",
            inst_stats_period=inst_stats_period,
            strict_metrics=strict_metrics,
            retain_erased_keys=retain_erased_keys,
            classify_misses=classify_misses,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> FlashStats:
        return cls(
            settings.inst_stats_period,
            strict_metrics=settings.strict_metrics,
            retain_erased_keys=settings.retain_erased_keys,
            classify_misses=settings.classify_misses,
        )

    # ------------------------------------------------------------------
    # Cache-level events
    # ------------------------------------------------------------------

    def on_access(self, size: int) -> None:
        self.counters.increment("total_reads", size)

    def on_miss(self, key: int, size: int) -> None:
        """Count a miss and classify it from the key's flags."""
        if not self.classify_misses:
            self.counters.increment("total_misses", size)
            return

        state = self._keys.get(key)
        if state is None:
            self.counters.increment("total_misses", size)
            self.counters.increment("compulsory_misses", size)
            self._keys[key] = KeyLifecycleState()
            return

        if state.skipped_insert or state.skipped_cf:
            # A copy-forward can only have been skipped for something inserted
            if state.skipped_cf and not state.inserted:
                self._violation("skipped copy-forward on a key never inserted", "miss", key, size)
            self.counters.increment("total_misses", size)
            self.counters.increment("wa_skip_misses", size)
            state.skipped_cf = False
            state.skipped_insert = False
            return

        if not state.inserted:
            self._violation("repeat miss on a key never inserted or skipped", "miss", key, size)
        self.counters.increment("total_misses", size)
        self.counters.increment("capacity_misses", size)

    def on_insert_attempt(
        self, key: int, size: int, inserted: bool, redundant: bool = False
    ) -> None:
        """Record the policy's decision after a miss.

        An insert is redundant when the key is already cached (only possible
        when inserts are generated ahead of time); a redundant skip is not a
        write-amplification decision and changes nothing.
        """
        if inserted:
            self.counters.increment("inserts", size)
            state = self._keys.setdefault(key, KeyLifecycleState())
            if self.classify_misses and state.inserted:
                self.counters.increment("reinserts", size)
            state.inserted = True
            state.skipped_insert = False
            state.skipped_cf = False
        elif not redundant:
            state = self._keys.setdefault(key, KeyLifecycleState())
            state.skipped_insert = True
            self.counters.increment("skipped_inserts", size)

    def on_copyfwd_attempt(self, key: int, size: int, copied: bool, skipped: bool) -> None:
        """Record a copy-forward; ``skipped`` means the object was pruned instead."""
        if skipped:
            state = self._keys.get(key)
            if state is None or not state.inserted:
                self._violation(
                    "skipped copy-forward on a key never inserted", "copyfwd", key, size
                )
            state.skipped_cf = True
            self.counters.increment("skipped_copyfwds", size)
        elif copied:
            state = self._keys.setdefault(key, KeyLifecycleState())
            state.copied_forward = True
            self.counters.increment("copy_forwards", size)
            self._copyfwds.bump(key)

    def on_hit(self, key: int, size: int) -> None:
        self.counters.increment("total_hits", size)
        state = self._keys.setdefault(key, KeyLifecycleState())
        if state.copied_forward:
            self.counters.increment("copyfwd_hits", size)
        state.read = True

    def on_erase(self, key: int, size: int) -> None:
        """Record the object's final disposition and forget it."""
        state = self._keys.get(key)
        if state is None:
            self._violation("erase of a key that was never seen", "erase", key, size)
        if not state.inserted:
            self._violation("erase of a key that was never inserted", "erase", key, size)

        if not state.read:
            self.counters.increment("one_hit_misses", size)

        state.read = False
        state.copied_forward = False

        self.copyfwd_hist.record(self._copyfwds.pop(key))
        if not self.retain_erased_keys:
            del self._keys[key]

    def on_evict(self, key: int, size: int) -> None:
        """Hook for evictions; nothing is recorded yet."""

    def on_zone_insert(self, size: int) -> None:
        self.counters.increment("total_placements", size)

    def on_dram_hit(self, size: int) -> None:
        self.counters.increment("dram_hits", size)

    def on_dram_miss(self, size: int) -> None:
        self.counters.increment("dram_misses", size)

    def increment_custom(self, name: str, size: int) -> None:
        """Increment an ad-hoc counter; see ``CounterRegistry.increment``."""
        self.counters.increment(name, size)

    # ------------------------------------------------------------------
    # Medium-level events
    # ------------------------------------------------------------------

    def on_write(self, size: int) -> None:
        """Object bytes written to the medium."""
        self.counters.increment("objects_written", size)
        self.flash_bytes_written += size

    def on_container_flush(self, unused_capacity: int) -> None:
        """A container was closed; its unused space still counts as written."""
        self.flash_bytes_written += unused_capacity
        self.containers_written += 1

    def on_container_erase(self) -> None:
        self.containers_erased += 1

    # ------------------------------------------------------------------
    # Segments and derived metrics
    # ------------------------------------------------------------------

    def collect_periodic_stats(self, total_size: int) -> SegmentRecord:
        record = self.segments.collect(
            self.counters,
            total_size=total_size,
            flash_bytes_written=self.flash_bytes_written,
        )
        log_segment_collected(
            len(self.segments),
            logger=logger,
            byte_hit_ratio=record.byte_hit_ratio,
            object_hit_ratio=record.object_hit_ratio,
            write_amplification=record.write_amplification,
            utilization=record.utilization,
        )
        return record

    def overall_write_amplification(self) -> float:
        return safe_ratio(self.flash_bytes_written, self.counters.get("inserts").byte_count)

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

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    def flags_for(self, key: int) -> KeyFlagsView | None:
        state = self._keys.get(key)
        return state.freeze() if state is not None else None

    def tracked_keys(self) -> int:
        return len(self._keys)

    def copyfwd_count(self, key: int) -> int:
        return self._copyfwds.get(key)

    def _violation(self, message: str, event: str, key: int, size: int) -> NoReturn:
        state = self._keys.get(key)
        flags = state.as_dict() if state is not None else None
        logger.critical(
            f"Protocol violation: {message}", event=event, key=key, size=size, flags=flags
        )
        raise ProtocolViolationError(message, event=event, key=key, size=size, flags=flags)
