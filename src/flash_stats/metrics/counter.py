"""Byte/object counters, the atomic unit of measurement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CounterSnapshot:
    """Read-only view of a counter at one point in time."""

    byte_count: int = 0
    object_count: int = 0

    def __sub__(self, other: CounterSnapshot) -> CounterSnapshot:
        return CounterSnapshot(
            byte_count=self.byte_count - other.byte_count,
            object_count=self.object_count - other.object_count,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"bytes": self.byte_count, "objects": self.object_count}


ZERO = CounterSnapshot()


@dataclass
class Counter:
    """Monotonic byte/object pair; there is no way to decrement it."""

    byte_count: int = 0
    object_count: int = 0

    def increment(self, size: int) -> None:
        """Add ``size`` bytes and one object."""
        if size < 0:
            raise ValueError(f"counter increment must be non-negative, got {size}")
        self.byte_count += size
        self.object_count += 1

    def snapshot(self) -> CounterSnapshot:
        return CounterSnapshot(byte_count=self.byte_count, object_count=self.object_count)
