"""
Recorded simulator event logs.

A log is a header-less CSV, one event per row::

    event,key,size[,flag_a,flag_b]

``flag_a``/``flag_b`` are ``0``/``1`` and only matter for ``insert``
(inserted, redundant) and ``copyfwd`` (copied, skipped). For ``flush`` the
size column holds the container's unused capacity; for ``collect`` it holds
the current cache occupancy. Events without a key (``access``, ``write``,
``flush``, ...) may leave the key column empty; keyed events may not. Blank
lines and lines starting with ``#`` are ignored. The file must be UTF-8.
"""

from __future__ import annotations

import csv
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from flash_stats.classifier.flash_stats import FlashStats
from flash_stats.errors import TraceFormatError

_FLAG_VALUES = {"0": False, "1": True, "": False}


@dataclass(frozen=True)
class EventRecord:
    event: str
    key: int
    size: int
    flag_a: bool = False
    flag_b: bool = False
    line_number: int = 0

    def to_csv(self) -> str:
        return f"{self.event},{self.key},{self.size},{int(self.flag_a)},{int(self.flag_b)}"


@dataclass
class ReplaySummary:
    events: int = 0
    collects: int = 0
    # events seen since the last ``collect`` row
    pending: int = 0


_HANDLERS: dict[str, Callable[[FlashStats, EventRecord], object]] = {
    "access": lambda s, r: s.on_access(r.size),
    "miss": lambda s, r: s.on_miss(r.key, r.size),
    "insert": lambda s, r: s.on_insert_attempt(r.key, r.size, r.flag_a, r.flag_b),
    "copyfwd": lambda s, r: s.on_copyfwd_attempt(r.key, r.size, r.flag_a, r.flag_b),
    "hit": lambda s, r: s.on_hit(r.key, r.size),
    "erase": lambda s, r: s.on_erase(r.key, r.size),
    "evict": lambda s, r: s.on_evict(r.key, r.size),
    "write": lambda s, r: s.on_write(r.size),
    "flush": lambda s, r: s.on_container_flush(r.size),
    "container_erase": lambda s, r: s.on_container_erase(),
    "zone_insert": lambda s, r: s.on_zone_insert(r.size),
    "dram_hit": lambda s, r: s.on_dram_hit(r.size),
    "dram_miss": lambda s, r: s.on_dram_miss(r.size),
    "collect": lambda s, r: s.collect_periodic_stats(r.size),
}

EVENT_TYPES: tuple[str, ...] = tuple(_HANDLERS)

# Events that act on one cached object and must name its key
KEYED_EVENTS = frozenset({"miss", "insert", "copyfwd", "hit", "erase", "evict"})


def _parse_int(value: str, column: str, line_number: int, line: str) -> int:
    value = value.strip()
    if not value:
        return 0
    try:
        parsed = int(value)
    except ValueError as exc:
        raise TraceFormatError(
            f"{column} must be an integer, got {value!r}", line_number=line_number, line=line
        ) from exc
    if parsed < 0:
        raise TraceFormatError(
            f"{column} must be non-negative, got {parsed}", line_number=line_number, line=line
        )
    return parsed


def _parse_flag(value: str, column: str, line_number: int, line: str) -> bool:
    try:
        return _FLAG_VALUES[value.strip()]
    except KeyError as exc:
        raise TraceFormatError(
            f"{column} must be 0 or 1, got {value!r}", line_number=line_number, line=line
        ) from exc


def _decode_lines(raw_lines: Iterable[bytes]) -> Iterator[str]:
    for line_number, raw in enumerate(raw_lines, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TraceFormatError(
                f"line is not valid UTF-8 ({exc.reason})",
                line_number=line_number,
                line=raw.decode("utf-8", errors="replace").rstrip("\r\n"),
            ) from exc


def parse_event_lines(lines: Iterable[str]) -> Iterator[EventRecord]:
    reader = csv.reader(lines)
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise TraceFormatError(
                f"malformed CSV row: {exc}", line_number=reader.line_num, line=None
            ) from exc

        line_number = reader.line_num
        line = ",".join(row)
        if not row or not line.strip() or row[0].lstrip().startswith("#"):
            continue
        if not 3 <= len(row) <= 5:
            raise TraceFormatError(
                f"expected 3 to 5 columns, got {len(row)}", line_number=line_number, line=line
            )

        event = row[0].strip().lower()
        if event not in _HANDLERS:
            raise TraceFormatError(
                f"unknown event type {event!r}", line_number=line_number, line=line
            )

        flags = [_parse_flag(v, f"flag {i}", line_number, line) for i, v in enumerate(row[3:], 1)]
        flags.extend([False] * (2 - len(flags)))

        if event in KEYED_EVENTS and not row[1].strip():
            raise TraceFormatError(
                f"key is required for {event} events", line_number=line_number, line=line
            )

        yield EventRecord(
            event=event,
            key=_parse_int(row[1], "key", line_number, line),
            size=_parse_int(row[2], "size", line_number, line),
            flag_a=flags[0],
            flag_b=flags[1],
            line_number=line_number,
        )


def read_event_log(path: str | Path) -> list[EventRecord]:
    with open(path, "rb") as f:
        return list(parse_event_lines(_decode_lines(f)))


def replay_events(stats: FlashStats, events: Iterable[EventRecord]) -> ReplaySummary:
    """Feed recorded events to ``stats`` in order."""
    summary = ReplaySummary()
    for record in events:
        _HANDLERS[record.event](stats, record)
        summary.events += 1
        if record.event == "collect":
            summary.collects += 1
            summary.pending = 0
        else:
            summary.pending += 1
    return summary
