"""Serialization of a finished run into a plain dict, JSON, or a short text summary."""

from __future__ import annotations

import json
from typing import Any

from flash_stats.classifier.cache_stats import CacheStats
from flash_stats.classifier.flash_stats import FlashStats
from flash_stats.utilities.logging_patterns import get_logger

logger = get_logger(__name__, component="reporting")

# report key -> SegmentRecord attribute
_COMMON_SEQUENCES: dict[str, str] = {
    "segment_bytes_read": "bytes_read",
    "segment_bytes_missed": "bytes_missed",
    "segment_objects_read": "objects_read",
    "segment_objects_missed": "objects_missed",
    "segment_inserts": "inserted_bytes",
    "segment_byte_hit_ratio": "byte_hit_ratio",
    "segment_obj_hit_ratio": "object_hit_ratio",
    "segment_byte_miss_ratio": "byte_miss_ratio",
    "segment_obj_miss_ratio": "object_miss_ratio",
}

_FLASH_SEQUENCES: dict[str, str] = {
    "segment_util": "utilization",
    "segment_fbw": "flash_bytes_written",
    "segment_wa": "write_amplification",
    "segment_cumulative_wa": "cumulative_write_amplification",
}


def build_report(stats: FlashStats | CacheStats) -> dict[str, Any]:
    """Snapshot everything a run recorded into JSON-friendly values."""
    report: dict[str, Any] = {
        "counters": {name: snap.to_dict() for name, snap in stats.counters.as_dict().items()},
        "segment_period": stats.inst_stats_period,
        "segments": len(stats.segments),
    }

    sequences = dict(_COMMON_SEQUENCES)
    if isinstance(stats, FlashStats):
        sequences.update(_FLASH_SEQUENCES)
        report.update(
            {
                "flash_bytes_written": stats.flash_bytes_written,
                "containers_erased": stats.containers_erased,
                "containers_written": stats.containers_written,
                "copyfwd_hist": stats.copyfwd_hist.as_list(),
                "overall_write_amplification": stats.overall_write_amplification(),
                "average_occupancy": stats.segments.average_utilization(),
            }
        )

    report["overall_byte_hit_ratio"] = stats.overall_byte_hit_ratio()
    report["overall_obj_hit_ratio"] = stats.overall_object_hit_ratio()

    for report_key, metric in sequences.items():
        report[report_key] = stats.segments.sequence(metric)

    logger.info(
        "Report built",
        segments=report["segments"],
        counters=len(report["counters"]),
    )
    return report


def dump_counters_as_json(stats: FlashStats | CacheStats) -> str:
    return json.dumps(build_report(stats), indent=2)


def format_periodic_summary(stats: FlashStats | CacheStats) -> str:
    """Render the latest segment next to the all-time figures."""
    last = stats.segments.last()
    if last is None:
        return "\tNo segments collected"

    lines = [
        f"\tSegment BHR: {last.byte_hit_ratio:.4f}, overall {stats.overall_byte_hit_ratio():.4f}",
        f"\tSegment OHR: {last.object_hit_ratio:.4f}, "
        f"overall {stats.overall_object_hit_ratio():.4f}",
    ]
    if isinstance(stats, FlashStats):
        lines.extend(
            [
                f"\tSegment WA: {last.write_amplification:.4f}, "
                f"overall {stats.overall_write_amplification():.4f}",
                f"\tSegment utilization: {last.utilization}",
                f"\tSegment flash bytes written: {last.flash_bytes_written}",
            ]
        )
    else:
        lines.append(f"\tSegment inserted bytes: {last.inserted_bytes}")
    return "\n".join(lines)
