"""Time-windowed (segment) metrics."""

from .segments import SEGMENT_METRICS, SegmentRecord, SegmentWindow, safe_ratio

__all__ = ["SEGMENT_METRICS", "SegmentRecord", "SegmentWindow", "safe_ratio"]
