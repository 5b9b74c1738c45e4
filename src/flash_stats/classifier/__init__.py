"""Event classification over per-key lifecycle state."""

from .cache_stats import CacheStats
from .flash_stats import FlashStats
from .histogram import CopyForwardHistogram, CopyForwardTally
from .key_state import KeyFlagsView, KeyLifecycleState

__all__ = [
    "CacheStats",
    "FlashStats",
    "CopyForwardHistogram",
    "CopyForwardTally",
    "KeyFlagsView",
    "KeyLifecycleState",
]
