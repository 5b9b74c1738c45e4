"""
Minimal Conftest.
"""

import pytest

from flash_stats.classifier.flash_stats import FlashStats
from flash_stats.settings import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; tests that touch the environment need a fresh load."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def stats() -> FlashStats:
    return FlashStats(inst_stats_period=100)


@pytest.fixture
def inserted(stats: FlashStats):
    """Factory that walks a key through miss + insert so it starts out cached."""

    def _insert(key: int, size: int) -> FlashStats:
        stats.on_access(size)
        stats.on_miss(key, size)
        stats.on_insert_attempt(key, size, inserted=True, redundant=False)
        return stats

    return _insert
