"""Mean and population standard deviation of an arbitrary numeric sample."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from flash_stats.errors import EmptyInputError


def compute_sample_stats(values: Iterable[float]) -> tuple[float, float]:
    """Return ``(mean, stddev)`` of ``values``.

    The standard deviation is the population one (divides by ``n``, not ``n - 1``).

    Raises:
        EmptyInputError: ``values`` is empty.
    """
    sample = np.fromiter(values, dtype=float)
    if sample.size == 0:
        raise EmptyInputError()
    return float(sample.mean()), float(sample.std(ddof=0))
