"""Copy-forward tallies and the histogram they are folded into at erase time."""

from __future__ import annotations

from flash_stats.config.constants import COPYFWD_HIST_BINS, COPYFWD_SATURATION


class CopyForwardTally:
    """Saturating per-key count of copy-forwards since the key's last insertion."""

    def __init__(self, saturation: int = COPYFWD_SATURATION) -> None:
        self.saturation = saturation
        self._counts: dict[int, int] = {}

    def bump(self, key: int) -> int:
        count = self._counts.get(key, 0)
        if count < self.saturation:
            count += 1
            self._counts[key] = count
        return count

    def get(self, key: int) -> int:
        return self._counts.get(key, 0)

    def pop(self, key: int) -> int:
        """Remove and return the key's tally; keys never copied forward read as zero."""
        return self._counts.pop(key, 0)

    def __len__(self) -> int:
        return len(self._counts)


class CopyForwardHistogram:
    """``bins[i]`` counts erased objects that had been copied forward exactly ``i`` times."""

    def __init__(self, size: int = COPYFWD_HIST_BINS) -> None:
        self.bins: list[int] = [0] * size

    def record(self, copyfwd_count: int) -> None:
        if not 0 <= copyfwd_count < len(self.bins):
            raise ValueError(
                f"copy-forward count {copyfwd_count} outside histogram range "
                f"0..{len(self.bins) - 1}"
            )
        self.bins[copyfwd_count] += 1

    def total(self) -> int:
        return sum(self.bins)

    def as_list(self) -> list[int]:
        return list(self.bins)

    def __getitem__(self, index: int) -> int:
        return self.bins[index]

    def __len__(self) -> int:
        return len(self.bins)
