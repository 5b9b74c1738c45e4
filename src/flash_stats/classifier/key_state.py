"""Per-key lifecycle flags consulted by the event classifier.

When each flag is set, and when it is cleared again:

- ``inserted``: set when the object is written into the cache; never cleared.
- ``read``: set on a hit; cleared on erase.
- ``skipped_insert``: set when a miss is not followed by an insert; cleared by
  the next successful insert or by the WA-skip miss it explains.
- ``skipped_cf``: set when the object came up for copy-forward and was pruned;
  cleared by the next successful insert or by the WA-skip miss it explains.
- ``copied_forward``: set on a successful copy-forward; cleared on erase.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class KeyFlagsView:
    """Immutable copy of a key's flags, handed out to callers and reports."""

    inserted: bool
    read: bool
    skipped_insert: bool
    skipped_cf: bool
    copied_forward: bool

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


@dataclass(slots=True)
class KeyLifecycleState:
    inserted: bool = False
    read: bool = False
    skipped_insert: bool = False
    skipped_cf: bool = False
    copied_forward: bool = False

    def freeze(self) -> KeyFlagsView:
        return KeyFlagsView(
            inserted=self.inserted,
            read=self.read,
            skipped_insert=self.skipped_insert,
            skipped_cf=self.skipped_cf,
            copied_forward=self.copied_forward,
        )

    def as_dict(self) -> dict[str, bool]:
        return self.freeze().as_dict()
