"""Top-level pytest hooks."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

_DIRECTORY_MARKERS = {
    "tests/unit/": "unit",
    "tests/property/": "property",
}


def pytest_collection_modifyitems(config: Any, items: list[Any]) -> None:  # pragma: no cover
    """Apply directory markers so selection stays consistent even if a file forgets decorators."""
    root = Path(str(config.rootpath)).resolve()

    for item in items:
        try:
            rel = Path(str(item.path)).resolve().relative_to(root)
        except ValueError:
            continue

        rel_path = rel.as_posix()
        for prefix, marker in _DIRECTORY_MARKERS.items():
            if rel_path.startswith(prefix):
                item.add_marker(getattr(pytest.mark, marker))
