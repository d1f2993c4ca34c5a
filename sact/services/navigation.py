"""List navigation helpers shared by every list view."""

from __future__ import annotations

# Rows moved by page up / page down
PAGE_SIZE = 10


def clamp_index(index: int, length: int) -> int:
    """Clamp `index` into [0, length - 1]; 0 for an empty list."""
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


def move_index(index: int, delta: int, length: int) -> int:
    """Move `index` by `delta` without leaving the list."""
    return clamp_index(index + delta, length)
