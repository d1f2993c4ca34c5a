"""Search over the loaded resource list.

Plain case-insensitive substring matching, deliberately not fuzzy:
results keep list order so n/N walk the list top to bottom.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..models.resource import ListItem


def item_matches(item: ListItem, folded_query: str) -> bool:
    """Check one item against an already case-folded query."""
    if folded_query in item.name.casefold() or folded_query in item.id.casefold():
        return True
    return any(folded_query in keyword.casefold() for keyword in item.keywords)


def perform_search(items: Sequence[ListItem], query: str) -> tuple[int, ...]:
    """Return indices of items matching `query`, in ascending order.

    An empty query matches nothing.
    """
    if not query:
        return ()
    folded = query.casefold()
    return tuple(i for i, item in enumerate(items) if item_matches(item, folded))


def next_match_pos(current: int, match_count: int) -> int:
    """Position after `current`, wrapping to the first match."""
    if match_count <= 0:
        return current
    return (current + 1) % match_count


def prev_match_pos(current: int, match_count: int) -> int:
    """Position before `current`, wrapping to the last match."""
    if match_count <= 0:
        return current
    return (current - 1) % match_count
