"""Cursor pagination shared by every backend.

Each backend expresses its paging scheme (offset, opaque cursor, next URL)
as a function from cursor to Page; `drain_pages` follows the cursors until
the backend stops returning one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Page:
    """One page of raw records and the cursor of the following page."""

    records: list[dict[str, Any]] = field(default_factory=list)
    next_cursor: Any = None  # None when this is the last page


def drain_pages(
    fetch_page: Callable[[Any], Page],
    normalize: Callable[[dict[str, Any]], T],
) -> list[T]:
    """Fetch every page, starting with cursor None, and normalize all records.

    Stops only when a page has no next cursor. Any exception from
    `fetch_page` or `normalize` propagates and nothing is returned.
    """
    items: list[T] = []
    pages = 0
    cursor = None
    while True:
        page = fetch_page(cursor)
        items.extend(normalize(record) for record in page.records)
        pages += 1
        if page.next_cursor is None:
            break
        cursor = page.next_cursor
    logger.debug(f"Drained {pages} page(s), {len(items)} record(s)")
    return items
