"""Browser view-state for sact.

The Session is the single source of truth for what the screen shows.
It is immutable: the dispatcher produces a new Session for every event.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from .resource import DEFAULT_ZONE, DetailRecord, ListItem, ResourceType


class Mode(Enum):
    """Top-level interaction mode (mutually exclusive)."""

    LISTING = "listing"
    SEARCH_COMPOSING = "search_composing"
    DETAIL_LOADING = "detail_loading"
    DETAIL_SHOWN = "detail_shown"


@dataclass(frozen=True)
class SearchState:
    """Incremental search over the loaded items."""

    query: str = ""
    matches: tuple[int, ...] = ()  # Indices into Session.items, ascending
    current_match_pos: int = 0
    composing: bool = True  # True while the query is being typed
    saved_cursor: int = 0  # Cursor to restore on cancel

    @property
    def has_matches(self) -> bool:
        return bool(self.matches)


@dataclass(frozen=True)
class DetailState:
    """Drill-down into one item."""

    item_id: str
    record: DetailRecord | None = None
    loading: bool = True
    error: str | None = None


@dataclass(frozen=True)
class Session:
    """Everything the browser knows, in one value."""

    zone: str = DEFAULT_ZONE
    resource_type: ResourceType = ResourceType.SERVER
    items: tuple[ListItem, ...] = ()
    loading: bool = True
    error: str | None = None
    cursor_index: int = 0
    detail: DetailState | None = None
    search: SearchState | None = None
    quitting: bool = False
    account_name: str = ""

    @property
    def mode(self) -> Mode:
        if self.detail is not None:
            return Mode.DETAIL_LOADING if self.detail.loading else Mode.DETAIL_SHOWN
        if self.search is not None and self.search.composing:
            return Mode.SEARCH_COMPOSING
        return Mode.LISTING

    @property
    def selected_item(self) -> ListItem | None:
        """Item under the cursor, if the cursor is valid."""
        if self.items and 0 <= self.cursor_index < len(self.items):
            return self.items[self.cursor_index]
        return None

    @property
    def zone_label(self) -> str:
        """Zone as shown to the user ("global" for unzoned resources)."""
        return "global" if self.resource_type.is_global else self.zone

    def evolve(self, **changes: Any) -> Session:
        """Return a copy with `changes` applied."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable snapshot (for logs and tests)."""
        result: dict[str, Any] = {
            "mode": self.mode.value,
            "zone": self.zone,
            "resource_type": self.resource_type.value,
            "items": [item.to_dict() for item in self.items],
            "loading": self.loading,
            "cursor_index": self.cursor_index,
            "quitting": self.quitting,
        }
        if self.error is not None:
            result["error"] = self.error
        if self.account_name:
            result["account_name"] = self.account_name
        if self.search is not None:
            result["search"] = {
                "query": self.search.query,
                "matches": list(self.search.matches),
                "current_match_pos": self.search.current_match_pos,
                "composing": self.search.composing,
            }
        if self.detail is not None:
            result["detail"] = {
                "item_id": self.detail.item_id,
                "loading": self.detail.loading,
                "record": self.detail.record.to_dict() if self.detail.record else None,
            }
        return result


def initial_session(
    zone: str = DEFAULT_ZONE,
    resource_type: ResourceType = ResourceType.SERVER,
) -> Session:
    """Session at startup: nothing loaded yet, first fetch outstanding."""
    return Session(zone=zone, resource_type=resource_type, loading=True)
