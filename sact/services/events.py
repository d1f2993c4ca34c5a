"""Browser events and effects.

Events are the only inputs of the dispatcher: key presses are translated
into events by the keymap, and finished fetches come back as completion
events. Effects are the requests the dispatcher hands back to its owner
to run off the UI thread.

Usage:
    session, effect = transition(session, SwitchZone())
    if effect is not None:
        run_in_worker(effect)  # eventually dispatches FetchListCompleted
"""

from dataclasses import dataclass

from ..models.resource import DetailRecord, ListItem, ResourceType


@dataclass(frozen=True)
class Event:
    """Base class for all dispatcher events."""


# User intents


@dataclass(frozen=True)
class Quit(Event):
    """Leave the application."""


@dataclass(frozen=True)
class SwitchZone(Event):
    """Advance to the next zone."""


@dataclass(frozen=True)
class Refresh(Event):
    """Re-fetch the current list."""


@dataclass(frozen=True)
class SwitchResourceType(Event):
    """Cycle the displayed resource type (backwards when reverse=True)."""

    reverse: bool = False


@dataclass(frozen=True)
class MoveCursor(Event):
    """Move the highlighted row by `delta` (clamped)."""

    delta: int = 1


@dataclass(frozen=True)
class EnterSearchMode(Event):
    """Start typing a search query."""


@dataclass(frozen=True)
class SearchInputChar(Event):
    """Append text to the search query."""

    char: str = ""


@dataclass(frozen=True)
class SearchInputBackspace(Event):
    """Delete the last character of the search query."""


@dataclass(frozen=True)
class CommitSearch(Event):
    """Run the search and jump to the first match."""


@dataclass(frozen=True)
class CancelSearch(Event):
    """Abandon the search being typed."""


@dataclass(frozen=True)
class NextMatch(Event):
    """Jump to the next search match."""


@dataclass(frozen=True)
class PrevMatch(Event):
    """Jump to the previous search match."""


@dataclass(frozen=True)
class EnterDetail(Event):
    """Drill into the highlighted item."""


@dataclass(frozen=True)
class ExitDetail(Event):
    """Leave the detail view."""


# Completions (posted back by workers)


@dataclass(frozen=True)
class FetchListCompleted(Event):
    """A list fetch finished; `error` is set iff it failed."""

    resource_type: ResourceType
    zone: str
    items: tuple[ListItem, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class FetchDetailCompleted(Event):
    """A detail fetch finished; `error` is set iff it failed."""

    item_id: str
    record: DetailRecord | None = None
    error: str | None = None


@dataclass(frozen=True)
class AccountLoaded(Event):
    """The account name lookup finished."""

    account_name: str = ""
    error: str | None = None


# Effects


@dataclass(frozen=True)
class Effect:
    """Base class for work the dispatcher asks its owner to run."""


@dataclass(frozen=True)
class FetchListRequest(Effect):
    resource_type: ResourceType
    zone: str


@dataclass(frozen=True)
class FetchDetailRequest(Effect):
    resource_type: ResourceType
    zone: str
    item_id: str


@dataclass(frozen=True)
class FetchAccountRequest(Effect):
    pass
