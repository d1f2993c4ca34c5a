"""Command dispatcher: the browser's state machine.

`transition` is a pure function from (Session, Event) to a new Session and
at most one Effect. `CommandDispatcher` owns the current Session, feeds it
events one at a time, and runs effects against the fetch aggregator.
It is the only code that talks to the aggregator.

Overlapping list fetches are prevented by the `loading` flag: zone
switches, type switches and refreshes that arrive while a fetch is
outstanding are dropped, not queued.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Protocol

from ..models.exceptions import SactError
from ..models.resource import DetailRecord, ListItem, ResourceType, next_zone
from ..models.session import Mode, SearchState, DetailState, Session
from .events import (
    AccountLoaded,
    CancelSearch,
    CommitSearch,
    Effect,
    EnterDetail,
    EnterSearchMode,
    Event,
    ExitDetail,
    FetchAccountRequest,
    FetchDetailCompleted,
    FetchDetailRequest,
    FetchListCompleted,
    FetchListRequest,
    MoveCursor,
    NextMatch,
    PrevMatch,
    Quit,
    Refresh,
    SearchInputBackspace,
    SearchInputChar,
    SwitchResourceType,
    SwitchZone,
)
from .navigation import clamp_index, move_index
from .search import next_match_pos, perform_search, prev_match_pos

logger = logging.getLogger(__name__)

Result = tuple[Session, Effect | None]


class Aggregator(Protocol):
    """What the dispatcher needs from the fetch aggregator."""

    def fetch_list(self, resource_type: ResourceType, zone: str) -> list[ListItem]: ...

    def fetch_detail(self, resource_type: ResourceType, zone: str, item_id: str) -> DetailRecord: ...

    def fetch_account_name(self) -> str: ...


def transition(session: Session, event: Event) -> Result:
    """Apply one event. Unknown events and events after Quit are no-ops."""
    if session.quitting:
        return session, None
    handler = _HANDLERS.get(type(event))
    if handler is None:
        return session, None
    return handler(session, event)


def start_effects(session: Session) -> list[Effect]:
    """Effects to run once at startup."""
    return [FetchListRequest(session.resource_type, session.zone), FetchAccountRequest()]


# --- List loading ---


def _can_start_fetch(session: Session) -> bool:
    """A new list fetch may start only from a settled list view."""
    return session.mode == Mode.LISTING and not session.loading


def _start_list_fetch(session: Session, **changes) -> Result:
    updated = session.evolve(loading=True, error=None, search=None, **changes)
    return updated, FetchListRequest(updated.resource_type, updated.zone)


def _on_switch_zone(session: Session, event: SwitchZone) -> Result:
    if not _can_start_fetch(session):
        logger.debug("Zone switch ignored (loading or not in list view)")
        return session, None
    if session.resource_type.is_global:
        logger.debug(f"Zone switch ignored for global resource {session.resource_type.label}")
        return session, None
    zone = next_zone(session.zone)
    logger.info(f"Switching zone {session.zone} -> {zone}")
    return _start_list_fetch(session, zone=zone)


def _on_refresh(session: Session, event: Refresh) -> Result:
    if not _can_start_fetch(session):
        logger.debug("Refresh ignored (loading or not in list view)")
        return session, None
    logger.info(f"Refreshing {session.resource_type.label} in {session.zone_label}")
    return _start_list_fetch(session)


def _on_switch_resource_type(session: Session, event: SwitchResourceType) -> Result:
    if not _can_start_fetch(session):
        logger.debug("Resource type switch ignored (loading or not in list view)")
        return session, None
    resource_type = session.resource_type.previous() if event.reverse else session.resource_type.next()
    logger.info(f"Switching resource type {session.resource_type.label} -> {resource_type.label}")
    # Rows of another kind mean nothing under the new header
    return _start_list_fetch(session, resource_type=resource_type, items=(), cursor_index=0)


def _on_list_completed(session: Session, event: FetchListCompleted) -> Result:
    if not session.loading or (event.resource_type, event.zone) != (session.resource_type, session.zone):
        logger.info(
            f"Discarding stale {event.resource_type.label} result for {event.zone} "
            f"(showing {session.resource_type.label} in {session.zone})"
        )
        return session, None
    if event.error is not None:
        logger.error(f"Failed to load {event.resource_type.label} in {event.zone}: {event.error}")
        return session.evolve(loading=False, error=event.error), None
    logger.info(f"Loaded {len(event.items)} {event.resource_type.label} item(s) in {event.zone}")
    return session.evolve(
        items=tuple(event.items),
        cursor_index=0,
        error=None,
        loading=False,
        search=None,
    ), None


def _on_account_loaded(session: Session, event: AccountLoaded) -> Result:
    if event.error is not None:
        # Surfaced as a notification by the screen; the list banner is for list errors
        logger.warning(f"Failed to load account name: {event.error}")
        return session, None
    return session.evolve(account_name=event.account_name), None


# --- Search ---


def _on_enter_search(session: Session, event: EnterSearchMode) -> Result:
    if session.loading or session.mode != Mode.LISTING:
        return session, None
    return session.evolve(search=SearchState(saved_cursor=session.cursor_index)), None


def _on_search_char(session: Session, event: SearchInputChar) -> Result:
    if session.mode != Mode.SEARCH_COMPOSING or not event.char:
        return session, None
    search = replace(session.search, query=session.search.query + event.char)
    return session.evolve(search=search), None


def _on_search_backspace(session: Session, event: SearchInputBackspace) -> Result:
    if session.mode != Mode.SEARCH_COMPOSING:
        return session, None
    search = replace(session.search, query=session.search.query[:-1])
    return session.evolve(search=search), None


def _on_commit_search(session: Session, event: CommitSearch) -> Result:
    if session.mode != Mode.SEARCH_COMPOSING:
        return session, None
    query = session.search.query
    matches = perform_search(session.items, query)
    logger.info(f"Search performed: query={query!r} matches={len(matches)}")
    search = replace(session.search, matches=matches, current_match_pos=0, composing=False)
    if matches:
        return session.evolve(search=search, cursor_index=matches[0]), None
    return session.evolve(search=search), None


def _on_cancel_search(session: Session, event: CancelSearch) -> Result:
    if session.mode != Mode.SEARCH_COMPOSING:
        return session, None
    cursor = clamp_index(session.search.saved_cursor, len(session.items))
    return session.evolve(search=None, cursor_index=cursor), None


def _step_match(session: Session, step: Callable[[int, int], int]) -> Result:
    search = session.search
    if session.mode != Mode.LISTING or search is None or not search.matches:
        return session, None
    pos = step(search.current_match_pos, len(search.matches))
    return session.evolve(
        search=replace(search, current_match_pos=pos),
        cursor_index=search.matches[pos],
    ), None


def _on_next_match(session: Session, event: NextMatch) -> Result:
    return _step_match(session, next_match_pos)


def _on_prev_match(session: Session, event: PrevMatch) -> Result:
    return _step_match(session, prev_match_pos)


# --- Navigation ---


def _on_move_cursor(session: Session, event: MoveCursor) -> Result:
    if session.mode != Mode.LISTING or not session.items:
        return session, None
    return session.evolve(cursor_index=move_index(session.cursor_index, event.delta, len(session.items))), None


# --- Detail ---


def _on_enter_detail(session: Session, event: EnterDetail) -> Result:
    if session.mode != Mode.LISTING or session.loading:
        return session, None
    item = session.selected_item
    if item is None:
        return session, None
    logger.info(f"Loading {session.resource_type.label} detail for {item.id}")
    return (
        session.evolve(detail=DetailState(item_id=item.id), error=None),
        FetchDetailRequest(session.resource_type, session.zone, item.id),
    )


def _on_detail_completed(session: Session, event: FetchDetailCompleted) -> Result:
    detail = session.detail
    if detail is None or not detail.loading or detail.item_id != event.item_id:
        logger.info(f"Discarding stale detail result for {event.item_id}")
        return session, None
    if event.error is not None:
        logger.error(f"Failed to load detail for {event.item_id}: {event.error}")
        return session.evolve(detail=None, error=event.error), None
    return session.evolve(detail=replace(detail, record=event.record, loading=False), error=None), None


def _on_exit_detail(session: Session, event: ExitDetail) -> Result:
    if session.detail is None:
        return session, None
    return session.evolve(detail=None), None


def _on_quit(session: Session, event: Quit) -> Result:
    logger.info("User requested quit")
    return session.evolve(quitting=True), None


_HANDLERS: dict[type[Event], Callable[[Session, Event], Result]] = {
    Quit: _on_quit,
    SwitchZone: _on_switch_zone,
    Refresh: _on_refresh,
    SwitchResourceType: _on_switch_resource_type,
    FetchListCompleted: _on_list_completed,
    AccountLoaded: _on_account_loaded,
    EnterSearchMode: _on_enter_search,
    SearchInputChar: _on_search_char,
    SearchInputBackspace: _on_search_backspace,
    CommitSearch: _on_commit_search,
    CancelSearch: _on_cancel_search,
    NextMatch: _on_next_match,
    PrevMatch: _on_prev_match,
    MoveCursor: _on_move_cursor,
    EnterDetail: _on_enter_detail,
    FetchDetailCompleted: _on_detail_completed,
    ExitDetail: _on_exit_detail,
}


class CommandDispatcher:
    """Owner of the current Session.

    `dispatch` must only be called from the UI thread; `execute` blocks on
    network I/O and must only be called from a worker.
    """

    def __init__(self, aggregator: Aggregator, session: Session) -> None:
        self._aggregator = aggregator
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def start(self) -> list[Effect]:
        """Effects to schedule when the browser opens."""
        return start_effects(self._session)

    def dispatch(self, event: Event) -> Effect | None:
        """Apply `event` to the current session; return work to schedule."""
        self._session, effect = transition(self._session, event)
        return effect

    def execute(self, effect: Effect) -> Event:
        """Run `effect` and turn its outcome into a completion event.

        Never raises: failures become the `error` of the returned event.
        """
        if isinstance(effect, FetchListRequest):
            try:
                items = self._aggregator.fetch_list(effect.resource_type, effect.zone)
            except Exception as e:
                return FetchListCompleted(effect.resource_type, effect.zone, error=self._describe(e))
            return FetchListCompleted(effect.resource_type, effect.zone, items=tuple(items))

        if isinstance(effect, FetchDetailRequest):
            try:
                record = self._aggregator.fetch_detail(effect.resource_type, effect.zone, effect.item_id)
            except Exception as e:
                return FetchDetailCompleted(effect.item_id, error=self._describe(e))
            return FetchDetailCompleted(effect.item_id, record=record)

        if isinstance(effect, FetchAccountRequest):
            try:
                name = self._aggregator.fetch_account_name()
            except Exception as e:
                return AccountLoaded(error=self._describe(e))
            return AccountLoaded(account_name=name)

        raise TypeError(f"unknown effect: {type(effect).__name__}")

    @staticmethod
    def _describe(error: Exception) -> str:
        if isinstance(error, SactError):
            return str(error)
        logger.exception("Unexpected error while fetching")
        return f"unexpected error: {error}"
