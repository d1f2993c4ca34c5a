"""Key press to dispatcher event translation.

Which keys mean what depends on the mode: while a search query is being
typed every printable character is text, in the detail view only a few
keys do anything.
"""

from __future__ import annotations

from ..models.session import Mode, Session
from .events import (
    CancelSearch,
    CommitSearch,
    EnterDetail,
    EnterSearchMode,
    Event,
    ExitDetail,
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
from .navigation import PAGE_SIZE

# Far enough to hit either end of any list; the dispatcher clamps
_JUMP = 1_000_000

_LISTING_CHARS: dict[str, Event] = {
    "q": Quit(),
    "z": SwitchZone(),
    "r": Refresh(),
    "t": SwitchResourceType(),
    "T": SwitchResourceType(reverse=True),
    "j": MoveCursor(1),
    "k": MoveCursor(-1),
    "g": MoveCursor(-_JUMP),
    "G": MoveCursor(_JUMP),
    "/": EnterSearchMode(),
    "n": NextMatch(),
    "N": PrevMatch(),
}

_LISTING_KEYS: dict[str, Event] = {
    "ctrl+c": Quit(),
    "down": MoveCursor(1),
    "up": MoveCursor(-1),
    "pagedown": MoveCursor(PAGE_SIZE),
    "pageup": MoveCursor(-PAGE_SIZE),
    "home": MoveCursor(-_JUMP),
    "end": MoveCursor(_JUMP),
    "enter": EnterDetail(),
}

_COMPOSING_KEYS: dict[str, Event] = {
    "ctrl+c": Quit(),
    "enter": CommitSearch(),
    "escape": CancelSearch(),
    "backspace": SearchInputBackspace(),
}

_DETAIL_KEYS: dict[str, Event] = {
    "ctrl+c": Quit(),
    "escape": ExitDetail(),
    "q": ExitDetail(),
    "backspace": ExitDetail(),
}


def key_to_event(session: Session, key: str, character: str | None = None) -> Event | None:
    """Translate a key press into an event for the current mode.

    Args:
        session: current session (only its mode is consulted)
        key: Textual key name, e.g. "enter", "ctrl+c", "j"
        character: printable character for the key, if any

    Returns:
        The event to dispatch, or None when the key means nothing here.
    """
    mode = session.mode

    if mode == Mode.SEARCH_COMPOSING:
        if key in _COMPOSING_KEYS:
            return _COMPOSING_KEYS[key]
        if character and character.isprintable():
            return SearchInputChar(character)
        return None

    if mode in (Mode.DETAIL_LOADING, Mode.DETAIL_SHOWN):
        return _DETAIL_KEYS.get(key)

    if key in _LISTING_KEYS:
        return _LISTING_KEYS[key]
    if character:
        return _LISTING_CHARS.get(character)
    return None
