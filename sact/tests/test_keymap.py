"""Tests for key to event translation."""

import pytest

from sact.models.session import DetailState, SearchState
from sact.services.events import (
    CancelSearch,
    CommitSearch,
    EnterDetail,
    EnterSearchMode,
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
from sact.services.keymap import key_to_event
from sact.services.navigation import PAGE_SIZE


class TestListingKeys:
    """Keys in the list view."""

    @pytest.mark.parametrize("key,character,expected", [
        ("q", "q", Quit()),
        ("ctrl+c", None, Quit()),
        ("z", "z", SwitchZone()),
        ("r", "r", Refresh()),
        ("t", "t", SwitchResourceType()),
        ("T", "T", SwitchResourceType(reverse=True)),
        ("down", None, MoveCursor(1)),
        ("j", "j", MoveCursor(1)),
        ("up", None, MoveCursor(-1)),
        ("k", "k", MoveCursor(-1)),
        ("pagedown", None, MoveCursor(PAGE_SIZE)),
        ("pageup", None, MoveCursor(-PAGE_SIZE)),
        ("enter", None, EnterDetail()),
        ("slash", "/", EnterSearchMode()),
        ("n", "n", NextMatch()),
        ("N", "N", PrevMatch()),
    ])
    def test_mapping(self, listing, key, character, expected):
        assert key_to_event(listing, key, character) == expected

    def test_home_end_reach_list_ends(self, listing):
        assert key_to_event(listing, "home", None).delta < -len(listing.items)
        assert key_to_event(listing, "end", None).delta > len(listing.items)

    def test_unknown_key(self, listing):
        assert key_to_event(listing, "x", "x") is None
        assert key_to_event(listing, "f5", None) is None


class TestComposingKeys:
    """Keys while a search query is being typed."""

    @pytest.fixture
    def composing(self, listing):
        return listing.evolve(search=SearchState(query="we"))

    def test_letters_are_text(self, composing):
        """q, n and / are search text, not commands."""
        assert key_to_event(composing, "q", "q") == SearchInputChar("q")
        assert key_to_event(composing, "n", "n") == SearchInputChar("n")
        assert key_to_event(composing, "slash", "/") == SearchInputChar("/")

    def test_control_keys(self, composing):
        assert key_to_event(composing, "enter", "\r") == CommitSearch()
        assert key_to_event(composing, "escape", "\x1b") == CancelSearch()
        assert key_to_event(composing, "backspace", "\x08") == SearchInputBackspace()
        assert key_to_event(composing, "ctrl+c", "\x03") == Quit()

    def test_non_printable_ignored(self, composing):
        assert key_to_event(composing, "up", None) is None


class TestDetailKeys:
    """Keys in the detail view."""

    @pytest.fixture
    def detail(self, listing, record):
        return listing.evolve(detail=DetailState(item_id=record.id, record=record, loading=False))

    @pytest.mark.parametrize("key,character", [("escape", None), ("q", "q"), ("backspace", None)])
    def test_back(self, detail, key, character):
        assert key_to_event(detail, key, character) == ExitDetail()

    def test_quit(self, detail):
        assert key_to_event(detail, "ctrl+c", None) == Quit()

    def test_list_keys_inactive(self, detail):
        assert key_to_event(detail, "z", "z") is None
        assert key_to_event(detail, "enter", None) is None

    def test_back_while_loading(self, listing):
        session = listing.evolve(detail=DetailState(item_id="113100000001"))
        assert key_to_event(session, "escape", None) == ExitDetail()
