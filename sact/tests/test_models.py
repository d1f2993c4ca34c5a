"""Tests for resource catalogue and session models."""

import pytest

from sact.models.exceptions import FetchError, SactError
from sact.models.resource import (
    GLOBAL_RESOURCE_TYPES,
    ZONES,
    DetailRecord,
    DetailSection,
    ResourceType,
    next_zone,
)
from sact.models.session import DetailState, Mode, SearchState, Session


class TestResourceType:
    """Tests for the resource catalogue."""

    def test_catalogue_size(self):
        assert len(ResourceType) == 22

    def test_cycle_forward_and_back(self):
        for resource_type in ResourceType:
            assert resource_type.next().previous() == resource_type

    def test_cycle_wraps(self):
        assert ResourceType.MONITORING_TRACE_STORAGE.next() == ResourceType.SERVER

    def test_global_types(self):
        assert ResourceType.DNS.is_global
        assert ResourceType.APPRUN_DEDICATED.is_global
        assert not ResourceType.SERVER.is_global
        assert not ResourceType.AUTO_BACKUP.is_global
        assert len(GLOBAL_RESOURCE_TYPES) == 11

    @pytest.mark.parametrize("text,expected", [
        ("server", ResourceType.SERVER),
        ("VPCRouter", ResourceType.VPC_ROUTER),
        ("ssh_key", ResourceType.SSH_KEY),
        ("monitoring-logs", ResourceType.MONITORING_LOG_STORAGE),
    ])
    def test_parse(self, text, expected):
        assert ResourceType.parse(text) == expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            ResourceType.parse("mainframe")

    def test_every_type_has_label(self):
        assert all(resource_type.label for resource_type in ResourceType)


class TestZones:
    def test_next_zone_cycles(self):
        zone = ZONES[0]
        for _ in ZONES:
            zone = next_zone(zone)
        assert zone == ZONES[0]

    def test_unknown_zone_restarts(self):
        assert next_zone("nowhere") == "tk1a"


class TestSession:
    """Tests for Session derived state."""

    def test_modes(self, listing, record):
        assert listing.mode == Mode.LISTING
        assert listing.evolve(search=SearchState()).mode == Mode.SEARCH_COMPOSING
        assert listing.evolve(search=SearchState(composing=False)).mode == Mode.LISTING
        assert listing.evolve(detail=DetailState("1")).mode == Mode.DETAIL_LOADING
        assert listing.evolve(detail=DetailState("1", record, loading=False)).mode == Mode.DETAIL_SHOWN

    def test_search_has_matches(self):
        assert SearchState(query="web", matches=(1,)).has_matches
        assert not SearchState(query="zzz").has_matches

    def test_new_detail_has_no_error(self):
        detail = DetailState("113100000001")
        assert detail.loading
        assert detail.error is None

    def test_selected_item(self, listing, items):
        assert listing.evolve(cursor_index=2).selected_item == items[2]
        assert Session().selected_item is None

    def test_zone_label(self, listing):
        assert listing.zone_label == "tk1b"
        assert listing.evolve(resource_type=ResourceType.GSLB).zone_label == "global"

    def test_immutable(self, listing):
        with pytest.raises(AttributeError):
            listing.cursor_index = 1

    def test_to_dict(self, listing, record):
        session = listing.evolve(
            search=SearchState(query="web", matches=(0, 2), composing=False),
            detail=DetailState(record.id, record, loading=False),
        )
        data = session.to_dict()
        assert data["mode"] == "detail_shown"
        assert data["search"]["matches"] == [0, 2]
        assert data["detail"]["record"]["name"] == "web-server"
        assert len(data["items"]) == 3

    def test_record_to_dict(self):
        record = DetailRecord(
            id="1",
            name="n",
            resource_type=ResourceType.DNS,
            sections=(DetailSection("Records", ("Name",), (("www",),)),),
        )
        assert record.to_dict()["sections"] == [{"title": "Records", "columns": ["Name"], "rows": [["www"]]}]


class TestExceptions:
    def test_suggestion_in_str(self):
        assert str(SactError("failed", suggestion="try again")) == "failed (try again)"
        assert str(SactError("failed")) == "failed"

    def test_fetch_error_status(self):
        error = FetchError("api error: 404", status=404)
        assert isinstance(error, SactError)
        assert error.status == 404
