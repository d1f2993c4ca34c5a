"""Shared test fixtures for sact."""

import pytest
from pathlib import Path
from unittest.mock import MagicMock

from sact.models.resource import DetailRecord, ListItem, ResourceType
from sact.models.session import Session
from sact.services.cloud.client import SakuraClient
from sact.services.config import ConfigManager
from sact.services.dispatcher import CommandDispatcher


@pytest.fixture
def items() -> tuple[ListItem, ...]:
    """Three servers; two of them match "web" case-insensitively."""
    return (
        ListItem(id="113100000001", name="web-server", status="up", zone="tk1b"),
        ListItem(id="113100000002", name="db-server", status="down", zone="tk1b"),
        ListItem(id="113100000003", name="WEB-proxy", status="up", zone="tk1b", keywords=("nginx",)),
    )


@pytest.fixture
def listing(items) -> Session:
    """A settled list view of `items` in tk1b."""
    return Session(zone="tk1b", resource_type=ResourceType.SERVER, items=items, loading=False)


@pytest.fixture
def record() -> DetailRecord:
    return DetailRecord(
        id="113100000001",
        name="web-server",
        resource_type=ResourceType.SERVER,
        status="up",
        zone="tk1b",
        fields=(("Plan", "2 Core / 4 GB"),),
    )


@pytest.fixture
def mock_aggregator(items, record) -> MagicMock:
    """Aggregator double that answers every request successfully."""
    aggregator = MagicMock()
    aggregator.fetch_list.return_value = list(items)
    aggregator.fetch_detail.return_value = record
    aggregator.fetch_account_name.return_value = "example-account"
    return aggregator


@pytest.fixture
def dispatcher(mock_aggregator: MagicMock, listing: Session) -> CommandDispatcher:
    return CommandDispatcher(mock_aggregator, listing)


@pytest.fixture
def mock_client() -> MagicMock:
    """SakuraClient double; set `get_json.side_effect` per test."""
    return MagicMock(spec=SakuraClient)


@pytest.fixture
def config_manager(tmp_path: Path) -> ConfigManager:
    """Create a ConfigManager with temp directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return ConfigManager(config_dir=config_dir)
