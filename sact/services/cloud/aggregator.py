"""Fetch aggregator: one entry point for every resource type.

Routes a resource type to its backend, validates ids before detail
requests, and turns malformed responses into FetchError so callers only
ever see SactError subclasses.
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from ...models.exceptions import FetchError, SactError
from ...models.resource import DetailRecord, ListItem, ResourceType
from ..validation import require_valid_id
from .appliance import APPLIANCE_KINDS
from .apprun import AppRunApi
from .client import GLOBAL_ZONE, SakuraClient
from .commonservice import COMMON_SERVICE_KINDS
from .iaas import IAAS_KINDS, IaasApi, IaasKind
from .monitoring import STORAGE_KINDS, MonitoringApi

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALL_IAAS_KINDS: dict[ResourceType, IaasKind] = {**IAAS_KINDS, **APPLIANCE_KINDS, **COMMON_SERVICE_KINDS}


class FetchAggregator:
    """Blocking list/detail fetches for all resource types.

    Never call from the UI thread.
    """

    def __init__(self, client: SakuraClient, page_size: int = IaasApi.PAGE_SIZE) -> None:
        self.iaas = IaasApi(client, page_size)
        self.apprun = AppRunApi(client)
        self.monitoring = MonitoringApi(client)

    def fetch_list(self, resource_type: ResourceType, zone: str) -> list[ListItem]:
        """All items of `resource_type` in `zone` (zone ignored for global types).

        Raises:
            FetchError: if any page fails; no partial list is returned
        """
        logger.info(f"Fetching {resource_type.label} list ({_scope(resource_type, zone)})")
        items = self._guard(f"list {resource_type.label}", lambda: self._list(resource_type, zone))
        logger.info(f"Fetched {len(items)} {resource_type.label} item(s)")
        return items

    def fetch_detail(self, resource_type: ResourceType, zone: str, item_id: str) -> DetailRecord:
        """Full record of one item.

        Raises:
            ValidationError: if `item_id` is malformed for the type
            FetchError: if the request fails
        """
        require_valid_id(resource_type, item_id)
        logger.info(f"Fetching {resource_type.label} detail {item_id} ({_scope(resource_type, zone)})")
        return self._guard(
            f"read {resource_type.label} {item_id}",
            lambda: self._detail(resource_type, zone, item_id),
        )

    def fetch_account_name(self) -> str:
        return self._guard("read account", lambda: self.iaas.account_name(GLOBAL_ZONE))

    def _list(self, resource_type: ResourceType, zone: str) -> list[ListItem]:
        if resource_type in ALL_IAAS_KINDS:
            return self.iaas.list_items(ALL_IAAS_KINDS[resource_type], _api_zone(resource_type, zone))
        if resource_type in STORAGE_KINDS:
            return self.monitoring.list_storages(resource_type)
        if resource_type == ResourceType.APPRUN_DEDICATED:
            return self.apprun.list_clusters()
        raise FetchError(f"listing {resource_type.label} is not supported")

    def _detail(self, resource_type: ResourceType, zone: str, item_id: str) -> DetailRecord:
        if resource_type in ALL_IAAS_KINDS:
            return self.iaas.read_detail(ALL_IAAS_KINDS[resource_type], _api_zone(resource_type, zone), item_id)
        if resource_type in STORAGE_KINDS:
            return self.monitoring.read_storage(resource_type, item_id)
        if resource_type == ResourceType.APPRUN_DEDICATED:
            return self.apprun.read_cluster(item_id)
        raise FetchError(f"reading {resource_type.label} is not supported")

    @staticmethod
    def _guard(action: str, call: Callable[[], T]) -> T:
        """Run `call`, reporting an unexpected response shape as FetchError."""
        try:
            return call()
        except SactError as e:
            logger.error(f"Failed to {action}: {e}")
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Unexpected response while trying to {action}: {e!r}")
            raise FetchError(f"unexpected response from api ({action})") from e


def _api_zone(resource_type: ResourceType, zone: str) -> str:
    return GLOBAL_ZONE if resource_type.is_global else zone


def _scope(resource_type: ResourceType, zone: str) -> str:
    return "global" if resource_type.is_global else f"zone={zone}"
