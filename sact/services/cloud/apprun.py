"""AppRun Dedicated clusters (`/cloud/api/apprun-dedicated/1.0`).

Listing uses `max_items` and an opaque `cursor`; the response carries
`nextCursor` while more clusters remain.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ...models.exceptions import FetchError
from ...models.resource import DetailRecord, DetailSection, ListItem, ResourceType
from .client import SakuraClient, apprun_url
from .iaas import Raw, dig, fields, keywords, text
from .paging import Page, drain_pages


def _created(raw: Raw) -> str:
    created = raw.get("created")
    if not created:
        return ""
    try:
        return datetime.fromtimestamp(int(created)).strftime("%Y-%m-%d %H:%M:%S")
    except (TypeError, ValueError, OSError):
        return text(created)


def cluster_item(raw: Raw) -> ListItem:
    groups = raw.get("autoScalingGroups") or ()
    return ListItem(
        id=text(raw.get("clusterId")),
        name=text(raw.get("name")),
        summary=" ".join(filter(None, [f"ASG: {len(groups)}", _created(raw)])),
        keywords=keywords(raw.get("servicePrincipalId")),
    )


def cluster_detail(raw: Raw) -> DetailRecord:
    ports = DetailSection(
        "Load balancer ports",
        ("Port", "Protocol"),
        tuple((text(p.get("port")), text(p.get("protocol"))) for p in raw.get("ports") or ()),
    )
    groups = DetailSection(
        "Auto scaling groups",
        ("ID", "Name"),
        tuple((text(g.get("autoScalingGroupId")), text(g.get("name"))) for g in raw.get("autoScalingGroups") or ()),
    )
    return DetailRecord(
        id=text(raw.get("clusterId")),
        name=text(raw.get("name")),
        resource_type=ResourceType.APPRUN_DEDICATED,
        fields=fields(
            ("Service principal", raw.get("servicePrincipalId")),
            ("Let's Encrypt", raw.get("hasLetsEncryptEmail")),
            ("Created", _created(raw)),
        ),
        sections=(ports, groups),
    )


class AppRunApi:
    """Lists and reads AppRun Dedicated clusters."""

    PAGE_SIZE = 30  # API maximum

    def __init__(self, client: SakuraClient, page_size: int = PAGE_SIZE) -> None:
        self.client = client
        self.page_size = max(1, min(page_size, self.PAGE_SIZE))

    def list_clusters(self) -> list[ListItem]:
        def fetch_page(cursor: str | None) -> Page:
            params: dict[str, Any] = {"max_items": self.page_size}
            if cursor:
                params["cursor"] = cursor
            data = self.client.get_json(apprun_url("clusters"), params)
            return Page(records=data.get("clusters") or [], next_cursor=data.get("nextCursor") or None)

        return drain_pages(fetch_page, cluster_item)

    def read_cluster(self, cluster_id: str) -> DetailRecord:
        data = self.client.get_json(apprun_url(f"clusters/{cluster_id}"))
        cluster = dig(data, "cluster", default=None)
        if not cluster:
            raise FetchError(f"cluster {cluster_id} not found")
        return cluster_detail(cluster)
