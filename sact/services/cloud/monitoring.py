"""Monitoring Suite storages (`/cloud/zone/is1a/api/monitoring/1.0`).

List responses are `{"count", "next", "results"}` where `next` is the URL
of the following page, or null on the last one.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...models.resource import DetailRecord, DetailSection, ListItem, ResourceType
from .client import SakuraClient, monitoring_url
from .iaas import Raw, date, dig, fields, keywords, text
from .paging import Page, drain_pages


@dataclass(frozen=True)
class StorageKind:
    resource_type: ResourceType
    path: str  # e.g. "logs/storages/"
    routings_path: str | None  # routing rules referencing the storage, if the API has them


STORAGE_KINDS: dict[ResourceType, StorageKind] = {
    kind.resource_type: kind
    for kind in (
        StorageKind(ResourceType.MONITORING_LOG_STORAGE, "logs/storages/", "logs/routings/"),
        StorageKind(ResourceType.MONITORING_METRICS_STORAGE, "metrics/storages/", "metrics/routings/"),
        StorageKind(ResourceType.MONITORING_TRACE_STORAGE, "traces/storages/", None),
    )
}


def _usage(raw: Raw) -> str:
    usage = raw.get("usage") or {}
    return " ".join(f"{key.replace('_', ' ')}: {value}" for key, value in usage.items())


def _endpoint(raw: Raw) -> str:
    return text(dig(raw, "endpoints", "ingester", "address") or dig(raw, "endpoints", "address"))


def storage_item(raw: Raw) -> ListItem:
    expire = raw.get("expire_day")
    summary = " ".join(filter(None, [f"Expire: {expire} days" if expire else "", _usage(raw)]))
    return ListItem(
        id=text(raw.get("resource_id")),
        name=text(raw.get("name")),
        status="system" if raw.get("is_system") else "",
        summary=summary,
        keywords=keywords(raw.get("description"), _endpoint(raw)),
    )


def storage_detail(raw: Raw, resource_type: ResourceType, routings: list[Raw]) -> DetailRecord:
    sections = ()
    if routings:
        sections = (
            DetailSection(
                "Routings",
                ("UID", "Name", "Enabled", "Source", "Destination"),
                tuple(
                    (
                        text(r.get("uid"))[:8],
                        text(r.get("name")),
                        text(r.get("enabled")),
                        text(r.get("source_resource_id")),
                        text(r.get("dest_resource_id")),
                    )
                    for r in routings
                ),
            ),
        )
    return DetailRecord(
        id=text(raw.get("resource_id")),
        name=text(raw.get("name")),
        resource_type=resource_type,
        status="system" if raw.get("is_system") else "",
        description=text(raw.get("description")),
        tags=tuple(text(t) for t in raw.get("tags") or ()),
        fields=fields(
            ("Endpoint", _endpoint(raw)),
            ("Expire days", raw.get("expire_day")),
            ("Usage", _usage(raw)),
            ("Created", date(raw.get("created_at"))),
            ("Updated", date(raw.get("updated_at"))),
        ),
        sections=sections,
    )


class MonitoringApi:
    """Lists and reads Monitoring Suite storages."""

    def __init__(self, client: SakuraClient) -> None:
        self.client = client

    def _drain(self, path: str, normalize):
        def fetch_page(cursor: str | None) -> Page:
            data = self.client.get_json(cursor or monitoring_url(path))
            return Page(records=data.get("results") or [], next_cursor=data.get("next") or None)

        return drain_pages(fetch_page, normalize)

    def list_storages(self, resource_type: ResourceType) -> list[ListItem]:
        return self._drain(STORAGE_KINDS[resource_type].path, storage_item)

    def read_storage(self, resource_type: ResourceType, resource_id: str) -> DetailRecord:
        kind = STORAGE_KINDS[resource_type]
        raw = self.client.get_json(monitoring_url(f"{kind.path}{resource_id}/"))
        routings: list[Raw] = []
        if kind.routings_path:
            target = int(resource_id)
            routings = [
                r for r in self._drain(kind.routings_path, lambda r: r)
                if target in (r.get("source_resource_id"), r.get("dest_resource_id"))
            ]
        return storage_detail(raw, resource_type, routings)
