"""IaaS API (`/cloud/zone/{zone}/api/cloud/1.1`) resources.

Listing endpoints take their query as URL-encoded JSON
(`{"From": .., "Count": .., "Filter": ..}`) and answer with
`From`/`Count`/`Total` plus the records under a plural key such as
`Servers`. The offset of the next page acts as the cursor.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import quote

from ...models.exceptions import FetchError
from ...models.resource import DetailRecord, DetailSection, ListItem, ResourceType
from .client import SakuraClient, iaas_url
from .paging import Page, drain_pages

logger = logging.getLogger(__name__)

Raw = dict[str, Any]


def dig(data: Any, *keys: str | int, default: Any = "") -> Any:
    """Walk nested dicts/lists; `default` if any step is missing or null."""
    for key in keys:
        if isinstance(data, dict):
            data = data.get(key)
        elif isinstance(data, list) and isinstance(key, int) and -len(data) <= key < len(data):
            data = data[key]
        else:
            return default
        if data is None:
            return default
    return data


def text(value: Any) -> str:
    """Render a scalar from the API as display text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def date(value: Any) -> str:
    """`2024-01-02T03:04:05+09:00` -> `2024-01-02 03:04:05`."""
    value = text(value)
    return value[:19].replace("T", " ") if value else ""


def gib(size_mb: Any) -> str:
    try:
        return f"{int(size_mb) // 1024} GB"
    except (TypeError, ValueError):
        return ""


def tags(raw: Raw) -> tuple[str, ...]:
    return tuple(text(t) for t in raw.get("Tags") or ())


def keywords(*values: Any) -> tuple[str, ...]:
    """Non-empty search keywords."""
    return tuple(text(v) for v in values if text(v))


def fields(*pairs: tuple[str, Any]) -> tuple[tuple[str, str], ...]:
    """Detail fields, dropping empty values."""
    return tuple((label, text(value)) for label, value in pairs if text(value))


@dataclass(frozen=True)
class IaasKind:
    """How one resource type maps onto the IaaS API."""

    resource_type: ResourceType
    path: str
    list_key: str
    read_key: str
    to_item: Callable[[Raw, str], ListItem]
    to_detail: Callable[[Raw, str], DetailRecord]
    filter: dict[str, Any] = field(default_factory=dict)


class IaasApi:
    """Lists and reads IaaS resources."""

    PAGE_SIZE = 100  # API maximum

    def __init__(self, client: SakuraClient, page_size: int = PAGE_SIZE) -> None:
        self.client = client
        self.page_size = max(1, min(page_size, self.PAGE_SIZE))

    def find(self, zone: str, path: str, list_key: str, filter: dict[str, Any] | None = None) -> list[Raw]:
        """Every raw record of `path` in `zone`, across all pages."""
        logger.debug(f"Listing {path} in {zone} filter={filter}")

        def fetch_page(cursor: int | None) -> Page:
            start = cursor or 0
            query: dict[str, Any] = {"From": start, "Count": self.page_size}
            if filter:
                query["Filter"] = filter
            url = f"{iaas_url(zone, path)}?{quote(json.dumps(query))}"
            data = self.client.get_json(url)
            records = data.get(list_key) or []
            total = int(data.get("Total") or 0)
            end = start + len(records)
            return Page(records=records, next_cursor=end if records and end < total else None)

        return drain_pages(fetch_page, lambda raw: raw)

    def read(self, zone: str, path: str, read_key: str, item_id: str) -> Raw:
        data = self.client.get_json(iaas_url(zone, f"{path}/{item_id}"))
        record = data.get(read_key)
        if not record:
            raise FetchError(f"{path} {item_id} not found in {zone}")
        return record

    def list_items(self, kind: IaasKind, zone: str) -> list[ListItem]:
        records = self.find(zone, kind.path, kind.list_key, kind.filter)
        return [kind.to_item(raw, _shown_zone(kind, zone)) for raw in records]

    def read_detail(self, kind: IaasKind, zone: str, item_id: str) -> DetailRecord:
        raw = self.read(zone, kind.path, kind.read_key, item_id)
        return kind.to_detail(raw, _shown_zone(kind, zone))

    def account_name(self, zone: str) -> str:
        data = self.client.get_json(iaas_url(zone, "auth-status"))
        return text(dig(data, "Account", "Name"))


def _shown_zone(kind: IaasKind, zone: str) -> str:
    """Zone recorded on items; global resources belong to none."""
    return "" if kind.resource_type.is_global else zone


# --- Server ---


def _server_spec(raw: Raw) -> str:
    cpu = dig(raw, "ServerPlan", "CPU")
    memory = gib(dig(raw, "ServerPlan", "MemoryMB"))
    return f"{cpu} Core / {memory}" if cpu else ""


def _server_ips(raw: Raw) -> list[str]:
    ips = []
    for iface in raw.get("Interfaces") or ():
        ip = dig(iface, "IPAddress") or dig(iface, "UserIPAddress")
        if ip:
            ips.append(ip)
    return ips


def server_item(raw: Raw, zone: str) -> ListItem:
    ips = _server_ips(raw)
    return ListItem(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        status=text(dig(raw, "Instance", "Status")),
        summary=" ".join(filter(None, [_server_spec(raw), ips[0] if ips else ""])),
        zone=zone,
        keywords=keywords(raw.get("Description"), *ips, *tags(raw)),
    )


def server_detail(raw: Raw, zone: str) -> DetailRecord:
    disks = DetailSection(
        "Disks",
        ("ID", "Name", "Size", "Connection"),
        tuple(
            (text(d.get("ID")), text(d.get("Name")), gib(d.get("SizeMB")), text(d.get("Connection")))
            for d in raw.get("Disks") or ()
        ),
    )
    interfaces = DetailSection(
        "Interfaces",
        ("IP Address", "MAC Address", "Switch"),
        tuple(
            (
                text(dig(i, "IPAddress") or dig(i, "UserIPAddress")),
                text(i.get("MACAddress")),
                text(dig(i, "Switch", "Name") or dig(i, "Switch", "Scope")),
            )
            for i in raw.get("Interfaces") or ()
        ),
    )
    return DetailRecord(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        resource_type=ResourceType.SERVER,
        status=text(dig(raw, "Instance", "Status")),
        zone=zone,
        description=text(raw.get("Description")),
        tags=tags(raw),
        fields=fields(
            ("Plan", _server_spec(raw)),
            ("Commitment", dig(raw, "ServerPlan", "Commitment")),
            ("Hostname", raw.get("HostName")),
            ("Availability", raw.get("Availability")),
            ("Status changed", date(dig(raw, "Instance", "StatusChangedAt"))),
            ("Created", date(raw.get("CreatedAt"))),
        ),
        sections=(disks, interfaces),
    )


# --- Switch ---


def _default_route(raw: Raw) -> str:
    return text(dig(raw, "Subnets", 0, "DefaultRoute"))


def switch_item(raw: Raw, zone: str) -> ListItem:
    return ListItem(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        summary=f"Servers: {text(raw.get('ServerCount') or 0)}",
        zone=zone,
        keywords=keywords(raw.get("Description"), _default_route(raw), *tags(raw)),
    )


def switch_detail(raw: Raw, zone: str) -> DetailRecord:
    subnets = DetailSection(
        "Subnets",
        ("Network", "Default Route"),
        tuple(
            (
                f"{text(s.get('NetworkAddress'))}/{text(s.get('NetworkMaskLen'))}",
                text(s.get("DefaultRoute")),
            )
            for s in raw.get("Subnets") or ()
        ),
    )
    return DetailRecord(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        resource_type=ResourceType.SWITCH,
        zone=zone,
        description=text(raw.get("Description")),
        tags=tags(raw),
        fields=fields(
            ("Servers", text(raw.get("ServerCount") or 0)),
            ("Default route", _default_route(raw)),
            ("Bridge", dig(raw, "Bridge", "Name")),
            ("Created", date(raw.get("CreatedAt"))),
        ),
        sections=(subnets,),
    )


# --- Disk ---


def disk_item(raw: Raw, zone: str) -> ListItem:
    return ListItem(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        status=text(raw.get("Availability")),
        summary=" ".join(filter(None, [gib(raw.get("SizeMB")), text(dig(raw, "Plan", "Name"))])),
        zone=zone,
        keywords=keywords(raw.get("Description"), dig(raw, "Server", "Name"), *tags(raw)),
    )


def disk_detail(raw: Raw, zone: str) -> DetailRecord:
    return DetailRecord(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        resource_type=ResourceType.DISK,
        status=text(raw.get("Availability")),
        zone=zone,
        description=text(raw.get("Description")),
        tags=tags(raw),
        fields=fields(
            ("Size", gib(raw.get("SizeMB"))),
            ("Plan", dig(raw, "Plan", "Name")),
            ("Connection", raw.get("Connection")),
            ("Server", dig(raw, "Server", "Name")),
            ("Server ID", dig(raw, "Server", "ID")),
            ("Source archive", dig(raw, "SourceArchive", "ID")),
            ("Encryption", raw.get("EncryptionAlgorithm")),
            ("Created", date(raw.get("CreatedAt"))),
        ),
    )


# --- Archive ---


def archive_item(raw: Raw, zone: str) -> ListItem:
    return ListItem(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        status=text(raw.get("Availability")),
        summary=" ".join(filter(None, [gib(raw.get("SizeMB")), text(raw.get("Scope"))])),
        zone=zone,
        keywords=keywords(raw.get("Description"), *tags(raw)),
    )


def archive_detail(raw: Raw, zone: str) -> DetailRecord:
    return DetailRecord(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        resource_type=ResourceType.ARCHIVE,
        status=text(raw.get("Availability")),
        zone=zone,
        description=text(raw.get("Description")),
        tags=tags(raw),
        fields=fields(
            ("Size", gib(raw.get("SizeMB"))),
            ("Scope", raw.get("Scope")),
            ("Host class", dig(raw, "BundleInfo", "HostClass")),
            ("Source disk", dig(raw, "SourceDisk", "ID")),
            ("Source archive", dig(raw, "SourceArchive", "ID")),
            ("Created", date(raw.get("CreatedAt"))),
        ),
    )


# --- Internet (router) ---


def _internet_networks(raw: Raw) -> list[str]:
    return [
        f"{text(s.get('NetworkAddress'))}/{text(s.get('NetworkMaskLen'))}"
        for s in dig(raw, "Switch", "Subnets", default=None) or ()
    ]


def internet_item(raw: Raw, zone: str) -> ListItem:
    networks = _internet_networks(raw)
    bandwidth = raw.get("BandWidthMbps")
    return ListItem(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        summary=" ".join(filter(None, [f"{bandwidth} Mbps" if bandwidth else "", networks[0] if networks else ""])),
        zone=zone,
        keywords=keywords(raw.get("Description"), *networks, *tags(raw)),
    )


def internet_detail(raw: Raw, zone: str) -> DetailRecord:
    subnets = DetailSection(
        "Subnets",
        ("Network", "Next Hop"),
        tuple(
            (
                f"{text(s.get('NetworkAddress'))}/{text(s.get('NetworkMaskLen'))}",
                text(s.get("NextHop")),
            )
            for s in dig(raw, "Switch", "Subnets", default=None) or ()
        ),
    )
    bandwidth = raw.get("BandWidthMbps")
    return DetailRecord(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        resource_type=ResourceType.INTERNET,
        zone=zone,
        description=text(raw.get("Description")),
        tags=tags(raw),
        fields=fields(
            ("Bandwidth", f"{bandwidth} Mbps" if bandwidth else ""),
            ("Switch ID", dig(raw, "Switch", "ID")),
            ("Network mask", raw.get("NetworkMaskLen")),
            ("Created", date(raw.get("CreatedAt"))),
        ),
        sections=(subnets,),
    )


# --- Packet filter ---


def packetfilter_item(raw: Raw, zone: str) -> ListItem:
    rules = raw.get("Expression") or ()
    return ListItem(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        summary=f"Rules: {len(rules)}",
        zone=zone,
        keywords=keywords(raw.get("Description")),
    )


def packetfilter_detail(raw: Raw, zone: str) -> DetailRecord:
    rules = DetailSection(
        "Rules",
        ("Protocol", "Source", "Source Port", "Dest Port", "Action"),
        tuple(
            (
                text(r.get("Protocol")),
                text(r.get("SourceNetwork")),
                text(r.get("SourcePort")),
                text(r.get("DestinationPort")),
                text(r.get("Action")),
            )
            for r in raw.get("Expression") or ()
        ),
    )
    return DetailRecord(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        resource_type=ResourceType.PACKET_FILTER,
        zone=zone,
        description=text(raw.get("Description")),
        fields=fields(("Created", date(raw.get("CreatedAt")))),
        sections=(rules,),
    )


# --- SSH key ---


def sshkey_item(raw: Raw, zone: str) -> ListItem:
    return ListItem(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        summary=text(raw.get("Fingerprint")),
        keywords=keywords(raw.get("Description"), raw.get("Fingerprint")),
    )


def sshkey_detail(raw: Raw, zone: str) -> DetailRecord:
    return DetailRecord(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        resource_type=ResourceType.SSH_KEY,
        description=text(raw.get("Description")),
        fields=fields(
            ("Fingerprint", raw.get("Fingerprint")),
            ("Public key", raw.get("PublicKey")),
            ("Created", date(raw.get("CreatedAt"))),
        ),
    )


# --- Bridge ---


def bridge_item(raw: Raw, zone: str) -> ListItem:
    region = text(dig(raw, "Region", "Name"))
    switches = dig(raw, "Info", "Switches", default=None) or ()
    return ListItem(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        summary=" ".join(filter(None, [region, f"Switches: {len(switches)}"])),
        keywords=keywords(raw.get("Description"), region),
    )


def bridge_detail(raw: Raw, zone: str) -> DetailRecord:
    switches = DetailSection(
        "Connected switches",
        ("ID", "Name", "Zone"),
        tuple(
            (text(s.get("ID")), text(s.get("Name")), text(dig(s, "Zone", "Name")))
            for s in dig(raw, "Info", "Switches", default=None) or ()
        ),
    )
    return DetailRecord(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        resource_type=ResourceType.BRIDGE,
        description=text(raw.get("Description")),
        fields=fields(
            ("Region", dig(raw, "Region", "Name")),
            ("Created", date(raw.get("CreatedAt"))),
        ),
        sections=(switches,),
    )


IAAS_KINDS: dict[ResourceType, IaasKind] = {
    kind.resource_type: kind
    for kind in (
        IaasKind(ResourceType.SERVER, "server", "Servers", "Server", server_item, server_detail),
        IaasKind(ResourceType.SWITCH, "switch", "Switches", "Switch", switch_item, switch_detail),
        IaasKind(ResourceType.DISK, "disk", "Disks", "Disk", disk_item, disk_detail),
        IaasKind(ResourceType.ARCHIVE, "archive", "Archives", "Archive", archive_item, archive_detail),
        IaasKind(ResourceType.INTERNET, "internet", "Internet", "Internet", internet_item, internet_detail),
        IaasKind(
            ResourceType.PACKET_FILTER, "packetfilter", "PacketFilters", "PacketFilter",
            packetfilter_item, packetfilter_detail,
        ),
        IaasKind(ResourceType.SSH_KEY, "sshkey", "SSHKeys", "SSHKey", sshkey_item, sshkey_detail),
        IaasKind(ResourceType.BRIDGE, "bridge", "Bridges", "Bridge", bridge_item, bridge_detail),
    )
}
