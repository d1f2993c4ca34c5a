"""Appliance resources: DB, VPC router, load balancer and NFS.

All four live under the IaaS `appliance` endpoint and are told apart by
the `Class` filter.
"""

from __future__ import annotations

from ...models.resource import DetailRecord, DetailSection, ListItem, ResourceType
from .iaas import IaasKind, Raw, date, dig, fields, keywords, tags, text

VPC_ROUTER_PLANS = {1: "standard", 2: "premium", 3: "highspec", 4: "highspec4000"}


def _server_ips(raw: Raw) -> list[str]:
    """Appliance addresses on the attached switch."""
    return [text(s.get("IPAddress")) for s in dig(raw, "Remark", "Servers", default=None) or () if s.get("IPAddress")]


def _status(raw: Raw) -> str:
    return text(dig(raw, "Instance", "Status") or raw.get("Availability"))


def _base_item(raw: Raw, zone: str, summary: str, *extra: str) -> ListItem:
    ips = _server_ips(raw)
    return ListItem(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        status=_status(raw),
        summary=summary,
        zone=zone,
        keywords=keywords(raw.get("Description"), *ips, *extra, *tags(raw)),
    )


def _base_detail(raw: Raw, zone: str, resource_type: ResourceType, *pairs, sections=()) -> DetailRecord:
    return DetailRecord(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        resource_type=resource_type,
        status=_status(raw),
        zone=zone,
        description=text(raw.get("Description")),
        tags=tags(raw),
        fields=fields(
            ("IP address", ", ".join(_server_ips(raw))),
            ("Netmask", dig(raw, "Remark", "Network", "NetworkMaskLen")),
            ("Default route", dig(raw, "Remark", "Network", "DefaultRoute")),
            *pairs,
            ("Availability", raw.get("Availability")),
            ("Created", date(raw.get("CreatedAt"))),
        ),
        sections=tuple(sections),
    )


# --- DB ---


def _db_engine(raw: Raw) -> str:
    common = dig(raw, "Remark", "DBConf", "Common", default={})
    return " ".join(filter(None, [text(common.get("DatabaseName")), text(common.get("DatabaseVersion"))]))


def db_item(raw: Raw, zone: str) -> ListItem:
    ips = _server_ips(raw)
    summary = " ".join(filter(None, [_db_engine(raw), ips[0] if ips else ""]))
    return _base_item(raw, zone, summary, _db_engine(raw))


def db_detail(raw: Raw, zone: str) -> DetailRecord:
    return _base_detail(
        raw, zone, ResourceType.DB,
        ("Engine", _db_engine(raw)),
        ("Revision", dig(raw, "Remark", "DBConf", "Common", "DatabaseRevision")),
        ("Plan", dig(raw, "Plan", "ID")),
        ("Port", dig(raw, "Settings", "DBConf", "Common", "ServicePort")),
    )


# --- VPC router ---


def _vpc_plan(raw: Raw) -> str:
    plan = dig(raw, "Plan", "ID", default=None)
    try:
        return VPC_ROUTER_PLANS.get(int(plan), text(plan))
    except (TypeError, ValueError):
        return text(plan)


def _vpc_public_ip(raw: Raw) -> str:
    return text(dig(raw, "Interfaces", 0, "IPAddress") or dig(raw, "Remark", "Servers", 0, "IPAddress"))


def vpcrouter_item(raw: Raw, zone: str) -> ListItem:
    public_ip = _vpc_public_ip(raw)
    summary = " ".join(filter(None, [_vpc_plan(raw), public_ip]))
    return _base_item(raw, zone, summary, public_ip)


def vpcrouter_detail(raw: Raw, zone: str) -> DetailRecord:
    interfaces = DetailSection(
        "Interfaces",
        ("Index", "IP Addresses", "Netmask"),
        tuple(
            (
                text(i.get("Index")),
                ", ".join(text(ip) for ip in i.get("IPAddress") or ()),
                text(i.get("NetworkMaskLen")),
            )
            for i in dig(raw, "Settings", "Router", "Interfaces", default=None) or ()
            if i
        ),
    )
    return _base_detail(
        raw, zone, ResourceType.VPC_ROUTER,
        ("Plan", _vpc_plan(raw)),
        ("Public IP", _vpc_public_ip(raw)),
        ("Internet connection", dig(raw, "Settings", "Router", "InternetConnection", "Enabled")),
        sections=(interfaces,),
    )


# --- Load balancer ---


def _virtual_ips(raw: Raw) -> list[Raw]:
    return list(dig(raw, "Settings", "LoadBalancer", default=None) or ())


def loadbalancer_item(raw: Raw, zone: str) -> ListItem:
    vips = [text(v.get("VirtualIPAddress")) for v in _virtual_ips(raw)]
    summary = f"VIPs: {len(vips)}" + (f" {vips[0]}" if vips else "")
    return _base_item(raw, zone, summary, *vips)


def loadbalancer_detail(raw: Raw, zone: str) -> DetailRecord:
    rows = []
    for vip in _virtual_ips(raw):
        for server in vip.get("Servers") or ():
            rows.append((
                text(vip.get("VirtualIPAddress")),
                text(vip.get("Port")),
                text(server.get("IPAddress")),
                text(server.get("Port")),
                text(dig(server, "HealthCheck", "Protocol")),
                text(server.get("Enabled")),
            ))
        if not vip.get("Servers"):
            rows.append((text(vip.get("VirtualIPAddress")), text(vip.get("Port")), "", "", "", ""))
    servers = DetailSection("Virtual IPs", ("VIP", "Port", "Server", "Server Port", "Check", "Enabled"), tuple(rows))
    return _base_detail(
        raw, zone, ResourceType.LOAD_BALANCER,
        ("Plan", dig(raw, "Plan", "ID")),
        ("VRID", dig(raw, "Remark", "VRRP", "VRID")),
        sections=(servers,),
    )


# --- NFS ---


def nfs_item(raw: Raw, zone: str) -> ListItem:
    ips = _server_ips(raw)
    return _base_item(raw, zone, ips[0] if ips else "")


def nfs_detail(raw: Raw, zone: str) -> DetailRecord:
    return _base_detail(
        raw, zone, ResourceType.NFS,
        ("Plan", dig(raw, "Plan", "ID")),
        ("Switch ID", dig(raw, "Switch", "ID")),
    )


def _appliance(resource_type: ResourceType, appliance_class: str, to_item, to_detail) -> IaasKind:
    return IaasKind(
        resource_type, "appliance", "Appliances", "Appliance", to_item, to_detail,
        filter={"Class": appliance_class},
    )


APPLIANCE_KINDS: dict[ResourceType, IaasKind] = {
    kind.resource_type: kind
    for kind in (
        _appliance(ResourceType.DB, "database", db_item, db_detail),
        _appliance(ResourceType.VPC_ROUTER, "vpcrouter", vpcrouter_item, vpcrouter_detail),
        _appliance(ResourceType.LOAD_BALANCER, "loadbalancer", loadbalancer_item, loadbalancer_detail),
        _appliance(ResourceType.NFS, "nfs", nfs_item, nfs_detail),
    )
}
