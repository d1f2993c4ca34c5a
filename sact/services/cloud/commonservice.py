"""Common service items: DNS, ELB, GSLB, simple monitor, auto backup and
container registry.

They share the IaaS `commonserviceitem` endpoint, filtered by
`Provider.Class`.
"""

from __future__ import annotations

from ...models.resource import DetailRecord, DetailSection, ListItem, ResourceType
from .iaas import IaasKind, Raw, date, dig, fields, keywords, tags, text

CONTAINER_REGISTRY_DOMAIN = "sakuracr.jp"


def _item(raw: Raw, zone: str, summary: str, *extra, status: str = "") -> ListItem:
    return ListItem(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        status=status,
        summary=summary,
        zone=zone,
        keywords=keywords(raw.get("Description"), *extra, *tags(raw)),
    )


def _detail(raw: Raw, zone: str, resource_type: ResourceType, *pairs, status: str = "", sections=()) -> DetailRecord:
    return DetailRecord(
        id=text(raw.get("ID")),
        name=text(raw.get("Name")),
        resource_type=resource_type,
        status=status,
        zone=zone,
        description=text(raw.get("Description")),
        tags=tags(raw),
        fields=fields(*pairs, ("Created", date(raw.get("CreatedAt")))),
        sections=tuple(sections),
    )


# --- DNS ---


def _dns_records(raw: Raw) -> list[Raw]:
    return list(dig(raw, "Settings", "DNS", "ResourceRecordSets", default=None) or ())


def dns_item(raw: Raw, zone: str) -> ListItem:
    return _item(raw, zone, f"Records: {len(_dns_records(raw))}", dig(raw, "Status", "Zone"))


def dns_detail(raw: Raw, zone: str) -> DetailRecord:
    records = DetailSection(
        "Records",
        ("Name", "Type", "Data", "TTL"),
        tuple(
            (text(r.get("Name")), text(r.get("Type")), text(r.get("RData")), text(r.get("TTL")))
            for r in _dns_records(raw)
        ),
    )
    name_servers = ", ".join(text(ns) for ns in dig(raw, "Status", "NS", default=None) or ())
    return _detail(
        raw, zone, ResourceType.DNS,
        ("Zone", dig(raw, "Status", "Zone")),
        ("Name servers", name_servers),
        sections=(records,),
    )


# --- ELB (enhanced load balancer) ---


def _elb_servers(raw: Raw) -> list[Raw]:
    return list(dig(raw, "Settings", "ProxyLB", "Servers", default=None) or ())


def elb_item(raw: Raw, zone: str) -> ListItem:
    vip = text(dig(raw, "Status", "VirtualIPAddress"))
    fqdn = text(dig(raw, "Status", "FQDN"))
    summary = " ".join(filter(None, [vip, f"Servers: {len(_elb_servers(raw))}"]))
    return _item(raw, zone, summary, vip, fqdn)


def elb_detail(raw: Raw, zone: str) -> DetailRecord:
    ports = DetailSection(
        "Bind ports",
        ("Mode", "Port", "Redirect to HTTPS"),
        tuple(
            (text(p.get("ProxyMode")), text(p.get("Port")), text(p.get("RedirectToHTTPS")))
            for p in dig(raw, "Settings", "ProxyLB", "BindPorts", default=None) or ()
        ),
    )
    servers = DetailSection(
        "Servers",
        ("IP Address", "Port", "Enabled"),
        tuple((text(s.get("IPAddress")), text(s.get("Port")), text(s.get("Enabled"))) for s in _elb_servers(raw)),
    )
    return _detail(
        raw, zone, ResourceType.ELB,
        ("VIP", dig(raw, "Status", "VirtualIPAddress")),
        ("FQDN", dig(raw, "Status", "FQDN")),
        ("Service class", raw.get("ServiceClass")),
        ("Region", dig(raw, "Provider", "Region")),
        ("Health check", dig(raw, "Settings", "ProxyLB", "HealthCheck", "Protocol")),
        sections=(ports, servers),
    )


# --- GSLB ---


def _gslb_servers(raw: Raw) -> list[Raw]:
    return list(dig(raw, "Settings", "GSLB", "Servers", default=None) or ())


def gslb_item(raw: Raw, zone: str) -> ListItem:
    fqdn = text(dig(raw, "Status", "FQDN"))
    return _item(raw, zone, " ".join(filter(None, [fqdn, f"Servers: {len(_gslb_servers(raw))}"])), fqdn)


def gslb_detail(raw: Raw, zone: str) -> DetailRecord:
    servers = DetailSection(
        "Servers",
        ("IP Address", "Weight", "Enabled"),
        tuple((text(s.get("IPAddress")), text(s.get("Weight")), text(s.get("Enabled"))) for s in _gslb_servers(raw)),
    )
    return _detail(
        raw, zone, ResourceType.GSLB,
        ("FQDN", dig(raw, "Status", "FQDN")),
        ("Health check", dig(raw, "Settings", "GSLB", "HealthCheck", "Protocol")),
        ("Delay loop", dig(raw, "Settings", "GSLB", "DelayLoop")),
        ("Weighted", dig(raw, "Settings", "GSLB", "Weighted")),
        ("Sorry server", dig(raw, "Settings", "GSLB", "SorryServer")),
        sections=(servers,),
    )


# --- Simple monitor ---


def _monitor_enabled(raw: Raw) -> str:
    enabled = dig(raw, "Settings", "SimpleMonitor", "Enabled")
    return "enabled" if str(enabled).lower() in ("true", "yes", "1") else "disabled"


def simplemonitor_item(raw: Raw, zone: str) -> ListItem:
    target = text(dig(raw, "Status", "Target"))
    protocol = text(dig(raw, "Settings", "SimpleMonitor", "HealthCheck", "Protocol"))
    return _item(raw, zone, " ".join(filter(None, [protocol, target])), target, status=_monitor_enabled(raw))


def simplemonitor_detail(raw: Raw, zone: str) -> DetailRecord:
    check = dig(raw, "Settings", "SimpleMonitor", "HealthCheck", default={})
    return _detail(
        raw, zone, ResourceType.SIMPLE_MONITOR,
        ("Target", dig(raw, "Status", "Target")),
        ("Protocol", check.get("Protocol")),
        ("Port", check.get("Port")),
        ("Path", check.get("Path")),
        ("Expected status", check.get("Status")),
        ("Delay loop", dig(raw, "Settings", "SimpleMonitor", "DelayLoop")),
        ("Notify email", dig(raw, "Settings", "SimpleMonitor", "NotifyEmail", "Enabled")),
        ("Notify slack", dig(raw, "Settings", "SimpleMonitor", "NotifySlack", "Enabled")),
        status=_monitor_enabled(raw),
    )


# --- Auto backup ---


def autobackup_item(raw: Raw, zone: str) -> ListItem:
    disk_id = text(dig(raw, "Status", "DiskId"))
    weekdays = ",".join(text(d) for d in dig(raw, "Settings", "Autobackup", "BackupSpanWeekdays", default=None) or ())
    return _item(raw, zone, " ".join(filter(None, [f"Disk: {disk_id}" if disk_id else "", weekdays])), disk_id)


def autobackup_detail(raw: Raw, zone: str) -> DetailRecord:
    weekdays = ", ".join(text(d) for d in dig(raw, "Settings", "Autobackup", "BackupSpanWeekdays", default=None) or ())
    return _detail(
        raw, zone, ResourceType.AUTO_BACKUP,
        ("Disk ID", dig(raw, "Status", "DiskId")),
        ("Zone", dig(raw, "Status", "ZoneName")),
        ("Weekdays", weekdays),
        ("Max archives", dig(raw, "Settings", "Autobackup", "MaximumNumberOfArchives")),
    )


# --- Container registry ---


def _registry_fqdn(raw: Raw) -> str:
    name = text(dig(raw, "Status", "RegistryName"))
    return f"{name}.{CONTAINER_REGISTRY_DOMAIN}" if name else ""


def containerregistry_item(raw: Raw, zone: str) -> ListItem:
    fqdn = _registry_fqdn(raw)
    access = text(dig(raw, "Settings", "ContainerRegistry", "Public"))
    return _item(raw, zone, " ".join(filter(None, [fqdn, access])), fqdn)


def containerregistry_detail(raw: Raw, zone: str) -> DetailRecord:
    return _detail(
        raw, zone, ResourceType.CONTAINER_REGISTRY,
        ("FQDN", _registry_fqdn(raw)),
        ("Access", dig(raw, "Settings", "ContainerRegistry", "Public")),
        ("Virtual domain", dig(raw, "Settings", "ContainerRegistry", "VirtualDomain")),
    )


def _common_service(resource_type: ResourceType, provider_class: str, to_item, to_detail) -> IaasKind:
    return IaasKind(
        resource_type, "commonserviceitem", "CommonServiceItems", "CommonServiceItem", to_item, to_detail,
        filter={"Provider.Class": provider_class},
    )


COMMON_SERVICE_KINDS: dict[ResourceType, IaasKind] = {
    kind.resource_type: kind
    for kind in (
        _common_service(ResourceType.DNS, "dns", dns_item, dns_detail),
        _common_service(ResourceType.ELB, "proxylb", elb_item, elb_detail),
        _common_service(ResourceType.GSLB, "gslb", gslb_item, gslb_detail),
        _common_service(ResourceType.SIMPLE_MONITOR, "simplemon", simplemonitor_item, simplemonitor_detail),
        _common_service(ResourceType.AUTO_BACKUP, "autobackup", autobackup_item, autobackup_detail),
        _common_service(
            ResourceType.CONTAINER_REGISTRY, "containerregistry",
            containerregistry_item, containerregistry_detail,
        ),
    )
}
