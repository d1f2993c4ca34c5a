"""Resource catalogue and the normalized records shown by the browser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# Zone list in cycling order
ZONES: tuple[str, ...] = ("tk1a", "tk1b", "is1a", "is1b", "is1c")

DEFAULT_ZONE = "tk1b"


class ResourceType(Enum):
    """Kinds of resources the browser can list, in cycling order."""

    SERVER = "server"
    SWITCH = "switch"
    DNS = "dns"
    ELB = "elb"
    GSLB = "gslb"
    DB = "db"
    DISK = "disk"
    ARCHIVE = "archive"
    INTERNET = "internet"
    VPC_ROUTER = "vpcrouter"
    PACKET_FILTER = "packetfilter"
    LOAD_BALANCER = "loadbalancer"
    NFS = "nfs"
    SSH_KEY = "sshkey"
    AUTO_BACKUP = "autobackup"
    SIMPLE_MONITOR = "simplemonitor"
    BRIDGE = "bridge"
    CONTAINER_REGISTRY = "containerregistry"
    APPRUN_DEDICATED = "apprun"
    MONITORING_LOG_STORAGE = "monitoring-logs"
    MONITORING_METRICS_STORAGE = "monitoring-metrics"
    MONITORING_TRACE_STORAGE = "monitoring-traces"

    @property
    def label(self) -> str:
        """Human readable name for headers."""
        return _LABELS[self]

    @property
    def is_global(self) -> bool:
        """Global resources are not partitioned by zone."""
        return self in GLOBAL_RESOURCE_TYPES

    def next(self) -> ResourceType:
        members = list(ResourceType)
        return members[(members.index(self) + 1) % len(members)]

    def previous(self) -> ResourceType:
        members = list(ResourceType)
        return members[(members.index(self) - 1) % len(members)]

    @classmethod
    def parse(cls, text: str) -> ResourceType:
        """Look up a type by value or label, case-insensitively.

        Raises:
            ValueError: if nothing matches
        """
        needle = text.strip().lower()
        for member in cls:
            if needle in (member.value, member.label.lower(), member.name.lower()):
                return member
        raise ValueError(f"unknown resource type: {text}")


_LABELS: dict[ResourceType, str] = {
    ResourceType.SERVER: "Server",
    ResourceType.SWITCH: "Switch",
    ResourceType.DNS: "DNS",
    ResourceType.ELB: "ELB",
    ResourceType.GSLB: "GSLB",
    ResourceType.DB: "DB",
    ResourceType.DISK: "Disk",
    ResourceType.ARCHIVE: "Archive",
    ResourceType.INTERNET: "Internet",
    ResourceType.VPC_ROUTER: "VPCRouter",
    ResourceType.PACKET_FILTER: "PacketFilter",
    ResourceType.LOAD_BALANCER: "LoadBalancer",
    ResourceType.NFS: "NFS",
    ResourceType.SSH_KEY: "SSHKey",
    ResourceType.AUTO_BACKUP: "AutoBackup",
    ResourceType.SIMPLE_MONITOR: "SimpleMonitor",
    ResourceType.BRIDGE: "Bridge",
    ResourceType.CONTAINER_REGISTRY: "ContainerRegistry",
    ResourceType.APPRUN_DEDICATED: "AppRun Dedicated",
    ResourceType.MONITORING_LOG_STORAGE: "Monitoring Suite - Log Storage",
    ResourceType.MONITORING_METRICS_STORAGE: "Monitoring Suite - Metrics Storage",
    ResourceType.MONITORING_TRACE_STORAGE: "Monitoring Suite - Trace Storage",
}

GLOBAL_RESOURCE_TYPES: frozenset[ResourceType] = frozenset({
    ResourceType.DNS,
    ResourceType.ELB,
    ResourceType.GSLB,
    ResourceType.SSH_KEY,
    ResourceType.SIMPLE_MONITOR,
    ResourceType.BRIDGE,
    ResourceType.CONTAINER_REGISTRY,
    ResourceType.APPRUN_DEDICATED,
    ResourceType.MONITORING_LOG_STORAGE,
    ResourceType.MONITORING_METRICS_STORAGE,
    ResourceType.MONITORING_TRACE_STORAGE,
})


def next_zone(zone: str) -> str:
    """Zone after `zone` in cycling order (unknown zones restart at the first)."""
    if zone not in ZONES:
        return ZONES[0]
    return ZONES[(ZONES.index(zone) + 1) % len(ZONES)]


@dataclass(frozen=True)
class ListItem:
    """One row of the resource list.

    Every resource kind is normalized into this shape so the browser
    never needs to know which kind it is showing.
    """

    id: str
    name: str
    status: str = ""
    summary: str = ""  # Short type-specific attributes, e.g. "2 Core / 4 GB"
    zone: str = ""
    keywords: tuple[str, ...] = ()  # Extra searchable text (description, VIP, FQDN)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "summary": self.summary,
            "zone": self.zone,
            "keywords": list(self.keywords),
        }


@dataclass(frozen=True)
class DetailSection:
    """A titled table inside a detail record (disks, DNS records, rules...)."""

    title: str
    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class DetailRecord:
    """Full description of one resource, fetched when drilling in."""

    id: str
    name: str
    resource_type: ResourceType
    status: str = ""
    zone: str = ""
    description: str = ""
    tags: tuple[str, ...] = ()
    fields: tuple[tuple[str, str], ...] = ()  # Ordered (label, value) pairs
    sections: tuple[DetailSection, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "resource_type": self.resource_type.value,
            "status": self.status,
            "zone": self.zone,
            "description": self.description,
            "tags": list(self.tags),
            "fields": [list(pair) for pair in self.fields],
            "sections": [
                {
                    "title": s.title,
                    "columns": list(s.columns),
                    "rows": [list(r) for r in s.rows],
                }
                for s in self.sections
            ],
        }
