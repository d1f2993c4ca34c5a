"""Input validation for sact.

Resource ids are checked before any request is made, so a malformed id
fails fast with ValidationError instead of a confusing API error.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field

from ..models.exceptions import ValidationError
from ..models.resource import ZONES, ResourceType

IAAS_ID_PATTERN = re.compile(r"[0-9]{12}")
MONITORING_ID_PATTERN = re.compile(r"[1-9][0-9]*")

APPRUN_TYPES = frozenset({ResourceType.APPRUN_DEDICATED})

MONITORING_TYPES = frozenset({
    ResourceType.MONITORING_LOG_STORAGE,
    ResourceType.MONITORING_METRICS_STORAGE,
    ResourceType.MONITORING_TRACE_STORAGE,
})


@dataclass
class ValidationResult:
    """Result of a validation check."""

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)

    @property
    def first_error(self) -> str | None:
        return self.errors[0] if self.errors else None


def validate_iaas_id(item_id: str) -> ValidationResult:
    if not IAAS_ID_PATTERN.fullmatch(item_id or ""):
        return ValidationResult(False, [f"invalid resource id: {item_id!r} (expected 12 digits)"])
    return ValidationResult()


def validate_uuid(item_id: str) -> ValidationResult:
    try:
        uuid.UUID(item_id or "")
    except ValueError:
        return ValidationResult(False, [f"invalid cluster id: {item_id!r} (expected a UUID)"])
    return ValidationResult()


def validate_monitoring_id(item_id: str) -> ValidationResult:
    if not MONITORING_ID_PATTERN.fullmatch(item_id or ""):
        return ValidationResult(False, [f"invalid storage id: {item_id!r} (expected a positive integer)"])
    return ValidationResult()


def validate_resource_id(resource_type: ResourceType, item_id: str) -> ValidationResult:
    """Check `item_id` against the id format of `resource_type`'s backend."""
    if resource_type in APPRUN_TYPES:
        return validate_uuid(item_id)
    if resource_type in MONITORING_TYPES:
        return validate_monitoring_id(item_id)
    return validate_iaas_id(item_id)


def require_valid_id(resource_type: ResourceType, item_id: str) -> None:
    """Raise ValidationError unless `item_id` is well formed."""
    result = validate_resource_id(resource_type, item_id)
    if not result.is_valid:
        raise ValidationError(result.first_error)


def is_valid_zone(zone: str) -> bool:
    return zone in ZONES
