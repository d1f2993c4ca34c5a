"""Data models for sact."""

from .resource import (
    DEFAULT_ZONE,
    ZONES,
    DetailRecord,
    DetailSection,
    ListItem,
    ResourceType,
)
from .session import DetailState, Mode, SearchState, Session, initial_session
from .exceptions import (
    SactError,
    FetchError,
    ValidationError,
    ConfigError,
    CredentialsError,
)

__all__ = [
    # Resources
    "DEFAULT_ZONE",
    "ZONES",
    "DetailRecord",
    "DetailSection",
    "ListItem",
    "ResourceType",
    # Session
    "DetailState",
    "Mode",
    "SearchState",
    "Session",
    "initial_session",
    # Exceptions
    "SactError",
    "FetchError",
    "ValidationError",
    "ConfigError",
    "CredentialsError",
]
