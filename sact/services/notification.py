"""Toast notifications for events that have no place in the session view.

The error banner belongs to list and detail failures. Problems on the
side, such as a failed account lookup, are reported as short-lived
toasts instead.
"""

from dataclasses import dataclass
from enum import Enum

from textual.message import Message

from .events import AccountLoaded, Event


class NotificationSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class NotificationConfig:
    """Seconds each severity stays on screen."""

    info_timeout: float = 3.0
    warning_timeout: float = 6.0
    error_timeout: float = 8.0

    def timeout_for(self, severity: NotificationSeverity) -> float:
        return {
            NotificationSeverity.INFO: self.info_timeout,
            NotificationSeverity.WARNING: self.warning_timeout,
            NotificationSeverity.ERROR: self.error_timeout,
        }[severity]


class NotificationRequest(Message):
    """Message asking the screen to show a toast."""

    def __init__(self, message: str, severity: NotificationSeverity, timeout: float):
        self.message = message
        self.severity = severity
        self.timeout = timeout
        super().__init__()


class NotificationService:
    """Builds toast requests with consistent timeouts."""

    def __init__(self, config: NotificationConfig | None = None):
        self._config = config or NotificationConfig()

    def notice(
        self,
        message: str,
        severity: NotificationSeverity = NotificationSeverity.INFO,
    ) -> NotificationRequest:
        return NotificationRequest(message, severity, self._config.timeout_for(severity))

    def warning(self, message: str) -> NotificationRequest:
        return self.notice(message, NotificationSeverity.WARNING)

    def for_completion(self, event: Event) -> NotificationRequest | None:
        """Toast for a finished fetch, or None if the session view covers it."""
        if isinstance(event, AccountLoaded) and event.error:
            return self.warning(f"account lookup failed: {event.error}")
        return None
