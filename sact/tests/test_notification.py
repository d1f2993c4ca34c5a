"""Tests for NotificationService."""

from sact.services.events import AccountLoaded, FetchListCompleted
from sact.models.resource import ResourceType
from sact.services.notification import NotificationConfig, NotificationService, NotificationSeverity


class TestNotificationService:
    """Tests for toast construction."""

    def test_notice_uses_severity_timeout(self):
        service = NotificationService(NotificationConfig(info_timeout=1.5, warning_timeout=4.0))
        assert service.notice("hi").timeout == 1.5
        assert service.warning("careful").timeout == 4.0
        assert service.warning("careful").severity == NotificationSeverity.WARNING

    def test_account_failure_becomes_warning(self):
        toast = NotificationService().for_completion(AccountLoaded(error="api error: 401"))
        assert toast is not None
        assert toast.severity == NotificationSeverity.WARNING
        assert toast.message == "account lookup failed: api error: 401"

    def test_account_success_is_silent(self):
        assert NotificationService().for_completion(AccountLoaded(account_name="acme")) is None

    def test_list_errors_use_the_banner(self):
        event = FetchListCompleted(ResourceType.SERVER, "tk1b", error="boom")
        assert NotificationService().for_completion(event) is None
