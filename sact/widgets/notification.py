"""Toast widgets shown above the browser."""

from textual.containers import Container
from textual.widgets import Static

from ..services.notification import NotificationRequest


class Notification(Static):
    """Plain-text toast, removed when its request's timeout expires."""

    def __init__(self, request: NotificationRequest):
        # Messages carry API error text, never markup
        super().__init__(request.message, markup=False, classes=f"-{request.severity.value}")
        self._timeout = request.timeout

    def on_mount(self) -> None:
        self.set_timer(self._timeout, self.remove)


class NotificationRack(Container):
    """Shows the latest toast only; takes no room when there is none."""

    def on_mount(self) -> None:
        self.display = False

    def show(self, request: NotificationRequest) -> None:
        self.remove_children()
        self.mount(Notification(request))
        self.display = True

    def on_descendant_removed(self, event) -> None:
        self.call_after_refresh(self._hide_if_empty)

    def _hide_if_empty(self) -> None:
        if not self.children:
            self.display = False
