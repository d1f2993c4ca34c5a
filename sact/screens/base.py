"""Base screen classes with notification support."""

from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.screen import ModalScreen, Screen

from ..widgets.notification import NotificationRack
from ..services.notification import NotificationRequest


class SactScreen(Screen):
    """Base screen with a notification rack in an overlay layer.

    Subclasses call super().compose() at the END of their compose so the
    rack is mounted last.
    """

    DEFAULT_CSS = """
    SactScreen {
        layers: base notification;
    }

    SactScreen > NotificationRack {
        layer: notification;
        dock: bottom;
        height: auto;
        margin: 0 0 1 0;
    }
    """

    def compose(self) -> ComposeResult:
        yield NotificationRack(id="notifications")

    def notify_request(self, request: NotificationRequest) -> None:
        """Show a notification built by NotificationService."""
        self.post_message(request)

    def on_notification_request(self, event: NotificationRequest) -> None:
        try:
            rack = self.query_one("#notifications", NotificationRack)
        except NoMatches:
            return  # Rack not mounted yet
        rack.show(event)


class SactModalScreen(ModalScreen[None]):
    """Base modal: centered dialog, escape dismisses."""

    BINDINGS = [
        ("escape", "dismiss_modal", "Close"),
    ]

    def on_mount(self) -> None:
        self.trap_focus = True

    def action_dismiss_modal(self) -> None:
        self.dismiss(None)
