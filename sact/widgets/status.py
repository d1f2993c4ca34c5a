"""Header bar showing account, zone and resource type."""

from textual.widgets import Static

from ..models.session import Session
from ..services.render import render_header


class StatusBar(Static):
    """One-line header rendered from the current session."""

    DEFAULT_CSS = """
    StatusBar {
        dock: top;
        height: 1;
        background: $surface;
        color: $text-muted;
        padding: 0 1;
    }
    """

    def show_session(self, session: Session) -> None:
        self.update(render_header(session))
