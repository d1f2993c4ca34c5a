"""ResourceList widget: the scrolling list of resources.

The widget holds no selection state of its own; it draws whatever the
session says and keeps the cursor row in view.
"""

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static

from ..models.session import Session
from ..services.render import render_list


class ResourceList(VerticalScroll, can_focus=False):
    """Rows of the current resource list with the cursor kept visible."""

    DEFAULT_CSS = """
    ResourceList {
        height: 1fr;
        padding: 0 1;
        scrollbar-size-vertical: 1;
    }

    ResourceList #rows {
        width: 100%;
        height: auto;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("", id="rows")

    def show_session(self, session: Session) -> None:
        lines = render_list(session)
        self.query_one("#rows", Static).update("\n".join(lines))
        # A leading "Refreshing..." line shifts rows down by one
        offset = 1 if session.loading and session.items else 0
        if session.items:
            self.call_after_refresh(self._keep_visible, session.cursor_index + offset)

    def _keep_visible(self, row: int) -> None:
        height = self.scrollable_content_region.height
        if height <= 0:
            return
        top = int(self.scroll_y)
        if row < top:
            self.scroll_to(y=row, animate=False)
        elif row >= top + height:
            self.scroll_to(y=row - height + 1, animate=False)
