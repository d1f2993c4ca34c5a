"""DetailView widget: scrollable text of one resource's detail record."""

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static

from ..models.session import Session
from ..services.render import render_detail_view


class DetailView(VerticalScroll, can_focus=False):
    """Detail pane; scrolling is driven by the screen's key handler."""

    DEFAULT_CSS = """
    DetailView {
        height: 1fr;
        padding: 0 1;
        scrollbar-size-vertical: 1;
    }

    DetailView #detail-text {
        width: 100%;
        height: auto;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._shown_item: str | None = None

    def compose(self) -> ComposeResult:
        yield Static("", id="detail-text")

    def show_session(self, session: Session) -> None:
        detail = session.detail
        self.display = detail is not None
        if detail is None:
            self._shown_item = None
            return
        self.query_one("#detail-text", Static).update(render_detail_view(session))
        # New record: start from the top
        key = f"{detail.item_id}:{detail.loading}"
        if key != self._shown_item:
            self._shown_item = key
            self.scroll_home(animate=False)

    def scroll_by_lines(self, delta: int) -> None:
        self.scroll_to(y=max(0, self.scroll_y + delta), animate=False)
