"""BrowserScreen: the resource browser.

The screen owns the CommandDispatcher. Key presses become dispatcher
events through the keymap; effects run in thread workers and come back
as FetchFinished messages, so the session is only ever touched on the
UI thread.
"""

import logging
from functools import partial

from textual.app import ComposeResult
from textual.events import Key
from textual.widgets import Static

from ..models.events import FetchFinished
from ..models.session import Mode, Session
from ..services.dispatcher import CommandDispatcher
from ..services.events import Effect, Event
from ..services.keymap import key_to_event
from ..services.navigation import PAGE_SIZE
from ..services.notification import NotificationService
from ..services.render import render_error, render_hints, render_search_status
from ..widgets.detail_view import DetailView
from ..widgets.resource_list import ResourceList
from ..widgets.status import StatusBar
from .base import SactScreen
from .help import HelpScreen

logger = logging.getLogger(__name__)

# Keys that scroll the detail pane instead of reaching the dispatcher
_DETAIL_SCROLL = {
    "j": 1,
    "down": 1,
    "k": -1,
    "up": -1,
    "pagedown": PAGE_SIZE,
    "space": PAGE_SIZE,
    "pageup": -PAGE_SIZE,
}


class BrowserScreen(SactScreen):
    """List, search and detail views over one CommandDispatcher."""

    DEFAULT_CSS = """
    BrowserScreen {
        layout: vertical;
        padding: 0;
    }

    BrowserScreen #error {
        height: auto;
        padding: 0 1;
    }

    BrowserScreen #search {
        height: 1;
        padding: 0 1;
        background: $surface;
    }
    """

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        notifications: NotificationService | None = None,
    ) -> None:
        super().__init__()
        self._dispatcher = dispatcher
        self._notifications = notifications or NotificationService()

        # Cached widget references (set in on_mount)
        self._header: StatusBar | None = None
        self._error: Static | None = None
        self._list: ResourceList | None = None
        self._detail: DetailView | None = None
        self._search: Static | None = None
        self._hint: Static | None = None

    def compose(self) -> ComposeResult:
        yield StatusBar(id="header")
        yield Static("", id="error", classes="hidden")
        yield ResourceList(id="resource-list")
        yield DetailView(id="detail-view")
        yield Static("", id="search", classes="hidden")
        yield Static("", id="hint", classes="hint")
        # Notification rack from SactScreen base - must be last for layer ordering
        yield from super().compose()

    def on_mount(self) -> None:
        self._header = self.query_one("#header", StatusBar)
        self._error = self.query_one("#error", Static)
        self._list = self.query_one("#resource-list", ResourceList)
        self._detail = self.query_one("#detail-view", DetailView)
        self._search = self.query_one("#search", Static)
        self._hint = self.query_one("#hint", Static)

        self._render_session()
        for effect in self._dispatcher.start():
            self._schedule(effect)

    @property
    def session(self) -> Session:
        return self._dispatcher.session

    # --- Input ---

    def on_key(self, event: Key) -> None:
        session = self.session
        mode = session.mode

        if mode == Mode.LISTING and event.character == "?":
            event.stop()
            self.app.push_screen(HelpScreen())
            return

        if mode == Mode.DETAIL_SHOWN and event.key in _DETAIL_SCROLL:
            event.stop()
            self._detail.scroll_by_lines(_DETAIL_SCROLL[event.key])
            return

        dispatcher_event = key_to_event(session, event.key, event.character)
        if dispatcher_event is None:
            return
        event.stop()
        event.prevent_default()
        self.dispatch_event(dispatcher_event)

    def dispatch_event(self, event: Event) -> None:
        """Feed one event to the dispatcher and act on the outcome."""
        effect = self._dispatcher.dispatch(event)
        if self.session.quitting:
            self.app.exit(0)
            return
        if effect is not None:
            self._schedule(effect)
        self._render_session()

    # --- Effects ---

    def _schedule(self, effect: Effect) -> None:
        """Run `effect` off the UI thread."""
        logger.debug(f"Scheduling {effect}")
        self.run_worker(
            partial(self._run_effect, effect),
            name=type(effect).__name__,
            group="fetch",
            thread=True,
            exit_on_error=False,
        )

    def _run_effect(self, effect: Effect) -> None:
        """Worker body: blocking fetch, then hand the result to the UI thread."""
        completion = self._dispatcher.execute(effect)
        self.post_message(FetchFinished(completion))

    def on_fetch_finished(self, message: FetchFinished) -> None:
        event = message.event
        toast = self._notifications.for_completion(event)
        if toast is not None:
            self.notify_request(toast)
        self.dispatch_event(event)

    # --- Rendering ---

    def _render_session(self) -> None:
        session = self.session
        in_detail = session.detail is not None

        self._header.show_session(session)

        error = render_error(session)
        self._error.update(error)
        self._error.set_class(not error, "hidden")

        self._list.display = not in_detail
        if not in_detail:
            self._list.show_session(session)
        self._detail.show_session(session)

        search = render_search_status(session)
        self._search.update(search)
        self._search.set_class(not search or in_detail, "hidden")

        self._hint.update(render_hints(session))
