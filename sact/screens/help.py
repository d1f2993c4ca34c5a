"""Help screen: key reference for the browser."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from .base import SactModalScreen

# Note: Use \[ to escape brackets so Rich doesn't interpret them as markup tags
HELP_TEXT = """
                          sact

          browse Sakura Cloud resources


  list                               search

  j / k  ↑ / ↓   move                /        start search
  pgup / pgdn    page                enter    jump to first match
  g / G          top / bottom        esc      cancel
  home / end     top / bottom        n / N    next / previous match
  enter          show detail

  resources                          detail

  t / T          next / prev type    esc / q  back to list
  z              next zone           j / k    scroll
  r              refresh             pgup/dn  scroll by page

  other

  ?              this help
  q              quit  (ctrl+c anywhere)


  zone switch, type switch and refresh are ignored while a
  list is loading; global resources have no zone.


                     \\[esc]  close"""


class HelpScreen(SactModalScreen):
    """Key reference overlay."""

    DEFAULT_CSS = """
    HelpScreen #help-content {
        color: $text-muted;
    }
    """

    BINDINGS = [
        ("escape", "dismiss_modal", "Close"),
        ("q", "dismiss_modal", "Close"),
        ("question_mark", "dismiss_modal", "Close"),
    ]

    def compose(self) -> ComposeResult:
        self.add_class("modal-base", "modal-md")
        with Vertical(id="dialog"):
            yield Static(HELP_TEXT, id="help-content")
