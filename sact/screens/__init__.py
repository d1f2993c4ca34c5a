"""Screens for sact."""

from sact.screens.help import HelpScreen
from sact.screens.main import BrowserScreen

__all__ = ["BrowserScreen", "HelpScreen"]
