"""Widgets for sact."""

from sact.widgets.detail_view import DetailView
from sact.widgets.notification import Notification, NotificationRack
from sact.widgets.resource_list import ResourceList
from sact.widgets.status import StatusBar

__all__ = [
    "StatusBar",
    "ResourceList",
    "DetailView",
    "Notification",
    "NotificationRack",
]
