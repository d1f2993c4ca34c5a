"""Custom Textual Message events for sact UI.

Note: Dispatcher events (SwitchZone, FetchListCompleted, etc.) are in
services/events.py; this module only carries them across the worker
boundary into the Textual message queue.
"""

from textual.message import Message

from ..services.events import Event


class FetchFinished(Message):
    """Posted by a fetch worker when its completion event is ready."""

    def __init__(self, event: Event) -> None:
        self.event = event
        super().__init__()
