"""Services for sact."""

from sact.services.dispatcher import CommandDispatcher, transition
from sact.services.search import perform_search

__all__ = [
    "CommandDispatcher",
    "transition",
    "perform_search",
]
