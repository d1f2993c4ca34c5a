"""Shared CSS for sact screens."""

from .base import BASE_CSS

__all__ = ["BASE_CSS"]
