"""sact: terminal browser for Sakura Cloud resources."""

__version__ = "0.1.0"
