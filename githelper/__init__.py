"""Git Helper: IDE workspace resolution and git auto-sync."""

__version__ = "1.0.0"
