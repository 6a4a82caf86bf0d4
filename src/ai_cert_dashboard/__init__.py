"""AI certification and appointment statistics dashboard."""

__version__ = "0.1.0"
