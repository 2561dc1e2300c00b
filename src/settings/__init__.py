"""Application settings loading."""

from .app import RankerSettings, get_settings


__all__ = ["RankerSettings", "get_settings"]
