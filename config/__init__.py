"""Configuration package."""

from .settings import JSONFormatter, Settings, get_settings

__all__ = ["JSONFormatter", "Settings", "get_settings"]
