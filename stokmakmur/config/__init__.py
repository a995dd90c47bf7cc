"""Configuration module."""

from stokmakmur.config.logging import configure_logging, get_logger
from stokmakmur.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
