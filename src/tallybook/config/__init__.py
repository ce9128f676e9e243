"""Configuration module."""

from tallybook.config.logging import (
    configure_logging,
    document_context,
    get_logger,
)
from tallybook.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "document_context",
]
