"""Logging and configuration helpers."""

from .config import ConfigManager
from .logging import setup_logging

__all__ = ["ConfigManager", "setup_logging"]
