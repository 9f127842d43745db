"""Utility modules for the AI Reputation Report."""

from .config import Settings, get_settings
from .domain import clean_domain

__all__ = [
    "Settings",
    "get_settings",
    "clean_domain",
]
