"""Configuration management for reqdoc."""

from .settings import (
    ReqdocSettings,
    get_settings,
)

__all__ = [
    "ReqdocSettings",
    "get_settings",
]
