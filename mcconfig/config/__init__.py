"""Config file management built on the :mod:`mcconfig.parse` core."""

from __future__ import annotations

from .commented import CommentedConfig
from .settings import ConfigSettings, get_settings, reset_settings_cache

__all__ = [
    "CommentedConfig",
    "ConfigSettings",
    "get_settings",
    "reset_settings_cache",
]
