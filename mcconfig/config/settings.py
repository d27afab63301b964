"""Environment aware settings for file-backed configs."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from mcconfig.parse.scalars import QUOTE_CHARS

DEFAULT_DATA_DIR = Path("data")
DATA_DIR_VARIABLE = "MCCONFIG_DATA_DIR"
STRICT_VARIABLE = "MCCONFIG_STRICT"


class ConfigSettings(BaseModel):
    """Where config files live and how they are read and written."""

    model_config = ConfigDict(frozen=True)

    data_folder: Path = DEFAULT_DATA_DIR
    extension: str = ".yml"
    encoding: str = "utf-8"
    quote: str = "'"
    strict: bool = False

    @field_validator("extension", mode="before")
    @classmethod
    def _normalize_extension(cls, value: Any) -> str:
        extension = str(value or "").strip().lower()
        if extension and not extension.startswith("."):
            extension = f".{extension}"
        return extension

    @field_validator("quote")
    @classmethod
    def _check_quote(cls, value: str) -> str:
        if value not in QUOTE_CHARS:
            raise ValueError(f"quote must be one of {QUOTE_CHARS}")
        return value

    def path_for(self, name: str) -> Path:
        return self.data_folder / f"{name}{self.extension}"


def _settings_from_environment() -> ConfigSettings:
    values: Dict[str, Any] = {}
    data_dir = os.getenv(DATA_DIR_VARIABLE)
    if data_dir:
        values["data_folder"] = data_dir.strip()
    strict = os.getenv(STRICT_VARIABLE)
    if strict:
        values["strict"] = strict.strip().lower()
    return ConfigSettings.model_validate(values)


@lru_cache(maxsize=None)
def _cached_settings() -> ConfigSettings:
    return _settings_from_environment()


def get_settings(overrides: Optional[Dict[str, Any]] = None) -> ConfigSettings:
    """Return settings from the environment, optionally with field overrides."""

    settings = _cached_settings()
    if overrides:
        return ConfigSettings.model_validate({**settings.model_dump(), **overrides})
    return settings


def reset_settings_cache() -> None:
    """Clear the cached settings, primarily used during tests."""

    _cached_settings.cache_clear()


__all__ = [
    "ConfigSettings",
    "DATA_DIR_VARIABLE",
    "STRICT_VARIABLE",
    "get_settings",
    "reset_settings_cache",
]
