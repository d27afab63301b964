"""File-backed config whose comments survive a load/save cycle."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from mcconfig.parse import DataSection, ParseError, dump, parse_file

from .settings import ConfigSettings, get_settings

logger = logging.getLogger(__name__)


class CommentedConfig:
    """A named config file under the configured data folder.

    Data is loaded lazily on first access. ``defaults`` (usually parsed from a
    bundled resource with :func:`mcconfig.parse.parse_resource`) feed
    :meth:`save_default_config`, :meth:`check_defaults` and :meth:`trim`.
    """

    def __init__(
        self,
        name: str,
        settings: Optional[ConfigSettings] = None,
        defaults: Optional[DataSection] = None,
    ) -> None:
        self._name = name
        self._settings = settings or get_settings()
        self._defaults = defaults
        self._data: Optional[DataSection] = None
        self._path = self._settings.path_for(name)
        self._ensure_folder()

    def _ensure_folder(self) -> None:
        folder = self._path.parent
        if not folder.exists():
            folder.mkdir(parents=True, exist_ok=True)
            logger.info("Created a new folder for config files at %s", folder)

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def config(self) -> DataSection:
        if self._data is None:
            self.reload()
        return self._data

    @property
    def defaults(self) -> DataSection:
        if self._defaults is None:
            self._defaults = DataSection()
        return self._defaults

    def reload(self) -> DataSection:
        """Re-read the file. A missing file loads as an empty section.

        Parse failures propagate in strict mode; otherwise they are logged
        and the config starts out empty.
        """

        if not self._path.exists():
            self._data = DataSection()
            return self._data

        try:
            self._data = parse_file(self._path, encoding=self._settings.encoding)
        except ParseError:
            if self._settings.strict:
                raise
            logger.warning("Failed to parse %s, starting from an empty config", self._path, exc_info=True)
            self._data = DataSection()
        return self._data

    def clear(self) -> None:
        self.config.clear()

    def save(self) -> bool:
        """Write the config back to disk. Failures are logged, not raised."""

        if self._data is None:
            return False
        try:
            dump(self._data, self._path, quote=self._settings.quote, encoding=self._settings.encoding)
        except (OSError, ValueError):
            logger.exception("Could not save config to %s", self._path)
            return False
        return True

    def save_default_config(self) -> None:
        """Write the defaults to disk when the file does not exist yet."""

        if self._path.exists():
            return
        dump(self.defaults, self._path, quote=self._settings.quote, encoding=self._settings.encoding)
        logger.info("Saved default config to %s", self._path)

    def check_defaults(self) -> None:
        self.config.apply_defaults(self.defaults)

    def trim(self) -> None:
        self.config.trim(self.defaults)


__all__ = ["CommentedConfig"]
