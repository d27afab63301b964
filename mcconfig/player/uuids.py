"""Name <-> UUID cache persisted as a config file."""

from __future__ import annotations

import logging
from typing import Dict, Optional
from uuid import UUID

from mcconfig.config import CommentedConfig, ConfigSettings

logger = logging.getLogger(__name__)

UUID_FILE = "uuid"


class PlayerUUIDs:
    """Remember which UUID belongs to which player name.

    Lookups by name ignore case; the stored file keeps the name as last seen.
    """

    def __init__(self, settings: Optional[ConfigSettings] = None) -> None:
        self._file = CommentedConfig(UUID_FILE, settings=settings)
        self._ids: Dict[str, UUID] = {}
        self._names: Dict[UUID, str] = {}
        self._load()

    def _load(self) -> None:
        section = self._file.config
        for name in section.keys():
            raw = section.get_string(name)
            try:
                player_id = UUID(raw)
            except ValueError:
                logger.warning("Skipping malformed UUID %r for player %s", raw, name)
                continue
            self._ids[name.lower()] = player_id
            self._names[player_id] = name

    def remember(self, name: str, player_id: UUID) -> None:
        previous = self._names.get(player_id)
        if previous is not None and previous != name:
            self._ids.pop(previous.lower(), None)
            self._file.config.remove(previous)
        self._ids[name.lower()] = player_id
        self._names[player_id] = name

    def get_uuid(self, name: str) -> Optional[UUID]:
        return self._ids.get(name.lower())

    def get_name(self, player_id: UUID) -> Optional[str]:
        return self._names.get(player_id)

    def __len__(self) -> int:
        return len(self._names)

    def save(self) -> bool:
        section = self._file.config
        for player_id, name in self._names.items():
            section.set(name, str(player_id))
        return self._file.save()


__all__ = ["PlayerUUIDs", "UUID_FILE"]
