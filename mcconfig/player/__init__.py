"""Player bookkeeping persisted through config files."""

from .uuids import PlayerUUIDs

__all__ = ["PlayerUUIDs"]
