import logging
from uuid import UUID, uuid4

import pytest

from mcconfig.config import ConfigSettings
from mcconfig.parse import parse_file
from mcconfig.player import PlayerUUIDs


@pytest.fixture
def settings(tmp_path) -> ConfigSettings:
    return ConfigSettings(data_folder=tmp_path)


def test_remember_and_lookup(settings):
    cache = PlayerUUIDs(settings=settings)
    player_id = uuid4()

    cache.remember("Steve", player_id)

    assert cache.get_uuid("steve") == player_id
    assert cache.get_uuid("STEVE") == player_id
    assert cache.get_name(player_id) == "Steve"
    assert cache.get_uuid("Alex") is None


def test_save_and_reload(settings):
    cache = PlayerUUIDs(settings=settings)
    steve, alex = uuid4(), uuid4()
    cache.remember("Steve", steve)
    cache.remember("Alex", alex)

    assert cache.save()

    stored = parse_file(settings.path_for("uuid"))
    assert stored.keys() == ["Steve", "Alex"]
    assert stored.get_string("Alex") == str(alex)

    reloaded = PlayerUUIDs(settings=settings)
    assert len(reloaded) == 2
    assert reloaded.get_uuid("alex") == alex


def test_renamed_player_replaces_old_entry(settings):
    cache = PlayerUUIDs(settings=settings)
    player_id = uuid4()
    cache.remember("OldName", player_id)
    cache.save()

    cache.remember("NewName", player_id)
    cache.save()

    stored = parse_file(settings.path_for("uuid"))
    assert stored.keys() == ["NewName"]
    assert cache.get_uuid("oldname") is None


def test_malformed_entries_are_skipped(settings, caplog):
    good = UUID("12345678-1234-5678-1234-567812345678")
    settings.path_for("uuid").write_text(f"Good: {good}\nBad: not-a-uuid\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="mcconfig.player.uuids"):
        cache = PlayerUUIDs(settings=settings)

    assert len(cache) == 1
    assert cache.get_uuid("good") == good
    assert "Skipping malformed UUID" in caplog.text
