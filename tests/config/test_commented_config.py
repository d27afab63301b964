import logging

import pytest

from mcconfig.config import CommentedConfig, ConfigSettings
from mcconfig.parse import DataSection, ParseError, parse_resource, parse_text


@pytest.fixture
def settings(tmp_path) -> ConfigSettings:
    return ConfigSettings(data_folder=tmp_path / "plugin")


def test_creates_the_data_folder(settings, caplog):
    with caplog.at_level(logging.INFO, logger="mcconfig.config.commented"):
        config = CommentedConfig("config", settings=settings)

    assert settings.data_folder.is_dir()
    assert config.path == settings.data_folder / "config.yml"
    assert "Created a new folder" in caplog.text


def test_missing_file_loads_empty(settings):
    config = CommentedConfig("config", settings=settings)

    assert config.config == DataSection()


def test_save_and_reload_keeps_comments(settings):
    config = CommentedConfig("config", settings=settings)
    config.config.set("motd", "Welcome: friends")
    config.config.add_comment("motd", " shown on join")

    assert config.save()

    reloaded = CommentedConfig("config", settings=settings)
    assert reloaded.config.get_string("motd") == "Welcome: friends"
    assert reloaded.config.get_comments("motd") == [" shown on join"]
    assert config.path.read_text(encoding="utf-8") == "# shown on join\nmotd: 'Welcome: friends'\n"


def test_save_without_loading_does_nothing(settings):
    config = CommentedConfig("config", settings=settings)

    assert config.save() is False
    assert not config.path.exists()


def test_lenient_mode_logs_and_starts_empty(settings, caplog):
    settings.data_folder.mkdir(parents=True)
    settings.path_for("broken").write_text("not a mapping\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="mcconfig.config.commented"):
        config = CommentedConfig("broken", settings=settings)
        data = config.config

    assert data == DataSection()
    assert "Failed to parse" in caplog.text


def test_strict_mode_raises(tmp_path):
    settings = ConfigSettings(data_folder=tmp_path, strict=True)
    settings.path_for("broken").write_text("not a mapping\n", encoding="utf-8")

    config = CommentedConfig("broken", settings=settings)
    with pytest.raises(ParseError):
        config.reload()


def test_save_failure_is_logged(settings, caplog):
    config = CommentedConfig("config", settings=settings)
    config.config.set("text", "two\nlines")

    with caplog.at_level(logging.ERROR, logger="mcconfig.config.commented"):
        assert config.save() is False

    assert "Could not save config" in caplog.text


def test_save_default_config_only_when_missing(settings):
    defaults = parse_resource("mcconfig.resources", "config.yml")
    config = CommentedConfig("config", settings=settings, defaults=defaults)

    config.save_default_config()
    assert config.config == defaults

    config.config.set("uuid-cache", False)
    config.save()
    config.save_default_config()
    assert config.reload().get_boolean("uuid-cache") is False


def test_check_defaults_and_trim(settings):
    defaults = parse_text("# limits\nlimits:\n  homes: 3\n  warps: 5\nenabled: true\n")
    settings.data_folder.mkdir(parents=True)
    settings.path_for("config").write_text("limits:\n  homes: 10\nlegacy: 1\n", encoding="utf-8")
    config = CommentedConfig("config", settings=settings, defaults=defaults)

    config.check_defaults()
    config.trim()

    data = config.config
    assert data.keys() == ["limits", "enabled"]
    assert data.get_int("limits.homes") == 10
    assert data.get_int("limits.warps") == 5
    assert data.get_comments("limits") == [" limits"]


def test_clear(settings):
    config = CommentedConfig("config", settings=settings)
    config.config.set("a", 1)

    config.clear()

    assert config.config.size() == 0


def test_lenient_mode_handles_undecodable_files(settings, caplog):
    settings.data_folder.mkdir(parents=True)
    settings.path_for("binary").write_bytes(b"name: \xff\xfe\n")

    with caplog.at_level(logging.WARNING, logger="mcconfig.config.commented"):
        data = CommentedConfig("binary", settings=settings).config

    assert data == DataSection()
    assert "Failed to parse" in caplog.text
