import json

import pytest

from mcconfig.cli import build_parser, run_from_args

DOCUMENT = "# settings\nserver:\n  port: 25565\n  name: \"Lobby\"\n  worlds:\n  - world\n  - nether\n"


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(DOCUMENT, encoding="utf-8")
    return path


def test_check_reports_ok(config_file, capsys):
    assert run_from_args(["check", str(config_file)]) == 0

    assert "OK" in capsys.readouterr().out


def test_check_reports_parse_errors(tmp_path, capsys):
    broken = tmp_path / "broken.yml"
    broken.write_text("key\n  value: 2\n", encoding="utf-8")

    assert run_from_args(["check", str(broken)]) == 1

    assert "line 1" in capsys.readouterr().err


def test_format_prints_canonical_text(config_file, capsys):
    assert run_from_args(["format", str(config_file)]) == 0

    out = capsys.readouterr().out
    assert out == "# settings\nserver:\n  port: 25565\n  name: Lobby\n  worlds:\n    - world\n    - nether\n"


def test_format_write_in_place(config_file):
    assert run_from_args(["format", "--write", "--quote", '"', str(config_file)]) == 0

    assert "    - world\n" in config_file.read_text(encoding="utf-8")


def test_get_values(config_file, capsys):
    assert run_from_args(["get", str(config_file), "server.port"]) == 0
    assert capsys.readouterr().out == "25565\n"

    assert run_from_args(["get", str(config_file), "server.worlds"]) == 0
    assert capsys.readouterr().out == "world\nnether\n"

    assert run_from_args(["get", str(config_file), "server.missing"]) == 1


def test_dump_json(config_file, capsys):
    assert run_from_args(["dump", str(config_file)]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload == {"server": {"port": 25565, "name": "Lobby", "worlds": ["world", "nether"]}}


def test_missing_file_exits_non_zero(tmp_path, capsys):
    assert run_from_args(["dump", str(tmp_path / "missing.yml")]) == 1

    assert "missing.yml" in capsys.readouterr().err


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_check_reports_undecodable_files(tmp_path, capsys):
    binary = tmp_path / "binary.yml"
    binary.write_bytes(b"key: \xff\n")

    assert run_from_args(["check", str(binary)]) == 1

    assert "binary.yml" in capsys.readouterr().err


def test_json_files_use_the_json_reader(tmp_path, capsys):
    source = tmp_path / "config.json"
    source.write_text('{"server": {"port": 25565, "worlds": ["world"]}}', encoding="utf-8")

    assert run_from_args(["get", str(source), "server.port"]) == 0
    assert capsys.readouterr().out == "25565\n"

    assert run_from_args(["format", "--write", str(source)]) == 0
    assert json.loads(source.read_text(encoding="utf-8")) == {"server": {"port": 25565, "worlds": ["world"]}}
