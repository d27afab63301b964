"""Command line interface for checking and normalising config files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from mcconfig.parse import ConfigError, DataSection, parse_file, parse_json_file, serialize_json
from mcconfig.parse.section import scalar_text

LOGGER = logging.getLogger("mcconfig.cli")

JSON_SUFFIX = ".json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mcconfig", description="Inspect and rewrite config files")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Parse files and report structural errors")
    check.add_argument("files", nargs="+", type=Path)

    fmt = commands.add_parser("format", help="Re-serialize a file in canonical form")
    fmt.add_argument("file", type=Path)
    fmt.add_argument("--write", action="store_true", help="Rewrite the file in place")
    fmt.add_argument("--quote", choices=["'", '"'], default="'", help="Preferred quote character")

    get = commands.add_parser("get", help="Print the value at a dotted key path")
    get.add_argument("file", type=Path)
    get.add_argument("key")

    dump = commands.add_parser("dump", help="Print the parsed tree as JSON")
    dump.add_argument("file", type=Path)
    return parser


def _load(path: Path) -> DataSection:
    if path.suffix.lower() == JSON_SUFFIX:
        return parse_json_file(path)
    return parse_file(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _check(files: Sequence[Path]) -> int:
    failures = 0
    for path in files:
        try:
            _load(path)
        except (ConfigError, OSError) as exc:
            failures += 1
            print(f"{path}: {exc}", file=sys.stderr)
            continue
        print(f"{path}: OK")
    return 1 if failures else 0


def _format(path: Path, write: bool, quote: str) -> int:
    data = _load(path)
    if path.suffix.lower() == JSON_SUFFIX:
        text = serialize_json(data)
    else:
        text = data.serialize(quote=quote)
    if write:
        path.write_text(text, encoding="utf-8")
        LOGGER.info("Rewrote %s", path)
    else:
        sys.stdout.write(text)
    return 0


def _get(path: Path, key: str) -> int:
    data = _load(path)
    value = data.get(key)
    if value is None:
        print(f"{key}: not found", file=sys.stderr)
        return 1
    if isinstance(value, DataSection):
        sys.stdout.write(value.serialize())
    elif isinstance(value, list):
        for item in data.get_list(key):
            print(item)
    else:
        print(scalar_text(value))
    return 0


def _dump(path: Path) -> int:
    print(json.dumps(_load(path).to_dict(), indent=2))
    return 0


def run_from_args(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "check":
        return _check(args.files)
    try:
        if args.command == "format":
            return _format(args.file, args.write, args.quote)
        if args.command == "get":
            return _get(args.file, args.key)
        if args.command == "dump":
            return _dump(args.file)
    except (ConfigError, OSError) as exc:
        print(f"{args.file}: {exc}", file=sys.stderr)
        return 1
    parser.error("Unknown command")
    return 2


def main(argv: Sequence[str] | None = None) -> int:
    return run_from_args(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
