"""Hand-rolled YAML-style config parsing for the plugin suite."""

from __future__ import annotations

from .parse import (
    ConfigError,
    DataSection,
    ParseError,
    SerializeError,
    ValueKind,
    dump,
    dump_json,
    parse_file,
    parse_json_file,
    parse_json_text,
    parse_resource,
    parse_text,
    serialize,
)

__all__ = [
    "ConfigError",
    "DataSection",
    "ParseError",
    "SerializeError",
    "ValueKind",
    "dump",
    "dump_json",
    "parse_file",
    "parse_json_file",
    "parse_json_text",
    "parse_resource",
    "parse_text",
    "serialize",
]
