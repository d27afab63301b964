"""Reader and writer for the indentation-based config text format."""

from .errors import ConfigError, ParseError, SerializeError
from .json_format import dump_json, parse_json_file, parse_json_text, serialize_json
from .parser import parse_file, parse_resource, parse_text
from .scanner import LogicalLine, scan
from .section import DataSection, ValueKind, kind_of
from .serializer import dump, serialize

__all__ = [
    "ConfigError",
    "DataSection",
    "LogicalLine",
    "ParseError",
    "SerializeError",
    "ValueKind",
    "dump",
    "dump_json",
    "kind_of",
    "parse_file",
    "parse_json_file",
    "parse_json_text",
    "parse_resource",
    "parse_text",
    "scan",
    "serialize",
    "serialize_json",
]
