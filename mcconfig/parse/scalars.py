"""Decode value literals into typed scalars or empty containers."""

from __future__ import annotations

import math
import re
from typing import Any

from .section import I64_MAX, I64_MIN, DataSection

QUOTE_CHARS = ("'", '"')
EMPTY_SECTION = "{}"
EMPTY_LIST = "[]"

_INT_PATTERN = re.compile(r"[-+]?[0-9]+", re.ASCII)
_FLOAT_PATTERN = re.compile(r"[-+]?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)(?:[eE][-+]?[0-9]+)?", re.ASCII)
_INF_PATTERN = re.compile(r"([-+]?)\.inf", re.IGNORECASE)
_NAN_PATTERN = re.compile(r"\.nan", re.IGNORECASE)

# Words other YAML readers treat as booleans or null.
_YAML_RESERVED = {"yes", "no", "on", "off", "y", "n", "null", "none", "~"}
_UNSAFE_PREFIXES = ("#", "-", "{", "[", "'", '"', "&", "*", "!", "|", ">", "%", "@", "`", "?")


class _OpensContainer:
    """Marker for an empty literal: the key's children follow on deeper lines."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "OPENS_CONTAINER"


OPENS_CONTAINER = _OpensContainer()


def is_quoted(literal: str) -> bool:
    return len(literal) >= 2 and literal[0] in QUOTE_CHARS and literal[0] == literal[-1]


def parse_int(literal: str) -> int | None:
    if not _INT_PATTERN.fullmatch(literal):
        return None
    value = int(literal, 10)
    if value < I64_MIN or value > I64_MAX:
        return None
    return value


def parse_float(literal: str) -> float | None:
    if _FLOAT_PATTERN.fullmatch(literal):
        return float(literal)
    special = _INF_PATTERN.fullmatch(literal)
    if special:
        return -math.inf if special.group(1) == "-" else math.inf
    if _NAN_PATTERN.fullmatch(literal):
        return math.nan
    return None


def parse_bool(literal: str) -> bool | None:
    lowered = literal.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def read_scalar(literal: str) -> Any:
    """Classify and decode a trimmed value literal.

    Returns an empty :class:`DataSection` for ``{}``, an empty list for
    ``[]``, the inner text of a quoted string, an ``int``, ``float`` or
    ``bool`` when the literal reads as one, and the raw text otherwise. An
    empty literal yields :data:`OPENS_CONTAINER`.
    """

    literal = literal.strip()
    if not literal:
        return OPENS_CONTAINER
    if literal == EMPTY_SECTION:
        return DataSection()
    if literal == EMPTY_LIST:
        return []
    if is_quoted(literal):
        return literal[1:-1]

    integer = parse_int(literal)
    if integer is not None:
        return integer

    number = parse_float(literal)
    if number is not None:
        return number

    flag = parse_bool(literal)
    if flag is not None:
        return flag

    return literal


def needs_quotes(text: str) -> bool:
    """Return True when ``text`` written bare would not read back as itself."""

    if not text or text != text.strip():
        return True
    if ":" in text or " #" in text:
        return True
    if text.startswith(_UNSAFE_PREFIXES):
        return True
    if text.lower() in _YAML_RESERVED:
        return True
    decoded = read_scalar(text)
    return not (isinstance(decoded, str) and decoded == text)


def quote(text: str, preferred: str = "'") -> str:
    """Wrap ``text`` in quotes, switching characters to keep YAML readers happy."""

    alternate = '"' if preferred == "'" else "'"
    if preferred in text and alternate not in text:
        preferred = alternate
    return f"{preferred}{text}{preferred}"


__all__ = [
    "EMPTY_LIST",
    "EMPTY_SECTION",
    "OPENS_CONTAINER",
    "QUOTE_CHARS",
    "is_quoted",
    "needs_quotes",
    "parse_bool",
    "parse_float",
    "parse_int",
    "quote",
    "read_scalar",
]
