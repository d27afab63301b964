"""Write :class:`DataSection` trees back out in the parser's text format."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

from .errors import SerializeError
from .scalars import EMPTY_LIST, EMPTY_SECTION, QUOTE_CHARS, needs_quotes, quote
from .section import DataSection, ValueKind, kind_of, scalar_text

logger = logging.getLogger(__name__)

INDENT_STEP = 2
_KEY_UNSAFE_PREFIXES = ("#", "- ", "{", "[", "'", '"', "&", "*", "!", "|", ">", "%", "@", "`", "?")


def _check_single_line(text: str, what: str) -> None:
    if "\n" in text or "\r" in text:
        raise SerializeError(f"{what} cannot span multiple lines: {text!r}")


def format_key(key: str, preferred_quote: str = "'") -> str:
    """Render a key, quoting it only when the bare form would not read back."""

    _check_single_line(key, "Key")
    bare_safe = (
        key
        and key == key.strip()
        and ": " not in key
        and not key.endswith(":")
        and " #" not in key
        and not key.startswith(_KEY_UNSAFE_PREFIXES)
    )
    if bare_safe:
        return key
    for candidate in (preferred_quote, *QUOTE_CHARS):
        # The closing quote must be the first "<quote>: " in the line.
        if f"{candidate}:" not in key:
            return f"{candidate}{key}{candidate}"
    raise SerializeError(f"Key cannot be written in any quoting style: {key!r}")


def format_scalar(value: Any, preferred_quote: str = "'") -> str:
    """Render a scalar literal that the scalar reader decodes back to ``value``."""

    kind = kind_of(value)
    if kind is ValueKind.STR:
        _check_single_line(value, "String")
        return quote(value, preferred_quote) if needs_quotes(value) else value
    if kind in (ValueKind.INT, ValueKind.FLOAT, ValueKind.BOOL):
        return scalar_text(value)
    if kind is ValueKind.SECTION:
        if value.size():
            raise SerializeError("Nested sections inside lists cannot be written")
        return EMPTY_SECTION
    if kind is ValueKind.LIST:
        if value:
            raise SerializeError("Nested lists inside lists cannot be written")
        return EMPTY_LIST
    raise AssertionError(f"unhandled value kind {kind}")


def _write_section(section: DataSection, out: List[str], indent: int, preferred_quote: str) -> None:
    spacing = " " * indent
    for key, value in section.items():
        for comment in section.get_comments(key):
            _check_single_line(comment, "Comment")
            out.append(f"{spacing}#{comment}")

        prefix = f"{spacing}{format_key(key, preferred_quote)}:"
        kind = kind_of(value)
        if kind is ValueKind.SECTION:
            if value.size() == 0:
                out.append(f"{prefix} {EMPTY_SECTION}")
            else:
                out.append(prefix)
                _write_section(value, out, indent + INDENT_STEP, preferred_quote)
        elif kind is ValueKind.LIST:
            if not value:
                out.append(f"{prefix} {EMPTY_LIST}")
            else:
                out.append(prefix)
                item_spacing = " " * (indent + INDENT_STEP)
                for item in value:
                    out.append(f"{item_spacing}- {format_scalar(item, preferred_quote)}")
        else:
            out.append(f"{prefix} {format_scalar(value, preferred_quote)}")


def serialize(section: DataSection, quote: str = "'") -> str:
    """Return the text form of ``section``; an empty tree gives an empty string."""

    if quote not in QUOTE_CHARS:
        raise ValueError(f"Quote character must be one of {QUOTE_CHARS}, got {quote!r}")
    out: List[str] = []
    _write_section(section, out, 0, quote)
    return "".join(f"{line}\n" for line in out)


def dump(section: DataSection, path: str | Path, quote: str = "'", encoding: str = "utf-8") -> None:
    """Serialize ``section`` and write it to ``path``."""

    text = serialize(section, quote=quote)
    Path(path).write_text(text, encoding=encoding)
    logger.debug("Wrote %d root keys to %s", section.size(), path)


__all__ = ["dump", "format_key", "format_scalar", "serialize"]
