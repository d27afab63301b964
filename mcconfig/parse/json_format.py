"""JSON reader and writer for :class:`DataSection` trees.

Objects become sections, arrays become lists and ``null`` members are
dropped. Comments have no JSON form and are not written.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from .errors import ParseError
from .parser import DEFAULT_ENCODING, read_document
from .section import DataSection

logger = logging.getLogger(__name__)


def parse_json_text(text: str) -> DataSection:
    """Parse a JSON object into a section; blank text gives an empty one."""

    if not text.strip():
        return DataSection()
    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        lines = text.split("\n")
        line = lines[exc.lineno - 1] if exc.lineno <= len(lines) else None
        raise ParseError(exc.msg, exc.lineno, line) from exc

    if not isinstance(payload, dict):
        raise ParseError(f"expected a JSON object at the top level, found {type(payload).__name__}")
    try:
        return DataSection.from_mapping(payload)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"unsupported JSON value: {exc}") from exc


def parse_json_file(path: str | Path, encoding: str = DEFAULT_ENCODING) -> DataSection:
    """Read and parse a JSON file; ``OSError`` and :class:`ParseError` propagate."""

    file_path = Path(path)
    logger.debug("Loading JSON config from %s", file_path)
    return parse_json_text(read_document(file_path, encoding))


def serialize_json(section: DataSection, indent: Optional[int] = 2) -> str:
    return json.dumps(section.to_dict(), indent=indent, ensure_ascii=False) + "\n"


def dump_json(section: DataSection, path: str | Path, indent: Optional[int] = 2, encoding: str = "utf-8") -> None:
    """Write ``section`` to ``path`` as JSON."""

    Path(path).write_text(serialize_json(section, indent=indent), encoding=encoding)
    logger.debug("Wrote %d root keys to %s as JSON", section.size(), path)


__all__ = ["dump_json", "parse_json_file", "parse_json_text", "serialize_json"]
