"""Indentation-driven parser that builds :class:`DataSection` trees."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, List, Optional, Tuple

from .errors import ParseError
from .scalars import OPENS_CONTAINER, QUOTE_CHARS, read_scalar
from .scanner import LogicalLine, scan
from .section import DataSection, adopt

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8-sig"


@dataclass
class _Frame:
    """An open container on the nesting stack.

    ``key`` frames start unresolved: the first child line decides whether the
    placeholder section stays a section or is swapped for a list.
    """

    indent: int
    container: Any
    owner: Optional[DataSection] = None
    key: Optional[str] = None
    resolved: bool = True
    child_indent: Optional[int] = None

    @property
    def accepts_items(self) -> bool:
        return not self.resolved or isinstance(self.container, list)

    def claim_indent(self, line: LogicalLine) -> None:
        if self.child_indent is None:
            self.child_indent = line.indent
        elif self.child_indent != line.indent:
            raise ParseError(
                f"inconsistent indentation: expected {self.child_indent} spaces, found {line.indent}",
                line.number,
                line.content,
            )


def split_entry(content: str) -> Optional[Tuple[str, str]]:
    """Split ``key: literal`` at the first colon followed by a space or the end.

    A key wrapped in matching quotes is taken literally up to its closing
    quote. Returns ``None`` when the line has no such delimiter.
    """

    if content[:1] in QUOTE_CHARS:
        quote = content[0]
        search = 1
        while True:
            index = content.find(quote + ":", search)
            if index == -1:
                break
            after = index + 2
            if after == len(content) or content[after] == " ":
                return content[1:index], content[after:].strip()
            search = index + 1

    index = content.find(":")
    while index != -1:
        after = index + 1
        if after == len(content) or content[after] == " ":
            return content[:index].strip(), content[after:].strip()
        index = content.find(":", after)
    return None


class Parser:
    """Consume logical lines and assemble the document tree."""

    def __init__(self, lines: List[LogicalLine]) -> None:
        self._lines = lines
        self._root = DataSection()
        self._stack: List[_Frame] = [_Frame(indent=-1, container=self._root)]

    def parse(self) -> DataSection:
        for line in self._lines:
            if line.is_list_item:
                self._add_item(line)
            else:
                self._add_entry(line)
        return self._root

    def _add_item(self, line: LogicalLine) -> None:
        # Items may sit in the same column as the key that opened the list.
        while self._stack[-1].indent > line.indent or (
            self._stack[-1].indent == line.indent and not self._stack[-1].accepts_items
        ):
            self._stack.pop()

        frame = self._stack[-1]
        if not frame.accepts_items:
            raise ParseError("list item without an open list", line.number, line.content)
        if not frame.resolved:
            frame.owner.set(frame.key, [])
            frame.container = frame.owner.get(frame.key)
            frame.resolved = True
        frame.claim_indent(line)

        value = read_scalar(line.content)
        if value is OPENS_CONTAINER:
            raise ParseError("empty list item", line.number, line.content)
        frame.container.append(adopt(value))

        # Comments above an item belong to the key that owns the list.
        for comment in line.comments:
            frame.owner.add_comment(frame.key, comment)

    def _add_entry(self, line: LogicalLine) -> None:
        while self._stack[-1].indent >= line.indent:
            self._stack.pop()

        frame = self._stack[-1]
        if not frame.resolved:
            frame.resolved = True
        if isinstance(frame.container, list):
            raise ParseError("key inside a list", line.number, line.content)
        frame.claim_indent(line)

        entry = split_entry(line.content)
        if entry is None:
            raise ParseError("expected 'key: value'", line.number, line.content)
        key, literal = entry
        if not key and line.content[:1] not in QUOTE_CHARS:
            raise ParseError("empty key", line.number, line.content)

        section: DataSection = frame.container
        value = read_scalar(literal)
        if value is OPENS_CONTAINER:
            placeholder = DataSection()
            section.set(key, placeholder)
            self._stack.append(
                _Frame(indent=line.indent, container=placeholder, owner=section, key=key, resolved=False)
            )
        else:
            section.set(key, value)

        if line.comments:
            section.set_comments(key, list(line.comments))


def parse_text(text: str) -> DataSection:
    """Parse a config document, raising :class:`ParseError` when malformed."""

    lines = scan(text)
    root = Parser(lines).parse()
    logger.debug("Parsed %d lines into %d root keys", len(lines), root.size())
    return root


def parse_file(path: str | Path, encoding: str = DEFAULT_ENCODING) -> DataSection:
    """Read and parse a file; ``OSError`` and :class:`ParseError` propagate."""

    file_path = Path(path)
    logger.debug("Loading config from %s", file_path)
    return parse_text(read_document(file_path, encoding))


def read_document(path: Path, encoding: str = DEFAULT_ENCODING) -> str:
    """Read ``path`` as text, reporting undecodable bytes as a :class:`ParseError`."""

    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise ParseError(f"{path} is not valid {encoding} text: {exc}") from exc


def parse_resource(package: str, name: str, encoding: str = DEFAULT_ENCODING) -> DataSection:
    """Parse a document bundled as package data."""

    text = resources.files(package).joinpath(name).read_text(encoding=encoding)
    return parse_text(text)


__all__ = ["Parser", "parse_file", "parse_resource", "parse_text", "read_document", "split_entry"]
