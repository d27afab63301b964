"""Split raw config text into indentation-aware logical lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

LIST_MARKER = "- "
COMMENT_PREFIX = "#"
BYTE_ORDER_MARK = "\ufeff"


@dataclass(frozen=True)
class LogicalLine:
    """One non-blank, non-comment line of a document.

    ``comments`` holds the text of the full-line comments directly above the
    line (without the ``#``), so they can be attached to the key it declares.
    """

    indent: int
    content: str
    is_list_item: bool
    number: int = 0
    comments: Tuple[str, ...] = field(default=(), compare=False)


def count_indent(raw_line: str) -> int:
    """Return the number of leading spaces, taken literally."""

    return len(raw_line) - len(raw_line.lstrip(" "))


def scan(text: str) -> List[LogicalLine]:
    """Convert ``text`` into an ordered list of :class:`LogicalLine` objects."""

    if text.startswith(BYTE_ORDER_MARK):
        text = text[1:]

    # Only \n, \r\n and \r end a line; other Unicode breaks stay in the value.
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    lines: List[LogicalLine] = []
    pending_comments: List[str] = []
    for number, raw_line in enumerate(text.split("\n"), start=1):
        stripped = raw_line.strip()
        if not stripped:
            continue
        if stripped.startswith(COMMENT_PREFIX):
            pending_comments.append(stripped[len(COMMENT_PREFIX):])
            continue

        indent = count_indent(raw_line)
        # "-key" is a key that starts with a dash, "- item" is a list entry.
        is_list_item = stripped.startswith(LIST_MARKER)
        content = stripped[len(LIST_MARKER):].strip() if is_list_item else stripped

        lines.append(
            LogicalLine(
                indent=indent,
                content=content,
                is_list_item=is_list_item,
                number=number,
                comments=tuple(pending_comments),
            )
        )
        pending_comments = []

    return lines


__all__ = ["LogicalLine", "count_indent", "scan"]
