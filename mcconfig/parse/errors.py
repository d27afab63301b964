"""Exceptions raised while reading or writing config documents."""

from __future__ import annotations

from typing import Optional


class ConfigError(Exception):
    """Base class for all errors raised by :mod:`mcconfig`."""


class ParseError(ConfigError, ValueError):
    """Raised when a document is structurally inconsistent.

    The whole parse fails; no partial tree is ever returned.
    """

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None) -> None:
        self.message = message
        self.line_number = line_number
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line_number is None:
            return self.message
        if self.line is None:
            return f"line {self.line_number}: {self.message}"
        return f"line {self.line_number}: {self.message} ({self.line!r})"


class SerializeError(ConfigError, ValueError):
    """Raised when a tree holds a value the text format cannot express."""


__all__ = ["ConfigError", "ParseError", "SerializeError"]
