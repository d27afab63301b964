"""Ordered, hierarchical container for parsed configuration data."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

TRUE_WORDS = {"true", "yes", "t", "y"}
FALSE_WORDS = {"false", "no", "f", "n"}

_MISSING = object()

Value = Union[int, float, bool, str, List[Any], "DataSection"]


class ValueKind(Enum):
    """Closed set of shapes a stored value can take."""

    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STR = "str"
    LIST = "list"
    SECTION = "section"


def kind_of(value: Any) -> ValueKind:
    """Classify a stored value, raising ``TypeError`` for anything else."""

    # bool must be checked before int, it is a subclass.
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STR
    if isinstance(value, list):
        return ValueKind.LIST
    if isinstance(value, DataSection):
        return ValueKind.SECTION
    raise TypeError(f"Unsupported config value type: {type(value).__name__}")


def values_equal(left: Any, right: Any) -> bool:
    """Deep, kind-aware comparison (``1``, ``1.0`` and ``True`` all differ)."""

    kind = kind_of(left)
    if kind is not kind_of(right):
        return False
    if kind is ValueKind.FLOAT:
        if math.isnan(left) and math.isnan(right):
            return True
        return left == right
    if kind is ValueKind.LIST:
        return len(left) == len(right) and all(values_equal(a, b) for a, b in zip(left, right))
    if kind is ValueKind.SECTION:
        return left == right
    return left == right


def format_float(value: float) -> str:
    """Render a float in a form the scalar reader turns back into ``value``."""

    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    return repr(value)


def scalar_text(value: Any) -> Optional[str]:
    """Render a scalar as plain text, or ``None`` for containers."""

    kind = kind_of(value)
    if kind is ValueKind.STR:
        return value
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if kind is ValueKind.INT:
        return str(value)
    if kind is ValueKind.FLOAT:
        return format_float(value)
    if kind is ValueKind.LIST or kind is ValueKind.SECTION:
        return None
    raise AssertionError(f"unhandled value kind {kind}")


def _in_range(number: Optional[int]) -> Optional[int]:
    if number is None or number < I64_MIN or number > I64_MAX:
        return None
    return number


def _coerce_int(value: Any) -> Optional[int]:
    from .scalars import parse_float, parse_int

    kind = kind_of(value)
    if kind is ValueKind.INT:
        return value
    if kind is ValueKind.FLOAT:
        return _in_range(int(value)) if value.is_integer() else None
    if kind is ValueKind.STR:
        text = value.strip()
        number = parse_int(text)
        if number is not None:
            return number
        decimal = parse_float(text)
        if decimal is not None and decimal.is_integer():
            return _in_range(int(decimal))
        return None
    if kind in (ValueKind.BOOL, ValueKind.LIST, ValueKind.SECTION):
        return None
    raise AssertionError(f"unhandled value kind {kind}")


def _coerce_float(value: Any) -> Optional[float]:
    from .scalars import parse_float, parse_int

    kind = kind_of(value)
    if kind is ValueKind.FLOAT:
        return value
    if kind is ValueKind.INT:
        return float(value)
    if kind is ValueKind.STR:
        text = value.strip()
        number = parse_int(text)
        if number is not None:
            return float(number)
        return parse_float(text)
    if kind in (ValueKind.BOOL, ValueKind.LIST, ValueKind.SECTION):
        return None
    raise AssertionError(f"unhandled value kind {kind}")


def _coerce_bool(value: Any) -> Optional[bool]:
    kind = kind_of(value)
    if kind is ValueKind.BOOL:
        return value
    if kind is ValueKind.STR:
        lowered = value.strip().lower()
        if lowered in TRUE_WORDS:
            return True
        if lowered in FALSE_WORDS:
            return False
        return None
    if kind in (ValueKind.INT, ValueKind.FLOAT, ValueKind.LIST, ValueKind.SECTION):
        return None
    raise AssertionError(f"unhandled value kind {kind}")


class DataSection:
    """One level of a config document: an ordered ``key -> value`` mapping.

    Values are ``int``, ``float``, ``bool``, ``str``, lists of values or
    nested :class:`DataSection` objects (see :class:`ValueKind`). Getters
    accept dotted paths (``"database.pool.size"``) and never raise: a
    missing key or a value that cannot be coerced yields the default.
    Comments read from the source document travel with their key.
    """

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}
        self._comments: Dict[str, List[str]] = {}
        self._owned = False

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "DataSection":
        """Build a section from plain Python data (nested mappings allowed)."""

        section = cls()
        for key, value in mapping.items():
            section.set(str(key), value)
        return section

    def copy(self) -> "DataSection":
        """Return a deep copy, comments included."""

        clone = DataSection()
        for key, value in self._data.items():
            clone._data[key] = adopt(_copy_value(value))
        clone._comments = {key: list(lines) for key, lines in self._comments.items()}
        return clone

    def to_dict(self) -> Dict[str, Any]:
        """Return the tree as plain dicts and lists."""

        return {key: _plain(value) for key, value in self._data.items()}

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------
    def keys(self) -> List[str]:
        return list(self._data)

    def values(self) -> List[Any]:
        return list(self._data.values())

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._data.items())

    def size(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataSection):
            return NotImplemented
        if list(self._data) != list(other._data):
            return False
        return all(values_equal(value, other._data[key]) for key, value in self._data.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DataSection({self.to_dict()!r})"

    def __str__(self) -> str:
        return self.serialize()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def _locate(self, key: str) -> Tuple[Optional["DataSection"], str]:
        """Follow a dotted path down to the section holding the final key.

        A key stored literally (dots included) always wins over path lookup.
        """

        section: DataSection = self
        while key not in section._data and "." in key:
            head, key = key.split(".", 1)
            child = section._data.get(head)
            if not isinstance(child, DataSection):
                return None, key
            section = child
        return section, key

    def get(self, key: str, default: Any = None) -> Any:
        """Return the raw stored value at ``key`` or ``default``."""

        section, leaf = self._locate(key)
        if section is None or leaf not in section._data:
            return default
        return section._data[leaf]

    def has(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def is_section(self, key: str) -> bool:
        return self.get_section(key) is not None

    def is_list(self, key: str) -> bool:
        return isinstance(self.get(key), list)

    def is_number(self, key: str) -> bool:
        value = self.get(key, _MISSING)
        return value is not _MISSING and _coerce_float(value) is not None

    def get_section(self, key: str) -> Optional["DataSection"]:
        value = self.get(key)
        return value if isinstance(value, DataSection) else None

    def get_string(self, key: str, default: str = "") -> str:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            return default
        text = scalar_text(value)
        return default if text is None else text

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            return default
        number = _coerce_int(value)
        return default if number is None else number

    def get_double(self, key: str, default: float = 0.0) -> float:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            return default
        number = _coerce_float(value)
        return default if number is None else number

    def get_boolean(self, key: str, default: bool = False) -> bool:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            return default
        flag = _coerce_bool(value)
        return default if flag is None else flag

    def get_list(self, key: str, default: Optional[List[str]] = None) -> List[str]:
        """Return the scalars of the list at ``key`` rendered as strings.

        Nested containers inside the list are skipped.
        """

        value = self.get(key)
        if not isinstance(value, list):
            return list(default) if default is not None else []
        rendered = (scalar_text(item) for item in value)
        return [text for text in rendered if text is not None]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite ``key``; ``None`` removes it.

        New keys go to the end; overwritten keys keep their position.
        Mappings become nested sections and tuples become lists. A section
        that already belongs to a tree is stored as a copy.
        """

        if value is None:
            self.remove(key)
            return
        previous = self._data.get(key, _MISSING)
        if previous is value:
            return
        self._data[key] = _normalize(value, self)
        if previous is not _MISSING:
            release(previous)

    def remove(self, key: str) -> Any:
        """Delete ``key`` (and its comments), returning the old value or ``None``."""

        section, leaf = self._locate(key)
        if section is None or leaf not in section._data:
            return None
        section._comments.pop(leaf, None)
        removed = section._data.pop(leaf)
        release(removed)
        return removed

    def clear(self) -> None:
        for value in self._data.values():
            release(value)
        self._data.clear()
        self._comments.clear()

    def create_section(self, key: str) -> "DataSection":
        """Store a new empty section at ``key``, replacing any value there."""

        section = DataSection()
        previous = self._data.get(key, _MISSING)
        self._data[key] = adopt(section)
        if previous is not _MISSING:
            release(previous)
        return section

    def default_section(self, key: str) -> "DataSection":
        """Return the section at ``key``, creating it if there is none."""

        existing = self._data.get(key)
        if isinstance(existing, DataSection):
            return existing
        return self.create_section(key)

    def check_default(self, key: str, default: Any) -> None:
        """Set ``key`` to ``default`` only when it holds no value yet."""

        if key not in self._data:
            self.set(key, default)

    def apply_defaults(self, defaults: "DataSection") -> None:
        """Recursively fill in keys (and their comments) missing from this tree."""

        for key, value in defaults._data.items():
            if key in defaults._comments:
                self.set_comments(key, defaults._comments[key])
            if isinstance(value, DataSection):
                self.default_section(key).apply_defaults(value)
            else:
                self.check_default(key, _copy_value(value))

    def trim(self, defaults: "DataSection") -> None:
        """Recursively drop keys the defaults tree does not declare."""

        for key in list(self._data):
            if key not in defaults._data:
                self.remove(key)
                continue
            expected = defaults._data[key]
            if isinstance(expected, DataSection):
                current = self._data[key]
                if isinstance(current, DataSection):
                    current.trim(expected)
                else:
                    self.remove(key)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------
    def has_comment(self, key: str) -> bool:
        return key in self._comments

    def get_comments(self, key: str) -> List[str]:
        return list(self._comments.get(key, []))

    def set_comments(self, key: str, comments: List[str]) -> None:
        self._comments[key] = list(comments)

    def add_comment(self, key: str, comment: str) -> None:
        self._comments.setdefault(key, []).append(comment)

    def clear_comments(self, key: str) -> None:
        self._comments.pop(key, None)

    def clear_all_comments(self, deep: bool = False) -> None:
        self._comments.clear()
        if deep:
            for value in self._data.values():
                if isinstance(value, DataSection):
                    value.clear_all_comments(deep=True)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def serialize(self, quote: str = "'") -> str:
        """Render the tree in the text format :func:`parse_text` reads."""

        from .serializer import serialize

        return serialize(self, quote=quote)


def _contains_section(root: DataSection, target: DataSection) -> bool:
    if root is target:
        return True
    for value in root._data.values():
        if _holds_section(value, target):
            return True
    return False


def _holds_section(value: Any, target: DataSection) -> bool:
    if isinstance(value, DataSection):
        return _contains_section(value, target)
    if isinstance(value, list):
        return any(_holds_section(item, target) for item in value)
    return False


def _normalize(value: Any, owner: DataSection) -> Any:
    """Convert ``value`` into one of the stored shapes, rejecting the rest."""

    if isinstance(value, DataSection):
        if not value._owned and _contains_section(value, owner):
            raise ValueError("A section cannot contain itself")
        return adopt(value)
    if isinstance(value, Mapping):
        return DataSection.from_mapping(value)
    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if item is None:
                raise TypeError("Lists cannot hold None")
            items.append(_normalize(item, owner))
        return items
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value < I64_MIN or value > I64_MAX:
            raise ValueError(f"Integer {value} does not fit in 64 bits")
        return int(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, str):
        return str(value)
    raise TypeError(f"Unsupported config value type: {type(value).__name__}")


def adopt(value: Any) -> Any:
    """Mark sections in ``value`` as owned, copying any that already have an owner."""

    if isinstance(value, DataSection):
        if value._owned:
            value = value.copy()
        value._owned = True
        return value
    if isinstance(value, list):
        return [adopt(item) for item in value]
    return value


def release(value: Any) -> None:
    """Detach sections in ``value`` from their former owner."""

    if isinstance(value, DataSection):
        value._owned = False
    elif isinstance(value, list):
        for item in value:
            release(item)


def _copy_value(value: Any) -> Any:
    kind = kind_of(value)
    if kind is ValueKind.SECTION:
        return value.copy()
    if kind is ValueKind.LIST:
        return [_copy_value(item) for item in value]
    return value


def _plain(value: Any) -> Any:
    kind = kind_of(value)
    if kind is ValueKind.SECTION:
        return value.to_dict()
    if kind is ValueKind.LIST:
        return [_plain(item) for item in value]
    return value


__all__ = [
    "DataSection",
    "adopt",
    "release",
    "FALSE_WORDS",
    "I64_MAX",
    "I64_MIN",
    "TRUE_WORDS",
    "Value",
    "ValueKind",
    "format_float",
    "kind_of",
    "scalar_text",
    "values_equal",
]
