"""Tagged value model for tree-shaped (JSON-like) data."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from .exceptions import ParseError


class Value:
    """Base class for tree values. Not instantiated directly."""
    __slots__ = ()

    kind: str = ""
    is_primitive: bool = True

    def to_python(self) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class Null(Value):
    kind = "null"

    def to_python(self) -> Any:
        return None


@dataclass(frozen=True)
class Bool(Value):
    value: bool
    kind = "boolean"

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Number(Value):
    value: int | float
    kind = "number"

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class String(Value):
    value: str
    kind = "string"

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Array(Value):
    items: tuple[Value, ...] = ()
    kind = "array"
    is_primitive = False

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def to_python(self) -> Any:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class Object(Value):
    """
    An ordered mapping of string keys to values.

    Entries keep insertion order; lookups go through an index built once
    at construction.
    """
    entries: tuple[tuple[str, Value], ...] = ()
    _index: dict = field(init=False, repr=False, compare=False, hash=False)
    kind = "object"
    is_primitive = False

    def __post_init__(self):
        object.__setattr__(self, "_index", dict(self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: str) -> bool:
        return key in self._index

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    def values(self) -> list[Value]:
        return [value for _, value in self.entries]

    def get(self, key: str) -> Optional[Value]:
        return self._index.get(key)

    def to_python(self) -> Any:
        return {key: value.to_python() for key, value in self.entries}


_KIND_RANK = {
    "null": 0,
    "boolean": 1,
    "number": 2,
    "string": 3,
    "array": 4,
    "object": 5,
}


def from_python(obj: Any) -> Value:
    """
    Convert already-structured Python data into a Value.

    Mapping:
        None       -> Null
        bool       -> Bool
        int/float  -> Number
        str        -> String
        list/tuple -> Array
        dict       -> Object

    Args:
        obj: The data to convert (an existing Value is returned unchanged)

    Returns:
        The converted Value

    Raises:
        ParseError: If the data contains unsupported types, non-string keys,
            non-finite numbers or a reference cycle
    """
    return _convert(obj, set(), "root")


def _convert(obj: Any, active: set, path: str) -> Value:
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return Null()
    # bool is a subclass of int
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, (int, float)):
        if isinstance(obj, float) and not math.isfinite(obj):
            raise ParseError(
                f"Non-finite number at {path}",
                reason=f"{obj!r} has no JSON representation"
            )
        try:
            float(obj)
        except OverflowError as e:
            raise ParseError(
                f"Number out of range at {path}",
                reason=str(e)
            ) from e
        return Number(obj)
    if isinstance(obj, str):
        return String(obj)

    if isinstance(obj, (list, tuple, dict)):
        marker = id(obj)
        if marker in active:
            raise ParseError(
                f"Circular reference detected at {path}",
                reason="input is not tree-shaped"
            )
        active.add(marker)
        try:
            if isinstance(obj, dict):
                entries = []
                for key, value in obj.items():
                    if not isinstance(key, str):
                        raise ParseError(
                            f"Non-string key {key!r} at {path}",
                            reason="object keys must be strings"
                        )
                    entries.append((key, _convert(value, active, f"{path}.{key}")))
                return Object(tuple(entries))
            return Array(tuple(
                _convert(item, active, f"{path}[{i}]") for i, item in enumerate(obj)
            ))
        finally:
            active.discard(marker)

    raise ParseError(
        f"Unsupported value of type {type(obj).__name__} at {path}",
        reason="only JSON-compatible data can be compared"
    )


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def parse_text(text: str, side: str = None) -> Value:
    """
    Parse the JSON textual form of a value.

    Args:
        text: Serialized JSON
        side: Which input is being parsed ('left' or 'right'), for error reports

    Returns:
        The parsed Value

    Raises:
        ParseError: If the text is not valid JSON
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(
            "Invalid JSON format",
            line=e.lineno,
            column=e.colno,
            reason=e.msg,
            side=side
        ) from e
    except ValueError as e:
        raise ParseError("Invalid JSON format", reason=str(e), side=side) from e
    try:
        return from_python(data)
    except ParseError as e:
        e.side = side
        raise


def to_value(raw: Any, side: str = None) -> Value:
    """Classify an input: text is parsed, anything else is converted."""
    if isinstance(raw, str):
        return parse_text(raw, side)
    try:
        return from_python(raw)
    except ParseError as e:
        e.side = side
        raise


def canonical_text(value: Value) -> str:
    """Compact JSON form used for sizes and ordering."""
    return json.dumps(value.to_python(), separators=(",", ":"), ensure_ascii=False)


def pretty_text(value: Value) -> str:
    """Indented JSON form used as the display text of structured input."""
    return json.dumps(value.to_python(), indent=2, ensure_ascii=False)


def type_name(value: Optional[Value]) -> str:
    """Get a friendly type name for a value (None means missing)."""
    if value is None:
        return "undefined"
    return value.kind


def sort_key(value: Value) -> tuple:
    """
    Total-order key for unordered array comparison.

    Values are grouped by kind first; primitives then order by payload,
    composites by their canonical text.
    """
    rank = _KIND_RANK[value.kind]
    if isinstance(value, Null):
        return (rank, 0)
    if isinstance(value, (Bool, Number, String)):
        return (rank, value.value)
    return (rank, canonical_text(value))
