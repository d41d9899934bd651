"""Path utilities for treediff: building, resolving and matching difference paths."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Iterable

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathParserError

from .models import Difference

ROOT_PATH = "root"

_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def build_path(parent_path: str, key: str | int) -> str:
    """
    Build a child path from a parent path and a key or index.

    The root is the empty string; its children are bare keys (``b``) or
    bare indices (``[0]``). A top-level key named ``root`` is quoted so it
    never reads as the root itself.
    """
    if isinstance(key, int):
        return f"{parent_path}[{key}]"

    if _IDENTIFIER.match(key) and (parent_path or key != ROOT_PATH):
        return f"{parent_path}.{key}" if parent_path else key

    escaped = key.replace("\\", "\\\\").replace("'", "\\'")
    return f"{parent_path}['{escaped}']"


def display_path(path: str) -> str:
    """Reported form of an internal path."""
    return path or ROOT_PATH


def to_jsonpath(path: str) -> str:
    """Convert a difference path (``a.b[2]``) to a JSONPath (``$.a.b[2]``)."""
    if not path or path == ROOT_PATH:
        return "$"
    if path.startswith("$"):
        return path
    if path.startswith("["):
        return "$" + path
    return "$." + path


@lru_cache(maxsize=256)
def _compile(path: str):
    """Compile and cache a JSONPath expression."""
    try:
        return jsonpath_parse(path)
    except JsonPathParserError as e:
        raise ValueError(f"Invalid JSONPath expression '{path}': {e}")


class JSONPathMatcher:
    """Utility class for JSONPath lookups and pattern matching."""

    @classmethod
    def compile(cls, path: str):
        """Compile a JSONPath expression, reusing recent compilations."""
        return _compile(path)

    @classmethod
    def find_values(cls, data: Any, path: str) -> list[Any]:
        """Find all values matching a JSONPath expression."""
        expr = cls.compile(to_jsonpath(path))
        return [m.value for m in expr.find(data)]

    @classmethod
    def matches_pattern(cls, concrete_path: str, pattern: str) -> bool:
        """
        Check if a concrete difference path matches a pattern.

        Supports:
        - Exact match: a.b or $.a.b
        - Recursive descent: $..field
        - Wildcards: items[*].name, config.*
        """
        concrete = to_jsonpath(concrete_path)
        pattern = to_jsonpath(pattern)

        # Handle recursive descent patterns
        if ".." in pattern:
            field = re.escape(pattern.split("..")[-1])
            regex = rf"^\$.*\.{field}$|^\$.*\['{field}'\]$"
            return bool(re.match(regex, concrete))

        # Handle wildcards
        if "*" in pattern:
            regex = re.escape(pattern)
            regex = regex.replace(r"\[\*\]", r"\[\d+\]")
            regex = regex.replace(r"\*", r"[^.\[]+")
            return bool(re.match(f"^{regex}$", concrete))

        # Exact match
        return concrete == pattern


def resolve_path(data: Any, path: str) -> Any:
    """
    Look up the value at a difference path.

    Args:
        data: Plain Python data (e.g. ``result.left_value.to_python()``)
        path: A difference path such as ``users[1].name``

    Returns:
        The value found at the path

    Raises:
        KeyError: If nothing exists at the path
    """
    values = JSONPathMatcher.find_values(data, path)
    if not values:
        raise KeyError(path)
    return values[0]


def filter_differences(
    differences: Iterable[Difference],
    patterns: Iterable[str]
) -> list[Difference]:
    """Keep only the differences whose path matches one of the patterns."""
    patterns = list(patterns)
    if not patterns:
        return list(differences)
    return [
        d for d in differences
        if any(JSONPathMatcher.matches_pattern(d.path, p) for p in patterns)
    ]
