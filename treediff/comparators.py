"""Equality strategy for primitive values."""

from __future__ import annotations

import re

from .models import DiffOptions
from .values import Value, Number, String

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_string(value: str, options: DiffOptions) -> str:
    """Apply case folding and whitespace collapsing as configured."""
    if options.ignore_case:
        value = value.lower()
    if options.ignore_whitespace:
        value = _WHITESPACE_RUN.sub(" ", value).strip()
    return value


def compare_strings(
    left: str,
    right: str,
    options: DiffOptions
) -> tuple[bool, str]:
    """
    Compare two string values.

    Args:
        left: The left string
        right: The right string
        options: Diff options (ignore_case, ignore_whitespace)

    Returns:
        Tuple of (is_match, message)
    """
    if normalize_string(left, options) == normalize_string(right, options):
        return True, ""
    return False, f"Values differ: {left!r} != {right!r}"


def compare_numbers(
    left: int | float,
    right: int | float,
    precision: int = 0
) -> tuple[bool, str]:
    """
    Compare two numbers, within 10^-precision when precision is positive.

    Returns:
        Tuple of (is_match, message)
    """
    if precision > 0:
        tolerance = 10 ** -precision
        diff = abs(left - right)
        if diff < tolerance:
            return True, ""
        return False, f"Value difference ({diff}) exceeds precision tolerance ({tolerance})"

    if left == right:
        return True, ""
    return False, f"Values differ: {left} != {right}"


def compare_values(
    left: Value,
    right: Value,
    options: DiffOptions
) -> tuple[bool, str]:
    """
    Compare two primitive values using the configured rules.

    A custom comparator, when set, replaces every other rule.

    Returns:
        Tuple of (is_match, message)
    """
    if options.custom_comparator is not None:
        if options.custom_comparator(left, right):
            return True, ""
        return False, "Values differ by custom comparator"

    if isinstance(left, String) and isinstance(right, String):
        return compare_strings(left.value, right.value, options)

    if isinstance(left, Number) and isinstance(right, Number):
        return compare_numbers(left.value, right.value, options.precision)

    if left == right:
        return True, ""

    return False, f"Values differ: {left.to_python()!r} != {right.to_python()!r}"


def is_equal(left: Value, right: Value, options: DiffOptions) -> bool:
    """Check if two primitive values are equal for diff purposes."""
    is_match, _ = compare_values(left, right, options)
    return is_match
