"""Summary statistics and metadata for a comparison."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .models import DiffType, Difference, DiffSummary, DiffMetadata
from .values import Value, Array, Object, canonical_text


def _children(value: Value) -> list[Value]:
    if isinstance(value, Array):
        return list(value.items)
    if isinstance(value, Object):
        return value.values()
    return []


def count_items(value: Value) -> int:
    """Count primitives plus object keys; arrays add only their elements."""
    if value.is_primitive:
        return 1
    total = sum(count_items(child) for child in _children(value))
    if isinstance(value, Object):
        total += len(value)
    return total


def complexity(value: Value) -> int:
    """Structural size: 1 per primitive, 1 + children for containers."""
    if value.is_primitive:
        return 1
    return 1 + sum(complexity(child) for child in _children(value))


def depth(value: Value, current_depth: int = 0) -> int:
    """Deepest nesting level below a value (0 for a primitive root)."""
    children = _children(value)
    if not children:
        return current_depth
    return max(depth(child, current_depth + 1) for child in children)


def count_keys(value: Value) -> int:
    """Recursive count of object keys; arrays are descended but add nothing."""
    total = sum(count_keys(child) for child in _children(value))
    if isinstance(value, Object):
        total += len(value)
    return total


def summarize(
    differences: Iterable[Difference],
    left: Value,
    right: Value
) -> DiffSummary:
    """
    Tally differences by type and score the comparison.

    Similarity is the share of items not involved in a difference,
    clamped to [0, 100]; two empty trees are fully similar.
    """
    counts = Counter(d.type for d in differences)
    added = counts[DiffType.ADDED]
    removed = counts[DiffType.REMOVED]
    modified = counts[DiffType.MODIFIED]
    moved = counts[DiffType.MOVED]
    total_differences = added + removed + modified + moved

    total_items = count_items(left) + count_items(right)
    if total_items > 0:
        similarity = (total_items - total_differences) / total_items * 100
    else:
        similarity = 100.0

    return DiffSummary(
        total_differences=total_differences,
        added=added,
        removed=removed,
        modified=modified,
        moved=moved,
        unchanged=counts[DiffType.UNCHANGED],
        similarity=max(0.0, min(100.0, float(similarity))),
        complexity=complexity(left) + complexity(right),
    )


def measure(left: Value, right: Value, processing_time: float) -> DiffMetadata:
    """Compute sizes, depths and key counts of both values."""
    left_size = len(canonical_text(left))
    right_size = len(canonical_text(right))

    return DiffMetadata(
        left_size=left_size,
        right_size=right_size,
        left_depth=depth(left),
        right_depth=depth(right),
        left_keys=count_keys(left),
        right_keys=count_keys(right),
        processing_time=processing_time,
        # Rough estimate, not a measurement
        memory_usage=(left_size + right_size) * 2,
    )
