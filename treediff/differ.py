"""Recursive structural comparison of two tree values."""

from __future__ import annotations

from typing import Optional

from .comparators import compare_values
from .jsonpath_utils import build_path, display_path
from .models import DiffOptions, Difference, DiffType
from .values import Value, Null, Array, Object, sort_key, type_name


def _is_missing(value: Optional[Value]) -> bool:
    return value is None or isinstance(value, Null)


class Differ:
    """
    Performs a depth-first comparison of two values.

    Handles:
    - Null/missing values (added/removed)
    - Primitive comparison through the equality strategy
    - Kind changes (primitive vs container, array vs object)
    - Ordered and order-insensitive arrays
    - Object properties over the union of both key sets

    Differences are collected in visiting order: object keys in left-side
    order followed by right-only keys, array indices ascending.
    """

    def __init__(self, options: Optional[DiffOptions] = None):
        self.options = options or DiffOptions()
        self.differences: list[Difference] = []
        self.visited: set[str] = set()

    def diff(
        self,
        left: Optional[Value],
        right: Optional[Value],
        path: str = "",
        depth: int = 0
    ):
        """
        Compare two values and record the differences found.

        Args:
            left: The left value (None when missing)
            right: The right value (None when missing)
            path: Path of the node ("" for the root)
            depth: Number of keys/indices between the root and this node
        """
        if path in self.visited or self._too_deep(depth):
            return
        self.visited.add(path)

        current = display_path(path)

        if _is_missing(left) and _is_missing(right):
            return

        if _is_missing(left):
            self._add(current, DiffType.ADDED, f"Added value at {current}", right=right)
            return

        if _is_missing(right):
            self._add(current, DiffType.REMOVED, f"Removed value at {current}", left=left)
            return

        if left.is_primitive and right.is_primitive:
            self._diff_primitives(left, right, current)
            return

        if left.kind != right.kind:
            self._add(
                current,
                DiffType.MODIFIED,
                f"Type changed at {current} ({type_name(left)} → {type_name(right)})",
                left=left,
                right=right
            )
            return

        if isinstance(left, Array):
            self._diff_arrays(left, right, path, depth)
        else:
            self._diff_objects(left, right, path, depth)

    def _too_deep(self, depth: int) -> bool:
        return self.options.max_depth > 0 and depth > self.options.max_depth

    def _diff_primitives(self, left: Value, right: Value, current: str):
        is_match, message = compare_values(left, right, self.options)

        if not is_match:
            self._add(
                current,
                DiffType.MODIFIED,
                f"Value changed at {current}: {message}",
                left=left,
                right=right
            )
        elif self.options.show_unchanged:
            self._add(
                current,
                DiffType.UNCHANGED,
                f"Unchanged value at {current}",
                left=left,
                right=right
            )

    def _diff_arrays(self, left: Array, right: Array, path: str, depth: int):
        """Compare arrays index by index, after sorting when order is ignored."""
        if self._too_deep(depth + 1):
            return

        left_items = left.items
        right_items = right.items
        if self.options.ignore_array_order:
            left_items = sorted(left_items, key=sort_key)
            right_items = sorted(right_items, key=sort_key)

        for i in range(max(len(left_items), len(right_items))):
            item_path = build_path(path, i)

            if i >= len(left_items):
                self._add(
                    item_path,
                    DiffType.ADDED,
                    f"Added array item at {item_path}",
                    right=right_items[i]
                )
            elif i >= len(right_items):
                self._add(
                    item_path,
                    DiffType.REMOVED,
                    f"Removed array item at {item_path}",
                    left=left_items[i]
                )
            else:
                self.diff(left_items[i], right_items[i], item_path, depth + 1)

    def _diff_objects(self, left: Object, right: Object, path: str, depth: int):
        """Compare object properties over the union of both key sets."""
        if self._too_deep(depth + 1):
            return

        parent = display_path(path)
        all_keys = left.keys() + [k for k in right.keys() if k not in left]

        for key in all_keys:
            property_path = build_path(path, key)

            if key not in left:
                if not self.options.ignore_extra_keys:
                    self._add(
                        property_path,
                        DiffType.ADDED,
                        f"Added property {key} at {parent}",
                        right=right.get(key)
                    )
            elif key not in right:
                if not self.options.ignore_extra_keys:
                    self._add(
                        property_path,
                        DiffType.REMOVED,
                        f"Removed property {key} at {parent}",
                        left=left.get(key)
                    )
            else:
                self.diff(left.get(key), right.get(key), property_path, depth + 1)

    def _add(
        self,
        path: str,
        diff_type: DiffType,
        description: str,
        left: Optional[Value] = None,
        right: Optional[Value] = None
    ):
        """Add a difference entry."""
        self.differences.append(Difference(
            path=path,
            type=diff_type,
            description=description,
            left_value=left,
            right_value=right
        ))
