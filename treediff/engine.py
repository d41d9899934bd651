"""Main comparison engine for treediff."""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from .differ import Differ
from .exceptions import ParseError
from .metrics import summarize, measure
from .models import DiffOptions, DiffResult, ErrorResponse
from .values import to_value, pretty_text

logger = logging.getLogger(__name__)


class DiffEngine:
    """
    Compares two tree-shaped inputs in three stages:

    1. Classification: turn each input (text or structured data) into a Value
    2. Comparison: depth-first diff producing ordered Difference records
    3. Aggregation: summary scores and metadata of both trees

    The engine holds no state between calls; every comparison gets its own
    Differ and produces a new DiffResult.
    """

    def __init__(self, options: Optional[DiffOptions] = None):
        """
        Initialize the engine.

        Args:
            options: Diff options (uses defaults if not provided)
        """
        self.options = options or DiffOptions()

    def compare(self, left_input: Any, right_input: Any) -> DiffResult:
        """
        Compare two inputs.

        Args:
            left_input: JSON text or already-structured data
            right_input: JSON text or already-structured data

        Returns:
            DiffResult describing every difference found

        Raises:
            ParseError: If either input cannot be turned into a value; raised
                before any comparison work is done
        """
        left = to_value(left_input, side="left")
        right = to_value(right_input, side="right")

        left_text = left_input if isinstance(left_input, str) else pretty_text(left)
        right_text = right_input if isinstance(right_input, str) else pretty_text(right)

        start_time = time.perf_counter()
        differ = Differ(self.options)
        differ.diff(left, right)
        processing_time = (time.perf_counter() - start_time) * 1000

        differences = tuple(differ.differences)
        summary = summarize(differences, left, right)

        logger.debug(
            "Compared %s vs %s: %d differences (similarity %.1f%%) in %.2fms",
            left.kind, right.kind, summary.total_differences,
            summary.similarity, processing_time
        )

        return DiffResult(
            id=uuid.uuid4().hex,
            left_value=left,
            right_value=right,
            left_text=left_text,
            right_text=right_text,
            differences=differences,
            summary=summary,
            metadata=measure(left, right, processing_time),
            timestamp=datetime.now(timezone.utc),
        )

    def safe_compare(
        self,
        left_input: Any,
        right_input: Any
    ) -> DiffResult | ErrorResponse:
        """
        Compare two inputs, reporting parse failures as an ErrorResponse.

        Returns:
            DiffResult on success, ErrorResponse when an input is invalid
        """
        try:
            return self.compare(left_input, right_input)
        except ParseError as e:
            logger.warning("Cannot compare %s input: %s", e.side or "an", e.message)
            return ErrorResponse(
                success=False,
                error={
                    "code": "PARSE_ERROR",
                    "message": e.message,
                    "details": e.to_dict(),
                }
            )


def compare(
    left_input: Any,
    right_input: Any,
    options: Optional[DiffOptions] = None
) -> DiffResult:
    """
    Convenience function to compare two inputs.

    Args:
        left_input: JSON text or structured data
        right_input: JSON text or structured data
        options: Optional diff options

    Returns:
        DiffResult

    Raises:
        ParseError: If either input is invalid
    """
    engine = DiffEngine(options)
    return engine.compare(left_input, right_input)
