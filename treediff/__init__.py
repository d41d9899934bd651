"""
treediff - Structural comparison engine for JSON-like trees

Compares two tree-shaped values (null, boolean, number, string, array,
object) and produces a deterministic, path-addressed list of differences
together with similarity/complexity scores and size metadata.
"""

from .engine import DiffEngine, compare
from .models import (
    DiffOptions,
    DiffResult,
    Difference,
    DiffSummary,
    DiffMetadata,
    DiffType,
    Severity,
    ExportFormat,
    ErrorResponse,
    InputValidation,
    LogLevel,
)
from .values import (
    Value,
    Null,
    Bool,
    Number,
    String,
    Array,
    Object,
    from_python,
    parse_text,
)
from .exceptions import (
    TreeDiffError,
    ParseError,
    OptionsError,
    FormatError,
)
from .formatters import format_result
from .validation import validate_input
from .history import DiffHistory
from .jsonpath_utils import resolve_path, filter_differences
from .runner import (
    DiffRunner,
    load_options,
    configure_logging,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "DiffEngine",
    "compare",
    "DiffOptions",
    # Results
    "DiffResult",
    "Difference",
    "DiffSummary",
    "DiffMetadata",
    "DiffType",
    "Severity",
    "ErrorResponse",
    # Values
    "Value",
    "Null",
    "Bool",
    "Number",
    "String",
    "Array",
    "Object",
    "from_python",
    "parse_text",
    # Errors
    "TreeDiffError",
    "ParseError",
    "OptionsError",
    "FormatError",
    # Reports
    "ExportFormat",
    "format_result",
    "InputValidation",
    "validate_input",
    "DiffHistory",
    # Paths
    "resolve_path",
    "filter_differences",
    # Runner
    "DiffRunner",
    "load_options",
    "configure_logging",
    "LogLevel",
]
