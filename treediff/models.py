"""Data models for the treediff engine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional

from .exceptions import OptionsError
from .values import Value


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class DiffType(Enum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    MOVED = "moved"
    UNCHANGED = "unchanged"


class Severity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExportFormat(Enum):
    JSON = "json"
    CSV = "csv"
    TXT = "txt"
    XML = "xml"
    YAML = "yaml"
    HTML = "html"


SEVERITY_BY_TYPE = {
    DiffType.ADDED: Severity.MEDIUM,
    DiffType.REMOVED: Severity.MEDIUM,
    DiffType.MOVED: Severity.MEDIUM,
    DiffType.MODIFIED: Severity.HIGH,
    DiffType.UNCHANGED: Severity.LOW,
}


# camelCase spellings accepted by DiffOptions.from_dict
_OPTION_ALIASES = {
    "ignoreCase": "ignore_case",
    "ignoreWhitespace": "ignore_whitespace",
    "ignoreArrayOrder": "ignore_array_order",
    "ignoreExtraKeys": "ignore_extra_keys",
    "showUnchanged": "show_unchanged",
    "maxDepth": "max_depth",
}


@dataclass(frozen=True)
class DiffOptions:
    """Configuration of a single comparison."""
    ignore_case: bool = False
    ignore_whitespace: bool = False
    ignore_array_order: bool = False
    ignore_extra_keys: bool = False
    show_unchanged: bool = False
    max_depth: int = 0
    precision: int = 0
    custom_comparator: Optional[Callable[[Value, Value], bool]] = None

    def __post_init__(self):
        for name in ("max_depth", "precision"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise OptionsError(
                    f"{name} must be an integer",
                    {"option": name, "type": type(value).__name__}
                )
            if value < 0:
                raise OptionsError(
                    f"{name} must not be negative",
                    {"option": name, "value": value}
                )
        if self.custom_comparator is not None and not callable(self.custom_comparator):
            raise OptionsError(
                "custom_comparator must be callable",
                {"option": "custom_comparator"}
            )

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "DiffOptions":
        """
        Build options from a plain mapping (e.g. a loaded YAML file).

        Keys may use snake_case or the camelCase spelling of the option.
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise OptionsError(
                "options must be a mapping",
                {"type": type(data).__name__}
            )

        known = {f.name for f in fields(cls)} - {"custom_comparator"}
        kwargs = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise OptionsError(f"Unknown option: {key}", {"option": key})
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return {
            "ignoreCase": self.ignore_case,
            "ignoreWhitespace": self.ignore_whitespace,
            "ignoreArrayOrder": self.ignore_array_order,
            "ignoreExtraKeys": self.ignore_extra_keys,
            "showUnchanged": self.show_unchanged,
            "maxDepth": self.max_depth,
            "precision": self.precision,
            "customComparator": self.custom_comparator is not None,
        }


@dataclass(frozen=True)
class Difference:
    """A single difference found during comparison."""
    path: str
    type: DiffType
    description: str
    left_value: Optional[Value] = None
    right_value: Optional[Value] = None

    @property
    def severity(self) -> Severity:
        return SEVERITY_BY_TYPE[self.type]

    def to_dict(self) -> dict:
        result = {
            "path": self.path,
            "type": self.type.value,
        }
        if self.left_value is not None:
            result["leftValue"] = self.left_value.to_python()
        if self.right_value is not None:
            result["rightValue"] = self.right_value.to_python()
        result["description"] = self.description
        result["severity"] = self.severity.value
        return result


@dataclass(frozen=True)
class DiffSummary:
    """Tallies and scores of a comparison."""
    total_differences: int = 0
    added: int = 0
    removed: int = 0
    modified: int = 0
    moved: int = 0
    unchanged: int = 0
    similarity: float = 100.0
    complexity: int = 0

    def to_dict(self) -> dict:
        return {
            "totalDifferences": self.total_differences,
            "added": self.added,
            "removed": self.removed,
            "modified": self.modified,
            "moved": self.moved,
            "unchanged": self.unchanged,
            "similarity": self.similarity,
            "complexity": self.complexity,
        }


@dataclass(frozen=True)
class DiffMetadata:
    """Size, shape and timing information about both inputs."""
    left_size: int = 0
    right_size: int = 0
    left_depth: int = 0
    right_depth: int = 0
    left_keys: int = 0
    right_keys: int = 0
    processing_time: float = 0.0
    memory_usage: int = 0

    def to_dict(self) -> dict:
        return {
            "leftSize": self.left_size,
            "rightSize": self.right_size,
            "leftDepth": self.left_depth,
            "rightDepth": self.right_depth,
            "leftKeys": self.left_keys,
            "rightKeys": self.right_keys,
            "processingTime": self.processing_time,
            "memoryUsage": self.memory_usage,
        }


@dataclass(frozen=True)
class DiffResult:
    """Complete, immutable outcome of one comparison."""
    id: str
    left_value: Value
    right_value: Value
    left_text: str
    right_text: str
    differences: tuple[Difference, ...]
    summary: DiffSummary
    metadata: DiffMetadata
    timestamp: datetime

    @property
    def is_identical(self) -> bool:
        return self.summary.total_differences == 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat().replace("+00:00", "Z"),
            "leftJSON": self.left_value.to_python(),
            "rightJSON": self.right_value.to_python(),
            "leftText": self.left_text,
            "rightText": self.right_text,
            "differences": [d.to_dict() for d in self.differences],
            "summary": self.summary.to_dict(),
            "metadata": self.metadata.to_dict(),
        }


class IssueType(Enum):
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    PERFORMANCE = "performance"
    LOGIC = "logic"


class IssueSeverity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A problem found while validating an input text."""
    message: str
    type: IssueType
    severity: IssueSeverity
    position: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "message": self.message,
            "type": self.type.value,
            "severity": self.severity.value,
        }
        if self.position:
            result["position"] = self.position
        return result


@dataclass
class InputValidation:
    """Outcome of validating one textual input before comparing it."""
    is_valid: bool = True
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    quality_score: int = 100

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": self.warnings,
            "suggestions": self.suggestions,
            "qualityScore": self.quality_score,
        }


@dataclass
class ErrorResponse:
    """Error response structure."""
    success: bool = False
    error: Optional[dict] = None

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"success": self.success}
        if self.error:
            result["error"] = self.error
        return result
