"""Pre-comparison validation of textual inputs."""

from __future__ import annotations

from .exceptions import ParseError
from .metrics import depth, complexity
from .models import InputValidation, ValidationIssue, IssueType, IssueSeverity
from .values import parse_text

MAX_COMFORTABLE_SIZE = 1_000_000
MAX_COMFORTABLE_DEPTH = 20
MAX_COMFORTABLE_COMPLEXITY = 10_000


def validate_input(text: str) -> InputValidation:
    """
    Check that a text parses and flag inputs that will be slow to compare.

    Args:
        text: The JSON text to validate

    Returns:
        InputValidation with errors, warnings, suggestions and a 0-100 score
    """
    validation = InputValidation()

    if not text or not text.strip():
        validation.is_valid = False
        validation.errors.append(ValidationIssue(
            message="JSON input cannot be empty",
            type=IssueType.SYNTAX,
            severity=IssueSeverity.ERROR
        ))
        validation.quality_score = 0
        return validation

    try:
        value = parse_text(text)
    except ParseError as e:
        validation.is_valid = False
        position = f"line {e.line}, column {e.column}" if e.line is not None else None
        validation.errors.append(ValidationIssue(
            message=e.reason or e.message,
            type=IssueType.SYNTAX,
            severity=IssueSeverity.ERROR,
            position=position
        ))
        validation.quality_score -= 50
    else:
        if len(text) > MAX_COMFORTABLE_SIZE:
            validation.warnings.append("Large JSON file may impact performance")
            validation.suggestions.append("Consider breaking down large JSON files")
            validation.quality_score -= 10

        if depth(value) > MAX_COMFORTABLE_DEPTH:
            validation.warnings.append("Very deep JSON structure detected")
            validation.suggestions.append("Deep nesting may impact comparison performance")
            validation.quality_score -= 15

        if complexity(value) > MAX_COMFORTABLE_COMPLEXITY:
            validation.warnings.append("High complexity JSON structure")
            validation.suggestions.append("Complex structures may take longer to compare")
            validation.quality_score -= 10

    validation.suggestions.append(_quality_suggestion(validation.quality_score))
    return validation


def _quality_suggestion(score: int) -> str:
    if score >= 90:
        return "Excellent JSON structure"
    if score >= 70:
        return "Good JSON structure with minor issues"
    if score >= 50:
        return "JSON structure needs improvement"
    return "JSON structure has significant issues"
