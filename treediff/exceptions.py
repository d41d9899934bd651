"""Custom exceptions for the treediff engine."""


class TreeDiffError(Exception):
    """Base exception for treediff errors."""
    pass


class ParseError(TreeDiffError):
    """Raised when an input cannot be turned into a tree value."""
    def __init__(
        self,
        message: str,
        line: int = None,
        column: int = None,
        reason: str = None,
        side: str = None
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.reason = reason
        self.side = side

    def to_dict(self) -> dict:
        return {
            "side": self.side,
            "line": self.line,
            "column": self.column,
            "reason": self.reason,
        }


class OptionsError(TreeDiffError):
    """Raised when diff options are invalid."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FormatError(TreeDiffError):
    """Raised when an unknown export format is requested."""
    def __init__(self, fmt: str):
        super().__init__(f"Unknown export format: {fmt}")
        self.format = fmt
