"""File-based runner: loads options and inputs from disk and runs the engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml

from .engine import DiffEngine
from .exceptions import OptionsError, ParseError
from .models import DiffOptions, DiffResult, LogLevel

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def configure_logging(level: LogLevel | str = LogLevel.INFO):
    """Configure root logging for command-line use."""
    if not isinstance(level, LogLevel):
        level = LogLevel(str(level).upper())
    logging.basicConfig(
        level=_LOG_LEVELS[level],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def load_options(options_path: str) -> DiffOptions:
    """
    Load diff options from a YAML or JSON file.

    Args:
        options_path: Path to the options file

    Returns:
        DiffOptions built from the file (defaults for an empty file)

    Raises:
        FileNotFoundError: If the file does not exist
        OptionsError: If the file cannot be parsed or holds invalid options
    """
    path = Path(options_path)
    if not path.exists():
        raise FileNotFoundError(f"Options file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    # YAML also handles JSON since JSON is valid YAML
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise OptionsError(f"Failed to parse options file: {e}", {"path": str(path)})

    options = DiffOptions.from_dict(data)
    logger.debug("Loaded options from %s: %s", path, options.to_dict())
    return options


class DiffRunner:
    """
    Compares two JSON files.

    Usage:
        runner = DiffRunner("before.json", "after.json", "options.yaml")
        result = runner.run()

    Or as a one-liner:
        result = DiffRunner.compare_files("before.json", "after.json")
    """

    def __init__(
        self,
        left_path: str,
        right_path: str,
        options_path: Optional[str] = None,
        options: Optional[DiffOptions] = None
    ):
        """
        Initialize the runner.

        Args:
            left_path: Path to the left (baseline) JSON file
            right_path: Path to the right JSON file
            options_path: Optional YAML/JSON options file
            options: Options to use when no options file is given
        """
        self.left_path = Path(left_path)
        self.right_path = Path(right_path)
        self.options_path = options_path
        self._options = options

    @property
    def options(self) -> DiffOptions:
        """Load and cache the options."""
        if self._options is None:
            if self.options_path:
                self._options = load_options(self.options_path)
            else:
                self._options = DiffOptions()
        return self._options

    def _read(self, path: Path, side: str) -> str:
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise ParseError(
                f"Input file is not valid UTF-8: {path}",
                reason=str(e),
                side=side
            ) from e

    def run(self) -> DiffResult:
        """
        Read both files and compare them.

        Raises:
            FileNotFoundError: If an input file is missing
            ParseError: If an input file is not valid JSON
        """
        left_text = self._read(self.left_path, "left")
        right_text = self._read(self.right_path, "right")

        logger.info("Comparing %s with %s", self.left_path, self.right_path)
        result = DiffEngine(self.options).compare(left_text, right_text)
        logger.info(
            "Found %d differences (similarity %.1f%%)",
            result.summary.total_differences, result.summary.similarity
        )
        return result

    @classmethod
    def compare_files(
        cls,
        left_path: str,
        right_path: str,
        options_path: Optional[str] = None
    ) -> DiffResult:
        """Convenience class method to compare two files in one call."""
        return cls(left_path, right_path, options_path).run()
