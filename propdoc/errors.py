from typing import List, Optional

from propdoc.base.models import ExtractError


class ExtractionError(Exception):
    """Raised by the driver when ``error_handling`` is ``throw``."""

    def __init__(self, message: str, errors: Optional[List[ExtractError]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class SourceParseError(ValueError):
    """The parser could not produce a clean tree for a source file."""

    def __init__(self, file_path: str, line: Optional[int] = None, column: Optional[int] = None):
        location = f" at line {line}, column {column}" if line is not None else ""
        super().__init__(f"Failed to parse {file_path}{location}")
        self.file_path = file_path
        self.line = line
        self.column = column


class ConfigError(ValueError):
    """Invalid or unreadable configuration."""
