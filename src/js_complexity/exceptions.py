"""Exception hierarchy for the complexity measurement pipeline."""

from typing import Optional


class ComplexityError(Exception):
    """Base exception for complexity measurement failures."""


class ParseError(ComplexityError):
    """Raised when source text cannot be decomposed into function units.

    Carries the 1-based location of the first syntax error when the parser
    can determine it.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            location = f"line {line}" if column is None else f"line {line}, column {column}"
            message = f"{message} ({location})"
        super().__init__(message)


class ConfigError(ComplexityError):
    """Raised for a malformed or missing rule parameter on an active rule."""
