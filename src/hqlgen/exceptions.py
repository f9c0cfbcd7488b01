# -*- encoding: utf-8 -*-
"""
hqlgen Exceptions.

Generation, validation and formatting never raise for well-typed input:
model defects are reported as diagnostics instead. These exceptions only
guard the input edges where raw data becomes an entity model.
"""

from typing import Optional


class HQLGenError(Exception):
    """Base exception for all hqlgen errors."""
    pass


class ModelError(HQLGenError):
    """Raised when raw data cannot be converted into an entity model."""
    pass


class SchemaParseError(HQLGenError):
    """
    Raised when schema source text cannot be parsed.

    Attributes:
        line: 1-based line of the offending token, when known
        column: 1-based column of the offending token, when known
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.line = line
        self.column = column

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "error": "SchemaParseError",
            "message": str(self),
            "line": self.line,
            "column": self.column,
        }
