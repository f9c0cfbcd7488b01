"""hqlgen validator module - Model diagnostics."""

from hqlgen.validator.checker import (
    Diagnostic,
    ModelValidator,
    Severity,
    validate,
)

__all__ = [
    "Diagnostic",
    "ModelValidator",
    "Severity",
    "validate",
]
