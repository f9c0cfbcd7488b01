"""HQL syntax module - Grammar constants and completion."""

from hqlgen.syntax.keywords import (
    STRUCTURAL_KEYWORDS,
    TRAVERSALS,
    SCALAR_TYPES,
    MATH_FUNCTIONS,
    NEW_LINE_KEYWORDS,
    ALL_KEYWORDS,
    is_reserved,
    canonical_structural,
    canonical_step,
    canonical_type,
)
from hqlgen.syntax.completion import (
    CompletionItem,
    SchemaSummary,
    complete,
    completion_options,
)

__all__ = [
    "STRUCTURAL_KEYWORDS",
    "TRAVERSALS",
    "SCALAR_TYPES",
    "MATH_FUNCTIONS",
    "NEW_LINE_KEYWORDS",
    "ALL_KEYWORDS",
    "is_reserved",
    "canonical_structural",
    "canonical_step",
    "canonical_type",
    "CompletionItem",
    "SchemaSummary",
    "complete",
    "completion_options",
]
