"""hqlgen API module - High-level interface for the schema editor."""

from hqlgen.api.codegen import GenerationResult, HQLCodeGen

__all__ = [
    "GenerationResult",
    "HQLCodeGen",
]
