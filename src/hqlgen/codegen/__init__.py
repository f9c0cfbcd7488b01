"""hqlgen codegen module - Schema and query library generation."""

from hqlgen.codegen.schema import EMPTY_SCHEMA, generate_schema
from hqlgen.codegen.queries import (
    EntityQueries,
    QueryGenerator,
    Section,
    generate_queries,
)

__all__ = [
    "EMPTY_SCHEMA",
    "generate_schema",
    "EntityQueries",
    "QueryGenerator",
    "Section",
    "generate_queries",
]
