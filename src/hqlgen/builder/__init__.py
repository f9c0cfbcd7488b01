"""hqlgen builder module - Composable HQL fragments and naming."""

from hqlgen.builder.fragments import (
    INDENT,
    UNDEFINED,
    Step,
    Expression,
    Projection,
    Source,
    Assignment,
    Drop,
    Query,
    EntityBlock,
    Fragment,
    render,
    render_literal,
)
from hqlgen.builder.naming import to_pascal_case

__all__ = [
    "INDENT",
    "UNDEFINED",
    "Step",
    "Expression",
    "Projection",
    "Source",
    "Assignment",
    "Drop",
    "Query",
    "EntityBlock",
    "Fragment",
    "render",
    "render_literal",
    "to_pascal_case",
]
