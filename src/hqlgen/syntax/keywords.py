"""
HQL Grammar Constants - the fixed vocabulary of the query language.

Single source of truth for keywords, traversal steps, scalar types and
math functions. Shared by the generators, the validator, the formatter
and completion.
"""

from typing import Optional

# Top-level structural keywords
STRUCTURAL_KEYWORDS: tuple[str, ...] = (
    "QUERY",
    "MIGRATION",
    "RETURN",
    "UPDATE",
    "DROP",
    "FOR",
    "IN",
    "AS",
    "DEFAULT",
    "UNIQUE",
    "INDEX",
    "EXISTS",
    "NOW",
    "NONE",
)

# Traversal and step helpers
TRAVERSALS: tuple[str, ...] = (
    # Entry points
    "N",
    "E",
    "V",
    # Graph traversals
    "Out",
    "In",
    "OutE",
    "InE",
    "FromN",
    "ToN",
    "FromV",
    "ToV",
    "ShortestPath",
    "ShortestPathDijkstras",
    "ShortestPathBFS",
    "ShortestPathAStar",
    # Vector / search
    "SearchV",
    "SearchBM25",
    "PREFILTER",
    "RerankRRF",
    "RerankMMR",
    "Embed",
    # Creation / mutation
    "AddN",
    "AddE",
    "AddV",
    "BatchAddV",
    "UpsertN",
    "UpsertE",
    "UpsertV",
    # Chain steps
    "WHERE",
    "ORDER",
    "RANGE",
    "COUNT",
    "FIRST",
    "AGGREGATE_BY",
    "GROUP_BY",
    "ID",
    # Logic within steps
    "AND",
    "OR",
    "GT",
    "GTE",
    "LT",
    "LTE",
    "EQ",
    "NEQ",
    "IS_IN",
    "CONTAINS",
    "Asc",
    "Desc",
)

# Built-in scalar types
SCALAR_TYPES: tuple[str, ...] = (
    "String",
    "Boolean",
    "F32",
    "F64",
    "I8",
    "I16",
    "I32",
    "I64",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "ID",
    "Date",
)

# Math and aggregate functions
MATH_FUNCTIONS: tuple[str, ...] = (
    "ADD",
    "SUB",
    "MUL",
    "DIV",
    "POW",
    "MOD",
    "ABS",
    "SQRT",
    "LN",
    "LOG10",
    "LOG",
    "EXP",
    "CEIL",
    "FLOOR",
    "ROUND",
    "SIN",
    "COS",
    "TAN",
    "ASIN",
    "ACOS",
    "ATAN",
    "ATAN2",
    "PI",
    "MIN",
    "MAX",
    "SUM",
    "AVG",
)

# Keywords that typically start a new line when formatting
NEW_LINE_KEYWORDS: tuple[str, ...] = (
    "RETURN",
    "RANGE",
    "ORDER",
    "WHERE",
    "UPDATE",
    "DROP",
    "FOR",
)

# Every keyword, upper-cased, for case-insensitive lookups
ALL_KEYWORDS: frozenset[str] = frozenset(
    k.upper()
    for k in STRUCTURAL_KEYWORDS + TRAVERSALS + SCALAR_TYPES + MATH_FUNCTIONS
)

# Upper-cased name -> canonical spelling
_CANONICAL_TRAVERSALS: dict[str, str] = {t.upper(): t for t in TRAVERSALS}
_CANONICAL_TYPES: dict[str, str] = {t.upper(): t for t in SCALAR_TYPES}
_CANONICAL_MATH: dict[str, str] = {m.upper(): m for m in MATH_FUNCTIONS}


def is_reserved(word: str) -> bool:
    """Return True if word is any HQL keyword, ignoring case."""
    return word.upper() in ALL_KEYWORDS


def canonical_structural(word: str) -> Optional[str]:
    """Canonical spelling of a structural keyword, or None."""
    upper = word.upper()
    return upper if upper in STRUCTURAL_KEYWORDS else None


def canonical_step(word: str) -> Optional[str]:
    """Canonical spelling of a traversal, step or math function, or None."""
    upper = word.upper()
    return _CANONICAL_TRAVERSALS.get(upper) or _CANONICAL_MATH.get(upper)


def canonical_type(word: str) -> Optional[str]:
    """Canonical spelling of a scalar type name, or None."""
    return _CANONICAL_TYPES.get(word.upper())
