"""hqlgen parser module - Schema grammar and Lark importer."""

from hqlgen.parser.parser import SchemaParser, SchemaTransformer, parse_schema

__all__ = [
    "SchemaParser",
    "SchemaTransformer",
    "parse_schema",
]
