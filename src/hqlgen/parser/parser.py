"""
Schema Parser - Lark-based importer for HQL schema definitions.

Turns schema source text (as written by generate_schema) back into an
entity model so an existing schema can be loaded into the editor.
"""

import logging
import re
from typing import Optional

from lark import Lark, Transformer
from lark.exceptions import LarkError, UnexpectedInput, VisitError

from hqlgen.builder.fragments import UNDEFINED
from hqlgen.codegen.schema import EMPTY_SCHEMA
from hqlgen.exceptions import HQLGenError, ModelError, SchemaParseError
from hqlgen.model.entities import Entity, EntityKind, Property, PropertyType
from hqlgen.parser.grammar import get_grammar


logger = logging.getLogger(__name__)

_ESCAPE = re.compile(r"\\(.)")


class SchemaTransformer(Transformer):
    """
    Lark Transformer that converts a schema parse tree to entities.

    Entities are numbered in definition order; ids are assigned by the
    parser once the whole file is read.
    """

    # --- Types ---

    def scalar_type(self, items):
        return (self._resolve_type(items[0]), False)

    def array_type(self, items):
        return (self._resolve_type(items[0]), True)

    def _resolve_type(self, token) -> PropertyType:
        try:
            return PropertyType.parse(str(token))
        except ModelError as e:
            raise SchemaParseError(
                str(e),
                line=getattr(token, "line", None),
                column=getattr(token, "column", None),
            ) from None

    # --- Literals (kept as literal text) ---

    def string_literal(self, items):
        return _ESCAPE.sub(r"\1", str(items[0])[1:-1])

    def number_literal(self, items):
        return str(items[0])

    def word_literal(self, items):
        return str(items[0])

    def array_literal(self, items):
        values = [str(v) for v in items if v is not None]
        return "[" + ", ".join(values) + "]"

    def default_clause(self, items):
        return items[0]

    # --- Fields ---

    def unique_index(self, _):
        return "unique"

    def plain_index(self, _):
        return "index"

    def field(self, items):
        modifier, name, type_ref, default = items
        prop_type, is_array = type_ref
        return Property(
            name=str(name),
            type=prop_type,
            is_unique=modifier == "unique",
            is_index=modifier == "index",
            is_array=is_array,
            default_value=default,
        )

    def field_list(self, items):
        return [item for item in items if isinstance(item, Property)]

    # --- Edge clauses ---

    def from_clause(self, items):
        return ("from", _end_name(items[0]))

    def to_clause(self, items):
        return ("to", _end_name(items[0]))

    def properties_clause(self, items):
        return ("properties", items[0] or [])

    def edge_body(self, items):
        return dict(item for item in items if isinstance(item, tuple))

    # --- Definitions ---

    def node_def(self, items):
        name, fields = items
        return (EntityKind.NODE, str(name), fields or [], {})

    def vector_def(self, items):
        name, fields = items
        return (EntityKind.VECTOR, str(name), fields or [], {})

    def edge_def(self, items):
        name, unique, body = items
        body = body or {}
        return (EntityKind.EDGE, str(name), body.get("properties", []), {
            "from_entity": body.get("from"),
            "to_entity": body.get("to"),
            "is_unique_relation": unique is not None,
        })

    def start(self, items):
        entities = []
        for position, (kind, name, fields, extra) in enumerate(items):
            entities.append(Entity(
                id=f"{kind.value.lower()}-{position}",
                name=name,
                kind=kind,
                properties=fields,
                **extra,
            ))
        return entities


def _end_name(token) -> Optional[str]:
    name = str(token)
    return None if name == UNDEFINED else name


class SchemaParser:
    """
    HQL schema parser using Lark.

    Each parser builds its own Lark instance; reuse a parser when loading
    several schemas.

    Example:
        parser = SchemaParser()
        entities = parser.parse(schema_text)
    """

    def __init__(self):
        self._parser = Lark(
            get_grammar(),
            parser='lalr',
            transformer=SchemaTransformer(),
        )

    def parse(self, text: str) -> list[Entity]:
        """
        Parse schema source text into entities.

        Args:
            text: Schema source; empty text or "{}" yields no entities

        Returns:
            Entities in definition order

        Raises:
            SchemaParseError: On syntax errors or unknown property types
        """
        if not text or not text.strip() or text.strip() == EMPTY_SCHEMA:
            return []

        try:
            entities = self._parser.parse(text)
        except VisitError as e:
            if isinstance(e.orig_exc, HQLGenError):
                raise e.orig_exc from None
            raise SchemaParseError(str(e.orig_exc)) from e
        except UnexpectedInput as e:
            raise SchemaParseError(
                f"Invalid schema syntax at line {e.line}, column {e.column}",
                line=e.line,
                column=e.column,
            ) from e
        except LarkError as e:
            raise SchemaParseError(str(e)) from e

        logger.debug("Parsed %d schema definitions", len(entities))
        return entities


def parse_schema(text: str) -> list[Entity]:
    """
    Convenience function to parse HQL schema text.

    Args:
        text: Schema source

    Returns:
        Entities in definition order
    """
    return SchemaParser().parse(text)
