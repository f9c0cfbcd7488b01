"""
hqlgen - High-level interface for the visual schema editor.

Bundles the generator, validator, formatter, completion and schema
importer behind one object. Entities may be passed either as Entity
objects or as the editor's camelCase dicts.

Usage:
    from hqlgen import HQLCodeGen

    codegen = HQLCodeGen(config={"pathfinding": {"bfs": True}})
    result = codegen.generate(entities)

    if result.has_errors:
        for diagnostic in result.diagnostics:
            print(diagnostic.message)

    print(result.schema)
    print(result.queries)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from hqlgen.codegen.queries import QueryGenerator
from hqlgen.codegen.schema import generate_schema
from hqlgen.formatter.formatter import format_hql
from hqlgen.model.config import QueryGenerationConfig
from hqlgen.model.entities import Entity, load_entities
from hqlgen.parser.parser import SchemaParser
from hqlgen.syntax.completion import CompletionItem, SchemaSummary, complete
from hqlgen.validator.checker import Diagnostic, ModelValidator


logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Schema text, query text and diagnostics for one model snapshot."""
    schema: str
    queries: str
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)

    def to_dict(self) -> dict:
        return {
            "schema": self.schema,
            "queries": self.queries,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "hasErrors": self.has_errors,
        }


def _as_entities(entities: Optional[Iterable[Any]]) -> list[Entity]:
    items = list(entities or [])
    if all(isinstance(e, Entity) or e is None for e in items):
        return [e for e in items if e is not None]
    return load_entities(items)


class HQLCodeGen:
    """
    Code generation interface for an entity model.

    Every operation is a pure function of its arguments and the config
    given at construction; the instance holds no model state.
    """

    def __init__(self, config: Any = None):
        """
        Args:
            config: QueryGenerationConfig, a (partial) config dict, or None
                for the defaults
        """
        self._config = QueryGenerationConfig.coerce(config)
        self._validator = ModelValidator()
        self._parser = SchemaParser()

    @property
    def config(self) -> QueryGenerationConfig:
        return self._config

    def generate_schema(self, entities) -> str:
        """Render the schema; "{}" for an empty model."""
        return generate_schema(_as_entities(entities))

    def generate_queries(self, entities, config: Any = None) -> str:
        """
        Render the query library.

        Args:
            entities: Entity objects or dicts
            config: Overrides the instance config for this call
        """
        chosen = self._config if config is None else QueryGenerationConfig.coerce(config)
        return QueryGenerator(chosen).generate(_as_entities(entities))

    def validate(self, entities) -> list[Diagnostic]:
        """Validate the model. Independent of the config."""
        return self._validator.validate(_as_entities(entities))

    def generate(self, entities) -> GenerationResult:
        """Validate the model and render both schema and queries."""
        model = _as_entities(entities)
        diagnostics = self._validator.validate(model)
        result = GenerationResult(
            schema=generate_schema(model),
            queries=QueryGenerator(self._config).generate(model),
            diagnostics=diagnostics,
        )
        logger.info(
            "Generated code for %d entities (%d diagnostics)",
            len(model), len(diagnostics),
        )
        return result

    def format(self, code: str) -> str:
        """Re-format HQL text."""
        return format_hql(code)

    def complete(
        self,
        code: str,
        cursor: int,
        entities=None,
    ) -> list[CompletionItem]:
        """
        Completion candidates at the cursor.

        Args:
            code: Editor text
            cursor: Cursor offset
            entities: Optional model whose names are offered
        """
        schema = SchemaSummary.from_entities(_as_entities(entities)) if entities else None
        return complete(code, cursor, schema)

    def load_schema(self, text: str) -> list[Entity]:
        """
        Import schema text as an entity model.

        Raises:
            SchemaParseError: If the text is not a valid schema
        """
        return self._parser.parse(text)
