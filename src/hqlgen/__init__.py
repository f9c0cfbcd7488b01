"""
hqlgen - HQL code generation for visual graph models

Turns a node/edge/vector entity model into HelixDB HQL: a schema file and
a categorized library of ready-to-use queries. Also validates models,
re-formats hand-written HQL, offers editor completions and imports
existing schema files.

Core Principles:
- Deterministic - identical model and config yield byte-identical output
- Diagnostics, not exceptions - model defects never stop generation

Components:
- HQLCodeGen: Main interface used by the editor
- hqlgen.codegen: Schema and query generation
- hqlgen.validator: Model diagnostics
- hqlgen.formatter: HQL re-formatting
- hqlgen.parser: Schema importer

Usage:
    from hqlgen import HQLCodeGen

    codegen = HQLCodeGen()
    result = codegen.generate(entities)

    print(result.schema)
    print(result.queries)
"""

from hqlgen.api.codegen import GenerationResult, HQLCodeGen
from hqlgen.codegen import generate_queries, generate_schema
from hqlgen.exceptions import HQLGenError, ModelError, SchemaParseError
from hqlgen.formatter import format_hql
from hqlgen.model import (
    Entity,
    EntityKind,
    Property,
    PropertyType,
    QueryGenerationConfig,
)
from hqlgen.parser import parse_schema
from hqlgen.validator import Diagnostic, Severity, validate

__all__ = [
    # Main API
    "HQLCodeGen",
    "GenerationResult",
    # Operations
    "generate_schema",
    "generate_queries",
    "validate",
    "format_hql",
    "parse_schema",
    # Model
    "Entity",
    "EntityKind",
    "Property",
    "PropertyType",
    "QueryGenerationConfig",
    "Diagnostic",
    "Severity",
    # Errors
    "HQLGenError",
    "ModelError",
    "SchemaParseError",
]

__version__ = "0.1.0"
