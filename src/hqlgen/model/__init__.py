"""hqlgen model module - Entity model and query-generation config."""

from hqlgen.model.entities import (
    Entity,
    EntityKind,
    Property,
    PropertyType,
    NUMERIC_TYPES,
    RESERVED_FIELDS,
    load_entities,
)
from hqlgen.model.config import (
    QueryGenerationConfig,
    CrudConfig,
    DiscoveryConfig,
    IntelligenceConfig,
    PathfindingConfig,
    AnalyticsConfig,
    DEFAULT_QUERY_CONFIG,
)

__all__ = [
    "Entity",
    "EntityKind",
    "Property",
    "PropertyType",
    "NUMERIC_TYPES",
    "RESERVED_FIELDS",
    "load_entities",
    "QueryGenerationConfig",
    "CrudConfig",
    "DiscoveryConfig",
    "IntelligenceConfig",
    "PathfindingConfig",
    "AnalyticsConfig",
    "DEFAULT_QUERY_CONFIG",
]
