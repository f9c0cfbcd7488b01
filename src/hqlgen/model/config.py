# -*- encoding: utf-8 -*-
"""
hqlgen Query-Generation Config - Feature toggles for query templates.

Five categories of named booleans, each flag gating one class of
templates. Categories or flags omitted by the caller take their defaults
from DEFAULT_QUERY_CONFIG.

Dict form:
    {
        "crud": {"basic": true, "mutation": true, ...},
        "discovery": {"keyword_search": true, "vector_search": false, ...},
        "intelligence": {"rich_detail": true},
        "pathfinding": {"bfs": false, "dijkstra": false},
        "analytics": {"aggregation": true, "grouping": true}
    }

The key "grouping" is accepted as an alias for the "analytics" category.
"""

from dataclasses import dataclass, field, fields, asdict, replace
from typing import Any, Optional


@dataclass(frozen=True)
class CrudConfig:
    """Data operations."""
    basic: bool = True          # GetById, GetByUnique, GetAll, edge traversal
    mutation: bool = True       # Create, Connect
    upsert: bool = True         # Upsert node / edge
    drop: bool = True           # Delete
    pro_control: bool = True    # Parameterized offset/limit/order GetAll


@dataclass(frozen=True)
class DiscoveryConfig:
    """Search and graph discovery."""
    keyword_search: bool = True         # SearchBM25
    vector_search: bool = False         # SearchV, hybrid rerank
    vector_upsert: bool = False         # AddV, UpsertV
    prefilter: bool = False             # Per-property prefiltered vector search
    multi_hop: bool = True              # Two-hop network exploration
    mutual_connections: bool = False    # Reciprocal edge existence check


@dataclass(frozen=True)
class IntelligenceConfig:
    """Smart views."""
    rich_detail: bool = True    # Object hydration with edge counts


@dataclass(frozen=True)
class PathfindingConfig:
    """Path queries over edges."""
    bfs: bool = False           # ShortestPathBFS
    dijkstra: bool = False      # ShortestPathDijkstras over a numeric weight


@dataclass(frozen=True)
class AnalyticsConfig:
    """Aggregations over node properties."""
    aggregation: bool = True    # Count, Sum, Avg (Min/Max emit nothing)
    grouping: bool = True       # GROUP_BY per categorical property


_CATEGORY_ALIASES = {"grouping": "analytics"}


@dataclass(frozen=True)
class QueryGenerationConfig:
    """The full toggle set, one dataclass per category."""
    crud: CrudConfig = field(default_factory=CrudConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    intelligence: IntelligenceConfig = field(default_factory=IntelligenceConfig)
    pathfinding: PathfindingConfig = field(default_factory=PathfindingConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "QueryGenerationConfig":
        """
        Build a config from a (possibly partial) dict.

        Missing categories take the default category; missing flags within
        a present category take that flag's default. Unknown keys are ignored.
        """
        if not data:
            return cls()

        categories: dict[str, Any] = {}
        for f in fields(cls):
            raw = data.get(f.name)
            if raw is None:
                for alias, target in _CATEGORY_ALIASES.items():
                    if target == f.name and data.get(alias) is not None:
                        raw = data[alias]
            default = f.default_factory()
            if isinstance(raw, dict):
                known = {k.name for k in fields(default)}
                overrides = {k: bool(v) for k, v in raw.items() if k in known}
                categories[f.name] = replace(default, **overrides)
            else:
                categories[f.name] = default
        return cls(**categories)

    @classmethod
    def coerce(cls, config: Any) -> "QueryGenerationConfig":
        """Accept a config, a dict, or None."""
        if isinstance(config, cls):
            return config
        return cls.from_dict(config)

    @classmethod
    def all_enabled(cls) -> "QueryGenerationConfig":
        """Every flag set to True."""
        return cls._uniform(True)

    @classmethod
    def all_disabled(cls) -> "QueryGenerationConfig":
        """Every flag set to False."""
        return cls._uniform(False)

    @classmethod
    def _uniform(cls, value: bool) -> "QueryGenerationConfig":
        categories = {}
        for f in fields(cls):
            default = f.default_factory()
            categories[f.name] = replace(
                default, **{k.name: value for k in fields(default)}
            )
        return cls(**categories)


DEFAULT_QUERY_CONFIG = QueryGenerationConfig()
