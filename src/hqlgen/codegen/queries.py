# -*- encoding: utf-8 -*-
"""
Query Generator - Categorized query library for an entity model.

For every entity, templates are selected by entity kind and by the
feature toggles of a QueryGenerationConfig, then grouped into five
buckets rendered in a fixed order:

    // --- DATA OPERATIONS (CRUD) ---
    // --- SEARCH & DISCOVERY ---
    // --- PATHFINDING & TRAVERSAL ---
    // --- SMART VIEWS & INSIGHTS ---
    // --- CONTEXTUAL ANALYTICS ---

Empty buckets are omitted. Queries within a bucket, buckets within an
entity, and entities are each separated by one blank line.

Generation is a pure function of (entities, config): identical input
yields byte-identical output.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from hqlgen.builder.fragments import Query, render
from hqlgen.codegen import templates
from hqlgen.model.config import QueryGenerationConfig
from hqlgen.model.entities import Entity, EntityKind, PropertyType


logger = logging.getLogger(__name__)


class Section(Enum):
    """Query buckets, in output order."""
    CRUD = "DATA OPERATIONS (CRUD)"
    DISCOVERY = "SEARCH & DISCOVERY"
    PATHFINDING = "PATHFINDING & TRAVERSAL"
    INTELLIGENCE = "SMART VIEWS & INSIGHTS"
    ANALYTICS = "CONTEXTUAL ANALYTICS"

    @property
    def header(self) -> str:
        return f"// --- {self.value} ---"


@dataclass
class EntityQueries:
    """The generated queries of one entity, bucketed by section."""
    entity: Entity
    sections: dict[Section, list[Query]] = field(
        default_factory=lambda: {s: [] for s in Section}
    )

    def add(self, section: Section, query: Optional[Query]) -> None:
        # Templates return None when they do not apply
        if query is not None:
            self.sections[section].append(query)

    @property
    def queries(self) -> list[Query]:
        """All queries in output order."""
        return [q for s in Section for q in self.sections[s]]

    def render(self) -> str:
        blocks = []
        for section in Section:
            rendered = [render(q) for q in self.sections[section]]
            body = "\n\n".join(r for r in rendered if r.strip()).strip()
            if body:
                blocks.append(f"{section.header}\n{body}")
        return "\n\n".join(blocks)


class QueryGenerator:
    """
    Builds the query library for an entity model.

    Usage:
        generator = QueryGenerator(config)
        text = generator.generate(entities)

        # Or inspect the fragments before rendering
        for group in generator.build(entities):
            print(group.entity.name, [q.name for q in group.queries])
    """

    def __init__(self, config: Any = None):
        """
        Args:
            config: QueryGenerationConfig, a (partial) config dict, or None
                for the defaults
        """
        self._config = QueryGenerationConfig.coerce(config)

    @property
    def config(self) -> QueryGenerationConfig:
        return self._config

    def build(self, entities: list[Entity]) -> list[EntityQueries]:
        """Select and build the queries of every entity, in model order."""
        groups = []
        for entity in entities or []:
            if entity is None:
                continue
            groups.append(self.build_entity(entity, entities))
        return groups

    def generate(self, entities: list[Entity]) -> str:
        """Render the full query library as HQL text."""
        blocks = [group.render() for group in self.build(entities)]
        return "\n\n".join(b for b in blocks if b).strip()

    def build_entity(self, entity: Entity, entities: list[Entity]) -> EntityQueries:
        """Build the bucketed queries for a single entity."""
        group = EntityQueries(entity=entity)

        if entity.kind == EntityKind.NODE:
            self._node_crud(group)
            if self._config.intelligence.rich_detail:
                group.add(Section.INTELLIGENCE, templates.build_rich_detail(entity, entities))

        if entity.is_connected:
            self._edge_crud(group)
            self._edge_discovery(group)

        if entity.kind in (EntityKind.NODE, EntityKind.VECTOR):
            self._search(group)

        if entity.kind == EntityKind.EDGE:
            self._pathfinding(group)

        if entity.kind == EntityKind.NODE:
            self._analytics(group)

        logger.debug(
            "Generated %d queries for %s '%s'",
            len(group.queries), entity.kind.value, entity.name,
        )
        return group

    def _node_crud(self, group: EntityQueries) -> None:
        crud = self._config.crud
        node = group.entity
        if crud.mutation:
            group.add(Section.CRUD, templates.build_create_node(node))
        if crud.upsert:
            group.add(Section.CRUD, templates.build_upsert_node(node))
        if crud.basic:
            group.add(Section.CRUD, templates.build_get_node_by_id(node))
            for prop in node.named_properties:
                if prop.is_unique:
                    group.add(Section.CRUD, templates.build_get_node_by_unique(node, prop))
            group.add(Section.CRUD, templates.build_get_all_nodes(node, crud.pro_control))
        if crud.drop:
            group.add(Section.CRUD, templates.build_delete_node(node))

    def _edge_crud(self, group: EntityQueries) -> None:
        crud = self._config.crud
        edge = group.entity
        if crud.mutation:
            group.add(Section.CRUD, templates.build_connect(edge))
        if crud.upsert:
            group.add(Section.CRUD, templates.build_upsert_edge(edge))
        if crud.basic:
            group.add(Section.CRUD, templates.build_traversal(edge))

    def _edge_discovery(self, group: EntityQueries) -> None:
        discovery = self._config.discovery
        if discovery.multi_hop:
            group.add(Section.DISCOVERY, templates.build_two_hop(group.entity))
        if discovery.mutual_connections:
            group.add(Section.DISCOVERY, templates.build_mutual_connections(group.entity))

    def _search(self, group: EntityQueries) -> None:
        discovery = self._config.discovery
        entity = group.entity

        if entity.kind == EntityKind.VECTOR and discovery.vector_search:
            group.add(Section.DISCOVERY, templates.build_vector_search(entity))
            group.add(Section.DISCOVERY, templates.build_hybrid_search(entity))
            if discovery.prefilter:
                for prop in templates.prefilter_properties(entity):
                    group.add(Section.DISCOVERY, templates.build_vector_search(entity, prop))
                    group.add(Section.DISCOVERY, templates.build_hybrid_search(entity, prop))

        if entity.kind == EntityKind.VECTOR and discovery.vector_upsert:
            group.add(Section.DISCOVERY, templates.build_add_vector(entity))
            group.add(Section.DISCOVERY, templates.build_upsert_vector(entity))

        if discovery.keyword_search and any(
            p.type == PropertyType.STRING for p in entity.named_properties
        ):
            group.add(Section.DISCOVERY, templates.build_keyword_search(entity))

    def _pathfinding(self, group: EntityQueries) -> None:
        pathfinding = self._config.pathfinding
        edge = group.entity
        if pathfinding.bfs:
            group.add(Section.PATHFINDING, templates.build_shortest_path(edge))
        if pathfinding.dijkstra:
            weight = templates.weight_property(edge)
            if weight is not None:
                group.add(Section.PATHFINDING, templates.build_weighted_path(edge, weight))

    def _analytics(self, group: EntityQueries) -> None:
        analytics = self._config.analytics
        node = group.entity
        if analytics.aggregation:
            group.add(Section.ANALYTICS, templates.build_count(node))
            for prop in node.named_properties:
                if prop.is_array or not prop.type.is_numeric:
                    continue
                for op in templates.AGGREGATE_OPS:
                    group.add(Section.ANALYTICS, templates.build_math_aggregate(node, prop, op))
        if analytics.grouping:
            for prop in node.named_properties:
                if prop.is_array:
                    continue
                if prop.type in (PropertyType.STRING, PropertyType.BOOLEAN):
                    group.add(Section.ANALYTICS, templates.build_group_by(node, prop))


def generate_queries(entities: list[Entity], config: Any = None) -> str:
    """
    Generate the categorized query library for an entity model.

    Args:
        entities: The model snapshot
        config: QueryGenerationConfig, a (partial) dict, or None for defaults

    Returns:
        HQL query source text; empty for an empty model
    """
    return QueryGenerator(config).generate(entities)
