"""
Tests for the entity model and query-generation config.

Tests dict conversion, type parsing and config merging.
"""

import pytest

from hqlgen.exceptions import ModelError
from hqlgen.model import (
    DEFAULT_QUERY_CONFIG,
    Entity,
    EntityKind,
    Property,
    PropertyType,
    QueryGenerationConfig,
    load_entities,
)


class TestPropertyType:
    """Tests for PropertyType."""

    def test_parse(self):
        assert PropertyType.parse("I64") == PropertyType.I64

    def test_timestamp_alias(self):
        assert PropertyType.parse("Timestamp") == PropertyType.DATE

    def test_unknown(self):
        with pytest.raises(ModelError):
            PropertyType.parse("Float")

    @pytest.mark.parametrize("type_", [PropertyType.F32, PropertyType.U8, PropertyType.I64, PropertyType.U128])
    def test_numeric(self, type_):
        assert type_.is_numeric

    @pytest.mark.parametrize("type_", [PropertyType.STRING, PropertyType.BOOLEAN, PropertyType.ID, PropertyType.DATE])
    def test_not_numeric(self, type_):
        assert not type_.is_numeric


class TestEntityDicts:
    """Tests for the editor dict form."""

    def test_property_from_dict(self):
        prop = Property.from_dict({"name": "tags", "type": "String", "isArray": True, "defaultValue": True})
        assert prop.is_array
        assert prop.type_name == "[String]"
        assert prop.default_value == "true"

    def test_property_defaults_to_string(self):
        assert Property.from_dict({"name": "x"}).type == PropertyType.STRING

    def test_entity_from_dict(self):
        data = {
            "id": "e1",
            "name": "Follows",
            "kind": "Edge",
            "from": "User",
            "to": "User",
            "isUniqueRelation": True,
            "properties": [{"name": "since", "type": "Timestamp"}, None],
            "metadata": {"x": 10, "y": 20},
        }
        edge = Entity.from_dict(data)
        assert edge.kind == EntityKind.EDGE
        assert edge.from_entity == "User"
        assert edge.is_unique_relation
        assert edge.properties == (Property(name="since", type=PropertyType.DATE),)
        assert edge.is_connected

    def test_entity_to_dict(self):
        doc = Entity(
            id="v1", name="Doc", kind=EntityKind.VECTOR, vector_dim=3,
            properties=[Property(name="category", is_index=True)],
        )
        assert doc.to_dict() == {
            "id": "v1",
            "name": "Doc",
            "kind": "Vector",
            "properties": [{"name": "category", "type": "String", "isIndex": True}],
            "vectorDim": 3,
        }
        assert Entity.from_dict(doc.to_dict()) == doc

    def test_unknown_kind(self):
        with pytest.raises(ModelError):
            Entity.from_dict({"id": "x", "name": "X", "kind": "Table"})

    def test_load_entities_skips_none(self):
        entities = load_entities([{"id": "1", "name": "User", "kind": "Node"}, None])
        assert [e.name for e in entities] == ["User"]

    def test_properties_coerced_to_tuple(self):
        entity = Entity(id="1", name="User", kind=EntityKind.NODE, properties=[Property(name="a")])
        assert isinstance(entity.properties, tuple)

    def test_reserved_fields_by_kind(self):
        assert "to_node" in Entity(id="1", name="E", kind=EntityKind.EDGE).reserved_fields
        assert "score" in Entity(id="1", name="V", kind=EntityKind.VECTOR).reserved_fields
        assert "data" not in Entity(id="1", name="N", kind=EntityKind.NODE).reserved_fields


class TestQueryGenerationConfig:
    """Tests for QueryGenerationConfig."""

    def test_defaults(self):
        config = DEFAULT_QUERY_CONFIG
        assert config.crud.basic and config.crud.pro_control
        assert config.discovery.keyword_search
        assert not config.discovery.vector_search
        assert not config.discovery.vector_upsert
        assert not config.discovery.prefilter
        assert config.discovery.multi_hop
        assert not config.discovery.mutual_connections
        assert config.intelligence.rich_detail
        assert not config.pathfinding.bfs
        assert not config.pathfinding.dijkstra
        assert config.analytics.aggregation and config.analytics.grouping

    def test_partial_category_keeps_other_flags(self):
        config = QueryGenerationConfig.from_dict({"discovery": {"vector_search": True}})
        assert config.discovery.vector_search
        assert config.discovery.keyword_search
        assert config.crud == DEFAULT_QUERY_CONFIG.crud

    def test_grouping_alias(self):
        config = QueryGenerationConfig.from_dict({"grouping": {"grouping": False}})
        assert not config.analytics.grouping
        assert config.analytics.aggregation

    def test_unknown_keys_ignored(self):
        config = QueryGenerationConfig.from_dict({"crud": {"teleport": True}, "extra": {}})
        assert config == QueryGenerationConfig()

    def test_coerce(self):
        config = QueryGenerationConfig.all_enabled()
        assert QueryGenerationConfig.coerce(config) is config
        assert QueryGenerationConfig.coerce(None) == QueryGenerationConfig()

    def test_round_trip(self):
        config = QueryGenerationConfig.all_disabled()
        assert QueryGenerationConfig.from_dict(config.to_dict()) == config

    def test_uniform_configs(self):
        enabled = QueryGenerationConfig.all_enabled().to_dict()
        disabled = QueryGenerationConfig.all_disabled().to_dict()
        assert all(all(flags.values()) for flags in enabled.values())
        assert not any(any(flags.values()) for flags in disabled.values())
