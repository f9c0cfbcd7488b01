"""
Tests for the HQLCodeGen interface.

Tests the bundled operations over editor-style model dicts.
"""

import pytest

from hqlgen import GenerationResult, HQLCodeGen, SchemaParseError, __version__


@pytest.fixture
def model():
    return [
        {
            "id": "n1",
            "name": "User",
            "kind": "Node",
            "properties": [{"name": "email", "type": "String", "isUnique": True}],
        },
        {
            "id": "e1",
            "name": "Follows",
            "kind": "Edge",
            "from": "User",
            "to": "User",
            "properties": [],
        },
    ]


@pytest.fixture
def codegen():
    return HQLCodeGen()


class TestHQLCodeGen:
    """Tests for HQLCodeGen."""

    def test_generate(self, codegen, model):
        result = codegen.generate(model)

        assert isinstance(result, GenerationResult)
        assert result.schema.startswith("N::User {\n    UNIQUE INDEX email: String\n}")
        assert "QUERY CreateUser(email: String) =>" in result.queries
        assert "QUERY GetUserByEmail(val: String) =>" in result.queries
        assert "QUERY ExploreFollowsNetwork(start_id: ID, limit: I32) =>" in result.queries
        assert result.diagnostics == []
        assert not result.has_errors

    def test_generate_reports_errors(self, codegen):
        result = codegen.generate([{"id": "q", "name": "query", "kind": "Node"}])
        assert result.has_errors
        assert any("Reserved keyword" in d.message for d in result.diagnostics)
        assert result.to_dict()["hasErrors"] is True

    def test_empty_model(self, codegen):
        result = codegen.generate([])
        assert result.schema == "{}"
        assert result.queries == ""

    def test_generate_queries_override(self, codegen, model):
        text = codegen.generate_queries(model, config={"pathfinding": {"bfs": True}})
        assert "QUERY ShortestPathFollows(start: ID, end: ID) =>" in text
        assert "ShortestPathFollows" not in codegen.generate_queries(model)

    def test_instance_config(self, model):
        codegen = HQLCodeGen(config={"crud": {"mutation": False}})
        assert "CreateUser" not in codegen.generate(model).queries

    def test_validation_ignores_config(self, model):
        invalid = model + [{"id": "x", "name": "query", "kind": "Node"}]
        default = HQLCodeGen().validate(invalid)
        everything = HQLCodeGen(config={"pathfinding": {"bfs": True, "dijkstra": True}}).validate(invalid)
        assert default == everything

    def test_format(self, codegen):
        assert codegen.format("query A() => x <- n<User> return x") == (
            "QUERY A() =>\n    x <- N<User>\n    RETURN x"
        )

    def test_complete_with_model(self, codegen, model):
        items = codegen.complete("x <- N(", 7, model)
        assert [i.label for i in items] == ["User", "Follows"]

    def test_load_schema(self, codegen, model):
        schema = codegen.generate_schema(model)
        loaded = codegen.load_schema(schema)
        assert [e.name for e in loaded] == ["User", "Follows"]
        assert codegen.generate_schema(loaded) == schema

    def test_load_schema_error(self, codegen):
        with pytest.raises(SchemaParseError):
            codegen.load_schema("N::User")

    def test_version(self):
        assert __version__ == "0.1.0"
