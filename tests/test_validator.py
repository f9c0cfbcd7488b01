"""
Tests for the model validator.

Tests naming rules, relation checks and property checks.
"""

import pytest

from hqlgen.model import Entity, EntityKind, Property, PropertyType, QueryGenerationConfig
from hqlgen.validator import Diagnostic, ModelValidator, Severity, validate


def node(name, *props, id=None):
    return Entity(id=id or f"id-{name}", name=name, kind=EntityKind.NODE, properties=props)


def edge(name, source, target, *props):
    return Entity(
        id=f"id-{name}", name=name, kind=EntityKind.EDGE,
        from_entity=source, to_entity=target, properties=props,
    )


def messages(diagnostics):
    return [d.message for d in diagnostics]


class TestEntityNames:
    """Tests for entity name checks."""

    @pytest.fixture
    def validator(self):
        return ModelValidator()

    def test_clean_model(self, validator):
        model = [node("User", Property(name="email", is_unique=True)), edge("Follows", "User", "User")]
        assert validator.validate(model) == []

    def test_missing_name(self, validator):
        result = validator.validate([node("  ")])
        assert messages(result) == ["Entity name is required"]
        assert result[0].is_error

    def test_lowercase_name(self, validator):
        result = validator.validate([node("user")])
        assert len(result) == 1
        assert result[0].message.startswith("Standard: Entity names must start with an Uppercase letter")
        assert result[0].fix_suggestion == "User"

    def test_invalid_characters(self, validator):
        result = validator.validate([node("User Profile")])
        assert result[0].fix_suggestion == "UserProfile"

    def test_reserved_keyword(self, validator):
        """Test a reserved keyword is reported regardless of case."""
        result = validator.validate([node("query")])
        reserved = [d for d in result if "Reserved keyword" in d.message]
        assert len(reserved) == 1
        assert reserved[0].level == Severity.ERROR
        assert reserved[0].entity_id == "id-query"

    def test_reserved_keyword_proper_case(self, validator):
        result = validator.validate([node("Count")])
        assert messages(result) == ["Reserved keyword: 'Count' cannot be used as an entity name"]

    def test_duplicate_names_are_case_insensitive(self, validator):
        result = validator.validate([node("User", id="a"), node("USER", id="b")])
        duplicates = [d for d in result if d.message.startswith("Duplicate name")]
        assert len(duplicates) == 1
        assert duplicates[0].entity_id == "b"


class TestRelations:
    """Tests for edge end checks."""

    def test_unknown_ends(self):
        result = validate([node("User"), edge("Likes", "Person", "Post")])
        assert messages(result) == ["Unknown source: 'Person'", "Unknown target: 'Post'"]

    def test_end_lookup_is_case_sensitive(self):
        result = validate([node("User"), edge("Likes", "user", "User")])
        assert messages(result) == ["Unknown source: 'user'"]

    def test_missing_end_is_info(self):
        result = validate([node("User"), edge("Likes", "User", None)])
        assert len(result) == 1
        assert result[0].message == "Relations must connect two entities"
        assert result[0].level == Severity.INFO
        assert not result[0].is_error


class TestProperties:
    """Tests for property checks."""

    def test_missing_property_name(self):
        result = validate([node("User", Property(name="email"), Property(name=""))])
        assert messages(result) == ["Property name missing"]
        assert result[0].property_index == 1

    def test_invalid_property_name(self):
        result = validate([node("User", Property(name="first-name"))])
        assert messages(result) == ["Invalid characters in property name"]
        assert result[0].fix_suggestion == "first_name"

    @pytest.mark.parametrize("kind,field", [
        (EntityKind.NODE, "id"),
        (EntityKind.NODE, "Label"),
        (EntityKind.EDGE, "to_node"),
        (EntityKind.EDGE, "from_node"),
        (EntityKind.VECTOR, "data"),
        (EntityKind.VECTOR, "score"),
    ])
    def test_reserved_field(self, kind, field):
        """Test each reserved internal field yields exactly one error."""
        entity = Entity(id="x", name="Thing", kind=kind, properties=(Property(name=field),))
        if kind == EntityKind.EDGE:
            entity = Entity(
                id="x", name="Thing", kind=kind, properties=entity.properties,
                from_entity="Thing", to_entity="Thing",
            )
        result = validate([entity])
        assert len(result) == 1
        assert result[0].message == f"'{field}' is a reserved internal field managed by the database"
        assert result[0].fix_suggestion == f"thing_{field.lower()}"
        assert result[0].property_index == 0

    def test_reserved_field_is_per_kind(self):
        assert validate([node("Doc", Property(name="data"))]) == []

    def test_duplicate_property(self):
        result = validate([node("User", Property(name="email"), Property(name="Email"))])
        assert messages(result) == ["Duplicate property: 'Email'"]
        assert result[0].property_index == 1


class TestDiagnostic:
    """Tests for Diagnostic serialization and validator purity."""

    def test_to_dict(self):
        diagnostic = Diagnostic("n1", "Bad", property_index=2, fix_suggestion="Good")
        assert diagnostic.to_dict() == {
            "entityId": "n1",
            "message": "Bad",
            "level": "error",
            "propertyIndex": 2,
            "fixSuggestion": "Good",
        }

    def test_to_dict_omits_empty_fields(self):
        assert Diagnostic("n1", "Bad", level=Severity.WARNING).to_dict() == {
            "entityId": "n1",
            "message": "Bad",
            "level": "warning",
        }

    def test_empty_model(self):
        assert validate([]) == []
        assert validate(None) == []

    def test_emission_order(self):
        model = [node("query", Property(name="id")), node("Post", Property(name="bad name"))]
        result = validate(model)
        assert [d.entity_id for d in result] == ["id-query", "id-query", "id-query", "id-Post"]
