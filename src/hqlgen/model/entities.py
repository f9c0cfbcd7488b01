# -*- encoding: utf-8 -*-
"""
hqlgen Entity Model - Nodes, edges and vectors with typed properties.

The entity list is owned by the model editor. Generators and the
validator receive it as an immutable snapshot and never mutate it.

Dict form (as produced by the model editor):
    {
        "id": "e1",
        "name": "Follows",
        "kind": "Edge",
        "from": "User",
        "to": "User",
        "isUniqueRelation": false,
        "properties": [
            {"name": "since", "type": "Date", "defaultValue": "NOW"}
        ]
    }
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from hqlgen.exceptions import ModelError


class EntityKind(str, Enum):
    """Kinds of schema entities."""
    NODE = "Node"
    EDGE = "Edge"
    VECTOR = "Vector"


class PropertyType(str, Enum):
    """Scalar property types."""
    STRING = "String"
    BOOLEAN = "Boolean"
    F32 = "F32"
    F64 = "F64"
    I8 = "I8"
    I16 = "I16"
    I32 = "I32"
    I64 = "I64"
    U8 = "U8"
    U16 = "U16"
    U32 = "U32"
    U64 = "U64"
    U128 = "U128"
    ID = "ID"
    DATE = "Date"

    @classmethod
    def parse(cls, value: str) -> "PropertyType":
        """
        Resolve a type name, accepting the legacy 'Timestamp' alias.

        Raises:
            ModelError: If the name is not a known scalar type
        """
        if value == "Timestamp":
            return cls.DATE
        try:
            return cls(value)
        except ValueError:
            raise ModelError(f"Unknown property type: {value!r}") from None

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_TYPES


NUMERIC_TYPES: frozenset[PropertyType] = frozenset({
    PropertyType.F32,
    PropertyType.F64,
    PropertyType.I8,
    PropertyType.I16,
    PropertyType.I32,
    PropertyType.I64,
    PropertyType.U8,
    PropertyType.U16,
    PropertyType.U32,
    PropertyType.U64,
    PropertyType.U128,
})

# Internal fields managed by the database, per entity kind
RESERVED_FIELDS: dict[EntityKind, frozenset[str]] = {
    EntityKind.NODE: frozenset({"id", "label", "type", "version"}),
    EntityKind.EDGE: frozenset({"id", "label", "to_node", "from_node", "type", "version"}),
    EntityKind.VECTOR: frozenset({"id", "label", "data", "score", "type", "version"}),
}


@dataclass(frozen=True)
class Property:
    """
    A typed property of an entity.

    Attributes:
        name: Property name
        type: Scalar type
        is_unique: Rendered as UNIQUE INDEX; also drives GetBy<Prop> queries
        is_index: Rendered as INDEX (mutually exclusive with is_unique by
            editor convention, not enforced here)
        is_array: Wraps the type as [T]
        default_value: Literal text of the default, if any
        description: Free-text description
    """
    name: str
    type: PropertyType = PropertyType.STRING
    is_unique: bool = False
    is_index: bool = False
    is_array: bool = False
    default_value: Optional[str] = None
    description: Optional[str] = None

    @property
    def type_name(self) -> str:
        """Type as written in HQL, wrapped in brackets for arrays."""
        return f"[{self.type.value}]" if self.is_array else self.type.value

    def to_dict(self) -> dict:
        result = {"name": self.name, "type": self.type.value}
        if self.is_unique:
            result["isUnique"] = True
        if self.is_index:
            result["isIndex"] = True
        if self.is_array:
            result["isArray"] = True
        if self.default_value is not None:
            result["defaultValue"] = self.default_value
        if self.description:
            result["description"] = self.description
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "Property":
        default = data.get("defaultValue")
        if isinstance(default, bool):
            default = "true" if default else "false"
        elif default is not None:
            default = str(default)
        return cls(
            name=data.get("name") or "",
            type=PropertyType.parse(data.get("type") or "String"),
            is_unique=bool(data.get("isUnique", False)),
            is_index=bool(data.get("isIndex", False)),
            is_array=bool(data.get("isArray", False)),
            default_value=default,
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Entity:
    """
    A node, edge or vector definition in the user's model.

    Attributes:
        id: Stable identifier used to key diagnostics
        name: Display name; the semantic key in generated identifiers
        kind: Node, Edge or Vector
        properties: Ordered properties
        description: Free-text description
        vector_dim: Dimensionality (Vector only)
        from_entity: Source entity name (Edge only)
        to_entity: Target entity name (Edge only)
        is_unique_relation: Rendered as E::Name UNIQUE (Edge only)
    """
    id: str
    name: str
    kind: EntityKind
    properties: tuple[Property, ...] = field(default_factory=tuple)
    description: Optional[str] = None
    vector_dim: Optional[int] = None
    from_entity: Optional[str] = None
    to_entity: Optional[str] = None
    is_unique_relation: bool = False

    def __post_init__(self):
        # Accept any iterable of properties but store a tuple
        if not isinstance(self.properties, tuple):
            object.__setattr__(self, "properties", tuple(self.properties))

    @property
    def is_node(self) -> bool:
        return self.kind == EntityKind.NODE

    @property
    def is_edge(self) -> bool:
        return self.kind == EntityKind.EDGE

    @property
    def is_vector(self) -> bool:
        return self.kind == EntityKind.VECTOR

    @property
    def is_connected(self) -> bool:
        """True for edges with both ends set."""
        return self.is_edge and bool(self.from_entity) and bool(self.to_entity)

    @property
    def named_properties(self) -> list[Property]:
        """Properties with a non-empty name."""
        return [p for p in self.properties if p is not None and p.name]

    @property
    def reserved_fields(self) -> frozenset[str]:
        return RESERVED_FIELDS[self.kind]

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "properties": [p.to_dict() for p in self.properties],
        }
        if self.description:
            result["description"] = self.description
        if self.vector_dim is not None:
            result["vectorDim"] = self.vector_dim
        if self.from_entity:
            result["from"] = self.from_entity
        if self.to_entity:
            result["to"] = self.to_entity
        if self.is_unique_relation:
            result["isUniqueRelation"] = True
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "Entity":
        """
        Build an Entity from the model editor's dict form.

        Raises:
            ModelError: On an unknown kind or property type
        """
        try:
            kind = EntityKind(data.get("kind"))
        except ValueError:
            raise ModelError(f"Unknown entity kind: {data.get('kind')!r}") from None

        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            kind=kind,
            properties=tuple(
                Property.from_dict(p) for p in data.get("properties") or [] if p is not None
            ),
            description=data.get("description"),
            vector_dim=data.get("vectorDim"),
            from_entity=data.get("from") or None,
            to_entity=data.get("to") or None,
            is_unique_relation=bool(data.get("isUniqueRelation", False)),
        )


def load_entities(items: list) -> list[Entity]:
    """
    Convert a list of entity dicts (or Entity objects) into Entities.

    None entries are skipped.
    """
    entities = []
    for item in items or []:
        if item is None:
            continue
        entities.append(item if isinstance(item, Entity) else Entity.from_dict(item))
    return entities
