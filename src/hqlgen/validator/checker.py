# -*- encoding: utf-8 -*-
"""
hqlgen Model Validator - Structural and semantic checks on an entity model.

The validator is a pure function of the entity list. It never consults
the query-generation config or generator output, and it never raises for
model defects: every finding becomes a Diagnostic.

Checks, per entity in model order:
1. Name present, PascalCase identifier, not a reserved keyword, unique
   (case-insensitive)
2. Edges: from/to reference existing entities; both ends present
3. Properties: name present, identifier characters, not a reserved
   internal field, unique within the entity (case-insensitive)

Diagnostics are returned in emission order; there is no severity sorting.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from hqlgen.builder.naming import to_pascal_case
from hqlgen.model.entities import Entity, EntityKind
from hqlgen.syntax.keywords import is_reserved


ENTITY_NAME_PATTERN = re.compile(r"^[A-Z][A-Za-z0-9_]*$")
PROPERTY_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


class Severity(str, Enum):
    """Diagnostic severity levels."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    """
    A validation finding keyed to the model.

    Attributes:
        entity_id: Identifier of the entity the finding is about
        message: Human-readable description
        level: error, warning or info
        property_index: Index into the entity's properties, if property-level
        fix_suggestion: Optional replacement the editor can offer
    """
    entity_id: str
    message: str
    level: Severity = Severity.ERROR
    property_index: Optional[int] = None
    fix_suggestion: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.level == Severity.ERROR

    def to_dict(self) -> dict:
        result = {
            "entityId": self.entity_id,
            "message": self.message,
            "level": self.level.value,
        }
        if self.property_index is not None:
            result["propertyIndex"] = self.property_index
        if self.fix_suggestion is not None:
            result["fixSuggestion"] = self.fix_suggestion
        return result


def _suggest_entity_name(name: str) -> Optional[str]:
    candidate = to_pascal_case(re.sub(r"[^A-Za-z0-9_]+", "_", name).strip("_"))
    if ENTITY_NAME_PATTERN.match(candidate) and candidate != name:
        return candidate
    return None


def _suggest_property_name(name: str) -> Optional[str]:
    candidate = re.sub(r"[^A-Za-z0-9_]+", "_", name).strip("_")
    if PROPERTY_NAME_PATTERN.match(candidate) and candidate != name:
        return candidate
    return None


class ModelValidator:
    """
    Validates an entity model snapshot.

    Usage:
        diagnostics = ModelValidator().validate(entities)
        errors = [d for d in diagnostics if d.is_error]
    """

    def validate(self, entities: list[Entity]) -> list[Diagnostic]:
        """
        Run every check over the model.

        Args:
            entities: The model snapshot (None entries are ignored)

        Returns:
            Diagnostics in emission order
        """
        entities = [e for e in entities or [] if e is not None]
        entity_names = {e.name for e in entities}
        used_names: set[str] = set()
        diagnostics: list[Diagnostic] = []

        for entity in entities:
            diagnostics.extend(self._check_name(entity, used_names))
            if entity.kind == EntityKind.EDGE:
                diagnostics.extend(self._check_relation(entity, entity_names))
            diagnostics.extend(self._check_properties(entity))

        return diagnostics

    def _check_name(self, entity: Entity, used_names: set[str]) -> list[Diagnostic]:
        name = (entity.name or "").strip()
        if not name:
            return [Diagnostic(entity.id, "Entity name is required")]

        found = []
        if not ENTITY_NAME_PATTERN.match(name):
            found.append(Diagnostic(
                entity.id,
                "Standard: Entity names must start with an Uppercase letter "
                "and only contain Alphanumeric/Underscore",
                fix_suggestion=_suggest_entity_name(name),
            ))

        if is_reserved(name):
            found.append(Diagnostic(
                entity.id,
                f"Reserved keyword: '{name}' cannot be used as an entity name",
            ))

        key = name.lower()
        if key in used_names:
            found.append(Diagnostic(
                entity.id,
                f"Duplicate name: '{name}' (names are case-insensitive)",
            ))
        used_names.add(key)
        return found

    def _check_relation(self, edge: Entity, entity_names: set[str]) -> list[Diagnostic]:
        found = []
        if edge.from_entity and edge.from_entity not in entity_names:
            found.append(Diagnostic(edge.id, f"Unknown source: '{edge.from_entity}'"))
        if edge.to_entity and edge.to_entity not in entity_names:
            found.append(Diagnostic(edge.id, f"Unknown target: '{edge.to_entity}'"))
        if not edge.from_entity or not edge.to_entity:
            found.append(Diagnostic(
                edge.id,
                "Relations must connect two entities",
                level=Severity.INFO,
            ))
        return found

    def _check_properties(self, entity: Entity) -> list[Diagnostic]:
        found = []
        seen: set[str] = set()
        reserved = entity.reserved_fields

        for idx, prop in enumerate(entity.properties):
            if prop is None:
                continue
            raw = prop.name or ""
            key = raw.strip().lower()

            if not key:
                found.append(Diagnostic(entity.id, "Property name missing", property_index=idx))
                continue

            if not PROPERTY_NAME_PATTERN.match(raw):
                found.append(Diagnostic(
                    entity.id,
                    "Invalid characters in property name",
                    property_index=idx,
                    fix_suggestion=_suggest_property_name(raw),
                ))

            if key in reserved:
                found.append(Diagnostic(
                    entity.id,
                    f"'{raw}' is a reserved internal field managed by the database",
                    property_index=idx,
                    fix_suggestion=f"{entity.name.lower()}_{key}" if entity.name else None,
                ))

            if key in seen:
                found.append(Diagnostic(
                    entity.id,
                    f"Duplicate property: '{raw}'",
                    property_index=idx,
                ))
            seen.add(key)

        return found


def validate(entities: list[Entity]) -> list[Diagnostic]:
    """Validate an entity model. See ModelValidator."""
    return ModelValidator().validate(entities)
