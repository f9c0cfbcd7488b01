"""
Schema Generator - Renders an entity list into HQL schema source.

Output example:
    N::User {
        UNIQUE INDEX email: String
    }

    E::Follows {
        From: User,
        To: User,
        Properties: {
        }
    }
"""

from hqlgen.builder.fragments import EntityBlock, render
from hqlgen.model.entities import Entity, EntityKind

# Result for an empty model: an explicit empty object
EMPTY_SCHEMA = "{}"


def generate_schema(entities: list[Entity]) -> str:
    """
    Render one definition block per entity, separated by a blank line.

    None entries and entities of unknown kind are skipped. An empty entity
    list yields EMPTY_SCHEMA.

    Args:
        entities: The model snapshot

    Returns:
        Schema source text, trimmed
    """
    if not entities:
        return EMPTY_SCHEMA

    blocks = [
        render(EntityBlock(entity))
        for entity in entities
        if entity is not None and entity.kind in EntityKind
    ]
    return "\n\n".join(blocks).strip()
