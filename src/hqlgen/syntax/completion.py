"""
HQL Completion - keyword and schema-aware completion candidates.

Produces completion items for the text editor from the grammar constants
and, optionally, a summary of the schema names in the current model.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from hqlgen.syntax.keywords import (
    STRUCTURAL_KEYWORDS,
    TRAVERSALS,
    SCALAR_TYPES,
    MATH_FUNCTIONS,
)

if TYPE_CHECKING:
    from hqlgen.model.entities import Entity


_SEARCH_GENERIC = re.compile(r"Search(V|BM25)\s*<\s*$")
_TRAVERSAL_START = re.compile(
    r"\b(N|E|V|AddN|AddE|AddV|UpsertN|UpsertE|UpsertV)\s*\(\s*$"
)


@dataclass(frozen=True)
class CompletionItem:
    """A single completion candidate."""
    label: str
    kind: str
    detail: Optional[str] = None

    def to_dict(self) -> dict:
        return {"label": self.label, "kind": self.kind, "detail": self.detail}


@dataclass
class SchemaSummary:
    """Names of the node, edge and vector types available for completion."""
    nodes: list[str] = field(default_factory=list)
    edges: list[str] = field(default_factory=list)
    vectors: list[str] = field(default_factory=list)

    @classmethod
    def from_entities(cls, entities: list["Entity"]) -> "SchemaSummary":
        """Build a summary from an entity list, in model order."""
        from hqlgen.model.entities import EntityKind

        summary = cls()
        for entity in entities:
            if entity is None or not entity.name:
                continue
            if entity.kind == EntityKind.NODE:
                summary.nodes.append(entity.name)
            elif entity.kind == EntityKind.EDGE:
                summary.edges.append(entity.name)
            elif entity.kind == EntityKind.VECTOR:
                summary.vectors.append(entity.name)
        return summary


def completion_options() -> list[CompletionItem]:
    """Flat list of every keyword, traversal, type and math option."""
    items = [CompletionItem(k, "keyword") for k in STRUCTURAL_KEYWORDS]
    items += [CompletionItem(t, "function") for t in TRAVERSALS]
    items += [CompletionItem(t, "type") for t in SCALAR_TYPES]
    items += [CompletionItem(m, "function", "math") for m in MATH_FUNCTIONS]
    return items


def complete(
    code: str,
    cursor: int,
    schema: Optional[SchemaSummary] = None,
) -> list[CompletionItem]:
    """
    Completion candidates for the text before the cursor.

    Args:
        code: Full editor text
        cursor: Cursor offset into code (clamped to 0..len(code))
        schema: Optional schema names to offer alongside keywords

    Returns:
        Ordered list of CompletionItem
    """
    prefix = code[:max(0, min(cursor, len(code)))]
    prefix = prefix.rstrip()

    schema = schema or SchemaSummary()
    nodes = [CompletionItem(n, "class", "Node") for n in schema.nodes]
    edges = [CompletionItem(e, "interface", "Edge") for e in schema.edges]
    vectors = [CompletionItem(v, "namespace", "Vector") for v in schema.vectors]

    if _SEARCH_GENERIC.search(prefix):
        return nodes

    if prefix.endswith("::"):
        return [CompletionItem(t, "type", "Type") for t in SCALAR_TYPES] + nodes

    if _TRAVERSAL_START.search(prefix):
        return nodes + edges + vectors

    items = [CompletionItem(k, "keyword") for k in STRUCTURAL_KEYWORDS]
    items.append(CompletionItem("Properties", "keyword"))
    items += [CompletionItem(t, "function", "Traversal") for t in TRAVERSALS]
    items.append(CompletionItem("SearchBM25", "function", "SearchBM25<T>(query, limit)"))
    items.append(CompletionItem("SearchV", "function", "SearchV<T>(vector, k)"))
    items += [CompletionItem(m, "function", "Math") for m in MATH_FUNCTIONS]
    items += [CompletionItem(t, "type") for t in SCALAR_TYPES]
    return items + nodes + edges + vectors
