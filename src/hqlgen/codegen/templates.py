# -*- encoding: utf-8 -*-
"""
Query Templates - One builder per generated query.

Each builder takes an entity (and, where relevant, a property or the full
model) and returns a Query fragment, or None when the template does not
apply to that entity (e.g. an upsert with nothing to assign).

Query names follow a fixed convention built with to_pascal_case:
    Create{Entity}, Get{Entity}By{Prop}, Explore{Edge}Network, ...
"""

from typing import Optional

from hqlgen.builder.fragments import (
    UNDEFINED,
    Assignment,
    Drop,
    Expression,
    Projection,
    Query,
    Source,
    Step,
)
from hqlgen.builder.naming import to_pascal_case
from hqlgen.model.entities import Entity, EntityKind, Property, PropertyType


# Vector search parameters
VECTOR_PARAMS = (("vec", "[F64]"), ("limit", "I32"))
VECTOR_DATA_PARAM = ("data", "[F64]")

# Reciprocal-rank-fusion constant for hybrid reranking
RERANK_RRF_K = 60

# RichDetail shows at most this many related edge counts
MAX_DETAIL_EDGE_COUNTS = 3

# Aggregations recognized by build_math_aggregate. MIN/MAX are binary in
# HQL (MIN(a, b)), so they have no single-property template.
AGGREGATE_OPS = ("SUM", "AVG", "MIN", "MAX")
_BINARY_AGGREGATES = frozenset({"MIN", "MAX"})


def _property_params(properties) -> tuple[tuple[str, str], ...]:
    return tuple((p.name, p.type_name) for p in properties)


def _end(name: Optional[str]) -> str:
    return name or UNDEFINED


# --- Node CRUD ---

def build_create_node(node: Entity) -> Query:
    props = node.named_properties
    if props:
        source = Source("AddN", node.name, args=(Projection.assign(props),))
    else:
        source = Source("AddN", node.name)
    return Query(
        name=f"Create{to_pascal_case(node.name)}",
        params=_property_params(props),
        statements=(Assignment("new_node", source),),
        returns="new_node",
    )


def build_upsert_node(node: Entity) -> Optional[Query]:
    props = node.named_properties
    if not props:
        return None
    return Query(
        name=f"Upsert{to_pascal_case(node.name)}",
        params=(("id", "ID"),) + _property_params(props),
        statements=(
            Assignment("existing", Source("N", node.name, args=("id",))),
            Assignment(
                "upsert_node",
                Source("existing", steps=(Step("UpsertN", args=(Projection.assign(props),)),)),
            ),
        ),
        returns="upsert_node",
    )


def build_get_node_by_id(node: Entity) -> Query:
    return Query(
        name=f"Get{to_pascal_case(node.name)}ById",
        params=(("id", "ID"),),
        statements=(Assignment("result", Source("N", node.name, args=("id",))),),
        returns="result",
    )


def build_get_node_by_unique(node: Entity, prop: Property) -> Query:
    condition = Expression.prop(prop.name).op("EQ", "val")
    return Query(
        name=f"Get{to_pascal_case(node.name)}By{to_pascal_case(prop.name)}",
        params=(("val", prop.type_name),),
        statements=(
            Assignment("result", Source("N", node.name, steps=(Step("WHERE", args=(condition,)),))),
        ),
        returns="result",
    )


def build_get_all_nodes(node: Entity, pro_control: bool = False) -> Query:
    name = f"GetAll{to_pascal_case(node.name)}"
    if pro_control:
        source = Source(
            "N",
            node.name,
            steps=(
                Step("ORDER", type_param="Asc", args=(Expression.id(),)),
                Step("RANGE", args=("offset", "limit")),
            ),
            multiline=True,
        )
        params = (
            ("offset", "I32"),
            ("limit", "I32"),
            ("order_field", "String"),
            ("is_desc", "Boolean"),
        )
    else:
        source = Source("N", node.name, steps=(Step("RANGE", args=("0", "limit")),))
        params = (("limit", "I32"),)
    return Query(
        name=name,
        params=params,
        statements=(Assignment("results", source),),
        returns="results",
    )


def build_delete_node(node: Entity) -> Query:
    return Query(
        name=f"Delete{to_pascal_case(node.name)}",
        params=(("id", "ID"),),
        statements=(Drop(Source("N", node.name, args=("id",))),),
        returns=Expression.literal("Deleted"),
    )


# --- Node intelligence ---

def related_edges(node: Entity, entities: list[Entity]) -> list[Entity]:
    """Edges whose from or to names this node, in model order."""
    return [
        e for e in entities
        if e is not None
        and e.kind == EntityKind.EDGE
        and (e.from_entity == node.name or e.to_entity == node.name)
    ]


def build_rich_detail(node: Entity, entities: list[Entity]) -> Query:
    fields = [("node_id", Expression.id())]
    fields += [(p.name, Expression.ident(p.name)) for p in node.named_properties]
    for edge in related_edges(node, entities)[:MAX_DETAIL_EDGE_COUNTS]:
        direction = "OutE" if edge.from_entity == node.name else "InE"
        count = Expression.ident("_").op(direction, type_param=edge.name).op("COUNT")
        fields.append((f"{edge.name.lower()}_count", count))

    return Query(
        name=f"Get{to_pascal_case(node.name)}DeepDetail",
        params=(("id", "ID"),),
        statements=(
            Assignment("origin", Source("N", node.name, args=("id",))),
            Assignment("detail", Source("origin", steps=(Projection.of(fields),))),
        ),
        returns="detail",
    )


# --- Node analytics ---

def build_count(node: Entity) -> Query:
    return Query(
        name=f"Count{to_pascal_case(node.name)}",
        statements=(Assignment("total", Source("N", node.name, steps=(Step("COUNT"),))),),
        returns="total",
    )


def build_math_aggregate(node: Entity, prop: Property, op: str) -> Optional[Query]:
    """SUM/AVG over one property; MIN/MAX produce nothing."""
    if op in _BINARY_AGGREGATES:
        return None
    title = op[:1] + op[1:].lower()
    return Query(
        name=f"{title}{to_pascal_case(node.name)}{to_pascal_case(prop.name)}",
        statements=(Assignment("result", Source("N", node.name)),),
        returns=Expression.call(op, Expression.prop(prop.name, target="result")),
    )


def build_group_by(node: Entity, prop: Property) -> Query:
    return Query(
        name=f"GroupBy{to_pascal_case(node.name)}By{to_pascal_case(prop.name)}",
        statements=(
            Assignment("groups", Source("N", node.name, steps=(Step("GROUP_BY", args=(prop.name,)),))),
        ),
        returns="groups",
    )


# --- Search & discovery ---

def _vector_search_source(vector: Entity, prefilter: Optional[Property]) -> Source:
    steps = ()
    if prefilter is not None:
        steps = (Step("PREFILTER", args=(Expression.prop(prefilter.name).op("EQ", "val"),)),)
    return Source("SearchV", vector.name, args=("vec", "limit"), steps=steps)


def _prefilter_params(prefilter: Optional[Property]) -> tuple[tuple[str, str], ...]:
    if prefilter is None:
        return VECTOR_PARAMS
    return VECTOR_PARAMS + (("val", prefilter.type_name),)


def _prefilter_suffix(prefilter: Optional[Property]) -> str:
    return f"By{to_pascal_case(prefilter.name)}" if prefilter is not None else ""


def prefilter_properties(vector: Entity) -> list[Property]:
    """Properties usable as an equality prefilter: indexed, unique or boolean scalars."""
    return [
        p for p in vector.named_properties
        if not p.is_array and (p.is_index or p.is_unique or p.type == PropertyType.BOOLEAN)
    ]


def build_vector_search(vector: Entity, prefilter: Optional[Property] = None) -> Query:
    return Query(
        name=f"Search{to_pascal_case(vector.name)}{_prefilter_suffix(prefilter)}",
        params=_prefilter_params(prefilter),
        statements=(Assignment("results", _vector_search_source(vector, prefilter)),),
        returns="results",
    )


def build_hybrid_search(vector: Entity, prefilter: Optional[Property] = None) -> Query:
    source = _vector_search_source(vector, prefilter).then(
        Step("RerankRRF", args=(f"k: {RERANK_RRF_K}",))
    )
    return Query(
        name=f"HybridSearch{to_pascal_case(vector.name)}{_prefilter_suffix(prefilter)}",
        params=_prefilter_params(prefilter),
        statements=(Assignment("results", source),),
        returns="results",
    )


def build_add_vector(vector: Entity) -> Query:
    props = vector.named_properties
    args = ("data", Projection.assign(props)) if props else ("data",)
    return Query(
        name=f"Add{to_pascal_case(vector.name)}Vector",
        params=(VECTOR_DATA_PARAM,) + _property_params(props),
        statements=(Assignment("new_v", Source("AddV", vector.name, args=args)),),
        returns="new_v",
    )


def build_upsert_vector(vector: Entity) -> Optional[Query]:
    props = vector.named_properties
    if not props:
        return None
    return Query(
        name=f"Upsert{to_pascal_case(vector.name)}Vector",
        params=(("id", "ID"), VECTOR_DATA_PARAM) + _property_params(props),
        statements=(
            Assignment("existing", Source("V", vector.name, args=("id",))),
            Assignment(
                "upsert_v",
                Source("existing", steps=(Step("UpsertV", args=("data", Projection.assign(props))),)),
            ),
        ),
        returns="upsert_v",
    )


def build_keyword_search(entity: Entity) -> Query:
    return Query(
        name=f"Search{to_pascal_case(entity.name)}ByKeyword",
        params=(("text", "String"), ("limit", "I32")),
        statements=(
            Assignment("results", Source("SearchBM25", entity.name, args=("text", "limit"))),
        ),
        returns="results",
    )


def build_two_hop(edge: Entity) -> Query:
    hop = Step("Out", type_param=edge.name)
    hops = (hop, hop) if edge.from_entity == edge.to_entity else (hop,)
    source = Source(
        "N",
        _end(edge.from_entity),
        args=("start_id",),
        steps=hops + (Step("RANGE", args=("0", "limit")),),
        multiline=True,
    )
    return Query(
        name=f"Explore{to_pascal_case(edge.name)}Network",
        params=(("start_id", "ID"), ("limit", "I32")),
        statements=(Assignment("network", source),),
        returns="network",
    )


def build_mutual_connections(edge: Entity) -> Query:
    reciprocal = Expression.ident("_").op("In", type_param=edge.name).op(
        "WHERE", Expression.id().op("EQ", "b_id")
    )
    source = Source(
        "N",
        _end(edge.from_entity),
        args=("a_id",),
        steps=(
            Step("Out", type_param=edge.name, attached=True),
            Step("WHERE", args=(Expression.call("EXISTS", reciprocal),)),
        ),
        multiline=True,
    )
    return Query(
        name=f"GetMutual{to_pascal_case(edge.name)}",
        params=(("a_id", "ID"), ("b_id", "ID")),
        statements=(Assignment("mutual", source),),
        returns="mutual",
    )


# --- Edge CRUD ---

def _edge_params(edge: Entity) -> tuple[tuple[str, str], ...]:
    return (("from_id", "ID"), ("to_id", "ID")) + _property_params(edge.named_properties)


def _connection_steps() -> tuple[Step, Step]:
    return (Step("From", args=("from_id",)), Step("To", args=("to_id",)))


def build_connect(edge: Entity) -> Query:
    props = edge.named_properties
    args = (Projection.assign(props),) if props else None
    return Query(
        name=f"Connect{to_pascal_case(edge.name)}",
        params=_edge_params(edge),
        statements=(
            Assignment("edge", Source("AddE", edge.name, args=args, steps=_connection_steps())),
        ),
        returns="edge",
    )


def build_upsert_edge(edge: Entity) -> Optional[Query]:
    props = edge.named_properties
    if not props:
        return None
    steps = (Step("UpsertE", args=(Projection.assign(props),)),) + _connection_steps()
    return Query(
        name=f"Upsert{to_pascal_case(edge.name)}",
        params=_edge_params(edge),
        statements=(Assignment("edge", Source("E", edge.name, steps=steps)),),
        returns="edge",
    )


def build_traversal(edge: Entity) -> Query:
    source_name = edge.from_entity or ""
    return Query(
        name=f"Get{to_pascal_case(edge.name)}Of{to_pascal_case(source_name)}",
        params=(("start_id", "ID"),),
        statements=(
            Assignment(
                "results",
                Source("N", _end(edge.from_entity), args=("start_id",),
                       steps=(Step("Out", type_param=edge.name),)),
            ),
        ),
        returns="results",
    )


# --- Pathfinding ---

def weight_property(edge: Entity) -> Optional[Property]:
    """First numeric property, used as the edge weight."""
    for prop in edge.named_properties:
        if prop.type.is_numeric:
            return prop
    return None


def build_shortest_path(edge: Entity) -> Query:
    source = Source(
        "N",
        _end(edge.from_entity),
        args=("start",),
        steps=(
            Step("ShortestPathBFS", type_param=edge.name),
            Step("To", args=("end",), attached=True),
        ),
        multiline=True,
    )
    return Query(
        name=f"ShortestPath{to_pascal_case(edge.name)}",
        params=(("start", "ID"), ("end", "ID")),
        statements=(Assignment("path", source),),
        returns="path",
    )


def build_weighted_path(edge: Entity, weight: Property) -> Query:
    source = Source(
        "N",
        _end(edge.from_entity),
        args=("start",),
        steps=(
            Step("ShortestPathDijkstras", type_param=edge.name, args=(Expression.prop(weight.name),)),
            Step("To", args=("end",), attached=True),
        ),
        multiline=True,
    )
    return Query(
        name=f"WeightedPath{to_pascal_case(edge.name)}",
        params=(("start", "ID"), ("end", "ID")),
        statements=(Assignment("path", source),),
        returns="path",
    )
