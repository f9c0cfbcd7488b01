# -*- encoding: utf-8 -*-
"""
HQL Fragments - Composable building blocks for generated HQL text.

A closed set of immutable fragment types mirrors how HQL nests:

    Query
     ├── params            (name: Type, ...)
     ├── statements        Assignment(name <- Source) | Drop(Source) | Source
     │     └── Source      N<User>(id)::Step::Step...
     │           ├── args        Expression | Projection | str
     │           └── steps       Step | Projection
     └── returns           Expression | Source | str

    EntityBlock            N::User { ... } / E::Follows { ... } / V::Doc { ... }

Every fragment renders through the single render() function, which
dispatches on the fragment type. Renderers are total: degenerate domain
data renders placeholders (e.g. 'Undefined' edge ends) instead of raising.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from hqlgen.model.entities import Entity, EntityKind, Property, PropertyType


INDENT = "    "

# Placeholder for missing edge ends
UNDEFINED = "Undefined"


@dataclass(frozen=True)
class Step:
    """
    A chained operation: ::Name<Type>(args).

    args=None renders no parentheses (::COUNT); an empty tuple renders ().
    attached=True keeps the step on the line before it in a multiline Source.
    """
    name: str
    type_param: Optional[str] = None
    args: Optional[tuple] = None
    attached: bool = False


@dataclass(frozen=True)
class Expression:
    """
    A value expression with an optional chain of operator calls.

    The head is either pre-rendered text (literal, identifier, accessor)
    or, when call_args is set, a function call head(call_args).
    """
    head: str
    call_args: Optional[tuple] = None
    chain: tuple[Step, ...] = ()

    @classmethod
    def ident(cls, name: str) -> "Expression":
        """A bare identifier: a parameter or variable name."""
        return cls(head=name)

    @classmethod
    def literal(
        cls,
        value: Any,
        value_type: PropertyType = PropertyType.STRING,
        is_array: bool = False,
    ) -> "Expression":
        """A literal rendered per its scalar type."""
        return cls(head=render_literal(value, value_type, is_array))

    @classmethod
    def prop(cls, name: str, target: str = "_") -> "Expression":
        """A property accessor: _::{name}."""
        return cls(head=f"{target}::{{{name}}}")

    @classmethod
    def id(cls, target: str = "_") -> "Expression":
        """The id accessor: _::ID."""
        return cls(head=f"{target}::ID")

    @classmethod
    def call(cls, function: str, *args) -> "Expression":
        """A function call: SUM(x), EXISTS(x)."""
        return cls(head=function, call_args=tuple(args))

    def op(self, name: str, *args, type_param: Optional[str] = None) -> "Expression":
        """
        Chain an operator call, returning a new Expression.

        With no args the step renders bare (::COUNT, ::Out<Follows>).
        """
        step = Step(name=name, type_param=type_param, args=tuple(args) if args else None)
        return Expression(head=self.head, call_args=self.call_args, chain=self.chain + (step,))


@dataclass(frozen=True)
class Projection:
    """A field -> expression block: { field: expr, ... }."""
    fields: tuple[tuple[str, Any], ...] = ()

    @classmethod
    def of(cls, mapping) -> "Projection":
        """Build from a dict or an iterable of (field, expr) pairs."""
        items = mapping.items() if isinstance(mapping, dict) else mapping
        return cls(fields=tuple((name, expr) for name, expr in items))

    @classmethod
    def assign(cls, properties) -> "Projection":
        """Identity assignment of each property from its same-named parameter."""
        return cls(fields=tuple((p.name, Expression.ident(p.name)) for p in properties))


@dataclass(frozen=True)
class Source:
    """
    An origin followed by a chain of steps: N<User>(id)::Out<Follows>.

    Attributes:
        origin: Origin name (N, E, V, AddN, SearchV, or a variable)
        type_param: Optional <Type> parameter
        args: Optional argument tuple; None renders no parentheses
        steps: Ordered Steps and Projections
        multiline: Put each step on its own line, one level deeper,
            except attached Steps
    """
    origin: str
    type_param: Optional[str] = None
    args: Optional[tuple] = None
    steps: tuple = ()
    multiline: bool = False

    def then(self, *steps) -> "Source":
        """Return a new Source with steps appended."""
        return Source(
            origin=self.origin,
            type_param=self.type_param,
            args=self.args,
            steps=self.steps + tuple(steps),
            multiline=self.multiline,
        )


@dataclass(frozen=True)
class Assignment:
    """name <- value"""
    name: str
    value: Any


@dataclass(frozen=True)
class Drop:
    """DROP target"""
    target: Any


@dataclass(frozen=True)
class Query:
    """
    A complete query definition.

    Renders:
        QUERY Name(p1: T1, p2: T2) =>
            statement
            ...
            RETURN expr
    """
    name: str
    params: tuple[tuple[str, str], ...] = ()
    statements: tuple = ()
    returns: Any = ""


@dataclass(frozen=True)
class EntityBlock:
    """The schema definition block of one entity."""
    entity: Entity


Fragment = Union[
    Step, Expression, Projection, Source, Assignment, Drop, Query, EntityBlock, str
]


def render_literal(value: Any, value_type: PropertyType, is_array: bool = False) -> str:
    """
    Render a literal value as HQL text.

    Strings and non-NOW dates are quoted, booleans render as true/false,
    sequences render as bracketed comma lists. Other values are written
    as-is (defaults arrive from the editor as literal text).
    """
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_literal(v, value_type) for v in value) + "]"
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    if is_array:
        return text
    if value_type == PropertyType.STRING or (
        value_type == PropertyType.DATE and text != "NOW"
    ):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def render(fragment: Fragment, indent: str = "") -> str:
    """
    Render any fragment to HQL text.

    Args:
        fragment: Fragment to render (plain strings pass through)
        indent: Indentation of the line the fragment starts on; nested
            blocks are indented one level deeper

    Returns:
        Rendered text
    """
    if isinstance(fragment, str):
        return fragment
    if isinstance(fragment, Step):
        return _render_step(fragment, indent)
    if isinstance(fragment, Expression):
        return _render_expression(fragment, indent)
    if isinstance(fragment, Projection):
        return _render_projection(fragment, indent)
    if isinstance(fragment, Source):
        return _render_source(fragment, indent)
    if isinstance(fragment, Assignment):
        return f"{fragment.name} <- {render(fragment.value, indent)}"
    if isinstance(fragment, Drop):
        return f"DROP {render(fragment.target, indent)}"
    if isinstance(fragment, Query):
        return _render_query(fragment, indent)
    if isinstance(fragment, EntityBlock):
        return _render_entity_block(fragment.entity)
    return str(fragment)


def _render_args(args: Optional[tuple], indent: str) -> str:
    if args is None:
        return ""
    return "(" + ", ".join(render(a, indent) for a in args) + ")"


def _render_step(step: Step, indent: str) -> str:
    type_part = f"<{step.type_param}>" if step.type_param else ""
    return f"::{step.name}{type_part}{_render_args(step.args, indent)}"


def _render_expression(expr: Expression, indent: str) -> str:
    text = expr.head + _render_args(expr.call_args, indent)
    return text + "".join(_render_step(s, indent) for s in expr.chain)


def _render_projection(proj: Projection, indent: str) -> str:
    inner = indent + INDENT
    lines = [f"{inner}{name}: {render(expr, inner)}" for name, expr in proj.fields]
    if not lines:
        return "{}"
    return "{\n" + ",\n".join(lines) + f"\n{indent}}}"


def _render_chain_item(item, indent: str) -> str:
    if isinstance(item, Projection):
        return "::" + _render_projection(item, indent)
    return render(item, indent)


def _render_source(source: Source, indent: str) -> str:
    type_part = f"<{source.type_param}>" if source.type_param else ""
    text = f"{source.origin}{type_part}{_render_args(source.args, indent)}"
    if not source.multiline:
        return text + "".join(_render_chain_item(s, indent) for s in source.steps)
    inner = indent + INDENT
    for step in source.steps:
        if isinstance(step, Step) and step.attached:
            text += _render_chain_item(step, inner)
        else:
            text += f"\n{inner}{_render_chain_item(step, inner)}"
    return text


def _render_query(query: Query, indent: str) -> str:
    inner = indent + INDENT
    params = ", ".join(f"{name}: {type_name}" for name, type_name in query.params)
    lines = [f"{indent}QUERY {query.name}({params}) =>"]
    for statement in query.statements:
        lines.append(f"{inner}{render(statement, inner)}")
    lines.append(f"{inner}RETURN {render(query.returns, inner)}")
    return "\n".join(lines)


def _render_field(prop: Property, indent: str) -> str:
    line = indent
    if prop.is_unique:
        line += "UNIQUE INDEX "
    elif prop.is_index:
        line += "INDEX "
    line += f"{prop.name}: {prop.type_name}"
    if prop.default_value is not None:
        line += f" DEFAULT {render_literal(prop.default_value, prop.type, prop.is_array)}"
    return line


def _render_fields(properties, indent: str) -> str:
    return ",\n".join(
        _render_field(p, indent) for p in properties if p is not None and p.name
    )


def _render_entity_block(entity: Entity) -> str:
    lines: list[str] = []
    if entity.kind == EntityKind.EDGE:
        unique = " UNIQUE" if entity.is_unique_relation else ""
        lines.append(f"E::{entity.name}{unique} {{")
        lines.append(f"{INDENT}From: {entity.from_entity or UNDEFINED},")
        lines.append(f"{INDENT}To: {entity.to_entity or UNDEFINED},")
        lines.append(f"{INDENT}Properties: {{")
        fields_text = _render_fields(entity.properties, INDENT * 2)
        if fields_text:
            lines.append(fields_text)
        lines.append(f"{INDENT}}}")
        lines.append("}")
        return "\n".join(lines)

    prefix = "V" if entity.kind == EntityKind.VECTOR else "N"
    lines.append(f"{prefix}::{entity.name} {{")
    fields_text = _render_fields(entity.properties, INDENT)
    if fields_text:
        lines.append(fields_text)
    lines.append("}")
    return "\n".join(lines)
