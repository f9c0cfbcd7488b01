"""
Schema Grammar - Lark EBNF grammar for HQL schema definitions.

Covers the schema dialect the generator emits:
- Node and vector blocks: N::Name { fields } / V::Name { fields }
- Edge blocks: E::Name [UNIQUE] { From: A, To: B, Properties: { fields } }
- Field modifiers UNIQUE INDEX / INDEX, array types [T], DEFAULT literals
- // line comments

Queries are not part of this grammar.
"""

SCHEMA_GRAMMAR = r'''
start: definition*

?definition: node_def
           | vector_def
           | edge_def

node_def: "N" "::" NAME "{" [field_list] "}"
vector_def: "V" "::" NAME "{" [field_list] "}"
edge_def: "E" "::" NAME [UNIQUE] "{" [edge_body] "}"

edge_body: edge_clause ("," edge_clause)* ","?

?edge_clause: from_clause
            | to_clause
            | properties_clause

from_clause: "From" ":" NAME
to_clause: "To" ":" NAME
properties_clause: "Properties" ":" "{" [field_list] "}"

field_list: field ("," field)* ","?

field: [index_modifier] NAME ":" type_ref [default_clause]

index_modifier: UNIQUE INDEX -> unique_index
              | INDEX -> plain_index

?type_ref: NAME -> scalar_type
         | "[" NAME "]" -> array_type

default_clause: "DEFAULT" literal

?literal: ESCAPED_STRING -> string_literal
        | SIGNED_NUMBER -> number_literal
        | NAME -> word_literal
        | "[" [_array_item ("," _array_item)*] "]" -> array_literal

_array_item: ESCAPED_STRING | SIGNED_NUMBER | NAME

UNIQUE: "UNIQUE"
INDEX: "INDEX"

NAME: /[A-Za-z_][A-Za-z0-9_]*/

COMMENT: /\/\/[^\n]*/

%import common.ESCAPED_STRING
%import common.SIGNED_NUMBER
%import common.WS

%ignore WS
%ignore COMMENT
'''


def get_grammar() -> str:
    """Return the schema grammar string."""
    return SCHEMA_GRAMMAR
