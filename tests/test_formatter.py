"""
Tests for the HQL formatter.

Tests block layout, chain wrapping and keyword casing.
"""

import pytest

from hqlgen.formatter import capitalize_keywords, format_hql, split_top_level


class TestFormatHQL:
    """Tests for format_hql."""

    def test_empty_input(self):
        assert format_hql("") == ""
        assert format_hql("  \n\n  ") == ""

    def test_simple_query(self):
        code = "query GetUser(id: id) =>\n  user <- n<User>(id)\n  return user"
        assert format_hql(code) == (
            "QUERY GetUser(id: ID) =>\n"
            "    user <- N<User>(id)\n"
            "    RETURN user"
        )

    def test_single_line_query(self):
        code = "QUERY GetUser(id: ID) => user <- N<User>(id) RETURN user"
        assert format_hql(code) == (
            "QUERY GetUser(id: ID) =>\n"
            "    user <- N<User>(id)\n"
            "    RETURN user"
        )

    def test_queries_separated_by_blank_line(self):
        code = (
            "QUERY A() =>\n    x <- N<User>\n    RETURN x\n"
            "QUERY B() =>\n    y <- N<Post>\n    RETURN y"
        )
        assert format_hql(code) == (
            "QUERY A() =>\n    x <- N<User>\n    RETURN x\n"
            "\n"
            "QUERY B() =>\n    y <- N<Post>\n    RETURN y"
        )

    def test_long_chain_wraps(self):
        code = (
            "QUERY Q(id: ID) =>\n"
            "r <- N<User>(id)::Out<Follows>::Out<Follows>::ShortestPathBFS<Follows>::To(end)\n"
            "RETURN r"
        )
        assert format_hql(code) == (
            "QUERY Q(id: ID) =>\n"
            "    r <- N<User>(id)\n"
            "        ::Out<Follows>\n"
            "        ::Out<Follows>\n"
            "        ::ShortestPathBFS<Follows>::To(end)\n"
            "    RETURN r"
        )

    def test_short_chain_stays_inline(self):
        code = "QUERY Q() =>\n r <- N<User>::WHERE(_::{age}::GT(18))::RANGE(0, 10)::COUNT\n RETURN r"
        assert format_hql(code) == (
            "QUERY Q() =>\n"
            "    r <- N<User>::WHERE(_::{age}::GT(18))::RANGE(0, 10)::COUNT\n"
            "    RETURN r"
        )

    def test_brace_block_expands(self):
        code = "QUERY C(name: String, age: I32) =>\n u <- AddN<User>({name: name, age: age})\n RETURN u"
        assert format_hql(code) == (
            "QUERY C(name: String, age: I32) =>\n"
            "    u <- AddN<User>({\n"
            "        name: name,\n"
            "        age: age\n"
            "    })\n"
            "    RETURN u"
        )

    def test_argument_values_keep_their_casing(self):
        code = "QUERY C(date: date, id: id) =>\n e <- AddN<Event>({date: date, ref: id})\n RETURN e"
        assert format_hql(code) == (
            "QUERY C(date: Date, id: ID) =>\n"
            "    e <- AddN<Event>({\n"
            "        date: date,\n"
            "        ref: id\n"
            "    })\n"
            "    RETURN e"
        )

    def test_drop_statement(self):
        code = 'QUERY D(id: ID) => drop n<User>(id) return "Deleted"'
        assert format_hql(code) == (
            "QUERY D(id: ID) =>\n"
            "    DROP N<User>(id)\n"
            '    RETURN "Deleted"'
        )

    def test_loose_lines_are_kept(self):
        code = "// users\nN::User {\n    UNIQUE INDEX email: String\n}"
        assert format_hql(code) == "// users\nN::User {\nUNIQUE INDEX email: String\n}"

    def test_comment_before_query_gets_blank_line(self):
        code = "N::User {\n}\n// Queries\nQUERY A() =>\n x <- N<User>\n RETURN x"
        result = format_hql(code)
        assert result.startswith("N::User {\n}\n\n// Queries\nQUERY A() =>")

    def test_any_input_produces_output(self):
        """Test malformed text is reflowed rather than rejected."""
        assert format_hql("QUERY broken =>") == "QUERY broken =>"
        assert format_hql("just some words") == "just some words"


class TestCapitalizeKeywords:
    """Tests for capitalize_keywords."""

    def test_steps_in_call_position(self):
        assert capitalize_keywords("n<user>::where(_::{age}::gt(18))") == "N<user>::WHERE(_::{age}::GT(18))"

    def test_structural_keywords(self):
        assert capitalize_keywords("for x in items") == "FOR x IN items"

    def test_traversal_casing_wins_in_call_position(self):
        assert capitalize_keywords("_::in<Follows>") == "_::In<Follows>"

    def test_order_direction(self):
        assert capitalize_keywords("ORDER<asc>(_::ID)") == "ORDER<Asc>(_::ID)"
        assert capitalize_keywords("order<DESC>(_::id)") == "ORDER<Desc>(_::ID)"

    def test_types_in_type_position(self):
        assert capitalize_keywords("(name: string, tags: [i32])") == "(name: String, tags: [I32])"

    def test_values_in_brace_arguments_untouched(self):
        assert capitalize_keywords("UPDATE({date: date})") == "UPDATE({date: date})"
        assert capitalize_keywords("{ref: id}") == "{ref: id}"

    def test_types_in_schema_braces(self):
        assert capitalize_keywords("Properties: { weight: f64 }") == "Properties: {weight: F64}"

    def test_identifiers_outside_positions_untouched(self):
        assert capitalize_keywords("string <- N<User>") == "string <- N<User>"

    def test_property_accessor_untouched(self):
        assert capitalize_keywords("_::{count}") == "_::{count}"

    def test_comments_untouched(self):
        assert capitalize_keywords("x <- n<User> // return query") == "x <- N<User> // return query"

    def test_spacing_normalized(self):
        assert capitalize_keywords("N<User> ::  WHERE( x )") == "N<User>::WHERE(x)"


class TestSplitTopLevel:
    """Tests for split_top_level."""

    def test_nested_separators_ignored(self):
        assert split_top_level("N<User>::WHERE(_::{a}::EQ(v))::COUNT", "::") == [
            "N<User>",
            "WHERE(_::{a}::EQ(v))",
            "COUNT",
        ]

    def test_braces_and_brackets(self):
        assert split_top_level("a: {x, y}, b: [1, 2], c", ",") == ["a: {x, y}", "b: [1, 2]", "c"]

    def test_unbalanced_closer(self):
        assert split_top_level("a)::b", "::") == ["a)", "b"]

    def test_empty_pieces_dropped(self):
        assert split_top_level("::a::::b::", "::") == ["a", "b"]
