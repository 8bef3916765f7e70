"""Tests for type reference helpers and naming."""

import pytest
from graphql import (
    GraphQLList,
    GraphQLNonNull,
    GraphQLString,
    build_schema,
    parse_type,
)
from graphql.utilities import type_from_ast

from dartql.core.inspector import (
    AUTO_CRUD_PATTERN,
    SKIP_TYPE_PATTERN,
    format_type_ref,
    fragment_name,
    is_non_null_field,
    to_kebab_case,
    unwrap_type_name,
)


def wrapper_layers(type_) -> list[str]:
    """Describe a type reference as its wrapper classes, outermost first."""
    layers = []
    while hasattr(type_, "of_type"):
        layers.append(type(type_).__name__)
        type_ = type_.of_type
    layers.append(type_.name)
    return layers


@pytest.fixture
def schema():
    return build_schema("type Query { ping: String }")


class TestFormatTypeRef:
    """Tests for format_type_ref."""

    @pytest.mark.parametrize(
        "type_ref, expected",
        [
            (GraphQLString, "String"),
            (GraphQLNonNull(GraphQLString), "String!"),
            (GraphQLList(GraphQLString), "[String]"),
            (GraphQLList(GraphQLNonNull(GraphQLString)), "[String!]"),
            (GraphQLNonNull(GraphQLList(GraphQLNonNull(GraphQLString))), "[String!]!"),
            (GraphQLList(GraphQLList(GraphQLNonNull(GraphQLString))), "[[String!]]"),
        ],
    )
    def test_formats_wrappers(self, type_ref, expected):
        assert format_type_ref(type_ref) == expected

    @pytest.mark.parametrize(
        "type_ref",
        [
            GraphQLNonNull(GraphQLString),
            GraphQLNonNull(GraphQLList(GraphQLNonNull(GraphQLString))),
            GraphQLList(GraphQLNonNull(GraphQLList(GraphQLString))),
            GraphQLNonNull(GraphQLList(GraphQLList(GraphQLNonNull(GraphQLString)))),
        ],
    )
    def test_round_trips_through_parser(self, schema, type_ref):
        text = format_type_ref(type_ref)
        parsed = type_from_ast(schema, parse_type(text))
        assert wrapper_layers(parsed) == wrapper_layers(type_ref)


class TestUnwrap:
    """Tests for unwrap_type_name and nullability."""

    def test_unwraps_nested_wrappers(self):
        type_ref = GraphQLNonNull(GraphQLList(GraphQLNonNull(GraphQLString)))
        assert unwrap_type_name(type_ref) == "String"

    def test_named_type_is_its_own_base(self):
        assert unwrap_type_name(GraphQLString) == "String"

    def test_non_null_inside_list_counts_as_non_null(self):
        assert is_non_null_field(GraphQLList(GraphQLNonNull(GraphQLString)))
        assert is_non_null_field(GraphQLNonNull(GraphQLString))
        assert not is_non_null_field(GraphQLList(GraphQLString))
        assert not is_non_null_field(GraphQLString)


class TestNaming:
    """Tests for fragment and file naming."""

    def test_fragment_name(self):
        assert fragment_name("User") == "userFragment"
        assert fragment_name("OrderItem") == "orderItemFragment"

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("User", "user"),
            ("UserProfile", "user-profile"),
            ("HTTPServer", "http-server"),
            ("Order2Item", "order2-item"),
            ("String", "string"),
        ],
    )
    def test_kebab_case(self, name, expected):
        assert to_kebab_case(name) == expected

    def test_skip_pattern(self):
        assert SKIP_TYPE_PATTERN.search("UserConnection")
        assert SKIP_TYPE_PATTERN.search("PostEdge")
        assert SKIP_TYPE_PATTERN.search("UserFilter")
        assert SKIP_TYPE_PATTERN.search("OffsetPageInfo")
        assert not SKIP_TYPE_PATTERN.search("User")

    def test_auto_crud_pattern(self):
        assert AUTO_CRUD_PATTERN.match("createOneUser")
        assert AUTO_CRUD_PATTERN.match("findManyPost")
        assert AUTO_CRUD_PATTERN.match("aggregateUser")
        assert not AUTO_CRUD_PATTERN.match("createUser")
        assert not AUTO_CRUD_PATTERN.match("userFindMany")
