"""Helpers for inspecting graphql-core type references and naming things.

Type references are unwrapped through ``GraphQLNonNull``/``GraphQLList``
layers and rendered back into SDL notation. The naming helpers decide
fragment names and output file names.
"""

import re

from graphql import (
    GraphQLNamedType,
    GraphQLType,
    is_enum_type,
    is_list_type,
    is_non_null_type,
    is_scalar_type,
)

BUILTIN_SCALARS = ("Boolean", "Int", "Float", "ID", "String")

# Scalar used for pagination cursors; never selected nor passed as a variable
CURSOR_SCALAR = "ConnectionCursor"

# Pagination/filtering scaffolding types
SKIP_TYPE_PATTERN = re.compile(r"Filter|Edge|Connection|PageInfo|OffsetPageInfo|Sort")
INLINE_TYPE_PATTERN = re.compile(r"Filter|Edge|Connection|PageInfo|Sort")

# Root fields generated by CRUD resolvers (Prisma/NestJS style)
AUTO_CRUD_PATTERN = re.compile(
    r"^(createOne|updateOne|deleteOne|upsertOne|aggregate|findMany|groupBy)"
)

# Pagination field names expected to repeat across nested paths
IGNORED_DUPLICATE_FIELDS = frozenset({"nodes", "pageInfo", "totalCount"})


def unwrap_type(type_: GraphQLType) -> GraphQLNamedType:
    """Strip non-null and list wrappers, returning the named type."""
    while hasattr(type_, "of_type"):
        type_ = type_.of_type
    return type_


def unwrap_type_name(type_: GraphQLType) -> str:
    """Return the name of the innermost named type."""
    return unwrap_type(type_).name


def format_type_ref(type_: GraphQLType) -> str:
    """Render a type reference in SDL notation, e.g. ``[String!]!``."""
    if is_non_null_type(type_):
        return f"{format_type_ref(type_.of_type)}!"
    if is_list_type(type_):
        return f"[{format_type_ref(type_.of_type)}]"
    return type_.name


def is_non_null_field(type_: GraphQLType) -> bool:
    """Check for non-null at the outer layer or directly inside a list."""
    if is_non_null_type(type_):
        return True
    return is_list_type(type_) and is_non_null_type(type_.of_type)


def is_simple_type(type_: GraphQLType) -> bool:
    """Check if a type has no sub-selections (scalar or enum)."""
    named = unwrap_type(type_)
    return is_scalar_type(named) or is_enum_type(named) or named.name in BUILTIN_SCALARS


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def upper_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def fragment_name(type_name: str) -> str:
    """Name of the fragment generated for a type: ``User`` -> ``userFragment``."""
    return f"{lower_first(type_name)}Fragment"


def to_kebab_case(name: str) -> str:
    """Convert PascalCase or camelCase to kebab-case."""
    s1 = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", name)
    return re.sub(r"([A-Z])([A-Z][a-z])", r"\1-\2", s1).lower()
