"""GraphQL schema loading using graphql-core.

Parses SDL text into a ``GraphQLSchema`` and exposes the lookups the
generators need.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from graphql import (
    GraphQLError,
    GraphQLInputObjectType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    build_ast_schema,
    is_input_object_type,
    parse,
)

from .errors import SchemaParseError

logger = logging.getLogger(__name__)

OPERATION_KINDS = ("query", "mutation", "subscription")


class SchemaParser:
    """Wraps a parsed schema for the duration of one generation run."""

    def __init__(self, schema: GraphQLSchema):
        self.schema = schema
        self._input_types: dict[str, GraphQLInputObjectType] | None = None

    @classmethod
    def from_sdl(cls, sdl: str) -> "SchemaParser":
        """Parse schema definition language text.

        Raises:
            SchemaParseError: If the text is empty or is not a valid schema
        """
        if not sdl or not sdl.strip():
            raise SchemaParseError("No schema available: the schema definition is empty")
        try:
            schema = build_ast_schema(parse(sdl))
        except GraphQLError as e:
            raise SchemaParseError(f"Invalid schema: {e.message}") from e
        except TypeError as e:
            # graphql-core reports unknown type references as TypeError
            raise SchemaParseError(f"Invalid schema: {e}") from e
        return cls(schema)

    @classmethod
    def from_path(cls, path: str | Path) -> "SchemaParser":
        """Read and parse an SDL file."""
        path = Path(path)
        try:
            sdl = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SchemaParseError(f"Cannot read schema file {path}: {e}") from e
        logger.debug("Loaded schema from %s (%d bytes)", path, len(sdl))
        return cls.from_sdl(sdl)

    def get_type(self, name: str) -> GraphQLNamedType | None:
        """Look up a named type; unknown names return None."""
        return self.schema.get_type(name)

    def root_types(self) -> Iterator[tuple[str, GraphQLObjectType]]:
        """Yield (operation kind, root type) for each root the schema defines."""
        roots = (
            self.schema.query_type,
            self.schema.mutation_type,
            self.schema.subscription_type,
        )
        for kind, root in zip(OPERATION_KINDS, roots):
            if root is not None:
                yield kind, root

    @property
    def root_type_names(self) -> set[str]:
        return {root.name for _, root in self.root_types()}

    @property
    def type_map(self) -> dict[str, GraphQLNamedType]:
        return self.schema.type_map

    @property
    def input_types(self) -> dict[str, GraphQLInputObjectType]:
        """Index of input object types by name."""
        if self._input_types is None:
            self._input_types = {
                name: type_
                for name, type_ in self.schema.type_map.items()
                if not name.startswith("__") and is_input_object_type(type_)
            }
        return self._input_types

    def possible_types(self, abstract_type) -> list[GraphQLObjectType]:
        """Concrete types implementing an interface or belonging to a union."""
        return list(self.schema.get_possible_types(abstract_type))
