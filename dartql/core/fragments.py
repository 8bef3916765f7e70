"""Fragment builder.

Derives one fragment per composite type. Nested object types are
reached through spreads of their own fragments; only pagination and
filtering scaffolding (connections, edges, filters, sort inputs) is
expanded inline, bounded by a recursion ceiling.
"""

import logging
import textwrap
from dataclasses import dataclass, field

from graphql import GraphQLNamedType, is_abstract_type, is_object_type

from .inspector import (
    CURSOR_SCALAR,
    IGNORED_DUPLICATE_FIELDS,
    INLINE_TYPE_PATTERN,
    fragment_name,
    unwrap_type_name,
)
from .ir import FragmentDefinition
from .parser import SchemaParser
from .renderer import Renderer

logger = logging.getLogger(__name__)

MAX_DEPTH = 5


def nest(name: str, selections: list[str]) -> str:
    """Wrap selections in a ``name { ... }`` block."""
    body = "\n".join(textwrap.indent(selection, "  ") for selection in selections)
    return f"{name} {{\n{body}\n}}"


@dataclass
class FragmentContext:
    """State shared by every level of one fragment's traversal."""
    type_name: str
    field_paths: dict[str, str] = field(default_factory=dict)
    dependencies: list[str] = field(default_factory=list)

    def check_duplicate(self, field_name: str, path: str):
        """Warn when a field name shows up again under another path."""
        if field_name in IGNORED_DUPLICATE_FIELDS:
            return
        first_path = self.field_paths.get(field_name)
        if first_path is None:
            self.field_paths[field_name] = path
        elif first_path != path:
            logger.warning(
                "Duplicate field '%s' in %s: appears at '%s' and '%s'",
                field_name,
                fragment_name(self.type_name),
                path,
                first_path,
            )


class FragmentBuilder:
    """Builds fragment definitions for the composite types of a schema."""

    def __init__(
        self,
        schema: SchemaParser,
        renderer: Renderer,
        max_depth: int = MAX_DEPTH,
    ):
        self.schema = schema
        self.renderer = renderer
        self.max_depth = max_depth

    def build(self, type_name: str) -> FragmentDefinition | None:
        """Build the fragment for a type, or None if it selects nothing."""
        type_ = self.schema.get_type(type_name)
        if type_ is None or not hasattr(type_, "fields"):
            return None

        context = FragmentContext(type_name=type_name)
        selections = self.build_selections(type_, context)
        if not selections:
            return None

        return FragmentDefinition(
            type_name=type_name,
            selections=selections,
            dependencies=context.dependencies,
            text=self.renderer.render_fragment(type_name, selections),
        )

    def build_selections(
        self,
        type_: GraphQLNamedType,
        context: FragmentContext,
        depth: int = 0,
        expanded: frozenset[str] = frozenset(),
        parent_path: str = "",
    ) -> list[str]:
        """Derive the ordered selections for one level of a type.

        Args:
            type_: Type whose fields are selected
            context: Duplicate tracking and spread dependencies for the fragment
            depth: Inline expansion depth; past max_depth nothing is selected
            expanded: Types already expanded inline on the current branch
            parent_path: Dotted path of the enclosing field
        """
        if not hasattr(type_, "fields") or depth > self.max_depth:
            return []

        selections = []

        # Interface fields are selected through the interface's fragment
        interface_fields: set[str] = set()
        for interface in getattr(type_, "interfaces", None) or ():
            interface_fields.update(interface.fields)
            selections.append(self._spread(interface.name, context))

        for name, gql_field in type_.fields.items():
            field_type_name = unwrap_type_name(gql_field.type)
            nested_type = self.schema.get_type(field_type_name)
            path = f"{parent_path}.{name}" if parent_path else name

            context.check_duplicate(name, path)

            if field_type_name in expanded:
                continue
            if name in interface_fields:
                continue
            if field_type_name == CURSOR_SCALAR:
                continue

            if nested_type is not None and is_abstract_type(nested_type):
                selections.append(self._abstract_selection(name, nested_type, context))
            elif nested_type is not None and is_object_type(nested_type):
                if not INLINE_TYPE_PATTERN.search(field_type_name):
                    selections.append(nest(name, [self._spread(field_type_name, context)]))
                    continue
                inner = self.build_selections(
                    nested_type,
                    context,
                    depth + 1,
                    expanded | {field_type_name},
                    path,
                )
                selections.append(nest(name, inner) if inner else name)
            else:
                selections.append(name)

        return selections

    def _abstract_selection(self, name: str, abstract_type, context: FragmentContext) -> str:
        """Select every concrete type of an interface or union field."""
        inline_fragments = [
            nest(f"... on {possible.name}", [self._spread(possible.name, context)])
            for possible in self.schema.possible_types(abstract_type)
        ]
        if not inline_fragments:
            logger.debug("%s has no concrete types; selecting __typename", abstract_type.name)
            inline_fragments = ["__typename"]
        return nest(name, inline_fragments)

    @staticmethod
    def _spread(type_name: str, context: FragmentContext) -> str:
        context.dependencies.append(type_name)
        return f"...{fragment_name(type_name)}"
