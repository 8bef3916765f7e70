"""Operation builder.

Constructs one GraphQL query/mutation/subscription per root field, with
variables mirroring the field's declared arguments.
"""

import logging

from graphql import GraphQLField, GraphQLInputObjectType

from .inspector import (
    CURSOR_SCALAR,
    format_type_ref,
    fragment_name,
    is_simple_type,
    unwrap_type_name,
)
from .ir import OperationDefinition
from .renderer import Renderer

logger = logging.getLogger(__name__)


class OperationBuilder:
    """Builds operation definitions for root fields."""

    def __init__(
        self,
        renderer: Renderer,
        input_types: dict[str, GraphQLInputObjectType] | None = None,
    ):
        self.renderer = renderer
        self.input_types = input_types or {}

    def build(
        self,
        kind: str,
        name: str,
        field_name: str,
        gql_field: GraphQLField,
        return_type: str,
    ) -> OperationDefinition:
        """Build the operation calling ``field_name``.

        Args:
            kind: 'query', 'mutation' or 'subscription'
            name: Operation name
            field_name: Root field name
            gql_field: The root field definition
            return_type: Name of the field's unwrapped return type

        Returns:
            The operation, with its rendered text
        """
        variables, arguments = self.build_variables(gql_field)
        spreads = [] if is_simple_type(gql_field.type) else [fragment_name(return_type)]

        operation = OperationDefinition(
            kind=kind,
            name=name,
            field_name=field_name,
            return_type=return_type,
            variables=variables,
            arguments=arguments,
            spreads=spreads,
        )
        operation.text = self.renderer.render_operation(
            kind=kind,
            name=name,
            field_name=field_name,
            variables=operation.variables_str,
            arguments=operation.arguments_str,
            spreads=spreads,
        )
        return operation

    def build_variables(self, gql_field: GraphQLField) -> tuple[list[str], list[str]]:
        """Return (variable declarations, call-site assignments) in argument order."""
        variables = []
        arguments = []
        for arg_name, arg in (gql_field.args or {}).items():
            arg_type_name = unwrap_type_name(arg.type)
            if arg_type_name == CURSOR_SCALAR:
                continue
            if arg_name.lower() == "input" and arg_type_name in self.input_types:
                # Passed through as one variable, like any other argument
                logger.debug("Argument '%s' takes input object %s", arg_name, arg_type_name)
            variables.append(f"${arg_name}: {format_type_ref(arg.type)}")
            arguments.append(f"{arg_name}: ${arg_name}")
        return variables, arguments
