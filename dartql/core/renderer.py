"""Renders fragment and operation definitions through Jinja2 templates.

Supports custom templates via the template_dir parameter:
    renderer = Renderer(template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from .inspector import fragment_name, lower_first, to_kebab_case

FRAGMENT_TEMPLATE = "fragment.gql.j2"
OPERATION_TEMPLATE = "operation.gql.j2"


class Renderer:
    """Turns fragment and operation parts into GraphQL text.

    Available templates to override:
        - fragment.gql.j2: receives type_name and selections
        - operation.gql.j2: receives kind, name, variables, field_name,
          arguments and spreads
    """

    def __init__(self, template_dir: str | None = None):
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("dartql", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )
        self.env.filters["fragment_name"] = fragment_name
        self.env.filters["lower_first"] = lower_first
        self.env.filters["kebab_case"] = to_kebab_case

    def render_fragment(self, type_name: str, selections: list[str]) -> str:
        template = self.env.get_template(FRAGMENT_TEMPLATE)
        return template.render(type_name=type_name, selections=selections).strip()

    def render_operation(
        self,
        kind: str,
        name: str,
        field_name: str,
        variables: str = "",
        arguments: str = "",
        spreads: list[str] | None = None,
    ) -> str:
        """Render one operation definition.

        Args:
            kind: 'query', 'mutation' or 'subscription'
            name: Operation name
            field_name: Root field called by the operation
            variables: Parenthesised variable declarations, or ''
            arguments: Parenthesised call-site arguments, or ''
            spreads: Fragment names selected on the root field; empty for
                scalar and enum results
        """
        template = self.env.get_template(OPERATION_TEMPLATE)
        return template.render(
            kind=kind,
            name=name,
            field_name=field_name,
            variables=variables,
            arguments=arguments,
            spreads=spreads or [],
        ).strip()
