"""Generation pass: schema in, fragment and operation documents out.

Drives the builders over a whole schema:
1. Index operations already present in existing document files
2. Build one operation per eligible root field and merge it into its document
3. Build one fragment per eligible composite type
4. Break fragment cycles
5. Return every file's final text

Nothing here touches the filesystem; see ``writer.OutputWriter``.
"""

import logging
from dataclasses import dataclass

from graphql import is_interface_type, is_object_type

from .cycles import CycleResolver
from .documents import DocumentMerger, index_existing_operations
from .fragments import MAX_DEPTH, FragmentBuilder
from .inspector import AUTO_CRUD_PATTERN, SKIP_TYPE_PATTERN, to_kebab_case, unwrap_type_name
from .ir import FragmentDefinition, GenerationResult
from .operations import OperationBuilder
from .parser import SchemaParser
from .renderer import Renderer

logger = logging.getLogger(__name__)

FRAGMENT_SUFFIX = ".fragment.gql"
DOCUMENT_SUFFIX = ".gql"


@dataclass
class GeneratorConfig:
    """Options for one generation pass."""
    # Keep auto-generated CRUD root fields (createOne*, findMany*, ...)
    raw: bool = False
    max_depth: int = MAX_DEPTH
    template_dir: str | None = None


class DocumentGenerator:
    """Generates fragment files and operation documents for a schema.

    Example:
        generator = DocumentGenerator(
            SchemaParser.from_sdl(sdl),
            existing_documents={"account.gql": "query GetUser { ... }"},
        )
        result = generator.generate()
    """

    def __init__(
        self,
        schema: SchemaParser,
        config: GeneratorConfig | None = None,
        existing_documents: dict[str, str] | None = None,
        renderer: Renderer | None = None,
    ):
        """Initialize the generator.

        Args:
            schema: The parsed schema
            config: Generation options
            existing_documents: Current text of each document file, keyed
                by file name
            renderer: Template renderer; built from config.template_dir if omitted
        """
        self.schema = schema
        self.config = config or GeneratorConfig()
        self.existing_documents = dict(existing_documents or {})
        self.renderer = renderer or Renderer(self.config.template_dir)

        self.fragment_builder = FragmentBuilder(schema, self.renderer, self.config.max_depth)
        self.operation_builder = OperationBuilder(self.renderer, schema.input_types)
        self.merger = DocumentMerger(self.renderer)
        self.cycle_resolver = CycleResolver(schema)

    def generate(self) -> GenerationResult:
        """Run the whole pass and return the files to write."""
        result = GenerationResult()
        result.documents = self.generate_documents()

        fragments = self.generate_fragments()
        self.cycle_resolver.resolve(fragments)
        for type_name, fragment in fragments.items():
            file_name = f"{to_kebab_case(type_name)}{FRAGMENT_SUFFIX}"
            result.fragments[file_name] = fragment.text.strip() + "\n"

        logger.info(
            "Generated %d fragments and %d documents%s",
            len(result.fragments),
            len(result.documents),
            " (raw mode)" if self.config.raw else "",
        )
        return result

    def generate_documents(self) -> dict[str, str]:
        """Build every operation and merge it into its document.

        Returns only the documents that were touched.
        """
        existing_ops = index_existing_operations(self.existing_documents)
        contents = dict(self.existing_documents)
        touched: dict[str, str] = {}
        seen_fields: set[str] = set()

        for kind, field_name, gql_field, return_type in self._root_fields():
            if field_name in seen_fields:
                continue
            seen_fields.add(field_name)

            existing = existing_ops.get(field_name)
            if existing:
                op_name = existing.name
                file_name = existing.file
            else:
                op_name = field_name
                file_name = f"{to_kebab_case(return_type)}{DOCUMENT_SUFFIX}"

            operation = self.operation_builder.build(
                kind, op_name, field_name, gql_field, return_type
            )
            merged = self.merger.merge(contents.get(file_name, ""), operation, file_name)
            contents[file_name] = merged
            touched[file_name] = merged

        return touched

    def _root_fields(self):
        """Yield (kind, field name, field, return type) for eligible root fields."""
        for kind, root in self.schema.root_types():
            for field_name, gql_field in root.fields.items():
                return_type = unwrap_type_name(gql_field.type)
                if SKIP_TYPE_PATTERN.search(return_type):
                    continue
                if not self.config.raw and AUTO_CRUD_PATTERN.match(field_name):
                    logger.debug("Skipping CRUD root field %s", field_name)
                    continue
                yield kind, field_name, gql_field, return_type

    def generate_fragments(self) -> dict[str, FragmentDefinition]:
        """Build fragments for every eligible object and interface type."""
        fragments = {}
        for type_name in self.fragment_type_names():
            fragment = self.fragment_builder.build(type_name)
            if fragment is not None:
                fragments[type_name] = fragment
        return fragments

    def fragment_type_names(self) -> list[str]:
        """Names of the types that get a fragment, in schema order."""
        root_names = self.schema.root_type_names
        names = []
        for type_name, type_ in self.schema.type_map.items():
            if type_name.startswith("__") or type_name in root_names:
                continue
            if not (is_object_type(type_) or is_interface_type(type_)):
                continue
            if SKIP_TYPE_PATTERN.search(type_name):
                continue
            names.append(type_name)
        return names


def generate_documents(
    sdl: str,
    existing_documents: dict[str, str] | None = None,
    raw: bool = False,
) -> GenerationResult:
    """Parse ``sdl`` and run one generation pass over it."""
    schema = SchemaParser.from_sdl(sdl)
    generator = DocumentGenerator(
        schema,
        GeneratorConfig(raw=raw),
        existing_documents=existing_documents,
    )
    return generator.generate()
