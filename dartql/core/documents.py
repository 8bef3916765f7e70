"""Operation documents: parsing existing files and merging new operations.

Existing documents are parsed with graphql-core so each named operation
becomes a ``DocumentOperation`` with source offsets. Merging rewrites only
the block for the root field being generated; everything else in the file
is left exactly as written.
"""

import logging

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentSpreadNode,
    GraphQLSyntaxError,
    OperationDefinitionNode,
    SelectionSetNode,
    parse,
)
from graphql.language import Lexer, Source, TokenKind

from .ir import DocumentOperation, ExistingOperation, OperationDefinition
from .renderer import Renderer

logger = logging.getLogger(__name__)

DEFINITION_KEYWORDS = frozenset({
    "query", "mutation", "subscription", "fragment",
    "schema", "scalar", "type", "interface", "union", "enum", "input",
    "directive", "extend",
})


def parse_document(text: str, file_name: str = "<document>") -> list[DocumentOperation]:
    """Return the named operations of a document, in source order.

    When the document as a whole is not valid GraphQL, each top-level
    definition is parsed on its own; definitions that still fail are
    logged and skipped.
    """
    if not text or not text.strip():
        return []
    try:
        document = parse(text)
    except GraphQLSyntaxError as e:
        logger.warning("Cannot parse %s as a whole, reading definitions one by one: %s", file_name, e.message)
        return _parse_definitions(text, file_name)
    return _collect_operations(document, text)


def _parse_definitions(text: str, file_name: str) -> list[DocumentOperation]:
    operations = []
    for start, end in definition_spans(text):
        chunk = text[start:end]
        try:
            document = parse(chunk)
        except GraphQLSyntaxError as e:
            line = text.count("\n", 0, start) + 1
            logger.warning("Skipping unparseable definition at %s:%d: %s", file_name, line, e.message)
            continue
        operations.extend(_collect_operations(document, chunk, offset=start))
    return operations


def definition_spans(text: str) -> list[tuple[int, int]]:
    """Split a document into (start, end) offsets of its top-level definitions.

    A definition ends when its braces close. A definition keyword at the
    start of a line also starts a new one, so an unclosed block does not
    swallow the definitions written after it.
    """
    lexer = Lexer(Source(text))
    spans = []
    start = None
    depth = 0
    try:
        token = lexer.advance()
        while token.kind != TokenKind.EOF:
            if (
                start is not None
                and token.kind == TokenKind.NAME
                and token.column == 1
                and token.value in DEFINITION_KEYWORDS
            ):
                spans.append((start, token.start))
                start = None
                depth = 0
            if start is None:
                start = token.start
            if token.kind == TokenKind.BRACE_L:
                depth += 1
            elif token.kind == TokenKind.BRACE_R:
                depth -= 1
                if depth <= 0:
                    spans.append((start, token.end))
                    start = None
                    depth = 0
            token = lexer.advance()
    except GraphQLSyntaxError:
        # Unlexable text runs to the end of the document
        if start is None:
            start = lexer.token.end
    if start is not None:
        spans.append((start, len(text)))
    return spans


def _collect_operations(
    document: DocumentNode, text: str, offset: int = 0
) -> list[DocumentOperation]:
    operations = []
    for definition in document.definitions:
        if not isinstance(definition, OperationDefinitionNode) or definition.name is None:
            continue
        root = _root_field(definition.selection_set)
        if root is None:
            continue

        operations.append(
            DocumentOperation(
                kind=definition.operation.value,
                name=definition.name.value,
                field_name=root.name.value,
                alias=root.alias.value if root.alias else None,
                variables=text[definition.name.loc.end:definition.selection_set.loc.start].strip(),
                arguments=_call_arguments(text, root),
                spreads=_root_spreads(root),
                start=definition.loc.start + offset,
                end=definition.loc.end + offset,
            )
        )
    return operations


def _root_field(selection_set: SelectionSetNode) -> FieldNode | None:
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            return selection
    return None


def _call_arguments(text: str, field_node: FieldNode) -> str:
    """The field's argument list exactly as written, e.g. ``(id: $id)``."""
    end = field_node.selection_set.loc.start if field_node.selection_set else field_node.loc.end
    return text[field_node.name.loc.end:end].strip()


def _root_spreads(field_node: FieldNode) -> list[str]:
    """Fragment spreads selected directly on the root field."""
    if field_node.selection_set is None:
        return []
    return [
        selection.name.value
        for selection in field_node.selection_set.selections
        if isinstance(selection, FragmentSpreadNode)
    ]


def _operation_text(rendered: str) -> str:
    """The operation definition inside rendered template output.

    Templates may emit text around the definition, such as a header
    comment; only the definition itself replaces an existing block.
    """
    try:
        document = parse(rendered)
    except GraphQLSyntaxError:
        return rendered
    for definition in document.definitions:
        if isinstance(definition, OperationDefinitionNode):
            return rendered[definition.loc.start:definition.loc.end]
    return rendered


def index_existing_operations(documents: dict[str, str]) -> dict[str, ExistingOperation]:
    """Map each root field to the operation name and file already used for it.

    Files are scanned in name order; a root field found in several places
    keeps the last one.
    """
    index = {}
    for file_name in sorted(documents):
        for block in parse_document(documents[file_name], file_name):
            index[block.field_name] = ExistingOperation(name=block.name, file=file_name)
    return index


class DocumentMerger:
    """Merges a generated operation into an operation document's text."""

    def __init__(self, renderer: Renderer):
        self.renderer = renderer

    def merge(
        self,
        existing: str,
        operation: OperationDefinition,
        file_name: str = "<document>",
    ) -> str:
        """Merge ``operation`` into ``existing`` and return the new file text.

        The first block calling the same root field is rewritten, keeping
        its kind, name, root field alias and call-site arguments and taking
        the new variable list. Operations selecting fragments keep every
        spread the block already had on the root field, followed by any new
        ones. Without a matching block the operation is appended.
        """
        for block in parse_document(existing, file_name):
            if block.field_name != operation.field_name:
                continue

            spreads = []
            if operation.uses_fragments:
                spreads = list(dict.fromkeys(block.spreads + operation.spreads))

            field_name = operation.field_name
            if block.alias:
                field_name = f"{block.alias}: {field_name}"
            rendered = self.renderer.render_operation(
                kind=block.kind,
                name=block.name,
                field_name=field_name,
                variables=operation.variables_str,
                arguments=block.arguments,
                spreads=spreads,
            )
            logger.debug("Updating %s %s in %s", block.kind, block.name, file_name)
            merged = existing[:block.start] + _operation_text(rendered) + existing[block.end:]
            return merged.strip() + "\n"

        logger.debug("Appending %s %s to %s", operation.kind, operation.name, file_name)
        content = existing.strip()
        if not content:
            return operation.text.strip() + "\n"
        return f"{content}\n\n{operation.text.strip()}\n"
