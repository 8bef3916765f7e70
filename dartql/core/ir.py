"""Intermediate Representation (IR) for generated GraphQL documents.

This module defines dataclasses for the fragments and operations derived
from a schema, the operation blocks parsed out of existing document files,
and the final set of files produced by a generation pass.
"""

from dataclasses import dataclass, field


@dataclass
class FragmentDefinition:
    """A fragment generated for one composite type."""
    type_name: str
    selections: list[str] = field(default_factory=list)
    # One entry per emitted spread (type names, duplicates kept)
    dependencies: list[str] = field(default_factory=list)
    text: str = ""

    @property
    def line_count(self) -> int:
        return len(self.text.split("\n"))


@dataclass
class OperationDefinition:
    """A generated query, mutation or subscription for one root field."""
    kind: str  # 'query', 'mutation' or 'subscription'
    name: str
    field_name: str
    return_type: str
    variables: list[str] = field(default_factory=list)  # "$id: ID!"
    arguments: list[str] = field(default_factory=list)  # "id: $id"
    spreads: list[str] = field(default_factory=list)  # fragment names
    text: str = ""

    @property
    def variables_str(self) -> str:
        """Return the parenthesised variable declarations, or ''."""
        return f"({', '.join(self.variables)})" if self.variables else ""

    @property
    def arguments_str(self) -> str:
        """Return the parenthesised call-site arguments, or ''."""
        return f"({', '.join(self.arguments)})" if self.arguments else ""

    @property
    def uses_fragments(self) -> bool:
        return bool(self.spreads)


@dataclass
class DocumentOperation:
    """A named operation block found in an existing document file.

    ``start``/``end`` are character offsets of the whole block in the
    source text, so the block can be replaced without touching anything
    around it.
    """
    kind: str
    name: str
    field_name: str
    alias: str | None = None  # root field alias, e.g. "u" in "u: user"
    variables: str = ""  # "($id: ID!)" as written, or ''
    arguments: str = ""  # "(id: $id)" as written, or ''
    spreads: list[str] = field(default_factory=list)
    start: int = 0
    end: int = 0


@dataclass
class ExistingOperation:
    """Where an operation for a root field already lives."""
    name: str
    file: str


@dataclass
class GenerationResult:
    """Files produced by one generation pass.

    Keys are file names relative to their directory, values the full
    file text (always ending with exactly one newline).
    """
    fragments: dict[str, str] = field(default_factory=dict)
    documents: dict[str, str] = field(default_factory=dict)

    FRAGMENTS_DIR = "fragments"
    DOCUMENTS_DIR = "documents"

    @property
    def files(self) -> dict[str, str]:
        """Return every file keyed by its path relative to the output root."""
        result = {}
        for name, text in self.fragments.items():
            result[f"{self.FRAGMENTS_DIR}/{name}"] = text
        for name, text in self.documents.items():
            result[f"{self.DOCUMENTS_DIR}/{name}"] = text
        return result
