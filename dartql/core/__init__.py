"""Core modules for GraphQL document generation."""

from .auth import Auth, BearerAuth, CombinedAuth, HeaderAuth, NoAuth
from .build_runner import run_build_runner
from .cycles import CycleResolver, FragmentGraph
from .documents import DocumentMerger, index_existing_operations, parse_document
from .errors import DartQLError, SchemaFetchError, SchemaParseError
from .fragments import FragmentBuilder
from .generator import DocumentGenerator, GeneratorConfig, generate_documents
from .inspector import format_type_ref, fragment_name, to_kebab_case, unwrap_type_name
from .introspection import SchemaFetcher, fetch_schema_sdl
from .ir import (
    DocumentOperation,
    ExistingOperation,
    FragmentDefinition,
    GenerationResult,
    OperationDefinition,
)
from .operations import OperationBuilder
from .parser import SchemaParser
from .renderer import Renderer
from .scalars import minimal_scalar_fields
from .writer import OutputWriter

__all__ = [
    # Auth
    "Auth",
    "BearerAuth",
    "CombinedAuth",
    "HeaderAuth",
    "NoAuth",
    # Errors
    "DartQLError",
    "SchemaFetchError",
    "SchemaParseError",
    # IR types
    "DocumentOperation",
    "ExistingOperation",
    "FragmentDefinition",
    "GenerationResult",
    "OperationDefinition",
    # Schema
    "SchemaParser",
    "SchemaFetcher",
    "fetch_schema_sdl",
    "format_type_ref",
    "fragment_name",
    "to_kebab_case",
    "unwrap_type_name",
    # Builders
    "CycleResolver",
    "DocumentMerger",
    "FragmentBuilder",
    "FragmentGraph",
    "OperationBuilder",
    "Renderer",
    "index_existing_operations",
    "minimal_scalar_fields",
    "parse_document",
    # Generation
    "DocumentGenerator",
    "GeneratorConfig",
    "OutputWriter",
    "generate_documents",
    "run_build_runner",
]
