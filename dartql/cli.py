"""Command-line interface for dart-ql."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .core.auth import BearerAuth, CombinedAuth, HeaderAuth
from .core.build_runner import run_build_runner
from .core.errors import DartQLError
from .core.generator import DocumentGenerator, GeneratorConfig
from .core.introspection import fetch_schema_sdl
from .core.parser import SchemaParser
from .core.writer import OutputWriter, write_atomic

DEFAULT_OUTPUT = Path("lib") / "core" / "graphql"
DOWNLOADED_SCHEMA = "schema.gql"


@click.command(context_settings={"auto_envvar_prefix": "DARTQL"})
@click.version_option(__version__)
@click.option(
    "--schema",
    "-s",
    type=click.Path(dir_okay=False),
    help="Path to GraphQL schema file.",
)
@click.option(
    "--from-url",
    "-u",
    "from_url",
    help="Download schema from a GraphQL endpoint, e.g. http://localhost:4001/graphql.",
)
@click.option(
    "--out",
    "-o",
    type=click.Path(file_okay=False),
    default=str(DEFAULT_OUTPUT),
    show_default=True,
    help="Output folder for generated files.",
)
@click.option(
    "--build-runner",
    "-b",
    is_flag=True,
    help="Run Flutter build_runner after generation.",
)
@click.option(
    "--raw",
    "-r",
    is_flag=True,
    help="Keep auto-generated CRUD operations (createOne*, findMany*, ...).",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Extra request header for --from-url, as 'Name: value'. Repeatable.",
)
@click.option("--token", help="Bearer token for --from-url.")
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding fragment.gql.j2 / operation.gql.j2.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def main(
    schema: str | None,
    from_url: str | None,
    out: str,
    build_runner: bool,
    raw: bool,
    headers: tuple[str, ...],
    token: str | None,
    template_dir: str | None,
    verbose: bool,
):
    """Generate GraphQL fragments and documents for Ferry/Flutter projects.

    Examples:

        dart-ql --schema ./schema.graphql --out ./lib/core/graphql

        dart-ql -u http://localhost:4001/graphql -b

        dart-ql -s ./schema.graphql --raw
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    output_path = Path(out).resolve()

    if from_url:
        schema = str(_download_schema(from_url, output_path, headers, token))

    if not schema:
        raise click.UsageError("Please provide a schema path with --schema or use --from-url <url>")

    try:
        click.echo("Parsing schema...")
        parser = SchemaParser.from_path(schema)

        writer = OutputWriter(output_path)
        existing = writer.read_existing_documents()
        if verbose:
            click.echo(f"  Existing documents: {len(existing)}")

        click.echo("Generating documents...")
        config = GeneratorConfig(raw=raw, template_dir=template_dir)
        result = DocumentGenerator(parser, config, existing).generate()
        written = writer.write(result)
    except DartQLError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if verbose:
        click.echo(f"  Fragments: {len(result.fragments)}")
        click.echo(f"  Documents: {len(result.documents)}")
        click.echo(f"  Files written: {len(written)}")
    click.echo(f"Done! Generated GQL fragments and operations in {output_path}{' (raw mode)' if raw else ''}")

    if build_runner:
        click.echo("Running Flutter build_runner...")
        status = run_build_runner()
        if status != 0:
            click.echo(f"Error running Flutter build_runner (exit status {status})", err=True)
            sys.exit(status)
        click.echo("Flutter build_runner completed successfully!")


def _download_schema(
    url: str,
    output_path: Path,
    headers: tuple[str, ...],
    token: str | None,
) -> Path:
    """Fetch the remote schema into ``<out>/schema.gql`` and return its path."""
    handlers = []
    try:
        if headers:
            handlers.append(HeaderAuth.from_strings(headers))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--header") from e
    if token:
        handlers.append(BearerAuth(token))

    click.echo(f"Fetching schema from {url}...")
    try:
        sdl = fetch_schema_sdl(url, auth=CombinedAuth(*handlers))
    except DartQLError as e:
        click.echo(f"Failed to download schema: {e}", err=True)
        sys.exit(1)

    schema_path = output_path / DOWNLOADED_SCHEMA
    write_atomic(schema_path, sdl.strip() + "\n")
    click.echo(f"Schema downloaded to {schema_path}")
    return schema_path


if __name__ == "__main__":
    main()
