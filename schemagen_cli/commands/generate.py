"""Artifact generation commands - render JSON, GraphQL and TypeScript from a database schema."""

import json
from typing import Any, Dict, List, Optional

import typer
from typing_extensions import Annotated
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ..config import settings
from ..database import SchemaAssembler
from ..errors import ConfigurationError, SchemaGenError
from ..options import RenderOptions
from ..render import run
from .common import assembly_options, console, exit_with_error, open_source, timestamp_fields


def parse_additional(values: Optional[List[str]]) -> Dict[str, Any]:
    """Parse ``KEY=VALUE`` pairs; values are read as JSON when possible."""
    additional: Dict[str, Any] = {}
    for item in values or []:
        key, sep, raw = item.partition("=")
        if not sep or not key.strip():
            raise ConfigurationError(f"Expected KEY=VALUE, got: {item}")
        try:
            additional[key.strip()] = json.loads(raw)
        except ValueError:
            additional[key.strip()] = raw
    return additional


def generate(
    source: str = typer.Argument(..., help="SQLite/DuckDB database file or JSON schema snapshot"),
    source_type: Optional[str] = typer.Option(None, "--source-type", "-t", help="sqlite, duckdb or snapshot (default: from file name)"),
    dialect: Optional[str] = typer.Option(settings.dialect, "--dialect", help="Dialect of a snapshot source"),
    output_dir: str = typer.Option(settings.output_dir, "--output", "-o", help="Directory to write artifacts to"),
    target: Annotated[Optional[List[str]], typer.Option(
        "--target", "-T",
        help="json, graphql, resolvers, typescript or all. Can be specified multiple times."
    )] = None,
    schema: Optional[str] = typer.Option(None, "--schema", "-s", help="Schema to introspect"),
    tables: Annotated[Optional[List[str]], typer.Option(
        "--tables", help="Only these tables (comma separated or repeated)"
    )] = None,
    skip_tables: Annotated[Optional[List[str]], typer.Option(
        "--skip-tables", help="Skip these tables (ignored when --tables is given)"
    )] = None,
    camel_case: bool = typer.Option(settings.camel_case, "--camel-case/--no-camel-case", help="camelCase table and column names"),
    camel_case_file_names: bool = typer.Option(settings.camel_case_file_names, "--camel-case-file-names", help="camelCase output file names"),
    typescript: bool = typer.Option(settings.typescript, "--typescript", help="Also write db.d.ts and db.tables.ts"),
    indentation: int = typer.Option(settings.indentation, "--indentation", help="Indentation characters per level"),
    spaces: bool = typer.Option(settings.use_spaces, "--spaces/--tabs", help="Indent with spaces or tabs"),
    timestamps: bool = typer.Option(False, "--timestamps", help="Leave timestamp columns out of the artifacts"),
    created_at: str = typer.Option("createdAt", "--created-at", help="Created-at column name (empty to keep it)"),
    updated_at: str = typer.Option("updatedAt", "--updated-at", help="Updated-at column name (empty to keep it)"),
    deleted_at: str = typer.Option("deletedAt", "--deleted-at", help="Deleted-at column name (empty to keep it)"),
    additional: Annotated[Optional[List[str]], typer.Option(
        "--additional", "-a", help="Extra KEY=VALUE added to every JSON manifest. Can be specified multiple times."
    )] = None,
    find_method: str = typer.Option(settings.resolver_find_method, "--find-method", help="findByPk or findById"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Render but don't write any files"),
):
    """
    Generate artifacts from a database schema.

    Examples:
        schemagen generate app.db -o ./out
        schemagen generate app.db --target json --camel-case
        schemagen generate snapshot.json --dialect postgres --typescript
    """
    console.print(Panel(
        f"[bold blue]Generating artifacts[/bold blue]\n"
        f"Source: {source}\n"
        f"Targets: {', '.join(target or ['all'])}",
        title="Schema Generator"
    ))

    stamps = timestamp_fields(timestamps, created_at, updated_at, deleted_at)
    try:
        render_options = RenderOptions(
            camel_case=camel_case,
            camel_case_file_names=camel_case_file_names,
            typescript=typescript,
            indentation=indentation,
            use_spaces=spaces,
            timestamps=stamps,
            additional=parse_additional(additional),
            resolver_find_method=find_method,
        )
        schema_source = open_source(source, source_type, dialect)
    except SchemaGenError as e:
        exit_with_error(e.message)

    with schema_source, Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Introspecting and rendering...", total=None)
        try:
            result = run(
                schema_source,
                assembly_options(schema, tables, skip_tables, stamps),
                render_options,
                targets=target,
                output_dir=None if dry_run else output_dir,
            )
        except SchemaGenError as e:
            exit_with_error(e.message)

    try:
        files = result.files
    except SchemaGenError as e:
        exit_with_error(e.message)
    summary = Table(title="Rendered Artifacts")
    summary.add_column("File", style="cyan")
    summary.add_column("Target", style="green")
    summary.add_column("Bytes", justify="right")
    for target_name, target_files in result.artifacts.items():
        for name, text in target_files.items():
            summary.add_row(name, target_name, str(len(text.encode("utf-8"))))
    console.print(summary)

    if dry_run:
        console.print(f"[yellow]Dry run: {len(files)} files not written[/yellow]")
    else:
        console.print(f"[green]Wrote {len(result.written)} files to {output_dir}[/green]")

    if not result.success:
        exit_with_error(f"Error: {result.error.message}")


def tables(
    source: str = typer.Argument(..., help="SQLite/DuckDB database file or JSON schema snapshot"),
    source_type: Optional[str] = typer.Option(None, "--source-type", "-t", help="sqlite, duckdb or snapshot (default: from file name)"),
    dialect: Optional[str] = typer.Option(settings.dialect, "--dialect", help="Dialect of a snapshot source"),
    schema: Optional[str] = typer.Option(None, "--schema", "-s", help="Schema to introspect"),
):
    """List the tables of a database with their keys."""
    try:
        schema_source = open_source(source, source_type, dialect)
        with schema_source:
            result = SchemaAssembler(schema_source, assembly_options(schema, None, None, timestamp_fields(False))).assemble()
    except SchemaGenError as e:
        exit_with_error(e.message)

    table = Table(title=f"Tables in {schema_source.database_name}")
    table.add_column("Table", style="cyan")
    table.add_column("Columns", justify="right")
    table.add_column("Primary Key", style="green")
    table.add_column("Foreign Keys", style="yellow")
    for name, table_schema in result.tables.items():
        table.add_row(
            name,
            str(len(table_schema.columns)),
            ", ".join(table_schema.primary_key_columns),
            ", ".join(
                f"{c.name} -> {c.foreign_key.references.target_table}" for c in table_schema.foreign_key_columns
            ),
        )
    console.print(table)

    for error in result.errors:
        console.print(f"[red]{error.table}: {error.message}[/red]")
    if not result.ok:
        raise typer.Exit(1)
