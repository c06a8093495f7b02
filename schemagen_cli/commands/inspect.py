"""Schema inspection command - shows the canonical model the renderers work from."""

import json
from typing import List, Optional

import typer
from typing_extensions import Annotated
from rich.table import Table

from ..config import settings
from ..database import SchemaAssembler, TableSchema
from ..errors import SchemaGenError
from .common import assembly_options, console, exit_with_error, open_source, timestamp_fields


def _flag(value: bool) -> str:
    return "[green]yes[/green]" if value else ""


def table_view(table_schema: TableSchema) -> Table:
    """Rich table with one row per column."""
    view = Table(title=table_schema.name)
    view.add_column("Column", style="cyan")
    view.add_column("Raw Type")
    view.add_column("Semantic", style="magenta")
    view.add_column("Null")
    view.add_column("PK")
    view.add_column("Unique")
    view.add_column("Serial")
    view.add_column("Default", style="yellow")
    view.add_column("References", style="green")

    for column in table_schema.columns:
        semantic = column.semantic_type.value
        if column.is_enum:
            semantic += f" ({', '.join(column.enum_options)})"
        elif column.is_fractional:
            semantic += " (fractional)"
        references = ""
        if column.is_foreign_key:
            refs = column.foreign_key.references
            references = f"{refs.target_table}.{refs.target_column}"
        view.add_row(
            column.name,
            column.raw_type,
            semantic,
            _flag(column.nullable),
            _flag(column.is_primary_key),
            _flag(column.is_unique),
            _flag(column.is_serial_key),
            column.default.to_sql() or "",
            references,
        )
    return view


def inspect(
    source: str = typer.Argument(..., help="SQLite/DuckDB database file or JSON schema snapshot"),
    source_type: Optional[str] = typer.Option(None, "--source-type", "-t", help="sqlite, duckdb or snapshot (default: from file name)"),
    dialect: Optional[str] = typer.Option(settings.dialect, "--dialect", help="Dialect of a snapshot source"),
    schema: Optional[str] = typer.Option(None, "--schema", "-s", help="Schema to introspect"),
    tables: Annotated[Optional[List[str]], typer.Option(
        "--tables", help="Only these tables (comma separated or repeated)"
    )] = None,
    as_json: bool = typer.Option(False, "--json", help="Print the model as JSON"),
):
    """
    Show the normalized schema: semantic types, keys, defaults and relations.

    Examples:
        schemagen inspect app.db
        schemagen inspect app.db --tables users,orders --json
    """
    try:
        schema_source = open_source(source, source_type, dialect)
        with schema_source:
            options = assembly_options(schema, tables, None, timestamp_fields(False))
            result = SchemaAssembler(schema_source, options).assemble()
    except SchemaGenError as e:
        exit_with_error(e.message)

    if as_json:
        payload = {
            "database": schema_source.database_name,
            "tables": [t.to_dict() for t in result.tables.values()],
            "errors": [e.to_dict() for e in result.errors],
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        for table_schema in result.tables.values():
            console.print(table_view(table_schema))
        for error in result.errors:
            console.print(f"[red]{error.table}: {error.message}[/red]")

    if not result.ok:
        raise typer.Exit(1)
