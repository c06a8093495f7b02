"""Helpers shared by the CLI commands."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from ..database import DuckDBSchemaSource, SchemaSource, SnapshotSchemaSource, SQLiteSchemaSource
from ..errors import ConfigurationError
from ..options import AssemblyOptions, TimestampFields

console = Console()

SOURCE_TYPES = ("sqlite", "duckdb", "snapshot")
DUCKDB_SUFFIXES = {".duckdb", ".ddb"}


def detect_source_type(path: str) -> str:
    """Guess the source type from the file name."""
    if path.startswith("duckdb://"):
        return "duckdb"
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return "snapshot"
    if suffix in DUCKDB_SUFFIXES:
        return "duckdb"
    return "sqlite"


def open_source(path: str, source_type: Optional[str] = None, dialect: Optional[str] = None) -> SchemaSource:
    """Create the schema source for a database file or snapshot."""
    kind = source_type or detect_source_type(path)
    if kind == "sqlite":
        return SQLiteSchemaSource(database_path=path)
    if kind == "duckdb":
        if path.startswith("duckdb://"):
            return DuckDBSchemaSource(connection_string=path)
        return DuckDBSchemaSource(database_path=path)
    if kind == "snapshot":
        return SnapshotSchemaSource.from_file(path, dialect=dialect)
    raise ConfigurationError(
        f"Unknown source type: {kind}",
        details={"source_type": kind, "available": list(SOURCE_TYPES)},
    )


def split_names(values: Optional[List[str]]) -> Optional[List[str]]:
    """Accept both repeated options and comma separated lists."""
    if not values:
        return None
    names = [name.strip() for value in values for name in value.split(",")]
    return [name for name in names if name] or None


def timestamp_fields(
    enabled: bool,
    created_at: Optional[str] = "createdAt",
    updated_at: Optional[str] = "updatedAt",
    deleted_at: Optional[str] = "deletedAt",
) -> TimestampFields:
    # An empty alias on the command line disables that column
    return TimestampFields(
        enabled=enabled,
        created_at=created_at or None,
        updated_at=updated_at or None,
        deleted_at=deleted_at or None,
    )


def assembly_options(
    schema: Optional[str],
    tables: Optional[List[str]],
    skip_tables: Optional[List[str]],
    timestamps: TimestampFields,
) -> AssemblyOptions:
    return AssemblyOptions(
        schema=schema,
        tables=split_names(tables),
        skip_tables=split_names(skip_tables),
        timestamps=timestamps,
    )


def exit_with_error(message: str, code: int = 1):
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(code)
