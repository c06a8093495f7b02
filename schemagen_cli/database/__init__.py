"""Database introspection module for schemagen-cli.

This module turns dialect-specific schema metadata into one canonical model,
with schema sources for SQLite, DuckDB and static JSON snapshots.
"""

from .models import (
    ColumnDescription,
    ColumnSchema,
    DefaultKind,
    DefaultSpec,
    ForeignKeyRef,
    ForeignKeyReferences,
    SemanticType,
    TableSchema,
)
from .base import SchemaSource
from .dialects import Dialect, get_dialect
from .type_mappers import TypeClassifier, TypeInfo, classify, classify_column
from .defaults import normalize_default
from .foreign_keys import ForeignKeyNormalizer
from .assembler import AssemblyResult, SchemaAssembler
from .sqlite import SQLiteSchemaSource
from .duckdb import DuckDBSchemaSource
from .snapshot import SnapshotSchemaSource

__all__ = [
    # Data models
    "ColumnDescription",
    "ColumnSchema",
    "DefaultKind",
    "DefaultSpec",
    "ForeignKeyRef",
    "ForeignKeyReferences",
    "SemanticType",
    "TableSchema",
    # Normalization
    "Dialect",
    "get_dialect",
    "TypeClassifier",
    "TypeInfo",
    "classify",
    "classify_column",
    "normalize_default",
    "ForeignKeyNormalizer",
    # Assembly
    "AssemblyResult",
    "SchemaAssembler",
    # Schema sources
    "SchemaSource",
    "SQLiteSchemaSource",
    "DuckDBSchemaSource",
    "SnapshotSchemaSource",
]
