"""DuckDB schema source."""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import SchemaSourceError
from .base import SchemaSource
from .dialects import DuckDBDialect
from .models import ColumnDescription

logger = logging.getLogger(__name__)

FOREIGN_KEY_TEXT = re.compile(
    r"FOREIGN KEY\s*\((?P<source>[^)]*)\)\s*REFERENCES\s+(?P<table>[\w.\"]+)\s*\((?P<target>[^)]*)\)",
    re.IGNORECASE,
)
QUOTED_DEFAULT = re.compile(r"^'(.*)'(::[\w ]+)?$", re.DOTALL)


def _split_identifiers(text: str) -> List[str]:
    return [part.strip().strip('"') for part in text.split(",") if part.strip()]


def _unquote_default(value: Any) -> Any:
    """DuckDB reports defaults as SQL text; unwrap quoted string literals."""
    if isinstance(value, str):
        match = QUOTED_DEFAULT.match(value)
        if match:
            return match.group(1).replace("''", "'")
    return value


class DuckDBSchemaSource(SchemaSource):
    """Schema source for DuckDB database files."""

    def __init__(
        self,
        database_path: Optional[str] = None,
        connection_string: Optional[str] = None,
        read_only: bool = True,
        schema: str = "main",
    ):
        """Initialize DuckDB source.

        Args:
            database_path: Path to .duckdb file (can be :memory: for in-memory)
            connection_string: Alternative connection string format
                               (e.g., duckdb:///path/to/db.duckdb)
            read_only: Open database in read-only mode
            schema: Schema used when callers pass none
        """
        super().__init__()
        self.database_path = database_path
        self.connection_string = connection_string
        self.read_only = read_only
        self.default_schema = schema
        self._connection = None
        self._dialect = DuckDBDialect()
        self._database_name = self._extract_database_name()

    def _extract_database_name(self) -> str:
        """Extract database name from path or connection string."""
        if self.database_path:
            if self.database_path == ':memory:':
                return 'memory'
            return Path(self.database_path).stem
        if self.connection_string:
            path_part = self._connection_path()
            if path_part and path_part != ':memory:':
                return Path(path_part).stem
        return 'duckdb_database'

    def _connection_path(self) -> str:
        # Remove duckdb:/// prefix and query parameters if present
        path = self.connection_string
        if path.startswith('duckdb:///'):
            path = path[10:]
        elif path.startswith('duckdb://'):
            path = path[9:]
        return path.split('?')[0]

    @property
    def dialect(self) -> DuckDBDialect:
        return self._dialect

    @property
    def database_name(self) -> str:
        return self._database_name

    def connect(self):
        """Connect to the DuckDB database on first use."""
        if self._connection is not None:
            return self._connection

        import duckdb

        if self.database_path:
            if self.database_path == ':memory:':
                self._connection = duckdb.connect(':memory:')
            else:
                self._connection = duckdb.connect(self.database_path, read_only=self.read_only)
        elif self.connection_string:
            self._connection = duckdb.connect(self._connection_path(), read_only=self.read_only)
        else:
            self._connection = duckdb.connect(':memory:')
        return self._connection

    def close(self):
        """Close the DuckDB connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

    def _execute_query(self, sql: str, params: Optional[List[Any]] = None) -> List[Dict[str, Any]]:
        """Execute a query and return rows as dicts keyed by column name."""
        with self._lock:
            cursor = self.connect().execute(sql, params or [])
            names = [d[0] for d in cursor.description or ()]
            return [dict(zip(names, row)) for row in cursor.fetchall()]

    def list_tables(self, schema: Optional[str] = None) -> List[str]:
        try:
            rows = self._execute_query(
                """
                SELECT table_name
                FROM information_schema.tables
                WHERE table_schema = ?
                  AND table_type = 'BASE TABLE'
                ORDER BY table_name
                """,
                [schema or self.default_schema],
            )
        except Exception as e:
            raise SchemaSourceError(f"Failed to list tables: {e}") from e
        return [r["table_name"] for r in rows]

    def _columns(self, table: str, schema: Optional[str]) -> List[Dict[str, Any]]:
        return self._execute_query(
            """
            SELECT column_name, data_type, is_nullable, column_default
            FROM information_schema.columns
            WHERE table_schema = ?
              AND table_name = ?
            ORDER BY ordinal_position
            """,
            [schema or self.default_schema, table],
        )

    def _primary_keys(self, table: str, schema: Optional[str]) -> List[str]:
        rows = self._execute_query(
            """
            SELECT constraint_column_names
            FROM duckdb_constraints()
            WHERE schema_name = ?
              AND table_name = ?
              AND constraint_type = 'PRIMARY KEY'
            """,
            [schema or self.default_schema, table],
        )
        pks: List[str] = []
        for row in rows:
            names = row["constraint_column_names"]
            pks.extend(names if isinstance(names, list) else [names])
        return pks

    def describe_table(self, table: str, schema: Optional[str] = None) -> Dict[str, ColumnDescription]:
        try:
            rows = self._columns(table, schema)
            pks = set(self._primary_keys(table, schema))
        except Exception as e:
            raise SchemaSourceError(f"Failed to describe table {table}: {e}", table=table) from e
        if not rows:
            raise SchemaSourceError(f"Table {table} not found", table=table)

        return {
            row["column_name"]: ColumnDescription(
                type=row["data_type"],
                allow_null=row["is_nullable"] == "YES",
                default_value=_unquote_default(row["column_default"]),
                primary_key=row["column_name"] in pks,
            )
            for row in rows
        }

    def get_foreign_keys(self, table: str) -> List[Dict[str, Any]]:
        """One row per constrained column; FK rows carry their target."""
        defaults = {r["column_name"]: r["column_default"] for r in self._columns(table, None)}
        constraints = self._execute_query(
            """
            SELECT constraint_type, constraint_text, constraint_column_names
            FROM duckdb_constraints()
            WHERE schema_name = ?
              AND table_name = ?
              AND constraint_type IN ('FOREIGN KEY', 'PRIMARY KEY', 'UNIQUE')
            """,
            [self.default_schema, table],
        )
        rows: List[Dict[str, Any]] = []
        for constraint in constraints:
            kind = constraint["constraint_type"]
            if kind == "FOREIGN KEY":
                match = FOREIGN_KEY_TEXT.search(constraint["constraint_text"] or "")
                if not match:
                    logger.warning("Unparseable foreign key on %s: %s", table, constraint["constraint_text"])
                    continue
                sources = _split_identifiers(match.group("source"))
                targets = _split_identifiers(match.group("target"))
                target_table = match.group("table").strip('"').split(".")[-1]
                for source, target in zip(sources, targets):
                    rows.append({
                        "source_column": source,
                        "target_table": target_table,
                        "target_column": target,
                        "constraint_type": kind,
                    })
            else:
                names = constraint["constraint_column_names"]
                for name in names if isinstance(names, list) else [names]:
                    rows.append({
                        "source_column": name,
                        "constraint_type": kind,
                        "extra": defaults.get(name),
                    })
        return rows
