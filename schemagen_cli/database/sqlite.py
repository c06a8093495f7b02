"""SQLite schema source."""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import SchemaSourceError
from .base import SchemaSource
from .dialects import SQLiteDialect
from .models import ColumnDescription

logger = logging.getLogger(__name__)


def _unquote_default(value: Any) -> Any:
    """SQLite reports defaults as SQL text; unwrap quoted string literals."""
    if isinstance(value, str) and len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1].replace("''", "'")
    return value


class SQLiteSchemaSource(SchemaSource):
    """Schema source reading a SQLite database file."""

    EXCLUDED_TABLES = {"sqlite_sequence", "sqlite_stat1", "sqlite_stat4"}

    def __init__(
        self,
        database_path: Optional[str] = None,
        connection: Optional[sqlite3.Connection] = None,
    ):
        """Initialize SQLite source.

        Args:
            database_path: Path to the .sqlite/.db file (or :memory:)
            connection: Already open connection to use instead of a path
        """
        super().__init__()
        self.database_path = database_path
        self._connection = connection
        self._owns_connection = connection is None
        self._dialect = SQLiteDialect()

    @property
    def dialect(self) -> SQLiteDialect:
        return self._dialect

    @property
    def database_name(self) -> str:
        if self.database_path and self.database_path != ":memory:":
            return Path(self.database_path).stem
        return "main"

    def connect(self) -> sqlite3.Connection:
        """Open the connection on first use."""
        if self._connection is None:
            if self.database_path != ":memory:" and not Path(self.database_path or "").exists():
                raise SchemaSourceError(f"SQLite database not found: {self.database_path}")
            self._connection = sqlite3.connect(self.database_path, check_same_thread=False)
        return self._connection

    def close(self):
        if self._connection is not None and self._owns_connection:
            self._connection.close()
        self._connection = None

    def _execute_query(self, sql: str, params: Optional[List[Any]] = None) -> List[Dict[str, Any]]:
        """Run a query and return rows as dicts keyed by column name."""
        with self._lock:
            cursor = self.connect().execute(sql, params or [])
            names = [d[0] for d in cursor.description or ()]
            return [dict(zip(names, row)) for row in cursor.fetchall()]

    def list_tables(self, schema: Optional[str] = None) -> List[str]:
        try:
            rows = self._execute_query(
                "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
            )
        except sqlite3.Error as e:
            raise SchemaSourceError(f"Failed to list tables: {e}") from e
        return [r["name"] for r in rows if r["name"] not in self.EXCLUDED_TABLES]

    def _table_info(self, table: str) -> List[Dict[str, Any]]:
        return self._execute_query("SELECT * FROM pragma_table_info(?)", [table])

    def describe_table(self, table: str, schema: Optional[str] = None) -> Dict[str, ColumnDescription]:
        try:
            rows = self._table_info(table)
        except sqlite3.Error as e:
            raise SchemaSourceError(f"Failed to describe table {table}: {e}", table=table) from e
        if not rows:
            raise SchemaSourceError(f"Table {table} not found", table=table)

        return {
            row["name"]: ColumnDescription(
                type=row["type"] or "",
                allow_null=row["notnull"] == 0,
                default_value=_unquote_default(row["dflt_value"]),
                primary_key=row["pk"] > 0,
            )
            for row in rows
        }

    def get_foreign_keys(self, table: str) -> List[Dict[str, Any]]:
        """Primary key rows followed by ``PRAGMA foreign_key_list`` rows.

        An INTEGER column that is the sole primary key aliases the rowid and
        is reported as autoincrement.
        """
        info = self._table_info(table)
        pk_columns = [r for r in info if r["pk"] > 0]
        rows: List[Dict[str, Any]] = []
        for col in pk_columns:
            rows.append({
                "from": col["name"],
                "primary_key": True,
                "autoincrement": len(pk_columns) == 1 and (col["type"] or "").upper() == "INTEGER",
            })

        for fk in self._execute_query("SELECT * FROM pragma_foreign_key_list(?)", [table]):
            if fk.get("to") is None and fk.get("table"):
                # REFERENCES parent without a column list targets the parent's primary key
                parent_pks = [r["name"] for r in self._table_info(fk["table"]) if r["pk"] > 0]
                if parent_pks:
                    fk["to"] = parent_pks[min(fk.get("seq") or 0, len(parent_pks) - 1)]
            rows.append(fk)

        logger.debug("Found %d relation rows for %s", len(rows), table)
        return rows
