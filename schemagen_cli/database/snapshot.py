"""Schema source backed by a static JSON snapshot.

Snapshot layout::

    {
      "dialect": "postgres",
      "database": "app",
      "tables": {
        "users": {
          "columns": {
            "id": {"type": "INTEGER", "allowNull": false, "primaryKey": true},
            "status": {"type": "USER-DEFINED", "special": ["active", "inactive"]}
          },
          "foreignKeys": [{"source_column": "id", "contype": "p", "extra": "nextval(...)"}]
        }
      }
    }
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..errors import ConfigurationError, SchemaSourceError
from .base import SchemaSource
from .dialects import Dialect, get_dialect
from .models import ColumnDescription

_ALIASES = {
    "allowNull": "allow_null",
    "defaultValue": "default_value",
    "primaryKey": "primary_key",
}


def _column_from_dict(table: str, name: str, data: Dict[str, Any]) -> ColumnDescription:
    values = {_ALIASES.get(k, k): v for k, v in data.items()}
    if "type" not in values:
        raise ConfigurationError(f"Column {table}.{name} has no type", details={"table": table, "column": name})
    return ColumnDescription(
        type=values["type"],
        allow_null=bool(values.get("allow_null", True)),
        default_value=values.get("default_value"),
        primary_key=bool(values.get("primary_key", False)),
        special=list(values.get("special") or []),
    )


class SnapshotSchemaSource(SchemaSource):
    """Serves tables from an in-memory snapshot dict or a JSON file."""

    def __init__(self, snapshot: Dict[str, Any], dialect: Optional[str] = None):
        super().__init__()
        if not isinstance(snapshot.get("tables"), dict):
            raise ConfigurationError("Snapshot must contain a 'tables' object")
        self._snapshot = snapshot
        self._dialect = get_dialect(dialect or snapshot.get("dialect"))
        self._database_name = snapshot.get("database") or "snapshot"

    @classmethod
    def from_file(cls, path: Union[str, Path], dialect: Optional[str] = None) -> "SnapshotSchemaSource":
        """Load a snapshot from a JSON file."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot read snapshot {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Snapshot {path} must be a JSON object")
        if not data.get("database"):
            data["database"] = Path(path).stem
        return cls(data, dialect=dialect)

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def database_name(self) -> str:
        return self._database_name

    @property
    def _tables(self) -> Dict[str, Any]:
        return self._snapshot["tables"]

    def list_tables(self, schema: Optional[str] = None) -> List[str]:
        return list(self._tables)

    def describe_table(self, table: str, schema: Optional[str] = None) -> Dict[str, ColumnDescription]:
        entry = self._tables.get(table)
        if not isinstance(entry, dict) or not isinstance(entry.get("columns"), dict):
            raise SchemaSourceError(f"Table {table} not found in snapshot", table=table)
        return {name: _column_from_dict(table, name, data) for name, data in entry["columns"].items()}

    def get_foreign_keys(self, table: str) -> List[Dict[str, Any]]:
        entry = self._tables.get(table) or {}
        return [dict(row) for row in entry.get("foreignKeys") or []]
