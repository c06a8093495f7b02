"""Dialect descriptors: literal quoting and foreign key capability predicates.

Predicates receive a foreign key row *after* key renaming (``source_column``,
``target_column``, ``target_table``...). A dialect that does not define a
predicate never sets the corresponding flag. Fetching the rows is up to the
schema source.
"""

from typing import Any, Callable, Dict, Optional

Row = Dict[str, Any]
Predicate = Callable[[Row], bool]


class Dialect:
    """Base dialect: no capability predicates."""

    name: str = "generic"

    # String quoting for literal defaults: 'double' doubles embedded single
    # quotes, 'backslash' uses MySQL-style backslash escapes.
    quote_style: str = "double"

    is_unique: Optional[Predicate] = None
    is_primary_key: Optional[Predicate] = None
    is_serial_key: Optional[Predicate] = None

    def __repr__(self) -> str:
        return f"<Dialect {self.name}>"


def _is_nextval(extra: Any) -> bool:
    return isinstance(extra, str) and extra.startswith("nextval(")


class SQLiteDialect(Dialect):
    """SQLite: ``PRAGMA foreign_key_list`` rows plus synthetic primary key rows."""

    name = "sqlite"

    @staticmethod
    def is_primary_key(row: Row) -> bool:
        return bool(row.get("primary_key"))

    @staticmethod
    def is_serial_key(row: Row) -> bool:
        return bool(row.get("primary_key")) and bool(row.get("autoincrement"))


class DuckDBDialect(Dialect):
    """DuckDB: one row per constrained column from ``duckdb_constraints()``."""

    name = "duckdb"

    @staticmethod
    def is_unique(row: Row) -> bool:
        return row.get("constraint_type") == "UNIQUE"

    @staticmethod
    def is_primary_key(row: Row) -> bool:
        return row.get("constraint_type") == "PRIMARY KEY"

    @staticmethod
    def is_serial_key(row: Row) -> bool:
        return row.get("constraint_type") == "PRIMARY KEY" and _is_nextval(row.get("extra"))


class PostgresDialect(Dialect):
    """PostgreSQL: ``pg_constraint`` rows (``contype``) with the column default in ``extra``."""

    name = "postgres"

    @staticmethod
    def is_unique(row: Row) -> bool:
        return row.get("contype") == "u"

    @staticmethod
    def is_primary_key(row: Row) -> bool:
        return row.get("contype") == "p"

    @staticmethod
    def is_serial_key(row: Row) -> bool:
        extra = row.get("extra")
        return (
            row.get("contype") == "p"
            and _is_nextval(extra)
            and "_seq" in extra
            and "::regclass" in extra
        )


class MySQLDialect(Dialect):
    """MySQL: ``KEY_COLUMN_USAGE`` rows with ``COLUMNS.EXTRA``/``COLUMN_KEY``."""

    name = "mysql"
    quote_style = "backslash"

    @staticmethod
    def is_unique(row: Row) -> bool:
        return str(row.get("column_key") or "").upper() == "UNI"

    @staticmethod
    def is_primary_key(row: Row) -> bool:
        return row.get("constraint_name") == "PRIMARY"

    @staticmethod
    def is_serial_key(row: Row) -> bool:
        return row.get("extra") == "auto_increment"


class MSSQLDialect(Dialect):
    """SQL Server: ``TABLE_CONSTRAINTS`` rows with the column identity flag."""

    name = "mssql"

    @staticmethod
    def is_unique(row: Row) -> bool:
        return row.get("constraint_type") == "UNIQUE"

    @staticmethod
    def is_primary_key(row: Row) -> bool:
        return row.get("constraint_type") == "PRIMARY KEY"

    @staticmethod
    def is_serial_key(row: Row) -> bool:
        return row.get("constraint_type") == "PRIMARY KEY" and bool(row.get("is_identity"))


DIALECTS: Dict[str, Dialect] = {
    dialect.name: dialect
    for dialect in (SQLiteDialect(), DuckDBDialect(), PostgresDialect(), MySQLDialect(), MSSQLDialect())
}


def get_dialect(name: Optional[str]) -> Dialect:
    """Look up a dialect by name; unknown names get the generic dialect."""
    if not name:
        return Dialect()
    return DIALECTS.get(name.lower(), Dialect())
