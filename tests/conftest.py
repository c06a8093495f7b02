"""Shared pytest fixtures for schemagen tests."""

import json
import sqlite3

import pytest

from schemagen_cli.database import SnapshotSchemaSource, SQLiteSchemaSource
from schemagen_cli.database.models import (
    ColumnSchema,
    DefaultSpec,
    ForeignKeyRef,
    ForeignKeyReferences,
    SemanticType,
    TableSchema,
)


@pytest.fixture
def snapshot_data():
    """A small blog schema in snapshot form (SQLite-shaped relation rows)."""
    return {
        "dialect": "sqlite",
        "database": "blog",
        "tables": {
            "users": {
                "columns": {
                    "id": {"type": "INTEGER", "allowNull": False, "primaryKey": True},
                    "email": {"type": "VARCHAR(255)", "allowNull": False},
                    "status": {"type": "ENUM('active','inactive')", "allowNull": False},
                    "bio": {"type": "TEXT", "allowNull": True},
                    "score": {"type": "DECIMAL(10,2)", "allowNull": True, "defaultValue": 0},
                    "created_at": {"type": "DATETIME", "allowNull": False, "defaultValue": "CURRENT_TIMESTAMP"},
                },
                "foreignKeys": [
                    {"from": "id", "primary_key": True, "autoincrement": True},
                ],
            },
            "posts": {
                "columns": {
                    "id": {"type": "INTEGER", "allowNull": False, "primaryKey": True},
                    "user_id": {"type": "INTEGER", "allowNull": False},
                    "title": {"type": "VARCHAR(200)", "allowNull": False, "defaultValue": "Untitled"},
                    "published": {"type": "BOOLEAN", "allowNull": True},
                },
                "foreignKeys": [
                    {"from": "id", "primary_key": True, "autoincrement": True},
                    {"id": 0, "seq": 0, "table": "users", "from": "user_id", "to": "id"},
                ],
            },
        },
    }


@pytest.fixture
def snapshot_source(snapshot_data):
    """Snapshot schema source over the blog schema."""
    return SnapshotSchemaSource(snapshot_data)


class FlakySource(SnapshotSchemaSource):
    """Snapshot source whose calls fail for chosen tables."""

    def __init__(self, snapshot, broken_describe=(), broken_foreign_keys=(), broken_list=False):
        super().__init__(snapshot)
        self.broken_describe = set(broken_describe)
        self.broken_foreign_keys = set(broken_foreign_keys)
        self.broken_list = broken_list

    def list_tables(self, schema=None):
        if self.broken_list:
            raise RuntimeError("connection lost")
        return super().list_tables(schema)

    def describe_table(self, table, schema=None):
        if table in self.broken_describe:
            raise RuntimeError(f"cannot describe {table}")
        return super().describe_table(table, schema)

    def get_foreign_keys(self, table):
        if table in self.broken_foreign_keys:
            raise RuntimeError(f"cannot read constraints of {table}")
        return super().get_foreign_keys(table)


@pytest.fixture
def flaky_source(snapshot_data):
    """Factory for snapshot sources that fail on chosen calls."""
    def make(**broken):
        return FlakySource(snapshot_data, **broken)
    return make


@pytest.fixture
def snapshot_file(tmp_path, snapshot_data):
    """The blog schema written to a JSON snapshot file."""
    path = tmp_path / "blog.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path


@pytest.fixture
def sqlite_db(tmp_path):
    """A SQLite database file with users/posts/tags tables."""
    path = tmp_path / "shop.db"
    conn = sqlite3.connect(str(path))
    conn.executescript(
        """
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            email VARCHAR(255) NOT NULL,
            nickname TEXT DEFAULT 'n/a',
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );
        CREATE TABLE posts (
            id INTEGER PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id),
            title VARCHAR(200) NOT NULL,
            rating REAL
        );
        CREATE TABLE post_tags (
            post_id INTEGER NOT NULL REFERENCES posts,
            tag VARCHAR(50) NOT NULL,
            PRIMARY KEY (post_id, tag)
        );
        """
    )
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def sqlite_source(sqlite_db):
    """SQLite schema source over the shop database."""
    source = SQLiteSchemaSource(database_path=str(sqlite_db))
    yield source
    source.close()


def _references(table, column, target_table, target_column):
    return ForeignKeyReferences(
        source_table=table,
        source_schema="app",
        target_schema="app",
        target_table=target_table,
        source_column=column,
        target_column=target_column,
    )


@pytest.fixture
def users_table():
    """Canonical ``users`` table with a serial key, an enum and a timestamp."""
    return TableSchema(
        name="users",
        columns=(
            ColumnSchema(
                name="id",
                raw_type="INTEGER",
                semantic_type=SemanticType.INTEGER,
                nullable=False,
                is_primary_key=True,
                is_serial_key=True,
                foreign_key=ForeignKeyRef(
                    source_table="users", source_column="id", is_primary_key=True, is_serial_key=True
                ),
            ),
            ColumnSchema(name="email", raw_type="VARCHAR(255)", semantic_type=SemanticType.TEXT, nullable=False),
            ColumnSchema(
                name="status",
                raw_type="ENUM('active','inactive')",
                semantic_type=SemanticType.SELECT,
                nullable=False,
                enum_options=("active", "inactive"),
            ),
            ColumnSchema(
                name="balance",
                raw_type="DECIMAL(10,2)",
                semantic_type=SemanticType.INTEGER,
                nullable=True,
                is_fractional=True,
            ),
            ColumnSchema(
                name="created_at",
                raw_type="TIMESTAMP",
                semantic_type=SemanticType.DATE,
                nullable=False,
                default=DefaultSpec.expression("CURRENT_TIMESTAMP"),
            ),
        ),
    )


@pytest.fixture
def orders_table():
    """Canonical ``shop_order`` table referencing users."""
    return TableSchema(
        name="shop_order",
        columns=(
            ColumnSchema(
                name="id",
                raw_type="INTEGER",
                semantic_type=SemanticType.INTEGER,
                nullable=False,
                is_primary_key=True,
            ),
            ColumnSchema(
                name="user_id",
                raw_type="INTEGER",
                semantic_type=SemanticType.INTEGER,
                nullable=False,
                foreign_key=ForeignKeyRef(
                    source_table="shop_order",
                    source_column="user_id",
                    target_table="users",
                    target_column="id",
                    is_foreign_key=True,
                    references=_references("shop_order", "user_id", "users", "id"),
                ),
            ),
            ColumnSchema(
                name="coupon_code",
                raw_type="VARCHAR(20)",
                semantic_type=SemanticType.TEXT,
                nullable=True,
                is_unique=True,
                foreign_key=ForeignKeyRef(source_table="shop_order", source_column="coupon_code", is_unique=True),
            ),
            ColumnSchema(name="paid", raw_type="BOOLEAN", semantic_type=SemanticType.BOOLEAN, nullable=False),
        ),
    )


@pytest.fixture
def tables(users_table, orders_table):
    """Both canonical tables keyed by name, in table order."""
    return {"users": users_table, "shop_order": orders_table}
