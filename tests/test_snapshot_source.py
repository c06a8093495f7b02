"""Tests for the JSON snapshot schema source."""

import pytest

from schemagen_cli.database import SnapshotSchemaSource
from schemagen_cli.errors import ConfigurationError, SchemaSourceError


class TestSnapshotSource:
    """Test loading and serving snapshots."""

    def test_from_file(self, snapshot_file):
        """Test a snapshot file is loaded with its dialect."""
        source = SnapshotSchemaSource.from_file(snapshot_file)
        assert source.list_tables() == ["users", "posts"]
        assert source.dialect.name == "sqlite"
        assert source.database_name == "blog"

    def test_database_defaults_to_file_stem(self, tmp_path):
        """Test the database name falls back to the file name."""
        path = tmp_path / "inventory.json"
        path.write_text('{"tables": {}}', encoding="utf-8")
        assert SnapshotSchemaSource.from_file(path).database_name == "inventory"

    def test_dialect_override(self, snapshot_file):
        """Test an explicit dialect wins over the snapshot's."""
        assert SnapshotSchemaSource.from_file(snapshot_file, dialect="postgres").dialect.name == "postgres"

    def test_describe_aliases(self, snapshot_source):
        """Test camelCase snapshot keys map to column descriptions."""
        columns = snapshot_source.describe_table("users")
        assert columns["id"].primary_key is True
        assert columns["id"].allow_null is False
        assert columns["bio"].allow_null is True
        assert columns["score"].default_value == 0

    def test_foreign_key_rows_are_copies(self, snapshot_source, snapshot_data):
        """Test callers cannot mutate the snapshot through returned rows."""
        rows = snapshot_source.get_foreign_keys("posts")
        rows[1]["table"] = "changed"
        assert snapshot_data["tables"]["posts"]["foreignKeys"][1]["table"] == "users"

    def test_unknown_table(self, snapshot_source):
        """Test describing a table missing from the snapshot."""
        with pytest.raises(SchemaSourceError):
            snapshot_source.describe_table("ghost")
        assert snapshot_source.get_foreign_keys("ghost") == []


class TestInvalidSnapshots:
    """Test malformed snapshot input."""

    def test_invalid_json(self, tmp_path):
        """Test unreadable JSON is a configuration error."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            SnapshotSchemaSource.from_file(path)

    def test_missing_file(self, tmp_path):
        """Test a missing snapshot file."""
        with pytest.raises(ConfigurationError):
            SnapshotSchemaSource.from_file(tmp_path / "missing.json")

    def test_missing_tables(self):
        """Test a snapshot without a tables object."""
        with pytest.raises(ConfigurationError):
            SnapshotSchemaSource({"database": "x"})

    def test_column_without_type(self):
        """Test a column missing its type."""
        source = SnapshotSchemaSource({"tables": {"t": {"columns": {"a": {"allowNull": True}}}}})
        with pytest.raises(ConfigurationError) as exc:
            source.describe_table("t")
        assert exc.value.details == {"table": "t", "column": "a"}

    def test_unknown_dialect(self):
        """Test an unsupported dialect falls back to one without capability predicates."""
        source = SnapshotSchemaSource({"dialect": "oracle", "tables": {}})
        assert source.dialect.name == "generic"
        assert source.dialect.is_primary_key is None
        assert source.dialect.is_serial_key is None
