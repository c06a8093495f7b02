"""Tests for writing rendered artifacts."""

import pytest

from schemagen_cli.errors import OutputError
from schemagen_cli.writer import OutputWriter


class TestOutputWriter:
    """Test the output directory writer."""

    def test_creates_directory(self, tmp_path):
        """Test nested output directories are created."""
        target = tmp_path / "a" / "b"
        written = OutputWriter(target).write({"users.json": "{}\n", "resolvers.js": "module.exports = {};\n"})

        assert [p.name for p in written] == ["users.json", "resolvers.js"]
        assert (target / "users.json").read_text(encoding="utf-8") == "{}\n"

    def test_utf8(self, tmp_path):
        """Test non-ASCII text is written as UTF-8."""
        OutputWriter(tmp_path).write({"cafe.json": '{"label": "Café"}'})
        assert (tmp_path / "cafe.json").read_bytes() == '{"label": "Café"}'.encode("utf-8")

    def test_overwrites(self, tmp_path):
        """Test existing files are replaced."""
        (tmp_path / "users.json").write_text("old", encoding="utf-8")
        OutputWriter(tmp_path).write({"users.json": "new"})
        assert (tmp_path / "users.json").read_text(encoding="utf-8") == "new"

    def test_refuses_escape(self, tmp_path):
        """Test file names cannot leave the output directory."""
        with pytest.raises(OutputError) as exc:
            OutputWriter(tmp_path / "out").write({"../evil.js": "x"})
        assert exc.value.code == "OUTPUT_ERROR"
        assert not (tmp_path / "evil.js").exists()

    def test_directory_is_a_file(self, tmp_path):
        """Test an output path that is a regular file."""
        blocker = tmp_path / "out"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(OutputError):
            OutputWriter(blocker).write({"users.json": "{}"})
