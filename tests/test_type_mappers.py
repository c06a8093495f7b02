"""Tests for raw SQL type classification."""

import pytest

from schemagen_cli.database.models import SemanticType
from schemagen_cli.database.type_mappers import (
    TypeClassifier,
    classify,
    classify_column,
    is_integer_like,
    parse_enum_options,
    rewrite_user_defined,
)


class TestClassify:
    """Test the rule table of the classifier."""

    @pytest.mark.parametrize("raw_type,expected", [
        ("boolean", SemanticType.BOOLEAN),
        ("BIT(1)", SemanticType.BOOLEAN),
        ("bit", SemanticType.BOOLEAN),
        ("TINYINT(1)", SemanticType.BOOLEAN),
        ("tinyint(4)", SemanticType.INTEGER),
        ("INTEGER", SemanticType.INTEGER),
        ("bigint unsigned", SemanticType.INTEGER),
        ("SMALLINT", SemanticType.INTEGER),
        ("VARCHAR(255)", SemanticType.TEXT),
        ("character varying", SemanticType.TEXT),
        ("NVARCHAR(MAX)", SemanticType.TEXT),
        ("uuid", SemanticType.TEXT),
        ("UNIQUEIDENTIFIER", SemanticType.TEXT),
        ("TEXT", SemanticType.TEXTAREA),
        ("mediumtext", SemanticType.TEXTAREA),
        ("NTEXT", SemanticType.TEXTAREA),
        ("DATE", SemanticType.DATE),
        ("timestamp with time zone", SemanticType.DATE),
        ("TIME", SemanticType.DATE),
        ("jsonb", SemanticType.TEXTAREA),
        ("JSON", SemanticType.TEXTAREA),
        ("DECIMAL(10,2)", SemanticType.INTEGER),
        ("double precision", SemanticType.INTEGER),
        ("REAL", SemanticType.INTEGER),
    ])
    def test_documented_types(self, raw_type, expected):
        """Test every documented raw type maps to its semantic type."""
        assert classify(raw_type) == expected

    @pytest.mark.parametrize("raw_type", ["BLOB", "geography", "", None, "  ", "xml"])
    def test_unknown_types_fall_back_to_text(self, raw_type):
        """Test classification is total: unknown types become text."""
        result = classify(raw_type)
        assert result in set(SemanticType)
        assert result == SemanticType.TEXT

    def test_classification_is_deterministic(self):
        """Test repeated classification gives the same answer."""
        classifier = TypeClassifier()
        for raw in ["int", "ENUM('a')", "money", "DATETIME"]:
            assert classifier.classify(raw) == classifier.classify(raw) == classify(raw)

    def test_fractional_numerics_are_flagged(self):
        """Test non-integer numerics are integer-class but fractional."""
        info = classify_column("NUMERIC(12,4)")
        assert info.semantic_type == SemanticType.INTEGER
        assert info.is_fractional is True
        assert classify_column("INTEGER").is_fractional is False


class TestEnumerations:
    """Test ENUM/SET parsing."""

    def test_enum_options_in_order(self):
        """Test ENUM values are extracted in declaration order."""
        info = classify_column("ENUM('a','b','c')")
        assert info.semantic_type == SemanticType.SELECT
        assert info.enum_options == ("a", "b", "c")

    def test_set_type(self):
        """Test SET types are treated like enums."""
        info = classify_column("set('read','write')")
        assert info.semantic_type == SemanticType.SELECT
        assert info.enum_options == ("read", "write")

    def test_enum_checked_before_text_rules(self):
        """Test an enum whose values contain type keywords stays a select."""
        assert classify("ENUM('text','int')") == SemanticType.SELECT

    def test_double_quotes_and_whitespace_stripped(self):
        """Test double-quoted and padded values are cleaned."""
        assert parse_enum_options('ENUM( "x" , "y" )') == ["x", "y"]

    def test_non_enum_has_no_options(self):
        """Test non-enum types have no options."""
        assert parse_enum_options("VARCHAR(10)") == []

    def test_user_defined_rewritten(self):
        """Test Postgres USER-DEFINED enums become ENUM(...) types."""
        assert rewrite_user_defined("USER-DEFINED", ["on", "off"]) == 'ENUM("on","off")'
        info = classify_column("USER-DEFINED", ["on", "off"])
        assert info.semantic_type == SemanticType.SELECT
        assert info.enum_options == ("on", "off")

    def test_user_defined_without_values(self):
        """Test USER-DEFINED without values is left unchanged."""
        assert rewrite_user_defined("USER-DEFINED", []) == "USER-DEFINED"
        assert classify_column("USER-DEFINED").semantic_type == SemanticType.TEXT


class TestIntegerLike:
    """Test the integer-like check used for primary fields."""

    @pytest.mark.parametrize("raw_type", ["INTEGER", "bigint", "smallint(6)", "LONG"])
    def test_integer_like(self, raw_type):
        """Test integer types qualify."""
        assert is_integer_like(raw_type) is True

    @pytest.mark.parametrize("raw_type", ["uuid", "VARCHAR(36)", "", None])
    def test_not_integer_like(self, raw_type):
        """Test other types do not qualify."""
        assert is_integer_like(raw_type) is False
