"""Normalization of dialect-specific column defaults."""

import re
from decimal import Decimal
from typing import Any, Optional

from .dialects import Dialect
from .models import ColumnDescription, DefaultSpec, SemanticType

CURRENT_TIME_KEYWORDS = {
    "current_timestamp",
    "current_date",
    "current_time",
    "localtime",
    "localtimestamp",
}

_BACKSLASH_ESCAPES = {
    "\0": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\b": "\\b",
    "\t": "\\t",
    "\x1a": "\\Z",
}

_UNICODE_PREFIX = re.compile(r"^N'(.*)'$", re.DOTALL)


def escape_string_literal(value: str, dialect: Optional[Dialect] = None) -> str:
    """Quote a string for inclusion as a SQL literal.

    MySQL escapes with backslashes; every other dialect doubles single quotes.
    """
    if dialect is not None and dialect.quote_style == "backslash":
        escaped = re.sub(
            r"[\0\n\r\b\t\\'\"\x1a]",
            lambda m: _BACKSLASH_ESCAPES.get(m.group(0), "\\" + m.group(0)),
            value,
        )
    else:
        escaped = value.replace("'", "''")
    return f"'{escaped}'"


def _dialect_name(dialect: Optional[Dialect]) -> str:
    return dialect.name if dialect is not None else ""


def normalize_default(
    column: ColumnDescription,
    dialect: Optional[Dialect] = None,
    semantic_type: Optional[SemanticType] = None,
    is_serial: bool = False,
) -> DefaultSpec:
    """Convert a raw default into a ``DefaultSpec``.

    Args:
        column: Raw column description from the schema source
        dialect: Dialect the description came from
        semantic_type: Classified type of the column (enables date keywords)
        is_serial: Whether the column is an autoincrement/identity key

    Returns:
        The normalized default; ``DefaultSpec.none()`` when there is none
    """
    raw = column.default_value
    if is_serial or raw is None:
        return DefaultSpec.none()

    raw_type = (column.type or "").lower()
    is_mssql = _dialect_name(dialect) == "mssql"

    if is_mssql and isinstance(raw, str) and raw.lower() == "(newid())":
        return DefaultSpec.none()

    # Bit columns store booleans as 1/0 whatever the raw spelling
    if raw_type == "bit(1)":
        return DefaultSpec.literal("1" if raw == "b'1'" else "0")
    if is_mssql and raw_type == "bit":
        return DefaultSpec.literal("1" if raw == "((1))" else "0")

    if isinstance(raw, bool):
        return DefaultSpec.literal("1" if raw else "0")
    if isinstance(raw, (int, float, Decimal)):
        return DefaultSpec.literal(str(raw))

    return _normalize_string_default(str(raw), dialect, semantic_type)


def _normalize_string_default(raw: str, dialect: Optional[Dialect], semantic_type: Optional[SemanticType]) -> DefaultSpec:
    if raw.endswith("()"):
        return DefaultSpec.function_call(raw[:-2])

    if semantic_type == SemanticType.DATE and raw.lower() in CURRENT_TIME_KEYWORDS:
        return DefaultSpec.expression(raw)

    value = raw.strip('"')
    match = _UNICODE_PREFIX.match(value)
    if match:
        value = match.group(1)
    return DefaultSpec.literal(escape_string_literal(value, dialect))
