"""Normalization of foreign key rows into ``ForeignKeyRef`` records."""

import logging
from dataclasses import fields, replace
from typing import Any, Dict, Iterable, Optional

from .dialects import Dialect
from .models import ForeignKeyRef, ForeignKeyReferences

logger = logging.getLogger(__name__)

# SQLite PRAGMA foreign_key_list columns
KEY_RENAMES = {
    "from": "source_column",
    "to": "target_column",
    "table": "target_table",
}

FLAG_FIELDS = ("is_foreign_key", "is_unique", "is_primary_key", "is_serial_key")
_REF_FIELDS = {f.name for f in fields(ForeignKeyRef)} - set(FLAG_FIELDS) - {"references", "attributes"}


def _blank(value: Any) -> bool:
    return value is None or not str(value).strip()


class ForeignKeyNormalizer:
    """Turns dialect-shaped relation rows into merged ``ForeignKeyRef`` entries."""

    def __init__(self, dialect: Dialect, database_name: Optional[str] = None):
        self.dialect = dialect
        self.database_name = database_name

    def normalize_row(self, table: str, row: Dict[str, Any]) -> ForeignKeyRef:
        """Normalize a single relation row for ``table``."""
        ref: Dict[str, Any] = {
            "source_table": table,
            "source_schema": self.database_name,
            "target_schema": self.database_name,
        }
        for key, value in row.items():
            key = KEY_RENAMES.get(key, key)
            if key in ("source_table", "source_schema", "target_schema") and value is None:
                continue
            ref[key] = value

        flags = dict.fromkeys(FLAG_FIELDS, False)
        references = None
        has_columns = not _blank(ref.get("source_column")) and not _blank(ref.get("target_column"))
        if has_columns and _blank(ref.get("target_table")):
            logger.warning(
                "Ignoring reference %s.%s -> %s without a target table",
                table, ref.get("source_column"), ref.get("target_column"),
            )
        elif has_columns:
            flags["is_foreign_key"] = True
            references = ForeignKeyReferences(
                source_table=ref["source_table"],
                source_schema=ref.get("source_schema"),
                target_schema=ref.get("target_schema"),
                target_table=ref.get("target_table"),
                source_column=ref["source_column"],
                target_column=ref["target_column"],
            )

        if self.dialect.is_unique is not None and self.dialect.is_unique(ref):
            flags["is_unique"] = True
        if self.dialect.is_primary_key is not None and self.dialect.is_primary_key(ref):
            flags["is_primary_key"] = True
        if self.dialect.is_serial_key is not None and self.dialect.is_serial_key(ref):
            flags["is_serial_key"] = True

        known = {k: ref.get(k) for k in _REF_FIELDS}
        known["source_column"] = ref.get("source_column") or ""
        attributes = {k: v for k, v in ref.items() if k not in _REF_FIELDS}
        return ForeignKeyRef(references=references, attributes=attributes, **known, **flags)

    def collect(self, table: str, rows: Iterable[Dict[str, Any]]) -> Dict[str, ForeignKeyRef]:
        """Normalize all rows of a table and merge them per source column."""
        merged: Dict[str, ForeignKeyRef] = {}
        for row in rows:
            ref = self.normalize_row(table, row)
            if _blank(ref.source_column):
                logger.debug("Skipping relation row without source column on %s: %s", table, row)
                continue
            merged[ref.source_column] = merge(merged.get(ref.source_column), ref)
        return merged


def merge(existing: Optional[ForeignKeyRef], new: ForeignKeyRef) -> ForeignKeyRef:
    """Overlay ``new`` on ``existing``.

    Later non-empty fields win, ``True`` flags are never downgraded, and the
    cross-reference is kept from the latest row that qualified as a foreign key.
    """
    if existing is None:
        return new

    updates: Dict[str, Any] = {}
    for name in _REF_FIELDS:
        value = getattr(new, name)
        if not _blank(value):
            updates[name] = value
    for name in FLAG_FIELDS:
        updates[name] = getattr(existing, name) or getattr(new, name)
    updates["references"] = new.references or existing.references
    updates["attributes"] = {**existing.attributes, **new.attributes}
    return replace(existing, **updates)
