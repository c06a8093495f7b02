"""Builds the canonical schema model from a schema source."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..errors import ForeignKeyLookupError, SchemaSourceError
from ..options import AssemblyOptions
from .base import SchemaSource
from .defaults import normalize_default
from .dialects import Dialect
from .foreign_keys import ForeignKeyNormalizer
from .models import ColumnDescription, ColumnSchema, ForeignKeyRef, TableSchema
from .type_mappers import TypeClassifier

logger = logging.getLogger(__name__)


@dataclass
class AssemblyResult:
    """Outcome of one assemble call.

    ``tables`` holds every table that was described successfully, in source
    order. ``errors`` holds the per-table failures in the same order.
    """
    tables: Dict[str, TableSchema] = field(default_factory=dict)
    errors: List[SchemaSourceError] = field(default_factory=list)
    foreign_key_errors: List[ForeignKeyLookupError] = field(default_factory=list)

    @property
    def error(self) -> Optional[SchemaSourceError]:
        """First fatal error, if any."""
        return self.errors[0] if self.errors else None

    @property
    def ok(self) -> bool:
        return not self.errors


def select_tables(
    available: Sequence[str],
    tables: Optional[Sequence[str]] = None,
    skip_tables: Optional[Sequence[str]] = None,
) -> List[str]:
    """Apply the allow-list (preferred) or the deny-list to the table names."""
    if tables:
        allowed = set(tables)
        return [t for t in available if t in allowed]
    if skip_tables:
        skipped = set(skip_tables)
        return [t for t in available if t not in skipped]
    return list(available)


def build_column(
    name: str,
    description: ColumnDescription,
    foreign_key: Optional[ForeignKeyRef],
    dialect: Optional[Dialect] = None,
    classifier: Optional[TypeClassifier] = None,
) -> ColumnSchema:
    """Combine a raw column description and its relation overlay."""
    classifier = classifier or TypeClassifier()
    info = classifier.classify_column(description.type, description.special)
    is_serial = foreign_key is not None and foreign_key.is_serial_key
    return ColumnSchema(
        name=name,
        raw_type=info.raw_type,
        semantic_type=info.semantic_type,
        nullable=bool(description.allow_null),
        is_primary_key=bool(description.primary_key),
        is_unique=foreign_key is not None and foreign_key.is_unique,
        is_serial_key=is_serial,
        foreign_key=foreign_key,
        enum_options=info.enum_options,
        default=normalize_default(description, dialect, info.semantic_type, is_serial),
        is_fractional=info.is_fractional,
    )


class SchemaAssembler:
    """Fetches tables, columns and foreign keys and builds ``TableSchema`` objects.

    Every call returns a fresh ``AssemblyResult``; nothing is cached on the
    assembler between runs.
    """

    def __init__(self, source: SchemaSource, options: Optional[AssemblyOptions] = None):
        self.source = source
        self.options = options or AssemblyOptions()
        self.classifier = TypeClassifier()
        self.normalizer = ForeignKeyNormalizer(source.dialect, source.database_name)

    def assemble(self, tables_filter: Optional[Sequence[str]] = None) -> AssemblyResult:
        """Synchronous entry point; must not be called from a running event loop."""
        return asyncio.run(self.assemble_async(tables_filter))

    async def assemble_async(self, tables_filter: Optional[Sequence[str]] = None) -> AssemblyResult:
        """Assemble the canonical model.

        Args:
            tables_filter: Optional allow-list overriding ``options.tables``

        Returns:
            AssemblyResult with the tables that succeeded and per-table errors

        Raises:
            SchemaSourceError: If the table list itself cannot be fetched
        """
        loop = asyncio.get_running_loop()
        try:
            available = await loop.run_in_executor(None, self.source.list_tables, self.options.schema)
        except SchemaSourceError:
            raise
        except Exception as e:
            raise SchemaSourceError(f"Failed to list tables: {e}") from e

        tables = select_tables(available, tables_filter or self.options.tables, self.options.skip_tables)
        logger.info("Introspecting %d of %d tables", len(tables), len(available))
        result = AssemblyResult()

        fk_results = await asyncio.gather(*(self._discover_foreign_keys(loop, t, result) for t in tables))
        foreign_keys = dict(zip(tables, fk_results))

        described = await asyncio.gather(
            *(loop.run_in_executor(None, self.source.describe_table, t, self.options.schema) for t in tables),
            return_exceptions=True,
        )

        for table, columns in zip(tables, described):
            if isinstance(columns, BaseException):
                error = columns if isinstance(columns, SchemaSourceError) else SchemaSourceError(
                    f"Failed to describe table {table}: {columns}", table=table
                )
                logger.error("Skipping table %s: %s", table, error.message)
                result.errors.append(error)
                continue
            try:
                result.tables[table] = self._build_table(table, columns, foreign_keys[table])
            except ValueError as e:
                logger.error("Skipping table %s: %s", table, e)
                result.errors.append(SchemaSourceError(str(e), table=table))

        return result

    async def _discover_foreign_keys(
        self, loop: asyncio.AbstractEventLoop, table: str, result: AssemblyResult
    ) -> Dict[str, ForeignKeyRef]:
        """Best-effort FK discovery; failures mean "no foreign keys"."""
        try:
            rows = await loop.run_in_executor(None, self.source.get_foreign_keys, table)
            return self.normalizer.collect(table, rows)
        except Exception as e:
            error = ForeignKeyLookupError(f"Foreign key lookup failed for {table}: {e}", table=table)
            logger.warning("%s", error.message)
            result.foreign_key_errors.append(error)
            return {}

    def _build_table(
        self,
        table: str,
        columns: Dict[str, ColumnDescription],
        foreign_keys: Dict[str, ForeignKeyRef],
    ) -> TableSchema:
        built = []
        for name, description in columns.items():
            if self.options.timestamps.is_excluded(name):
                logger.debug("Skipping timestamp column %s.%s", table, name)
                continue
            built.append(build_column(
                name, description, foreign_keys.get(name), self.source.dialect, self.classifier
            ))
        return TableSchema(name=table, columns=tuple(built))
