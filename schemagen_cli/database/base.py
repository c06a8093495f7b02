"""Abstract base class for schema sources."""

import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .dialects import Dialect
from .models import ColumnDescription


class SchemaSource(ABC):
    """Abstract base class for database schema sources.

    Subclasses provide the dialect-specific SQL used to list tables, describe
    columns and discover foreign keys. Methods are blocking; the assembler runs
    them in an executor, so implementations whose connection is not thread-safe
    must serialize access through ``self._lock``.
    """

    # Override in subclasses to exclude system tables
    EXCLUDED_TABLES: set = set()

    def __init__(self):
        self._lock = threading.RLock()

    @property
    @abstractmethod
    def dialect(self) -> Dialect:
        """Dialect descriptor with FK query and capability predicates."""
        pass

    @property
    @abstractmethod
    def database_name(self) -> str:
        """Name used as the default schema on foreign key references."""
        pass

    @abstractmethod
    def list_tables(self, schema: Optional[str] = None) -> List[str]:
        """Get all table names.

        Args:
            schema: Optional schema to restrict the listing to

        Returns:
            List of table names in a stable order
        """
        pass

    @abstractmethod
    def describe_table(self, table: str, schema: Optional[str] = None) -> Dict[str, ColumnDescription]:
        """Describe the columns of a table.

        Args:
            table: Table name
            schema: Optional schema name

        Returns:
            Mapping of column name to raw description, in column order
        """
        pass

    def get_foreign_keys(self, table: str) -> List[Dict[str, Any]]:
        """Get raw relation rows for a table.

        Sources without foreign key discovery return no rows.
        """
        return []

    def close(self):
        """Release the underlying connection, if any."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
