"""Options for schema assembly and artifact rendering."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from .errors import ConfigurationError

FIND_METHODS = ("findByPk", "findById")


@dataclass(frozen=True)
class TimestampFields:
    """Timestamp columns that are left out of the generated artifacts.

    Each alias may be set to None to keep that column.
    """
    enabled: bool = False
    created_at: Optional[str] = "createdAt"
    updated_at: Optional[str] = "updatedAt"
    deleted_at: Optional[str] = "deletedAt"

    @property
    def aliases(self) -> Set[str]:
        return {a for a in (self.created_at, self.updated_at, self.deleted_at) if a}

    def is_excluded(self, column_name: str) -> bool:
        return self.enabled and column_name in self.aliases


@dataclass
class AssemblyOptions:
    """Which tables to introspect and which columns to skip."""
    schema: Optional[str] = None
    tables: Optional[List[str]] = None
    skip_tables: Optional[List[str]] = None
    timestamps: TimestampFields = field(default_factory=TimestampFields)


@dataclass
class RenderOptions:
    """Rendering switches shared by every target."""
    camel_case: bool = False
    camel_case_file_names: bool = False
    typescript: bool = False
    indentation: int = 1
    use_spaces: bool = False
    timestamps: TimestampFields = field(default_factory=TimestampFields)
    additional: Dict[str, Any] = field(default_factory=dict)
    resolver_find_method: str = "findByPk"
    data_access_name: str = "db"

    def __post_init__(self):
        if self.indentation < 0:
            raise ConfigurationError("indentation must not be negative")
        if self.resolver_find_method not in FIND_METHODS:
            raise ConfigurationError(
                f"resolver_find_method must be one of {', '.join(FIND_METHODS)}",
                details={"value": self.resolver_find_method},
            )

    @property
    def indent(self) -> str:
        """One indentation unit."""
        return (" " if self.use_spaces else "\t") * self.indentation
