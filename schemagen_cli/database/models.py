"""Canonical schema model produced by introspection.

Everything here is immutable once built: the assembler creates one
``TableSchema`` per table and the renderers only ever read them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class SemanticType(str, Enum):
    """Abstract field kinds shared by every renderer."""
    BOOLEAN = "boolean"
    INTEGER = "integer"
    TEXT = "text"
    TEXTAREA = "textarea"
    DATE = "date"
    SELECT = "select"


class DefaultKind(str, Enum):
    """Kinds of normalized column defaults."""
    NONE = "none"
    LITERAL = "literal"
    FUNCTION_CALL = "function_call"
    EXPRESSION = "expression"


@dataclass(frozen=True)
class DefaultSpec:
    """Normalized column default.

    ``value`` holds the literal text (already quoted and escaped for strings),
    the function name, or the raw expression depending on ``kind``.
    """
    kind: DefaultKind = DefaultKind.NONE
    value: Optional[str] = None

    @classmethod
    def none(cls) -> "DefaultSpec":
        return cls()

    @classmethod
    def literal(cls, text: str) -> "DefaultSpec":
        return cls(DefaultKind.LITERAL, text)

    @classmethod
    def function_call(cls, name: str) -> "DefaultSpec":
        return cls(DefaultKind.FUNCTION_CALL, name)

    @classmethod
    def expression(cls, text: str) -> "DefaultSpec":
        return cls(DefaultKind.EXPRESSION, text)

    @property
    def is_none(self) -> bool:
        return self.kind == DefaultKind.NONE

    def to_sql(self) -> Optional[str]:
        """Render the default as it would appear in DDL."""
        if self.kind == DefaultKind.FUNCTION_CALL:
            return f"{self.value}()"
        if self.kind == DefaultKind.NONE:
            return None
        return self.value


@dataclass
class ColumnDescription:
    """Raw column metadata as reported by a schema source."""
    type: str
    allow_null: bool = True
    default_value: Any = None
    primary_key: bool = False
    special: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ForeignKeyReferences:
    """Reduced cross-reference kept for genuine foreign keys."""
    source_table: str
    source_schema: Optional[str]
    target_schema: Optional[str]
    target_table: str
    source_column: str
    target_column: str


@dataclass(frozen=True)
class ForeignKeyRef:
    """Relation record for one (table, column), merged from dialect rows."""
    source_table: str
    source_column: str
    target_table: Optional[str] = None
    target_column: Optional[str] = None
    source_schema: Optional[str] = None
    target_schema: Optional[str] = None
    is_foreign_key: bool = False
    is_unique: bool = False
    is_primary_key: bool = False
    is_serial_key: bool = False
    references: Optional[ForeignKeyReferences] = None
    # Remaining dialect-specific row fields (constraint names, contype, extra...)
    attributes: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)


@dataclass(frozen=True)
class ColumnSchema:
    """Canonical, dialect-independent column."""
    name: str
    raw_type: str
    semantic_type: SemanticType
    nullable: bool = True
    is_primary_key: bool = False
    is_unique: bool = False
    is_serial_key: bool = False
    foreign_key: Optional[ForeignKeyRef] = None
    enum_options: Tuple[str, ...] = ()
    default: DefaultSpec = field(default_factory=DefaultSpec)
    is_fractional: bool = False

    def __post_init__(self):
        if self.is_serial_key and not self.default.is_none:
            raise ValueError(f"Serial column '{self.name}' cannot carry a default")
        if self.semantic_type == SemanticType.SELECT and not self.enum_options:
            raise ValueError(f"Enumeration column '{self.name}' has no options")
        if self.is_foreign_key and self.foreign_key.references is None:
            raise ValueError(f"Foreign key column '{self.name}' has no references")

    @property
    def is_foreign_key(self) -> bool:
        """True only for genuine foreign keys, not unique/primary overlays."""
        return self.foreign_key is not None and self.foreign_key.is_foreign_key

    @property
    def is_enum(self) -> bool:
        return self.semantic_type == SemanticType.SELECT

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "type": self.raw_type,
            "semantic_type": self.semantic_type.value,
            "nullable": self.nullable,
            "primary_key": self.is_primary_key,
            "unique": self.is_unique,
            "serial": self.is_serial_key,
            "default": self.default.to_sql(),
        }
        if self.enum_options:
            result["options"] = list(self.enum_options)
        if self.is_foreign_key:
            refs = self.foreign_key.references
            result["references"] = f"{refs.target_table}.{refs.target_column}"
        return result


@dataclass(frozen=True)
class TableSchema:
    """Canonical table: a name plus columns in introspection order."""
    name: str
    columns: Tuple[ColumnSchema, ...] = ()

    def __post_init__(self):
        names = [c.name for c in self.columns]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate column names in table '{self.name}'")

    def get_column(self, name: str) -> Optional[ColumnSchema]:
        """Find a column by name."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    @property
    def primary_key_columns(self) -> List[str]:
        return [c.name for c in self.columns if c.is_primary_key]

    @property
    def foreign_key_columns(self) -> List[ColumnSchema]:
        return [c for c in self.columns if c.is_foreign_key]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
        }
