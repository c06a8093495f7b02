"""Error types for schemagen."""

from typing import Optional, Dict, Any


class SchemaGenError(Exception):
    """Base exception for schemagen errors."""

    def __init__(self, message: str, code: str = "SCHEMAGEN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for reporting."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class SchemaSourceError(SchemaGenError):
    """Error listing tables or describing a table's columns.

    Fatal for the affected table only; sibling tables keep rendering.
    """

    def __init__(self, message: str, table: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        if table:
            details["table"] = table
        super().__init__(message, code="SCHEMA_SOURCE_ERROR", details=details)
        self.table = table


class ForeignKeyLookupError(SchemaGenError):
    """Error during foreign key discovery. Logged, never fatal."""

    def __init__(self, message: str, table: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        if table:
            details["table"] = table
        super().__init__(message, code="FOREIGN_KEY_LOOKUP_ERROR", details=details)
        self.table = table


class RenderError(SchemaGenError):
    """Error during artifact rendering (unknown target, invalid options)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="RENDER_ERROR", details=details)


class ConfigurationError(SchemaGenError):
    """Invalid options or snapshot input."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


class OutputError(SchemaGenError):
    """Error writing rendered artifacts."""

    def __init__(self, message: str, path: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        if path:
            details["path"] = path
        super().__init__(message, code="OUTPUT_ERROR", details=details)
        self.path = path
