"""Abstract base class for artifact renderers."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from ..database.models import ColumnSchema, TableSchema
from ..errors import RenderError
from ..options import RenderOptions
from .naming import camel_case


class Renderer(ABC):
    """Projects the canonical model into one target format.

    Rendering happens in two steps so tables can be rendered concurrently:
    ``build_table`` turns one table into a structured node (pure, no shared
    state), and ``files`` serializes the nodes of all tables into a mapping of
    file name to text. Nodes are passed to ``files`` in table order.
    """

    target: str = ""

    def __init__(self, options: Optional[RenderOptions] = None):
        self.options = options or RenderOptions()

    @abstractmethod
    def build_table(self, table: TableSchema) -> Any:
        """Build the structured node for one table."""
        pass

    @abstractmethod
    def files(self, tables: Sequence[TableSchema], nodes: Sequence[Any]) -> Dict[str, str]:
        """Serialize the nodes of every table into ``{file name: text}``."""
        pass

    def render(self, tables: Sequence[TableSchema]) -> Dict[str, str]:
        """Render all tables sequentially."""
        return self.files(tables, [self.build_table(t) for t in tables])

    # Shared helpers

    @property
    def indent(self) -> str:
        return self.options.indent

    def field_name(self, column_name: str) -> str:
        return camel_case(column_name) if self.options.camel_case else column_name

    def table_name(self, table_name: str) -> str:
        return camel_case(table_name) if self.options.camel_case else table_name

    def file_stem(self, table_name: str) -> str:
        return camel_case(table_name) if self.options.camel_case_file_names else table_name

    def visible_columns(self, table: TableSchema) -> List[ColumnSchema]:
        """Columns left after the timestamp skip rule."""
        return [c for c in table.columns if not self.options.timestamps.is_excluded(c.name)]

    def add_file(self, files: Dict[str, str], name: str, text: str, table: Optional[str] = None):
        """Add one output file, refusing to overwrite another file of this target."""
        if name in files:
            raise RenderError(
                f"Output file {name} produced twice",
                details={"target": self.target, "file": name, "table": table},
            )
        files[name] = text
