"""TypeScript declaration renderer."""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from ..database.models import ColumnSchema, SemanticType, TableSchema
from .base import Renderer

DEFINITIONS_FILE = "db.d.ts"
TABLES_FILE = "db.tables.ts"

TS_TYPES = {
    SemanticType.BOOLEAN: "boolean",
    SemanticType.INTEGER: "number",
    SemanticType.TEXT: "string",
    SemanticType.TEXTAREA: "string",
    SemanticType.DATE: "Date",
}


@dataclass(frozen=True)
class TsMember:
    name: str
    type: str
    optional: bool = False

    @property
    def declaration(self) -> str:
        return f"{self.name}{'?' if self.optional else ''}: {self.type};"


@dataclass(frozen=True)
class TsInterface:
    table: str
    name: str
    members: Tuple[TsMember, ...]


def ts_type(column: ColumnSchema) -> str:
    if column.is_enum:
        return " | ".join("'" + value.replace("'", "\\'") + "'" for value in column.enum_options)
    return TS_TYPES[column.semantic_type]


class TypeScriptRenderer(Renderer):
    """``db.d.ts`` with one interface per table and ``db.tables.ts`` indexing them."""

    target = "typescript"

    def build_member(self, column: ColumnSchema) -> TsMember:
        return TsMember(
            name=self.field_name(column.name),
            type=ts_type(column),
            optional=column.nullable and not column.is_primary_key,
        )

    def build_table(self, table: TableSchema) -> TsInterface:
        return TsInterface(
            table=table.name,
            name=f"{self.table_name(table.name)}Attribute",
            members=tuple(self.build_member(c) for c in self.visible_columns(table)),
        )

    def render_interface(self, node: TsInterface) -> str:
        lines = [f"export interface {node.name} {{"]
        lines.extend(f"{self.indent}{m.declaration}" for m in node.members)
        lines.append("}")
        return "\n".join(lines)

    def render_definitions(self, nodes: Sequence[TsInterface]) -> str:
        parts = ["// tslint:disable"]
        parts.extend(self.render_interface(node) for node in nodes)
        return "\n\n".join(parts) + "\n"

    def render_tables(self, nodes: Sequence[TsInterface]) -> str:
        lines = [
            "// tslint:disable",
            "import * as def from './db';",
            "",
            "export interface ITables {",
        ]
        lines.extend(f"{self.indent}{node.table}: def.{node.name};" for node in nodes)
        lines.append("}")
        lines.append("")
        lines.append("export const tableNames: string[] = [")
        lines.extend(f"{self.indent}'{node.table}'," for node in nodes)
        lines.append("];")
        return "\n".join(lines) + "\n"

    def files(self, tables: Sequence[TableSchema], nodes: Sequence[TsInterface]) -> Dict[str, str]:
        return {
            DEFINITIONS_FILE: self.render_definitions(nodes),
            TABLES_FILE: self.render_tables(nodes),
        }
