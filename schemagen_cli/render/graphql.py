"""GraphQL SDL and root operation renderer."""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from ..database.models import ColumnSchema, SemanticType, TableSchema
from .base import Renderer
from .naming import lower_first, normalize_table_name

GRAPHQL_SCALARS = {
    SemanticType.BOOLEAN: "Boolean",
    SemanticType.INTEGER: "Int",
    SemanticType.TEXT: "String",
    SemanticType.TEXTAREA: "String",
    SemanticType.DATE: "String",
    SemanticType.SELECT: "String",
}

OPERATIONS_FILE = "operations.graphql"


@dataclass(frozen=True)
class GraphQLField:
    """One field of an object type."""
    name: str
    type: str
    column: str
    # Key fields (identifiers and foreign keys) are not mutation arguments
    is_key: bool = False

    @property
    def declaration(self) -> str:
        return f"{self.name}: {self.type}"


@dataclass(frozen=True)
class GraphQLType:
    """Object type generated for one table."""
    table: str
    type_name: str
    fields: Tuple[GraphQLField, ...]

    @property
    def attrs(self) -> List[GraphQLField]:
        """Mutation arguments: non-key fields in column order."""
        return [f for f in self.fields if not f.is_key]

    @property
    def method_name(self) -> str:
        return lower_first(self.type_name)


def scalar_for(column: ColumnSchema) -> str:
    """GraphQL scalar for a non-key column.

    Fractional numerics are rendered as ``String`` so no precision is lost.
    """
    if column.semantic_type == SemanticType.INTEGER and column.is_fractional:
        return "String"
    return GRAPHQL_SCALARS[column.semantic_type]


def _with_args(name: str, args: Sequence[str]) -> str:
    return f"{name}({', '.join(args)})" if args else name


class GraphQLRenderer(Renderer):
    """``<table>.graphql`` object types plus one ``operations.graphql``."""

    target = "graphql"

    def build_field(self, column: ColumnSchema) -> GraphQLField:
        name = self.field_name(column.name)
        if column.is_primary_key or name.upper() == "ID":
            return GraphQLField(name, "ID!", column.name, is_key=True)
        suffix = "" if column.nullable else "!"
        if column.is_foreign_key and not column.is_serial_key:
            return GraphQLField(name, "ID" + suffix, column.name, is_key=True)
        return GraphQLField(name, scalar_for(column) + suffix, column.name)

    def build_table(self, table: TableSchema) -> GraphQLType:
        return GraphQLType(
            table=table.name,
            type_name=normalize_table_name(table.name),
            fields=tuple(self.build_field(c) for c in self.visible_columns(table)),
        )

    def render_type(self, node: GraphQLType) -> str:
        lines = [f"type {node.type_name} {{"]
        for field in node.fields:
            lines.append(f"{self.indent}{field.declaration}")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def render_operations(self, nodes: Sequence[GraphQLType]) -> str:
        """Root ``Query`` and ``Mutation`` types for every table."""
        query = ["type Query {"]
        mutation = ["type Mutation {"]
        for node in nodes:
            attrs = [f.declaration for f in node.attrs]
            query.append(f"{self.indent}{node.method_name}s: [{node.type_name}!]!")
            query.append(f"{self.indent}{node.method_name}(id: ID!): {node.type_name}")
            mutation.append(
                f"{self.indent}{_with_args('create' + node.type_name, attrs)}: {node.type_name}!"
            )
            mutation.append(
                f"{self.indent}{_with_args('update' + node.type_name, ['id: ID!'] + attrs)}: [Int!]!"
            )
            mutation.append(f"{self.indent}delete{node.type_name}(id: ID!): Int!")
        query.append("}")
        mutation.append("}")
        return "\n".join(query) + "\n\n" + "\n".join(mutation) + "\n"

    def files(self, tables: Sequence[TableSchema], nodes: Sequence[GraphQLType]) -> Dict[str, str]:
        result: Dict[str, str] = {}
        for table, node in zip(tables, nodes):
            self.add_file(result, f"{self.file_stem(table.name)}.graphql", self.render_type(node), table.name)
        self.add_file(result, OPERATIONS_FILE, self.render_operations(nodes))
        return result
