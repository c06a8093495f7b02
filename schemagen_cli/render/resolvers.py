"""GraphQL resolver stub renderer (JavaScript)."""

from typing import Dict, List, Optional, Sequence

from ..database.models import TableSchema
from ..options import RenderOptions
from .base import Renderer
from .graphql import GraphQLRenderer, GraphQLType

RESOLVERS_FILE = "resolvers.js"


class ResolverRenderer(Renderer):
    """A single ``resolvers.js`` binding every root operation to a data-access call.

    Operation names match the ones in ``operations.graphql``. The data-access
    object is taken from the resolver context (``{ db }`` by default) and is
    expected to expose one model per table name.
    """

    target = "resolvers"

    def __init__(self, options: Optional[RenderOptions] = None):
        super().__init__(options)
        self._types = GraphQLRenderer(self.options)

    def build_table(self, table: TableSchema) -> GraphQLType:
        return self._types.build_table(table)

    def _model(self, node: GraphQLType) -> str:
        return f"{self.options.data_access_name}.{node.table}"

    def _context(self) -> str:
        return f"{{ {self.options.data_access_name} }}"

    def _values(self, names: List[str], depth: int) -> List[str]:
        """``{ a: a, b: b }`` object literal lines at the given depth."""
        inner = self.indent * (depth + 1)
        body = ",\n".join(f"{inner}{n}: {n}" for n in names)
        if not body:
            return ["{}"]
        return ["{", body, self.indent * depth + "}"]

    def _where_id(self) -> str:
        return "{ where: { id: id } }"

    def render_query(self, node: GraphQLType) -> List[str]:
        i2 = self.indent * 2
        find = self.options.resolver_find_method
        return [
            f"{i2}{node.method_name}s: (parent, args, {self._context()}, info) => "
            f"{self._model(node)}.findAll(),",
            f"{i2}{node.method_name}: (parent, {{ id }}, {self._context()}, info) => "
            f"{self._model(node)}.{find}(id),",
        ]

    def render_mutation(self, node: GraphQLType) -> List[str]:
        i2, i3 = self.indent * 2, self.indent * 3
        names = [f.name for f in node.attrs]
        create_args = f"{{ {', '.join(names)} }}" if names else "args"
        update_args = f"{{ {', '.join(['id'] + names)} }}"
        values = self._values(names, 3)

        lines = [f"{i2}create{node.type_name}: (parent, {create_args}, {self._context()}, info) =>"]
        lines.append(f"{i3}{self._model(node)}.create(" + "\n".join(values) + "),")

        lines.append(f"{i2}update{node.type_name}: (parent, {update_args}, {self._context()}, info) =>")
        lines.append(f"{i3}{self._model(node)}.update(" + "\n".join(values) + f", {self._where_id()}),")

        lines.append(f"{i2}delete{node.type_name}: (parent, {{ id }}, {self._context()}, info) =>")
        lines.append(f"{i3}{self._model(node)}.destroy({self._where_id()}),")
        return lines

    def render_resolvers(self, nodes: Sequence[GraphQLType]) -> str:
        i1 = self.indent
        lines = ["module.exports = {", f"{i1}Query: {{"]
        for node in nodes:
            lines.extend(self.render_query(node))
        lines.append(f"{i1}}},")
        lines.append(f"{i1}Mutation: {{")
        for node in nodes:
            lines.extend(self.render_mutation(node))
        lines.append(f"{i1}}},")
        lines.append("};")
        return "\n".join(lines) + "\n"

    def files(self, tables: Sequence[TableSchema], nodes: Sequence[GraphQLType]) -> Dict[str, str]:
        return {RESOLVERS_FILE: self.render_resolvers(nodes)}
