"""JSON field-manifest renderer."""

import json
from typing import Any, Dict, Sequence

from ..database.models import ColumnSchema, SemanticType, TableSchema
from ..database.type_mappers import is_integer_like
from .base import Renderer
from .naming import label, ref_name

JSON_TYPES = {
    SemanticType.BOOLEAN: "boolean",
    SemanticType.INTEGER: "number",
    SemanticType.TEXT: "text",
    SemanticType.TEXTAREA: "textarea",
    SemanticType.DATE: "date",
    SemanticType.SELECT: "select",
}


def is_primary_field(column: ColumnSchema) -> bool:
    """Integer primary keys not overridden by a non-primary relation overlay."""
    if not column.is_primary_key or not is_integer_like(column.raw_type):
        return False
    if column.is_foreign_key:
        return False
    return column.foreign_key is None or column.foreign_key.is_primary_key


class JsonManifestRenderer(Renderer):
    """One ``<table>.json`` manifest per table."""

    target = "json"

    def build_field(self, column: ColumnSchema) -> Dict[str, Any]:
        """Build the manifest entry for one column; key order is significant."""
        name = self.field_name(column.name)
        field: Dict[str, Any] = {
            "label": label(name),
            "isList": True,
            "isFilter": True,
        }

        if is_primary_field(column):
            field["type"] = "primary"
        elif column.is_foreign_key and not column.is_serial_key:
            field["type"] = "select"
            field["ref"] = ref_name(column.foreign_key.references.target_table)
        elif column.is_enum:
            field["type"] = "select"
            field["options"] = {value: value for value in column.enum_options}
            if not column.is_primary_key:
                field["required"] = not column.nullable
        elif not column.is_primary_key:
            field["required"] = not column.nullable
            field["type"] = JSON_TYPES[column.semantic_type]
        else:
            field["type"] = JSON_TYPES[column.semantic_type]

        if column.is_unique:
            field["unique"] = True
        if self.options.camel_case:
            field["field"] = column.name
        return field

    def build_table(self, table: TableSchema) -> Dict[str, Any]:
        bundle = self.table_name(table.name)
        manifest: Dict[str, Any] = {
            "bundle": bundle,
            "label": label(bundle),
            "description": f"All {label(bundle)}",
            "refLabel": "",
            "fields": {
                self.field_name(c.name): self.build_field(c) for c in self.visible_columns(table)
            },
        }
        for key, value in self.options.additional.items():
            if key == "name":
                manifest["name"] = {"singular": table.name, "plural": table.name}
            else:
                manifest[key] = value
        return manifest

    def serialize(self, manifest: Dict[str, Any]) -> str:
        return json.dumps(manifest, indent=self.indent, ensure_ascii=False) + "\n"

    def files(self, tables: Sequence[TableSchema], nodes: Sequence[Dict[str, Any]]) -> Dict[str, str]:
        result: Dict[str, str] = {}
        for table, node in zip(tables, nodes):
            self.add_file(result, f"{self.file_stem(table.name)}.json", self.serialize(node), table.name)
        return result
