"""Types generator: renders enums and records as serde-derived Rust types."""

from restdoc_codegen.parser.base import EnumEntity, Field, RecordEntity, TypeDescriptor, TypeKind
from restdoc_codegen.parser.registry import TypeRegistry
from restdoc_codegen.parser.schema import ApiSchema

LIFETIME = "<'a>"

RUST_TYPES = {
    "unit": "()",
    "u8": "u8",
    "i32": "i32",
    "i64": "i64",
    "f32": "f32",
    "bool": "bool",
    "value": "Value",
    "str": "Cow<'a, str>",
    "map": "HashMap<Cow<'a, str>, Cow<'a, str>>",
}

HEADER = """use serde::{Deserialize, Serialize};
use serde_json::Value;
use std::{borrow::Cow, collections::HashMap};
"""


def rust_type(descriptor: TypeDescriptor, registry: TypeRegistry) -> str:
    """Rust spelling of a descriptor; references get ``<'a>`` when borrowed."""
    if descriptor.kind is TypeKind.REFERENCE:
        suffix = LIFETIME if registry.is_borrowed(descriptor.name) else ""
        return f"{descriptor.name}{suffix}"
    return RUST_TYPES[descriptor.name]


def wrap_type(type_name: str, is_array: bool, is_optional: bool) -> str:
    if is_array:
        type_name = f"Vec<{type_name}>"
    if is_optional:
        type_name = f"Option<{type_name}>"
    return type_name


class TypesRenderer:
    """Renders the types module for an extracted schema."""

    def render(self, schema: ApiSchema) -> str:
        parts = [HEADER]
        parts.extend(self._render_enum(e) for e in schema.enums)
        parts.extend(self._render_record(r, schema.registry) for r in schema.records)
        return "\n".join(parts)

    def _render_enum(self, enum: EnumEntity) -> str:
        lines = ["#[derive(Clone, Debug, Deserialize, PartialEq, Serialize)]"]
        if enum.is_upper_case:
            lines.append('#[serde(rename_all = "UPPERCASE")]')
        lines.append(f"pub enum {enum.name} {{")
        lines.extend(f"    {variant}," for variant in enum.variants)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _render_record(self, record: RecordEntity, registry: TypeRegistry) -> str:
        lines = ["#[derive(Clone, Debug, Default, Deserialize, PartialEq, Serialize)]"]
        if record.is_camel_case:
            lines.append('#[serde(rename_all = "camelCase")]')
        lifetime = LIFETIME if record.is_borrowed(registry) else ""
        lines.append(f"pub struct {record.name}{lifetime} {{")
        for field in record.fields:
            lines.extend(self._render_field(field, registry))
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _render_field(self, field: Field, registry: TypeRegistry) -> list[str]:
        lines = []
        if field.is_rename:
            lines.append(f'    #[serde(rename = "{field.original_name}")]')
        field_type = wrap_type(rust_type(field.type, registry), field.is_array, field.is_optional)
        lines.append(f"    pub {field.name}: {field_type},")
        return lines
