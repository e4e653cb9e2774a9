"""Extracts records and enumerations from the "Definitions" section.

Each definition is a ``div.sect2`` with an ``h3`` heading and a table of
fields. The first cell holds the field name in ``<strong>`` and the
optional/required marker in ``<em>``; the second cell holds the type.
"""

import logging

from bs4 import BeautifulSoup, Tag

from restdoc_codegen.config import GeneratorConfig
from restdoc_codegen.errors import EnumCandidate
from restdoc_codegen.parser.base import EnumEntity, Field, RecordEntity, TypeDescriptor
from restdoc_codegen.parser.html import text
from restdoc_codegen.parser.naming import normalize_field_name, to_camel_case
from restdoc_codegen.parser.registry import TypeRegistry
from restdoc_codegen.parser.types import check_array, check_optional, convert_type

logger = logging.getLogger(__name__)

DEFINITIONS_SELECTOR = "#_definitions ~ div.sectionbody > div.sect2"


def extract_definitions(
    document: BeautifulSoup, config: GeneratorConfig | None = None
) -> tuple[list[EnumEntity], list[RecordEntity], TypeRegistry]:
    """Extract all definitions in document order."""
    config = config or GeneratorConfig()
    enums: list[EnumEntity] = []
    records: list[RecordEntity] = []
    registry = TypeRegistry()

    for definition in document.select(DEFINITIONS_SELECTOR):
        record = _parse_definition(definition, config, enums)
        registry.add_record(record)
        records.append(record)

    for enum in enums:
        registry.add_enum(enum)

    logger.info("Extracted %d records and %d enums", len(records), len(enums))
    return enums, records, registry


def _parse_definition(definition: Tag, config: GeneratorConfig, enums: list[EnumEntity]) -> RecordEntity:
    record_name = text(definition, "h3").replace("-", "")
    logger.debug("Definition %s", record_name)

    fields = []
    is_camel_case = False
    for row in definition.select("tbody tr"):
        field, camel = _parse_field(row, record_name, config, enums)
        is_camel_case = is_camel_case or camel
        fields.append(field)

    return RecordEntity(name=record_name, fields=fields, is_camel_case=is_camel_case)


def _parse_field(
    row: Tag, record_name: str, config: GeneratorConfig, enums: list[EnumEntity]
) -> tuple[Field, bool]:
    original_name = text(row, "strong")
    name, is_camel_case, is_rename = normalize_field_name(original_name, config.reserved_names)

    type_token = text(row, "td ~ td p").replace("-", "")
    inner = check_array(type_token)
    is_array = inner is not None
    try:
        field_type = convert_type(inner if is_array else type_token)
    except EnumCandidate as candidate:
        enum = synthesize_enum(record_name, name, candidate.inner, config.enum_renames)
        enums.append(enum)
        field_type = TypeDescriptor.reference(enum.name)

    is_optional = check_optional(text(row, "em"))

    logger.debug("  %s: %s (%s)", original_name, type_token, "optional" if is_optional else "required")
    field = Field(
        name=name,
        original_name=original_name,
        type=field_type,
        is_array=is_array,
        is_optional=is_optional,
        is_rename=is_rename,
    )
    return field, is_camel_case


def synthesize_enum(
    record_name: str, field_name: str, inner: str, renames: dict[str, str] | None = None
) -> EnumEntity:
    """Build an enumeration from the comma separated list of an ``enum (...)`` token."""
    renames = renames or {}
    tokens = inner.split(", ")
    variants = []
    for token in tokens:
        variant = to_camel_case(token)
        variants.append(renames.get(variant, variant))

    return EnumEntity(
        name=f"{record_name}{to_camel_case(field_name)}",
        variants=variants,
        is_upper_case=all(all(ch.isupper() for ch in token) for token in tokens),
    )
