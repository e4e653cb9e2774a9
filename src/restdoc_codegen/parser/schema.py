"""Full extraction pipeline: document -> definitions -> operations."""

import logging
from pathlib import Path

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict

from restdoc_codegen.config import GeneratorConfig
from restdoc_codegen.parser.base import EnumEntity, OperationEntity, RecordEntity
from restdoc_codegen.parser.definitions import extract_definitions
from restdoc_codegen.parser.html import load_document
from restdoc_codegen.parser.operations import extract_operations
from restdoc_codegen.parser.registry import TypeRegistry

logger = logging.getLogger(__name__)


class ApiSchema(BaseModel):
    """Everything the generators read: enums, records, registry and operations."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    enums: list[EnumEntity]
    records: list[RecordEntity]
    registry: TypeRegistry
    operations: list[OperationEntity]


def extract_schema(document: BeautifulSoup, config: GeneratorConfig | None = None) -> ApiSchema:
    """Extract definitions and operations, then check every reference resolves."""
    enums, records, registry = extract_definitions(document, config)
    operations = extract_operations(document)

    for record in records:
        registry.check_references(field.type for field in record.fields)
    for operation in operations:
        registry.check_references(p.type for p in operation.parameters)
        registry.check_references([operation.response.type])

    logger.info("Extracted %d operations", len(operations))
    return ApiSchema(enums=enums, records=records, registry=registry, operations=operations)


def load_schema(file_path: Path, config: GeneratorConfig | None = None) -> ApiSchema:
    logger.info("Parsing %s", file_path)
    return extract_schema(load_document(file_path), config)
