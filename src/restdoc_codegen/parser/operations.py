"""Extracts REST operations from the "Resources" section.

Layout: each resource is a ``div.sect2`` (``h3`` heading), each method a
``div.sect3`` (``h4`` heading, request line in ``<pre>``), and each block
of a method a ``div.sect4`` (``h5`` heading followed by a table).
"""

import logging
from enum import Enum

from bs4 import BeautifulSoup, Tag

from restdoc_codegen.errors import EnumCandidate, MissingResponseError, UnsupportedTypeError
from restdoc_codegen.parser.base import (
    OperationEntity,
    Parameter,
    ParameterKind,
    ResponseType,
    TypeDescriptor,
)
from restdoc_codegen.parser.html import text, text_opt
from restdoc_codegen.parser.types import check_optional, convert_type_token

logger = logging.getLogger(__name__)

RESOURCES_SELECTOR = "#_paths ~ div.sectionbody > div.sect2"


class BlockKind(Enum):
    PARAMETERS = "Parameters"
    RESPONSES = "Responses"
    PRODUCES = "Produces"
    UNSUPPORTED = None

    @classmethod
    def from_heading(cls, heading: str) -> "BlockKind":
        for kind in cls:
            if kind.value == heading:
                return kind
        return cls.UNSUPPORTED


def extract_operations(document: BeautifulSoup) -> list[OperationEntity]:
    """Extract every documented method, grouped by resource in document order."""
    operations = []
    for resource in document.select(RESOURCES_SELECTOR):
        resource_name = text(resource, "h3")
        logger.info("Resource %s", resource_name)
        for method in resource.select("div.sect3"):
            operations.append(_parse_method(method, resource_name))
    return operations


def split_request_line(line: str) -> tuple[str, str]:
    """``GET /users/{id}`` -> ``("GET", "/users/{id}")``"""
    method, _, path = line.strip().partition(" ")
    return method, path.strip()


def _parse_method(method: Tag, resource_name: str) -> OperationEntity:
    name = text(method, "h4")
    request_line = text_opt(method, "pre")
    if request_line is None:
        logger.warning("No request line for %r, falling back to its name", name)
        request_line = name
    http_method, path = split_request_line(request_line)
    logger.info("  %s %s (%s)", http_method, path, name)

    parameters: list[Parameter] = []
    response = None
    for block in method.select("div.sect4"):
        heading = text(block, "h5")
        kind = BlockKind.from_heading(heading)
        if kind is BlockKind.PARAMETERS:
            parameters.extend(_parse_parameter(row, name) for row in block.select("tbody > tr"))
        elif kind is BlockKind.RESPONSES:
            response = _parse_response(block, name)
        elif kind is BlockKind.PRODUCES:
            continue
        else:
            logger.warning("Unsupported block %s in %r", heading, name)

    if response is None:
        raise MissingResponseError(f"Method {name!r} has no Responses block")

    return OperationEntity(
        name=name,
        comment=resource_name,
        method=http_method,
        path=path,
        parameters=parameters,
        response=response,
    )


def _parse_parameter(row: Tag, method_name: str) -> Parameter:
    kind = ParameterKind.parse(text(row, "td:nth-child(1) > p > strong"))
    name = text(row, "td:nth-child(2) > p > strong")
    optional_required = text(row, "td:nth-child(2) > p > em")
    comment = text_opt(row, "td:nth-child(3) > p")
    type_token = text_opt(row, "td:nth-child(4) > p")
    if type_token is None:
        type_token = text(row, "td:last-child > p")
    logger.debug("    %s %s (%s): %s", kind.value, name, optional_required, type_token)

    parameter_type, is_array = _convert(type_token, f"parameter {name!r} of {method_name!r}")
    return Parameter(
        name=name,
        comment=comment,
        is_optional=check_optional(optional_required),
        is_array=is_array,
        kind=kind,
        type=parameter_type,
    )


def _parse_response(block: Tag, method_name: str) -> ResponseType:
    type_token = text(block, "tbody > tr > td:nth-child(3) > p")
    logger.debug("    response: %s", type_token)
    return_type, is_array = _convert(type_token, f"response of {method_name!r}")
    return ResponseType(type=return_type, is_array=is_array)


def _convert(type_token: str, where: str) -> tuple[TypeDescriptor, bool]:
    try:
        return convert_type_token(type_token.replace("-", ""))
    except EnumCandidate as e:
        raise UnsupportedTypeError(f"Inline enum in {where}: {e.inner}") from e
