"""Schema models extracted from an API reference document.

The extractors build these models in a single forward pass; the
generators only read them.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from restdoc_codegen.errors import UnknownParameterKindError

if TYPE_CHECKING:
    from restdoc_codegen.parser.registry import TypeRegistry


class TypeKind(str, Enum):
    PRIMITIVE = "primitive"
    BORROWED = "borrowed"  # textual data, needs a lifetime
    REFERENCE = "reference"  # named entity, resolved through the registry


class TypeDescriptor(BaseModel):
    """Semantic type of a field, parameter or response."""

    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    name: str

    @classmethod
    def primitive(cls, name: str) -> TypeDescriptor:
        return cls(kind=TypeKind.PRIMITIVE, name=name)

    @classmethod
    def borrowed(cls, name: str) -> TypeDescriptor:
        return cls(kind=TypeKind.BORROWED, name=name)

    @classmethod
    def reference(cls, name: str) -> TypeDescriptor:
        return cls(kind=TypeKind.REFERENCE, name=name)

    @property
    def is_reference(self) -> bool:
        return self.kind is TypeKind.REFERENCE


class Field(BaseModel):
    """A single field of a record."""

    model_config = ConfigDict(frozen=True)

    name: str  # normalized, never a reserved word
    original_name: str
    type: TypeDescriptor
    is_array: bool = False
    is_optional: bool = False
    is_rename: bool = False  # serialized name must be spelled out explicitly


class EnumEntity(BaseModel):
    """An enumeration synthesized from an inline ``enum (...)`` type."""

    model_config = ConfigDict(frozen=True)

    name: str
    variants: list[str]
    is_upper_case: bool


class RecordEntity(BaseModel):
    """A struct-like definition with named fields."""

    model_config = ConfigDict(frozen=True)

    name: str
    fields: list[Field]
    is_camel_case: bool = False

    def is_borrowed(self, registry: TypeRegistry) -> bool:
        """Whether this record holds borrowed text, directly or through references."""
        return registry.is_borrowed(self.name)


class ParameterKind(str, Enum):
    PATH = "Path"
    QUERY = "Query"
    BODY = "Body"
    FORM_DATA = "FormData"

    @classmethod
    def parse(cls, token: str) -> ParameterKind:
        try:
            return cls(token)
        except ValueError:
            raise UnknownParameterKindError(token) from None


class Parameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    comment: str | None = None
    is_optional: bool = False
    is_array: bool = False
    kind: ParameterKind
    type: TypeDescriptor


class ResponseType(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: TypeDescriptor
    is_array: bool = False


class OperationEntity(BaseModel):
    """One documented REST method."""

    model_config = ConfigDict(frozen=True)

    name: str
    comment: str  # owning resource heading
    method: str  # GET / POST / PUT / DELETE
    path: str  # /{realm}/users/{id}
    parameters: list[Parameter]
    response: ResponseType

