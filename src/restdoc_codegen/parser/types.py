"""Type token conversion.

Maps the type strings printed in the reference document (``string``,
``integer(int32)``, ``< UserRepresentation > array`` ...) to semantic
type descriptors.
"""

from restdoc_codegen.errors import EnumCandidate, UnknownTypeError
from restdoc_codegen.parser.base import TypeDescriptor

ARRAY_PREFIX = "< "
ARRAY_SUFFIX = " > array"
ENUM_PREFIX = "enum ("

KNOWN_TYPES: dict[str, TypeDescriptor] = {
    "No Content": TypeDescriptor.primitive("unit"),
    "string": TypeDescriptor.borrowed("str"),
    "< string > array(csv)": TypeDescriptor.borrowed("str"),
    "string(byte)": TypeDescriptor.primitive("u8"),
    "integer(int32)": TypeDescriptor.primitive("i32"),
    "integer(int64)": TypeDescriptor.primitive("i64"),
    "number(float)": TypeDescriptor.primitive("f32"),
    "boolean": TypeDescriptor.primitive("bool"),
    "Map": TypeDescriptor.borrowed("map"),
    "file": TypeDescriptor.primitive("value"),
    "Object": TypeDescriptor.primitive("value"),
}


def check_array(token: str) -> str | None:
    """Return the inner token of ``< X > array``, or None if not an array."""
    if token.startswith(ARRAY_PREFIX) and token.endswith(ARRAY_SUFFIX):
        return token[len(ARRAY_PREFIX):-len(ARRAY_SUFFIX)]
    return None


def check_optional(value: str) -> bool:
    return value == "optional"


def convert_type(token: str) -> TypeDescriptor:
    """Convert a single (non-array) type token.

    Raises EnumCandidate for ``enum (...)`` tokens so the caller can
    synthesize an enumeration, and UnknownTypeError for anything else
    that is not recognized.
    """
    if token in KNOWN_TYPES:
        return KNOWN_TYPES[token]
    if token.startswith(ENUM_PREFIX):
        raise EnumCandidate(token[len(ENUM_PREFIX):-1])
    if token and token[0].isupper():
        return TypeDescriptor.reference(token)
    raise UnknownTypeError(token)


def convert_type_token(token: str) -> tuple[TypeDescriptor, bool]:
    """Strip an array wrapper, then convert. Returns (descriptor, is_array)."""
    inner = check_array(token)
    if inner is None:
        return convert_type(token), False
    return convert_type(inner), True
