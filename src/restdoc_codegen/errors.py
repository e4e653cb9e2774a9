"""Exceptions raised while extracting a schema from an API reference document.

Every failure is fatal to the run except ``EnumCandidate``, which the
definition extractor uses as a signal to synthesize an enumeration.
"""


class RestDocError(Exception):
    """Base class for all generator errors."""


class EnumCandidate(RestDocError):
    """A type token describes an inline enumeration such as ``enum (A, B)``."""

    def __init__(self, inner: str):
        super().__init__(f"Inline enum: {inner}")
        self.inner = inner


class UnknownTypeError(RestDocError):
    """A type token matches no known pattern."""

    def __init__(self, token: str):
        super().__init__(f"Unknown type: {token!r}")
        self.token = token


class UnsupportedTypeError(RestDocError):
    """A type token is valid but cannot be used where it appears."""


class MissingCellError(RestDocError):
    """An expected element is missing from the document."""

    def __init__(self, selector: str):
        super().__init__(f"No element matches selector {selector!r}")
        self.selector = selector


class UnknownParameterKindError(RestDocError):
    def __init__(self, token: str):
        super().__init__(f"Unknown parameter kind: {token}")
        self.token = token


class MissingResponseError(RestDocError):
    """An operation has no Responses block."""


class UnresolvedReferenceError(RestDocError):
    """A forward reference names an entity that was never extracted."""

    def __init__(self, name: str):
        super().__init__(f"Unresolved type reference: {name}")
        self.name = name


class ConfigError(RestDocError):
    """The generator configuration file is invalid."""
