"""Identifier case conversion and field-name normalization."""

import re

# Acronym before a capitalized word, a capitalized/lower word, or an acronym.
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z]+[0-9]*")


def split_words(name: str) -> list[str]:
    """Split an identifier on case changes and non-alphanumeric characters."""
    return _WORD_RE.findall(name)


def to_snake_case(name: str) -> str:
    """``userId`` -> ``user_id``"""
    return "_".join(word.lower() for word in split_words(name))


def to_mixed_case(name: str) -> str:
    """``user_id`` -> ``userId``"""
    words = split_words(name)
    if not words:
        return ""
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def to_camel_case(name: str) -> str:
    """``user_id`` -> ``UserId``"""
    return "".join(word.capitalize() for word in split_words(name))


def normalize_field_name(
    original: str, reserved: tuple[str, ...] = ("type", "self")
) -> tuple[str, bool, bool]:
    """Normalize a documented field name.

    Returns ``(name, is_camel_case, is_rename)``. ``is_camel_case`` means the
    original can be regenerated from the normalized name by a camelCase
    conversion; ``is_rename`` means the original must be kept verbatim.
    Reserved names get a trailing underscore and are always renamed.
    """
    name = to_snake_case(original)
    is_camel_case = False
    is_rename = False
    if name != original:
        if to_mixed_case(name) == original:
            is_camel_case = True
        else:
            is_rename = True

    if name in reserved:
        name = f"{name}_"
        is_rename = True

    return name, is_camel_case, is_rename
