"""Document loading and text extraction helpers."""

from pathlib import Path

from bs4 import BeautifulSoup, Tag

from restdoc_codegen.errors import MissingCellError


def load_document(file_path: Path) -> BeautifulSoup:
    """Parse an HTML reference document."""
    text = file_path.read_text(encoding="utf-8")
    return parse_document(text)


def parse_document(text: str) -> BeautifulSoup:
    return BeautifulSoup(text, "lxml")


def element_text(element: Tag) -> str:
    """Concatenate all text nodes below an element."""
    return "".join(element.strings)


def text_opt(element: Tag, selector: str) -> str | None:
    """Text of the first match of a CSS selector, or None."""
    found = element.select_one(selector)
    if found is None:
        return None
    return element_text(found)


def text(element: Tag, selector: str) -> str:
    """Text of the first match of a CSS selector; raises if nothing matches."""
    value = text_opt(element, selector)
    if value is None:
        raise MissingCellError(selector)
    return value
