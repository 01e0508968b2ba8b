"""Build documents from TOML definitions, plus a built-in sample document.

A document file looks like::

    title = "Quick Note"

    [[elements]]
    type = "heading"
    text = "Meeting Notes"
    level = 1

    [[elements]]
    type = "list"
    items = ["Review designs", "Assign tasks"]
    ordered = true

``type`` selects the element variant. The remaining keys must be fields of
that variant with values of the matching TOML type.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Mapping

from pattern_catalog.core.config import TomlConfigError, load_toml

from .elements import (
    CodeBlock,
    Document,
    Element,
    Heading,
    Image,
    ListElement,
    Paragraph,
    Table,
)

__all__ = [
    "DocumentLoadError",
    "ELEMENT_TYPES",
    "document_from_mapping",
    "load_document",
    "sample_document",
]


class DocumentLoadError(ValueError):
    """Raised when a document definition cannot be turned into elements."""


ELEMENT_TYPES: Mapping[str, Callable[..., Element]] = {
    "paragraph": Paragraph,
    "heading": Heading,
    "image": Image,
    "code": CodeBlock,
    "code_block": CodeBlock,
    "list": ListElement,
    "table": Table,
}


def _is_text_list(value: object) -> bool:
    return isinstance(value, (list, tuple)) and all(
        isinstance(item, str) for item in value
    )


def _is_text_rows(value: object) -> bool:
    return isinstance(value, (list, tuple)) and all(
        _is_text_list(row) for row in value
    )


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_CHECKS: Mapping[str, Callable[[object], bool]] = {
    "string": lambda value: isinstance(value, str),
    "integer": _is_integer,
    "boolean": lambda value: isinstance(value, bool),
    "array of strings": _is_text_list,
    "array of string arrays": _is_text_rows,
}

# Accepted keys per variant and the shape each value must have.
_FIELDS: Mapping[Callable[..., Element], Mapping[str, str]] = {
    Paragraph: {"text": "string", "alignment": "string"},
    Heading: {"text": "string", "level": "integer"},
    Image: {
        "src": "string",
        "alt": "string",
        "caption": "string",
        "width": "integer",
        "height": "integer",
    },
    CodeBlock: {
        "code": "string",
        "language": "string",
        "show_line_numbers": "boolean",
    },
    ListElement: {"items": "array of strings", "ordered": "boolean"},
    Table: {"headers": "array of strings", "rows": "array of string arrays"},
}


def document_from_mapping(data: Mapping[str, Any]) -> Document:
    title = data.get("title", "Untitled")
    if not isinstance(title, str):
        raise DocumentLoadError("Document 'title' must be a string.")
    raw_elements = data.get("elements", [])
    if not isinstance(raw_elements, list):
        raise DocumentLoadError("Document 'elements' must be an array of tables.")

    document = Document(title)
    for index, raw in enumerate(raw_elements):
        document.add(_element_from_mapping(index, raw))
    return document


def load_document(path: Path) -> Document:
    try:
        data = load_toml(path)
    except TomlConfigError as exc:
        raise DocumentLoadError(str(exc)) from exc
    return document_from_mapping(data)


def _element_from_mapping(index: int, raw: object) -> Element:
    if not isinstance(raw, Mapping):
        raise DocumentLoadError(f"Element {index} must be a table.")
    fields = dict(raw)
    kind = str(fields.pop("type", "")).strip().lower()
    factory = ELEMENT_TYPES.get(kind)
    if factory is None:
        expected = ", ".join(sorted(ELEMENT_TYPES))
        raise DocumentLoadError(
            f"Element {index} has unknown type {kind!r}; expected one of: "
            f"{expected}."
        )
    fields = _checked_fields(index, kind, factory, fields)
    try:
        return factory(**fields)
    except (TypeError, ValueError) as exc:
        raise DocumentLoadError(f"Element {index} ({kind}): {exc}") from exc


def _checked_fields(
    index: int,
    kind: str,
    factory: Callable[..., Element],
    fields: dict[str, Any],
) -> dict[str, Any]:
    expected = _FIELDS[factory]
    unknown = sorted(set(fields) - set(expected))
    if unknown:
        raise DocumentLoadError(
            f"Element {index} ({kind}) has unknown field(s): "
            f"{', '.join(unknown)}."
        )
    for name, value in fields.items():
        shape = expected[name]
        if not _CHECKS[shape](value):
            raise DocumentLoadError(
                f"Element {index} ({kind}) field '{name}' must be "
                f"{_article(shape)} {shape}; got {type(value).__name__}."
            )
    return fields


def _article(shape: str) -> str:
    return "an" if shape[0] in "aeiou" else "a"

def sample_document() -> Document:
    """Return the "Design Patterns Guide" document used by ``patterns export``."""

    return Document(
        "Design Patterns Guide",
        [
            Heading("Introduction to Design Patterns", 1),
            Paragraph(
                "Design patterns are reusable solutions to commonly occurring "
                "problems in software design. They represent best practices "
                "evolved over time by experienced developers."
            ),
            Heading("Benefits of Design Patterns", 2),
            ListElement(
                (
                    "Proven solutions to common problems",
                    "Shared vocabulary among developers",
                    "Promote code reusability",
                    "Make code more maintainable",
                )
            ),
            Heading("The Visitor Pattern", 2),
            Paragraph(
                "The Visitor pattern allows you to add new operations to "
                "existing object structures without modifying them. It "
                "separates algorithms from the objects they operate on."
            ),
            Image(
                "visitor-pattern.png",
                "Visitor Pattern UML Diagram",
                caption="Figure 1: UML diagram of the Visitor pattern",
                width=600,
                height=400,
            ),
            Heading("Code Example", 3),
            CodeBlock(
                "class Visitor(ABC):\n"
                "    @abstractmethod\n"
                "    def visit_element(self, element): ...\n"
                "\n"
                "class Element:\n"
                "    def accept(self, visitor):\n"
                "        visitor.visit_element(self)",
                language="python",
            ),
            Heading("Pattern Comparison", 2),
            Table(
                ("Pattern", "Intent", "Use Case"),
                (
                    ("Visitor", "Add operations to objects", "Document export"),
                    ("Strategy", "Interchange algorithms", "Payment processing"),
                    ("Observer", "Notify on state change", "Event handling"),
                ),
            ),
            Paragraph(
                "Each pattern serves a specific purpose and should be chosen "
                "based on the problem at hand.",
                "center",
            ),
        ],
    )
