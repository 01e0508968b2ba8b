"""Visitor contract and the element-kind dispatch table.

Every element variant carries an :class:`ElementKind` tag. ``dispatch`` maps
that tag onto exactly one handler of a :class:`DocumentVisitor`, which is how
``Element.accept`` performs double dispatch. Adding a visitor means writing
one subclass; adding an element kind means extending the enum, the table and
every visitor. :class:`DocumentVisitor` is an ABC, so a visitor missing any
handler fails at construction time with ``TypeError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .elements import (
        CodeBlock,
        Element,
        Heading,
        Image,
        ListElement,
        Paragraph,
        Table,
    )

__all__ = [
    "DocumentVisitor",
    "ElementKind",
    "HANDLERS",
    "dispatch",
]


class ElementKind(Enum):
    """Closed set of document element variants."""

    PARAGRAPH = "paragraph"
    HEADING = "heading"
    IMAGE = "image"
    CODE_BLOCK = "codeBlock"
    LIST = "list"
    TABLE = "table"


class DocumentVisitor(ABC):
    """One handler per element kind; concrete visitors own an accumulator."""

    @abstractmethod
    def visit_paragraph(self, element: Paragraph) -> None: ...

    @abstractmethod
    def visit_heading(self, element: Heading) -> None: ...

    @abstractmethod
    def visit_image(self, element: Image) -> None: ...

    @abstractmethod
    def visit_code_block(self, element: CodeBlock) -> None: ...

    @abstractmethod
    def visit_list(self, element: ListElement) -> None: ...

    @abstractmethod
    def visit_table(self, element: Table) -> None: ...


HANDLERS: Mapping[ElementKind, str] = {
    ElementKind.PARAGRAPH: "visit_paragraph",
    ElementKind.HEADING: "visit_heading",
    ElementKind.IMAGE: "visit_image",
    ElementKind.CODE_BLOCK: "visit_code_block",
    ElementKind.LIST: "visit_list",
    ElementKind.TABLE: "visit_table",
}


def dispatch(element: Element, visitor: DocumentVisitor) -> None:
    """Invoke the single ``visitor`` handler matching ``element.kind``."""

    kind = getattr(element, "kind", None)
    try:
        handler_name = HANDLERS[kind]  # type: ignore[index]
    except KeyError:
        raise TypeError(
            f"Cannot dispatch {type(element).__name__!s}: unknown element "
            f"kind {kind!r}."
        ) from None
    getattr(visitor, handler_name)(element)
