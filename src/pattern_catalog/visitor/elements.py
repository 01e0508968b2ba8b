"""Document element variants and the ``Document`` aggregate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar, Iterator, Literal, Sequence, Union

from .base import DocumentVisitor, ElementKind, dispatch

__all__ = [
    "ALIGNMENTS",
    "CodeBlock",
    "Document",
    "Element",
    "Heading",
    "Image",
    "ListElement",
    "Paragraph",
    "Table",
]

logger = logging.getLogger(__name__)

Alignment = Literal["left", "center", "right", "justify"]
ALIGNMENTS: tuple[str, ...] = ("left", "center", "right", "justify")


class _Accepts:
    kind: ClassVar[ElementKind]

    def accept(self, visitor: DocumentVisitor) -> None:
        dispatch(self, visitor)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Paragraph(_Accepts):
    kind: ClassVar[ElementKind] = ElementKind.PARAGRAPH

    text: str
    alignment: Alignment = "left"

    def __post_init__(self) -> None:
        if self.alignment not in ALIGNMENTS:
            raise ValueError(
                f"alignment must be one of {', '.join(ALIGNMENTS)}; "
                f"got {self.alignment!r}"
            )


@dataclass(frozen=True)
class Heading(_Accepts):
    kind: ClassVar[ElementKind] = ElementKind.HEADING

    text: str
    level: int = 1

    def __post_init__(self) -> None:
        if (
            not isinstance(self.level, int)
            or isinstance(self.level, bool)
            or self.level not in range(1, 7)
        ):
            raise ValueError(f"heading level must be 1-6; got {self.level!r}")


@dataclass(frozen=True)
class Image(_Accepts):
    kind: ClassVar[ElementKind] = ElementKind.IMAGE

    src: str
    alt: str
    caption: str | None = None
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class CodeBlock(_Accepts):
    kind: ClassVar[ElementKind] = ElementKind.CODE_BLOCK

    code: str
    language: str = "text"
    show_line_numbers: bool = True

    @property
    def lines(self) -> list[str]:
        return self.code.split("\n")


@dataclass(frozen=True)
class ListElement(_Accepts):
    kind: ClassVar[ElementKind] = ElementKind.LIST

    items: tuple[str, ...]
    ordered: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class Table(_Accepts):
    kind: ClassVar[ElementKind] = ElementKind.TABLE

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()

    def __post_init__(self) -> None:
        headers = tuple(self.headers)
        rows = tuple(tuple(row) for row in self.rows)
        for index, row in enumerate(rows):
            if len(row) != len(headers):
                raise ValueError(
                    f"table row {index} has {len(row)} cells; expected "
                    f"{len(headers)}"
                )
        object.__setattr__(self, "headers", headers)
        object.__setattr__(self, "rows", rows)


Element = Union[Paragraph, Heading, Image, CodeBlock, ListElement, Table]


class Document:
    """Ordered sequence of elements; authoring order is export order."""

    def __init__(self, title: str, elements: Sequence[Element] = ()) -> None:
        self.title = title
        self._elements: list[Element] = []
        for element in elements:
            self.add(element)

    def __repr__(self) -> str:
        return f"Document(title={self.title!r}, elements={len(self)})"

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(tuple(self._elements))

    @property
    def elements(self) -> tuple[Element, ...]:
        return tuple(self._elements)

    def add(self, element: Element) -> None:
        if not isinstance(getattr(element, "kind", None), ElementKind):
            raise TypeError(
                f"Documents hold element variants, not {type(element).__name__}"
            )
        self._elements.append(element)

    def accept(self, visitor: DocumentVisitor) -> None:
        logger.debug(
            "Visiting document",
            extra={
                "title": self.title,
                "elements": len(self._elements),
                "visitor": type(visitor).__name__,
            },
        )
        for element in self._elements:
            element.accept(visitor)
