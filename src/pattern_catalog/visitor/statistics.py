"""Statistics visitor: word/character counts and an element histogram."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping

from .base import DocumentVisitor
from .elements import CodeBlock, Heading, Image, ListElement, Paragraph, Table

__all__ = [
    "DocumentStatistics",
    "StatisticsVisitor",
    "count_words",
    "format_statistics",
]

_WHITESPACE_RE = re.compile(r"\s+")


def count_words(text: str) -> int:
    """Count whitespace-separated words, ignoring empty tokens."""

    return sum(1 for word in _WHITESPACE_RE.split(text.strip()) if word)


@dataclass(frozen=True)
class DocumentStatistics:
    word_count: int = 0
    character_count: int = 0
    element_counts: Mapping[str, int] = field(default_factory=dict)
    image_count: int = 0
    code_line_count: int = 0


class StatisticsVisitor(DocumentVisitor):
    """Accumulate counters across one or more traversals until cleared."""

    def __init__(self) -> None:
        self.clear()

    def clear(self) -> None:
        self._words = 0
        self._characters = 0
        self._element_counts: dict[str, int] = {}
        self._images = 0
        self._code_lines = 0

    def visit_paragraph(self, element: Paragraph) -> None:
        self._count_text(element.text)
        self._increment("paragraph")

    def visit_heading(self, element: Heading) -> None:
        self._count_text(element.text)
        self._increment(f"heading-h{element.level}")

    def visit_image(self, element: Image) -> None:
        self._images += 1
        if element.caption:
            self._count_text(element.caption)
        self._increment("image")

    def visit_code_block(self, element: CodeBlock) -> None:
        self._code_lines += len(element.lines)
        self._increment("codeBlock")
        self._increment(f"code-{element.language}")

    def visit_list(self, element: ListElement) -> None:
        for item in element.items:
            self._count_text(item)
        self._increment("ordered-list" if element.ordered else "unordered-list")

    def visit_table(self, element: Table) -> None:
        for header in element.headers:
            self._count_text(header)
        for row in element.rows:
            for cell in row:
                self._count_text(cell)
        self._increment("table")

    def get_statistics(self) -> DocumentStatistics:
        return DocumentStatistics(
            word_count=self._words,
            character_count=self._characters,
            element_counts=dict(self._element_counts),
            image_count=self._images,
            code_line_count=self._code_lines,
        )

    def _count_text(self, text: str) -> None:
        self._words += count_words(text)
        self._characters += len(text)

    def _increment(self, key: str) -> None:
        self._element_counts[key] = self._element_counts.get(key, 0) + 1


def format_statistics(stats: DocumentStatistics) -> str:
    lines = [
        "Document Statistics:",
        f"  Words: {stats.word_count}",
        f"  Characters: {stats.character_count}",
        f"  Images: {stats.image_count}",
        f"  Code lines: {stats.code_line_count}",
        "  Elements by type:",
    ]
    lines.extend(
        f"    - {kind}: {count}" for kind, count in stats.element_counts.items()
    )
    return "\n".join(lines)
