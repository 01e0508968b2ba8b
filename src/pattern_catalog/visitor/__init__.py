"""Visitor pattern: document elements and exporters."""

from __future__ import annotations

from .base import HANDLERS, DocumentVisitor, ElementKind, dispatch
from .elements import (
    ALIGNMENTS,
    CodeBlock,
    Document,
    Element,
    Heading,
    Image,
    ListElement,
    Paragraph,
    Table,
)
from .exporters import HtmlExportVisitor, MarkdownExportVisitor, PlainTextVisitor
from .loader import (
    DocumentLoadError,
    document_from_mapping,
    load_document,
    sample_document,
)
from .render import render_standalone
from .statistics import (
    DocumentStatistics,
    StatisticsVisitor,
    count_words,
    format_statistics,
)

__all__ = [
    "ALIGNMENTS",
    "HANDLERS",
    "CodeBlock",
    "Document",
    "DocumentLoadError",
    "DocumentStatistics",
    "DocumentVisitor",
    "Element",
    "ElementKind",
    "Heading",
    "HtmlExportVisitor",
    "Image",
    "ListElement",
    "MarkdownExportVisitor",
    "Paragraph",
    "PlainTextVisitor",
    "StatisticsVisitor",
    "Table",
    "count_words",
    "dispatch",
    "document_from_mapping",
    "format_statistics",
    "load_document",
    "render_standalone",
    "sample_document",
]
