"""Text exporters: HTML, Markdown and plain text visitors.

Each exporter appends one fragment per visited element to its own buffer and
joins fragments with a blank line on ``get_output()``. ``clear()`` empties the
buffer so a single exporter can be reused across documents.
"""

from __future__ import annotations

from html import escape
from typing import Iterable

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from .base import DocumentVisitor
from .elements import CodeBlock, Heading, Image, ListElement, Paragraph, Table

__all__ = [
    "FRAGMENT_SEPARATOR",
    "HtmlExportVisitor",
    "MarkdownExportVisitor",
    "PlainTextVisitor",
]

FRAGMENT_SEPARATOR = "\n\n"


class _BufferedExporter(DocumentVisitor):
    def __init__(self) -> None:
        self._fragments: list[str] = []

    def _emit(self, fragment: str) -> None:
        self._fragments.append(fragment)

    def get_output(self) -> str:
        return FRAGMENT_SEPARATOR.join(self._fragments)

    def clear(self) -> None:
        self._fragments = []


class HtmlExportVisitor(_BufferedExporter):
    """Render elements as HTML fragments.

    Text content and attribute values are escaped. With ``highlight`` enabled
    code blocks go through Pygments (``style`` names the Pygments style) and
    the matching stylesheet is available from :meth:`highlight_css`.
    """

    def __init__(self, *, highlight: bool = False, style: str = "default"):
        super().__init__()
        self.highlight = highlight
        self.style = style

    def visit_paragraph(self, element: Paragraph) -> None:
        style = ""
        if element.alignment != "left":
            style = f' style="text-align: {element.alignment}"'
        self._emit(f"<p{style}>{_text(element.text)}</p>")

    def visit_heading(self, element: Heading) -> None:
        tag = f"h{element.level}"
        self._emit(f"<{tag}>{_text(element.text)}</{tag}>")

    def visit_image(self, element: Image) -> None:
        attrs = f'src="{_attr(element.src)}" alt="{_attr(element.alt)}"'
        if element.width:
            attrs += f' width="{element.width}"'
        if element.height:
            attrs += f' height="{element.height}"'
        html = f"<img {attrs}>"
        if element.caption:
            html = (
                f"<figure>{html}<figcaption>{_text(element.caption)}"
                "</figcaption></figure>"
            )
        self._emit(html)

    def visit_code_block(self, element: CodeBlock) -> None:
        if self.highlight:
            self._emit(self._highlighted(element))
            return
        lines = [_text(line) for line in element.lines]
        if element.show_line_numbers:
            lines = [
                f'<span class="line-num">{number}</span>{line}'
                for number, line in enumerate(lines, start=1)
            ]
        language = _attr(element.language)
        self._emit(
            f'<pre><code class="language-{language}">'
            + "\n".join(lines)
            + "</code></pre>"
        )

    def visit_list(self, element: ListElement) -> None:
        tag = "ol" if element.ordered else "ul"
        items = "\n".join(f"  <li>{_text(item)}</li>" for item in element.items)
        self._emit(f"<{tag}>\n{items}\n</{tag}>")

    def visit_table(self, element: Table) -> None:
        headers = "\n".join(f"    <th>{_text(h)}</th>" for h in element.headers)
        rows = "\n".join(
            "  <tr>\n"
            + "\n".join(f"    <td>{_text(cell)}</td>" for cell in row)
            + "\n  </tr>"
            for row in element.rows
        )
        self._emit(
            "<table>\n  <thead>\n  <tr>\n"
            f"{headers}\n"
            "  </tr>\n  </thead>\n  <tbody>\n"
            f"{rows}\n"
            "  </tbody>\n</table>"
        )

    def highlight_css(self) -> str:
        return HtmlFormatter(style=self.style).get_style_defs(".highlight")

    def _highlighted(self, element: CodeBlock) -> str:
        try:
            lexer = get_lexer_by_name(element.language)
        except ClassNotFound:
            lexer = TextLexer()
        formatter = HtmlFormatter(
            style=self.style,
            linenos="inline" if element.show_line_numbers else False,
        )
        return pygments_highlight(element.code, lexer, formatter).rstrip("\n")


class MarkdownExportVisitor(_BufferedExporter):
    """Render elements as CommonMark, with GFM pipe tables."""

    def visit_paragraph(self, element: Paragraph) -> None:
        self._emit(element.text)

    def visit_heading(self, element: Heading) -> None:
        self._emit(f"{'#' * element.level} {element.text}")

    def visit_image(self, element: Image) -> None:
        markdown = f"![{element.alt}]({element.src})"
        if element.caption:
            markdown += f"\n*{element.caption}*"
        self._emit(markdown)

    def visit_code_block(self, element: CodeBlock) -> None:
        self._emit(f"```{element.language}\n{element.code}\n```")

    def visit_list(self, element: ListElement) -> None:
        lines = []
        for number, item in enumerate(element.items, start=1):
            bullet = f"{number}." if element.ordered else "-"
            lines.append(f"{bullet} {item}")
        self._emit("\n".join(lines))

    def visit_table(self, element: Table) -> None:
        lines = [
            _pipe_row(element.headers),
            _pipe_row("---" for _ in element.headers),
        ]
        lines.extend(_pipe_row(row) for row in element.rows)
        self._emit("\n".join(lines))


class PlainTextVisitor(_BufferedExporter):
    """Render a readable plain-text rendition of a document."""

    def visit_paragraph(self, element: Paragraph) -> None:
        self._emit(element.text)

    def visit_heading(self, element: Heading) -> None:
        self._emit(element.text.upper())

    def visit_image(self, element: Image) -> None:
        self._emit(f"[Image: {element.alt}]")

    def visit_code_block(self, element: CodeBlock) -> None:
        self._emit(f"--- Code ({element.language}) ---\n{element.code}\n---")

    def visit_list(self, element: ListElement) -> None:
        # one fragment per item
        for number, item in enumerate(element.items, start=1):
            bullet = f"{number}." if element.ordered else "*"
            self._emit(f"  {bullet} {item}")

    def visit_table(self, element: Table) -> None:
        self._emit(f"[Table: {', '.join(element.headers)}]")


def _text(value: str) -> str:
    return escape(value, quote=False)


def _attr(value: str) -> str:
    return escape(value, quote=True)


def _pipe_row(cells: Iterable[str]) -> str:
    return "| " + " | ".join(cells) + " |"
