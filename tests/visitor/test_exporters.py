from __future__ import annotations

from markdown_it import MarkdownIt

from pattern_catalog.visitor import (
    CodeBlock,
    Document,
    Heading,
    HtmlExportVisitor,
    Image,
    ListElement,
    MarkdownExportVisitor,
    Paragraph,
    PlainTextVisitor,
    Table,
    sample_document,
)


def _export(visitor, *elements):
    Document("Doc", list(elements)).accept(visitor)
    return visitor.get_output()


def test_html_paragraph_and_alignment():
    assert _export(HtmlExportVisitor(), Paragraph("Hello")) == "<p>Hello</p>"
    assert (
        _export(HtmlExportVisitor(), Paragraph("Hi", "center"))
        == '<p style="text-align: center">Hi</p>'
    )


def test_html_heading_levels():
    assert _export(HtmlExportVisitor(), Heading("Title", 3)) == "<h3>Title</h3>"


def test_html_image_with_and_without_caption():
    assert (
        _export(HtmlExportVisitor(), Image("a.png", "Alt"))
        == '<img src="a.png" alt="Alt">'
    )
    assert _export(
        HtmlExportVisitor(),
        Image("a.png", "Alt", caption="Cap", width=600, height=400),
    ) == (
        '<figure><img src="a.png" alt="Alt" width="600" height="400">'
        "<figcaption>Cap</figcaption></figure>"
    )


def test_html_code_block_line_numbers():
    code = CodeBlock("x = 1\ny = 2", "python")
    assert _export(HtmlExportVisitor(), code) == (
        '<pre><code class="language-python">'
        '<span class="line-num">1</span>x = 1\n'
        '<span class="line-num">2</span>y = 2'
        "</code></pre>"
    )

    plain = CodeBlock("x = 1\ny = 2", "python", show_line_numbers=False)
    assert _export(HtmlExportVisitor(), plain) == (
        '<pre><code class="language-python">x = 1\ny = 2</code></pre>'
    )


def test_html_lists():
    assert _export(HtmlExportVisitor(), ListElement(["a", "b"])) == (
        "<ul>\n  <li>a</li>\n  <li>b</li>\n</ul>"
    )
    assert _export(HtmlExportVisitor(), ListElement(["a"], ordered=True)) == (
        "<ol>\n  <li>a</li>\n</ol>"
    )


def test_html_table():
    table = Table(["A", "B"], [["1", "2"]])
    assert _export(HtmlExportVisitor(), table) == (
        "<table>\n"
        "  <thead>\n"
        "  <tr>\n"
        "    <th>A</th>\n"
        "    <th>B</th>\n"
        "  </tr>\n"
        "  </thead>\n"
        "  <tbody>\n"
        "  <tr>\n"
        "    <td>1</td>\n"
        "    <td>2</td>\n"
        "  </tr>\n"
        "  </tbody>\n"
        "</table>"
    )


def test_html_escapes_text_and_attributes():
    output = _export(
        HtmlExportVisitor(),
        Paragraph("a < b & c"),
        Image('x.png" onerror="boom', '"quoted"'),
        CodeBlock("if a < b:", show_line_numbers=False),
    )

    assert "<p>a &lt; b &amp; c</p>" in output
    assert 'src="x.png&quot; onerror=&quot;boom"' in output
    assert 'alt="&quot;quoted&quot;"' in output
    assert "if a &lt; b:" in output


def test_fragments_are_joined_with_blank_lines():
    output = _export(HtmlExportVisitor(), Heading("T"), Paragraph("P"))

    assert output == "<h1>T</h1>\n\n<p>P</p>"


def test_empty_document_output_matches_initial_output():
    for visitor in (
        HtmlExportVisitor(),
        MarkdownExportVisitor(),
        PlainTextVisitor(),
    ):
        initial = visitor.get_output()
        Document("Empty").accept(visitor)
        assert visitor.get_output() == initial == ""


def test_clear_resets_buffer_and_get_output_is_a_pure_read():
    visitor = HtmlExportVisitor()
    Document("Doc", [Paragraph("one")]).accept(visitor)

    assert visitor.get_output() == visitor.get_output() == "<p>one</p>"
    visitor.clear()
    assert visitor.get_output() == ""


def test_html_highlight_uses_pygments():
    visitor = HtmlExportVisitor(highlight=True, style="monokai")
    output = _export(visitor, CodeBlock("def f():\n    return 1", "python"))

    assert '<div class="highlight">' in output
    assert "linenos" in output
    assert "language-python" not in output
    assert ".highlight" in visitor.highlight_css()


def test_html_highlight_falls_back_for_unknown_language():
    visitor = HtmlExportVisitor(highlight=True)
    output = _export(
        visitor,
        CodeBlock("plain <text>", "no-such-language", show_line_numbers=False),
    )

    assert '<div class="highlight">' in output
    assert "&lt;text&gt;" in output
    assert "linenos" not in output


def test_markdown_elements():
    visitor = MarkdownExportVisitor()
    output = _export(
        visitor,
        Heading("Title", 2),
        Paragraph("Body"),
        Image("a.png", "Alt", caption="Cap"),
        CodeBlock("x = 1", "python"),
        ListElement(["a", "b"]),
        ListElement(["c", "d"], ordered=True),
        Table(["A", "B"], [["1", "2"]]),
    )

    assert output.split("\n\n") == [
        "## Title",
        "Body",
        "![Alt](a.png)\n*Cap*",
        "```python\nx = 1\n```",
        "- a\n- b",
        "1. c\n2. d",
        "| A | B |\n| --- | --- |\n| 1 | 2 |",
    ]


def test_markdown_output_parses_as_commonmark_with_tables():
    visitor = MarkdownExportVisitor()
    sample_document().accept(visitor)

    md = MarkdownIt("commonmark").enable("table")
    tokens = md.parse(visitor.get_output())
    types = [token.type for token in tokens]

    assert types.count("heading_open") == 5
    assert types.count("bullet_list_open") == 1
    assert types.count("table_open") == 1
    assert types.count("th_open") == 3
    fences = [token for token in tokens if token.type == "fence"]
    assert [fence.info for fence in fences] == ["python"]
    inline_children = [
        child.type
        for token in tokens
        if token.type == "inline"
        for child in token.children or []
    ]
    assert "image" in inline_children


def test_plain_text_elements():
    output = _export(
        PlainTextVisitor(),
        Heading("Title"),
        Paragraph("Body"),
        Image("a.png", "Alt"),
        CodeBlock("x = 1", "python"),
        ListElement(["a", "b"]),
        ListElement(["c"], ordered=True),
        Table(["A", "B"], [["1", "2"]]),
    )

    assert output.split("\n\n") == [
        "TITLE",
        "Body",
        "[Image: Alt]",
        "--- Code (python) ---\nx = 1\n---",
        "  * a",
        "  * b",
        "  1. c",
        "[Table: A, B]",
    ]


def test_sample_document_html_export():
    visitor = HtmlExportVisitor()
    sample_document().accept(visitor)
    output = visitor.get_output()

    assert output.startswith("<h1>Introduction to Design Patterns</h1>")
    assert output.endswith(
        '<p style="text-align: center">Each pattern serves a specific '
        "purpose and should be chosen based on the problem at hand.</p>"
    )
    assert output.count("<h2>") == 3
    assert '<figure><img src="visitor-pattern.png"' in output
