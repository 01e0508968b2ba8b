from __future__ import annotations

import pytest

from pattern_catalog.visitor import (
    CodeBlock,
    Document,
    Heading,
    Image,
    ListElement,
    Paragraph,
    StatisticsVisitor,
    Table,
    count_words,
    format_statistics,
    sample_document,
)


def _stats(*elements):
    visitor = StatisticsVisitor()
    Document("Doc", list(elements)).accept(visitor)
    return visitor.get_statistics()


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", 0),
        ("   ", 0),
        ("one", 1),
        ("  two   words ", 2),
        ("tabs\tand\nnewlines  too", 4),
    ],
)
def test_count_words(text, expected):
    assert count_words(text) == expected


def test_counts_text_from_every_text_bearing_element():
    stats = _stats(
        Heading("Two words", 2),
        Paragraph("three words here"),
        Image("a.png", "alt is not counted", caption="a caption"),
        CodeBlock("x = 1\ny = 2\nz = 3", "python"),
        ListElement(["one", "two items"], ordered=True),
        Table(["Col A", "B"], [["1", "two cells"]]),
    )

    assert stats.word_count == 2 + 3 + 2 + 3 + 6
    assert stats.character_count == (
        len("Two words")
        + len("three words here")
        + len("a caption")
        + len("one")
        + len("two items")
        + len("Col A")
        + len("B")
        + len("1")
        + len("two cells")
    )
    assert stats.image_count == 1
    assert stats.code_line_count == 3


def test_histogram_keys_in_first_seen_order():
    stats = _stats(
        Paragraph("a"),
        Heading("b", 2),
        CodeBlock("x", "python"),
        ListElement(["c"]),
        ListElement(["d"], ordered=True),
        Heading("e", 2),
        CodeBlock("y", "js"),
        Image("i.png", "i"),
        Table(["h"]),
    )

    assert list(stats.element_counts.items()) == [
        ("paragraph", 1),
        ("heading-h2", 2),
        ("codeBlock", 2),
        ("code-python", 1),
        ("unordered-list", 1),
        ("ordered-list", 1),
        ("code-js", 1),
        ("image", 1),
        ("table", 1),
    ]


def test_word_count_invariant_under_empty_text_elements():
    base = [Heading("Some title"), Paragraph("A short paragraph.")]
    padded = base + [Paragraph(""), Heading(""), ListElement(["", ""])]

    assert _stats(*padded).word_count == _stats(*base).word_count
    assert _stats(*padded).character_count == _stats(*base).character_count


def test_empty_document_has_zero_statistics():
    stats = _stats()

    assert stats.word_count == 0
    assert stats.character_count == 0
    assert stats.element_counts == {}
    assert stats.image_count == 0
    assert stats.code_line_count == 0


def test_statistics_accumulate_until_cleared():
    visitor = StatisticsVisitor()
    document = Document("Doc", [Paragraph("one two")])

    document.accept(visitor)
    snapshot = visitor.get_statistics()
    document.accept(visitor)

    assert snapshot.word_count == 2
    assert visitor.get_statistics().word_count == 4
    visitor.clear()
    assert visitor.get_statistics().word_count == 0


def test_returned_histogram_is_detached():
    visitor = StatisticsVisitor()
    Document("Doc", [Paragraph("x")]).accept(visitor)

    stats = visitor.get_statistics()
    Document("Doc", [Paragraph("y")]).accept(visitor)

    assert stats.element_counts == {"paragraph": 1}


def test_sample_document_statistics():
    visitor = StatisticsVisitor()
    sample_document().accept(visitor)
    stats = visitor.get_statistics()

    assert stats.image_count == 1
    assert stats.code_line_count == 7
    assert stats.element_counts == {
        "heading-h1": 1,
        "paragraph": 3,
        "heading-h2": 3,
        "unordered-list": 1,
        "image": 1,
        "heading-h3": 1,
        "codeBlock": 1,
        "code-python": 1,
        "table": 1,
    }


def test_format_statistics():
    stats = _stats(Heading("Hello world"), CodeBlock("a\nb"))

    assert format_statistics(stats) == (
        "Document Statistics:\n"
        "  Words: 2\n"
        "  Characters: 11\n"
        "  Images: 0\n"
        "  Code lines: 2\n"
        "  Elements by type:\n"
        "    - heading-h1: 1\n"
        "    - codeBlock: 1\n"
        "    - code-text: 1"
    )
