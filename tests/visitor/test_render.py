from __future__ import annotations

from pattern_catalog.visitor import render


def test_render_standalone_wraps_body_and_escapes_title():
    page = render.render_standalone("Q&A <draft>", "<p>Body &amp; more</p>")

    assert page.startswith("<!DOCTYPE html>")
    assert "<title>Q&amp;A &lt;draft&gt;</title>" in page
    assert "<p>Body &amp; more</p>" in page
    assert render.BASE_CSS in page
    assert page.rstrip().endswith("</html>")


def test_render_standalone_appends_extra_css():
    page = render.render_standalone("T", "<p/>", css=".highlight { color: red; }")

    assert ".highlight { color: red; }" in page
    assert page.index(render.BASE_CSS) < page.index(".highlight")


def test_render_standalone_with_custom_template(tmp_path):
    template = tmp_path / "page.html"
    template.write_text(
        "<main data-title='{{ title }}'>{{ body }}</main>", encoding="utf-8"
    )

    page = render.render_standalone(
        "Guide", "<h1>Hi</h1>", template_path=template
    )

    assert page == "<main data-title='Guide'><h1>Hi</h1></main>"
