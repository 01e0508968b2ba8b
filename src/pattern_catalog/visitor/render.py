"""Wrap exported HTML fragments into a standalone page."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, Template
from markupsafe import Markup

__all__ = ["BASE_CSS", "default_page_template", "render_standalone"]

BASE_CSS = "\n".join(
    [
        (
            "body { font-family: 'DejaVu Sans', 'Liberation Sans', "
            "sans-serif; color: #111; line-height: 1.5; margin: 2em; }"
        ),
        "figure { margin: 1em 0; } figcaption { color: #555; font-size: 0.9em; }",
        "pre { background: #f7f7f7; padding: 0.6em; overflow-x: auto; }",
        ".line-num { color: #999; display: inline-block; width: 2.5em; }",
        "table { border-collapse: collapse; }",
        "th, td { border: 1px solid #ddd; padding: 0.3em 0.6em; }",
    ]
)


def default_page_template() -> Template:
    tpl = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{{ title }}</title>
  <style>
{{ css }}
  </style>
</head>
<body>
{{ body }}
</body>
</html>
"""
    env = Environment(autoescape=True)
    return env.from_string(tpl)


def render_standalone(
    title: str,
    body: str,
    *,
    css: str = "",
    template_path: Optional[Path] = None,
) -> str:
    """Render ``body`` (already-escaped HTML) inside a full HTML page.

    ``title`` is escaped by the template; ``body`` and ``css`` are trusted.
    """

    if template_path:
        env = Environment(
            loader=FileSystemLoader(str(template_path.parent)), autoescape=True
        )
        tpl = env.get_template(template_path.name)
    else:
        tpl = default_page_template()
    styles = BASE_CSS if not css else f"{BASE_CSS}\n{css}"
    return tpl.render(title=title, body=Markup(body), css=Markup(styles))
