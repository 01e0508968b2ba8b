"""CLI entry point for ``patterns export``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from pattern_catalog.config import (
    CatalogConfig,
    CatalogConfigError,
    ConfigOverrides,
    ExportFormat,
    load_config,
)
from pattern_catalog.core.logging import configure_logger

from .elements import Document
from .exporters import HtmlExportVisitor, MarkdownExportVisitor, PlainTextVisitor
from .loader import DocumentLoadError, load_document, sample_document
from .render import render_standalone
from .statistics import DocumentStatistics, StatisticsVisitor, format_statistics


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="patterns export",
        description=(
            "Walk a document with a visitor and export it as HTML, Markdown, "
            "plain text or statistics."
        ),
        epilog=(
            "Without DOCUMENT the built-in 'Design Patterns Guide' sample is "
            "exported."
        ),
    )
    parser.add_argument(
        "document",
        nargs="?",
        type=Path,
        help="TOML document definition to export.",
    )
    parser.add_argument(
        "--format",
        dest="export_format",
        choices=[member.value for member in ExportFormat],
        help="Output format (defaults to export.format, then html).",
    )
    parser.add_argument(
        "--standalone",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Wrap HTML output in a complete page.",
    )
    parser.add_argument(
        "--highlight",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Highlight HTML code blocks with Pygments.",
    )
    parser.add_argument(
        "--highlight-style",
        help="Pygments style used when highlighting (defaults to 'default').",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help=(
            "Write the export to this file. Relative paths resolve against "
            "the configured output directory."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=(
            "Path to a TOML config file (defaults to the workspace config "
            "directory)."
        ),
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root used for config, logs and exports.",
    )
    parser.add_argument(
        "--log-level",
        help="Set the logging level for the run (defaults to INFO).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror log records to stderr.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    overrides = ConfigOverrides(
        log_level=args.log_level,
        export_format=(
            ExportFormat.from_value(args.export_format)
            if args.export_format
            else None
        ),
        standalone=args.standalone,
        highlight=args.highlight,
        highlight_style=args.highlight_style,
    )
    try:
        load_result = load_config(
            config_path=args.config,
            overrides=overrides,
            workspace_path=args.workspace,
        )
    except CatalogConfigError as exc:
        parser.error(str(exc))

    config = load_result.config
    logger, _ = configure_logger(
        "pattern_catalog",
        log_dir=load_result.layout.path_for("logs"),
        level=config.log_level,
        verbose=args.verbose,
    )

    try:
        document = (
            load_document(args.document)
            if args.document is not None
            else sample_document()
        )
    except DocumentLoadError as exc:
        logger.error("Failed to load document", extra={"error": str(exc)})
        sys.stderr.write(str(exc) + "\n")
        return 1

    logger.info(
        "Exporting document",
        extra={
            "title": document.title,
            "format": config.export_format.value,
            "elements": len(document),
        },
    )

    if config.export_format is ExportFormat.STATS:
        stats = _collect_statistics(document)
        if args.output is None:
            _print_statistics(Console(), document.title, stats)
            return 0
        return _write_output(
            format_statistics(stats), args.output, config, logger
        )

    output = export_document(document, config)
    if args.output is None:
        sys.stdout.write(output + "\n")
        return 0
    return _write_output(output, args.output, config, logger)


def export_document(document: Document, config: CatalogConfig) -> str:
    """Render ``document`` in the configured text format."""

    if config.export_format is ExportFormat.HTML:
        visitor = HtmlExportVisitor(
            highlight=config.highlight, style=config.highlight_style
        )
        document.accept(visitor)
        body = visitor.get_output()
        if not config.standalone:
            return body
        css = visitor.highlight_css() if config.highlight else ""
        return render_standalone(document.title, body, css=css)

    if config.export_format is ExportFormat.MARKDOWN:
        exporter: MarkdownExportVisitor | PlainTextVisitor = (
            MarkdownExportVisitor()
        )
    elif config.export_format is ExportFormat.TEXT:
        exporter = PlainTextVisitor()
    else:
        return format_statistics(_collect_statistics(document))
    document.accept(exporter)
    return exporter.get_output()


def _collect_statistics(document: Document) -> DocumentStatistics:
    visitor = StatisticsVisitor()
    document.accept(visitor)
    return visitor.get_statistics()


def _print_statistics(
    console: Console, title: str, stats: DocumentStatistics
) -> None:
    console.rule(Text(title, style="bold magenta"))
    overview = Table(
        show_header=False,
        box=box.MINIMAL_DOUBLE_HEAD,
        expand=False,
    )
    overview.add_column("Metric", style="bold")
    overview.add_column("Value", justify="right")
    overview.add_row("Words", str(stats.word_count))
    overview.add_row("Characters", str(stats.character_count))
    overview.add_row("Images", str(stats.image_count))
    overview.add_row("Code lines", str(stats.code_line_count))
    console.print(overview)

    if stats.element_counts:
        elements = Table(title="Elements", box=box.SIMPLE, expand=False)
        elements.add_column("Kind")
        elements.add_column("Count", justify="right")
        for kind, count in stats.element_counts.items():
            elements.add_row(kind, str(count))
        console.print(elements)


def _resolve_output(path: Path, output_dir: Path) -> Path:
    candidate = path.expanduser()
    if not candidate.is_absolute():
        candidate = output_dir / candidate
    return candidate


def _write_output(
    text: str,
    path: Path,
    config: CatalogConfig,
    logger: logging.Logger,
) -> int:
    target = _resolve_output(path, config.output_dir)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text + "\n", encoding="utf-8")
    except OSError as exc:
        logger.error(
            "Failed to write export",
            extra={"path": target, "error": str(exc)},
        )
        sys.stderr.write(f"Failed to write {target}: {exc}\n")
        return 1

    logger.info("Wrote export", extra={"path": target})
    sys.stdout.write(f"Wrote {config.export_format.value} export to {target}\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
