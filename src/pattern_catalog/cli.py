"""Unified CLI entry point for the pattern catalogue."""

from __future__ import annotations

import inspect
import sys
from dataclasses import dataclass
from importlib import import_module, metadata
from typing import Callable, Mapping, Optional, Sequence


CommandHandler = Callable[[Sequence[str]], int]

DIST_NAME = "pattern-catalog"


@dataclass(frozen=True)
class CommandSpec:
    """Represents a ``patterns`` subcommand."""

    name: str
    summary: str
    module: str
    func: str = "main"

    def run(self, argv: Sequence[str]) -> int:
        return _run_module_command(
            self.module, self.func, f"patterns {self.name}", argv
        )


_COMMAND_SPECS: Sequence[CommandSpec] = (
    CommandSpec(
        name="init",
        summary="Bootstrap the pattern-catalog workspace.",
        module="pattern_catalog.workspace.cli",
    ),
    CommandSpec(
        name="config",
        summary="Write the default patterns.toml configuration.",
        module="pattern_catalog.workspace.cli",
        func="config_main",
    ),
    CommandSpec(
        name="export",
        summary="Export a document as HTML, Markdown, text or statistics (Visitor).",
        module="pattern_catalog.visitor.cli",
    ),
    CommandSpec(
        name="play",
        summary="Play a playlist in a chosen traversal order (Iterator).",
        module="pattern_catalog.iterator.cli",
    ),
)

COMMANDS: Mapping[str, CommandSpec] = {spec.name: spec for spec in _COMMAND_SPECS}


def format_command_table() -> str:
    """Return a formatted command table for help output."""

    width = max((len(spec.name) for spec in _COMMAND_SPECS), default=0)
    lines = ["Available commands:"]
    for spec in _COMMAND_SPECS:
        lines.append(f"  {spec.name.ljust(width)}  {spec.summary}")
    return "\n".join(lines)


def format_usage() -> str:
    """Build the top-level usage banner with command listings."""

    parts = [
        "Usage: patterns <command> [args...]",
        "Run `patterns list` for commands or `patterns help <name>` for details.",
        "",
        format_command_table(),
    ]
    return "\n".join(parts)


def _print(text: str, *, stream: Optional[Callable[[str], None]] = None) -> None:
    target = stream if stream is not None else sys.stdout.write
    if text:
        target(text + "\n")


def _unknown_command(name: str) -> int:
    _print(f"Unknown command '{name}'.", stream=sys.stderr.write)
    _print(format_command_table(), stream=sys.stderr.write)
    return 2


def _handle_version() -> int:
    try:
        version = metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        version = "unknown"
    _print(version)
    return 0


def _handle_help(argv: Sequence[str]) -> int:
    if not argv:
        _print(format_usage())
        return 0

    spec = COMMANDS.get(argv[0])
    if spec is None:
        return _unknown_command(argv[0])

    _print(f"{spec.name}: {spec.summary}")
    _print(f"Run `patterns {spec.name} --help` for command-specific options.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])

    if not args:
        _print(format_usage())
        return 2

    head, *tail = args

    if head in ("-h", "--help"):
        _print(format_usage())
        return 0
    if head in ("-V", "--version", "version"):
        return _handle_version()
    if head == "list":
        _print(format_command_table())
        return 0
    if head == "help":
        return _handle_help(tail)

    spec = COMMANDS.get(head)
    if spec is None:
        return _unknown_command(head)
    return spec.run(tail)


def _run_module_command(
    module_name: str,
    func_name: str,
    prog_name: str,
    argv: Sequence[str],
) -> int:
    module = import_module(module_name)
    target = getattr(module, func_name)
    return _invoke_main(target, prog_name, argv)


def _invoke_main(
    func: Callable[..., object], prog_name: str, argv: Sequence[str]
) -> int:
    args = list(argv)
    old_argv = sys.argv
    sys.argv = [prog_name, *args]
    try:
        result = func(args) if _accepts_argv(func) else func()
    except SystemExit as exc:
        return _normalize_system_exit(exc)
    finally:
        sys.argv = old_argv

    return _normalize_return(result)


def _accepts_argv(func: Callable[..., object]) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    return any(
        param.kind
        in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        )
        for param in signature.parameters.values()
    )


def _normalize_return(result: object) -> int:
    if isinstance(result, bool) or not isinstance(result, int):
        return 0
    return result


def _normalize_system_exit(exc: SystemExit) -> int:
    code = exc.code
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    _print(str(code), stream=sys.stderr.write)
    return 1


if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    raise SystemExit(main())
