"""Core shared helpers for pattern_catalog subcommands."""

from __future__ import annotations

from .config import TomlConfigError, load_toml, merge_defaults
from .config_templates import ConfigTemplateError, read_template, write_template
from .logging import JsonLogFormatter, configure_logger
from .workspace import (
    WORKSPACE_ENV,
    WorkspaceError,
    WorkspaceLayout,
    ensure_workspace,
)

__all__ = [
    "TomlConfigError",
    "load_toml",
    "merge_defaults",
    "ConfigTemplateError",
    "read_template",
    "write_template",
    "configure_logger",
    "JsonLogFormatter",
    "ensure_workspace",
    "WorkspaceLayout",
    "WorkspaceError",
    "WORKSPACE_ENV",
]
