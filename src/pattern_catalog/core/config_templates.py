"""The packaged ``patterns.toml`` template written by ``patterns config init``."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

__all__ = [
    "ConfigTemplateError",
    "TEMPLATE_RESOURCE",
    "read_template",
    "write_template",
]

TEMPLATE_PACKAGE = "pattern_catalog"
TEMPLATE_RESOURCE = "template.toml"


class ConfigTemplateError(RuntimeError):
    """Raised when the config template cannot be read or written."""


def read_template() -> str:
    """Return the packaged template as UTF-8 text."""

    resource = resources.files(TEMPLATE_PACKAGE).joinpath(TEMPLATE_RESOURCE)
    try:
        return resource.read_text(encoding="utf-8")
    except FileNotFoundError as exc:  # pragma: no cover - broken install
        raise ConfigTemplateError(
            f"Packaged {TEMPLATE_RESOURCE} is missing."
        ) from exc


def write_template(
    target: Path, *, overwrite: bool = False, mode: int = 0o600
) -> Path:
    """Copy the template to ``target``; existing files need ``overwrite``."""

    if target.exists() and not overwrite:
        raise ConfigTemplateError(
            f"Config already exists: {target} (pass --force to replace it)."
        )
    contents = read_template()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(contents, encoding="utf-8")
    except OSError as exc:
        raise ConfigTemplateError(f"Unable to write {target}: {exc}") from exc
    try:
        target.chmod(mode)
    except PermissionError:  # pragma: no cover - depends on filesystem
        pass
    return target
