"""Configuration loader for the export and play commands."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, MutableMapping, Optional, Type, TypeVar

from pattern_catalog.core import config as core_config
from pattern_catalog.core import workspace as workspace_mod

CONFIG_FILENAME = "patterns.toml"
CONFIG_ENV = "PATTERNS_CONFIG"
ENV_PREFIX = "PATTERNS_"

_DEFAULT_LOG_LEVEL = "INFO"
_TRUTHY = {"1", "true", "yes", "y", "on"}
_FALSY = {"0", "false", "no", "n", "off"}

logger = logging.getLogger(__name__)


class CatalogConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


_E = TypeVar("_E", bound="_ChoiceEnum")


class _ChoiceEnum(Enum):
    @classmethod
    def from_value(cls: Type[_E], value: str) -> _E:
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        expected = ", ".join(member.value for member in cls)
        raise CatalogConfigError(
            f"Unknown {_SETTING_NAMES[cls]} '{value}'. "
            f"Expected one of: {expected}."
        )


class ExportFormat(_ChoiceEnum):
    """Output produced by ``patterns export``."""

    HTML = "html"
    MARKDOWN = "markdown"
    TEXT = "text"
    STATS = "stats"


class PlayMode(_ChoiceEnum):
    """Iterator used by ``patterns play``."""

    SEQUENTIAL = "sequential"
    REVERSE = "reverse"
    SHUFFLE = "shuffle"
    GENRE = "genre"
    ARTIST = "artist"


_SETTING_NAMES: Mapping[type, str] = {
    ExportFormat: "export.format",
    PlayMode: "player.mode",
}


@dataclass(frozen=True)
class CatalogConfig:
    """Fully resolved configuration for one command run."""

    log_level: str
    export_format: ExportFormat
    standalone: bool
    highlight: bool
    highlight_style: str
    output_dir: Path
    play_mode: PlayMode
    seed: Optional[int]


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced overrides applied on top of file/env options."""

    log_level: Optional[str] = None
    export_format: Optional[ExportFormat] = None
    standalone: Optional[bool] = None
    highlight: Optional[bool] = None
    highlight_style: Optional[str] = None
    output_dir: Optional[Path] = None
    play_mode: Optional[PlayMode] = None
    seed: Optional[int] = None


@dataclass(frozen=True)
class LoadResult:
    """Result of loading configuration, including workspace context."""

    config: CatalogConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Load configuration applying precedence CLI > env > TOML > defaults."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(env=env_map, path=workspace_path)
    except workspace_mod.WorkspaceError as exc:
        raise CatalogConfigError(str(exc)) from exc

    requested_path = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=layout.path_for("config") / CONFIG_FILENAME,
    )

    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested_path.exists():
        loaded_path = requested_path
        try:
            core_config.merge_defaults(
                table, core_config.load_toml(requested_path)
            )
        except core_config.TomlConfigError as exc:
            raise CatalogConfigError(str(exc)) from exc
    elif config_path is not None or _env_string(env_map, CONFIG_ENV):
        raise CatalogConfigError(f"Config file not found: {requested_path}")

    export = table["export"]
    player = table["player"]

    config = CatalogConfig(
        log_level=_resolve_log_level(
            _pick_first(
                overrides.log_level,
                _env_string(env_map, f"{ENV_PREFIX}LOG_LEVEL"),
                table["logging"]["level"],
            )
        ),
        export_format=_resolve_choice(
            ExportFormat,
            overrides.export_format,
            _env_string(env_map, f"{ENV_PREFIX}EXPORT_FORMAT"),
            export["format"],
        ),
        standalone=_resolve_bool(
            "export.standalone",
            overrides.standalone,
            _env_string(env_map, f"{ENV_PREFIX}EXPORT_STANDALONE"),
            export["standalone"],
        ),
        highlight=_resolve_bool(
            "export.highlight",
            overrides.highlight,
            _env_string(env_map, f"{ENV_PREFIX}EXPORT_HIGHLIGHT"),
            export["highlight"],
        ),
        highlight_style=_resolve_string(
            "export.highlight_style",
            _pick_first(
                overrides.highlight_style,
                _env_string(env_map, f"{ENV_PREFIX}HIGHLIGHT_STYLE"),
                export["highlight_style"],
            ),
        ),
        output_dir=_resolve_output_dir(
            candidate=_pick_first(
                overrides.output_dir,
                _env_path(env_map, f"{ENV_PREFIX}OUTPUT_DIR"),
                _coerce_optional_path(export["output_dir"]),
            ),
            layout=layout,
        ),
        play_mode=_resolve_choice(
            PlayMode,
            overrides.play_mode,
            _env_string(env_map, f"{ENV_PREFIX}PLAY_MODE"),
            player["mode"],
        ),
        seed=_resolve_seed(
            _pick_first(
                overrides.seed,
                _env_string(env_map, f"{ENV_PREFIX}SEED"),
                player["seed"],
            )
        ),
    )
    logger.debug(
        "Resolved configuration",
        extra={"config_path": loaded_path, "workspace": layout.home},
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def _default_table() -> MutableMapping[str, MutableMapping[str, object]]:
    return {
        "logging": {"level": _DEFAULT_LOG_LEVEL},
        "export": {
            "format": ExportFormat.HTML.value,
            "standalone": False,
            "highlight": False,
            "highlight_style": "default",
            "output_dir": None,
        },
        "player": {
            "mode": PlayMode.SEQUENTIAL.value,
            "seed": None,
        },
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = _env_string(env_map, CONFIG_ENV)
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _coerce_optional_path(value: object) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, Path):
        return value
    if isinstance(value, str):
        raw = value.strip()
        return Path(raw) if raw else None
    raise CatalogConfigError("export.output_dir must be a string when provided.")


def _resolve_output_dir(
    *, candidate: Optional[Path], layout: workspace_mod.WorkspaceLayout
) -> Path:
    if candidate is None:
        return layout.path_for("exports")
    candidate = candidate.expanduser()
    if not candidate.is_absolute():
        return (layout.home / candidate).resolve()
    return candidate.resolve()


def _resolve_choice(
    enum_cls: Type[_E],
    override: Optional[_E],
    env_value: Optional[str],
    file_value: object,
) -> _E:
    if override is not None:
        return override
    if env_value is not None:
        return enum_cls.from_value(env_value)
    if isinstance(file_value, str):
        return enum_cls.from_value(file_value)
    raise CatalogConfigError(f"{_SETTING_NAMES[enum_cls]} must be a string.")


def _resolve_bool(
    key: str,
    override: Optional[bool],
    env_value: Optional[str],
    file_value: object,
) -> bool:
    if override is not None:
        return override
    if env_value is not None:
        lowered = env_value.lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
        raise CatalogConfigError(f"{key} must be a boolean; got '{env_value}'.")
    if isinstance(file_value, bool):
        return file_value
    raise CatalogConfigError(f"{key} must be a boolean.")


def _resolve_string(key: str, candidate: object) -> str:
    if not isinstance(candidate, str) or not candidate.strip():
        raise CatalogConfigError(f"{key} must be a non-empty string.")
    return candidate.strip()


def _resolve_log_level(candidate: object) -> str:
    return _resolve_string("logging.level", candidate).upper()


def _resolve_seed(candidate: object) -> Optional[int]:
    if candidate is None:
        return None
    if isinstance(candidate, bool):
        raise CatalogConfigError("player.seed must be an integer.")
    if isinstance(candidate, int):
        return candidate
    if isinstance(candidate, str):
        try:
            return int(candidate.strip())
        except ValueError as exc:
            raise CatalogConfigError(
                f"player.seed must be an integer; got '{candidate}'."
            ) from exc
    raise CatalogConfigError("player.seed must be an integer.")


def _env_path(env_map: Mapping[str, str], key: str) -> Optional[Path]:
    raw = _env_string(env_map, key)
    return Path(raw).expanduser() if raw is not None else None


def _env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(key)
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
