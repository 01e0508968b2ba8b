from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from fixtures import WorkspaceBuilder  # noqa: E402

# Ensure src/ is importable when the package is not installed
ROOT = TESTS_DIR.parent
SRC = str(ROOT / "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from pattern_catalog.core.workspace import WORKSPACE_ENV  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Keep PATTERNS_* settings and the workspace inside the test tmp dir."""

    for key in [key for key in os.environ if key.startswith("PATTERNS_")]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv(WORKSPACE_ENV, str(tmp_path / "data-home"))
    yield


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo ``configure_logger`` so records reach caplog in later tests."""

    yield
    logger = logging.getLogger("pattern_catalog")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a helper bound to pytest's per-test tmp directory."""

    return WorkspaceBuilder(tmp_path)
