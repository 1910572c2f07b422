"""Shared pytest fixtures and configuration for the todayiwill test suite.

Guidelines
----------
* Tests never touch the user's real data directory.
* Core tests use real files under ``tmp_path`` or an in-memory fake.
* Tests pass a fixed current time instead of reading the clock.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from todayiwill.infra.data_dir import DATA_DIR_ENV_VAR, DataDirConfig
from todayiwill.infra.file_storage import LineFileStorage


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default data directory at a per-test temp folder."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv(DATA_DIR_ENV_VAR, str(data_dir))
    return data_dir


@pytest.fixture
def data_config(_isolated_data_dir: Path) -> DataDirConfig:
    return DataDirConfig(base_dir=_isolated_data_dir)


@pytest.fixture
def storage() -> LineFileStorage:
    return LineFileStorage()


@pytest.fixture(autouse=True)
def _plain_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich from emitting ANSI styles into captured output."""
    for name in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """Undo ``configure_logging`` calls made through ``main``."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
