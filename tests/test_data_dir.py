"""Tests for data-directory resolution (infra/data_dir.py)."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest

from todayiwill.infra.data_dir import (
    APP_NAME,
    DATA_DIR_ENV_VAR,
    DataDirConfig,
    load_config,
    resolve_data_dir,
)


class TestDataDirConfig:
    def test_path_for_uses_day_month_year(self) -> None:
        config = DataDirConfig(base_dir=Path("/data"))
        assert config.path_for(date(2024, 1, 1)) == Path("/data/appointments_01012024.txt")
        assert config.path_for(date(2026, 10, 16)) == Path("/data/appointments_16102026.txt")

    def test_path_for_today(self) -> None:
        config = DataDirConfig(base_dir=Path("/data"))
        path = config.path_for_today(today=lambda: date(2024, 2, 29))
        assert path.name == "appointments_29022024.txt"

    def test_frozen(self) -> None:
        config = DataDirConfig(base_dir=Path("/data"))
        with pytest.raises(AttributeError):
            config.base_dir = Path("/other")  # type: ignore[misc]


class TestResolveDataDir:
    def test_override_wins(self) -> None:
        env = {DATA_DIR_ENV_VAR: "/from-env", "XDG_DATA_HOME": "/xdg"}
        assert resolve_data_dir("/explicit", env) == Path("/explicit")

    def test_env_var(self) -> None:
        env = {DATA_DIR_ENV_VAR: "/from-env", "XDG_DATA_HOME": "/xdg"}
        assert resolve_data_dir(None, env) == Path("/from-env")

    def test_xdg_data_home(self) -> None:
        assert resolve_data_dir(None, {"XDG_DATA_HOME": "/xdg"}) == Path("/xdg") / APP_NAME

    def test_user_is_expanded(self) -> None:
        resolved = resolve_data_dir("~/appointments", {})
        assert resolved == Path.home() / "appointments"

    @patch("todayiwill.infra.data_dir.platform.system", return_value="Linux")
    def test_linux_default(self, _mock_system: object) -> None:
        assert resolve_data_dir(None, {}) == Path.home() / ".local" / "share" / APP_NAME

    @patch("todayiwill.infra.data_dir.platform.system", return_value="Darwin")
    def test_macos_default(self, _mock_system: object) -> None:
        expected = Path.home() / "Library" / "Application Support" / APP_NAME
        assert resolve_data_dir(None, {}) == expected

    @patch("todayiwill.infra.data_dir.platform.system", return_value="Windows")
    def test_windows_default(self, _mock_system: object) -> None:
        assert resolve_data_dir(None, {"APPDATA": "/appdata"}) == Path("/appdata") / APP_NAME

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(DATA_DIR_ENV_VAR, "/from-process-env")
        assert load_config().base_dir == Path("/from-process-env")
