"""Tests for the line-oriented file storage (infra/file_storage.py).

All tests work on real files under ``tmp_path``.  Permission failures
are simulated by patching the filesystem call rather than relying on
the OS (tests may run as root).
"""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from todayiwill.core.protocols import AppointmentStorage
from todayiwill.exceptions import PersistError
from todayiwill.infra.file_storage import LineFileStorage


@pytest.mark.parametrize("method", ["read_lines", "write_lines", "remove", "exists", "copy"])
def test_implements_storage_protocol(storage: LineFileStorage, method: str) -> None:
    assert hasattr(AppointmentStorage, method)
    assert callable(getattr(storage, method))


class TestReadLines:
    def test_missing_file(self, storage: LineFileStorage, tmp_path: Path) -> None:
        assert storage.read_lines(tmp_path / "missing.txt") == []

    def test_lines_without_terminators(self, storage: LineFileStorage, tmp_path: Path) -> None:
        path = tmp_path / "day.txt"
        path.write_bytes(b"08:12 Call mom\n14:45 Listen to music\n")
        assert storage.read_lines(path) == ["08:12 Call mom", "14:45 Listen to music"]

    def test_last_line_without_newline(self, storage: LineFileStorage, tmp_path: Path) -> None:
        path = tmp_path / "day.txt"
        path.write_bytes(b"08:12 a\n09:00 b")
        assert storage.read_lines(path) == ["08:12 a", "09:00 b"]

    def test_crlf_terminators_are_stripped(self, storage: LineFileStorage, tmp_path: Path) -> None:
        path = tmp_path / "day.txt"
        path.write_bytes(b"10:00 Meet\r\n11:00 \r\n12:00 Lunch")
        assert storage.read_lines(path) == ["10:00 Meet", "11:00 ", "12:00 Lunch"]

    def test_undecodable_file_is_empty(
        self, storage: LineFileStorage, tmp_path: Path, caplog: pytest.LogCaptureFixture,
    ) -> None:
        path = tmp_path / "day.txt"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with caplog.at_level(logging.WARNING, logger="todayiwill.infra.file_storage"):
            assert storage.read_lines(path) == []
        assert "treating it as empty" in caplog.text

    def test_unreadable_file_is_empty(
        self, storage: LineFileStorage, tmp_path: Path, caplog: pytest.LogCaptureFixture,
    ) -> None:
        path = tmp_path / "day.txt"
        path.write_text("10:00 x\n", encoding="utf-8")
        with patch("builtins.open", side_effect=PermissionError("denied")):
            with caplog.at_level(logging.WARNING, logger="todayiwill.infra.file_storage"):
                assert storage.read_lines(path) == []
        assert "denied" in caplog.text

    def test_directory_is_not_a_file(self, storage: LineFileStorage, tmp_path: Path) -> None:
        assert not storage.exists(tmp_path)
        assert storage.read_lines(tmp_path) == []


class TestWriteLines:
    def test_full_overwrite(self, storage: LineFileStorage, tmp_path: Path) -> None:
        path = tmp_path / "day.txt"
        path.write_text("old content\nmore\n", encoding="utf-8")
        storage.write_lines(path, ["10:00 new"])
        assert path.read_bytes() == b"10:00 new\n"

    def test_empty_list_writes_empty_file(self, storage: LineFileStorage, tmp_path: Path) -> None:
        path = tmp_path / "day.txt"
        storage.write_lines(path, [])
        assert path.exists()
        assert path.read_bytes() == b""

    def test_creates_parent_directories(self, storage: LineFileStorage, tmp_path: Path) -> None:
        path = tmp_path / "x" / "y" / "day.txt"
        storage.write_lines(path, ["10:00 a"])
        assert path.read_text(encoding="utf-8") == "10:00 a\n"

    def test_no_temp_file_left_behind(self, storage: LineFileStorage, tmp_path: Path) -> None:
        path = tmp_path / "day.txt"
        storage.write_lines(path, ["10:00 a"])
        assert [p.name for p in tmp_path.iterdir()] == ["day.txt"]

    def test_utf8_content(self, storage: LineFileStorage, tmp_path: Path) -> None:
        path = tmp_path / "day.txt"
        storage.write_lines(path, ["10:00 café ☕"])
        assert storage.read_lines(path) == ["10:00 café ☕"]

    def test_failure_is_wrapped(self, storage: LineFileStorage, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        with pytest.raises(PersistError, match="Could not save appointments") as exc:
            storage.write_lines(blocker / "day.txt", ["10:00 a"])
        assert isinstance(exc.value.__cause__, OSError)


class TestRemove:
    def test_remove_existing(self, storage: LineFileStorage, tmp_path: Path) -> None:
        path = tmp_path / "day.txt"
        path.write_text("12:54 A random appointment\n", encoding="utf-8")
        storage.remove(path)
        assert not path.exists()

    def test_remove_missing_is_success(self, storage: LineFileStorage, tmp_path: Path) -> None:
        storage.remove(tmp_path / "missing.txt")

    def test_failure_is_wrapped(self, storage: LineFileStorage, tmp_path: Path) -> None:
        with pytest.raises(PersistError, match="Could not clear appointments"):
            storage.remove(tmp_path)


class TestCopy:
    def test_copies_bytes(self, storage: LineFileStorage, tmp_path: Path) -> None:
        source = tmp_path / "source.txt"
        source.write_bytes(b"13:12 copied\r\nweird line\n")
        destination = tmp_path / "nested" / "destination.txt"
        storage.copy(source, destination)
        assert destination.read_bytes() == source.read_bytes()

    def test_missing_source_is_wrapped(self, storage: LineFileStorage, tmp_path: Path) -> None:
        with pytest.raises(PersistError, match="Could not copy appointments"):
            storage.copy(tmp_path / "missing.txt", tmp_path / "destination.txt")
