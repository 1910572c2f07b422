"""Line-oriented file storage for appointment lists.

Concrete :class:`~todayiwill.core.protocols.AppointmentStorage` backed by
plain UTF-8 text files, one appointment per line.

Rules
-----
* Every ``OSError`` on write, copy, or delete is re-raised as
  :class:`~todayiwill.exceptions.PersistError`.
* Reads are best-effort: a missing file is empty, and an existing file
  that cannot be read or decoded is logged and also treated as empty.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from todayiwill.exceptions import PersistError

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


class LineFileStorage:
    """Read and rewrite whole appointment files.

    This class satisfies the
    :class:`~todayiwill.core.protocols.AppointmentStorage` protocol
    structurally — no explicit inheritance required.
    """

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read_lines(self, path: Path) -> list[str]:
        try:
            with open(path, encoding=ENCODING) as handle:
                content = handle.read()
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s, treating it as empty: %s", path, exc)
            return []
        lines = content.split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def write_lines(self, path: Path, lines: Iterable[str]) -> None:
        """Rewrite *path* via a sibling temp file and an atomic rename."""
        target = Path(path)
        temporary = target.with_name(f".{target.name}.tmp")
        content = "".join(f"{line}\n" for line in lines)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            temporary.write_text(content, encoding=ENCODING, newline="")
            os.replace(temporary, target)
        except OSError as exc:
            self._discard(temporary)
            raise PersistError(
                f"Could not save appointments to {target}: {exc}",
            ) from exc

    def remove(self, path: Path) -> None:
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as exc:
            raise PersistError(
                f"Could not clear appointments at {path}: {exc}",
            ) from exc

    def copy(self, source: Path, destination: Path) -> None:
        target = Path(destination)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as exc:
            raise PersistError(
                f"Could not copy appointments from {source}: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _discard(path: Path) -> None:
        """Best-effort cleanup of a leftover temp file."""
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.debug("Could not remove temporary file %s: %s", path, exc)
