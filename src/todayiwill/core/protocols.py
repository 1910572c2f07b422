"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol


class AppointmentStorage(Protocol):
    """Contract for the line-oriented backing store of one day's list.

    Any object implementing these methods satisfies this protocol
    structurally (no explicit inheritance required).  Implementations
    must map every OS-level failure to
    :class:`~todayiwill.exceptions.PersistError`.
    """

    def read_lines(self, path: Path) -> list[str]:
        """Return the lines stored at *path*, without line terminators.

        A missing file yields an empty list, never an error.
        """
        ...  # pragma: no cover

    def write_lines(self, path: Path, lines: Iterable[str]) -> None:
        """Replace the whole content of *path* with *lines*.

        Each line is newline-terminated.  Parent directories are created
        when missing.

        Raises
        ------
        PersistError
            When the directory or the file cannot be written.
        """
        ...  # pragma: no cover

    def remove(self, path: Path) -> None:
        """Delete *path*.  A file that does not exist counts as removed.

        Raises
        ------
        PersistError
            When the file exists but cannot be deleted.
        """
        ...  # pragma: no cover

    def exists(self, path: Path) -> bool:
        """Return whether *path* currently exists."""
        ...  # pragma: no cover

    def copy(self, source: Path, destination: Path) -> None:
        """Copy the raw bytes of *source* over *destination*.

        Raises
        ------
        PersistError
            When the copy fails for any reason.
        """
        ...  # pragma: no cover
