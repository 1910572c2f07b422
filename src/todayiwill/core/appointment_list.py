"""The appointment list engine — one day's appointments bound to one file.

:class:`AppointmentList` owns the in-memory collection for a single
backing path and keeps it consistent with storage:

* Items are sorted ascending by time after every load, add, and filter.
* Every mutating call (:meth:`~AppointmentList.add`,
  :meth:`~AppointmentList.remove`, :meth:`~AppointmentList.copy_from`,
  :meth:`~AppointmentList.clear`) writes through to storage before the
  in-memory state is replaced.  When the write fails the previous items
  are kept and :class:`~todayiwill.exceptions.PersistError` propagates.
* :meth:`~AppointmentList.filter` is in-memory only and never persists.

Storage is injected (:class:`~todayiwill.core.protocols.AppointmentStorage`)
so that this module performs no direct filesystem access.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from todayiwill.core.models import Appointment, AppointmentTime, DisplayLine
from todayiwill.core.protocols import AppointmentStorage
from todayiwill.exceptions import (
    AppointmentAlreadyPastError,
    AppointmentNotFoundError,
    AppointmentTimeError,
    ListNotEmptyError,
    SourceMissingError,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Filter options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ByReferenceTime:
    """Keep only appointments strictly after the reference time."""


@dataclass(frozen=True, slots=True)
class ByReferenceAndExpireWindow:
    """Keep appointments due within *minutes* after the reference time.

    The window is ``(reference, reference + minutes]``; the upper bound
    saturates at ``23:59``.
    """

    minutes: int


FilterOption = Union[ByReferenceTime, ByReferenceAndExpireWindow]


# ---------------------------------------------------------------------------
# Line parsing (pure)
# ---------------------------------------------------------------------------

def parse_lines(lines: Sequence[str], *, source: Path | None = None) -> list[Appointment]:
    """Parse stored lines, dropping the ones that are not appointments.

    Blank lines are skipped quietly.  Any other unparseable line is
    logged at WARNING and dropped; it will not survive the next rewrite
    of the file.
    """
    appointments: list[Appointment] = []
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            appointments.append(Appointment.parse(line))
        except AppointmentTimeError as exc:
            logger.warning(
                "Dropping malformed line %d in %s: %r (%s)",
                number, source or "<memory>", line, exc,
            )
    return sorted(appointments)


# ---------------------------------------------------------------------------
# The list
# ---------------------------------------------------------------------------

class AppointmentList:
    """Sorted appointments for one day, synchronized with one file.

    Constructing a list loads it immediately; a missing file is an
    empty list.

    Parameters
    ----------
    reference_time:
        The "now" used for past/future decisions and filtering.
    path:
        The backing file for this day.
    storage:
        Any object satisfying the :class:`AppointmentStorage` protocol.
    """

    def __init__(
        self,
        reference_time: AppointmentTime,
        path: Path,
        *,
        storage: AppointmentStorage,
    ) -> None:
        self.reference_time: AppointmentTime = reference_time
        self.path: Path = Path(path)
        self._storage: AppointmentStorage = storage
        self._items: list[Appointment] = []
        self.load()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def items(self) -> tuple[Appointment, ...]:
        """Current appointments in ascending time order."""
        return tuple(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Appointment]:
        return iter(tuple(self._items))

    def find(self, time: AppointmentTime) -> Appointment | None:
        """Return the appointment at exactly *time*, if any."""
        return next((item for item in self._items if item.time == time), None)

    # ------------------------------------------------------------------
    # Loading / persisting
    # ------------------------------------------------------------------

    def load(self) -> AppointmentList:
        """Replace the items with whatever is currently stored on disk."""
        lines = self._storage.read_lines(self.path)
        self._items = parse_lines(lines, source=self.path)
        logger.debug("Loaded %d appointment(s) from %s", len(self._items), self.path)
        return self

    def persist(self) -> None:
        """Rewrite the backing file from the current items.

        Raises
        ------
        PersistError
            When the directory or file cannot be written.
        """
        self._write(self._items)

    def _write(self, items: Sequence[Appointment]) -> None:
        self._storage.write_lines(self.path, [item.to_text() for item in items])
        logger.debug("Wrote %d appointment(s) to %s", len(items), self.path)

    # ------------------------------------------------------------------
    # Mutations (persisting)
    # ------------------------------------------------------------------

    def add(self, appointment: Appointment) -> None:
        """Insert *appointment*, replacing any entry at the same time.

        Raises
        ------
        PersistError
            When the updated list cannot be written.
        """
        self.add_all([appointment])

    def add_all(self, appointments: Iterable[Appointment]) -> None:
        """Insert every entry of *appointments* with a single rewrite.

        Later entries win over earlier ones at the same time.  Either the
        whole batch is saved or nothing is.

        Raises
        ------
        PersistError
            When the updated list cannot be written.
        """
        updated = list(self._items)
        for appointment in appointments:
            updated = [item for item in updated if item.time != appointment.time]
            updated.append(appointment)
        updated.sort()
        self._write(updated)
        self._items = updated

    def remove(self, time: AppointmentTime) -> None:
        """Delete the appointment at *time*.

        Raises
        ------
        AppointmentNotFoundError
            When no appointment is scheduled at *time*.
        AppointmentAlreadyPastError
            When that appointment is at or before the reference time.
        PersistError
            When the updated list cannot be written.
        """
        target = self.find(time)
        if target is None:
            raise AppointmentNotFoundError(
                f"There is no appointment at {time}.",
                hint="Run 'todayiwill list --all' to see today's appointments.",
            )
        if target.is_at_or_before(self.reference_time):
            raise AppointmentAlreadyPastError(
                f"The appointment at {time} already passed and cannot be removed.",
            )
        updated = [item for item in self._items if item.time != time]
        self._write(updated)
        self._items = updated

    def copy_from(self, other_path: Path) -> None:
        """Fill this empty list with the content of another day's file.

        Raises
        ------
        ListNotEmptyError
            When this list already holds appointments.
        SourceMissingError
            When *other_path* does not exist.
        PersistError
            When the copy fails.
        """
        if self._items:
            raise ListNotEmptyError(
                "Appointments can only be copied into an empty day.",
                hint="Run 'todayiwill clear' first to start over.",
            )
        source = Path(other_path)
        if not self._storage.exists(source):
            raise SourceMissingError(
                "There are no appointments to copy from the given day.",
            )
        self._storage.copy(source, self.path)
        self.load()

    def clear(self) -> None:
        """Delete the backing file and forget every appointment.

        Raises
        ------
        PersistError
            When the existing file cannot be deleted.
        """
        self._storage.remove(self.path)
        self._items = []

    # ------------------------------------------------------------------
    # Filtering (in-memory only)
    # ------------------------------------------------------------------

    def filter(self, option: FilterOption) -> AppointmentList:
        """Retain the subset selected by *option*.  Nothing is written."""
        reference = self.reference_time
        if isinstance(option, ByReferenceAndExpireWindow):
            limit = reference.add_minutes(option.minutes)
            self._items = [
                item for item in self._items
                if reference < item.time and item.is_at_or_before(limit)
            ]
        elif isinstance(option, ByReferenceTime):
            self._items = [item for item in self._items if reference < item.time]
        else:
            raise TypeError(f"Unsupported filter option: {option!r}")
        self._items.sort()
        return self

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def display_lines(self) -> tuple[DisplayLine, ...]:
        """Rendered lines with their strike-through flag, in order."""
        return tuple(item.to_display_text(self.reference_time) for item in self._items)

    def render(self) -> str:
        """Join the display lines with newlines (no trailing newline)."""
        return "\n".join(line.text for line in self.display_lines())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(reference_time={self.reference_time}, "
            f"path={str(self.path)!r}, items={len(self._items)})"
        )
