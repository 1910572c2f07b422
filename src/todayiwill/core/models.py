"""Domain models for todayiwill.

All models are **frozen** dataclasses — immutable value objects.  Every
operation that "changes" a time returns a new instance.  They carry zero
I/O and no dependencies on external packages.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from todayiwill.exceptions import MalformedInputError, TimeOutOfRangeError

_TIME_PATTERN = re.compile(r"([+-]?[0-9]+):([+-]?[0-9]+)")

_MINUTES_PER_HOUR = 60
_LAST_MINUTE_OF_DAY = 23 * _MINUTES_PER_HOUR + 59

SEPARATOR = " "
"""Separator between the time field and the description in a stored line."""

LINE_BREAKS = ("\n", "\r")
"""Characters a description may not hold, since each appointment is one line."""


# ---------------------------------------------------------------------------
# Time of day
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True, order=True)
class AppointmentTime:
    """A validated wall-clock time of day, ordered by ``(hour, minute)``.

    Construction is the only validation gate: an instance always holds an
    hour in ``[0, 23]`` and a minute in ``[0, 59]``.
    """

    hour: int
    minute: int

    def __post_init__(self) -> None:
        for name in ("hour", "minute"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an int, not {type(value).__name__}")
        if not 0 <= self.hour <= 23:
            raise TimeOutOfRangeError(
                "Hour should be between 0 and 23", field="hour",
            )
        if not 0 <= self.minute <= 59:
            raise TimeOutOfRangeError(
                "Minutes should be between 0 and 59", field="minute",
            )

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, hour: int, minute: int) -> AppointmentTime:
        """Build a time, raising :class:`TimeOutOfRangeError` when invalid.

        The hour is checked before the minute, so ``create(26, 60)``
        reports the hour.
        """
        return cls(hour, minute)

    @classmethod
    def now(cls, clock: Callable[[], datetime] = datetime.now) -> AppointmentTime:
        """Read hour and minute from *clock* (the local wall clock by default)."""
        current = clock()
        return cls(current.hour, current.minute)

    @classmethod
    def parse(cls, text: str) -> AppointmentTime:
        """Parse ``HH:MM`` text.

        Raises
        ------
        MalformedInputError
            If *text* is not two colon-separated integers.
        TimeOutOfRangeError
            If the integers parse but fall outside the valid range.
        """
        match = _TIME_PATTERN.fullmatch(text)
        if match is None:
            raise MalformedInputError("Invalid string for appointment time")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def from_total_minutes(cls, total: int) -> AppointmentTime:
        """Build a time from minutes since midnight, clamped to the day."""
        clamped = min(max(total, 0), _LAST_MINUTE_OF_DAY)
        hour, minute = divmod(clamped, _MINUTES_PER_HOUR)
        return cls(hour, minute)

    @classmethod
    def max_value(cls) -> AppointmentTime:
        return MAX_TIME

    @classmethod
    def min_value(cls) -> AppointmentTime:
        return MIN_TIME

    # ------------------------------------------------------------------
    # Arithmetic (saturating)
    # ------------------------------------------------------------------

    @property
    def total_minutes(self) -> int:
        """Minutes elapsed since ``00:00``."""
        return self.hour * _MINUTES_PER_HOUR + self.minute

    def add_minutes(self, minutes: int) -> AppointmentTime:
        """Shift forward by *minutes*, saturating at ``23:59``."""
        return self.from_total_minutes(self.total_minutes + minutes)

    def subtract_minutes(self, minutes: int) -> AppointmentTime:
        """Shift backward by *minutes*, saturating at ``00:00``."""
        return self.from_total_minutes(self.total_minutes - minutes)

    def __add__(self, minutes: int) -> AppointmentTime:
        if not isinstance(minutes, int):
            return NotImplemented
        return self.add_minutes(minutes)

    def __sub__(self, minutes: int) -> AppointmentTime:
        if not isinstance(minutes, int):
            return NotImplemented
        return self.subtract_minutes(minutes)

    # ------------------------------------------------------------------
    # Comparison / text
    # ------------------------------------------------------------------

    def is_at_or_before(self, other: AppointmentTime) -> bool:
        """Return ``True`` when this time is not later than *other*."""
        return self <= other

    def to_text(self) -> str:
        """Render as zero-padded ``HH:MM``."""
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.to_text()


MAX_TIME: AppointmentTime = AppointmentTime(23, 59)
"""Latest representable time of day."""

MIN_TIME: AppointmentTime = AppointmentTime(0, 0)
"""Earliest representable time of day."""


# ---------------------------------------------------------------------------
# Presentation annotation
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DisplayLine:
    """One rendered appointment plus its styling flag.

    ``struck`` is a presentation attribute only; the terminal layer decides
    how to draw it.  It is never persisted.
    """

    text: str
    struck: bool = False

    def __str__(self) -> str:
        return self.text


# ---------------------------------------------------------------------------
# Appointment
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Appointment:
    """A described reminder at a given time of day.

    Ordering comparisons look at :attr:`time` only; the description is not
    a tiebreaker.  Equality still compares both fields.  The description
    never holds a line break.
    """

    time: AppointmentTime
    description: str

    def __post_init__(self) -> None:
        if any(char in self.description for char in LINE_BREAKS):
            raise MalformedInputError("Description cannot contain line breaks")

    @classmethod
    def create(cls, description: str, time: AppointmentTime) -> Appointment:
        return cls(time=time, description=description)

    @classmethod
    def parse(cls, line: str) -> Appointment:
        """Parse a stored line of the form ``HH:MM description``.

        The first five characters are the time, the sixth must be a single
        space, and everything after it is the description (possibly empty).

        Raises
        ------
        MalformedInputError
            If the line is too short or the separator is missing.
        AppointmentTimeError
            Whatever :meth:`AppointmentTime.parse` raises for the time field.
        """
        if len(line) < 6:
            raise MalformedInputError("Invalid string for appointment time")
        time = AppointmentTime.parse(line[:5])
        if line[5] != SEPARATOR:
            raise MalformedInputError("Invalid string for appointment time")
        return cls(time=time, description=line[6:])

    def is_at_or_before(self, reference: AppointmentTime) -> bool:
        return self.time.is_at_or_before(reference)

    def to_text(self) -> str:
        """Serialize to the exact line format accepted by :meth:`parse`."""
        return f"{self.time.to_text()}{SEPARATOR}{self.description}"

    def to_display_text(self, reference: AppointmentTime) -> DisplayLine:
        """Render as ``[HH:MM] description``, struck when already due."""
        return DisplayLine(
            text=f"[{self.time.to_text()}] {self.description}",
            struck=self.is_at_or_before(reference),
        )

    def __str__(self) -> str:
        return self.to_text()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Appointment):
            return NotImplemented
        return self.time < other.time

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Appointment):
            return NotImplemented
        return self.time <= other.time

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Appointment):
            return NotImplemented
        return self.time > other.time

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Appointment):
            return NotImplemented
        return self.time >= other.time
