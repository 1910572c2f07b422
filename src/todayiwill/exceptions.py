"""Custom exception hierarchy for todayiwill.

All exceptions that cross layer boundaries must inherit from
:class:`TodayIWillError`.  Raw ``OSError`` instances must NEVER propagate
beyond the infrastructure layer — they are caught there and re-raised as
:class:`PersistError`.

Hierarchy
---------
TodayIWillError
├── AppointmentTimeError
│   ├── TimeOutOfRangeError
│   └── MalformedInputError
├── AppointmentNotFoundError
├── AppointmentAlreadyPastError
├── ListNotEmptyError
├── SourceMissingError
├── PersistError
└── EnvironmentError
"""

from __future__ import annotations

from typing import Literal


class TodayIWillError(Exception):
    """Base exception for all todayiwill errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Time values -----------------------------------------------------------

class AppointmentTimeError(TodayIWillError):
    """Raised when a time value cannot be built from the given input."""


class TimeOutOfRangeError(AppointmentTimeError):
    """Raised when an hour or minute falls outside its valid range."""

    def __init__(
        self,
        message: str,
        *,
        field: Literal["hour", "minute"],
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.field: Literal["hour", "minute"] = field
        """Which component failed validation."""


class MalformedInputError(AppointmentTimeError):
    """Raised when text does not follow the ``HH:MM`` / line structure."""


# --- List operations -------------------------------------------------------

class AppointmentNotFoundError(TodayIWillError):
    """Raised when no appointment exists at the requested time."""


class AppointmentAlreadyPastError(TodayIWillError):
    """Raised when an operation targets a time that has already passed."""


class ListNotEmptyError(TodayIWillError):
    """Raised when copying into a list that already holds appointments."""


class SourceMissingError(TodayIWillError):
    """Raised when the file to copy appointments from does not exist."""


# --- Storage ---------------------------------------------------------------

class PersistError(TodayIWillError):
    """Raised when appointments cannot be written, copied, or removed."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(TodayIWillError):
    """Raised when an optional runtime dependency is not available."""
