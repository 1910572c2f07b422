"""Core layer — domain models and the appointment list engine.

Rules
-----
* No ``print()`` calls.
* No direct filesystem access; storage is injected through
  :class:`~todayiwill.core.protocols.AppointmentStorage`.
* No imports from ``cli`` or ``infra``.
"""

from todayiwill.core.appointment_list import (
    AppointmentList,
    ByReferenceAndExpireWindow,
    ByReferenceTime,
    FilterOption,
)
from todayiwill.core.models import MAX_TIME, MIN_TIME, Appointment, AppointmentTime, DisplayLine
from todayiwill.core.protocols import AppointmentStorage

__all__: list[str] = [
    "MAX_TIME",
    "MIN_TIME",
    "Appointment",
    "AppointmentList",
    "AppointmentStorage",
    "AppointmentTime",
    "ByReferenceAndExpireWindow",
    "ByReferenceTime",
    "DisplayLine",
    "FilterOption",
]
