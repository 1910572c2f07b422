"""Terminal rendering of appointment lists.

Turns the core layer's :class:`~todayiwill.core.models.DisplayLine`
values into printable objects.  With Rich installed each line becomes a
``rich.text.Text`` (struck-through when already due); without it the
plain text is printed.  Descriptions are never parsed as markup.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from todayiwill.cli.console import console
from todayiwill.core.appointment_list import AppointmentList
from todayiwill.core.models import DisplayLine

STRIKE_STYLE: str = "strike"


def to_renderable(line: DisplayLine) -> Any:
    """Return a Rich ``Text`` for *line*, or its plain text without Rich."""
    try:
        from rich.text import Text
    except ModuleNotFoundError:
        return line.text
    return Text(line.text, style=STRIKE_STYLE if line.struck else "")


def print_lines(lines: Iterable[DisplayLine]) -> None:
    for line in lines:
        console.print(to_renderable(line))


def print_appointments(appointments: AppointmentList) -> None:
    """Print every appointment of *appointments*, one per line."""
    print_lines(appointments.display_lines())
