"""CLI application entry point and command routing for todayiwill.

This module is the **sole error boundary** for the entire application.
It catches :class:`~todayiwill.exceptions.TodayIWillError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — list semantics belong to
  :class:`~todayiwill.core.appointment_list.AppointmentList`.
* Malformed arguments (times, dates, stdin entries) are rejected by
  ``argparse`` with exit code 2; domain failures exit with 1.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path

from todayiwill.cli import exit_codes
from todayiwill.cli.console import configure_logging, console, err_console, escape
from todayiwill.core.appointment_list import (
    AppointmentList,
    ByReferenceAndExpireWindow,
    ByReferenceTime,
)
from todayiwill.core.models import LINE_BREAKS, MAX_TIME, Appointment, AppointmentTime
from todayiwill.exceptions import (
    AppointmentAlreadyPastError,
    AppointmentTimeError,
    TodayIWillError,
)
from todayiwill.infra.data_dir import DataDirConfig, load_config
from todayiwill.infra.file_storage import LineFileStorage
from todayiwill.version import __version__

DATE_FORMAT: str = "%d/%m/%Y"


# ---------------------------------------------------------------------------
# Argument types
# ---------------------------------------------------------------------------

def _time_arg(text: str) -> AppointmentTime:
    """``argparse`` type for ``HH:MM`` values."""
    try:
        return AppointmentTime.parse(text)
    except AppointmentTimeError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _date_arg(text: str) -> date:
    """``argparse`` type for ``DD/MM/YYYY`` values."""
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"invalid date '{text}', expected DD/MM/YYYY",
        ) from exc


def _minutes_arg(text: str) -> int:
    """``argparse`` type for a non-negative number of minutes."""
    try:
        minutes = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number of minutes '{text}'") from exc
    if minutes < 0:
        raise argparse.ArgumentTypeError("minutes must not be negative")
    return minutes


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_current_time(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--current-time",
        type=_time_arg,
        default=None,
        metavar="HH:MM",
        help="Time used as 'now' (defaults to the local clock).",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser and its sub-commands."""
    parser = argparse.ArgumentParser(
        prog="todayiwill",
        description="A CLI for remembering what you need to do today.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging on stderr.",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        metavar="PATH",
        help="Directory holding the appointment files.",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    list_parser = commands.add_parser("list", help="List the appointments to come.")
    _add_current_time(list_parser)
    scope = list_parser.add_mutually_exclusive_group()
    scope.add_argument(
        "--all",
        action="store_true",
        help="Show every appointment of the day, past ones included.",
    )
    scope.add_argument(
        "--expire-in",
        type=_minutes_arg,
        default=None,
        metavar="MINUTES",
        help="Only show appointments due within the next MINUTES.",
    )

    add_parser = commands.add_parser("add", help="Add an appointment for today.")
    add_parser.add_argument("-d", "--description", default=None, help="Appointment description.")
    add_parser.add_argument(
        "-t", "--time", type=_time_arg, default=None, metavar="HH:MM", help="Appointment time.",
    )
    add_parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read 'HH:MM description' entries from standard input, one per line.",
    )
    _add_current_time(add_parser)

    remove_parser = commands.add_parser("remove", help="Remove an upcoming appointment.")
    remove_parser.add_argument(
        "-t", "--time", type=_time_arg, required=True, metavar="HH:MM",
        help="Time of the appointment to remove.",
    )
    _add_current_time(remove_parser)

    copy_parser = commands.add_parser("copy", help="Copy another day's appointments into today.")
    copy_parser.add_argument(
        "--from",
        dest="source_date",
        type=_date_arg,
        required=True,
        metavar="DD/MM/YYYY",
        help="Day to copy the appointments from.",
    )

    commands.add_parser("clear", help="Remove every appointment of today.")

    history_parser = commands.add_parser("history", help="Show the appointments of a past day.")
    history_parser.add_argument(
        "--date", type=_date_arg, required=True, metavar="DD/MM/YYYY", help="Day to show.",
    )

    commands.add_parser("doctor", help="Check the runtime environment.")
    return parser


def _validate_add(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Check ``add`` argument combinations and collect its entries."""
    if args.stdin:
        if args.description is not None or args.time is not None:
            parser.error("--stdin cannot be combined with --description or --time")
        args.entries = _read_entries(parser, sys.stdin)
        return

    missing = [
        flag
        for flag, value in (("--description", args.description), ("--time", args.time))
        if value is None
    ]
    if missing:
        parser.error(f"the following arguments are required: {', '.join(missing)}")
    if any(char in args.description for char in LINE_BREAKS):
        parser.error("argument -d/--description: must be a single line")
    args.entries = [Appointment.create(args.description, args.time)]


def _read_entries(parser: argparse.ArgumentParser, lines: Iterable[str]) -> list[Appointment]:
    entries: list[Appointment] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        try:
            entries.append(Appointment.parse(line))
        except AppointmentTimeError as exc:
            parser.error(f"invalid value '{line}' for '--stdin': {exc}")
    if not entries:
        parser.error("no appointments were read from standard input")
    return entries


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _open_list(path: Path, reference_time: AppointmentTime) -> AppointmentList:
    return AppointmentList(reference_time, path, storage=LineFileStorage())


def _reference_time(args: argparse.Namespace) -> AppointmentTime:
    current: AppointmentTime | None = getattr(args, "current_time", None)
    return current if current is not None else AppointmentTime.now()


def _handle_list(args: argparse.Namespace, config: DataDirConfig) -> int:
    """Print today's appointments, upcoming ones only unless ``--all``."""
    from todayiwill.cli.render import print_appointments

    appointments = _open_list(config.path_for_today(), _reference_time(args))
    if appointments.is_empty():
        console.print("There are no appointments added for today.")
        return exit_codes.SUCCESS

    if args.expire_in is not None:
        appointments.filter(ByReferenceAndExpireWindow(args.expire_in))
    elif not args.all:
        appointments.filter(ByReferenceTime())

    if appointments.is_empty():
        console.print("No appointments found.")
        return exit_codes.SUCCESS

    print_appointments(appointments)
    return exit_codes.SUCCESS


def _handle_add(args: argparse.Namespace, config: DataDirConfig) -> int:
    """Add one or more upcoming appointments to today's list."""
    reference = _reference_time(args)
    entries: list[Appointment] = args.entries
    if any(entry.is_at_or_before(reference) for entry in entries):
        raise AppointmentAlreadyPastError("Given time already passed.")

    appointments = _open_list(config.path_for_today(), reference)
    appointments.add_all(entries)

    if len(entries) == 1:
        console.print("Appointment added successfully.")
    else:
        console.print(f"{len(entries)} appointments added successfully.")
    return exit_codes.SUCCESS


def _handle_remove(args: argparse.Namespace, config: DataDirConfig) -> int:
    appointments = _open_list(config.path_for_today(), _reference_time(args))
    appointments.remove(args.time)
    console.print("Appointment removed successfully.")
    return exit_codes.SUCCESS


def _handle_copy(args: argparse.Namespace, config: DataDirConfig) -> int:
    appointments = _open_list(config.path_for_today(), AppointmentTime.now())
    appointments.copy_from(config.path_for(args.source_date))
    console.print("Appointments copied successfully.")
    return exit_codes.SUCCESS


def _handle_clear(args: argparse.Namespace, config: DataDirConfig) -> int:
    appointments = _open_list(config.path_for_today(), AppointmentTime.now())
    appointments.clear()
    console.print("Appointments cleared successfully.")
    return exit_codes.SUCCESS


def _handle_history(args: argparse.Namespace, config: DataDirConfig) -> int:
    """Print every appointment of a given day; all of them count as past."""
    from todayiwill.cli.render import print_appointments

    appointments = _open_list(config.path_for(args.date), MAX_TIME)
    if appointments.is_empty():
        console.print("There were no appointments added in this day.")
        return exit_codes.SUCCESS
    print_appointments(appointments)
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace, config: DataDirConfig) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from todayiwill.cli.doctor import run_doctor

    return run_doctor(config)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the todayiwill CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "add":
        _validate_add(parser, args)

    configure_logging(verbose=args.verbose)
    config = load_config(args.data_dir)

    handlers = {
        "list": _handle_list,
        "add": _handle_add,
        "remove": _handle_remove,
        "copy": _handle_copy,
        "clear": _handle_clear,
        "history": _handle_history,
        "doctor": _handle_doctor,
    }
    return handlers[args.command](args, config)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except TodayIWillError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            err_console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        err_console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
