"""``todayiwill doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can store and display appointments.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich when available.  No business
logic resides here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import os
import platform
import sys
from importlib.metadata import PackageNotFoundError, version

from todayiwill.cli import exit_codes
from todayiwill.cli.console import console
from todayiwill.core.appointment_list import parse_lines
from todayiwill.infra.data_dir import DataDirConfig
from todayiwill.infra.file_storage import LineFileStorage
from todayiwill.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _todayiwill_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the todayiwill version row."""
    return "todayiwill", __version__, "[green]OK[/green]"


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", platform.python_version(), status


def _rich_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Rich row.

    Rich is optional: without it output is plain, so a missing install
    is only a warning.
    """
    try:
        import rich  # noqa: F401
    except ImportError:
        return "rich", "not installed", "[yellow]WARN[/yellow]"
    try:
        return "rich", version("rich"), "[green]OK[/green]"
    except PackageNotFoundError:
        return "rich", "unknown", "[green]OK[/green]"


def _data_dir_check(config: DataDirConfig) -> tuple[str, str, str]:
    """Return (label, value, status) for the data directory row."""
    base = config.base_dir
    if base.is_dir():
        if os.access(base, os.W_OK):
            return "Data dir", str(base), "[green]OK[/green]"
        return "Data dir", f"{base} (read-only)", "[red]FAIL[/red]"
    if base.exists():
        return "Data dir", f"{base} (not a directory)", "[red]FAIL[/red]"
    return "Data dir", f"{base} (created on first add)", "[green]OK[/green]"


def _today_check(config: DataDirConfig) -> tuple[str, str, str]:
    """Return (label, value, status) for today's appointments file."""
    path = config.path_for_today()
    storage = LineFileStorage()
    if not storage.exists(path):
        return "Today", "no appointments yet", "[green]OK[/green]"
    lines = storage.read_lines(path)
    appointments = parse_lines(lines, source=path)
    dropped = sum(1 for line in lines if line.strip()) - len(appointments)
    value = f"{len(appointments)} appointment(s) in {path.name}"
    if dropped:
        return "Today", f"{value}, {dropped} malformed line(s)", "[yellow]WARN[/yellow]"
    return "Today", value, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\ntodayiwill doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config: DataDirConfig) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _todayiwill_version_check(),
        _python_version_check(),
        _rich_check(),
        _data_dir_check(config),
        _today_check(config),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print(
            "Some checks failed." if has_failure else "All checks passed.",
            file=sys.stderr,
        )
    else:
        table = Table(
            title="todayiwill doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
        if has_failure:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            console.print("[bold green]All checks passed.[/bold green]")

    return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS
