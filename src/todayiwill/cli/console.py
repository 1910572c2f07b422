"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) and plain
listings remain functional even when Rich is not installed.

Two proxies are exported: :data:`console` writes command output to
stdout, :data:`err_console` writes errors and hints to stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from todayiwill.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


def escape(text: str) -> str:
	"""Escape Rich markup in user-provided *text* when Rich is available."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return text
	return rich_escape(text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr = stderr

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(*objects, file=sys.stderr if self._stderr else sys.stdout)
			return
		rich_console.print(*objects, highlight=False, soft_wrap=True)


console = _ConsoleProxy(stderr=False)
err_console = _ConsoleProxy(stderr=True)


def configure_logging(*, verbose: bool = False) -> None:
	"""Route log records to stderr, through Rich when it is installed.

	WARNING and above are shown by default; *verbose* enables DEBUG.
	"""
	level = logging.DEBUG if verbose else logging.WARNING
	handler: logging.Handler
	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError:
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
	else:
		handler = RichHandler(
			console=get_rich_console(stderr=True),
			show_time=False,
			show_path=False,
			markup=False,
		)
	logging.basicConfig(level=level, handlers=[handler], force=True)
