"""Infrastructure: data-directory resolution and per-day file naming.

The data directory is an explicit value (:class:`DataDirConfig`) built
once by the CLI and handed to whoever needs a path.  There is no
process-wide default captured at import time.

Resolution order for the base directory
---------------------------------------
1. An explicit override (the ``--data-dir`` flag).
2. The ``TODAYIWILL_DATA_DIR`` environment variable.
3. ``$XDG_DATA_HOME/todayiwill``.
4. The platform user-data directory joined with ``todayiwill``.
"""

from __future__ import annotations

import os
import platform
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date
from pathlib import Path

APP_NAME: str = "todayiwill"

DATA_DIR_ENV_VAR: str = "TODAYIWILL_DATA_DIR"
"""Environment variable that overrides the data directory."""

FILE_DATE_FORMAT: str = "%d%m%Y"


@dataclass(frozen=True, slots=True)
class DataDirConfig:
    """Where appointment files live and how they are named."""

    base_dir: Path

    def path_for(self, day: date) -> Path:
        """Return the appointments file for *day*."""
        return self.base_dir / f"appointments_{day.strftime(FILE_DATE_FORMAT)}.txt"

    def path_for_today(self, today: Callable[[], date] = date.today) -> Path:
        return self.path_for(today())


def resolve_data_dir(
    override: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Return the base directory that holds appointment files.

    The directory is not created here; storage creates it on first write.
    """
    env = os.environ if environ is None else environ
    if override:
        return _expand(str(override))
    if env.get(DATA_DIR_ENV_VAR):
        return _expand(env[DATA_DIR_ENV_VAR])
    if env.get("XDG_DATA_HOME"):
        return _expand(env["XDG_DATA_HOME"]) / APP_NAME
    return _platform_data_home(env) / APP_NAME


def load_config(
    override: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> DataDirConfig:
    return DataDirConfig(base_dir=resolve_data_dir(override, environ))


# ---------------------------------------------------------------------------
# Platform defaults
# ---------------------------------------------------------------------------

def _expand(raw: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(raw)))


def _platform_data_home(env: Mapping[str, str]) -> Path:
    """Return the per-user data directory for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        appdata = env.get("APPDATA")
        if appdata:
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"
    if system == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path.home() / ".local" / "share"
