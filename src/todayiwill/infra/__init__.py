"""Infrastructure layer — filesystem and operating-system integration.

Every raw ``OSError`` must be caught here and re-raised as a
:class:`~todayiwill.exceptions.TodayIWillError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from todayiwill.infra.data_dir import DataDirConfig, load_config, resolve_data_dir
from todayiwill.infra.file_storage import LineFileStorage

__all__: list[str] = [
    "DataDirConfig",
    "LineFileStorage",
    "load_config",
    "resolve_data_dir",
]
