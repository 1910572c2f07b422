"""todayiwill — a CLI for remembering what you need to do today.

Appointments are kept as one plain-text file per calendar day and managed
through a small layered architecture (core / infra / cli).
"""

from todayiwill.version import __version__

__all__: list[str] = ["__version__"]
