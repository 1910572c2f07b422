"""Single source of truth for the todayiwill version string."""

from __future__ import annotations

__version__: str = "0.5.3"
