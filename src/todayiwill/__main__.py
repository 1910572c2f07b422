"""Allow ``python -m todayiwill`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m todayiwill`` behaves identically to the ``todayiwill``
console script.
"""

from __future__ import annotations

from todayiwill.cli.app import cli

if __name__ == "__main__":
    cli()
