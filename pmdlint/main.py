"""
pmdlint main entry point.

Delegates to the CLI module for actual command handling.
"""
from __future__ import annotations

from .cli import app


def main() -> None:
    """Run the pmdlint CLI application."""
    app()


if __name__ == "__main__":
    main()
