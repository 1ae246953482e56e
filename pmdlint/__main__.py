"""Main entry point for running pmdlint as a module.

Examples
--------
$ python -m pmdlint --help
$ python -m pmdlint check /path/to/project -r ruleset.xml
"""
from __future__ import annotations

from .main import main


if __name__ == "__main__":
    main()
