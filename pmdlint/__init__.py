"""pmdlint - PMD analysis orchestration.

pmdlint drives the PMD static-analysis engine for a Java project: it resolves
rule sets (and optional custom-rule artifacts), runs the analysis, writes text,
HTML and PMD-native reports, and fails the build when the policy says so.

The package provides:
- ``Linter``, the programmatic entry point (``Linter(project).pmd(...)``)
- A typer CLI (``python -m pmdlint check``)
- YAML/TOML/environment configuration loading

Examples
--------
Run from the command line:
    $ python -m pmdlint check test-project -r src/test/resources/pmd/ruleset.xml

See Also
--------
pmdlint.application.orchestrator : The Linter
pmdlint.cli : Command-line interface
"""
from __future__ import annotations

__version__ = "1.0.0"
__author__ = "Anush Krishna"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
