"""Core data models for analysis configuration and results.

Modules
-------
analysis : AnalysisConfig, its builder and the ``pmd`` attribute map
report : Report, its entries and the run Outcome
parsers : Engine report parsers

See Also
--------
pmdlint.application : Components that produce and consume these models
"""
from __future__ import annotations

from .analysis import (
    AnalysisConfig,
    AnalysisConfigBuilder,
    PmdOptions,
    RulePriority,
)
from .report import (
    ConfigurationError,
    LintRun,
    Outcome,
    ProcessingError,
    Report,
    SuppressedViolation,
    Violation,
)

__all__ = [
    "AnalysisConfig",
    "AnalysisConfigBuilder",
    "PmdOptions",
    "RulePriority",
    "ConfigurationError",
    "LintRun",
    "Outcome",
    "ProcessingError",
    "Report",
    "SuppressedViolation",
    "Violation",
]
