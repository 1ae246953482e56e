"""Core domain logic for pmdlint.

This package contains the data models, exceptions and logging configuration
shared by the application and infrastructure layers.
"""
from __future__ import annotations

from .exceptions import (
    AnalysisSetupError,
    BuildFailureError,
    DependencyResolutionError,
    EngineExecutionError,
    InvalidSettingError,
    LinterError,
    MissingRuleSetsError,
    PolicyFailure,
    ReportParseError,
)

__all__ = [
    "AnalysisSetupError",
    "BuildFailureError",
    "DependencyResolutionError",
    "EngineExecutionError",
    "InvalidSettingError",
    "LinterError",
    "MissingRuleSetsError",
    "PolicyFailure",
    "ReportParseError",
]
