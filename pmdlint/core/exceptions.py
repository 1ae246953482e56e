# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Custom exception hierarchy for pmdlint.

Errors pmdlint raises to its caller. Build-halting failures share the
BuildFailureError base so a build script can stop on them with one except
clause.

All exceptions inherit from LinterError to allow catching application-specific
errors separately from standard Python exceptions. Problems reported by the
analysis engine itself (configuration errors, processing errors) are *not*
exceptions: they are accumulated into the Report.

Exception Hierarchy
-------------------
LinterError (base)
├── BuildFailureError
│   ├── MissingRuleSetsError
│   └── PolicyFailure
├── InvalidSettingError
├── AnalysisSetupError
├── EngineExecutionError
├── DependencyResolutionError
└── ReportParseError

Examples
--------
>>> try:
...     raise PolicyFailure()
... except BuildFailureError as e:
...     print(e.message)
PMD analysis failed.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from pmdlint.core.models import Outcome, Report


MISSING_RULE_SETS_MESSAGE = (
    "You must specify one or more values for the [ruleSets] argument. "
    "It will look something like this:\n\n"
    'pmd(ruleSets: ["src/test/resources/pmd/ruleset.xml"])'
)

ANALYSIS_FAILED_MESSAGE = "PMD analysis failed."


class LinterError(Exception):
    """Base exception for all pmdlint errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    details : dict, optional
        Dictionary containing additional error context. Default is None.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Additional error context information.

    Examples
    --------
    >>> error = LinterError("Something went wrong", {"code": 500})
    >>> error.message
    'Something went wrong'
    >>> error.details['code']
    500
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class BuildFailureError(LinterError):
    """Build-halting signal raised to the caller.

    Callers that only care whether the build must stop catch this class;
    callers that need to tell a configuration mistake apart from a failed
    analysis check the concrete subclass or ``outcome``.

    Parameters
    ----------
    message : str
        Message shown to the user.
    outcome : Outcome, optional
        Terminal state of the run that produced the failure.
    details : dict, optional
        Additional error context. Default is None.
    """

    def __init__(
        self,
        message: str,
        outcome: Optional["Outcome"] = None,
        details: dict = None,
    ):
        details = details or {}
        if outcome is not None:
            details["outcome"] = outcome.value
        super().__init__(message, details)
        self.outcome = outcome


class MissingRuleSetsError(BuildFailureError):
    """Raised before any work is done when no rule sets were configured.

    The message includes a usage example. No report files are produced.

    Examples
    --------
    >>> MissingRuleSetsError().message.startswith("You must specify")
    True
    """

    def __init__(self, details: dict = None):
        from pmdlint.core.models import Outcome

        super().__init__(
            MISSING_RULE_SETS_MESSAGE, Outcome.FAILED_MISSING_RULESETS, details
        )


class PolicyFailure(BuildFailureError):
    """Raised after a completed run whose Report violates the pass criteria.

    Reports have already been written when this is raised.

    Parameters
    ----------
    outcome : Outcome, optional
        FAILED_CONFIG or FAILED_VIOLATIONS.
    report : Report, optional
        The aggregated Report of the run.

    Attributes
    ----------
    report : Report or None
        The Report that failed the policy.
    """

    def __init__(
        self,
        outcome: Optional["Outcome"] = None,
        report: Optional["Report"] = None,
        details: dict = None,
    ):
        super().__init__(ANALYSIS_FAILED_MESSAGE, outcome, details)
        self.report = report


class InvalidSettingError(LinterError):
    """Raised for invalid configuration values or unreadable config files.

    Parameters
    ----------
    config_key : str
        Configuration key that caused the error.
    message : str
        Error message describing the configuration issue.
    details : dict, optional
        Additional context. Default is None.

    Examples
    --------
    >>> error = InvalidSettingError('minimum_priority', 'Unknown priority [URGENT]')
    >>> error.config_key
    'minimum_priority'
    """

    def __init__(self, config_key: str, message: str, details: dict = None):
        details = details or {}
        details['config_key'] = config_key
        super().__init__(f"Configuration error for '{config_key}': {message}", details)
        self.config_key = config_key


class AnalysisSetupError(LinterError):
    """Raised when a run cannot start, before the engine is invoked.

    Parameters
    ----------
    path : str
        Path that caused the error (typically the input path).
    message : str
        Error message describing the failure.
    details : dict, optional
        Additional context. Default is None.
    """

    def __init__(self, path: str, message: str, details: dict = None):
        details = details or {}
        details['path'] = path
        super().__init__(f"Cannot analyze '{path}': {message}", details)
        self.path = path


class EngineExecutionError(LinterError):
    """Raised when the analysis engine executable cannot be started.

    Parameters
    ----------
    engine_name : str
        Name of the engine that failed.
    message : str
        Error message describing the failure.
    details : dict, optional
        Additional error context (command, exit code, etc.). Default is None.

    Examples
    --------
    >>> error = EngineExecutionError('pmd', 'Command not found')
    >>> error.engine_name
    'pmd'
    """

    def __init__(self, engine_name: str, message: str, details: dict = None):
        details = details or {}
        details['engine'] = engine_name
        super().__init__(f"Engine '{engine_name}' failed: {message}", details)
        self.engine_name = engine_name


class DependencyResolutionError(LinterError):
    """Raised when a custom-rule artifact spec cannot be resolved.

    Parameters
    ----------
    spec : str
        The artifact spec that failed.
    message : str
        Error message describing the failure.
    details : dict, optional
        Additional context (URL, status code, etc.). Default is None.
    """

    def __init__(self, spec: str, message: str, details: dict = None):
        details = details or {}
        details['spec'] = spec
        super().__init__(f"Cannot resolve '{spec}': {message}", details)
        self.spec = spec


class ReportParseError(LinterError):
    """Raised when an engine report cannot be parsed.

    Parameters
    ----------
    parser_name : str
        Name of the parser that failed.
    message : str
        Error message describing the parsing failure.
    details : dict, optional
        Additional context. Default is None.

    Examples
    --------
    >>> error = ReportParseError('pmd-json', 'Invalid JSON')
    >>> error.parser_name
    'pmd-json'
    """

    def __init__(self, parser_name: str, message: str, details: dict = None):
        details = details or {}
        details['parser'] = parser_name
        super().__init__(f"Parser '{parser_name}' failed: {message}", details)
        self.parser_name = parser_name
