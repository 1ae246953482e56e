"""Application layer: the components that make up one PMD run.

Modules
-------
rulesets : RuleSetResolver
runner : AnalysisRunner
rendering : ReportRenderer and report-directory handling
policy : PolicyEvaluator
orchestrator : Linter, the public entry point
"""
from __future__ import annotations

from .orchestrator import Linter, LinterSettings
from .policy import PolicyEvaluator
from .rendering import ReportRenderer, prepare_report_directory
from .rulesets import RuleClasspath, RuleSetBundle, RuleSetResolver
from .runner import AnalysisRunner

__all__ = [
    "AnalysisRunner",
    "Linter",
    "LinterSettings",
    "PolicyEvaluator",
    "ReportRenderer",
    "RuleClasspath",
    "RuleSetBundle",
    "RuleSetResolver",
    "prepare_report_directory",
]
