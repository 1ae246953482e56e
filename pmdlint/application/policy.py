"""Pass/fail policy for a completed run."""
from __future__ import annotations

from pmdlint.core.models import Outcome, Report


class PolicyEvaluator:
    """
    Decides the Outcome of a run.

    Configuration and processing errors always fail the run. Violations fail
    it only when ``fail_on_violations`` is set. Suppressed violations never
    count, whether or not they are shown.
    """

    def __init__(self, fail_on_violations: bool = True) -> None:
        self.fail_on_violations = fail_on_violations

    def evaluate(self, report: Report) -> Outcome:
        if report.has_errors:
            return Outcome.FAILED_CONFIG
        if self.fail_on_violations and report.violations:
            return Outcome.FAILED_VIOLATIONS
        return Outcome.SUCCESS
