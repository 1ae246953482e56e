# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Report models produced by one analysis run.

Classes
-------
Violation : A single rule violation reported by the engine
SuppressedViolation : A violation silenced by NOPMD or @SuppressWarnings
ProcessingError : A per-file failure (e.g. unparseable source)
ConfigurationError : A rule or setting the engine could not apply
Report : Aggregate of all of the above for one run
Outcome : Terminal state of one run
LintRun : What a successful run hands back to the caller

Notes
-----
All models are frozen; a Report is read-only once the parser builds it.
``ConfigurationError`` and ``ProcessingError`` are report entries, not
exceptions.
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class Violation(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_path: str
    line: int
    rule_name: str
    message: str
    priority: int
    end_line: Optional[int] = None
    column: Optional[int] = None
    rule_set: Optional[str] = None
    external_info_url: Optional[str] = None


class SuppressedViolation(BaseModel):
    model_config = ConfigDict(frozen=True)

    violation: Violation
    suppression_type: str
    user_message: str = ""

    @property
    def suppressor(self) -> str:
        """Suppressor id as PMD's text report prints it."""
        kind = self.suppression_type.lower()
        if kind == "nopmd":
            return "//NOPMD"
        if kind == "annotation":
            return "@SuppressWarnings"
        return self.suppression_type


class ProcessingError(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_path: str
    message: str
    detail: Optional[str] = None


class ConfigurationError(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_name: str
    message: str
    rule_set: Optional[str] = None


class Report(BaseModel):
    """Structured result of one analysis run."""

    model_config = ConfigDict(frozen=True)

    configuration_errors: Tuple[ConfigurationError, ...] = ()
    processing_errors: Tuple[ProcessingError, ...] = ()
    violations: Tuple[Violation, ...] = ()
    suppressed_violations: Tuple[SuppressedViolation, ...] = ()
    engine_version: Optional[str] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.configuration_errors or self.processing_errors)

    def has_content(self, show_suppressed: bool) -> bool:
        """Whether anything would be printed in a rendered report."""
        return (
            self.has_errors
            or bool(self.violations)
            or (show_suppressed and bool(self.suppressed_violations))
        )

    def with_configuration_errors(self, *errors: ConfigurationError) -> "Report":
        return self.model_copy(
            update={"configuration_errors": self.configuration_errors + tuple(errors)}
        )

    def counts(self) -> dict:
        return {
            "configuration_errors": len(self.configuration_errors),
            "processing_errors": len(self.processing_errors),
            "suppressed_violations": len(self.suppressed_violations),
            "violations": len(self.violations),
        }


class Outcome(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED_VIOLATIONS = "FAILED_VIOLATIONS"
    FAILED_CONFIG = "FAILED_CONFIG"
    FAILED_MISSING_RULESETS = "FAILED_MISSING_RULESETS"

    @property
    def failed(self) -> bool:
        return self is not Outcome.SUCCESS


class LintRun(BaseModel):
    model_config = ConfigDict(frozen=True)

    report: Report
    outcome: Outcome
    report_files: Tuple[Path, ...] = ()
