"""Analysis runner.

Executes one analysis pass for an AnalysisConfig and a resolved RuleSetBundle
and returns a Report. Engine-side failures (bad rule-set XML, unknown language
version, unknown report format) become ConfigurationError entries in the
Report; only failures that make a run impossible raise.

Example:
    Run PMD against a project::

        runner = AnalysisRunner(PmdTool())
        report = runner.run(config, bundle, Path("build/linter-reports/pmd-report.xml"))
"""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import List

from pmdlint.core.exceptions import AnalysisSetupError, ReportParseError
from pmdlint.core.logging_config import get_logger
from pmdlint.core.models import AnalysisConfig, ConfigurationError, Report
from pmdlint.core.models.parsers import load_pmd_json_report
from pmdlint.infra.engine import AnalysisEngine, EngineRequest, EngineRunResult

from .rulesets import RuleSetBundle

logger = get_logger(__name__)

COLLECTION_FORMAT = "json"

# cap on how much engine stderr ends up in a single configuration error
_MAX_ERROR_LINES = 20


def _error_summary(run: EngineRunResult) -> str:
    lines = [line.strip() for line in (run.stderr or run.stdout).splitlines() if line.strip()]
    flagged = [line for line in lines if "ERROR" in line or "Exception" in line]
    chosen = (flagged or lines)[:_MAX_ERROR_LINES]
    if not chosen:
        return f"{run.engine} exited with code {run.returncode}"
    return "\n".join(chosen)


class AnalysisRunner:
    """Thin wrapper around an AnalysisEngine that always yields a Report."""

    def __init__(self, engine: AnalysisEngine) -> None:
        self.engine = engine

    def check_input(self, config: AnalysisConfig) -> None:
        path = config.input_path
        if not path.exists():
            raise AnalysisSetupError(str(path), "input path does not exist")
        if not os.access(path, os.R_OK):
            raise AnalysisSetupError(str(path), "input path is not readable")

    def request_for(
        self, config: AnalysisConfig, bundle: RuleSetBundle, report_format: str,
        report_file: Path, show_suppressed: bool,
    ) -> EngineRequest:
        return EngineRequest(
            input_path=config.input_path,
            rule_sets=bundle.locations,
            report_format=report_format,
            report_file=report_file,
            minimum_priority=config.minimum_priority,
            language=config.language,
            language_version=config.language_version,
            aux_classpath=config.aux_classpath,
            rule_classpath=bundle.classpath.as_path_list(),
            cache_location=config.cache_location,
            show_suppressed=show_suppressed,
        )

    def run(self, config: AnalysisConfig, bundle: RuleSetBundle, native_report_file: Path) -> Report:
        """
        Collect a structured Report, then let the engine write its native
        report to ``native_report_file``.

        The collection pass always includes suppressed violations so they are
        counted even when they are not shown. A JSON native report that shows
        suppressed violations already holds everything, so it is the only pass.
        """
        self.check_input(config)

        if config.report_format == COLLECTION_FORMAT and config.show_suppressed_violations:
            single = self.engine.execute(
                self.request_for(config, bundle, COLLECTION_FORMAT, native_report_file, True)
            )
            return self._collect(single, native_report_file)

        with tempfile.TemporaryDirectory(prefix="pmdlint-") as scratch:
            collection_file = Path(scratch) / f"report.{COLLECTION_FORMAT}"
            collection = self.engine.execute(
                self.request_for(config, bundle, COLLECTION_FORMAT, collection_file, True)
            )
            report = self._collect(collection, collection_file)

        native = self.engine.execute(
            self.request_for(
                config, bundle, config.report_format, native_report_file,
                config.show_suppressed_violations,
            )
        )
        if not self.engine.completed(native) and self.engine.completed(collection):
            report = report.with_configuration_errors(
                ConfigurationError(
                    rule_name=f"{config.report_format} report",
                    message=_error_summary(native),
                )
            )
        return report

    def _collect(self, run: EngineRunResult, report_file: Path) -> Report:
        errors: List[ConfigurationError] = []
        report = Report()
        try:
            report = load_pmd_json_report(report_file)
        except ReportParseError as exc:
            if self.engine.completed(run):
                errors.append(ConfigurationError(rule_name=run.engine, message=exc.message))

        if not self.engine.completed(run):
            logger.debug("Engine stderr:\n%s", run.stderr)
            errors.append(ConfigurationError(rule_name=run.engine, message=_error_summary(run)))

        return report.with_configuration_errors(*errors) if errors else report
