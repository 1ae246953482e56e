"""
PMD analysis orchestrator.

This module is the public entry point of pmdlint. ``Linter`` resolves rule
sets, prepares the report directory, runs the engine, writes the text and HTML
reports next to the engine's native one, prints the console summary and turns
a failing Outcome into a build-halting ``PolicyFailure``.

Example:
    Run PMD with the build plugin's attribute names::

        linter = Linter("test-project")
        linter.settings.report_directory = Path("test-project/build/linter-reports")
        linter.pmd(minimumPriority="MEDIUM", ruleSets=["src/test/resources/pmd/ruleset.xml"])

    Or with a typed configuration::

        config = AnalysisConfigBuilder("test-project").minimum_priority("HIGH").build()
        run = linter.analyze(config, ["ruleset.xml"], fail_on_violations=False)
        run.outcome

Author: Anush Krishna
License: MIT
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from pmdlint.core.exceptions import PolicyFailure
from pmdlint.core.logging_config import get_logger
from pmdlint.core.models import AnalysisConfig, LintRun, PmdOptions, Report
from pmdlint.infra.engine import AnalysisEngine, PmdTool
from pmdlint.infra.resolvers.base import DependencyResolver

from .policy import PolicyEvaluator
from .rendering import ReportRenderer, prepare_report_directory
from .rulesets import RuleSetBundle, RuleSetResolver
from .runner import AnalysisRunner

logger = get_logger(__name__)

RULE = "==============================================="


@dataclass
class LinterSettings:
    """Plugin-level settings shared by every run of a Linter."""

    report_directory: Path = field(default_factory=lambda: Path("build/linter-reports"))


class Linter:
    """Public entry point: one instance per project, one ``pmd`` call per run.

    Parameters
    ----------
    project_dir : str or Path
        Project root. Rule sets, the input path, class paths and the cache
        location are resolved against it.
    settings : LinterSettings, optional
        Report directory and other plugin-level settings.
    engine : AnalysisEngine, optional
        Engine to drive. Defaults to ``PmdTool()``.
    resolver : DependencyResolver, optional
        Collaborator for ``customRuleDependencySpecs``.
    environ : Mapping, optional
        Environment supplying the base ``CLASSPATH``.
    """

    def __init__(
        self,
        project_dir: Union[str, Path],
        settings: Optional[LinterSettings] = None,
        engine: Optional[AnalysisEngine] = None,
        resolver: Optional[DependencyResolver] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.project_dir = Path(project_dir)
        self.settings = settings or LinterSettings()
        self.engine = engine or PmdTool()
        self.resolver = resolver
        self.environ = environ

    def pmd(self, **attributes) -> LintRun:
        """Run PMD configured by the plugin's attribute map (see ``PmdOptions``)."""
        options = PmdOptions.parse(attributes)
        return self.analyze(
            options.to_config(self.project_dir),
            options.rule_sets,
            fail_on_violations=options.fail_on_violations,
            custom_rule_specs=options.custom_rule_dependency_specs,
        )

    def analyze(
        self,
        config: AnalysisConfig,
        rule_sets: Sequence[str],
        *,
        fail_on_violations: bool = True,
        custom_rule_specs: Sequence[str] = (),
    ) -> LintRun:
        bundle = RuleSetResolver(self.project_dir, self.resolver, self.environ).resolve(
            rule_sets, custom_rule_specs
        )

        report_dir = prepare_report_directory(self.settings.report_directory)

        logger.info("Using PMD version [%s]", self.engine.version())
        logger.info("Adding aux classpath [%s]", config.aux_classpath)
        self._log_configuration(config, bundle)

        native_report = report_dir / config.native_report_name()
        report = AnalysisRunner(self.engine).run(config, bundle, native_report)

        renderer = ReportRenderer(config.show_suppressed_violations)
        rendered = renderer.render(report)
        written = renderer.write(rendered, report_dir, config.report_file_base_name)
        if native_report.exists():
            written.append(native_report)

        self._log_summary(report)
        if report.has_content(config.show_suppressed_violations):
            logger.info("\nPMD analysis report")
            logger.info(RULE)
            logger.info(rendered["text"])

        outcome = PolicyEvaluator(fail_on_violations).evaluate(report)
        if outcome.failed:
            raise PolicyFailure(outcome, report)
        return LintRun(report=report, outcome=outcome, report_files=tuple(written))

    def _log_configuration(self, config: AnalysisConfig, bundle: RuleSetBundle) -> None:
        logger.info("\nPMD analysis configuration ")
        logger.info(RULE)
        logger.info("Language: %s %s", config.language.capitalize(), config.language_version)
        logger.info("Minimum priority: %s", config.minimum_priority.name)
        logger.info("Rulesets: %s", ", ".join(bundle.references))

    def _log_summary(self, report: Report) -> None:
        counts = report.counts()
        logger.info("\nPMD analysis summary ")
        logger.info(RULE)
        logger.info("[%d] Configuration errors", counts["configuration_errors"])
        logger.info("[%d] Processing errors", counts["processing_errors"])
        logger.info("[%d] Suppressed violations", counts["suppressed_violations"])
        logger.info("[%d] Violations", counts["violations"])
