"""End-to-end tests for the Linter with a fake PMD engine."""

from __future__ import annotations

import logging

import pytest

from pmdlint.application import Linter, LinterSettings
from pmdlint.core.exceptions import (
    AnalysisSetupError,
    BuildFailureError,
    InvalidSettingError,
    MissingRuleSetsError,
    PolicyFailure,
)
from pmdlint.core.models import AnalysisConfigBuilder, Outcome

from fakes import FakeEngine, FakeResolver, clean_payload, pmd_payload, source_file, violation_row

RULESET = "src/test/resources/pmd/ruleset.xml"

EXPECTED_TXT = (
    "test-project/src/main/java/org/example/test/MyClass.java:29:\t"
    "UnusedPrivateField:\tAvoid unused private fields such as 'unUsed'.\n"
)


@pytest.fixture()
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture()
def linter(project, report_dir, engine) -> Linter:
    return Linter(project, settings=LinterSettings(report_directory=report_dir), engine=engine, environ={})


def _suppressed_payload(request):
    return pmd_payload(
        suppressed=[
            {
                "filename": source_file(request),
                "violation": violation_row(line=12, rule="EmptyCatchBlock", message="Avoid empty catch blocks"),
                "suppressiontype": "nopmd",
                "usermsg": "",
            }
        ]
    )


class TestMissingRuleSets:
    @pytest.mark.parametrize("attributes", [{}, {"ruleSets": []}])
    def test_fails_before_any_file_is_written(self, linter, report_dir, engine, attributes):
        with pytest.raises(MissingRuleSetsError) as exc_info:
            linter.pmd(minimumPriority="MEDIUM", **attributes)

        assert exc_info.value.message == (
            "You must specify one or more values for the [ruleSets] argument. "
            "It will look something like this:\n\n"
            'pmd(ruleSets: ["src/test/resources/pmd/ruleset.xml"])'
        )
        assert not report_dir.exists()
        assert engine.requests == []

    def test_existing_reports_are_left_alone(self, linter, report_dir):
        report_dir.mkdir(parents=True)
        (report_dir / "keep.txt").write_text("x")
        with pytest.raises(MissingRuleSetsError):
            linter.pmd(ruleSets=[])
        assert (report_dir / "keep.txt").exists()


class TestUnusedPrivateField:
    def test_run_fails_and_reports_the_violation(self, linter, report_dir):
        with pytest.raises(PolicyFailure) as exc_info:
            linter.pmd(minimumPriority="MEDIUM", ruleSets=[RULESET])

        assert str(exc_info.value) == "PMD analysis failed."
        assert exc_info.value.outcome is Outcome.FAILED_VIOLATIONS
        assert isinstance(exc_info.value, BuildFailureError)
        assert (report_dir / "pmd-report.txt").read_text(encoding="utf-8") == EXPECTED_TXT

    def test_exactly_three_report_files(self, linter, report_dir):
        with pytest.raises(PolicyFailure):
            linter.pmd(ruleSets=[RULESET])
        assert sorted(path.name for path in report_dir.iterdir()) == [
            "pmd-report.html",
            "pmd-report.txt",
            "pmd-report.xml",
        ]

    def test_reports_are_written_without_failing_when_disabled(self, linter, report_dir):
        run = linter.pmd(ruleSets=[RULESET], failOnViolations=False)

        assert run.outcome is Outcome.SUCCESS
        assert len(run.report.violations) == 1
        assert [path.name for path in run.report_files] == [
            "pmd-report.html",
            "pmd-report.txt",
            "pmd-report.xml",
        ]
        assert (report_dir / "pmd-report.txt").read_text(encoding="utf-8") == EXPECTED_TXT

    def test_policy_failure_carries_report(self, linter):
        with pytest.raises(PolicyFailure) as exc_info:
            linter.pmd(ruleSets=[RULESET])
        assert exc_info.value.report.violations[0].line == 29

    def test_rerun_produces_identical_text_report(self, linter, report_dir):
        contents = []
        for _ in range(2):
            linter.pmd(ruleSets=[RULESET], failOnViolations=False)
            contents.append((report_dir / "pmd-report.txt").read_bytes())
        assert contents[0] == contents[1]

    def test_report_directory_is_pruned(self, linter, report_dir):
        report_dir.mkdir(parents=True)
        (report_dir / "unrelated.log").write_text("stale")
        linter.pmd(ruleSets=[RULESET], failOnViolations=False)
        assert not (report_dir / "unrelated.log").exists()

    def test_custom_report_name_and_format(self, linter, report_dir):
        linter.pmd(ruleSets=[RULESET], failOnViolations=False, reportFormat="json", reportFileName="lint")
        assert sorted(path.name for path in report_dir.iterdir()) == ["lint.html", "lint.json", "lint.txt"]


class TestSuppressedViolations:
    def test_hidden_but_counted(self, project, report_dir, caplog):
        linter = Linter(
            project, LinterSettings(report_directory=report_dir),
            engine=FakeEngine(payload=_suppressed_payload, returncode=0), environ={},
        )
        with caplog.at_level(logging.INFO, logger="pmdlint"):
            run = linter.pmd(ruleSets=[RULESET])

        assert run.outcome is Outcome.SUCCESS
        assert (report_dir / "pmd-report.txt").read_text(encoding="utf-8") == ""
        assert "[1] Suppressed violations" in caplog.messages
        assert "[0] Violations" in caplog.messages
        assert "\nPMD analysis report" not in caplog.messages

    def test_shown_on_request(self, project, report_dir):
        linter = Linter(
            project, LinterSettings(report_directory=report_dir),
            engine=FakeEngine(payload=_suppressed_payload, returncode=0), environ={},
        )
        linter.pmd(ruleSets=[RULESET], reportSuppressedViolations=True)
        assert (report_dir / "pmd-report.txt").read_text(encoding="utf-8") == (
            "EmptyCatchBlock rule violation suppressed by //NOPMD in "
            "test-project/src/main/java/org/example/test/MyClass.java\n"
        )


class TestConsoleOutput:
    def test_configuration_banner_and_summary(self, linter, caplog):
        with caplog.at_level(logging.INFO, logger="pmdlint"):
            with pytest.raises(PolicyFailure):
                linter.pmd(minimumPriority="HIGH", ruleSets=[RULESET], languageVersion="21")

        messages = caplog.messages
        assert "Using PMD version [7.9.0]" in messages
        assert "Language: Java 21" in messages
        assert "Minimum priority: HIGH" in messages
        assert f"Rulesets: {RULESET}" in messages
        assert messages.index("\nPMD analysis configuration ") < messages.index("\nPMD analysis summary ")
        assert "[0] Configuration errors" in messages
        assert "[0] Processing errors" in messages
        assert "[1] Violations" in messages
        assert "\nPMD analysis report" in messages
        assert EXPECTED_TXT in messages

    def test_aux_classpath_is_logged(self, linter, project, caplog):
        with caplog.at_level(logging.INFO, logger="pmdlint"):
            linter.pmd(ruleSets=[RULESET], failOnViolations=False)
        assert any(
            m.startswith("Adding aux classpath [") and str(project.absolute() / "build/classes/main") in m
            for m in caplog.messages
        )


class TestErrors:
    def test_engine_configuration_error_fails_even_without_fail_on_violations(self, project, report_dir):
        linter = Linter(
            project, LinterSettings(report_directory=report_dir),
            engine=FakeEngine(returncode=1, stderr="ERROR Cannot load ruleset"), environ={},
        )
        with pytest.raises(PolicyFailure) as exc_info:
            linter.pmd(ruleSets=["missing.xml"], failOnViolations=False)

        assert exc_info.value.outcome is Outcome.FAILED_CONFIG
        assert (report_dir / "pmd-report.txt").read_text(encoding="utf-8") == "pmd:\tERROR Cannot load ruleset\n"

    def test_missing_input_path_raises_setup_error(self, linter):
        with pytest.raises(AnalysisSetupError):
            linter.pmd(ruleSets=[RULESET], inputPath="src/nowhere")

    def test_invalid_priority(self, linter, report_dir):
        with pytest.raises(InvalidSettingError):
            linter.pmd(ruleSets=[RULESET], minimumPriority="URGENT")
        assert not report_dir.exists()

    def test_unknown_attribute(self, linter):
        with pytest.raises(InvalidSettingError):
            linter.pmd(ruleSets=[RULESET], ruleSetz=["x"])


class TestCustomRules:
    def test_custom_rule_classpath_reaches_engine(self, project, report_dir, tmp_path):
        jar = tmp_path / "rules-1.0.jar"
        engine = FakeEngine(payload=clean_payload, returncode=0)
        linter = Linter(
            project, LinterSettings(report_directory=report_dir), engine=engine,
            resolver=FakeResolver({"org.example:rules:1.0": [jar]}), environ={"CLASSPATH": "/base.jar"},
        )
        linter.pmd(ruleSets=[RULESET], customRuleDependencySpecs=["org.example:rules:1.0"])
        assert engine.requests[0].rule_classpath.endswith(str(jar))
        assert engine.requests[0].rule_classpath.startswith("/base.jar")


def test_analyze_with_typed_config(linter, project, engine):
    config = AnalysisConfigBuilder(project).minimum_priority("LOW").build()
    run = linter.analyze(config, [RULESET], fail_on_violations=False)
    assert run.outcome is Outcome.SUCCESS
    assert int(engine.requests[0].minimum_priority) == 5
