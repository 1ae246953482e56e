"""Tests for the PMD command-line adapter."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from pmdlint.core.exceptions import EngineExecutionError
from pmdlint.core.models import RulePriority
from pmdlint.infra.engine import EngineRequest, EngineRunResult, PmdTool
from pmdlint.infra.engine.base import TIMEOUT_EXIT_CODE
from pmdlint.infra.engine.pmd import default_executable


def _request(**overrides) -> EngineRequest:
    values = dict(
        input_path=Path("test-project/src/main/java"),
        rule_sets=("/abs/test-project/ruleset.xml", "category/java/errorprone.xml"),
        report_format="xml",
        report_file=Path("build/linter-reports/pmd-report.xml"),
        minimum_priority=RulePriority.MEDIUM,
        aux_classpath="/abs/build/classes/main:/abs/build/classes/test",
        cache_location=Path("/abs/build/pmd.cache"),
    )
    values.update(overrides)
    return EngineRequest(**values)


def _result(returncode=0, stdout="", stderr="", timed_out=False) -> EngineRunResult:
    return EngineRunResult(
        engine="pmd", cmd=["pmd"], cwd="/", returncode=returncode,
        duration_s=0.1, stdout=stdout, stderr=stderr, timed_out=timed_out,
    )


class TestBuildCommand:
    def test_full_command(self):
        cmd = PmdTool(executable="pmd").build_cmd(_request())
        assert cmd == [
            "pmd", "check", "--no-progress",
            "--dir", "test-project/src/main/java",
            "--rulesets", "/abs/test-project/ruleset.xml,category/java/errorprone.xml",
            "--format", "xml",
            "--report-file", "build/linter-reports/pmd-report.xml",
            "--minimum-priority", "3",
            "--use-version", "java-17",
            "--aux-classpath", "/abs/build/classes/main:/abs/build/classes/test",
            "--cache", "/abs/build/pmd.cache",
        ]

    def test_no_cache_and_show_suppressed(self):
        cmd = PmdTool(executable="pmd").build_cmd(
            _request(cache_location=None, aux_classpath="", show_suppressed=True)
        )
        assert "--no-cache" in cmd
        assert "--show-suppressed" in cmd
        assert "--aux-classpath" not in cmd

    def test_extra_args_are_appended(self):
        cmd = PmdTool(executable="pmd", extra_args=["--threads", "2"]).build_cmd(_request())
        assert cmd[-2:] == ["--threads", "2"]


class TestEnvironment:
    def test_rule_classpath_is_exported(self):
        env = PmdTool(executable="pmd").build_env(_request(rule_classpath="/base.jar:/rules.jar"))
        assert env["CLASSPATH"] == "/base.jar:/rules.jar"

    def test_classpath_left_alone_without_custom_rules(self):
        tool = PmdTool(executable="pmd", env={"CLASSPATH": "/inherited.jar"})
        assert tool.build_env(_request())["CLASSPATH"] == "/inherited.jar"


class TestExecutable:
    def test_pmd_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PMD_HOME", str(tmp_path))
        assert default_executable() == str(tmp_path / "bin" / "pmd")

    def test_path_lookup(self, monkeypatch):
        monkeypatch.delenv("PMD_HOME", raising=False)
        assert default_executable() == "pmd"
        assert PmdTool().executable == "pmd"


@pytest.mark.parametrize(
    "returncode,timed_out,expected",
    [(0, False, True), (4, False, True), (5, False, True), (1, False, False), (2, False, False),
     (TIMEOUT_EXIT_CODE, True, False)],
)
def test_completed_exit_codes(returncode, timed_out, expected):
    assert PmdTool(executable="pmd").completed(_result(returncode, timed_out=timed_out)) is expected


class TestProcess:
    def test_execute_records_report_file(self, monkeypatch):
        tool = PmdTool(executable="pmd")
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs))
            return subprocess.CompletedProcess(cmd, 4, stdout="", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)
        result = tool.execute(_request(rule_classpath="/rules.jar"))

        assert result.returncode == 4
        assert result.report_file == "build/linter-reports/pmd-report.xml"
        assert calls[0][1]["env"]["CLASSPATH"] == "/rules.jar"
        assert tool.completed(result)

    def test_timeout_is_synthesized(self, monkeypatch):
        tool = PmdTool(executable="pmd", timeout_s=5)

        def fake_run(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, 5, output=b"partial", stderr=None)

        monkeypatch.setattr(subprocess, "run", fake_run)
        result = tool.execute(_request())

        assert result.timed_out
        assert result.returncode == TIMEOUT_EXIT_CODE
        assert result.stdout == "partial"
        assert "[TIMEOUT after 5s]" in result.stderr
        assert not tool.completed(result)

    def test_missing_executable_raises(self, tmp_path):
        tool = PmdTool(executable=str(tmp_path / "no-such-pmd"))
        with pytest.raises(EngineExecutionError, match="cannot start"):
            tool.execute(_request())


class TestVersion:
    def test_parses_and_caches(self, monkeypatch):
        tool = PmdTool(executable="pmd")
        calls = []

        def fake_run(cmd, cwd=None, env=None):
            calls.append(cmd)
            return _result(stdout="PMD 7.9.0 (abc123, 2024-12-27T09:00:00Z)\nJava version: 17\n")

        monkeypatch.setattr(tool, "_run", fake_run)
        assert tool.version() == "7.9.0"
        assert tool.version() == "7.9.0"
        assert calls == [["pmd", "--version"]]

    def test_unrecognised_output(self, monkeypatch):
        tool = PmdTool(executable="pmd")
        monkeypatch.setattr(tool, "_run", lambda cmd, cwd=None, env=None: _result(returncode=1))
        assert tool.version() == "unknown"
