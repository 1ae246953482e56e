"""PMD engine implementation.

This module drives PMD 7's ``pmd check`` command. Custom rule classes reach the
engine through the ``CLASSPATH`` environment variable, which the PMD launcher
puts in front of its own libraries.

Classes
-------
PmdTool : PMD engine wrapper

Examples
--------
>>> tool = PmdTool(executable="pmd")
>>> tool.name
'pmd'

See Also
--------
pmdlint.infra.engine.base : Base engine class
pmdlint.core.models.parsers.pmd : Report parser
"""
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, List, Optional

from .base import CommandEngine, EngineRequest, EngineRunResult

#: exit codes meaning PMD finished the analysis
#: 0 = clean, 4 = violations found, 5 = recoverable errors found
COMPLETED_EXIT_CODES = frozenset({0, 4, 5})

_VERSION_RE = re.compile(r"PMD\s+(\d+\.\d+[^\s]*)")


def default_executable() -> str:
    """``$PMD_HOME/bin/pmd`` when PMD_HOME is set, else ``pmd`` from PATH."""
    home = os.environ.get("PMD_HOME")
    if home:
        script = "pmd.bat" if os.name == "nt" else "pmd"
        return str(Path(home).expanduser() / "bin" / script)
    return "pmd"


class PmdTool(CommandEngine):
    """Runs PMD once per request and returns the raw EngineRunResult."""

    @property
    def name(self) -> str:
        return "pmd"

    def __init__(
        self,
        executable: Optional[str] = None,
        extra_args: Optional[List[str]] = None,
        **kw,
    ) -> None:
        super().__init__(**kw)
        self.executable = executable or default_executable()
        self.extra_args = list(extra_args or [])
        self._version: Optional[str] = None

    def build_cmd(self, request: EngineRequest) -> List[str]:
        cmd: List[str] = [
            self.executable,
            "check",
            "--no-progress",
            "--dir", str(request.input_path),
            "--rulesets", ",".join(request.rule_sets),
            "--format", request.report_format,
            "--report-file", str(request.report_file),
            "--minimum-priority", str(int(request.minimum_priority)),
            "--use-version", f"{request.language}-{request.language_version}",
        ]

        if request.aux_classpath:
            cmd += ["--aux-classpath", request.aux_classpath]

        if request.cache_location:
            cmd += ["--cache", str(request.cache_location)]
        else:
            cmd += ["--no-cache"]

        if request.show_suppressed:
            cmd += ["--show-suppressed"]

        cmd += self.extra_args
        return cmd

    def build_env(self, request: EngineRequest) -> Dict[str, str]:
        env = super().build_env(request)
        if request.rule_classpath:
            env["CLASSPATH"] = request.rule_classpath
        return env

    def completed(self, result: EngineRunResult) -> bool:
        return result.returncode in COMPLETED_EXIT_CODES and not result.timed_out

    def version(self) -> str:
        if self._version is None:
            run = self._run([self.executable, "--version"])
            match = _VERSION_RE.search(run.stdout or run.stderr)
            self._version = match.group(1) if match else "unknown"
        return self._version


__all__ = ["PmdTool", "COMPLETED_EXIT_CODES", "default_executable"]
