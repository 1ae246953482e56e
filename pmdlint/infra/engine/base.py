"""Base classes for analysis engine wrappers.

This module provides the abstract base class for driving an external analysis
engine as a subprocess. Engine implementations inherit from AnalysisEngine and
provide a command builder; the base class handles execution, timeouts and
packaging the outcome into an EngineRunResult.

Examples
--------
Implement a custom engine:

    >>> class EchoEngine(CommandEngine):
    ...     @property
    ...     def name(self) -> str:
    ...         return 'echo'
    ...     def build_cmd(self, request):
    ...         return ['echo', str(request.input_path)]

Notes
-----
The run is a single blocking call. Exit codes are reported as-is; deciding
which ones mean "completed" is the engine subclass's job.
"""
from __future__ import annotations

import os
import shutil
import subprocess
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from pmdlint.core.exceptions import EngineExecutionError
from pmdlint.core.logging_config import get_logger
from pmdlint.core.models import RulePriority

logger = get_logger(__name__)

#: exit code synthesized when the process is killed on timeout
TIMEOUT_EXIT_CODE = 124


class EngineRunResult(BaseModel):
    engine: str
    cmd: List[str]
    cwd: str
    returncode: int
    duration_s: float
    stdout: str
    stderr: str
    report_file: Optional[str] = None
    timed_out: bool = False


@dataclass(frozen=True)
class EngineRequest:
    """Everything one engine invocation needs, in engine-neutral terms."""

    input_path: Path
    rule_sets: Tuple[str, ...]
    report_format: str
    report_file: Path
    minimum_priority: RulePriority = RulePriority.MEDIUM
    language: str = "java"
    language_version: str = "17"
    aux_classpath: str = ""
    rule_classpath: str = ""
    cache_location: Optional[Path] = None
    show_suppressed: bool = False
    extra_env: Dict[str, str] = field(default_factory=dict)


class AnalysisEngine(ABC):
    """Base class for all analysis engine wrappers.

    Parameters
    ----------
    timeout_s : int, optional
        Process timeout in seconds. Default is None (no limit).
    env : Dict[str, str], optional
        Additional environment variables. Default is None.
    """

    #: default per-process time limit (seconds, None to disable)
    DEFAULT_TIMEOUT_S: Optional[int] = None

    def __init__(
        self,
        timeout_s: Optional[int] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> None:
        self.timeout_s = timeout_s or self.DEFAULT_TIMEOUT_S
        self.env = dict(os.environ)
        if env:
            self.env.update(env)

    # ----- Properties to override -------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str:
        """Lowercase engine name (e.g., 'pmd')."""
        raise NotImplementedError

    # ----- Public API -------------------------------------------------------------

    @abstractmethod
    def execute(self, request: EngineRequest) -> EngineRunResult:
        """Run one analysis pass and return the raw process outcome."""
        raise NotImplementedError

    def completed(self, result: EngineRunResult) -> bool:
        """Whether the engine ran to completion (findings or not)."""
        return result.returncode == 0

    def version(self) -> str:
        return "unknown"

    # ----- Utilities --------------------------------------------------------------

    def _run(
        self,
        cmd: Sequence[str],
        cwd: Optional[str] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> EngineRunResult:
        started = time.time()
        try:
            proc = subprocess.run(
                list(cmd),
                cwd=cwd,
                env=env or self.env,
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.timeout_s,
            )
        except subprocess.TimeoutExpired as e:
            # Synthesize a result on timeout
            stdout = e.stdout
            if isinstance(stdout, bytes):
                stdout = stdout.decode("utf-8", "ignore")
            stderr = e.stderr
            if isinstance(stderr, bytes):
                stderr = stderr.decode("utf-8", "ignore")
            return EngineRunResult(
                engine=self.name,
                cmd=list(cmd),
                cwd=os.path.abspath(cwd or os.getcwd()),
                returncode=TIMEOUT_EXIT_CODE,
                duration_s=time.time() - started,
                stdout=stdout or "",
                stderr=(stderr or "") + f"\n[TIMEOUT after {self.timeout_s}s]",
                timed_out=True,
            )
        except OSError as e:
            raise EngineExecutionError(
                self.name, f"cannot start {cmd[0]}: {e}", {"cmd": list(cmd)}
            ) from e

        return EngineRunResult(
            engine=self.name,
            cmd=list(cmd),
            cwd=os.path.abspath(cwd or os.getcwd()),
            returncode=proc.returncode,
            duration_s=time.time() - started,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )


class CommandEngine(AnalysisEngine):
    """
    Convenience base class for engines that execute a single command per
    request, with the request's environment overlay applied.
    """

    executable: str = ""

    def is_installed(self) -> bool:
        return shutil.which(self.executable) is not None

    @abstractmethod
    def build_cmd(self, request: EngineRequest) -> List[str]:
        raise NotImplementedError

    def build_env(self, request: EngineRequest) -> Dict[str, str]:
        env = dict(self.env)
        env.update(request.extra_env)
        return env

    def execute(self, request: EngineRequest) -> EngineRunResult:
        cmd = self.build_cmd(request)
        logger.debug("Running %s", " ".join(cmd))
        run = self._run(cmd, env=self.build_env(request))
        logger.debug("%s exited with %d after %.2fs", self.name, run.returncode, run.duration_s)
        return run.model_copy(update={"report_file": str(request.report_file)})
