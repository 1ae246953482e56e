"""Analysis engine wrappers.

Supported Engines
-----------------
- PMD : Java (and other JVM language) source analyzer, driven via ``pmd check``

Examples
--------
>>> from pmdlint.infra.engine import PmdTool
>>> tool = PmdTool()
>>> tool.version()  # doctest: +SKIP
'7.9.0'

See Also
--------
pmdlint.application.runner : Uses an engine to produce a Report
"""
from __future__ import annotations

from .base import AnalysisEngine, CommandEngine, EngineRequest, EngineRunResult
from .pmd import PmdTool

__all__ = [
    "AnalysisEngine",
    "CommandEngine",
    "EngineRequest",
    "EngineRunResult",
    "PmdTool",
]
