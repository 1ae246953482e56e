"""Shared fixtures: a throwaway Java project and logger isolation."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_pmdlint_logger():
    """The CLI configures the pmdlint logger; keep it from leaking between tests."""
    yield
    logger = logging.getLogger("pmdlint")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def project(tmp_path, monkeypatch) -> Path:
    """A relative ``test-project`` directory (cwd is tmp_path) with one Java file."""
    monkeypatch.chdir(tmp_path)
    root = Path("test-project")
    for relative in (
        "src/main/java/org/example/test/MyClass.java",
        "src/test/resources/pmd/ruleset.xml",
    ):
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text((FIXTURES / "test-project" / relative).read_text())
    return root


@pytest.fixture()
def report_dir(project) -> Path:
    return project / "build/linter-reports"
