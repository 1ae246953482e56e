"""Tests for the build-output logging setup."""

from __future__ import annotations

import io
import logging

from pmdlint.core.logging_config import get_logger, setup_logging


def test_info_is_printed_bare_and_warnings_are_prefixed():
    stream = io.StringIO()
    setup_logging(stream=stream)
    logger = get_logger("pmdlint.application.orchestrator")

    logger.info("[%d] Violations", 1)
    logger.warning("Rule set not found")
    logger.debug("hidden at INFO")

    assert stream.getvalue() == "[1] Violations\nWARNING: Rule set not found\n"


def test_debug_level_shows_prefixed_debug_records():
    stream = io.StringIO()
    setup_logging(log_level="debug", stream=stream)
    get_logger("pmdlint.infra.engine.base").debug("Running pmd check")
    assert stream.getvalue() == "DEBUG: Running pmd check\n"


def test_file_output_records_debug_with_console_at_info(tmp_path):
    stream = io.StringIO()
    logger = setup_logging(
        log_dir=str(tmp_path / "logs"), file_output=True, stream=stream, log_file="run.log"
    )
    get_logger("pmdlint.x").debug("engine stderr")
    get_logger("pmdlint.x").info("summary")
    for handler in logger.handlers:
        handler.flush()

    content = (tmp_path / "logs" / "run.log").read_text(encoding="utf-8")
    assert "DEBUG - " in content and "engine stderr" in content
    assert "summary" in content
    assert stream.getvalue() == "summary\n"


def test_setup_replaces_previous_handlers():
    setup_logging(stream=io.StringIO())
    logger = setup_logging(stream=io.StringIO())
    assert len(logger.handlers) == 1
    assert logger.propagate is False
    assert logging.getLogger("pmdlint") is logger
