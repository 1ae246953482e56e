"""Parser for PMD's JSON report format.

PMD 7 writes one JSON document per run::

    {
      "pmdVersion": "7.x",
      "files": [{"filename": ..., "violations": [{"beginline": ..., "rule": ...}]}],
      "suppressedViolations": [{"filename": ..., "violation": {...}, "suppressiontype": "nopmd"}],
      "processingErrors": [{"filename": ..., "message": ..., "detail": ...}],
      "configurationErrors": [{"rule": ..., "ruleset": ..., "message": ...}]
    }

Functions
---------
pmd_json_to_report : Convert a decoded payload into a Report
load_pmd_json_report : Read and convert a report file

Examples
--------
>>> report = pmd_json_to_report({"files": []})
>>> report.violations
()
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Union

from pmdlint.core.exceptions import ReportParseError

from ..report import (
    ConfigurationError,
    ProcessingError,
    Report,
    SuppressedViolation,
    Violation,
)
from ._shared import as_int, display_path, safe_json_loads

PARSER_NAME = "pmd-json"

# PMD's lowest priority; used when a violation carries no priority at all
_DEFAULT_PRIORITY = 5


def _violation(file_name: str, row: Mapping[str, Any]) -> Violation:
    return Violation(
        file_path=display_path(file_name),
        line=as_int(row.get("beginline")) or 0,
        end_line=as_int(row.get("endline")),
        column=as_int(row.get("begincolumn")),
        rule_name=str(row.get("rule") or ""),
        rule_set=row.get("ruleset"),
        message=str(row.get("description") or "").strip(),
        priority=as_int(row.get("priority")) or _DEFAULT_PRIORITY,
        external_info_url=row.get("externalInfoUrl"),
    )


def _rows(payload: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    rows = payload.get(key) or []
    if not isinstance(rows, list):
        raise ReportParseError(PARSER_NAME, f"'{key}' is not a list")
    return [row for row in rows if isinstance(row, Mapping)]


def pmd_json_to_report(payload: Any) -> Report:
    if not isinstance(payload, Mapping):
        raise ReportParseError(PARSER_NAME, "report is not a JSON object")

    violations: List[Violation] = []
    for file_entry in _rows(payload, "files"):
        file_name = str(file_entry.get("filename") or "")
        for row in _rows(file_entry, "violations"):
            violations.append(_violation(file_name, row))

    suppressed = [
        SuppressedViolation(
            violation=_violation(str(row.get("filename") or ""), row.get("violation") or {}),
            suppression_type=str(row.get("suppressiontype") or ""),
            user_message=str(row.get("usermsg") or ""),
        )
        for row in _rows(payload, "suppressedViolations")
    ]

    processing_errors = [
        ProcessingError(
            file_path=display_path(row.get("filename")),
            message=str(row.get("message") or ""),
            detail=row.get("detail"),
        )
        for row in _rows(payload, "processingErrors")
    ]

    configuration_errors = [
        ConfigurationError(
            rule_name=str(row.get("rule") or ""),
            rule_set=row.get("ruleset"),
            message=str(row.get("message") or ""),
        )
        for row in _rows(payload, "configurationErrors")
    ]

    return Report(
        configuration_errors=tuple(configuration_errors),
        processing_errors=tuple(processing_errors),
        violations=tuple(violations),
        suppressed_violations=tuple(suppressed),
        engine_version=payload.get("pmdVersion"),
    )


def load_pmd_json_report(path: Union[str, Path]) -> Report:
    report_path = Path(path)
    if not report_path.is_file():
        raise ReportParseError(PARSER_NAME, f"report file not found: {report_path}")
    payload = safe_json_loads(report_path.read_bytes())
    if payload is None:
        raise ReportParseError(PARSER_NAME, f"report file is not valid JSON: {report_path}")
    return pmd_json_to_report(payload)


__all__ = ["pmd_json_to_report", "load_pmd_json_report"]
