"""Tests for the PMD JSON report parser."""

from __future__ import annotations

import json

import pytest

from pmdlint.core.exceptions import ReportParseError
from pmdlint.core.models.parsers import load_pmd_json_report, pmd_json_to_report

from fakes import UNUSED_FIELD_MESSAGE, pmd_payload, violation_row


def test_violations_are_read_per_file():
    payload = pmd_payload(
        files=[
            {"filename": "src/A.java", "violations": [violation_row(line=4), violation_row(line=9)]},
            {"filename": "src/B.java", "violations": [violation_row(rule="EmptyCatchBlock", priority=1)]},
        ]
    )
    report = pmd_json_to_report(payload)

    assert [(v.file_path, v.line) for v in report.violations] == [
        ("src/A.java", 4),
        ("src/A.java", 9),
        ("src/B.java", 29),
    ]
    first = report.violations[0]
    assert first.rule_name == "UnusedPrivateField"
    assert first.message == UNUSED_FIELD_MESSAGE
    assert first.rule_set == "Best Practices"
    assert first.column == 18
    assert report.violations[2].priority == 1
    assert report.engine_version == "7.9.0"


def test_suppressed_violations_keep_type_and_reason():
    payload = pmd_payload(
        suppressed=[
            {
                "filename": "src/A.java",
                "violation": violation_row(line=12),
                "suppressiontype": "annotation",
                "usermsg": "legacy",
            }
        ]
    )
    (suppressed,) = pmd_json_to_report(payload).suppressed_violations

    assert suppressed.violation.file_path == "src/A.java"
    assert suppressed.violation.line == 12
    assert suppressed.suppressor == "@SuppressWarnings"
    assert suppressed.user_message == "legacy"


def test_processing_and_configuration_errors():
    payload = pmd_payload(
        processing=[{"filename": "src/Broken.java", "message": "ParseException", "detail": "trace"}],
        configuration=[{"rule": "LoosePackageCoupling", "ruleset": "design", "message": "No packages"}],
    )
    report = pmd_json_to_report(payload)

    assert report.processing_errors[0].file_path == "src/Broken.java"
    assert report.processing_errors[0].detail == "trace"
    assert report.configuration_errors[0].rule_name == "LoosePackageCoupling"
    assert report.configuration_errors[0].rule_set == "design"
    assert report.has_errors


def test_windows_separators_are_normalized():
    payload = pmd_payload(files=[{"filename": "src\\main\\A.java", "violations": [violation_row()]}])
    assert pmd_json_to_report(payload).violations[0].file_path == "src/main/A.java"


def test_missing_sections_give_empty_report():
    report = pmd_json_to_report({"pmdVersion": "7.0.0"})
    assert report.counts() == {
        "configuration_errors": 0,
        "processing_errors": 0,
        "suppressed_violations": 0,
        "violations": 0,
    }


@pytest.mark.parametrize("payload", [[], "text", {"files": {"not": "a list"}}])
def test_malformed_payload_raises(payload):
    with pytest.raises(ReportParseError):
        pmd_json_to_report(payload)


def test_load_reads_file(tmp_path):
    path = tmp_path / "report.json"
    path.write_text(json.dumps(pmd_payload(files=[{"filename": "A.java", "violations": [violation_row()]}])))
    assert len(load_pmd_json_report(path).violations) == 1


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(ReportParseError, match="not found"):
        load_pmd_json_report(tmp_path / "absent.json")


def test_load_invalid_json_raises(tmp_path):
    path = tmp_path / "report.json"
    path.write_text("{truncated")
    with pytest.raises(ReportParseError, match="not valid JSON"):
        load_pmd_json_report(path)
