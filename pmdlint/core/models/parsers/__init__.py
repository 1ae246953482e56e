"""Engine report parsers.

Modules
-------
pmd : PMD JSON report parser
_shared : Helpers shared by parsers
"""
from __future__ import annotations

from .pmd import load_pmd_json_report, pmd_json_to_report

__all__ = ["load_pmd_json_report", "pmd_json_to_report"]
