"""Shared utilities for engine report parsers.

Functions
---------
safe_json_loads : Best-effort JSON loader that never raises
as_int : Lenient integer coercion
display_path : Normalize a reported file name for display

See Also
--------
pmdlint.core.models.parsers.pmd : PMD JSON report parser
"""
from __future__ import annotations

import json
from pathlib import PureWindowsPath
from typing import Any, Optional


def safe_json_loads(payload: str | bytes | None, default: Any = None) -> Any:
    """Best-effort JSON loader that never raises."""
    if payload is None:
        return default
    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8", "ignore")
        return json.loads(payload)
    except ValueError:
        return default


def as_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def display_path(value: Optional[str]) -> str:
    """
    Return the file name as the engine reported it, with Windows separators
    turned into forward slashes so reports read the same on every platform.
    """
    if not value:
        return ""
    if "\\" in value:
        return PureWindowsPath(value).as_posix()
    return value
