"""File system helpers for report output."""
from __future__ import annotations

import shutil
from pathlib import Path
from typing import Union

from pmdlint.core.logging_config import get_logger

logger = get_logger(__name__)


def prune(path: Union[str, Path]) -> None:
    """Recursively delete ``path``. A path that does not exist is left alone."""
    target = Path(path)
    if target.is_symlink() or target.is_file():
        target.unlink()
    elif target.is_dir():
        shutil.rmtree(target)
    else:
        return
    logger.debug("Pruned %s", target)


def write_text(path: Union[str, Path], content: str) -> Path:
    """Write UTF-8 text without newline translation."""
    target = Path(path)
    target.write_bytes(content.encode("utf-8"))
    return target
