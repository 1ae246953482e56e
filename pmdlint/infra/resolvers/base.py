"""Dependency resolution contract consumed by the rule-set resolver."""
from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class DependencyResolver(Protocol):
    """Turns one artifact spec into an ordered sequence of artifact files."""

    def resolve(self, spec: str) -> Sequence[Path]:
        ...
