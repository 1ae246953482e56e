"""Artifact resolvers for custom-rule packages.

Modules
-------
base : The DependencyResolver protocol
maven : Maven repository layout resolver (local repository + remote download)
"""
from __future__ import annotations

from .base import DependencyResolver
from .maven import ArtifactSpec, MavenRepositoryResolver

__all__ = ["ArtifactSpec", "DependencyResolver", "MavenRepositoryResolver"]
