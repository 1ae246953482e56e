# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Configuration management for pmdlint.

This package handles application configuration loading from files,
environment variables, command-line arguments and defaults.

Modules
-------
config_loader : Configuration loading utilities
config_schema : Configuration data models

Examples
--------
>>> from pmdlint.config import ConfigLoader
>>> config = ConfigLoader().load_config("pmdlint.yaml")

See Also
--------
pmdlint.core.exceptions : Configuration errors
"""
from __future__ import annotations

from .config_schema import (
    Config,
    EngineConfig,
    LoggingConfig,
    PmdConfig,
    ProjectConfig,
    ResolverConfig,
)
from .config_loader import ConfigLoader

__all__ = [
    'Config',
    'EngineConfig',
    'LoggingConfig',
    'PmdConfig',
    'ProjectConfig',
    'ResolverConfig',
    'ConfigLoader',
]
