# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Configuration schema and validation for pmdlint.

This module defines the application configuration structure, default values,
and validation logic. The ``pmd`` section carries the same attribute map that
``Linter.pmd`` accepts; it is validated again, strictly, when a run starts.

Classes
-------
Config : Main configuration class
ProjectConfig : Project and report directories
PmdConfig : Options of one PMD run
EngineConfig : Engine executable and timeout
ResolverConfig : Custom-rule artifact resolution
LoggingConfig : Logging configuration

Examples
--------
>>> config = Config()
>>> config.pmd.minimum_priority
'MEDIUM'
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from pmdlint.core.models import RulePriority
from pmdlint.infra.resolvers.maven import DEFAULT_LOCAL_REPOSITORY, DEFAULT_REMOTE_URL


@dataclass
class ProjectConfig:
    """Configuration for project paths."""

    directory: str = "."
    report_directory: str = "build/linter-reports"

    def validate(self) -> List[str]:
        errors = []

        root_path = Path(self.directory)
        if not root_path.exists():
            errors.append(f"Project directory does not exist: {self.directory}")
        elif not root_path.is_dir():
            errors.append(f"Project directory is not a directory: {self.directory}")

        if not str(self.report_directory).strip():
            errors.append("report_directory must not be empty")

        return errors


@dataclass
class PmdConfig:
    """Options of one PMD run, with the plugin's defaults."""

    rule_sets: List[str] = field(default_factory=list)
    minimum_priority: str = "MEDIUM"
    report_format: str = "xml"
    report_file_name: str = "pmd-report"
    report_suppressed_violations: bool = False
    language_version: str = "17"
    input_path: str = "src/main/java"
    source_classes_path: str = "build/classes/main"
    test_classes_path: str = "build/classes/test"
    cache_path: Optional[str] = "build/pmd.cache"
    fail_on_violations: bool = True
    custom_rule_dependency_specs: List[str] = field(default_factory=list)

    def validate(self) -> List[str]:
        errors = []

        try:
            RulePriority.parse(self.minimum_priority)
        except ValueError as e:
            errors.append(str(e))

        if not self.report_format.strip():
            errors.append("report_format must not be empty")

        if not self.report_file_name.strip():
            errors.append("report_file_name must not be empty")

        return errors

    def to_attributes(self) -> Dict[str, Any]:
        """Attribute map for ``Linter.pmd``."""
        return asdict(self)


@dataclass
class EngineConfig:
    """Configuration for the PMD executable."""

    executable: Optional[str] = None
    timeout_s: Optional[int] = None

    def validate(self) -> List[str]:
        errors = []

        if self.timeout_s is not None and self.timeout_s < 1:
            errors.append(f"timeout_s must be >= 1, got {self.timeout_s}")

        return errors


@dataclass
class ResolverConfig:
    """Configuration for custom-rule artifact resolution."""

    local_repository: str = DEFAULT_LOCAL_REPOSITORY
    remote_url: str = DEFAULT_REMOTE_URL
    timeout_s: int = 30

    def validate(self) -> List[str]:
        errors = []

        if self.remote_url and not self.remote_url.startswith(("http://", "https://", "file://")):
            errors.append(f"remote_url must be an http(s) URL: {self.remote_url}")

        if self.timeout_s < 1:
            errors.append(f"timeout_s must be >= 1, got {self.timeout_s}")

        return errors


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    file: str = "pmdlint.log"
    dir: str = "logs"
    console: bool = True
    file_output: bool = False
    max_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5

    def validate(self) -> List[str]:
        errors = []

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level.upper() not in valid_levels:
            errors.append(f"Invalid log level: {self.level}")

        if self.max_bytes < 1024:
            errors.append(f"max_bytes too small: {self.max_bytes}")

        if self.backup_count < 0:
            errors.append(f"backup_count must be >= 0, got {self.backup_count}")

        return errors


@dataclass
class Config:
    """All configuration sections of one pmdlint invocation."""

    project: ProjectConfig = field(default_factory=ProjectConfig)
    pmd: PmdConfig = field(default_factory=PmdConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> bool:
        """
        Check every section and report all problems at once.

        Raises:
            InvalidSettingError: listing each problem on its own line
        """
        from pmdlint.core.exceptions import InvalidSettingError

        all_errors = []

        all_errors.extend(self.project.validate())
        all_errors.extend(self.pmd.validate())
        all_errors.extend(self.engine.validate())
        all_errors.extend(self.resolver.validate())
        all_errors.extend(self.logging.validate())

        if all_errors:
            error_msg = "\n".join(f"  - {err}" for err in all_errors)
            raise InvalidSettingError(
                "configuration",
                f"Configuration validation failed:\n{error_msg}",
                {"errors": all_errors}
            )

        return True

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """
        Build from nested section mappings; missing sections keep defaults.

        Raises:
            TypeError: If a section contains an unknown key
        """
        return cls(
            project=ProjectConfig(**config_dict.get("project", {})),
            pmd=PmdConfig(**config_dict.get("pmd", {})),
            engine=EngineConfig(**config_dict.get("engine", {})),
            resolver=ResolverConfig(**config_dict.get("resolver", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
        )
