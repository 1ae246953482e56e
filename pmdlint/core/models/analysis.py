# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Typed configuration of a single analysis run.

Classes
-------
RulePriority : PMD rule priorities (1 = HIGH ... 5 = LOW)
AnalysisConfig : Immutable description of one run
AnalysisConfigBuilder : Resolves project-relative paths, then freezes
PmdOptions : The attribute map accepted by ``Linter.pmd``

Examples
--------
>>> builder = AnalysisConfigBuilder("test-project")
>>> config = builder.minimum_priority("MEDIUM").build()
>>> config.minimum_priority
<RulePriority.MEDIUM: 3>
"""
from __future__ import annotations

import os
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pmdlint.core.exceptions import InvalidSettingError

Pathish = Union[str, Path]


class RulePriority(IntEnum):
    HIGH = 1
    MEDIUM_HIGH = 2
    MEDIUM = 3
    MEDIUM_LOW = 4
    LOW = 5

    @classmethod
    def parse(cls, value: Any) -> "RulePriority":
        """Accept a label (``"MEDIUM"``, ``"medium-high"``), a number or a member."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            label = value.strip().upper().replace("-", "_").replace(" ", "_")
            if label.isdigit():
                return cls(int(label))
            try:
                return cls[label]
            except KeyError:
                pass
        raise ValueError(
            f"Unknown priority [{value}]. Expected one of "
            f"{', '.join(member.name for member in cls)}"
        )


class AnalysisConfig(BaseModel):
    """Immutable configuration bundle for one analysis run.

    Paths are stored as given by the builder: the input path stays relative to
    the working directory when the project directory is relative, so the
    engine reports file names the same way.
    """

    model_config = ConfigDict(frozen=True)

    input_path: Path
    source_class_paths: Tuple[Path, ...] = ()
    language: str = "java"
    language_version: str = "17"
    minimum_priority: RulePriority = RulePriority.MEDIUM
    report_format: str = "xml"
    report_file_base_name: str = "pmd-report"
    show_suppressed_violations: bool = False
    cache_location: Optional[Path] = None

    @field_validator("minimum_priority", mode="before")
    @classmethod
    def _parse_priority(cls, value: Any) -> RulePriority:
        return RulePriority.parse(value)

    @field_validator("language", "language_version", "report_format", "report_file_base_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @property
    def aux_classpath(self) -> str:
        return os.pathsep.join(str(path) for path in self.source_class_paths)

    def native_report_name(self) -> str:
        return f"{self.report_file_base_name}.{self.report_format}"

    @classmethod
    def create(cls, **values: Any) -> "AnalysisConfig":
        """Construct, converting pydantic validation errors to InvalidSettingError."""
        try:
            return cls(**values)
        except ValidationError as exc:
            raise _as_setting_error(exc) from exc


def _as_setting_error(exc: ValidationError) -> InvalidSettingError:
    first = exc.errors()[0]
    key = ".".join(str(part) for part in first.get("loc", ())) or "configuration"
    return InvalidSettingError(
        key, first.get("msg", str(exc)), {"errors": exc.errors(include_url=False)}
    )


class AnalysisConfigBuilder:
    """Collects settings against a project directory, then freezes them.

    Relative paths are resolved against the project directory: the input path
    with a plain join, auxiliary class paths and the cache location made
    absolute.
    """

    def __init__(self, project_dir: Pathish) -> None:
        self.project_dir = Path(project_dir)
        self._values: Dict[str, Any] = {"input_path": self.project_dir / "src/main/java"}
        self._class_paths: List[Path] = [
            self._absolute("build/classes/main"),
            self._absolute("build/classes/test"),
        ]

    def _absolute(self, path: Pathish) -> Path:
        return (self.project_dir / path).absolute()

    def input_path(self, path: Pathish) -> "AnalysisConfigBuilder":
        self._values["input_path"] = self.project_dir / path
        return self

    def source_class_paths(self, *paths: Pathish) -> "AnalysisConfigBuilder":
        self._class_paths = [self._absolute(path) for path in paths]
        return self

    def language(self, language: str, version: str) -> "AnalysisConfigBuilder":
        self._values["language"] = language
        self._values["language_version"] = version
        return self

    def language_version(self, version: str) -> "AnalysisConfigBuilder":
        self._values["language_version"] = version
        return self

    def minimum_priority(self, priority: Union[str, int, RulePriority]) -> "AnalysisConfigBuilder":
        self._values["minimum_priority"] = priority
        return self

    def report(
        self, report_format: str, base_name: str, show_suppressed: bool = False
    ) -> "AnalysisConfigBuilder":
        self._values["report_format"] = report_format
        self._values["report_file_base_name"] = base_name
        self._values["show_suppressed_violations"] = show_suppressed
        return self

    def cache_location(self, path: Optional[Pathish]) -> "AnalysisConfigBuilder":
        self._values["cache_location"] = self._absolute(path) if path else None
        return self

    def build(self) -> AnalysisConfig:
        return AnalysisConfig.create(
            source_class_paths=tuple(self._class_paths), **self._values
        )


class PmdOptions(BaseModel):
    """Attribute map accepted by ``Linter.pmd``.

    Both the build-plugin camelCase names (``ruleSets``, ``minimumPriority``) and
    snake_case names are accepted. Unknown attributes are rejected.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    report_format: str = Field("xml", alias="reportFormat")
    report_file_name: str = Field("pmd-report", alias="reportFileName")
    report_suppressed_violations: bool = Field(False, alias="reportSuppressedViolations")
    language_version: str = Field("17", alias="languageVersion")
    input_path: str = Field("src/main/java", alias="inputPath")
    source_classes_path: str = Field("build/classes/main", alias="sourceClassesPath")
    test_classes_path: str = Field("build/classes/test", alias="testClassesPath")
    cache_path: Optional[str] = Field("build/pmd.cache", alias="cachePath")
    minimum_priority: Union[str, int] = Field("MEDIUM", alias="minimumPriority")
    rule_sets: Tuple[str, ...] = Field((), alias="ruleSets")
    fail_on_violations: bool = Field(True, alias="failOnViolations")
    custom_rule_dependency_specs: Tuple[str, ...] = Field((), alias="customRuleDependencySpecs")

    @classmethod
    def parse(cls, attributes: Dict[str, Any]) -> "PmdOptions":
        try:
            return cls.model_validate(attributes)
        except ValidationError as exc:
            raise _as_setting_error(exc) from exc

    def to_config(self, project_dir: Pathish) -> AnalysisConfig:
        return (
            AnalysisConfigBuilder(project_dir)
            .input_path(self.input_path)
            .source_class_paths(self.source_classes_path, self.test_classes_path)
            .language_version(self.language_version)
            .minimum_priority(self.minimum_priority)
            .report(self.report_format, self.report_file_name, self.report_suppressed_violations)
            .cache_location(self.cache_path)
            .build()
        )
