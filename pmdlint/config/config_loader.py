# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Configuration loader for pmdlint.

Settings are layered; a later layer overrides an earlier one key by key:

1. Defaults from ``config_schema``
2. A YAML or TOML file (``--config``). The settings may sit at the top level
   or under a ``pmdlint`` table, so ``[tool.pmdlint]`` in a pyproject.toml
   works as well as a dedicated ``pmdlint.yaml``.
3. ``PMDLINT_<SECTION>__<OPTION>`` environment variables, including those
   from a ``.env`` file. List options take comma-separated values.
4. Command-line arguments, mapped through ``ARG_MAPPING``

Examples
--------
    PMDLINT_PMD__RULE_SETS=config/pmd/ruleset.xml,config/pmd/extra.xml
    PMDLINT_PMD__FAIL_ON_VIOLATIONS=false
    PMDLINT_ENGINE__EXECUTABLE=/opt/pmd/bin/pmd

>>> config = ConfigLoader().load_config("pmdlint.yaml")  # doctest: +SKIP
>>> config.pmd.rule_sets  # doctest: +SKIP
['src/test/resources/pmd/ruleset.xml']

See Also
--------
config_schema : Section definitions and validation
"""
from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union, get_args, get_origin, get_type_hints

import yaml
from dotenv import load_dotenv

from .config_schema import Config
from pmdlint.core.exceptions import InvalidSettingError


class ConfigLoader:
    """Builds a validated Config from file, environment and arguments.

    Parameters
    ----------
    environ : Mapping, optional
        Environment to read ``PMDLINT_*`` variables from. When omitted,
        ``os.environ`` is used after loading any ``.env`` file.
    """

    ENV_PREFIX = "PMDLINT_"
    FILE_SECTION = "pmdlint"

    # CLI argument -> (section, option)
    ARG_MAPPING = {
        'project_dir': ('project', 'directory'),
        'report_dir': ('project', 'report_directory'),
        'rule_sets': ('pmd', 'rule_sets'),
        'min_priority': ('pmd', 'minimum_priority'),
        'report_format': ('pmd', 'report_format'),
        'report_name': ('pmd', 'report_file_name'),
        'show_suppressed': ('pmd', 'report_suppressed_violations'),
        'language_version': ('pmd', 'language_version'),
        'input_path': ('pmd', 'input_path'),
        'cache_path': ('pmd', 'cache_path'),
        'fail_on_violations': ('pmd', 'fail_on_violations'),
        'custom_rules': ('pmd', 'custom_rule_dependency_specs'),
        'pmd_executable': ('engine', 'executable'),
        'log_level': ('logging', 'level'),
    }

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.config = Config()
        self.environ = environ

    def load_from_file(self, file_path: str) -> Config:
        """
        Replace the current settings with those of a YAML or TOML file.

        Raises:
            InvalidSettingError: missing file, unknown extension, a parse
                error or an unknown option
        """
        path = Path(file_path)
        if not path.is_file():
            raise InvalidSettingError("config_file", f"Configuration file not found: {file_path}")

        settings = self._read_file(path)
        if isinstance(settings, dict) and self.FILE_SECTION in settings:
            settings = settings[self.FILE_SECTION]
        if not isinstance(settings, dict):
            raise InvalidSettingError("config_file", f"Expected a mapping of sections in {file_path}")

        try:
            self.config = Config.from_dict(settings)
        except TypeError as e:
            raise InvalidSettingError("config_file", f"Unknown option in {file_path}: {e}") from e
        return self.config

    def _read_file(self, path: Path) -> Dict[str, Any]:
        suffix = path.suffix.lower()
        if suffix in ('.yaml', '.yml'):
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise InvalidSettingError("config_file", f"Failed to parse YAML configuration: {e}") from e
        elif suffix == '.toml':
            try:
                with open(path, 'rb') as f:
                    loaded = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise InvalidSettingError("config_file", f"Failed to parse TOML configuration: {e}") from e
            # pyproject.toml keeps tool settings under [tool.<name>]
            tool = loaded.get("tool")
            if isinstance(tool, dict) and self.FILE_SECTION in tool:
                loaded = tool
        else:
            raise InvalidSettingError(
                "config_file", f"Unsupported configuration file format: {path.suffix}"
            )
        return loaded or {}

    def load_from_env(self) -> Config:
        """Apply ``PMDLINT_<SECTION>__<OPTION>`` variables on top of the current settings."""
        environ = os.environ if self.environ is None else self.environ

        for key, raw in environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue
            section, sep, option = key[len(self.ENV_PREFIX):].lower().partition('__')
            if sep and option:
                self._set_config_value(section, option, raw)

        return self.config

    def load_from_args(self, args: Mapping[str, Any]) -> Config:
        """Apply command-line values; None and empty lists mean "not given"."""
        for arg_name, value in (args or {}).items():
            if value is None or value == [] or value == ():
                continue
            target = self.ARG_MAPPING.get(arg_name)
            if target:
                self._set_config_value(*target, value)
        return self.config

    def load_config(
        self,
        config_file: Optional[str] = None,
        env: bool = True,
        args: Optional[Mapping[str, Any]] = None,
        dotenv_path: Optional[str] = None,
    ) -> Config:
        """
        Layer defaults, file, environment and arguments, then validate.

        Args:
            config_file: YAML or TOML file (optional)
            env: Whether ``PMDLINT_*`` variables are applied
            args: Command-line values keyed as in ``ARG_MAPPING`` (optional)
            dotenv_path: ``.env`` location; searched for when omitted

        Raises:
            InvalidSettingError: If any layer is unreadable or the result
                does not validate
        """
        self.config = Config()

        if config_file:
            self.load_from_file(config_file)

        if env:
            # an injected environment is used as-is
            if self.environ is None:
                load_dotenv(dotenv_path, override=False)
            self.load_from_env()

        if args:
            self.load_from_args(args)

        self.config.validate()
        return self.config

    def _set_config_value(self, section: str, option: str, value: Any):
        section_obj = getattr(self.config, section, None)
        if section_obj is None or not hasattr(section_obj, option):
            return

        kind = _field_kind(type(section_obj), option)
        if kind is list:
            if isinstance(value, str):
                value = [item.strip() for item in value.split(",") if item.strip()]
            elif isinstance(value, (list, tuple)):
                value = list(value)
            else:
                value = [str(value)]
        elif isinstance(value, str):
            value = self._parse_value(f"{section}.{option}", value, kind)
        elif kind is str:
            # "MEDIUM"-style options stay strings even when given as 3
            value = str(value)
        setattr(section_obj, option, value)

    @staticmethod
    def _parse_value(key: str, raw: str, kind: Any) -> Any:
        """Convert a string for a bool or int option; other options keep it verbatim."""
        if kind is bool:
            lowered = raw.strip().lower()
            if lowered in ('true', 'yes', 'on', '1'):
                return True
            if lowered in ('false', 'no', 'off', '0'):
                return False
            raise InvalidSettingError(key, f"Expected true or false, got [{raw}]")
        if kind is int:
            try:
                return int(raw.strip())
            except ValueError as e:
                raise InvalidSettingError(key, f"Expected an integer, got [{raw}]") from e
        return raw


def _field_kind(section_cls: type, option: str) -> Any:
    """Declared type of a section option, with ``Optional`` and ``List[...]`` unwrapped."""
    hint = get_type_hints(section_cls).get(option)
    if get_origin(hint) is Union:
        hint = next(arg for arg in get_args(hint) if arg is not type(None))
    if get_origin(hint) is list:
        return list
    return hint
