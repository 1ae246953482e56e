"""pmdlint CLI - Command Line Interface.

Synopsis
--------
check
    Run PMD against a project and write html/txt/native reports
engine-version
    Print the version of the PMD engine in use

Options
-------
check command options:
    --rule-set, -r
        Rule set to apply, relative to the project directory (repeatable)
    --config, -c
        YAML or TOML configuration file
    --report-dir
        Report directory (pruned on every run), relative to the project
    --min-priority, -p
        HIGH, MEDIUM_HIGH, MEDIUM, MEDIUM_LOW or LOW
    --show-suppressed
        Include suppressed violations in the rendered reports
    --no-fail-on-violations
        Write reports without failing the build on violations

Examples
--------
Run with a single rule set:
    $ python -m pmdlint check test-project -r src/test/resources/pmd/ruleset.xml

Report only:
    $ python -m pmdlint check . -r ruleset.xml --no-fail-on-violations

Exit Codes
----------
0 success, 1 build failure (missing rule sets or failed analysis),
2 invalid configuration or a run that could not start.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from pmdlint.application import Linter, LinterSettings
from pmdlint.config import Config, ConfigLoader
from pmdlint.core.exceptions import BuildFailureError, LinterError
from pmdlint.core.logging_config import setup_logging
from pmdlint.infra.engine import PmdTool
from pmdlint.infra.resolvers import MavenRepositoryResolver

app = typer.Typer(
    help="pmdlint - PMD analysis orchestration",
    add_completion=False,
)


def _load(config_file: Optional[str], args: dict) -> Config:
    try:
        return ConfigLoader().load_config(config_file=config_file, args=args)
    except LinterError as exc:
        typer.secho(exc.message, err=True, fg=typer.colors.RED)
        raise typer.Exit(code=2) from exc


def build_linter(config: Config) -> Linter:
    project_dir = Path(config.project.directory)
    engine = PmdTool(executable=config.engine.executable, timeout_s=config.engine.timeout_s)
    resolver = MavenRepositoryResolver(
        local_repository=config.resolver.local_repository,
        remote_url=config.resolver.remote_url,
        timeout_s=config.resolver.timeout_s,
    )
    settings = LinterSettings(report_directory=project_dir / config.project.report_directory)
    return Linter(project_dir, settings=settings, engine=engine, resolver=resolver)


@app.command("check")
def check(
    project_dir: Optional[str] = typer.Argument(None, help="Project root directory"),
    rule_sets: Optional[List[str]] = typer.Option(
        None, "--rule-set", "-r", help="Rule set relative to the project directory"
    ),
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help="YAML/TOML config file"),
    report_dir: Optional[str] = typer.Option(None, "--report-dir", help="Report directory"),
    report_format: Optional[str] = typer.Option(None, "--report-format", "-f", help="Native PMD report format"),
    report_name: Optional[str] = typer.Option(None, "--report-name", help="Report file base name"),
    show_suppressed: bool = typer.Option(
        False, "--show-suppressed", help="Render suppressed violations"
    ),
    min_priority: Optional[str] = typer.Option(None, "--min-priority", "-p", help="Minimum rule priority"),
    language_version: Optional[str] = typer.Option(None, "--language-version", help="Java version"),
    input_path: Optional[str] = typer.Option(None, "--input-path", help="Sources, relative to the project"),
    cache_path: Optional[str] = typer.Option(None, "--cache-path", help="Analysis cache file"),
    custom_rules: Optional[List[str]] = typer.Option(
        None, "--custom-rules", help="Custom rule artifact spec, e.g. org.example:rules:1.0.0"
    ),
    no_fail_on_violations: bool = typer.Option(
        False, "--no-fail-on-violations", help="Write reports but do not fail the build on violations"
    ),
    pmd_executable: Optional[str] = typer.Option(None, "--pmd", help="Path to the pmd launcher"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    args = {
        "project_dir": project_dir,
        "rule_sets": rule_sets,
        "report_dir": report_dir,
        "report_format": report_format,
        "report_name": report_name,
        "show_suppressed": True if show_suppressed else None,
        "min_priority": min_priority,
        "language_version": language_version,
        "input_path": input_path,
        "cache_path": cache_path,
        "custom_rules": custom_rules,
        "fail_on_violations": False if no_fail_on_violations else None,
        "pmd_executable": pmd_executable,
        "log_level": log_level,
    }
    config = _load(config_file, args)
    setup_logging(
        log_level=config.logging.level,
        log_file=config.logging.file,
        log_dir=config.logging.dir,
        console_output=config.logging.console,
        file_output=config.logging.file_output,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
    )

    linter = build_linter(config)
    try:
        linter.pmd(**config.pmd.to_attributes())
    except BuildFailureError as exc:
        typer.secho(exc.message, err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc
    except LinterError as exc:
        typer.secho(exc.message, err=True, fg=typer.colors.RED)
        raise typer.Exit(code=2) from exc

    typer.secho("Done.", fg=typer.colors.GREEN)


@app.command("engine-version")
def engine_version(
    pmd_executable: Optional[str] = typer.Option(None, "--pmd", help="Path to the pmd launcher"),
) -> None:
    tool = PmdTool(executable=pmd_executable)
    if not tool.is_installed():
        typer.secho(
            f"PMD launcher not found: {tool.executable}. Set PMD_HOME or put pmd on PATH.",
            err=True, fg=typer.colors.RED,
        )
        raise typer.Exit(code=2)
    try:
        version = tool.version()
    except LinterError as exc:
        typer.secho(exc.message, err=True, fg=typer.colors.RED)
        raise typer.Exit(code=2) from exc
    typer.echo(version)


__all__ = ["app", "build_linter"]
