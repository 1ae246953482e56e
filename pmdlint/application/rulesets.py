"""Rule-set resolution.

Turns the declared rule-set references into locations the engine can load and
merges any custom-rule artifacts into a classpath layered on top of the base
one used for PMD's built-in rules.

Classes
-------
RuleClasspath : Base classpath plus custom-rule artifacts
RuleSetBundle : Resolved rule-set locations and their classpath
RuleSetResolver : Produces a RuleSetBundle for one run
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from pmdlint.core.exceptions import InvalidSettingError, MissingRuleSetsError
from pmdlint.core.logging_config import get_logger
from pmdlint.infra.resolvers.base import DependencyResolver

logger = get_logger(__name__)


@dataclass(frozen=True)
class RuleClasspath:
    """Custom-rule artifacts layered over the base classpath.

    Entries are ordered base first, then custom artifacts, and the whole list
    is handed to the engine as ``CLASSPATH``. The PMD launcher puts
    ``CLASSPATH`` ahead of its own ``lib/*``, so classes in these entries can
    shadow the ones PMD ships.
    """

    base: Tuple[str, ...] = ()
    custom: Tuple[Path, ...] = ()

    @classmethod
    def layered_on_environment(
        cls, custom: Iterable[Path], environ: Optional[Mapping[str, str]] = None
    ) -> "RuleClasspath":
        environ = os.environ if environ is None else environ
        base = tuple(entry for entry in environ.get("CLASSPATH", "").split(os.pathsep) if entry)
        return cls(base=base, custom=tuple(custom))

    @property
    def has_custom_rules(self) -> bool:
        return bool(self.custom)

    def entries(self) -> Tuple[str, ...]:
        return self.base + tuple(str(path) for path in self.custom)

    def as_path_list(self) -> str:
        """Classpath string for the engine; empty when there is nothing custom to add."""
        if not self.custom:
            return ""
        return os.pathsep.join(self.entries())


@dataclass(frozen=True)
class RuleSetBundle:
    references: Tuple[str, ...]
    locations: Tuple[str, ...]
    classpath: RuleClasspath = RuleClasspath()


class RuleSetResolver:
    """
    Resolves rule sets against a project directory.

    Parameters
    ----------
    project_dir : str or Path
        Root that relative rule-set paths are joined to.
    dependency_resolver : DependencyResolver, optional
        Collaborator used for custom-rule artifact specs. Required only when
        custom rules are requested.
    environ : Mapping, optional
        Environment supplying the base ``CLASSPATH``. Defaults to ``os.environ``.
    """

    #: PMD's built-in rule-set locations on its own classpath
    CLASSPATH_RESOURCE_PREFIXES = ("category/", "rulesets/")

    def __init__(
        self,
        project_dir: Union[str, Path],
        dependency_resolver: Optional[DependencyResolver] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.project_dir = Path(project_dir)
        self.dependency_resolver = dependency_resolver
        self.environ = environ

    def resolve(
        self,
        rule_sets: Sequence[str],
        custom_rule_specs: Sequence[str] = (),
    ) -> RuleSetBundle:
        references = tuple(rule_sets or ())
        if not references:
            raise MissingRuleSetsError()

        artifacts = self.resolve_custom_rules(custom_rule_specs)
        classpath = RuleClasspath.layered_on_environment(artifacts, self.environ)
        if artifacts:
            logger.info(
                "Including the following custom rules in the PMD classpath: [%s]",
                ", ".join(path.as_uri() for path in artifacts),
            )

        return RuleSetBundle(
            references=references,
            locations=tuple(self.resolve_location(ref) for ref in references),
            classpath=classpath,
        )

    def resolve_location(self, reference: str) -> str:
        """
        Join ``reference`` to the absolute project directory.

        The bare reference is passed through only when it names a classpath
        resource such as ``category/java/bestpractices.xml``: it starts with
        one of ``CLASSPATH_RESOURCE_PREFIXES``, or nothing by that name exists
        in the project or the working directory. PMD tries a relative name
        against its working directory first, so a reference that matches a
        file there keeps the project join.
        """
        candidate = Path(os.path.join(str(self.project_dir.absolute()), reference))
        if candidate.exists():
            return str(candidate)
        if reference.startswith(self.CLASSPATH_RESOURCE_PREFIXES) or not Path(reference).exists():
            logger.debug("Rule set [%s] not found on disk; loading it as a classpath resource", reference)
            return reference
        logger.debug("Rule set [%s] not found in the project; ignoring [%s]", reference, Path(reference).absolute())
        return str(candidate)

    def resolve_custom_rules(self, specs: Sequence[str]) -> Tuple[Path, ...]:
        specs = tuple(specs or ())
        if not specs:
            return ()
        if self.dependency_resolver is None:
            raise InvalidSettingError(
                "custom_rule_dependency_specs",
                "custom rules were requested but no dependency resolver is configured",
            )

        ordered: List[Path] = []
        seen = set()
        for spec in specs:
            for artifact in self.dependency_resolver.resolve(spec):
                path = Path(artifact).absolute()
                if path not in seen:
                    seen.add(path)
                    ordered.append(path)
        return tuple(ordered)
