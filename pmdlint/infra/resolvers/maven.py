"""Maven repository resolver for custom-rule artifacts.

Specs are resolved non-transitively: each spec names exactly one artifact
file. The local repository is consulted first; a missing artifact is
downloaded from the remote repository into the local one.

Accepted spec forms
-------------------
``group:artifact:version``
``group:artifact:version:type``
``group:project:name:version:type``

Examples
--------
>>> ArtifactSpec.parse("org.example:custom-rules:1.2.0").relative_path().as_posix()
'org/example/custom-rules/1.2.0/custom-rules-1.2.0.jar'
"""
from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import requests

from pmdlint.core.exceptions import DependencyResolutionError
from pmdlint.core.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_LOCAL_REPOSITORY = "~/.m2/repository"
DEFAULT_REMOTE_URL = "https://repo1.maven.org/maven2"


@dataclass(frozen=True)
class ArtifactSpec:
    group: str
    project: str
    name: str
    version: str
    type: str = "jar"

    @classmethod
    def parse(cls, spec: str) -> "ArtifactSpec":
        parts = [part.strip() for part in spec.strip().split(":")]
        if any(not part for part in parts):
            raise DependencyResolutionError(spec, "empty segment in artifact spec")
        if len(parts) == 3:
            group, project, version = parts
            return cls(group, project, project, version)
        if len(parts) == 4:
            group, project, version, type_ = parts
            return cls(group, project, project, version, type_)
        if len(parts) == 5:
            group, project, name, version, type_ = parts
            return cls(group, project, name, version, type_)
        raise DependencyResolutionError(
            spec, "expected group:artifact:version[:type] or group:project:name:version:type"
        )

    @property
    def file_name(self) -> str:
        return f"{self.name}-{self.version}.{self.type}"

    def relative_path(self) -> Path:
        return Path(*self.group.split("."), self.project, self.version, self.file_name)


class MavenRepositoryResolver:
    """
    Resolves artifact specs against a Maven-layout repository.

    Parameters
    ----------
    local_repository : str or Path, optional
        Local repository root. Default is ``~/.m2/repository``.
    remote_url : str, optional
        Remote repository base URL. An empty value disables downloads.
    session : requests.Session, optional
        HTTP session to use. A new one is created when omitted.
    timeout_s : int, optional
        Per-request timeout in seconds. Default is 30.
    """

    def __init__(
        self,
        local_repository: Union[str, Path, None] = None,
        remote_url: Optional[str] = DEFAULT_REMOTE_URL,
        session: Optional[requests.Session] = None,
        timeout_s: int = 30,
    ) -> None:
        self.local_repository = Path(
            local_repository or DEFAULT_LOCAL_REPOSITORY
        ).expanduser()
        self.remote_url = (remote_url or "").rstrip("/")
        self.session = session or requests.Session()
        self.timeout_s = timeout_s

    def resolve(self, spec: str) -> List[Path]:
        artifact = ArtifactSpec.parse(spec)
        local = self.local_repository / artifact.relative_path()
        if local.is_file():
            logger.debug("Found %s in local repository at %s", spec, local)
            return [local]
        if not self.remote_url:
            raise DependencyResolutionError(
                spec, f"not found in local repository [{self.local_repository}]"
            )
        self._download(spec, artifact, local)
        return [local]

    def _download(self, spec: str, artifact: ArtifactSpec, target: Path) -> None:
        url = f"{self.remote_url}/{artifact.relative_path().as_posix()}"
        logger.info("Downloading [%s] from [%s]", spec, url)
        try:
            response = self.session.get(url, timeout=self.timeout_s)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DependencyResolutionError(spec, str(exc), {"url": url}) from exc

        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, suffix=".part")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(response.content)
            os.replace(tmp_name, target)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise DependencyResolutionError(spec, f"cannot write {target}: {exc}") from exc
