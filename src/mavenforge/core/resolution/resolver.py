"""External resolver collaborator.

The resolver computes the transitive closure of the requested artifacts,
downloads them and writes its result as a dependency-tree JSON file. It is
treated as a blocking, all-or-nothing call: either a complete
``DependencyTree`` comes back or the whole pass fails. There is no retry at
this layer.

``CoursierResolver`` drives the Coursier CLI; tests substitute any other
``DependencyResolver`` implementation.
"""

from __future__ import annotations

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from mavenforge.config import DEFAULT_RESOLVER, InstallConfig
from mavenforge.core.coordinates import PACKAGING_TYPES, ArtifactSpec
from mavenforge.core.dependency import DependencyTree
from mavenforge.exceptions import ResolverInvocationError

logger = logging.getLogger(__name__)

DEP_TREE_FILE = "dep-tree.json"
EXCLUSION_FILE = "exclusion-file.txt"
CACHE_DIR = "v1"


# ---------------------------------------------------------------------------
# ResolveRequest: the resolver input contract
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolveRequest:
    """Everything the resolver needs for one live pass.

    Attributes:
        artifacts: Root artifacts.
        repositories: Repository URLs, first match wins.
        excluded_artifacts: ``group:artifact`` pairs excluded globally.
        fail_on_missing_checksum: Reject artifacts without checksums.
        fetch_sources: Also fetch source jars.
        force_versions: Force root artifacts to their requested versions.
        use_shared_cache: Download into the resolver's own cache instead of
            the repository directory.
        command: Executable (plus leading arguments) of the resolver.
    """

    artifacts: tuple[ArtifactSpec, ...] = field(default_factory=tuple)
    repositories: tuple[str, ...] = field(default_factory=tuple)
    excluded_artifacts: tuple[str, ...] = field(default_factory=tuple)
    fail_on_missing_checksum: bool = True
    fetch_sources: bool = False
    force_versions: bool = False
    use_shared_cache: bool = False
    command: tuple[str, ...] = DEFAULT_RESOLVER

    @classmethod
    def from_config(cls, config: InstallConfig) -> ResolveRequest:
        return cls(
            artifacts=config.artifacts,
            repositories=config.repositories,
            excluded_artifacts=config.excluded_artifacts,
            fail_on_missing_checksum=config.fail_on_missing_checksum,
            fetch_sources=config.fetch_sources,
            force_versions=config.version_conflict_policy == "pinned",
            use_shared_cache=config.use_unsafe_shared_cache,
            command=config.resolver,
        )

    @property
    def exclusion_lines(self) -> list[str]:
        lines: list[str] = []
        for spec in self.artifacts:
            lines.extend(spec.exclusion_lines())
        return lines


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------


class DependencyResolver(ABC):
    """Abstract resolver: a request in, a complete dependency tree out."""

    @abstractmethod
    def resolve(self, request: ResolveRequest, workdir: Path) -> DependencyTree:
        """Resolve and fetch ``request`` into ``workdir``.

        Raises:
            ResolverInvocationError: If the resolver fails.
        """


class CoursierResolver(DependencyResolver):
    """Runs ``coursier fetch`` and parses its ``--json-output-file``."""

    def build_command(self, request: ResolveRequest, workdir: Path) -> list[str]:
        """Assemble the resolver command line.

        Writes the local exclusion file into ``workdir`` when any root
        artifact declares exclusions.
        """
        coordinates = [spec.coordinate.to_resolver_coordinate() for spec in request.artifacts]
        cmd = list(request.command)
        cmd.append("fetch")
        cmd.extend(coordinates)
        if request.force_versions:
            for coord in coordinates:
                cmd.extend(["--force-version", coord.split(",classifier=")[0]])
        cmd.extend(["--artifact-type", ",".join(PACKAGING_TYPES + ("src",))])
        cmd.append("--quiet")
        cmd.append("--no-default")
        cmd.extend(["--json-output-file", DEP_TREE_FILE])

        if request.fail_on_missing_checksum:
            cmd.extend(["--checksum", "SHA-1,MD5"])
        else:
            cmd.extend(["--checksum", "SHA-1,MD5,None"])

        exclusion_lines = request.exclusion_lines
        if exclusion_lines:
            (workdir / EXCLUSION_FILE).write_text("\n".join(exclusion_lines), encoding="utf-8")
            cmd.extend(["--local-exclude-file", EXCLUSION_FILE])
        for repository in request.repositories:
            cmd.extend(["--repository", repository])
        for excluded in request.excluded_artifacts:
            cmd.extend(["--exclude", excluded])
        if not request.use_shared_cache:
            cmd.extend(["--cache", CACHE_DIR])
        if request.fetch_sources:
            cmd.append("--sources")
            cmd.append("--default=true")
        return cmd

    def resolve(self, request: ResolveRequest, workdir: Path) -> DependencyTree:
        workdir.mkdir(parents=True, exist_ok=True)
        cmd = self.build_command(request, workdir)
        logger.info(
            "Resolving and fetching the transitive closure of %d artifact(s)..",
            len(request.artifacts),
        )
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, cwd=workdir, capture_output=True, text=True)
        except OSError as exc:
            raise ResolverInvocationError("Unable to run the resolver: ", str(exc)) from exc
        if proc.returncode != 0:
            raise ResolverInvocationError(
                "Error while fetching artifact with coursier: ", proc.stderr
            )

        output = workdir / DEP_TREE_FILE
        try:
            return DependencyTree.from_dict(json.loads(output.read_text(encoding="utf-8")))
        except (OSError, ValueError) as exc:
            raise ResolverInvocationError(
                f"The resolver did not produce a readable {DEP_TREE_FILE}: ", str(exc)
            ) from exc
