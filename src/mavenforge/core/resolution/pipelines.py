"""Resolution mode controller --- live and pinned pipelines.

Two mutually exclusive ways to obtain a dependency tree, sharing the graph
compiler as their tail stage:

- **live**: run the resolver, post-process its output (url, sha256) and
  produce a lockfile for the unprefixed repository name;
- **pinned**: load a lockfile and skip the resolver entirely, emitting one
  ``http_file`` per artifact plus copy rules into the repository.

Because both feed an identically shaped ``DependencyTree`` into the same
``GraphCompiler``, a pinned repository generated from a lockfile has the same
labels, edges and aliases as the live repository that produced it.

Usage::

    for name, mode in plan_repositories(config):
        output = make_pipeline(config, name, mode, workdir / name).run()
        write_repository(output, workdir / name)
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from mavenforge.config import InstallConfig
from mavenforge.core.compiler import (
    COMPAT_REPOSITORY_BZL,
    JVM_IMPORT_BZL,
    CompilationResult,
    GraphCompiler,
    http_files_for,
    render_build_file,
    render_compat_repositories,
    render_pinned_defs,
    rule_template,
)
from mavenforge.core.dependency import DependencyTree
from mavenforge.core.lockfile import DEFAULT_LOCKFILE_NAME, Lockfile, pin_name, unpinned_name
from mavenforge.core.resolution.postprocess import postprocess_tree
from mavenforge.core.resolution.resolver import (
    CoursierResolver,
    DependencyResolver,
    ResolveRequest,
)
from mavenforge.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

BUILD_FILE = "BUILD"
DEFS_BZL = "defs.bzl"
COMPAT_BZL = "compat.bzl"


class ResolutionMode(enum.Enum):
    """How a repository obtains its dependency tree."""

    LIVE = "live"
    PINNED = "pinned"


# ---------------------------------------------------------------------------
# RepositoryOutput
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RepositoryOutput:
    """Everything generated for one named repository.

    Attributes:
        name: Repository name.
        mode: Pipeline that produced it.
        dependency_tree: The tree fed to the compiler.
        result: Compiler output.
        build_file: Text of ``BUILD``.
        defs_bzl: Text of ``defs.bzl`` (pinned only).
        compat_bzl: Text of ``compat.bzl`` when compat repositories are
            requested.
        lockfile: Lockfile to persist (live only).
    """

    name: str
    mode: ResolutionMode
    dependency_tree: DependencyTree
    result: CompilationResult
    build_file: str
    defs_bzl: str | None = None
    compat_bzl: str | None = None
    lockfile: Lockfile | None = None


# ---------------------------------------------------------------------------
# Pipelines
# ---------------------------------------------------------------------------


class _Pipeline(ABC):
    """Shared tail: compile the tree and render the repository files."""

    mode: ResolutionMode

    def __init__(self, config: InstallConfig, name: str, repository_path: Path) -> None:
        self._config = config
        self._name = name
        self._repository_path = repository_path

    @property
    def name(self) -> str:
        return self._name

    @abstractmethod
    def load_tree(self) -> DependencyTree:
        """Obtain the dependency tree for this repository."""

    def run(self) -> RepositoryOutput:
        tree = self.load_tree()
        logger.info("Generating BUILD targets for @%s (%d artifacts)..", self._name, len(tree))
        compiler = GraphCompiler(
            neverlink=self._config.neverlink,
            fetch_sources=self._config.fetch_sources,
            pinned=self.mode is ResolutionMode.PINNED,
            pom_only_artifacts=self._config.all_pom_only_artifacts,
            repository_path=self._repository_path,
        )
        result = compiler.compile(tree)
        compat_bzl = None
        if self._config.generate_compat_repositories:
            compat_bzl = render_compat_repositories(self._name, result.jar_versionless_labels)
        return self._output(tree, result, render_build_file(self._name, result), compat_bzl)

    @abstractmethod
    def _output(
        self,
        tree: DependencyTree,
        result: CompilationResult,
        build_file: str,
        compat_bzl: str | None,
    ) -> RepositoryOutput:
        """Assemble the mode-specific output."""


class LivePipeline(_Pipeline):
    """Resolve with the external resolver and produce a lockfile."""

    mode = ResolutionMode.LIVE

    def __init__(
        self,
        config: InstallConfig,
        name: str,
        repository_path: Path,
        resolver: DependencyResolver | None = None,
    ) -> None:
        super().__init__(config, name, repository_path)
        self._resolver = resolver if resolver is not None else CoursierResolver()

    def load_tree(self) -> DependencyTree:
        request = ResolveRequest.from_config(self._config)
        tree = self._resolver.resolve(request, self._repository_path)
        return postprocess_tree(
            tree, self._repository_path, use_shared_cache=request.use_shared_cache
        )

    def _output(
        self,
        tree: DependencyTree,
        result: CompilationResult,
        build_file: str,
        compat_bzl: str | None,
    ) -> RepositoryOutput:
        return RepositoryOutput(
            name=self._name,
            mode=self.mode,
            dependency_tree=tree,
            result=result,
            build_file=build_file,
            compat_bzl=compat_bzl,
            lockfile=Lockfile.from_resolution(tree, self._name),
        )


class PinnedPipeline(_Pipeline):
    """Regenerate a repository from its lockfile without the resolver.

    Raises:
        ConfigurationError: At construction, if no lockfile is configured.
    """

    mode = ResolutionMode.PINNED

    def __init__(self, config: InstallConfig, name: str, repository_path: Path) -> None:
        if config.lockfile is None:
            raise ConfigurationError(
                f"Please specify the path of the lockfile for @{name} "
                f"(e.g. `lockfile: {DEFAULT_LOCKFILE_NAME}`)."
            )
        super().__init__(config, name, repository_path)
        self._lockfile_path = config.lockfile

    def load_tree(self) -> DependencyTree:
        try:
            lockfile = Lockfile.read(self._lockfile_path, repository_name=pin_name(self._name))
        except FileNotFoundError as exc:
            raise ConfigurationError(
                f"Lockfile {self._lockfile_path} for @{self._name} does not exist. "
                "Run `mavenforge pin <config>` to create it."
            ) from exc
        for warning in lockfile.validate():
            logger.warning("%s: %s", self._lockfile_path, warning)
        return lockfile.dependency_tree

    def _output(
        self,
        tree: DependencyTree,
        result: CompilationResult,
        build_file: str,
        compat_bzl: str | None,
    ) -> RepositoryOutput:
        return RepositoryOutput(
            name=self._name,
            mode=self.mode,
            dependency_tree=tree,
            result=result,
            build_file=build_file,
            defs_bzl=render_pinned_defs(http_files_for(tree)),
            compat_bzl=compat_bzl,
        )


# ---------------------------------------------------------------------------
# Planning and orchestration
# ---------------------------------------------------------------------------


def plan_repositories(config: InstallConfig) -> list[tuple[str, ResolutionMode]]:
    """Repositories declared by one ``maven_install``.

    With a lockfile, the live repository is renamed ``unpinned_<name>`` and
    the pinned repository owns ``<name>``.
    """
    if config.lockfile is None:
        return [(config.name, ResolutionMode.LIVE)]
    return [
        (unpinned_name(config.name), ResolutionMode.LIVE),
        (config.name, ResolutionMode.PINNED),
    ]


def make_pipeline(
    config: InstallConfig,
    name: str,
    mode: ResolutionMode,
    repository_path: Path,
    resolver: DependencyResolver | None = None,
) -> _Pipeline:
    if mode is ResolutionMode.PINNED:
        return PinnedPipeline(config, name, repository_path)
    return LivePipeline(config, name, repository_path, resolver=resolver)


def write_repository(output: RepositoryOutput, directory: Path) -> list[Path]:
    """Write a generated repository; existing files are overwritten.

    Returns:
        Paths of the files written.
    """
    directory.mkdir(parents=True, exist_ok=True)
    files: dict[str, str] = {
        BUILD_FILE: output.build_file,
        JVM_IMPORT_BZL: rule_template(JVM_IMPORT_BZL),
    }
    if output.defs_bzl is not None:
        files[DEFS_BZL] = output.defs_bzl
    if output.compat_bzl is not None:
        files[COMPAT_BZL] = output.compat_bzl
        files[COMPAT_REPOSITORY_BZL] = rule_template(COMPAT_REPOSITORY_BZL)

    written: list[Path] = []
    for filename, content in files.items():
        path = directory / filename
        path.write_text(content, encoding="utf-8")
        written.append(path)
    logger.info("Wrote @%s to %s", output.name, directory)
    return written


def install(
    config: InstallConfig,
    output_dir: Path,
    include_unpinned: bool = False,
    resolver: DependencyResolver | None = None,
) -> list[RepositoryOutput]:
    """Generate the repositories of a configuration under ``output_dir``.

    Only the repository owning ``config.name`` is generated unless
    ``include_unpinned`` is set; with a lockfile that one is pinned and the
    resolver is never started.
    """
    planned = plan_repositories(config)
    if not include_unpinned:
        planned = [(name, mode) for name, mode in planned if name == config.name]

    outputs: list[RepositoryOutput] = []
    for name, mode in planned:
        repository_path = output_dir / name
        output = make_pipeline(config, name, mode, repository_path, resolver=resolver).run()
        write_repository(output, repository_path)
        outputs.append(output)
    return outputs


def pin(
    config: InstallConfig,
    output_dir: Path,
    lockfile_path: Path | None = None,
    resolver: DependencyResolver | None = None,
) -> tuple[RepositoryOutput, Path]:
    """Run the live pipeline and persist its lockfile.

    Args:
        config: The configuration to resolve.
        output_dir: Parent directory of the live repository.
        lockfile_path: Destination; defaults to ``config.lockfile`` or
            ``maven_install.json`` in the current directory.
        resolver: Resolver override.

    Returns:
        The live repository output and the lockfile path written.
    """
    name, mode = plan_repositories(config)[0]
    repository_path = output_dir / name
    output = make_pipeline(config, name, mode, repository_path, resolver=resolver).run()
    write_repository(output, repository_path)

    target = lockfile_path or config.lockfile or Path(DEFAULT_LOCKFILE_NAME)
    output.lockfile.write(target)
    logger.info("Pinned @%s to %s", output.lockfile.repository_name, target)
    return output, target
