"""Graph compiler --- dependency tree to ordered build-target declarations.

A single linear scan over the dependency tree. Each artifact goes through a
fixed decision tree, in priority order:

1. Its target label was already materialized -> skipped (first wins).
2. It is a ``sources`` artifact and sources are fetched -> already indexed
   by the pre-pass for attachment to the primary artifact.
3. It has a file -> ``jvm_import``/``aar_import`` + versioned alias (+ copy
   rule in pinned mode). Unknown extensions are fatal.
4. No file, but allow-listed as POM-only -> ``java_library`` exporting its
   dependencies + versioned alias.
5. No file otherwise -> fatal ``MissingArtifactError``.

After the scan every dependency edge must point at a materialized target;
an edge to a coordinate absent from the tree is fatal too. Self-edges are
always dropped. Mutual cycles between distinct targets are passed through
unchanged.

The compiler never mutates its input and keeps no state between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from mavenforge.core.compiler.declarations import (
    Alias,
    CopyGenrule,
    Declaration,
    IMPORT_RULES,
    JavaLibraryExport,
    JvmImport,
)
from mavenforge.core.compiler.diagnostics import (
    dangling_dependency_error,
    missing_artifact_error,
    unrecognized_packaging_error,
)
from mavenforge.core.compiler.special_artifacts import POM_ONLY_ARTIFACTS
from mavenforge.core.coordinates import (
    escape,
    is_sources_coordinate,
    strip_packaging_classifier_and_version,
    target_label,
    versioned_alias_label,
)
from mavenforge.core.dependency import DependencyTree, ResolvedArtifact

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CompilationResult
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CompilationResult:
    """Output of one compilation pass.

    Attributes:
        declarations: Target declarations in generation order.
        jar_versionless_labels: Target labels of ``jar`` imports, for the
            optional compatibility layer.
    """

    declarations: tuple[Declaration, ...] = field(default_factory=tuple)
    jar_versionless_labels: tuple[str, ...] = field(default_factory=tuple)

    @property
    def labels(self) -> list[str]:
        """Materialized target labels (imports and exports), in order."""
        return [
            decl.name
            for decl in self.declarations
            if isinstance(decl, (JvmImport, JavaLibraryExport))
        ]

    @property
    def edges(self) -> dict[str, tuple[str, ...]]:
        """Target label -> dependency labels."""
        return {
            decl.name: decl.deps
            for decl in self.declarations
            if isinstance(decl, (JvmImport, JavaLibraryExport))
        }

    @property
    def aliases(self) -> dict[str, str]:
        """Versioned alias label -> target label."""
        return {
            decl.name: decl.actual
            for decl in self.declarations
            if isinstance(decl, Alias)
        }

    def render(self) -> str:
        """Starlark text of all declarations, separated by newlines."""
        return "\n".join(decl.render() for decl in self.declarations)


# ---------------------------------------------------------------------------
# GraphCompiler
# ---------------------------------------------------------------------------


def _deduplicate(items: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


class GraphCompiler:
    """Compiles a ``DependencyTree`` into target declarations.

    Args:
        neverlink: Versionless ``group:artifact`` keys whose targets are
            compile-time only.
        fetch_sources: Attach ``sources`` artifacts to their primary target
            instead of treating them as targets of their own.
        pinned: Emit copy rules that pull each file from its ``http_file``
            repository (lockfile mode).
        pom_only_artifacts: Versionless keys allowed to have no file.
            Defaults to the built-in allow-list.
        repository_path: Directory of the generated repository, used to
            print absolute POM paths in diagnostics.
    """

    def __init__(
        self,
        neverlink: frozenset[str] | set[str] = frozenset(),
        fetch_sources: bool = False,
        pinned: bool = False,
        pom_only_artifacts: frozenset[str] | set[str] | None = None,
        repository_path: Path | None = None,
    ) -> None:
        self._neverlink = frozenset(neverlink)
        self._fetch_sources = fetch_sources
        self._pinned = pinned
        self._pom_only = (
            POM_ONLY_ARTIFACTS if pom_only_artifacts is None else frozenset(pom_only_artifacts)
        )
        self._repository_path = repository_path

    def compile(self, tree: DependencyTree) -> CompilationResult:
        """Run one compilation pass.

        Raises:
            MissingArtifactError: An artifact has no file and is not
                POM-only, or a dependency has no entry in the tree.
            UnrecognizedPackagingError: A file is neither a jar nor an aar.
        """
        declarations: list[Declaration] = []
        seen: set[str] = set()
        jar_labels: list[str] = []
        # dependency label -> first coordinate referencing it
        referenced: dict[str, str] = {}

        srcjars: dict[str, str] = {}
        if self._fetch_sources:
            srcjars = self._index_sources(tree, declarations)

        for artifact in tree:
            label = target_label(artifact.coord)
            if label in seen:
                logger.debug("Skipping %s: %s already generated", artifact.coord, label)
                continue
            if self._fetch_sources and is_sources_coordinate(artifact.coord):
                continue

            if artifact.file is not None:
                seen.add(label)
                decl = self._import(artifact, label, srcjars.get(label))
                if decl.packaging == "jar":
                    jar_labels.append(label)
                declarations.append(decl)
                declarations.append(Alias(versioned_alias_label(artifact.coord), label))
                if self._pinned:
                    declarations.append(CopyGenrule(escape(artifact.coord), artifact.file))
            elif strip_packaging_classifier_and_version(artifact.coord) in self._pom_only:
                seen.add(label)
                declarations.append(JavaLibraryExport(
                    name=label,
                    exports=self._dependency_labels(artifact, label),
                    coordinates=artifact.coord,
                ))
                declarations.append(Alias(versioned_alias_label(artifact.coord), label))
            else:
                raise missing_artifact_error(artifact, tree, self._repository_path)

            for dep in artifact.dependencies:
                referenced.setdefault(target_label(dep), dep)

        for dep_label, dep_coord in referenced.items():
            if dep_label not in seen:
                raise dangling_dependency_error(dep_coord, tree, self._repository_path)

        logger.debug("Generated %d declarations", len(declarations))
        return CompilationResult(
            declarations=tuple(declarations),
            jar_versionless_labels=tuple(jar_labels),
        )

    # -- Helpers ------------------------------------------------------------

    def _index_sources(
        self, tree: DependencyTree, declarations: list[Declaration]
    ) -> dict[str, str]:
        """Map target label -> source jar path; first sources entry wins."""
        srcjars: dict[str, str] = {}
        seen_paths: set[str] = set()
        for artifact in tree:
            if not is_sources_coordinate(artifact.coord) or artifact.file is None:
                continue
            if artifact.file in seen_paths:
                continue
            seen_paths.add(artifact.file)
            srcjars.setdefault(target_label(artifact.coord), artifact.file)
            if self._pinned:
                declarations.append(CopyGenrule(escape(artifact.coord), artifact.file))
        return srcjars

    def _dependency_labels(self, artifact: ResolvedArtifact, label: str) -> tuple[str, ...]:
        # The resolver sometimes reports an artifact as depending on itself,
        # and may list both "g:a:aar:1" and "g:a:1".
        return _deduplicate([
            dep_label
            for dep_label in (target_label(dep) for dep in artifact.dependencies)
            if dep_label != label
        ])

    def _import(
        self, artifact: ResolvedArtifact, label: str, srcjar: str | None
    ) -> JvmImport:
        packaging = artifact.packaging
        if packaging not in IMPORT_RULES:
            raise unrecognized_packaging_error(artifact)
        versionless = strip_packaging_classifier_and_version(artifact.coord)
        return JvmImport(
            name=label,
            packaging=packaging,
            artifact_path=artifact.file,
            deps=self._dependency_labels(artifact, label),
            coordinates=artifact.coord,
            srcjar=srcjar if packaging == "jar" else None,
            neverlink=versionless in self._neverlink,
        )


def compile_tree(
    tree: DependencyTree,
    neverlink: frozenset[str] | set[str] = frozenset(),
    fetch_sources: bool = False,
    pinned: bool = False,
    pom_only_artifacts: frozenset[str] | set[str] | None = None,
) -> CompilationResult:
    """Convenience wrapper: ``GraphCompiler(...).compile(tree)``."""
    compiler = GraphCompiler(
        neverlink=neverlink,
        fetch_sources=fetch_sources,
        pinned=pinned,
        pom_only_artifacts=pom_only_artifacts,
    )
    return compiler.compile(tree)
