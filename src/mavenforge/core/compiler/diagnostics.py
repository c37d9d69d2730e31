"""Diagnostics for artifacts the compiler cannot turn into targets.

Possible reasons an artifact has no file:

- its packaging type is not one the resolver was asked to fetch;
- a dependent's POM declares the wrong ``<type>`` for it (e.g. an AAR
  referenced as a JAR).

The messages name the artifact, the packaging types that were requested,
the raw resolver record and, when other entries depend on the artifact,
their coordinates and POM locations so that an operator can find the
declaration that caused it.
"""

from __future__ import annotations

from pathlib import Path

from mavenforge.core.coordinates import PACKAGING_TYPES
from mavenforge.core.dependency import DependencyTree, ResolvedArtifact
from mavenforge.exceptions import MissingArtifactError, UnrecognizedPackagingError

_DESCRIPTOR_EXTENSION = ".pom"
_BINARY_EXTENSIONS: tuple[str, ...] = (".jar", ".aar")


def descriptor_path(file: str, repository_path: Path | None = None) -> str:
    """Rewrite a binary path to the path of its POM descriptor.

    Args:
        file: Repository-relative path of a jar or aar.
        repository_path: Directory of the generated repository; when given
            the result is absolute.

    Returns:
        The descriptor path as a string.
    """
    for extension in _BINARY_EXTENSIONS:
        if file.endswith(extension):
            file = file[: -len(extension)] + _DESCRIPTOR_EXTENSION
            break
    if repository_path is not None:
        return str(repository_path / file)
    return file


def _reverse_dependents_message(
    coord: str, reverse_dependents: list[ResolvedArtifact], repository_path: Path | None
) -> str:
    coords = "\n".join(rdep.coord for rdep in reverse_dependents)
    pom_paths = "\n".join(
        descriptor_path(rdep.file, repository_path)
        for rdep in reverse_dependents
        if rdep.file is not None
    )
    return f"""
It is also possible that the packaging type of {coord} is specified
incorrectly in the POM file of an artifact that depends on it. For example,
{coord} may be an AAR, but the dependent's POM file specified its `<type>`
value to be a JAR.

The artifact(s) depending on {coord} are:

{coords}

and their POM files are located at:

{pom_paths}"""


def missing_artifact_error(
    artifact: ResolvedArtifact,
    tree: DependencyTree,
    repository_path: Path | None = None,
) -> MissingArtifactError:
    """Build the fatal error for an artifact that was not downloaded.

    The reverse-dependent lookup happens here, on the failure path only.
    """
    reverse_dependents = tree.reverse_dependents(artifact.coord)
    rdeps_message = (
        _reverse_dependents_message(artifact.coord, reverse_dependents, repository_path)
        if reverse_dependents
        else ""
    )
    message = f"""
The artifact for {artifact.coord} was not downloaded. Perhaps its packaging type is
not one of: {",".join(PACKAGING_TYPES)}?

Parsed artifact data: {artifact.to_dict()!r}

{rdeps_message}"""
    return MissingArtifactError(
        message,
        coord=artifact.coord,
        reverse_dependents=[rdep.coord for rdep in reverse_dependents],
    )


def dangling_dependency_error(
    coord: str,
    tree: DependencyTree,
    repository_path: Path | None = None,
) -> MissingArtifactError:
    """Build the fatal error for a dependency absent from the tree."""
    reverse_dependents = tree.reverse_dependents(coord)
    message = f"""
The artifact {coord} is a dependency of other artifacts but has no entry in the
resolved dependency tree, so no target can be generated for it.
{_reverse_dependents_message(coord, reverse_dependents, repository_path)}"""
    return MissingArtifactError(
        message,
        coord=coord,
        reverse_dependents=[rdep.coord for rdep in reverse_dependents],
    )


def unrecognized_packaging_error(artifact: ResolvedArtifact) -> UnrecognizedPackagingError:
    """Build the fatal error for a file with an unsupported extension."""
    message = f"""Unable to generate a target for this artifact.

Unsupported packaging type: {artifact.packaging}

Artifact coordinates: {artifact.coord}
Parsed data: {artifact.to_dict()!r}"""
    return UnrecognizedPackagingError(message, coord=artifact.coord)
