"""Coordinate data models --- ArtifactCoordinate and ArtifactSpec.

Pure data holders (frozen dataclasses) describing the artifacts a user asks
for. The resolver's own output coordinates are kept as plain strings on
``ResolvedArtifact`` and only ever canonicalized, never re-parsed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mavenforge import DEFAULT_REPOSITORY_NAME
from mavenforge.core.coordinates.canonical import escape

DEFAULT_PACKAGING = "jar"


# ---------------------------------------------------------------------------
# ArtifactCoordinate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ArtifactCoordinate:
    """A structured Maven coordinate.

    Attributes:
        group: Maven groupId (e.g., "org.hamcrest").
        artifact: Maven artifactId (e.g., "hamcrest-core").
        version: Concrete version or version range.
        packaging: Packaging type; "jar" unless stated otherwise.
        classifier: Optional classifier (e.g., "sources", "natives").
    """

    group: str
    artifact: str
    version: str
    packaging: str = DEFAULT_PACKAGING
    classifier: str | None = None

    @classmethod
    def from_string(cls, coord: str) -> ArtifactCoordinate:
        """Parse ``group:artifact[:packaging[:classifier]]:version``.

        Args:
            coord: Colon-separated coordinate with 3 to 5 segments.

        Returns:
            The parsed coordinate.

        Raises:
            ValueError: If the segment count is not 3, 4 or 5, or a segment
                is empty.
        """
        parts = coord.strip().split(":")
        if len(parts) not in (3, 4, 5) or not all(parts):
            raise ValueError(
                f"Invalid artifact coordinate {coord!r}: expected "
                "group:artifact[:packaging[:classifier]]:version"
            )
        if len(parts) == 3:
            group, artifact, version = parts
            return cls(group=group, artifact=artifact, version=version)
        if len(parts) == 4:
            group, artifact, packaging, version = parts
            return cls(group, artifact, version, packaging=packaging)
        group, artifact, packaging, classifier, version = parts
        return cls(group, artifact, version, packaging=packaging, classifier=classifier)

    @property
    def versionless_id(self) -> str:
        """The ``group:artifact`` key used for neverlink and POM-only lookups."""
        return f"{self.group}:{self.artifact}"

    def to_string(self) -> str:
        """Serialize back to ``group:artifact[:packaging[:classifier]]:version``."""
        parts = [self.group, self.artifact]
        if self.classifier:
            parts.extend([self.packaging, self.classifier])
        elif self.packaging != DEFAULT_PACKAGING:
            parts.append(self.packaging)
        parts.append(self.version)
        return ":".join(parts)

    def to_resolver_coordinate(self) -> str:
        """Coordinate as passed on the resolver command line."""
        coord = f"{self.group}:{self.artifact}:{self.version}"
        if self.classifier:
            coord += f",classifier={self.classifier}"
        return coord

    def __str__(self) -> str:
        return self.to_string()


# ---------------------------------------------------------------------------
# ArtifactSpec: a root artifact requested by the user
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ArtifactSpec:
    """A root artifact requested in a ``maven_install`` configuration.

    Attributes:
        coordinate: The requested coordinate.
        neverlink: Make the generated target compile-time only.
        exclusions: ``group:artifact`` pairs excluded from this artifact's
            transitive closure only.
    """

    coordinate: ArtifactCoordinate
    neverlink: bool = False
    exclusions: tuple[str, ...] = field(default_factory=tuple)

    @property
    def versionless_id(self) -> str:
        return self.coordinate.versionless_id

    def exclusion_lines(self) -> list[str]:
        """Lines for the resolver's local exclusion file (``a:b--c:d``)."""
        return [f"{self.versionless_id}--{excluded}" for excluded in self.exclusions]


def neverlink_set(specs: list[ArtifactSpec]) -> frozenset[str]:
    """Collect the ``group:artifact`` keys of every neverlink root artifact."""
    return frozenset(spec.versionless_id for spec in specs if spec.neverlink)


def artifact_label(
    artifact: str | ArtifactCoordinate | ArtifactSpec,
    repository_name: str = DEFAULT_REPOSITORY_NAME,
) -> str:
    """Return the public label of an artifact inside a generated repository.

    Example::

        >>> artifact_label("junit:junit:4.12")
        '@maven//:junit_junit'

    Args:
        artifact: ``group:artifact``, a full coordinate string, or a parsed
            coordinate/spec.
        repository_name: Name of the generated repository.

    Returns:
        A label of the form ``@<repository>//:<target>``.
    """
    if isinstance(artifact, ArtifactSpec):
        key = artifact.versionless_id
    elif isinstance(artifact, ArtifactCoordinate):
        key = artifact.versionless_id
    else:
        pieces = artifact.split(":")
        if len(pieces) == 2:
            key = artifact
        else:
            key = ArtifactCoordinate.from_string(artifact).versionless_id
    return f"@{repository_name}//:{escape(key)}"
