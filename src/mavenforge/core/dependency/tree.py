"""Dependency tree data model --- the resolver output contract.

The resolver reports the transitive closure of the requested artifacts as a
flat, ordered list of entries, each naming the coordinates it depends on::

    {"dependencies": [
        {"coord": "junit:junit:4.12",
         "file": "v1/https/repo1.maven.org/maven2/junit/junit/4.12/junit-4.12.jar",
         "dependencies": ["org.hamcrest:hamcrest-core:1.3"]},
        ...
    ]}

The list is not guaranteed acyclic (the resolver occasionally reports an
artifact depending on itself) nor free of entries that canonicalize to the
same target. Entry order is significant: the first entry for a target wins.

Both classes are immutable. Post-processing produces new instances via
``dataclasses.replace`` rather than editing entries in place.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


# ---------------------------------------------------------------------------
# ResolvedArtifact: one entry of the dependency tree
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolvedArtifact:
    """A single resolved artifact.

    Attributes:
        coord: Full coordinate as emitted by the resolver, possibly with
            packaging and classifier segments.
        file: Path of the materialized artifact, relative to the repository
            directory. None for POM-only aggregators or failed downloads.
        dependencies: Coordinates this artifact depends on, in resolver
            order. May contain a self-reference.
        url: Source URL, reconstructed from ``file`` in the live pipeline.
        sha256: Hex SHA-256 digest of ``file``.
    """

    coord: str
    file: str | None = None
    dependencies: tuple[str, ...] = field(default_factory=tuple)
    url: str | None = None
    sha256: str | None = None

    @classmethod
    def from_dict(cls, entry: dict[str, Any]) -> ResolvedArtifact:
        """Build an artifact from one JSON entry.

        Raises:
            ValueError: If ``coord`` is missing or a field (including
                ``url`` and ``sha256``) has the wrong type.
        """
        if not isinstance(entry, dict):
            raise ValueError(f"Dependency entry is not an object: {entry!r}")
        coord = entry.get("coord")
        if not isinstance(coord, str) or not coord:
            raise ValueError(f"Dependency entry has no 'coord': {entry!r}")
        file = entry.get("file")
        if file is not None and not isinstance(file, str):
            raise ValueError(f"'file' of {coord} must be a string or null")
        dependencies = entry.get("dependencies") or []
        if not isinstance(dependencies, list):
            raise ValueError(f"'dependencies' of {coord} must be a list")
        for key in ("url", "sha256"):
            if entry.get(key) is not None and not isinstance(entry[key], str):
                raise ValueError(f"'{key}' of {coord} must be a string or null")
        return cls(
            coord=coord,
            file=file,
            dependencies=tuple(str(dep) for dep in dependencies),
            url=entry.get("url"),
            sha256=entry.get("sha256"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the resolver JSON shape; url/sha256 only when set."""
        entry: dict[str, Any] = {
            "coord": self.coord,
            "dependencies": list(self.dependencies),
            "file": self.file,
        }
        if self.url is not None:
            entry["url"] = self.url
        if self.sha256 is not None:
            entry["sha256"] = self.sha256
        return entry

    @property
    def packaging(self) -> str | None:
        """File extension of the materialized artifact, if any."""
        if self.file is None:
            return None
        return self.file.split(".")[-1]


# ---------------------------------------------------------------------------
# DependencyTree: ordered sequence of ResolvedArtifact
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DependencyTree:
    """Ordered list of resolved artifacts with their dependency edges.

    Attributes:
        artifacts: Entries in resolver order.
        conflict_resolution: Version substitutions reported by the resolver
            as sorted (requested coordinate, chosen coordinate) pairs. Carried
            through to the lockfile untouched.
    """

    artifacts: tuple[ResolvedArtifact, ...] = field(default_factory=tuple)
    conflict_resolution: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DependencyTree:
        """Parse the resolver output contract.

        Raises:
            ValueError: If ``dependencies`` is missing or malformed, or
                ``conflict_resolution`` is not a string-to-string object.
        """
        if not isinstance(data, dict) or not isinstance(data.get("dependencies"), list):
            raise ValueError("Dependency tree must be an object with a 'dependencies' list")
        artifacts = tuple(ResolvedArtifact.from_dict(e) for e in data["dependencies"])
        conflicts = data.get("conflict_resolution") or {}
        if not isinstance(conflicts, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in conflicts.items()
        ):
            raise ValueError("'conflict_resolution' must map coordinates to coordinates")
        return cls(artifacts=artifacts, conflict_resolution=tuple(sorted(conflicts.items())))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "dependencies": [artifact.to_dict() for artifact in self.artifacts],
        }
        if self.conflict_resolution:
            data["conflict_resolution"] = dict(self.conflict_resolution)
        return data

    def __iter__(self) -> Iterator[ResolvedArtifact]:
        return iter(self.artifacts)

    def __len__(self) -> int:
        return len(self.artifacts)

    @property
    def coords(self) -> list[str]:
        """Coordinates of all entries, in tree order."""
        return [artifact.coord for artifact in self.artifacts]

    def get(self, coord: str) -> ResolvedArtifact | None:
        """Return the first entry with exactly this coordinate."""
        for artifact in self.artifacts:
            if artifact.coord == coord:
                return artifact
        return None

    def reverse_dependents(self, coord: str) -> list[ResolvedArtifact]:
        """Entries (other than ``coord`` itself) whose dependencies list ``coord``.

        This is a full scan; it is only needed on the diagnostic path, so no
        reverse index is kept.
        """
        return [
            artifact
            for artifact in self.artifacts
            if artifact.coord != coord and coord in artifact.dependencies
        ]
