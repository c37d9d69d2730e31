"""``maven_install`` configuration loaded from YAML.

Example ``maven_install.yaml``::

    name: maven
    repositories:
      - https://repo1.maven.org/maven2
    artifacts:
      - junit:junit:4.12
      - group: com.google.guava
        artifact: guava
        version: 28.0-jre
        neverlink: true
        exclusions:
          - com.google.code.findbugs:jsr305
    excluded_artifacts:
      - org.checkerframework:checker-qual
    fetch_sources: true
    generate_compat_repositories: false
    version_conflict_policy: default
    lockfile: maven_install.json

Every check runs at load time so that a bad configuration fails before the
resolver is started or a lockfile is read.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from mavenforge import DEFAULT_REPOSITORY_NAME
from mavenforge.core.compiler import POM_ONLY_ARTIFACTS
from mavenforge.core.coordinates import ArtifactCoordinate, ArtifactSpec, neverlink_set
from mavenforge.exceptions import ConfigurationError

VERSION_CONFLICT_POLICIES: tuple[str, ...] = ("default", "pinned")
DEFAULT_RESOLVER: tuple[str, ...] = ("coursier",)

_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class InstallConfig:
    """One ``maven_install`` declaration.

    Attributes:
        name: Name of the generated repository.
        repositories: Maven repository URLs in lookup order.
        artifacts: Root artifacts to resolve.
        excluded_artifacts: ``group:artifact`` pairs excluded globally.
        fetch_sources: Also fetch and attach source jars.
        fail_on_missing_checksum: Reject artifacts without a published
            checksum.
        use_unsafe_shared_cache: Resolve into the resolver's shared cache
            and symlink files into the repository.
        generate_compat_repositories: Also emit ``compat.bzl``.
        version_conflict_policy: ``default`` or ``pinned`` (force the
            requested versions of root artifacts).
        lockfile: Path of the lockfile; None disables pinning.
        pom_only_artifacts: Extra POM-only ``group:artifact`` keys.
        resolver: Command used to start the resolver.
    """

    name: str = DEFAULT_REPOSITORY_NAME
    repositories: tuple[str, ...] = field(default_factory=tuple)
    artifacts: tuple[ArtifactSpec, ...] = field(default_factory=tuple)
    excluded_artifacts: tuple[str, ...] = field(default_factory=tuple)
    fetch_sources: bool = False
    fail_on_missing_checksum: bool = True
    use_unsafe_shared_cache: bool = False
    generate_compat_repositories: bool = False
    version_conflict_policy: str = "default"
    lockfile: Path | None = None
    pom_only_artifacts: frozenset[str] = field(default_factory=frozenset)
    resolver: tuple[str, ...] = DEFAULT_RESOLVER

    @property
    def neverlink(self) -> frozenset[str]:
        return neverlink_set(list(self.artifacts))

    @property
    def all_pom_only_artifacts(self) -> frozenset[str]:
        return POM_ONLY_ARTIFACTS | self.pom_only_artifacts


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _require_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError(f"`{key}` must be true or false, got {value!r}")
    return value


def _require_str_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"`{key}` must be a list of strings")
    return value


def _versionless_key(value: str, key: str) -> str:
    parts = value.split(":")
    if len(parts) != 2 or not all(parts):
        raise ConfigurationError(
            f"Entries of `{key}` must have the form group:artifact, got {value!r}"
        )
    return value


def _parse_artifact(entry: Any) -> ArtifactSpec:
    if isinstance(entry, str):
        try:
            return ArtifactSpec(ArtifactCoordinate.from_string(entry))
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Invalid artifact entry: {entry!r}")
    missing = [k for k in ("group", "artifact", "version") if not entry.get(k)]
    if missing:
        raise ConfigurationError(
            f"Artifact entry {entry!r} is missing: {', '.join(missing)}"
        )
    coordinate = ArtifactCoordinate(
        group=str(entry["group"]),
        artifact=str(entry["artifact"]),
        version=str(entry["version"]),
        packaging=str(entry.get("packaging", "jar")),
        classifier=entry.get("classifier"),
    )
    exclusions = tuple(
        _versionless_key(e, "exclusions") for e in _require_str_list(entry, "exclusions")
    )
    return ArtifactSpec(
        coordinate=coordinate,
        neverlink=_require_bool(entry, "neverlink", False),
        exclusions=exclusions,
    )


def config_from_dict(data: dict[str, Any], base_dir: Path | None = None) -> InstallConfig:
    """Build and validate an ``InstallConfig`` from a parsed mapping.

    Args:
        data: Parsed YAML mapping.
        base_dir: Directory that a relative ``lockfile`` path is resolved
            against.

    Raises:
        ConfigurationError: On any invalid value.
    """
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a mapping")

    name = data.get("name", DEFAULT_REPOSITORY_NAME)
    if not isinstance(name, str) or not _NAME_RE.match(name):
        raise ConfigurationError(f"Invalid repository name: {name!r}")

    artifacts_data = data.get("artifacts") or []
    if not isinstance(artifacts_data, list):
        raise ConfigurationError("`artifacts` must be a list")

    policy = data.get("version_conflict_policy", "default")
    if policy not in VERSION_CONFLICT_POLICIES:
        raise ConfigurationError(
            f"`version_conflict_policy` must be one of "
            f"{', '.join(VERSION_CONFLICT_POLICIES)}, got {policy!r}"
        )

    lockfile: Path | None = None
    if data.get("lockfile") is not None:
        lockfile = Path(str(data["lockfile"]))
        if base_dir is not None and not lockfile.is_absolute():
            lockfile = base_dir / lockfile

    resolver = data.get("resolver", list(DEFAULT_RESOLVER))
    if isinstance(resolver, str):
        resolver = [resolver]
    if not resolver or not all(isinstance(part, str) for part in resolver):
        raise ConfigurationError("`resolver` must be a command string or list")

    return InstallConfig(
        name=name,
        repositories=tuple(_require_str_list(data, "repositories")),
        artifacts=tuple(_parse_artifact(entry) for entry in artifacts_data),
        excluded_artifacts=tuple(
            _versionless_key(e, "excluded_artifacts")
            for e in _require_str_list(data, "excluded_artifacts")
        ),
        fetch_sources=_require_bool(data, "fetch_sources", False),
        fail_on_missing_checksum=_require_bool(data, "fail_on_missing_checksum", True),
        use_unsafe_shared_cache=_require_bool(data, "use_unsafe_shared_cache", False),
        generate_compat_repositories=_require_bool(data, "generate_compat_repositories", False),
        version_conflict_policy=policy,
        lockfile=lockfile,
        pom_only_artifacts=frozenset(
            _versionless_key(e, "pom_only_artifacts")
            for e in _require_str_list(data, "pom_only_artifacts")
        ),
        resolver=tuple(resolver),
    )


def load_config(path: Path) -> InstallConfig:
    """Load a ``maven_install`` YAML file.

    Raises:
        ConfigurationError: If the YAML is malformed or invalid.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {path}: {exc}") from exc
    return config_from_dict(data or {}, base_dir=path.parent)
