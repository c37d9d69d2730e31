"""Post-processing of live resolver output into lockfile-ready entries.

The resolver stores every download under a directory structure that mirrors
the URL it came from::

    v1/https/repo1.maven.org/maven2/junit/junit/4.12/junit-4.12.jar
       ^^^^^ ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^
       protocol  host and path, ':' stored as '%3A'

so the original URL can be reconstructed from the path. Each materialized
artifact additionally gets the SHA-256 of its file. Only http(s) downloads
are supported.
"""

from __future__ import annotations

import dataclasses
import hashlib
import logging
from pathlib import Path

from mavenforge.core.dependency import DependencyTree, ResolvedArtifact
from mavenforge.exceptions import ResolverInvocationError, UnsupportedTransportError

logger = logging.getLogger(__name__)

SUPPORTED_PROTOCOLS: tuple[str, ...] = ("http", "https")
CACHE_MARKER = "v1/"
_ESCAPED_COLON = "%3A"


def normalize_to_unix_path(path: str) -> str:
    """Replace Windows separators so that BUILD files get ``/`` paths."""
    return path.replace("\\", "/")


def relativize_cache_path(absolute_path: str) -> str:
    """Return the ``v1/...`` part of an absolute shared-cache path.

    Raises:
        ResolverInvocationError: If the path does not contain exactly one
            ``v1/`` segment.
    """
    parts = absolute_path.split(CACHE_MARKER)
    if len(parts) != 2:
        raise ResolverInvocationError(
            "Error while trying to parse the path of file in the resolver cache: ",
            absolute_path,
        )
    return CACHE_MARKER + parts[1]


def link_into_repository(absolute_path: str, repository_path: Path) -> str:
    """Symlink a shared-cache file into the repository; return its relative path."""
    relative = relativize_cache_path(absolute_path)
    link = repository_path / relative
    link.parent.mkdir(parents=True, exist_ok=True)
    if link.is_symlink() or link.exists():
        link.unlink()
    link.symlink_to(absolute_path)
    return relative


def reconstruct_url(coord: str, file: str) -> str:
    """Rebuild the download URL from a cache path.

    Args:
        coord: Coordinate of the artifact, for the error message.
        file: Unix-style path of the downloaded file.

    Raises:
        UnsupportedTransportError: If no ``http``/``https`` segment exists.
    """
    parts = file.split("/")
    protocol = None
    for part in parts:
        if part in SUPPORTED_PROTOCOLS:
            protocol = part
    if protocol is None:
        raise UnsupportedTransportError(coord)
    rest = parts[parts.index(protocol) + 1:]
    return (protocol + "://" + "/".join(rest)).replace(_ESCAPED_COLON, ":")


def sha256_file(path: Path) -> str:
    """Hex SHA-256 digest of a file, read in chunks."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1 << 16), b""):
            digest.update(chunk)
    return digest.hexdigest()


def postprocess_artifact(
    artifact: ResolvedArtifact,
    repository_path: Path,
    use_shared_cache: bool = False,
) -> ResolvedArtifact:
    """Return ``artifact`` with a normalized path, url and sha256.

    Artifacts without a file (POM-only parents, failed downloads) are
    returned unchanged; the compiler decides what to do with them.
    """
    if artifact.file is None:
        return artifact
    file = normalize_to_unix_path(artifact.file)
    if use_shared_cache:
        file = link_into_repository(file, repository_path)
    url = reconstruct_url(artifact.coord, file)
    sha256 = sha256_file(repository_path / file)
    logger.debug("%s -> %s (%s)", artifact.coord, url, sha256)
    return dataclasses.replace(artifact, file=file, url=url, sha256=sha256)


def postprocess_tree(
    tree: DependencyTree,
    repository_path: Path,
    use_shared_cache: bool = False,
) -> DependencyTree:
    """Post-process every entry, keeping tree order."""
    return dataclasses.replace(
        tree,
        artifacts=tuple(
            postprocess_artifact(artifact, repository_path, use_shared_cache)
            for artifact in tree
        ),
    )
