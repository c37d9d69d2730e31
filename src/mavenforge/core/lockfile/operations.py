"""Lockfile loading, consistency checks, and comparison.

Functions here become ``Lockfile`` methods in ``__init__.py``:

- ``from_dict`` / ``from_json`` / ``read`` turn parsed data, text or a file
  into a ``Lockfile``, failing with a remediation hint when the content is
  not a lockfile;
- ``validate`` reports pinned entries that could not be fetched reproducibly;
- ``diff`` compares two lockfiles coordinate by coordinate.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from mavenforge import DEFAULT_REPOSITORY_NAME
from mavenforge.core.dependency import DependencyTree
from mavenforge.exceptions import LockfileCorruptError, LockfileSchemaError

_SHA256_RE = re.compile(r"^[0-9a-f]{64}$")

_REMEDIATION = (
    "Consider regenerating the lockfile with the following steps:\n"
    "  1. Remove the `lockfile` entry from the configuration of `@{name}`.\n"
    "  2. Regenerate it by running `mavenforge pin <config>`, then add the "
    "`lockfile` entry back."
)


def _remediation(repository_name: str) -> str:
    return _REMEDIATION.format(name=repository_name)


def _from_dict(
    cls: type,
    data: Any,
    source: str = "<lockfile>",
    repository_name: str | None = None,
) -> Any:
    """Build a lockfile from parsed JSON.

    Args:
        data: Parsed lockfile content.
        source: Where the data came from, for error messages.
        repository_name: Overrides the name stored in the file.

    Raises:
        LockfileSchemaError: If ``dependency_tree`` is absent or malformed.
    """
    name = repository_name or (
        data.get("repository_name") if isinstance(data, dict) else None
    ) or DEFAULT_REPOSITORY_NAME
    if not isinstance(data, dict) or data.get("dependency_tree") is None:
        raise LockfileSchemaError(
            f"Failed to parse {source}. It is not a valid lockfile: it has no "
            "`dependency_tree`. Has this file been modified manually?\n"
            + _remediation(name)
        )
    try:
        tree = DependencyTree.from_dict(data["dependency_tree"])
    except ValueError as exc:
        raise LockfileSchemaError(
            f"Failed to parse {source}: {exc}\n" + _remediation(name)
        ) from exc
    return cls(tree, repository_name=name)


def _from_json(
    cls: type,
    json_str: str,
    source: str = "<lockfile>",
    repository_name: str | None = None,
) -> Any:
    """Parse lockfile text.

    Raises:
        LockfileCorruptError: If the text is not valid JSON.
        LockfileSchemaError: If the JSON is not a lockfile.
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as exc:
        raise LockfileCorruptError(
            f"Failed to parse {source}. Is this file valid JSON? The file may "
            f"have been corrupted ({exc}).\n" + _remediation(repository_name or DEFAULT_REPOSITORY_NAME)
        ) from exc
    return cls.from_dict(data, source=source, repository_name=repository_name)


def _read(cls: type, path: Path, repository_name: str | None = None) -> Any:
    """Load the lockfile stored at ``path``.

    Raises:
        FileNotFoundError: If ``path`` is missing.
        LockfileCorruptError: If the file is not UTF-8 encoded JSON.
        LockfileSchemaError: If the file has no dependency tree.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise LockfileCorruptError(
            f"Failed to parse {path}. It is not UTF-8 text and may have been "
            f"corrupted ({exc}).\n" + _remediation(repository_name or DEFAULT_REPOSITORY_NAME)
        ) from exc
    return cls.from_json(text, source=str(path), repository_name=repository_name)


def _validate(self: Any) -> list[str]:
    """Check pinned entries for internal consistency.

    1. Every artifact with a file must carry a ``url`` and a ``sha256``.
    2. Every ``sha256`` must be 64 lowercase hex characters.
    3. No coordinate may appear twice.

    Returns:
        Warning messages. Empty means the lockfile is consistent.
    """
    warnings: list[str] = []
    seen: set[str] = set()
    for artifact in self.dependency_tree:
        if artifact.coord in seen:
            warnings.append(f"Artifact {artifact.coord!r} appears more than once")
        seen.add(artifact.coord)
        if artifact.file is None:
            continue
        if artifact.url is None:
            warnings.append(f"Artifact {artifact.coord!r} has a file but no url")
        if artifact.sha256 is None:
            warnings.append(f"Artifact {artifact.coord!r} has a file but no sha256")
        elif not _SHA256_RE.match(artifact.sha256):
            warnings.append(
                f"Artifact {artifact.coord!r} has an invalid sha256: {artifact.sha256!r}"
            )
    return warnings


_COMPARED_FIELDS: tuple[str, ...] = ("file", "url", "sha256", "dependencies")


def _diff(self: Any, other: Any) -> dict[str, Any]:
    """Compare two lockfiles.

    - **added**: coordinates present in ``other`` only.
    - **removed**: coordinates present in ``self`` only.
    - **changed**: coordinates in both whose file, url, sha256 or
      dependencies differ.

    Args:
        other: The newer lockfile.

    Returns:
        ``{"added": [...], "removed": [...], "changed": [...]}``.
    """
    old = {a.coord: a for a in self.dependency_tree}
    new = {a.coord: a for a in other.dependency_tree}

    changes: list[dict[str, Any]] = []
    for coord in sorted(old.keys() & new.keys()):
        for field_name in _COMPARED_FIELDS:
            before = getattr(old[coord], field_name)
            after = getattr(new[coord], field_name)
            if before != after:
                if field_name == "dependencies":
                    before, after = list(before), list(after)
                changes.append({
                    "coord": coord,
                    "field": field_name,
                    "old": before,
                    "new": after,
                })

    return {
        "added": sorted(new.keys() - old.keys()),
        "removed": sorted(old.keys() - new.keys()),
        "changed": changes,
    }
