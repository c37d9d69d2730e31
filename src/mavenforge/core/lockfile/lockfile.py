"""Lockfile core class --- persisted dependency-tree snapshots.

A lockfile (``maven_install.json``) records the full dependency tree of a
live resolution, including each artifact's source URL and SHA-256, so that a
pinned repository can regenerate the identical target graph without running
the resolver again.

Format::

    {
      "dependency_tree": {
        "dependencies": [
          {"coord": "...", "dependencies": [...], "file": "...",
           "sha256": "...", "url": "..."}
        ]
      },
      "repository_name": "maven"
    }

Determinism guarantee: ``to_json()`` sorts object keys but never reorders
the ``dependencies`` list, whose order decides which duplicate wins during
compilation. Two lockfiles with the same content produce byte-identical
JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mavenforge import DEFAULT_REPOSITORY_NAME
from mavenforge.core.dependency import DependencyTree

DEFAULT_LOCKFILE_NAME = "maven_install.json"


class Lockfile:
    """A pinned dependency tree for one named repository.

    Example::

        lf = Lockfile(tree, repository_name="maven")
        lf.write(Path("maven_install.json"))
        again = Lockfile.read(Path("maven_install.json"))
        assert again.dependency_tree == tree
    """

    def __init__(
        self,
        dependency_tree: DependencyTree | None = None,
        repository_name: str = DEFAULT_REPOSITORY_NAME,
    ) -> None:
        self._tree = dependency_tree if dependency_tree is not None else DependencyTree()
        self._repository_name = repository_name

    @property
    def dependency_tree(self) -> DependencyTree:
        return self._tree

    @property
    def repository_name(self) -> str:
        return self._repository_name

    @property
    def artifact_count(self) -> int:
        return len(self._tree)

    # -- Serialization ------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the lockfile schema."""
        return {
            "dependency_tree": self._tree.to_dict(),
            "repository_name": self._repository_name,
        }

    def to_json(self, indent: int = 2) -> str:
        """Deterministic, human-diffable JSON text."""
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True) + "\n"

    def write(self, path: Path) -> None:
        """Write the lockfile, creating parent directories as needed."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
