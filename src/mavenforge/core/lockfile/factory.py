"""Lockfile factory --- constructing lockfiles from live resolutions.

A live repository runs under ``unpinned_<name>`` whenever a lockfile is
configured, so that the pinned repository built from that lockfile can own
``<name>``. The lockfile is therefore always associated with the unprefixed
name::

    output = LivePipeline(config, "unpinned_maven", workdir).run()
    lockfile = Lockfile.from_resolution(output.dependency_tree, output.name)
    assert lockfile.repository_name == "maven"
"""

from __future__ import annotations

from typing import Any

from mavenforge.core.dependency import DependencyTree

UNPINNED_PREFIX = "unpinned_"


def pin_name(repository_name: str) -> str:
    """Strip the ``unpinned_`` prefix from a live repository name."""
    if repository_name.startswith(UNPINNED_PREFIX):
        return repository_name[len(UNPINNED_PREFIX):]
    return repository_name


def unpinned_name(repository_name: str) -> str:
    return UNPINNED_PREFIX + repository_name


def _from_resolution(cls: type, tree: DependencyTree, repository_name: str) -> Any:
    """Create a lockfile from a post-processed live dependency tree.

    Args:
        tree: Tree whose artifacts carry ``url`` and ``sha256``.
        repository_name: Name of the live repository, prefixed or not.

    Returns:
        A ``Lockfile`` bound to the unprefixed repository name.
    """
    return cls(tree, repository_name=pin_name(repository_name))
