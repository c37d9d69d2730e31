"""Fixtures for lockfile tests."""

from __future__ import annotations

import hashlib

import pytest

from mavenforge.core.dependency import DependencyTree, ResolvedArtifact
from mavenforge.core.lockfile import Lockfile


def _pinned(coord: str, file: str, deps: tuple[str, ...] = ()) -> ResolvedArtifact:
    return ResolvedArtifact(
        coord=coord,
        file=file,
        dependencies=deps,
        url=f"https://repo1.maven.org/maven2/{file}",
        sha256=hashlib.sha256(coord.encode()).hexdigest(),
    )


@pytest.fixture
def pinned_tree() -> DependencyTree:
    return DependencyTree(artifacts=(
        _pinned("g:a:1.0", "g/a/1.0/a-1.0.jar", ("g:b:1.0",)),
        _pinned("g:b:1.0", "g/b/1.0/b-1.0.jar"),
    ))


@pytest.fixture
def lockfile(pinned_tree) -> Lockfile:
    return Lockfile(pinned_tree, repository_name="maven")
