"""Fixtures for CLI tests."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from mavenforge.core.dependency import DependencyTree, ResolvedArtifact
from mavenforge.core.lockfile import Lockfile

from fakes import HAMCREST, HAMCREST_PATH, JUNIT, JUNIT_PATH


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _pinned(coord: str, file: str, deps: tuple[str, ...] = ()) -> ResolvedArtifact:
    return ResolvedArtifact(
        coord=coord,
        file=file,
        dependencies=deps,
        url="https://" + file.split("/https/", 1)[1],
        sha256=hashlib.sha256(coord.encode()).hexdigest(),
    )


@pytest.fixture
def junit_lockfile(tmp_path: Path) -> Path:
    path = tmp_path / "maven_install.json"
    Lockfile(DependencyTree(artifacts=(
        _pinned(JUNIT, JUNIT_PATH, (HAMCREST,)),
        _pinned(HAMCREST, HAMCREST_PATH),
    ))).write(path)
    return path


@pytest.fixture
def tree_json(tmp_path: Path, junit_tree) -> Path:
    path = tmp_path / "dep-tree.json"
    path.write_text(json.dumps(junit_tree.to_dict()), encoding="utf-8")
    return path
