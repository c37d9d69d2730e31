"""Shared fixtures for mavenforge tests."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from mavenforge.core.dependency import DependencyTree, ResolvedArtifact

from fakes import HAMCREST, HAMCREST_PATH, JUNIT, JUNIT_PATH, FakeResolver


@pytest.fixture
def make_tree() -> Callable[..., DependencyTree]:
    """Factory: ``make_tree(("g:a:1.0", "a.jar", ["g:b:1.0"]), ...)``."""

    def _make(*entries: tuple[str, str | None, list[str]]) -> DependencyTree:
        return DependencyTree(
            artifacts=tuple(
                ResolvedArtifact(coord=coord, file=file, dependencies=tuple(deps))
                for coord, file, deps in entries
            )
        )

    return _make


@pytest.fixture
def junit_tree(make_tree) -> DependencyTree:
    """junit -> hamcrest-core, with the resolver's occasional self-reference."""
    return make_tree(
        (JUNIT, JUNIT_PATH, [HAMCREST, JUNIT]),
        (HAMCREST, HAMCREST_PATH, []),
    )


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver([
        (JUNIT, JUNIT_PATH, [HAMCREST]),
        (HAMCREST, HAMCREST_PATH, []),
    ])


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a ``maven_install.yaml`` (as JSON, a YAML subset)."""

    def _write(**overrides) -> Path:
        data = {
            "name": "maven",
            "repositories": ["https://repo1.maven.org/maven2"],
            "artifacts": [JUNIT],
        }
        data.update(overrides)
        path = tmp_path / "maven_install.yaml"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_coursier(tmp_path: Path) -> list[str]:
    """A resolver command that materializes junit and writes dep-tree.json."""
    script = tmp_path / "fake_coursier.py"
    script.write_text(
        "import json, pathlib\n"
        f"path = pathlib.Path({JUNIT_PATH!r})\n"
        "path.parent.mkdir(parents=True, exist_ok=True)\n"
        "path.write_bytes(b'jar')\n"
        "tree = {'dependencies': [\n"
        f"    {{'coord': {JUNIT!r}, 'file': {JUNIT_PATH!r}, 'dependencies': []}}\n"
        "]}\n"
        "pathlib.Path('dep-tree.json').write_text(json.dumps(tree))\n",
        encoding="utf-8",
    )
    return [sys.executable, str(script)]
