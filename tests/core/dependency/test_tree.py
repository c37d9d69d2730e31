"""Tests for the dependency tree model."""

from __future__ import annotations

import pytest

from mavenforge.core.dependency import DependencyTree, ResolvedArtifact


class TestResolvedArtifact:
    def test_from_dict_defaults(self) -> None:
        artifact = ResolvedArtifact.from_dict({"coord": "g:a:1.0"})
        assert artifact.file is None
        assert artifact.dependencies == ()
        assert artifact.packaging is None

    def test_packaging_is_file_extension(self) -> None:
        assert ResolvedArtifact("g:a:1.0", file="x/a-1.0.aar").packaging == "aar"

    def test_to_dict_omits_unset_url_and_sha(self) -> None:
        data = ResolvedArtifact("g:a:1.0", file="a.jar").to_dict()
        assert data == {"coord": "g:a:1.0", "dependencies": [], "file": "a.jar"}

    def test_to_dict_includes_url_and_sha(self) -> None:
        data = ResolvedArtifact("g:a:1.0", file="a.jar", url="https://r/a.jar", sha256="ab").to_dict()
        assert data["url"] == "https://r/a.jar"
        assert data["sha256"] == "ab"

    @pytest.mark.parametrize("entry", [
        "g:a:1.0",
        {"file": "a.jar"},
        {"coord": "g:a:1.0", "file": 3},
        {"coord": "g:a:1.0", "dependencies": "g:b:1.0"},
        {"coord": "g:a:1.0", "file": "a.jar", "url": 5},
        {"coord": "g:a:1.0", "file": "a.jar", "sha256": ["ab"]},
    ])
    def test_malformed_entries(self, entry) -> None:
        with pytest.raises(ValueError):
            ResolvedArtifact.from_dict(entry)


class TestDependencyTree:
    def test_from_dict_requires_dependencies_list(self) -> None:
        with pytest.raises(ValueError, match="dependencies"):
            DependencyTree.from_dict({})

    def test_round_trip_keeps_order(self, junit_tree) -> None:
        again = DependencyTree.from_dict(junit_tree.to_dict())
        assert again == junit_tree
        assert again.coords == ["junit:junit:4.12", "org.hamcrest:hamcrest-core:1.3"]

    def test_conflict_resolution_carried(self) -> None:
        tree = DependencyTree.from_dict({
            "dependencies": [],
            "conflict_resolution": {"g:a:1.0": "g:a:2.0"},
        })
        assert tree.to_dict()["conflict_resolution"] == {"g:a:1.0": "g:a:2.0"}
        assert tree.conflict_resolution == (("g:a:1.0", "g:a:2.0"),)

    def test_conflict_resolution_must_be_an_object(self) -> None:
        with pytest.raises(ValueError, match="conflict_resolution"):
            DependencyTree.from_dict({"dependencies": [], "conflict_resolution": [1, 2]})

    def test_hashable(self, junit_tree) -> None:
        tree = DependencyTree.from_dict({
            "dependencies": [],
            "conflict_resolution": {"g:a:1.0": "g:a:2.0"},
        })
        assert hash(tree) == hash(DependencyTree.from_dict(tree.to_dict()))
        assert hash(junit_tree) == hash(DependencyTree.from_dict(junit_tree.to_dict()))

    def test_get(self, junit_tree) -> None:
        assert junit_tree.get("junit:junit:4.12").coord == "junit:junit:4.12"
        assert junit_tree.get("g:missing:1.0") is None

    def test_reverse_dependents_exclude_self(self, junit_tree) -> None:
        assert [a.coord for a in junit_tree.reverse_dependents("junit:junit:4.12")] == []
        assert [a.coord for a in junit_tree.reverse_dependents("org.hamcrest:hamcrest-core:1.3")] == [
            "junit:junit:4.12"
        ]

    def test_len_and_iter(self, junit_tree) -> None:
        assert len(junit_tree) == 2
        assert [a.coord for a in junit_tree] == junit_tree.coords
