"""Tests for GraphCompiler: the dependency tree to target declarations pass."""

from __future__ import annotations

import pytest

from mavenforge.core.compiler import (
    Alias,
    CopyGenrule,
    GraphCompiler,
    JavaLibraryExport,
    JvmImport,
    compile_tree,
)
from mavenforge.exceptions import MissingArtifactError, UnrecognizedPackagingError


def _imports(result) -> list[JvmImport]:
    return [d for d in result.declarations if isinstance(d, JvmImport)]


class TestBasicCompilation:
    def test_import_and_alias_per_artifact(self, junit_tree) -> None:
        result = compile_tree(junit_tree)
        assert result.labels == ["junit_junit", "org_hamcrest_hamcrest_core"]
        assert result.aliases == {
            "junit_junit_4_12": "junit_junit",
            "org_hamcrest_hamcrest_core_1_3": "org_hamcrest_hamcrest_core",
        }
        assert result.jar_versionless_labels == ("junit_junit", "org_hamcrest_hamcrest_core")

    def test_declaration_order(self, junit_tree) -> None:
        kinds = [type(d) for d in compile_tree(junit_tree).declarations]
        assert kinds == [JvmImport, Alias, JvmImport, Alias]

    def test_self_edge_dropped(self, junit_tree) -> None:
        assert compile_tree(junit_tree).edges["junit_junit"] == ("org_hamcrest_hamcrest_core",)

    def test_coordinates_tag_keeps_raw_coordinate(self, make_tree) -> None:
        tree = make_tree(("g:a:aar:1.0", "a.aar", []))
        decl = _imports(compile_tree(tree))[0]
        assert decl.coordinates == "g:a:aar:1.0"
        assert 'tags = ["maven_coordinates=g:a:aar:1.0"],' in decl.render()

    def test_empty_tree(self, make_tree) -> None:
        result = compile_tree(make_tree())
        assert result.declarations == ()
        assert result.render() == ""

    def test_deterministic(self, junit_tree) -> None:
        assert compile_tree(junit_tree).render() == compile_tree(junit_tree).render()


class TestEdges:
    def test_mutual_cycle_passes_through(self, make_tree) -> None:
        tree = make_tree(
            ("g:a:1.0", "a.jar", ["g:b:1.0"]),
            ("g:b:1.0", "b.jar", ["g:a:1.0"]),
        )
        result = compile_tree(tree)
        assert result.edges == {"g_a": ("g_b",), "g_b": ("g_a",)}

    def test_duplicate_dependency_labels_collapse(self, make_tree) -> None:
        tree = make_tree(
            ("g:a:1.0", "a.jar", ["g:b:aar:1.0", "g:b:1.0", "g:c:1.0", "g:b:1.0"]),
            ("g:b:aar:1.0", "b.aar", []),
            ("g:c:1.0", "c.jar", []),
        )
        assert compile_tree(tree).edges["g_a"] == ("g_b", "g_c")

    def test_self_edge_via_other_packaging(self, make_tree) -> None:
        tree = make_tree(("g:a:1.0", "a.jar", ["g:a:jar:1.0", "g:a:1.0"]))
        assert compile_tree(tree).edges["g_a"] == ()

    def test_dangling_dependency_is_fatal(self, make_tree) -> None:
        tree = make_tree(("g:a:1.0", "a.jar", ["g:z:1.0"]))
        with pytest.raises(MissingArtifactError) as excinfo:
            compile_tree(tree)
        assert excinfo.value.coord == "g:z:1.0"
        assert excinfo.value.reverse_dependents == ["g:a:1.0"]


class TestFirstWins:
    def test_later_version_is_skipped(self, make_tree) -> None:
        tree = make_tree(
            ("g:a:1.0", "a-1.0.jar", []),
            ("g:a:2.0", "a-2.0.jar", []),
        )
        result = compile_tree(tree)
        assert [d.artifact_path for d in _imports(result)] == ["a-1.0.jar"]
        assert result.aliases == {"g_a_1_0": "g_a"}

    def test_later_aar_duplicate_is_skipped(self, make_tree) -> None:
        tree = make_tree(
            ("g:a:1.0", "a.jar", []),
            ("g:a:aar:1.0", "a.aar", []),
        )
        assert [d.rule_class for d in _imports(compile_tree(tree))] == ["jvm_import"]

    def test_skipped_duplicate_without_file_is_not_fatal(self, make_tree) -> None:
        tree = make_tree(
            ("g:a:1.0", "a.jar", []),
            ("g:a:pom:1.0", None, []),
        )
        assert compile_tree(tree).labels == ["g_a"]


class TestPackaging:
    def test_aar_import(self, make_tree) -> None:
        tree = make_tree(("g:a:aar:1.0", "a.aar", []))
        result = compile_tree(tree)
        decl = _imports(result)[0]
        assert decl.rule_class == "aar_import"
        assert 'aar = "a.aar",' in decl.render()
        assert result.jar_versionless_labels == ()

    def test_unrecognized_packaging_is_fatal(self, make_tree) -> None:
        tree = make_tree(("g:a:zip:1.0", "a.zip", []))
        with pytest.raises(UnrecognizedPackagingError, match="Unsupported packaging type: zip") as excinfo:
            compile_tree(tree)
        assert excinfo.value.coord == "g:a:zip:1.0"


class TestNeverlink:
    def test_neverlink_by_versionless_key(self, make_tree) -> None:
        tree = make_tree(("g:a:1.0", "a.jar", []), ("g:b:1.0", "b.jar", []))
        decls = _imports(compile_tree(tree, neverlink={"g:a"}))
        assert [d.neverlink for d in decls] == [True, False]
        assert "\tneverlink = True," in decls[0].render()
        assert "neverlink" not in decls[1].render()


class TestSources:
    def test_sources_attach_as_srcjar(self, make_tree) -> None:
        tree = make_tree(
            ("g:a:jar:sources:1.0", "a-sources.jar", []),
            ("g:a:1.0", "a.jar", []),
        )
        result = compile_tree(tree, fetch_sources=True)
        assert result.labels == ["g_a"]
        decl = _imports(result)[0]
        assert decl.artifact_path == "a.jar"
        assert decl.srcjar == "a-sources.jar"
        assert 'srcjar = "a-sources.jar",' in decl.render()

    def test_first_sources_entry_wins(self, make_tree) -> None:
        tree = make_tree(
            ("g:a:1.0", "a.jar", []),
            ("g:a:jar:sources:1.0", "a-1.0-sources.jar", []),
            ("g:a:jar:sources:2.0", "a-2.0-sources.jar", []),
        )
        assert _imports(compile_tree(tree, fetch_sources=True))[0].srcjar == "a-1.0-sources.jar"

    def test_aar_never_gets_srcjar(self, make_tree) -> None:
        tree = make_tree(
            ("g:a:aar:1.0", "a.aar", []),
            ("g:a:jar:sources:1.0", "a-sources.jar", []),
        )
        decl = _imports(compile_tree(tree, fetch_sources=True))[0]
        assert decl.srcjar is None
        assert "srcjar" not in decl.render()


class TestPomOnly:
    def test_allow_listed_artifact_exports_dependencies(self, make_tree) -> None:
        tree = make_tree(
            ("org.apache.arrow:arrow-memory:1.0", None, ["g:b:1.0"]),
            ("g:b:1.0", "b.jar", []),
        )
        result = compile_tree(tree)
        export = result.declarations[0]
        assert isinstance(export, JavaLibraryExport)
        assert export.name == "org_apache_arrow_arrow_memory"
        assert export.exports == ("g_b",)
        assert result.aliases["org_apache_arrow_arrow_memory_1_0"] == "org_apache_arrow_arrow_memory"
        assert result.jar_versionless_labels == ("g_b",)

    def test_custom_allow_list(self, make_tree) -> None:
        tree = make_tree(("g:parent:1.0", None, []))
        assert compile_tree(tree, pom_only_artifacts={"g:parent"}).labels == ["g_parent"]


class TestMissingArtifact:
    def test_names_reverse_dependents(self, make_tree) -> None:
        tree = make_tree(
            ("g:a:1.0", None, []),
            ("g:b:1.0", "f/g/b/1.0/b.jar", ["g:a:1.0"]),
        )
        with pytest.raises(MissingArtifactError) as excinfo:
            compile_tree(tree)
        error = excinfo.value
        assert error.coord == "g:a:1.0"
        assert error.reverse_dependents == ["g:b:1.0"]
        assert "f/g/b/1.0/b.pom" in str(error)
        assert "jar,aar,bundle,eclipse-plugin,orbit,test-jar" in str(error)

    def test_without_reverse_dependents(self, make_tree) -> None:
        with pytest.raises(MissingArtifactError) as excinfo:
            compile_tree(make_tree(("g:a:1.0", None, [])))
        assert excinfo.value.reverse_dependents == []
        assert "depending on" not in str(excinfo.value)


class TestPinned:
    def test_copy_rule_per_file(self, junit_tree) -> None:
        result = GraphCompiler(pinned=True).compile(junit_tree)
        copies = [d for d in result.declarations if isinstance(d, CopyGenrule)]
        assert [c.name for c in copies] == [
            "junit_junit_4_12_extension",
            "org_hamcrest_hamcrest_core_1_3_extension",
        ]
        assert copies[0].out == junit_tree.artifacts[0].file

    def test_pinned_keeps_graph(self, junit_tree) -> None:
        live = GraphCompiler().compile(junit_tree)
        pinned = GraphCompiler(pinned=True).compile(junit_tree)
        assert (live.labels, live.edges, live.aliases) == (pinned.labels, pinned.edges, pinned.aliases)

    def test_sources_copy_rule(self, make_tree) -> None:
        tree = make_tree(
            ("g:a:1.0", "a.jar", []),
            ("g:a:jar:sources:1.0", "a-sources.jar", []),
        )
        result = GraphCompiler(pinned=True, fetch_sources=True).compile(tree)
        copies = [d.name for d in result.declarations if isinstance(d, CopyGenrule)]
        assert copies == ["g_a_jar_sources_1_0_extension", "g_a_1_0_extension"]
