"""Tests for BUILD, defs.bzl and compat.bzl rendering."""

from __future__ import annotations

import pytest

from mavenforge.core.compiler import (
    COMPAT_REPOSITORY_BZL,
    JVM_IMPORT_BZL,
    HttpFile,
    compile_tree,
    http_files_for,
    render_build_file,
    render_compat_repositories,
    render_pinned_defs,
    rule_template,
)
from mavenforge.core.dependency import DependencyTree, ResolvedArtifact
from mavenforge.exceptions import LockfileSchemaError


class TestBuildFile:
    def test_header(self, junit_tree) -> None:
        text = render_build_file("maven", compile_tree(junit_tree))
        lines = text.splitlines()
        assert lines[0] == 'load("@maven//:jvm_import.bzl", "jvm_import")'
        assert 'package(default_visibility = ["//visibility:public"])' in lines
        assert 'name = "junit_junit",' in text
        assert text.endswith(")\n")


class TestPinnedDefs:
    def test_http_files_only_for_artifacts_with_url(self) -> None:
        tree = DependencyTree(artifacts=(
            ResolvedArtifact("g:a:1.0", file="a.jar", url="https://r/a.jar", sha256="ab"),
            ResolvedArtifact("g:p:1.0"),
        ))
        assert http_files_for(tree) == [HttpFile("g_a_1_0", "https://r/a.jar", "ab")]

    def test_url_without_sha256_cannot_be_pinned(self) -> None:
        tree = DependencyTree(artifacts=(
            ResolvedArtifact("g:a:1.0", file="a.jar", url="https://r/a.jar"),
        ))
        with pytest.raises(LockfileSchemaError, match="g:a:1.0"):
            http_files_for(tree)

    def test_macro(self) -> None:
        text = render_pinned_defs([HttpFile("g_a_1_0", "https://r/a.jar", "ab")])
        assert "def pinned_maven_install():" in text
        assert '        urls = ["https://r/a.jar"],' in text

    def test_empty_macro_body(self) -> None:
        assert render_pinned_defs([]).endswith("def pinned_maven_install():\n    pass\n")


class TestCompat:
    def test_one_repository_per_label(self) -> None:
        text = render_compat_repositories("maven", ["g_a", "g_b"])
        assert text.startswith('load("@maven//:compat_repository.bzl", "compat_repository")')
        assert text.count("compat_repository(\n") == 2
        assert 'name = "g_b",' in text


class TestRuleTemplates:
    def test_bundled_templates(self) -> None:
        assert "jvm_import = rule(" in rule_template(JVM_IMPORT_BZL)
        assert "compat_repository = repository_rule(" in rule_template(COMPAT_REPOSITORY_BZL)
