"""Graph Compiler --- resolved dependency trees to build-target declarations.

The package is split into focused submodules:

- ``declarations``: frozen dataclasses for each generated rule.
- ``compiler``: ``GraphCompiler`` and ``CompilationResult``.
- ``diagnostics``: fatal error messages for unusable artifacts.
- ``special_artifacts``: the built-in POM-only allow-list.
- ``render``: BUILD / defs.bzl / compat.bzl text generation.
"""

from mavenforge.core.compiler.compiler import (
    CompilationResult,
    GraphCompiler,
    compile_tree,
)
from mavenforge.core.compiler.declarations import (
    Alias,
    CompatRepository,
    CopyGenrule,
    Declaration,
    HttpFile,
    JavaLibraryExport,
    JvmImport,
)
from mavenforge.core.compiler.diagnostics import descriptor_path
from mavenforge.core.compiler.render import (
    COMPAT_REPOSITORY_BZL,
    JVM_IMPORT_BZL,
    http_files_for,
    render_build_file,
    render_compat_repositories,
    render_pinned_defs,
    rule_template,
)
from mavenforge.core.compiler.special_artifacts import POM_ONLY_ARTIFACTS

__all__ = [
    "COMPAT_REPOSITORY_BZL",
    "JVM_IMPORT_BZL",
    "POM_ONLY_ARTIFACTS",
    "Alias",
    "CompatRepository",
    "CompilationResult",
    "CopyGenrule",
    "Declaration",
    "GraphCompiler",
    "HttpFile",
    "JavaLibraryExport",
    "JvmImport",
    "compile_tree",
    "descriptor_path",
    "http_files_for",
    "render_build_file",
    "render_compat_repositories",
    "render_pinned_defs",
    "rule_template",
]
