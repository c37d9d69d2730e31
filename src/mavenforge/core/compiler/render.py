"""Rendering of generated repository files.

Turns compilation output into the three text files of a generated
repository: the ``BUILD`` file, the ``defs.bzl`` macro declaring one
``http_file`` per pinned artifact, and the optional ``compat.bzl`` macro of
old-style per-artifact repositories.
"""

from __future__ import annotations

from collections.abc import Iterable
from importlib import resources

from mavenforge.core.compiler.compiler import CompilationResult
from mavenforge.core.compiler.declarations import CompatRepository, HttpFile
from mavenforge.core.coordinates import escape
from mavenforge.core.dependency import DependencyTree
from mavenforge.exceptions import LockfileSchemaError

JVM_IMPORT_BZL = "jvm_import.bzl"
COMPAT_REPOSITORY_BZL = "compat_repository.bzl"

_BUILD = """load("@{repository_name}//:jvm_import.bzl", "jvm_import")

package(default_visibility = ["//visibility:public"])

{imports}
"""


def render_build_file(repository_name: str, result: CompilationResult) -> str:
    """Render the ``BUILD`` file of a generated repository."""
    return _BUILD.format(repository_name=repository_name, imports=result.render())


def http_files_for(tree: DependencyTree) -> list[HttpFile]:
    """One fetch declaration per artifact that carries a URL.

    Raises:
        LockfileSchemaError: If such an artifact has no sha256 to pin.
    """
    http_files: list[HttpFile] = []
    for artifact in tree:
        if artifact.url is None:
            continue
        if not artifact.sha256:
            raise LockfileSchemaError(
                f"Artifact {artifact.coord} has a url but no sha256, so it cannot "
                "be pinned. Regenerate the lockfile with `mavenforge pin <config>`."
            )
        http_files.append(
            HttpFile(name=escape(artifact.coord), url=artifact.url, sha256=artifact.sha256)
        )
    return http_files


def _macro(header: list[str], body: Iterable[str]) -> str:
    lines = list(header)
    rendered = list(body)
    lines.extend(rendered if rendered else ["    pass"])
    return "\n".join(lines) + "\n"


def render_pinned_defs(http_files: list[HttpFile]) -> str:
    """Render ``defs.bzl`` with the ``pinned_maven_install()`` macro."""
    return _macro(
        [
            'load("@bazel_tools//tools/build_defs/repo:http.bzl", "http_file")',
            "",
            "def pinned_maven_install():",
        ],
        (http_file.render() for http_file in http_files),
    )


def render_compat_repositories(repository_name: str, labels: Iterable[str]) -> str:
    """Render ``compat.bzl`` with the ``compat_repositories()`` macro."""
    return _macro(
        [
            f'load("@{repository_name}//:compat_repository.bzl", "compat_repository")',
            "",
            "def compat_repositories():",
        ],
        (CompatRepository(label, repository_name).render() for label in labels),
    )


def rule_template(filename: str) -> str:
    """Return a bundled Starlark rule definition copied into every repository."""
    return resources.files("mavenforge.templates").joinpath(filename).read_text(encoding="utf-8")
