"""``mavenforge compile <tree>``: Compile a dependency tree into a BUILD file.

Reads either raw resolver output (``{"dependencies": [...]}``) or a
lockfile (``--lockfile``) and runs the graph compiler on it without starting
the resolver.

Exit Codes:
    0: BUILD file generated.
    1: The tree could not be read or compiled.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from mavenforge import DEFAULT_REPOSITORY_NAME
from mavenforge.cli.output import print_compilation_summary, print_error
from mavenforge.core.compiler import POM_ONLY_ARTIFACTS, GraphCompiler, render_build_file
from mavenforge.core.dependency import DependencyTree
from mavenforge.core.lockfile import Lockfile
from mavenforge.exceptions import MavenForgeError


def _load_tree(path: Path, is_lockfile: bool) -> DependencyTree:
    if is_lockfile:
        return Lockfile.read(path).dependency_tree
    try:
        return DependencyTree.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except ValueError as exc:
        raise MavenForgeError(f"Failed to read dependency tree {path}: {exc}") from exc


@click.command("compile")
@click.argument("tree", type=click.Path(exists=True, dir_okay=False))
@click.option("--lockfile", "is_lockfile", is_flag=True, default=False,
              help="TREE is a lockfile rather than raw resolver output.")
@click.option("--name", default=DEFAULT_REPOSITORY_NAME, show_default=True,
              help="Repository name used in the BUILD file.")
@click.option("--neverlink", multiple=True, metavar="GROUP:ARTIFACT",
              help="Mark an artifact compile-time only (repeatable).")
@click.option("--pom-only", multiple=True, metavar="GROUP:ARTIFACT",
              help="Allow an artifact without a file (repeatable).")
@click.option("--fetch-sources", is_flag=True, default=False,
              help="Attach sources artifacts to their primary target.")
@click.option("--pinned", is_flag=True, default=False,
              help="Emit copy rules from http_file repositories.")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write the BUILD file here instead of stdout.")
def compile_command(
    tree: str,
    is_lockfile: bool,
    name: str,
    neverlink: tuple[str, ...],
    pom_only: tuple[str, ...],
    fetch_sources: bool,
    pinned: bool,
    output: str | None,
) -> None:
    """Compile the dependency tree in TREE into build targets.

    Exit code 0 on success, 1 on any fatal error.
    """
    try:
        dependency_tree = _load_tree(Path(tree), is_lockfile)
        compiler = GraphCompiler(
            neverlink=set(neverlink),
            fetch_sources=fetch_sources,
            pinned=pinned,
            pom_only_artifacts=POM_ONLY_ARTIFACTS | set(pom_only),
        )
        result = compiler.compile(dependency_tree)
    except MavenForgeError as exc:
        print_error(exc)
        sys.exit(1)

    build_file = render_build_file(name, result)
    if output is None:
        click.echo(build_file, nl=False)
        sys.exit(0)

    out_path = Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(build_file, encoding="utf-8")
    print_compilation_summary(result)
    click.echo(f"\nBUILD file written to: {out_path}")
    sys.exit(0)
