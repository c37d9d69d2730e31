"""Rich output formatting helpers for the MavenForge CLI.

Provides consistent terminal output for generated repositories, fatal
errors, and lockfile diffs.
"""

from __future__ import annotations

import json
from collections import Counter
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mavenforge.core.compiler import (
    Alias,
    CompilationResult,
    CopyGenrule,
    JavaLibraryExport,
    JvmImport,
)
from mavenforge.core.resolution import RepositoryOutput, ResolutionMode
from mavenforge.exceptions import MavenForgeError

_MODE_STYLES: dict[ResolutionMode, str] = {
    ResolutionMode.LIVE: "yellow",
    ResolutionMode.PINNED: "bold green",
}

console = Console()


def _kind(decl: Any) -> str:
    if isinstance(decl, JvmImport):
        return decl.rule_class
    if isinstance(decl, JavaLibraryExport):
        return "java_library"
    if isinstance(decl, Alias):
        return "alias"
    if isinstance(decl, CopyGenrule):
        return "genrule"
    return type(decl).__name__


def declaration_counts(result: CompilationResult) -> dict[str, int]:
    """Number of declarations per rule class."""
    return dict(Counter(_kind(decl) for decl in result.declarations))


def print_compilation_summary(result: CompilationResult, title: str = "Generated Targets") -> None:
    """Print a table of rule classes and how many of each were generated."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Rule", style="bold")
    table.add_column("Count", justify="right")
    for kind, count in sorted(declaration_counts(result).items()):
        table.add_row(kind, str(count))
    console.print(table)


def print_repositories(outputs: list[RepositoryOutput]) -> None:
    """Print one row per generated repository."""
    table = Table(title="Generated Repositories", show_header=True, header_style="bold")
    table.add_column("Repository", style="bold")
    table.add_column("Mode", justify="center")
    table.add_column("Artifacts", justify="right")
    table.add_column("Targets", justify="right")
    table.add_column("Jar Labels", justify="right")
    for output in outputs:
        table.add_row(
            f"@{output.name}",
            Text(output.mode.value, style=_MODE_STYLES.get(output.mode, "white")),
            str(len(output.dependency_tree)),
            str(len(output.result.labels)),
            str(len(output.result.jar_versionless_labels)),
        )
    console.print(table)


def print_error(error: MavenForgeError) -> None:
    """Print a fatal error in a red panel."""
    console.print(
        Panel(
            Text(str(error).strip()),
            title=f"[bold red]{type(error).__name__}[/bold red]",
            border_style="red",
        )
    )


def print_lockfile_diff(diff: dict[str, Any]) -> None:
    """Print added, removed and changed lockfile entries."""
    if not (diff["added"] or diff["removed"] or diff["changed"]):
        console.print("[green]Lockfiles are identical.[/green]")
        return
    for coord in diff["added"]:
        console.print(f"  [green]+ {coord}[/green]")
    for coord in diff["removed"]:
        console.print(f"  [red]- {coord}[/red]")
    if diff["changed"]:
        table = Table(title="Changed Artifacts", show_header=True)
        table.add_column("Coordinate", style="bold")
        table.add_column("Field")
        table.add_column("Old", style="dim")
        table.add_column("New")
        for change in diff["changed"]:
            table.add_row(change["coord"], change["field"], str(change["old"]), str(change["new"]))
        console.print(table)


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    console.print_json(json.dumps(data, default=str))
