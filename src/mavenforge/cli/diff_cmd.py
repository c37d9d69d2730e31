"""``mavenforge diff <old> <new>``: Compare two lockfiles.

Exit Codes:
    0: Lockfiles are identical.
    1: A lockfile could not be read.
    3: Lockfiles differ.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from mavenforge.cli.output import print_error, print_json, print_lockfile_diff
from mavenforge.core.lockfile import Lockfile
from mavenforge.exceptions import MavenForgeError


@click.command("diff")
@click.argument("old", type=click.Path(exists=True, dir_okay=False))
@click.argument("new", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Print the diff as JSON.")
def diff_command(old: str, new: str, as_json: bool) -> None:
    """Show artifacts added, removed or changed between OLD and NEW."""
    try:
        diff = Lockfile.read(Path(old)).diff(Lockfile.read(Path(new)))
    except MavenForgeError as exc:
        print_error(exc)
        sys.exit(1)

    if as_json:
        print_json(diff)
    else:
        print_lockfile_diff(diff)
    changed = diff["added"] or diff["removed"] or diff["changed"]
    sys.exit(3 if changed else 0)
