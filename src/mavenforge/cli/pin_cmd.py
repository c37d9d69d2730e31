"""``mavenforge pin <config>``: Resolve live and write the lockfile.

Runs the resolver (as ``unpinned_<name>`` when the configuration already
names a lockfile), records every artifact's url and sha256, and writes the
lockfile for ``<name>``.

Exit Codes:
    0: Lockfile written.
    1: Resolution or compilation failed.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from mavenforge.cli.output import print_compilation_summary, print_error
from mavenforge.config import load_config
from mavenforge.core.lockfile import DEFAULT_LOCKFILE_NAME
from mavenforge.core.resolution import pin
from mavenforge.exceptions import MavenForgeError


@click.command("pin")
@click.argument("config", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    type=click.Path(file_okay=False),
    default="external",
    help="Directory receiving the live repository (default: external).",
)
@click.option(
    "--lockfile",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Lockfile path (default: configured lockfile, else <config dir>/{DEFAULT_LOCKFILE_NAME}).",
)
def pin_command(config: str, output: str, lockfile: str | None) -> None:
    """Resolve CONFIG and pin the result in a lockfile.

    Exit code 0 on success, 1 on any fatal error.
    """
    config_path = Path(config)
    try:
        install_config = load_config(config_path)
        target = Path(lockfile) if lockfile else (
            install_config.lockfile or config_path.parent / DEFAULT_LOCKFILE_NAME
        )
        repository, written = pin(install_config, Path(output), lockfile_path=target)
    except MavenForgeError as exc:
        print_error(exc)
        sys.exit(1)

    print_compilation_summary(repository.result, title=f"@{repository.name}")
    click.echo(f"\nLockfile written to: {written}")
    sys.exit(0)
