"""``mavenforge install <config>``: Generate repositories for a configuration.

With a lockfile configured, the repository is regenerated from the lockfile
and the resolver is not started. Without one, the resolver runs live.

Exit Codes:
    0: Repositories generated.
    1: Generation failed (configuration, resolver, or compiler error).
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from mavenforge.cli.output import print_error, print_repositories
from mavenforge.config import load_config
from mavenforge.core.resolution import install
from mavenforge.exceptions import MavenForgeError


@click.command("install")
@click.argument("config", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    type=click.Path(file_okay=False),
    default="external",
    help="Directory receiving one sub-directory per repository (default: external).",
)
@click.option(
    "--with-unpinned",
    is_flag=True,
    default=False,
    help="Also generate the live unpinned_<name> repository.",
)
def install_command(config: str, output: str, with_unpinned: bool) -> None:
    """Generate the repositories declared in CONFIG.

    Exit code 0 on success, 1 on any fatal error.
    """
    try:
        install_config = load_config(Path(config))
        outputs = install(install_config, Path(output), include_unpinned=with_unpinned)
    except MavenForgeError as exc:
        print_error(exc)
        sys.exit(1)

    print_repositories(outputs)
    click.echo(f"\nRepositories written to: {output}")
    sys.exit(0)
