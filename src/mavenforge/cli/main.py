"""MavenForge CLI --- deterministic build targets from Maven dependencies.

Entry point for the ``mavenforge`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    install  Generate repositories for a configuration.
    pin      Resolve live and write the lockfile.
    compile  Compile a resolver JSON or lockfile into a BUILD file.
    diff     Compare two lockfiles.

Usage::

    mavenforge pin maven_install.yaml
    mavenforge install maven_install.yaml --output external/
    mavenforge compile dep-tree.json --neverlink com.google.guava:guava
    mavenforge diff old/maven_install.json maven_install.json
"""

from __future__ import annotations

import logging

import click

from mavenforge import __version__
from mavenforge.cli.compile_cmd import compile_command
from mavenforge.cli.diff_cmd import diff_command
from mavenforge.cli.install_cmd import install_command
from mavenforge.cli.pin_cmd import pin_command

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbosity: int) -> None:
    """Map ``-v`` count to a log level: WARNING, INFO, DEBUG."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=_LOG_FORMAT)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-v, -vv).")
def cli(verbose: int) -> None:
    """MavenForge: reproducible build targets for Maven dependencies.

    Resolves Maven artifacts, pins them in a lockfile, and compiles the
    resolved dependency graph into deterministic build targets.
    """
    configure_logging(verbose)


# Register all subcommands
cli.add_command(install_command)
cli.add_command(pin_command)
cli.add_command(compile_command)
cli.add_command(diff_command)
