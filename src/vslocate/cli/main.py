"""vslocate CLI: locate Visual Studio instances from the command line.

Entry point for the ``vslocate`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    find  Run vswhere and list the matching instances.
    args  Print the vswhere arguments a query would use, without running it.

Usage::

    vslocate find                                   # Modern instances, table output
    vslocate find --min-version 16.0 --all          # Include incomplete installs
    vslocate find --mode legacy --output json
    vslocate find --path "C:\\Program Files\\Microsoft Visual Studio\\2022"
    vslocate args --require Microsoft.VisualStudio.Workload.NativeDesktop
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from vslocate import __version__
from vslocate.cli.args_cmd import args_command
from vslocate.cli.context import CliState
from vslocate.cli.find_cmd import find_command
from vslocate.config import load_settings
from vslocate.exceptions import SettingsError


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich.

    Verbose mode shows the library's DEBUG records (the vswhere command
    line, exit code, and decoded instance count); otherwise only warnings.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log the vswhere invocation.")
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file (executable, timeout, default_format).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """vslocate: Find installed Visual Studio instances via vswhere.

    Builds vswhere's arguments from typed options, runs it, and decodes
    its JSON, XML, or text output into instance records.
    """
    configure_logging(verbose)
    state = ctx.ensure_object(CliState)
    try:
        state.settings = load_settings(config_path)
    except SettingsError as exc:
        raise click.ClickException(str(exc)) from exc


# Register all subcommands
cli.add_command(find_command)
cli.add_command(args_command)
