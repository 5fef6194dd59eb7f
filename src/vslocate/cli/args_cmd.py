"""``vslocate args`` — Print the vswhere arguments for a query.

Nothing is executed. Useful for checking what ``find`` would run, or for
feeding the arguments to vswhere by hand.
"""

from __future__ import annotations

import json
import subprocess
from typing import Any

import click

from vslocate.arguments import build_arguments
from vslocate.cli.context import CliState
from vslocate.cli.selection_opts import build_selection, collect, selection_options


@click.command("args")
@selection_options
@click.option(
    "--json", "as_json", is_flag=True,
    help="Print the arguments as a JSON array instead of a command line.",
)
@click.pass_obj
def args_command(state: CliState, as_json: bool, **kwargs: Any) -> None:
    """Print the vswhere argument list for the query options."""
    selection = build_selection(collect(kwargs), state.settings.default_format)
    arguments = build_arguments(selection)
    if as_json:
        click.echo(json.dumps(arguments))
    else:
        click.echo(subprocess.list2cmdline(arguments))
