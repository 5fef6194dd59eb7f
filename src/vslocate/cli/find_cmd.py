"""``vslocate find`` — Run vswhere and list the matching instances.

Exit Codes:
    0 — vswhere ran and its output decoded (including zero instances).
    1 — vswhere could not be run, or its output could not be decoded.
    2 — Invalid options (Click usage error).
"""

from __future__ import annotations

import sys
from typing import Any

import click

from vslocate.cli.context import CliState
from vslocate.cli.output import instances_to_json, print_instances
from vslocate.cli.selection_opts import build_selection, collect, selection_options
from vslocate.codecs import encode
from vslocate.config import resolve_executable
from vslocate.exceptions import InvocationError, ParseError
from vslocate.invoker import SubprocessInvoker
from vslocate.locator import Locator


@click.command("find")
@selection_options
@click.option("--vswhere", "executable", default=None, help="Path to vswhere.exe.")
@click.option(
    "--output", "output_mode",
    type=click.Choice(["table", "json", "native"]),
    default="table",
    help="table (default), json records, or re-encoded vswhere format.",
)
@click.pass_obj
def find_command(state: CliState, executable: str | None, output_mode: str, **kwargs: Any) -> None:
    """Find installed instances matching the query options.

    Runs vswhere with arguments built from the options and prints the
    decoded instances, ordered by version then instance ID.
    """
    selection = build_selection(collect(kwargs), state.settings.default_format)

    try:
        executable = executable or resolve_executable(state.settings)
        invoker = state.invoker or SubprocessInvoker(timeout=state.settings.timeout)
        records = Locator(executable, invoker).find(selection)
    except (InvocationError, ParseError) as exc:
        click.echo(f"Error: {exc}", err=True)
        if isinstance(exc, InvocationError) and exc.stderr:
            click.echo(exc.stderr, err=True)
        sys.exit(1)

    if output_mode == "json":
        click.echo(instances_to_json(records))
    elif output_mode == "native":
        click.echo(encode(selection.format, records).decode("utf-8"), nl=False)
    else:
        print_instances(records)
