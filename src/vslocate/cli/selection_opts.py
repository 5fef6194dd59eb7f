"""Shared Click options that describe a vswhere query.

``selection_options`` attaches the query options to a command and
``build_selection`` turns their values into the matching ``Selection``
variant. Options the chosen mode does not support are usage errors, since
vswhere itself rejects e.g. ``-legacy`` combined with ``-requires``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import click

from vslocate.exceptions import ConfigError
from vslocate.selection import (
    LegacySelection,
    ModernSelection,
    OutputFormat,
    PathSelection,
    Selection,
)

F = TypeVar("F", bound=Callable[..., Any])

_FORMAT_CHOICES = [f.value for f in OutputFormat]


@dataclass
class QueryOptions:
    """Raw option values collected from the command line."""

    mode: str | None
    path: str | None
    output_format: str | None
    min_version: str | None
    max_version: str | None
    products: tuple[str, ...]
    requires: tuple[str, ...]
    requires_any: bool
    include_all: bool
    prerelease: bool
    latest: bool


def selection_options(func: F) -> F:
    """Attach the query options to a Click command."""
    options = [
        click.option(
            "--mode", type=click.Choice(["modern", "legacy", "path"]), default=None,
            help="Query grammar (default: path if --path is given, else modern).",
        ),
        click.option("--path", "instance_path", default=None, help="Find the instance owning PATH."),
        click.option(
            "--format", "output_format", type=click.Choice(_FORMAT_CHOICES), default=None,
            help="Format vswhere should print (default: from settings, else json).",
        ),
        click.option("--min-version", default=None, help="Lowest version to include, e.g. 16.0."),
        click.option("--max-version", default=None, help="Highest version to include (inclusive)."),
        click.option("--product", "products", multiple=True, help="Product ID allowlist entry; '*' for all."),
        click.option("--require", "requires", multiple=True, help="Required component or workload ID."),
        click.option("--requires-any", is_flag=True, help="Match any --require ID instead of all."),
        click.option("--all", "include_all", is_flag=True, help="Include incomplete instances."),
        click.option("--prerelease", is_flag=True, help="Include prerelease instances."),
        click.option("--latest", is_flag=True, help="Return only the newest instance."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def collect(kwargs: dict[str, Any]) -> QueryOptions:
    """Pop the query option values out of a command's keyword arguments."""
    return QueryOptions(
        mode=kwargs.pop("mode"),
        path=kwargs.pop("instance_path"),
        output_format=kwargs.pop("output_format"),
        min_version=kwargs.pop("min_version"),
        max_version=kwargs.pop("max_version"),
        products=kwargs.pop("products"),
        requires=kwargs.pop("requires"),
        requires_any=kwargs.pop("requires_any"),
        include_all=kwargs.pop("include_all"),
        prerelease=kwargs.pop("prerelease"),
        latest=kwargs.pop("latest"),
    )


def _reject(mode: str, names: list[str]) -> None:
    if names:
        raise click.UsageError(f"{', '.join(names)} cannot be used with --mode {mode}")


def build_selection(options: QueryOptions, default_format: OutputFormat) -> Selection:
    """Build the selection variant described by *options*.

    Raises:
        click.UsageError: If an option is not valid for the chosen mode, or
            the selection rejects a value (``ConfigError``).
    """
    mode = options.mode or ("path" if options.path is not None else "modern")
    output_format = options.output_format or default_format

    component_flags = [
        name for name, value in (
            ("--product", options.products),
            ("--require", options.requires),
            ("--requires-any", options.requires_any),
        ) if value
    ]
    range_and_toggles = [
        name for name, value in (
            ("--min-version", options.min_version),
            ("--max-version", options.max_version),
            ("--all", options.include_all),
            ("--prerelease", options.prerelease),
            ("--latest", options.latest),
        ) if value
    ]

    try:
        if mode == "path":
            if options.path is None:
                raise click.UsageError("--mode path requires --path")
            _reject(mode, component_flags + range_and_toggles)
            return PathSelection(options.path, output_format)

        if options.path is not None:
            raise click.UsageError(f"--path cannot be used with --mode {mode}")

        selection: ModernSelection | LegacySelection
        if mode == "legacy":
            _reject(mode, component_flags)
            selection = LegacySelection(output_format)
        else:
            selection = ModernSelection(output_format)
            selection.products(options.products).requires(options.requires)
            selection.requires_any(options.requires_any)

        return (
            selection
            .version(options.min_version, options.max_version)
            .all(options.include_all)
            .prerelease(options.prerelease)
            .latest(options.latest)
        )
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc
