"""Render a ``Selection`` into vswhere's command-line arguments.

``build_arguments`` is a pure function. Identical selections always yield
identical argument lists, and a selection that passed its setters'
validation cannot fail here.

Argument Order
--------------
1. ``-format <json|xml|text>``
2. ``-utf8``, always emitted, because the decoders assume UTF-8 input.
3. ``-nologo``, only for the text format, so the banner never reaches the
   decoder.
4. Scope flags: ``-legacy``, ``-path <p>``, ``-products <ids...>``.
5. Filter flags: ``-requires <ids...>``, ``-version <range>``.
6. Toggles: ``-all``, ``-prerelease``, ``-latest``, ``-requiresAny``.

Each token list is passed to the process as separate argv entries and is
never joined into a shell string.
"""

from __future__ import annotations

from vslocate.selection.base import Selection
from vslocate.selection.options import FILTER, SCOPE, TOGGLE, OptionGroup, OutputFormat

FORMAT_FLAG = "-format"
UTF8_FLAG = "-utf8"
NOLOGO_FLAG = "-nologo"

# Groups are emitted by phase, then by name order within a phase.
PHASE_ORDER: tuple[str, ...] = (SCOPE, FILTER, TOGGLE)
ARGUMENT_ORDER: tuple[str, ...] = (
    "legacy",
    "path",
    "products",
    "requires",
    "version",
    "all",
    "prerelease",
    "latest",
    "requires_any",
)


def build_arguments(selection: Selection) -> list[str]:
    """Build the ordered vswhere argument list for *selection*.

    Args:
        selection: Any selection variant.

    Returns:
        A new list of argument tokens, excluding the executable itself.
    """
    args: list[str] = [FORMAT_FLAG, selection.format.value, UTF8_FLAG]
    if selection.format is OutputFormat.TEXT:
        args.append(NOLOGO_FLAG)
    for group in sorted(selection.option_groups(), key=_emission_key):
        group.populate_args(args)
    return args


def _emission_key(group: OptionGroup) -> tuple[int, int]:
    return PHASE_ORDER.index(group.phase), ARGUMENT_ORDER.index(group.name)
