"""Selection for modern (side-by-side installable) instances.

Covers Visual Studio 2017 and later. This is the only grammar that can
filter by product and by installed component or workload.
"""

from __future__ import annotations

from typing import ClassVar

from vslocate.selection.base import ComponentOptions, InclusionOptions, VersionOptions


class ModernSelection(ComponentOptions, VersionOptions, InclusionOptions):
    """Query configuration for the component-based vswhere grammar.

    Usage::

        selection = ModernSelection().min_version("15.0").all()
        args = build_arguments(selection)
        # ["-format", "json", "-utf8", "-version", "[15.0.0.0,)", "-all"]
    """

    mode: ClassVar[str] = "modern"
