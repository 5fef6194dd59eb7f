"""Selection model: typed query configurations for vswhere.

Public API::

    from vslocate.selection import ModernSelection, LegacySelection, PathSelection

    modern = ModernSelection().products("*").requires_any().prerelease()
    legacy = LegacySelection().max_version("14.0")
    owner = PathSelection(r"C:\\Program Files\\Microsoft Visual Studio\\2022")
"""

from __future__ import annotations

from vslocate.selection.base import (
    ComponentOptions,
    InclusionOptions,
    Selection,
    VersionOptions,
)
from vslocate.selection.legacy import LegacySelection
from vslocate.selection.modern import ModernSelection
from vslocate.selection.options import OptionGroup, OutputFormat
from vslocate.selection.path import PathSelection

__all__ = [
    "ComponentOptions",
    "InclusionOptions",
    "LegacySelection",
    "ModernSelection",
    "OptionGroup",
    "OutputFormat",
    "PathSelection",
    "Selection",
    "VersionOptions",
]
