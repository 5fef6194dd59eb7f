"""Selection for legacy instances.

``-legacy`` additionally reports Visual Studio 2015 and older, which only
expose an installation path and version. vswhere refuses ``-products`` and
``-requires`` in this mode, so ``LegacySelection`` has no such setters.
"""

from __future__ import annotations

from typing import ClassVar

from vslocate.selection.base import InclusionOptions, VersionOptions
from vslocate.selection.options import FixedScope


class LegacySelection(VersionOptions, InclusionOptions):
    """Query configuration for the ``-legacy`` vswhere grammar."""

    mode: ClassVar[str] = "legacy"

    def _install_options(self) -> None:
        super()._install_options()
        self._add(FixedScope("legacy", ("-legacy",)))
