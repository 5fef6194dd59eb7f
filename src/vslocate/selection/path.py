"""Selection of the instance that owns a filesystem path.

``-path`` resolves the single instance whose installation contains the given
path. vswhere accepts no other selection option alongside it, so only the
output format can be changed.
"""

from __future__ import annotations

import os
from typing import ClassVar

from vslocate.exceptions import ConfigError
from vslocate.selection.base import Selection
from vslocate.selection.options import FixedScope, OutputFormat


class PathSelection(Selection):
    """Query configuration for the ``-path`` vswhere grammar.

    Args:
        path: Any file or directory inside an installation.
        output_format: Requested output format (default JSON).

    Raises:
        ConfigError: If *path* is empty.
    """

    mode: ClassVar[str] = "path"

    def __init__(
        self,
        path: str | os.PathLike[str],
        output_format: OutputFormat | str = OutputFormat.JSON,
    ) -> None:
        text = os.fspath(path)
        if not text.strip():
            raise ConfigError("path", "instance path must not be empty")
        self._path = text
        super().__init__(output_format)

    @property
    def path(self) -> str:
        """The path whose owning instance is requested."""
        return self._path

    def _install_options(self) -> None:
        super()._install_options()
        self._add(FixedScope("path", ("-path", self._path)))
