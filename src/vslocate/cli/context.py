"""State shared by all subcommands through the Click context object."""

from __future__ import annotations

from dataclasses import dataclass, field

from vslocate.config import LocatorSettings
from vslocate.invoker import ProcessInvoker


@dataclass
class CliState:
    """Objects shared by all subcommands.

    Attributes:
        settings: Merged settings from file and environment.
        invoker: Process invoker override; None uses ``SubprocessInvoker``
            with the configured timeout.
    """

    settings: LocatorSettings = field(default_factory=LocatorSettings)
    invoker: ProcessInvoker | None = None
