"""vslocate: Typed discovery of Visual Studio instances via vswhere."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

from vslocate.arguments import build_arguments
from vslocate.codecs import decode, encode
from vslocate.core import InstanceRecord, InstanceState, Version, VersionRange
from vslocate.exceptions import (
    ConfigError,
    InvalidVersionError,
    InvocationError,
    ParseError,
    SettingsError,
    VsLocateError,
)
from vslocate.invoker import InvocationResult, ProcessInvoker, SubprocessInvoker
from vslocate.locator import Locator
from vslocate.selection import (
    LegacySelection,
    ModernSelection,
    OutputFormat,
    PathSelection,
    Selection,
)

__all__ = [
    "ConfigError",
    "InstanceRecord",
    "InstanceState",
    "InvalidVersionError",
    "InvocationError",
    "InvocationResult",
    "LegacySelection",
    "Locator",
    "ModernSelection",
    "OutputFormat",
    "ParseError",
    "PathSelection",
    "ProcessInvoker",
    "Selection",
    "SettingsError",
    "SubprocessInvoker",
    "Version",
    "VersionRange",
    "VsLocateError",
    "build_arguments",
    "decode",
    "encode",
]
