"""Settings for locating and running vswhere.

Settings come from three layers, later layers overriding earlier ones:

1. Built-in defaults (no explicit executable, no timeout, JSON output).
2. An optional YAML settings file::

       executable: C:\\Tools\\vswhere.exe
       timeout: 30
       default_format: xml

3. Environment variables: ``VSWHERE`` (executable path) and
   ``VSLOCATE_TIMEOUT`` (seconds).

``resolve_executable`` turns the settings into a concrete path, falling back
to the Visual Studio Installer's standard location and then to ``PATH``.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import Any

import yaml

from vslocate.exceptions import InvocationError, SettingsError
from vslocate.selection.options import OutputFormat

ENV_EXECUTABLE = "VSWHERE"
ENV_TIMEOUT = "VSLOCATE_TIMEOUT"

# vswhere ships with the Visual Studio Installer at this location.
INSTALLER_RELATIVE_PATH = PureWindowsPath("Microsoft Visual Studio", "Installer", "vswhere.exe")

_KNOWN_KEYS = frozenset({"executable", "timeout", "default_format"})


@dataclass
class LocatorSettings:
    """Resolved settings for running vswhere.

    Attributes:
        executable: Explicit path to vswhere, or None to search for it.
        timeout: Seconds before the invoker gives up, or None for no limit.
        default_format: Output format used when a query does not pick one.
    """

    executable: str | None = None
    timeout: float | None = None
    default_format: OutputFormat = OutputFormat.JSON


def _parse_timeout(value: Any, source: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise SettingsError(f"{source}: timeout must be a number, got {value!r}")
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise SettingsError(f"{source}: timeout must be a number, got {value!r}") from None
    if timeout <= 0:
        raise SettingsError(f"{source}: timeout must be positive, got {value!r}")
    return timeout


def _apply_mapping(settings: LocatorSettings, data: Mapping[str, Any], source: str) -> None:
    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise SettingsError(f"{source}: unknown setting(s): {', '.join(sorted(unknown))}")

    if "executable" in data:
        executable = data["executable"]
        if executable is not None and not isinstance(executable, str):
            raise SettingsError(f"{source}: executable must be a string, got {executable!r}")
        settings.executable = executable or None
    if "timeout" in data:
        settings.timeout = _parse_timeout(data["timeout"], source)
    if "default_format" in data:
        try:
            settings.default_format = OutputFormat(data["default_format"])
        except ValueError:
            raise SettingsError(
                f"{source}: default_format must be one of json, xml, text, "
                f"got {data['default_format']!r}"
            ) from None


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> LocatorSettings:
    """Load settings from an optional YAML file and the environment.

    Args:
        path: YAML settings file, or None to skip the file layer.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        The merged ``LocatorSettings``.

    Raises:
        SettingsError: If the file cannot be read or parsed, or a value has
            the wrong type.
    """
    env = os.environ if environ is None else environ
    settings = LocatorSettings()

    if path is not None:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"cannot read settings file {path}: {exc}") from exc
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise SettingsError(f"invalid YAML in {path}: {exc}") from exc
        if data is not None:
            if not isinstance(data, dict):
                raise SettingsError(f"{path}: top level must be a mapping")
            _apply_mapping(settings, data, str(path))

    if env.get(ENV_EXECUTABLE):
        settings.executable = env[ENV_EXECUTABLE]
    if env.get(ENV_TIMEOUT):
        settings.timeout = _parse_timeout(env[ENV_TIMEOUT], ENV_TIMEOUT)
    return settings


def resolve_executable(
    settings: LocatorSettings,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Find the vswhere executable to run.

    Order: the explicit setting, the Visual Studio Installer's location under
    ``%ProgramFiles(x86)%`` (then ``%ProgramFiles%``), and finally ``vswhere``
    on ``PATH``.

    Raises:
        InvocationError: If no executable can be found.
    """
    if settings.executable:
        return settings.executable

    env = os.environ if environ is None else environ
    for variable in ("ProgramFiles(x86)", "ProgramFiles"):
        root = env.get(variable)
        if not root:
            continue
        candidate = Path(root, *INSTALLER_RELATIVE_PATH.parts)
        if candidate.is_file():
            return str(candidate)

    found = shutil.which("vswhere", path=env.get("PATH"))
    if found:
        return found
    raise InvocationError(
        "vswhere executable not found; set VSWHERE or pass --vswhere",
    )
