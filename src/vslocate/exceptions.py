"""vslocate exception hierarchy.

All public exceptions inherit from VsLocateError, giving callers a single
base class to catch when they want to handle any vslocate-specific failure
without swallowing unrelated errors. Each subclass carries structured
attributes so callers can branch on the failure without parsing messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vslocate.selection.options import OutputFormat


class VsLocateError(Exception):
    """Base exception for all vslocate errors."""


class ConfigError(VsLocateError):
    """Raised when selection options conflict or are invalid.

    Raised at configuration time, before any process is started. Covers
    inverted version ranges, unparseable version bounds, and malformed
    product or component identifiers.

    Attributes:
        fields: Names of the selection fields involved in the conflict.
        message: Human-readable description of the problem.
    """

    def __init__(self, fields: tuple[str, ...] | str, message: str) -> None:
        if isinstance(fields, str):
            fields = (fields,)
        self.fields = tuple(fields)
        self.message = message
        super().__init__(f"{', '.join(self.fields)}: {message}")


class InvalidVersionError(VsLocateError, ValueError):
    """Raised when a version string cannot be parsed.

    Attributes:
        text: The full version string as supplied.
        segment: The offending dot-separated segment, or None when the
            string as a whole is malformed (empty, too many segments).
    """

    def __init__(self, text: str, segment: str | None, reason: str) -> None:
        self.text = text
        self.segment = segment
        self.reason = reason
        super().__init__(f"invalid version {text!r}: {reason}")


class InvocationError(VsLocateError):
    """Raised when vswhere could not be run or produced no usable output.

    Covers a missing or unstartable executable, a timeout imposed by the
    invoker, and a non-zero exit whose stdout does not decode.

    Attributes:
        executable: The executable that was invoked, if known.
        exit_code: Process exit code, or None if the process never ran.
        stderr: Decoded standard error output (may be empty).
    """

    def __init__(
        self,
        message: str,
        *,
        executable: str | None = None,
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        self.executable = executable
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(message)


class ParseError(VsLocateError):
    """Raised when vswhere output violates the declared format's grammar.

    Always fatal for the decode call: no partial result is returned.

    Attributes:
        output_format: The format the output was decoded as.
        message: Human-readable description of the problem.
        instance: Identifier of the offending instance (its ``instanceId``
            when known, otherwise ``#<position>``).
        segment: Offending version segment, element, or key, if any.
        line: 1-based line number for line-oriented formats.
    """

    def __init__(
        self,
        message: str,
        *,
        output_format: OutputFormat | None = None,
        instance: str | None = None,
        segment: str | None = None,
        line: int | None = None,
    ) -> None:
        self.message = message
        self.output_format = output_format
        self.instance = instance
        self.segment = segment
        self.line = line
        super().__init__(self._render())

    def _render(self) -> str:
        parts: list[str] = []
        if self.output_format is not None:
            parts.append(f"[{self.output_format.value}]")
        if self.instance is not None:
            parts.append(f"instance {self.instance}:")
        if self.line is not None:
            parts.append(f"line {self.line}:")
        parts.append(self.message)
        return " ".join(parts)


class SettingsError(VsLocateError):
    """Raised when the settings file or environment overrides are invalid."""
