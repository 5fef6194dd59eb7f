"""End-to-end pipeline: build arguments, run vswhere, decode its output.

Exit-Code Policy
----------------
vswhere's exit codes are inconsistent across versions; some builds exit
non-zero when nothing matched. The decoded stdout is therefore the arbiter:

1. Stdout that decodes cleanly under the declared format is success, whatever
   the exit code. Empty stdout decodes to an empty list.
2. A non-zero exit whose stdout does not decode is an ``InvocationError``
   carrying the exit code and stderr, chained from the ``ParseError``.
3. A zero exit whose stdout does not decode re-raises the ``ParseError``.
"""

from __future__ import annotations

import logging

from vslocate.arguments import build_arguments
from vslocate.codecs import decode
from vslocate.core.instance import InstanceRecord
from vslocate.exceptions import InvocationError, ParseError
from vslocate.invoker import ProcessInvoker, SubprocessInvoker
from vslocate.selection.base import Selection

logger = logging.getLogger(__name__)


class Locator:
    """Locates installed instances by running vswhere.

    A ``Locator`` holds no per-call state, so one instance can serve
    concurrent callers.

    Usage::

        locator = Locator(r"C:\\Program Files (x86)\\Microsoft Visual Studio\\Installer\\vswhere.exe")
        for instance in locator.find(ModernSelection().min_version("16.0")):
            print(instance.display_name, instance.installation_path)

    Args:
        executable: Path to ``vswhere.exe``.
        invoker: Process invoker; defaults to ``SubprocessInvoker()``.
    """

    def __init__(self, executable: str, invoker: ProcessInvoker | None = None) -> None:
        self.executable = executable
        self.invoker: ProcessInvoker = invoker if invoker is not None else SubprocessInvoker()

    def arguments(self, selection: Selection) -> list[str]:
        """Return the argument list ``find`` would pass for *selection*."""
        return build_arguments(selection)

    def find(self, selection: Selection) -> list[InstanceRecord]:
        """Run vswhere for *selection* and decode the matching instances.

        Returns:
            Instance records sorted by version, then identifier. An empty
            list means no instance matched.

        Raises:
            InvocationError: If vswhere could not be run, or exited non-zero
                with output that does not decode.
            ParseError: If vswhere exited zero but its output is malformed.
        """
        arguments = build_arguments(selection)
        result = self.invoker(self.executable, arguments)
        try:
            records = decode(selection.format, result.stdout)
        except ParseError as exc:
            if result.exit_code != 0:
                raise InvocationError(
                    f"{self.executable} exited with code {result.exit_code} "
                    f"and produced no usable output",
                    executable=self.executable,
                    exit_code=result.exit_code,
                    stderr=result.stderr_text,
                ) from exc
            raise
        logger.debug(
            "Decoded %d instance(s) from %s output (exit code %d)",
            len(records), selection.format.value, result.exit_code,
        )
        return records
