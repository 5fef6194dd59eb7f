"""Process invocation abstraction.

The locator never calls ``subprocess`` directly. It goes through a
``ProcessInvoker``, so tests can substitute a fake that returns canned
output and no real process is ever spawned in unit tests.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from vslocate.exceptions import InvocationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvocationResult:
    """Raw outcome of one vswhere run.

    Attributes:
        stdout: Captured standard output bytes.
        stderr: Captured standard error bytes.
        exit_code: Process exit status.
    """

    stdout: bytes
    stderr: bytes = b""
    exit_code: int = 0

    @property
    def stderr_text(self) -> str:
        """Standard error decoded leniently for diagnostics."""
        return self.stderr.decode("utf-8", errors="replace").strip()


class ProcessInvoker(Protocol):
    """Protocol for running vswhere. Implementations may run a process or
    return canned output."""

    def __call__(self, executable: str, arguments: Sequence[str]) -> InvocationResult:
        """Run *executable* with *arguments*.

        Raises:
            InvocationError: If the executable could not be started.
        """
        ...


class SubprocessInvoker:
    """Default invoker: runs vswhere via ``subprocess.run``.

    Arguments are passed as a vector and never through a shell. No timeout
    is applied unless one is given.

    Args:
        timeout: Seconds to wait before giving up, or None to wait forever.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def __call__(self, executable: str, arguments: Sequence[str]) -> InvocationResult:
        command = [executable, *arguments]
        logger.debug("Running %s", subprocess.list2cmdline(command))
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise InvocationError(
                f"{executable} timed out after {exc.timeout}s",
                executable=executable,
            ) from exc
        except OSError as exc:
            raise InvocationError(
                f"could not start {executable}: {exc.strerror or exc}",
                executable=executable,
            ) from exc

        logger.debug(
            "%s exited with code %d (%d bytes of output)",
            executable, completed.returncode, len(completed.stdout),
        )
        return InvocationResult(
            stdout=completed.stdout,
            stderr=completed.stderr,
            exit_code=completed.returncode,
        )
