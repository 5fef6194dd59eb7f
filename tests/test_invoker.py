"""Tests for SubprocessInvoker.

``subprocess.run`` is monkeypatched throughout; no process is started.
"""

from __future__ import annotations

import subprocess
from typing import Any

import pytest

from vslocate.exceptions import InvocationError
from vslocate.invoker import InvocationResult, SubprocessInvoker


class _Recorder:
    def __init__(self, result: Any = None, error: BaseException | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def __call__(self, command: list[str], **kwargs: Any) -> Any:
        self.calls.append((command, kwargs))
        if self.error is not None:
            raise self.error
        return self.result


class TestSubprocessInvoker:
    """Running vswhere through subprocess.run."""

    def test_argument_vector(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The command is an argv list, captured, without a shell."""
        completed = subprocess.CompletedProcess(["vswhere"], 0, stdout=b"[]", stderr=b"")
        recorder = _Recorder(result=completed)
        monkeypatch.setattr(subprocess, "run", recorder)

        result = SubprocessInvoker(timeout=5)("vswhere.exe", ["-format", "json"])

        command, kwargs = recorder.calls[0]
        assert command == ["vswhere.exe", "-format", "json"]
        assert kwargs["capture_output"] is True
        assert kwargs["check"] is False
        assert kwargs["timeout"] == 5
        assert "shell" not in kwargs
        assert result == InvocationResult(stdout=b"[]", stderr=b"", exit_code=0)

    def test_nonzero_exit_returned(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A non-zero exit is reported, not raised."""
        completed = subprocess.CompletedProcess(["vswhere"], 87, stdout=b"", stderr=b"bad\n")
        monkeypatch.setattr(subprocess, "run", _Recorder(result=completed))
        result = SubprocessInvoker()("vswhere", [])
        assert result.exit_code == 87
        assert result.stderr_text == "bad"

    def test_missing_executable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """OSError from the spawn becomes InvocationError."""
        error = FileNotFoundError(2, "No such file or directory")
        monkeypatch.setattr(subprocess, "run", _Recorder(error=error))
        with pytest.raises(InvocationError) as info:
            SubprocessInvoker()("missing.exe", [])
        assert info.value.executable == "missing.exe"
        assert info.value.exit_code is None
        assert "No such file" in str(info.value)

    def test_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A timeout becomes InvocationError."""
        error = subprocess.TimeoutExpired(["vswhere"], 3)
        monkeypatch.setattr(subprocess, "run", _Recorder(error=error))
        with pytest.raises(InvocationError, match="timed out"):
            SubprocessInvoker(timeout=3)("vswhere", [])

    def test_stderr_text_tolerates_bad_bytes(self) -> None:
        """Invalid UTF-8 in stderr is replaced rather than raised."""
        assert InvocationResult(stdout=b"", stderr=b"\xffoops").stderr_text == "�oops"
