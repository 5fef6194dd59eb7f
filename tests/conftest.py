"""Shared fixtures for vslocate tests.

Provides a ``FakeInvoker`` that returns canned vswhere output and records
every call, plus realistic sample instances and payloads. No test spawns a
real process.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from pathlib import PureWindowsPath

import pytest

from vslocate.core import InstanceRecord, InstanceState, Version
from vslocate.invoker import InvocationResult


class FakeInvoker:
    """Process invoker double returning a fixed result.

    Attributes:
        result: The ``InvocationResult`` returned by every call.
        error: If set, raised instead of returning ``result``.
        calls: ``(executable, arguments)`` pairs in call order.
    """

    def __init__(
        self,
        stdout: bytes = b"",
        stderr: bytes = b"",
        exit_code: int = 0,
        error: Exception | None = None,
    ) -> None:
        self.result = InvocationResult(stdout=stdout, stderr=stderr, exit_code=exit_code)
        self.error = error
        self.calls: list[tuple[str, list[str]]] = []

    def __call__(self, executable: str, arguments: Sequence[str]) -> InvocationResult:
        self.calls.append((executable, list(arguments)))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_invoker() -> Callable[..., FakeInvoker]:
    """Factory for ``FakeInvoker`` instances."""
    return FakeInvoker


@pytest.fixture
def community_2022() -> InstanceRecord:
    """A complete Visual Studio 2022 Community instance."""
    return InstanceRecord(
        instance_id="a1b2c3d4",
        installation_path=PureWindowsPath(r"C:\Program Files\Microsoft Visual Studio\2022\Community"),
        installation_version=Version(17, 9, 34622, 214),
        display_name="Visual Studio Community 2022",
        product_id="Microsoft.VisualStudio.Product.Community",
        state=InstanceState.COMPLETE,
        properties={
            "isPrerelease": "false",
            "channelId": "VisualStudio.17.Release",
            "catalog_productDisplayVersion": "17.9.2",
            "properties_nickname": "",
        },
    )


@pytest.fixture
def buildtools_2019() -> InstanceRecord:
    """A Visual Studio 2019 Build Tools instance with a pending reboot."""
    return InstanceRecord(
        instance_id="e5f6a7b8",
        installation_path=PureWindowsPath(r"C:\Program Files (x86)\Microsoft Visual Studio\2019\BuildTools"),
        installation_version=Version(16, 11, 34601, 136),
        display_name="Visual Studio Build Tools 2019",
        product_id="Microsoft.VisualStudio.Product.BuildTools",
        state=InstanceState.LOCAL | InstanceState.REGISTERED | InstanceState.NO_ERRORS,
        properties={"isRebootRequired": "true"},
    )


@pytest.fixture
def two_instance_json() -> bytes:
    """vswhere ``-format json`` output with two instances, newest first."""
    payload = [
        {
            "instanceId": "a1b2c3d4",
            "installDate": "2024-03-01T10:00:00Z",
            "installationName": "VisualStudio/17.9.2+34622.214",
            "installationPath": "C:\\Program Files\\Microsoft Visual Studio\\2022\\Community",
            "installationVersion": "17.9.34622.214",
            "productId": "Microsoft.VisualStudio.Product.Community",
            "productPath": "C:\\Program Files\\Microsoft Visual Studio\\2022\\Community\\Common7\\IDE\\devenv.exe",
            "state": 4294967295,
            "isComplete": True,
            "isLaunchable": True,
            "isPrerelease": False,
            "isRebootRequired": False,
            "displayName": "Visual Studio Community 2022",
            "channelId": "VisualStudio.17.Release",
            "updateDate": "2024-03-01T10:00:00Z",
            "catalog": {
                "buildBranch": "d17.9",
                "productDisplayVersion": "17.9.2",
                "productLineVersion": "2022",
            },
            "properties": {
                "campaignId": "",
                "nickname": "",
                "setupEngineFilePath": "C:\\Program Files (x86)\\Microsoft Visual Studio\\Installer\\setup.exe",
            },
        },
        {
            "instanceId": "e5f6a7b8",
            "installationPath": "C:\\Program Files (x86)\\Microsoft Visual Studio\\2019\\BuildTools",
            "installationVersion": "16.11.34601.136",
            "productId": "Microsoft.VisualStudio.Product.BuildTools",
            "state": 11,
            "isRebootRequired": True,
            "displayName": "Visual Studio Build Tools 2019",
            "unknownFutureField": {"nested": [1, 2, 3]},
        },
    ]
    return json.dumps(payload, indent=2).encode("utf-8")
