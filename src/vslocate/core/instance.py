"""Instance records decoded from vswhere output.

An ``InstanceRecord`` is one installed product instance. The core fields are
mapped from vswhere's output by a fixed name table; every other recognised
attribute lands in the open-ended ``properties`` mapping, keyed by the
flattened name vswhere's text format uses (``catalog_buildVersion``,
``properties_nickname``, ...).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
from pathlib import PureWindowsPath
from typing import Any

from vslocate.core.state import InstanceState
from vslocate.core.version import Version

# Wire key -> InstanceRecord attribute for the core fields.
FIELD_NAMES: dict[str, str] = {
    "instanceId": "instance_id",
    "installationPath": "installation_path",
    "installationVersion": "installation_version",
    "displayName": "display_name",
    "productId": "product_id",
    "state": "state",
}

# Core fields every instance must carry.
REQUIRED_FIELDS: tuple[str, ...] = (
    "instanceId",
    "installationPath",
    "installationVersion",
)

# Scalar attributes kept verbatim in ``properties``.
EXTRA_KEYS: frozenset[str] = frozenset({
    "installDate",
    "installationName",
    "description",
    "channelId",
    "channelUri",
    "enginePath",
    "releaseNotes",
    "thirdPartyNotices",
    "updateDate",
    "productPath",
    "isComplete",
    "isLaunchable",
    "isPrerelease",
    "isRebootRequired",
    "layoutPath",
    "resolvedInstallationPath",
})

# Nested groups flattened into ``properties`` as ``<group>_<key>``.
NESTED_GROUPS: tuple[str, ...] = ("catalog", "properties")


def flatten_key(group: str, key: str) -> str:
    """Return the flattened property name for *key* inside *group*."""
    return f"{group}_{key}"


def split_property_key(name: str) -> tuple[str | None, str]:
    """Split a property name into ``(group, key)``.

    Returns ``(None, name)`` for top-level extras.
    """
    for group in NESTED_GROUPS:
        prefix = f"{group}_"
        if name.startswith(prefix) and len(name) > len(prefix):
            return group, name[len(prefix):]
    return None, name


def is_property_key(name: str) -> bool:
    """True if *name* is a recognised extra or a flattened group key."""
    if name in EXTRA_KEYS:
        return True
    group, _ = split_property_key(name)
    return group is not None


@total_ordering
@dataclass(eq=True)
class InstanceRecord:
    """A single installed instance discovered by vswhere.

    Records order by installation version, then by instance identifier, so
    any decoded list can be presented deterministically.

    Attributes:
        instance_id: Setup engine identifier (e.g., ``"3f6e4b7a"``).
        installation_path: Root directory of the installation.
        installation_version: Full four-part installed version.
        display_name: Product display name, if reported.
        product_id: Product identifier such as
            ``Microsoft.VisualStudio.Product.Community``, if reported.
        state: Installation state bit-set, if reported.
        properties: Additional attributes whose presence depends on the
            query flags and vswhere version.
    """

    instance_id: str
    installation_path: PureWindowsPath
    installation_version: Version
    display_name: str | None = None
    product_id: str | None = None
    state: InstanceState | None = None
    properties: dict[str, str] = field(default_factory=dict)

    def sort_key(self) -> tuple[Version, str]:
        """Key used for ordering: version, then identifier."""
        return (self.installation_version, self.instance_id)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, InstanceRecord):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable view keyed by wire field names."""
        return {
            "instanceId": self.instance_id,
            "installationPath": str(self.installation_path),
            "installationVersion": str(self.installation_version),
            "displayName": self.display_name,
            "productId": self.product_id,
            "state": int(self.state) if self.state is not None else None,
            "properties": dict(self.properties),
        }
