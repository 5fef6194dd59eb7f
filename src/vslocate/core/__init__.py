"""Result types: versions, installation states, and instance records.

All public names are re-exported here so callers can write
``from vslocate.core import InstanceRecord, Version``.
"""

from vslocate.core.instance import (
    EXTRA_KEYS,
    FIELD_NAMES,
    NESTED_GROUPS,
    REQUIRED_FIELDS,
    InstanceRecord,
)
from vslocate.core.state import STATE_MAX, InstanceState
from vslocate.core.version import Version, VersionRange

__all__ = [
    "EXTRA_KEYS",
    "FIELD_NAMES",
    "InstanceRecord",
    "InstanceState",
    "NESTED_GROUPS",
    "REQUIRED_FIELDS",
    "STATE_MAX",
    "Version",
    "VersionRange",
]
