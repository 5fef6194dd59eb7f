"""Installation state bit-set reported by vswhere.

vswhere serialises the setup configuration API's ``InstanceState`` as an
unsigned 32-bit integer. Each bit records one aspect of a healthy
installation; an instance whose every bit is set is ``COMPLETE``.

Bit Layout
----------
- ``LOCAL`` (1): the installation payload exists on disk.
- ``REGISTERED`` (2): the instance is registered with the setup engine.
- ``NO_REBOOT_REQUIRED`` (4): no pending reboot blocks the instance.
- ``NO_ERRORS`` (8): the last operation finished without package errors.
- ``COMPLETE`` (0xFFFFFFFF): all bits set, including reserved ones.
"""

from __future__ import annotations

from enum import IntFlag

# Largest value the wire encoding can carry.
STATE_MAX = 0xFFFFFFFF


class InstanceState(IntFlag):
    """Capability bits describing an installed instance."""

    NONE = 0
    LOCAL = 1
    REGISTERED = 2
    NO_REBOOT_REQUIRED = 4
    NO_ERRORS = 8
    LAUNCHABLE = LOCAL | REGISTERED | NO_ERRORS
    COMPLETE = STATE_MAX

    @classmethod
    def from_wire(cls, value: int) -> InstanceState:
        """Build a state from its unsigned integer encoding.

        Raises:
            ValueError: If *value* lies outside ``0..0xFFFFFFFF``.
        """
        if value < 0 or value > STATE_MAX:
            raise ValueError(f"state {value} is outside 0..{STATE_MAX}")
        return cls(value)

    @property
    def is_complete(self) -> bool:
        """True when every state bit is set."""
        return int(self) == STATE_MAX

    @property
    def is_launchable(self) -> bool:
        """True when the instance is local, registered, and error-free."""
        return (self & InstanceState.LAUNCHABLE) == InstanceState.LAUNCHABLE

    @property
    def is_registered(self) -> bool:
        """True when the instance is registered with the setup engine."""
        return bool(self & InstanceState.REGISTERED)
