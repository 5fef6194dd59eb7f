"""Option groups that render individual vswhere flags.

Each option group owns one concern of a query (a toggle, an ID list, the
version filter, a fixed scope flag) and knows how to append its tokens to an
argument collector. Groups that are unset append nothing, so a selection's
argument list contains only what the caller asked for.

Every group carries a ``phase`` that decides where its tokens are emitted,
and a ``name`` that orders groups within a phase (see
``vslocate.arguments.build_arguments``):

- ``scope``: which instances are considered at all (``-legacy``, ``-path``,
  ``-products``).
- ``filter``: conditions instances must meet (``-requires``, ``-version``).
- ``toggle``: boolean switches (``-all``, ``-prerelease``, ...).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from vslocate.core.version import VersionRange

SCOPE = "scope"
FILTER = "filter"
TOGGLE = "toggle"


class OutputFormat(str, Enum):
    """Output formats vswhere can produce; the value is the ``-format`` token."""

    JSON = "json"
    XML = "xml"
    TEXT = "text"


class OptionGroup(ABC):
    """A single selection concern that can render itself as arguments."""

    name: str
    phase: str

    @abstractmethod
    def populate_args(self, args: list[str]) -> None:
        """Append this group's tokens to *args* (nothing if unset)."""


@dataclass
class Toggle(OptionGroup):
    """A boolean switch rendered as a bare flag when enabled."""

    name: str
    token: str
    enabled: bool = False
    phase: str = TOGGLE

    def populate_args(self, args: list[str]) -> None:
        if self.enabled:
            args.append(self.token)


@dataclass
class IdList(OptionGroup):
    """A flag followed by one or more identifiers.

    Identifiers are stored deduplicated and sorted, so two selections built
    from the same set in any order render identically.
    """

    name: str
    token: str
    phase: str
    ids: tuple[str, ...] = ()

    def populate_args(self, args: list[str]) -> None:
        if self.ids:
            args.append(self.token)
            args.extend(self.ids)


@dataclass
class VersionFilter(OptionGroup):
    """The ``-version`` interval filter."""

    name: str = "version"
    range: VersionRange = field(default_factory=VersionRange)
    phase: str = FILTER

    def populate_args(self, args: list[str]) -> None:
        rendered = self.range.render()
        if rendered is not None:
            args.extend(["-version", rendered])


@dataclass
class FixedScope(OptionGroup):
    """Tokens a selection variant always emits (``-legacy``, ``-path <p>``)."""

    name: str
    tokens: tuple[str, ...]
    phase: str = SCOPE

    def populate_args(self, args: list[str]) -> None:
        args.extend(self.tokens)
