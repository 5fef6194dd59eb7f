"""Selection base class and capability mixins.

vswhere has incompatible argument grammars: the modern, component-based
query; the ``-legacy`` query that also reports pre-2017 products but cannot
filter by product or component; and the ``-path`` query that resolves the
single instance owning a directory and accepts no other selection option.

Rather than one flat configuration object with runtime-checked combinations,
each grammar is a ``Selection`` subclass assembled from capability mixins.
A variant only has the setters of the mixins it inherits, so
``LegacySelection().products("*")`` is rejected by a type checker and fails
with ``AttributeError`` at runtime.

Every setter validates locally, raises ``ConfigError`` on a conflict, and
returns the selection itself for chaining::

    selection = (
        ModernSelection()
        .min_version("16.0")
        .requires("Microsoft.VisualStudio.Component.VC.Tools.x86.x64")
        .prerelease()
    )
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar, TypeVar, cast

from vslocate.core.version import Version, VersionRange
from vslocate.exceptions import ConfigError, InvalidVersionError
from vslocate.selection.options import (
    FILTER,
    SCOPE,
    IdList,
    OptionGroup,
    OutputFormat,
    Toggle,
    VersionFilter,
)

_S = TypeVar("_S", bound="Selection")
_G = TypeVar("_G", bound=OptionGroup)


class Selection:
    """Common state of every selection variant: the output format and the
    registered option groups.

    Subclasses register their groups in ``_install_options``; mixins extend
    it cooperatively through ``super()``.
    """

    mode: ClassVar[str] = "base"

    def __init__(self, output_format: OutputFormat | str = OutputFormat.JSON) -> None:
        self._format = OutputFormat.JSON
        self._groups: dict[str, OptionGroup] = {}
        self._install_options()
        self.output_format(output_format)

    def _install_options(self) -> None:
        """Register option groups. Extended by mixins and variants."""

    def _add(self, group: OptionGroup) -> None:
        self._groups[group.name] = group

    def _get(self, name: str, kind: type[_G]) -> _G:
        return cast(_G, self._groups[name])

    def _toggle(self: _S, name: str, value: bool) -> _S:
        self._get(name, Toggle).enabled = bool(value)
        return self

    @property
    def format(self) -> OutputFormat:
        """The output format vswhere is asked to produce."""
        return self._format

    def output_format(self: _S, value: OutputFormat | str) -> _S:
        """Set the output format (json, xml, or text).

        Raises:
            ConfigError: If *value* is not a supported format.
        """
        try:
            self._format = OutputFormat(value)
        except ValueError:
            supported = ", ".join(f.value for f in OutputFormat)
            raise ConfigError("format", f"unsupported format {value!r}; expected one of {supported}") from None
        return self

    def option_group(self, name: str) -> OptionGroup | None:
        """Return the named option group, or None if this variant lacks it."""
        return self._groups.get(name)

    def option_groups(self) -> list[OptionGroup]:
        """Return every option group this variant registered."""
        return list(self._groups.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selection):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._format == other._format
            and self._groups == other._groups
        )

    def __repr__(self) -> str:
        groups = ", ".join(repr(g) for g in self._groups.values())
        return f"{type(self).__name__}(format={self._format.value!r}, {groups})"


class InclusionOptions(Selection):
    """``-all``, ``-prerelease``, and ``-latest`` switches."""

    def _install_options(self) -> None:
        super()._install_options()
        self._add(Toggle("all", "-all"))
        self._add(Toggle("prerelease", "-prerelease"))
        self._add(Toggle("latest", "-latest"))

    def all(self: _S, value: bool = True) -> _S:
        """Include incomplete and non-launchable instances.

        The default is False.
        """
        return self._toggle("all", value)

    def prerelease(self: _S, value: bool = True) -> _S:
        """Include prerelease (Preview) instances. The default is False."""
        return self._toggle("prerelease", value)

    def latest(self: _S, value: bool = True) -> _S:
        """Report only the newest matching instance. The default is False."""
        return self._toggle("latest", value)


def _coerce_bound(field_name: str, value: Version | str | None) -> Version | None:
    if value is None:
        return None
    try:
        return Version.coerce(value)
    except InvalidVersionError as exc:
        raise ConfigError(field_name, str(exc)) from exc


class VersionOptions(Selection):
    """The ``-version`` range filter.

    Both bounds are inclusive; ``None`` leaves a side open. Setting a bound
    that would invert the range raises ``ConfigError`` and leaves the
    current range untouched.
    """

    def _install_options(self) -> None:
        super()._install_options()
        self._add(VersionFilter())

    @property
    def version_range(self) -> VersionRange:
        """The currently configured version range."""
        return self._get("version", VersionFilter).range

    def _set_range(self: _S, lower: Version | None, upper: Version | None) -> _S:
        self._get("version", VersionFilter).range = VersionRange(lower, upper)
        return self

    def version(
        self: _S,
        lower: Version | str | None = None,
        upper: Version | str | None = None,
    ) -> _S:
        """Set both bounds at once; either may be None."""
        return self._set_range(
            _coerce_bound("min_version", lower),
            _coerce_bound("max_version", upper),
        )

    def min_version(self: _S, value: Version | str | None) -> _S:
        """Set the lower bound, keeping the current upper bound."""
        return self._set_range(_coerce_bound("min_version", value), self.version_range.upper)

    def max_version(self: _S, value: Version | str | None) -> _S:
        """Set the upper bound, keeping the current lower bound."""
        return self._set_range(self.version_range.lower, _coerce_bound("max_version", value))


def _normalize_ids(field_name: str, ids: tuple[str | Iterable[str], ...]) -> tuple[str, ...]:
    if len(ids) == 1 and not isinstance(ids[0], str):
        ids = tuple(ids[0])
    cleaned: set[str] = set()
    for item in ids:
        if not isinstance(item, str) or not item:
            raise ConfigError(field_name, f"identifier {item!r} must be a non-empty string")
        if any(ch.isspace() for ch in item):
            raise ConfigError(field_name, f"identifier {item!r} must not contain whitespace")
        cleaned.add(item)
    return tuple(sorted(cleaned))


class ComponentOptions(Selection):
    """Product and component/workload allowlists (modern grammar only)."""

    def _install_options(self) -> None:
        super()._install_options()
        self._add(IdList("products", "-products", SCOPE))
        self._add(IdList("requires", "-requires", FILTER))
        self._add(Toggle("requires_any", "-requiresAny"))

    def _set_ids(self: _S, name: str, ids: tuple[str | Iterable[str], ...]) -> _S:
        self._get(name, IdList).ids = _normalize_ids(name, ids)
        return self

    def products(self: _S, *ids: str | Iterable[str]) -> _S:
        """Set the product ID allowlist; ``"*"`` matches every product.

        With no IDs, vswhere falls back to its default allowlist (the
        Community, Professional, and Enterprise editions).
        """
        return self._set_ids("products", ids)

    def requires(self: _S, *ids: str | Iterable[str]) -> _S:
        """Set the component/workload IDs every instance must have."""
        return self._set_ids("requires", ids)

    def requires_any(self: _S, value: bool = True) -> _S:
        """Match instances having at least one required ID instead of all."""
        return self._toggle("requires_any", value)
