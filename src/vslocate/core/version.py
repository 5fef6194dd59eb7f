"""Four-part installation versions and inclusive version ranges.

Visual Studio reports installation versions as ``major.minor.patch.build``
(e.g. ``16.11.34601.136``). ``Version`` always carries all four components,
padding absent trailing components with zero, so ordering is total and
``"15.0"`` compares equal to ``"15.0.0.0"``.

``VersionRange`` models the ``-version`` filter. vswhere accepts an interval
in the style ``[15.0,16.0)``; both bounds produced here are inclusive, and an
unset bound renders as an open side.
"""

from __future__ import annotations

from dataclasses import dataclass

from vslocate.exceptions import ConfigError, InvalidVersionError

# Maximum number of dot-separated components in an installation version.
_MAX_SEGMENTS = 4


@dataclass(frozen=True, order=True)
class Version:
    """A ``major.minor.patch.build`` version number.

    Instances compare lexicographically field by field, which is the
    ordering vswhere itself applies.

    Attributes:
        major: Major product version (15 = VS 2017, 16 = VS 2019, ...).
        minor: Minor release.
        patch: Build number of the release.
        build: Revision of the build.
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    build: int = 0

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch", "build"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidVersionError(
                    str(value), str(value), f"{name} must be a non-negative integer",
                )

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a dotted version string.

        Args:
            text: Version string with one to four numeric segments.

        Returns:
            The parsed ``Version`` with missing components set to 0.

        Raises:
            InvalidVersionError: If the string is empty, has more than four
                segments, or contains a segment that is not a non-negative
                decimal integer.
        """
        stripped = text.strip()
        if not stripped:
            raise InvalidVersionError(text, None, "version string is empty")

        segments = stripped.split(".")
        if len(segments) > _MAX_SEGMENTS:
            raise InvalidVersionError(
                text, None, f"expected at most {_MAX_SEGMENTS} segments, got {len(segments)}",
            )

        numbers: list[int] = []
        for segment in segments:
            if not segment or not (segment.isascii() and segment.isdigit()):
                raise InvalidVersionError(
                    text, segment, f"segment {segment!r} is not a non-negative integer",
                )
            numbers.append(int(segment))
        numbers.extend([0] * (_MAX_SEGMENTS - len(numbers)))
        return cls(*numbers)

    @classmethod
    def coerce(cls, value: Version | str) -> Version:
        """Return *value* as a ``Version``, parsing it if it is a string."""
        if isinstance(value, Version):
            return value
        if not isinstance(value, str):
            raise InvalidVersionError(
                repr(value), None, f"expected a version string, got {type(value).__name__}",
            )
        return cls.parse(value)

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return the version as a plain 4-tuple."""
        return (self.major, self.minor, self.patch, self.build)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}.{self.build}"


@dataclass(frozen=True)
class VersionRange:
    """An inclusive version interval; ``None`` marks an unbounded side.

    Attributes:
        lower: Minimum accepted version (inclusive), or None.
        upper: Maximum accepted version (inclusive), or None.

    Raises:
        ConfigError: If both bounds are set and ``lower > upper``.
    """

    lower: Version | None = None
    upper: Version | None = None

    def __post_init__(self) -> None:
        if self.lower is not None and self.upper is not None and self.lower > self.upper:
            raise ConfigError(
                ("min_version", "max_version"),
                f"minimum version {self.lower} is greater than maximum version {self.upper}",
            )

    @property
    def is_unbounded(self) -> bool:
        """True when neither bound is set."""
        return self.lower is None and self.upper is None

    def contains(self, version: Version) -> bool:
        """Check whether *version* lies within the range."""
        if self.lower is not None and version < self.lower:
            return False
        if self.upper is not None and version > self.upper:
            return False
        return True

    def render(self) -> str | None:
        """Render the range in vswhere's interval syntax.

        Returns:
            ``"[lo,hi]"``, ``"[lo,)"``, ``"(,hi]"``, or None when unbounded.
        """
        if self.lower is not None and self.upper is not None:
            return f"[{self.lower},{self.upper}]"
        if self.lower is not None:
            return f"[{self.lower},)"
        if self.upper is not None:
            return f"(,{self.upper}]"
        return None
