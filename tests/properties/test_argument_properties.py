"""Property-based tests for argument building determinism.

Verifies that for any valid modern selection:
- The argument list always starts with the format prologue.
- Building twice yields identical lists.
- The order of setter calls never changes the result.
- Scope flags precede filters, which precede toggles.
"""
from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from vslocate.arguments import build_arguments
from vslocate.core.version import Version
from vslocate.selection import ModernSelection, OutputFormat


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

identifiers = st.lists(
    st.from_regex(r"[A-Za-z][A-Za-z0-9.]{0,30}", fullmatch=True),
    max_size=5,
)
versions = st.builds(
    Version,
    st.integers(0, 20),
    st.integers(0, 20),
    st.integers(0, 50000),
    st.integers(0, 500),
)
formats = st.sampled_from(list(OutputFormat))


@st.composite
def version_bounds(draw: st.DrawFn) -> tuple[Version | None, Version | None]:
    """Draw an ordered (lower, upper) pair where either side may be absent."""
    a = draw(st.none() | versions)
    b = draw(st.none() | versions)
    if a is not None and b is not None and a > b:
        a, b = b, a
    return a, b


@st.composite
def modern_settings(draw: st.DrawFn) -> dict[str, object]:
    """Draw the raw inputs for a modern selection."""
    lower, upper = draw(version_bounds())
    return {
        "format": draw(formats),
        "products": draw(identifiers),
        "requires": draw(identifiers),
        "lower": lower,
        "upper": upper,
        "all": draw(st.booleans()),
        "prerelease": draw(st.booleans()),
        "latest": draw(st.booleans()),
        "requires_any": draw(st.booleans()),
    }


def _forward(s: dict[str, object]) -> ModernSelection:
    return (
        ModernSelection(s["format"])  # type: ignore[arg-type]
        .products(s["products"])  # type: ignore[arg-type]
        .requires(s["requires"])  # type: ignore[arg-type]
        .version(s["lower"], s["upper"])  # type: ignore[arg-type]
        .all(bool(s["all"]))
        .prerelease(bool(s["prerelease"]))
        .latest(bool(s["latest"]))
        .requires_any(bool(s["requires_any"]))
    )


def _backward(s: dict[str, object]) -> ModernSelection:
    return (
        ModernSelection()
        .requires_any(bool(s["requires_any"]))
        .latest(bool(s["latest"]))
        .prerelease(bool(s["prerelease"]))
        .all(bool(s["all"]))
        .max_version(s["upper"])  # type: ignore[arg-type]
        .min_version(s["lower"])  # type: ignore[arg-type]
        .requires(list(reversed(s["requires"])))  # type: ignore[call-overload]
        .products(list(reversed(s["products"])))  # type: ignore[call-overload]
        .output_format(s["format"])  # type: ignore[arg-type]
    )


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestArgumentDeterminism:
    """Arguments depend only on the configured values."""

    @given(settings=modern_settings())
    def test_prologue(self, settings: dict[str, object]) -> None:
        """-format <fmt> -utf8 always comes first."""
        args = build_arguments(_forward(settings))
        fmt = settings["format"]
        assert isinstance(fmt, OutputFormat)
        assert args[:3] == ["-format", fmt.value, "-utf8"]
        assert args.count("-format") == 1
        assert args.count("-utf8") == 1
        assert ("-nologo" in args) == (fmt is OutputFormat.TEXT)

    @given(settings=modern_settings())
    def test_repeatable(self, settings: dict[str, object]) -> None:
        """Building twice gives the same list."""
        selection = _forward(settings)
        assert build_arguments(selection) == build_arguments(selection)

    @given(settings=modern_settings())
    def test_call_order_irrelevant(self, settings: dict[str, object]) -> None:
        """Setters applied in any order produce equal selections and args."""
        forward = _forward(settings)
        backward = _backward(settings)
        assert forward == backward
        assert build_arguments(forward) == build_arguments(backward)

    @given(settings=modern_settings())
    def test_group_ordering(self, settings: dict[str, object]) -> None:
        """Scope flags precede filters, which precede toggles."""
        args = build_arguments(_forward(settings))
        order = ["-products", "-requires", "-version", "-all", "-prerelease", "-latest", "-requiresAny"]
        present = [flag for flag in order if flag in args]
        assert [a for a in args if a in order] == present

    @given(bounds=version_bounds())
    def test_version_rendered_iff_bounded(
        self, bounds: tuple[Version | None, Version | None]
    ) -> None:
        """-version appears exactly when at least one bound is set."""
        lower, upper = bounds
        args = build_arguments(ModernSelection().version(lower, upper))
        assert ("-version" in args) == (lower is not None or upper is not None)
