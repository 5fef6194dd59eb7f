"""Property-based tests for decoder behaviour.

Verifies that:
- Decoded output is always sorted by (version, instance ID).
- Encoding then decoding under any format recovers the records.
- Version parsing agrees with str() rendering.
"""
from __future__ import annotations

from pathlib import PureWindowsPath

from hypothesis import given, settings
from hypothesis import strategies as st

from vslocate.codecs import decode, encode
from vslocate.core import InstanceRecord, InstanceState, Version
from vslocate.selection import OutputFormat


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

versions = st.builds(
    Version,
    st.integers(0, 99),
    st.integers(0, 99),
    st.integers(0, 99999),
    st.integers(0, 9999),
)
# Field values without surrounding whitespace. The interior may hold Unicode
# line breaks other than "\n" that XML 1.0 also allows.
safe_text = st.from_regex(
    r"[A-Za-z0-9][A-Za-z0-9 ._\\\-\u2028\u2029\x85]{0,20}[A-Za-z0-9]", fullmatch=True,
)
# The text format also carries control characters XML cannot.
text_format_text = st.from_regex(
    r"[A-Za-z0-9][A-Za-z0-9 ._\\\-\u2028\u2029\x85\x0b\x0c\x1c\x1d\x1e]{0,20}[A-Za-z0-9]",
    fullmatch=True,
)
states = st.none() | st.integers(0, 0xFFFFFFFF).map(InstanceState.from_wire)
property_keys = st.sampled_from([
    "channelId", "isPrerelease", "installDate", "catalog_buildBranch", "properties_nickname",
])


def instance_records(values: st.SearchStrategy[str]) -> st.SearchStrategy[list[InstanceRecord]]:
    """Lists of records with unique IDs whose free-form fields come from *values*."""
    records = st.builds(
        InstanceRecord,
        instance_id=st.from_regex(r"[0-9a-f]{8}", fullmatch=True),
        installation_path=values.map(lambda s: PureWindowsPath("C:\\", s)),
        installation_version=versions,
        display_name=st.none() | values,
        product_id=st.none() | values,
        state=states,
        properties=st.dictionaries(property_keys, values, max_size=5),
    )
    return st.lists(records, max_size=6, unique_by=lambda r: r.instance_id)


record_lists = instance_records(safe_text)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestDecodeProperties:
    """Laws every codec satisfies."""

    @given(items=record_lists, fmt=st.sampled_from(list(OutputFormat)))
    @settings(max_examples=60)
    def test_encode_decode_recovers_sorted(
        self, items: list[InstanceRecord], fmt: OutputFormat
    ) -> None:
        """decode(encode(records)) == sorted(records) in every format."""
        assert decode(fmt, encode(fmt, items)) == sorted(items)

    @given(items=instance_records(text_format_text))
    def test_text_keeps_control_characters(self, items: list[InstanceRecord]) -> None:
        """Text output round-trips values holding any line break but newline."""
        assert decode(OutputFormat.TEXT, encode(OutputFormat.TEXT, items)) == sorted(items)

    @given(items=record_lists)
    def test_output_sorted(self, items: list[InstanceRecord]) -> None:
        """Decoded lists are ordered by version, then identifier."""
        decoded = decode(OutputFormat.JSON, encode(OutputFormat.JSON, reversed(items)))
        keys = [r.sort_key() for r in decoded]
        assert keys == sorted(keys)


class TestVersionProperties:
    """Parsing and rendering versions."""

    @given(version=versions)
    def test_parse_str_roundtrip(self, version: Version) -> None:
        """parse(str(v)) == v."""
        assert Version.parse(str(version)) == version

    @given(a=versions, b=versions)
    def test_order_matches_tuples(self, a: Version, b: Version) -> None:
        """Ordering agrees with the component tuple ordering."""
        assert (a < b) == (a.as_tuple() < b.as_tuple())
