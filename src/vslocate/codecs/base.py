"""Base interface and shared normalisation for vswhere output codecs.

Every codec implements ``InstanceCodec``. It provides two methods:

- ``decode(raw)`` parses raw stdout bytes into a sorted list of
  ``InstanceRecord`` values, or raises ``ParseError``.
- ``encode(records)`` produces output shaped the way vswhere prints it.

A codec's only job is to turn its format into a flat mapping of wire keys to
scalar values per instance. ``build_record`` then applies the field name
table, version parsing, state validation, and property collection the same
way for all formats, so the three formats cannot drift apart.

Decoding is atomic. Records accumulate in a local list that is returned only
once the whole document has decoded, and the first offending element in
document order raises.
"""

from __future__ import annotations

import codecs
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from pathlib import PureWindowsPath

from vslocate.core.instance import (
    REQUIRED_FIELDS,
    InstanceRecord,
    flatten_key,
    is_property_key,
)
from vslocate.core.state import InstanceState
from vslocate.core.version import Version
from vslocate.exceptions import InvalidVersionError, ParseError
from vslocate.selection.options import OutputFormat

Scalar = str | int | float | bool | None


class InstanceCodec(ABC):
    """Decoder and encoder pair for one vswhere output format."""

    format: OutputFormat

    def decode(self, raw: bytes) -> list[InstanceRecord]:
        """Decode raw stdout into instance records sorted by version then ID.

        Empty output (nothing but whitespace or a byte-order mark) means no
        instance matched and decodes to an empty list.

        Raises:
            ParseError: If the output violates this format's grammar.
        """
        text = self.decode_text(raw)
        if text is None:
            return []
        return sorted(self._decode_document(text))

    @abstractmethod
    def _decode_document(self, text: str) -> list[InstanceRecord]:
        """Decode a non-empty document into records in document order."""

    @abstractmethod
    def encode(self, records: Iterable[InstanceRecord]) -> bytes:
        """Encode records as UTF-8 bytes in this format."""

    def decode_text(self, raw: bytes) -> str | None:
        """Decode *raw* as UTF-8, returning None for empty output."""
        if raw.startswith(codecs.BOM_UTF8):
            raw = raw[len(codecs.BOM_UTF8):]
        if not raw.strip():
            return None
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(
                f"output is not valid UTF-8 at byte {exc.start}",
                output_format=self.format,
            ) from exc

    def error(self, message: str, **context: object) -> ParseError:
        """Build a ``ParseError`` tagged with this codec's format."""
        return ParseError(message, output_format=self.format, **context)  # type: ignore[arg-type]

    def build_record(
        self,
        fields: Mapping[str, Scalar],
        position: int,
        line: int | None = None,
    ) -> InstanceRecord:
        """Map one instance's flat wire fields onto an ``InstanceRecord``.

        Args:
            fields: Wire key to scalar value. Nested groups must already be
                flattened to ``<group>_<key>``.
            position: 1-based position of the instance in the document,
                used to name it when it has no ``instanceId``.
            line: 1-based line where the instance starts, for line-oriented
                formats.

        Raises:
            ParseError: On a missing required field, a mistyped field, an
                unparseable version, or an out-of-range state.
        """
        instance_id = fields.get("instanceId")
        label = instance_id if isinstance(instance_id, str) and instance_id else f"#{position}"

        instance_id, path_text, version_text = (
            self._required_field(fields, key, label, line) for key in REQUIRED_FIELDS
        )

        try:
            version = Version.parse(version_text)
        except InvalidVersionError as exc:
            raise self.error(
                f"invalid installationVersion {version_text!r}: {exc.reason}",
                instance=label,
                segment=exc.segment if exc.segment is not None else version_text,
                line=line,
            ) from exc

        properties: dict[str, str] = {}
        for key, value in fields.items():
            if value is None or not is_property_key(key):
                continue
            properties[key] = scalar_to_text(value)

        return InstanceRecord(
            instance_id=instance_id,
            installation_path=PureWindowsPath(path_text),
            installation_version=version,
            display_name=self._string_field(fields, "displayName", label, line) or None,
            product_id=self._string_field(fields, "productId", label, line) or None,
            state=self._state_field(fields.get("state"), label, line),
            properties=properties,
        )

    def _required_field(
        self, fields: Mapping[str, Scalar], key: str, label: str, line: int | None,
    ) -> str:
        value = self._string_field(fields, key, label, line)
        if not value:
            raise self.error(f"missing required field {key!r}", instance=label, segment=key, line=line)
        return value

    def _string_field(
        self, fields: Mapping[str, Scalar], key: str, label: str, line: int | None,
    ) -> str | None:
        value = fields.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise self.error(
                f"field {key!r} must be a string, got {type(value).__name__}",
                instance=label,
                segment=key,
                line=line,
            )
        return value

    def _state_field(
        self, value: Scalar, label: str, line: int | None,
    ) -> InstanceState | None:
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            raise self.error(
                "field 'state' must be an unsigned integer, got bool",
                instance=label,
                segment="state",
                line=line,
            )
        if isinstance(value, str):
            text = value.strip()
            if not (text.isascii() and text.isdigit()):
                raise self.error(
                    f"field 'state' must be an unsigned integer, got {value!r}",
                    instance=label,
                    segment=value,
                    line=line,
                )
            number = int(text)
        elif isinstance(value, int):
            number = value
        else:
            raise self.error(
                f"field 'state' must be an unsigned integer, got {type(value).__name__}",
                instance=label,
                segment="state",
                line=line,
            )
        try:
            return InstanceState.from_wire(number)
        except ValueError as exc:
            raise self.error(str(exc), instance=label, segment=str(number), line=line) from exc


def scalar_to_text(value: Scalar) -> str:
    """Normalise a scalar wire value to the string stored in ``properties``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def flatten_group(group: str, values: Mapping[str, Scalar]) -> dict[str, Scalar]:
    """Flatten a nested ``catalog``/``properties`` group into wire keys."""
    return {flatten_key(group, key): value for key, value in values.items()}


def core_fields(record: InstanceRecord) -> list[tuple[str, str]]:
    """Return the record's core fields as ``(wire key, text)`` pairs.

    Optional fields that are unset are omitted; encoders use this so every
    format writes the same keys in the same order.
    """
    pairs = [
        ("instanceId", record.instance_id),
        ("installationPath", str(record.installation_path)),
        ("installationVersion", str(record.installation_version)),
    ]
    if record.display_name is not None:
        pairs.append(("displayName", record.display_name))
    if record.product_id is not None:
        pairs.append(("productId", record.product_id))
    if record.state is not None:
        pairs.append(("state", str(int(record.state))))
    return pairs
