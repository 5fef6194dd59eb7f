"""Output decoders (and encoders) for vswhere's three output formats.

The decoder trusts the caller-declared format rather than sniffing the
content: the shape of vswhere's output is controlled by the same
``-format`` flag the argument builder emitted.

Public API::

    from vslocate.codecs import decode, encode

    records = decode(OutputFormat.JSON, completed.stdout)
    payload = encode(OutputFormat.XML, records)

``CodecRegistry`` maps each ``OutputFormat`` to its codec. ``default_registry()``
pre-registers the JSON, XML, and text codecs; ``decode`` and ``encode`` use a
module-level default registry.
"""

from __future__ import annotations

from collections.abc import Iterable

from vslocate.codecs.base import InstanceCodec
from vslocate.codecs.json_codec import JsonCodec
from vslocate.codecs.text_codec import TextCodec
from vslocate.codecs.xml_codec import XmlCodec
from vslocate.core.instance import InstanceRecord
from vslocate.selection.options import OutputFormat


class CodecRegistry:
    """Registry of codecs keyed by output format.

    Attributes:
        codecs: Format to codec mapping, in registration order.
    """

    def __init__(self) -> None:
        self.codecs: dict[OutputFormat, InstanceCodec] = {}

    def register(self, codec: InstanceCodec) -> None:
        """Add (or replace) the codec for ``codec.format``."""
        self.codecs[codec.format] = codec

    def get(self, output_format: OutputFormat | str) -> InstanceCodec:
        """Return the codec for *output_format*.

        Raises:
            KeyError: If no codec is registered for the format.
        """
        return self.codecs[OutputFormat(output_format)]


def default_registry() -> CodecRegistry:
    """Create a registry pre-loaded with the three built-in codecs."""
    registry = CodecRegistry()
    registry.register(JsonCodec())
    registry.register(XmlCodec())
    registry.register(TextCodec())
    return registry


_DEFAULT = default_registry()


def decode(output_format: OutputFormat | str, raw: bytes) -> list[InstanceRecord]:
    """Decode raw vswhere stdout in the declared *output_format*.

    Returns:
        Instance records sorted by version, then identifier. Empty output
        decodes to an empty list under every format.

    Raises:
        ParseError: If the output is malformed for the declared format.
    """
    return _DEFAULT.get(output_format).decode(raw)


def encode(output_format: OutputFormat | str, records: Iterable[InstanceRecord]) -> bytes:
    """Encode records the way vswhere prints them in *output_format*."""
    return _DEFAULT.get(output_format).encode(records)


__all__ = [
    "CodecRegistry",
    "InstanceCodec",
    "JsonCodec",
    "TextCodec",
    "XmlCodec",
    "decode",
    "default_registry",
    "encode",
]
