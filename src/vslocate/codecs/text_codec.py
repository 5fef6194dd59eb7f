"""Codec for ``-format text`` output.

Text output is one block of ``key: value`` lines per instance, blocks
separated by blank lines. Nested groups are already flattened by vswhere::

    instanceId: 1a2b3c4d
    installationPath: C:\\Program Files\\Microsoft Visual Studio\\2022\\Community
    installationVersion: 17.9.34622.214
    catalog_productDisplayVersion: 17.9.2

    instanceId: 5e6f7a8b
    ...

Lines end at ``\\n`` only, with a trailing ``\\r`` dropped, so values may carry
other Unicode line breaks such as U+2028. Each line splits on its first
colon, so Windows paths keep their drive separator. The banner is
suppressed with ``-nologo`` by the argument builder; a line without a colon
inside a block is a ``ParseError``.
"""

from __future__ import annotations

from collections.abc import Iterable

from vslocate.codecs.base import InstanceCodec, Scalar, core_fields
from vslocate.core.instance import InstanceRecord
from vslocate.selection.options import OutputFormat


class TextCodec(InstanceCodec):
    """Decode and encode vswhere's plain-text output."""

    format = OutputFormat.TEXT

    def _decode_document(self, text: str) -> list[InstanceRecord]:
        records: list[InstanceRecord] = []
        block: dict[str, Scalar] = {}
        block_start = 0

        for number, raw_line in enumerate(text.split("\n"), start=1):
            line = raw_line.removesuffix("\r")
            if not line.strip():
                if block:
                    records.append(self.build_record(block, len(records) + 1, block_start))
                    block = {}
                continue
            key, sep, value = line.partition(":")
            key = key.strip()
            if not sep or not key:
                label = _block_label(block, len(records) + 1)
                raise self.error(
                    f"expected 'key: value', got {line.strip()!r}",
                    instance=label,
                    segment=line.strip(),
                    line=number,
                )
            if not block:
                block_start = number
            block[key] = value.strip()

        if block:
            records.append(self.build_record(block, len(records) + 1, block_start))
        return records

    def encode(self, records: Iterable[InstanceRecord]) -> bytes:
        blocks: list[str] = []
        for record in records:
            lines = [f"{key}: {value}" for key, value in core_fields(record)]
            lines.extend(f"{key}: {value}" for key, value in record.properties.items())
            blocks.append("\n".join(lines))
        if not blocks:
            return b""
        return ("\n\n".join(blocks) + "\n").encode("utf-8")


def _block_label(block: dict[str, Scalar], position: int) -> str:
    instance_id = block.get("instanceId")
    if isinstance(instance_id, str) and instance_id:
        return instance_id
    return f"#{position}"
