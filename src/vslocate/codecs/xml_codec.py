"""Codec for ``-format xml`` output.

vswhere wraps sibling ``<instance>`` elements in an ``<instances>`` root;
each child element of an instance carries one field as text content:

.. code-block:: xml

    <?xml version="1.0" encoding="utf-8"?>
    <instances>
      <instance>
        <instanceId>1a2b3c4d</instanceId>
        <installationVersion>17.9.34622.214</installationVersion>
        <catalog>
          <productDisplayVersion>17.9.2</productDisplayVersion>
        </catalog>
      </instance>
    </instances>

Parsing goes through ``defusedxml`` so entity expansion and DTDs in the
output are rejected instead of processed.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ElementTree
from collections.abc import Iterable

import defusedxml
import defusedxml.ElementTree as SafeElementTree

from vslocate.codecs.base import InstanceCodec, Scalar, core_fields
from vslocate.core.instance import NESTED_GROUPS, InstanceRecord, flatten_key, split_property_key
from vslocate.selection.options import OutputFormat

ROOT_TAG = "instances"
INSTANCE_TAG = "instance"
# Output is requested with -utf8; any other declared encoding is a mismatch.
_DECLARED_ENCODING = re.compile(
    r"""\A\s*<\?xml\s[^>]*?\bencoding\s*=\s*["']([^"']*)["']"""
)
_UTF8_NAMES = frozenset({"utf-8", "utf8"})


class XmlCodec(InstanceCodec):
    """Decode and encode vswhere's XML output."""

    format = OutputFormat.XML

    def _decode_document(self, text: str) -> list[InstanceRecord]:
        declared = _DECLARED_ENCODING.match(text)
        if declared and declared.group(1).lower() not in _UTF8_NAMES:
            raise self.error(
                f"declared encoding {declared.group(1)!r} does not match UTF-8 output",
                line=1,
                segment=declared.group(1),
            )
        try:
            root = SafeElementTree.fromstring(text, forbid_dtd=True)
        except SafeElementTree.ParseError as exc:
            line = exc.position[0] if getattr(exc, "position", None) else None
            raise self.error(f"malformed XML: {exc}", line=line) from exc
        except defusedxml.DefusedXmlException as exc:
            raise self.error(f"forbidden XML construct: {exc}") from exc
        except ValueError as exc:
            raise self.error(f"unsupported XML encoding: {exc}") from exc

        records: list[InstanceRecord] = []
        for position, element in enumerate(root, start=1):
            if element.tag != INSTANCE_TAG:
                raise self.error(
                    f"expected <{INSTANCE_TAG}> element, got <{element.tag}>",
                    instance=f"#{position}",
                    segment=element.tag,
                )
            records.append(self.build_record(_flatten(element), position))
        return records

    def encode(self, records: Iterable[InstanceRecord]) -> bytes:
        root = ElementTree.Element(ROOT_TAG)
        for record in records:
            instance = ElementTree.SubElement(root, INSTANCE_TAG)
            for key, value in core_fields(record):
                ElementTree.SubElement(instance, key).text = value

            groups: dict[str, ElementTree.Element] = {}
            nested: list[tuple[str, str, str]] = []
            for name, value in record.properties.items():
                group, key = split_property_key(name)
                if group is None:
                    ElementTree.SubElement(instance, key).text = value
                else:
                    nested.append((group, key, value))
            for group in NESTED_GROUPS:
                for owner, key, value in nested:
                    if owner != group:
                        continue
                    if group not in groups:
                        groups[group] = ElementTree.SubElement(instance, group)
                    ElementTree.SubElement(groups[group], key).text = value

        ElementTree.indent(root)
        body = ElementTree.tostring(root, encoding="unicode")
        return ('<?xml version="1.0" encoding="utf-8"?>\n' + body + "\n").encode("utf-8")


def _flatten(instance: ElementTree.Element) -> dict[str, Scalar]:
    flat: dict[str, Scalar] = {}
    for child in instance:
        if child.tag in NESTED_GROUPS and len(child):
            for grandchild in child:
                flat[flatten_key(child.tag, grandchild.tag)] = grandchild.text or ""
        elif not len(child):
            flat[child.tag] = child.text or ""
    return flat
