"""Codec for ``-format json`` output.

vswhere prints a JSON array with one object per instance:

.. code-block:: json

    [
      {
        "instanceId": "1a2b3c4d",
        "installationPath": "C:\\\\Program Files\\\\Microsoft Visual Studio\\\\2022\\\\Community",
        "installationVersion": "17.9.34622.214",
        "displayName": "Visual Studio Community 2022",
        "productId": "Microsoft.VisualStudio.Product.Community",
        "state": 4294967295,
        "isPrerelease": false,
        "catalog": { "productDisplayVersion": "17.9.2" },
        "properties": { "nickname": "" }
      }
    ]

The ``catalog`` and ``properties`` objects are flattened to
``catalog_<key>`` and ``properties_<key>``. Keys outside the field name
table are ignored.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from vslocate.codecs.base import InstanceCodec, Scalar, flatten_group
from vslocate.core.instance import NESTED_GROUPS, InstanceRecord, split_property_key
from vslocate.selection.options import OutputFormat


class JsonCodec(InstanceCodec):
    """Decode and encode vswhere's JSON array output."""

    format = OutputFormat.JSON

    def _decode_document(self, text: str) -> list[InstanceRecord]:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise self.error(f"malformed JSON: {exc.msg}", line=exc.lineno) from exc
        except RecursionError as exc:
            raise self.error("malformed JSON: nesting too deep") from exc

        if not isinstance(document, list):
            raise self.error(f"top-level value must be an array, got {_json_type(document)}")

        records: list[InstanceRecord] = []
        for position, element in enumerate(document, start=1):
            if not isinstance(element, dict):
                raise self.error(
                    f"array element must be an object, got {_json_type(element)}",
                    instance=f"#{position}",
                )
            records.append(self.build_record(_flatten(element), position))
        return records

    def encode(self, records: Iterable[InstanceRecord]) -> bytes:
        document = [_to_object(record) for record in records]
        return json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")


def _flatten(element: dict[str, Any]) -> dict[str, Scalar]:
    flat: dict[str, Scalar] = {}
    for key, value in element.items():
        if key in NESTED_GROUPS and isinstance(value, dict):
            scalars = {k: v for k, v in value.items() if not isinstance(v, (dict, list))}
            flat.update(flatten_group(key, scalars))
        elif not isinstance(value, (dict, list)):
            flat[key] = value
    return flat


def _to_object(record: InstanceRecord) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "instanceId": record.instance_id,
        "installationPath": str(record.installation_path),
        "installationVersion": str(record.installation_version),
    }
    if record.display_name is not None:
        obj["displayName"] = record.display_name
    if record.product_id is not None:
        obj["productId"] = record.product_id
    if record.state is not None:
        obj["state"] = int(record.state)

    groups: dict[str, dict[str, str]] = {}
    for name, value in record.properties.items():
        group, key = split_property_key(name)
        if group is None:
            obj[key] = value
        else:
            groups.setdefault(group, {})[key] = value
    for group in NESTED_GROUPS:
        if group in groups:
            obj[group] = groups[group]
    return obj


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
