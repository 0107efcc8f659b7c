"""Conversion between stored command parameters and traversable trees.

Stored parameters are plain JSON. Decoding lifts the tagged wire shapes into
tree values:

- ``{"__type": "Pointer", "className": C, "objectId": O}`` -> :class:`Pointer`
- ``{"__type": "Pointer", "className": C, "localId": L}`` -> :class:`Placeholder`
- ``{"__op": "Add" | "AddUnique" | "Remove", "objects": [...]}`` -> :class:`FieldOperation`
- ``{"__type": "Date", "iso": ...}`` -> timezone-aware :class:`datetime`

Encoding is the inverse; resolved placeholders are written as server pointers.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime, timezone

from netcommand.exceptions import EncodingFailure, MalformedRepresentation
from netcommand.json_types import JSONValue
from netcommand.objects.model import (
    FieldOperation,
    FieldOperationKind,
    Placeholder,
    Pointer,
)

TYPE_KEY = "__type"
OP_KEY = "__op"
_FIELD_OPERATION_KINDS = frozenset(kind.value for kind in FieldOperationKind)


class ObjectDecoder:
    def decode(self, value: object) -> object:
        match value:
            case Mapping() as mapping:
                return self._decode_mapping(mapping)
            case list() | tuple():
                return [self.decode(item) for item in value]
            case _:
                return value

    def _decode_mapping(self, mapping: Mapping[str, object]) -> object:
        type_name = mapping.get(TYPE_KEY)
        if type_name == "Pointer":
            return self._decode_pointer(mapping)
        if type_name == "Date":
            return _decode_date(mapping)
        op_name = mapping.get(OP_KEY)
        if op_name in _FIELD_OPERATION_KINDS:
            raw_objects = mapping.get("objects", [])
            if not isinstance(raw_objects, (list, tuple)):
                raise MalformedRepresentation(
                    "field operation objects must be a list",
                    op=op_name,
                    objects_type=type(raw_objects).__name__,
                )
            return FieldOperation(
                FieldOperationKind(op_name),
                tuple(self.decode(item) for item in raw_objects),
            )
        return {key: self.decode(item) for key, item in mapping.items()}

    def _decode_pointer(self, mapping: Mapping[str, object]) -> Pointer | Placeholder:
        class_name = mapping.get("className")
        if not isinstance(class_name, str) or not class_name:
            raise MalformedRepresentation("pointer is missing className")
        object_id = mapping.get("objectId")
        if isinstance(object_id, str) and object_id:
            return Pointer(class_name=class_name, object_id=object_id)
        local_id = mapping.get("localId")
        if isinstance(local_id, str) and local_id:
            return Placeholder(class_name=class_name, local_id=local_id)
        raise MalformedRepresentation(
            "pointer carries neither objectId nor localId",
            class_name=class_name,
        )


class PointerOrLocalIdEncoder:
    """Encoder that tolerates unresolved placeholders.

    Unresolved placeholders are written with their ``localId`` so a command can
    be persisted while offline and resolved later.
    """

    def encode(self, value: object) -> JSONValue:
        match value:
            case Placeholder(class_name=class_name, object_id=str() as object_id):
                return _pointer_payload(class_name, objectId=object_id)
            case Placeholder():
                return self.encode_unresolved(value)
            case Pointer(class_name=class_name, object_id=object_id):
                return _pointer_payload(class_name, objectId=object_id)
            case FieldOperation(kind=kind, objects=objects):
                return {
                    OP_KEY: kind.value,
                    "objects": [self.encode(item) for item in objects],
                }
            case datetime():
                return _encode_date(value)
            case bool() | int() | str() | None:
                return value
            case float():
                if not math.isfinite(value):
                    raise EncodingFailure("cannot encode non-finite number", value=value)
                return value
            case Mapping() as mapping:
                encoded: dict[str, JSONValue] = {}
                for key, item in mapping.items():
                    if not isinstance(key, str):
                        raise EncodingFailure(
                            "mapping keys must be strings",
                            key_type=type(key).__name__,
                        )
                    encoded[key] = self.encode(item)
                return encoded
            case list() | tuple():
                return [self.encode(item) for item in value]
            case _:
                raise EncodingFailure(
                    "unable to encode value",
                    value_type=type(value).__name__,
                )

    def encode_unresolved(self, placeholder: Placeholder) -> JSONValue:
        return _pointer_payload(placeholder.class_name, localId=placeholder.local_id)


class PointerObjectEncoder(PointerOrLocalIdEncoder):
    """Encoder for requests about to hit the network: every pointer must be real."""

    def encode_unresolved(self, placeholder: Placeholder) -> JSONValue:
        raise EncodingFailure(
            "Tried to save an object with a new, unsaved child.",
            class_name=placeholder.class_name,
            local_id=placeholder.local_id,
        )


def _pointer_payload(class_name: str, **identity: str) -> dict[str, JSONValue]:
    payload: dict[str, JSONValue] = {TYPE_KEY: "Pointer", "className": class_name}
    payload.update(identity)
    return payload


def _decode_date(mapping: Mapping[str, object]) -> datetime:
    iso = mapping.get("iso")
    if not isinstance(iso, str):
        raise MalformedRepresentation("date is missing iso text")
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError as exc:
        raise MalformedRepresentation("date iso text is invalid", iso=iso) from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _encode_date(value: datetime) -> dict[str, JSONValue]:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    # Millisecond text unless sub-millisecond precision would be lost.
    timespec = "milliseconds" if value.microsecond % 1000 == 0 else "microseconds"
    iso = value.replace(tzinfo=None).isoformat(timespec=timespec) + "Z"
    return {TYPE_KEY: "Date", "iso": iso}
