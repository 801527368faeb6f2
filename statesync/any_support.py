"""Any-value support: wire encoding and comparable keys for opaque values.

CRDT elements are arbitrary application values. Replicas exchange them as
``WireElement`` instances (a type URL plus encoded bytes) and deduplicate
them by a *comparable key*: a canonical string that is equal for equal
values and independent of incidental encoding details such as dict key
order.

Supported values:

- ``str``, ``bytes``, ``bool``, ``int`` and ``float`` as primitives under
  ``p.statesync.io/<kind>``.
- JSON values (``dict``, ``list``, ``tuple``, ``None``) under
  ``json.statesync.io/object``. Tuples come back as lists.

Example::

    support = AnySupport()
    wire = support.serialize({"b": 1, "a": 2})
    support.to_comparable({"a": 2, "b": 1})   # 'json!{"a":2,"b":1}'
    support.deserialize(wire)                 # {'a': 2, 'b': 1}
"""

from __future__ import annotations

import base64
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Self

from statesync.exceptions import UnknownTypeError

PRIMITIVE_PREFIX = "p.statesync.io/"
JSON_TYPE_URL = "json.statesync.io/object"

STRING_TYPE_URL = PRIMITIVE_PREFIX + "string"
BYTES_TYPE_URL = PRIMITIVE_PREFIX + "bytes"
BOOL_TYPE_URL = PRIMITIVE_PREFIX + "bool"
INT64_TYPE_URL = PRIMITIVE_PREFIX + "int64"
DOUBLE_TYPE_URL = PRIMITIVE_PREFIX + "double"


@dataclass(frozen=True, slots=True)
class WireElement:
    """A serialized element as carried in delta and state payloads.

    Attributes:
        type_url: Identifies how ``value`` is encoded.
        value: The encoded element.
    """

    type_url: str
    value: bytes

    def to_dict(self) -> dict:
        """Plain-dict form, safe to pass through a JSON transport."""
        return {
            "type_url": self.type_url,
            "value": base64.b64encode(self.value).decode("ascii"),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Rebuild a WireElement from ``to_dict()`` output.

        Raises:
            UnknownTypeError: If a field is missing or not decodable.
        """
        try:
            type_url = data["type_url"]
            value = base64.b64decode(data["value"], validate=True)
        except (KeyError, TypeError, ValueError) as e:
            raise UnknownTypeError(f"Malformed wire element {data!r}: {e!r}") from e
        if not isinstance(type_url, str):
            raise UnknownTypeError(f"Malformed wire element {data!r}: type_url is not a string")
        return cls(type_url, value)


def _canonical_json(value: Any) -> str:
    try:
        return json.dumps(value, sort_keys=True, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise UnknownTypeError(f"Value {value!r} is not JSON serializable: {e}") from e


def _is_json_value(value: Any) -> bool:
    return value is None or isinstance(value, (dict, list, tuple))


def _double_text(value: float) -> str:
    # -0.0 == 0.0, so both share one wire form and key
    return repr(value + 0.0) if value == 0.0 else repr(value)


def _decode_bool(raw: bytes) -> bool:
    if raw == b"true":
        return True
    if raw == b"false":
        return False
    raise ValueError(f"invalid bool encoding {raw!r}")


_DECODERS = {
    STRING_TYPE_URL: lambda raw: raw.decode("utf-8"),
    BYTES_TYPE_URL: bytes,
    BOOL_TYPE_URL: _decode_bool,
    INT64_TYPE_URL: lambda raw: int(raw.decode("ascii")),
    DOUBLE_TYPE_URL: lambda raw: float(raw.decode("ascii")),
    JSON_TYPE_URL: lambda raw: json.loads(raw.decode("utf-8")),
}


class AnySupport:
    """Serializes, deserializes and keys opaque CRDT element values.

    Stateless; a single instance can be shared by any number of CRDTs.
    """

    def serialize(self, element: Any) -> WireElement:
        """Encode an element into its canonical wire form.

        Raises:
            UnknownTypeError: If the element's type is not supported.
        """
        # bool is checked before int since bool subclasses int
        if isinstance(element, bool):
            return WireElement(BOOL_TYPE_URL, b"true" if element else b"false")
        if isinstance(element, str):
            return WireElement(STRING_TYPE_URL, element.encode("utf-8"))
        if isinstance(element, bytes):
            return WireElement(BYTES_TYPE_URL, element)
        if isinstance(element, int):
            return WireElement(INT64_TYPE_URL, str(element).encode("ascii"))
        if isinstance(element, float):
            return WireElement(DOUBLE_TYPE_URL, _double_text(element).encode("ascii"))
        if _is_json_value(element):
            return WireElement(JSON_TYPE_URL, _canonical_json(element).encode("utf-8"))
        raise UnknownTypeError(
            f"Cannot serialize value of type {type(element).__name__}: {element!r}"
        )

    def deserialize(self, wire: WireElement | Mapping[str, Any]) -> Any:
        """Decode a wire element (or its dict form) back into a value.

        Raises:
            UnknownTypeError: If the type URL is not recognised or the
                encoded body is malformed.
        """
        if isinstance(wire, Mapping):
            wire = WireElement.from_dict(wire)

        try:
            decoder = _DECODERS[wire.type_url]
        except KeyError:
            raise UnknownTypeError(f"Unknown type URL {wire.type_url!r}") from None
        try:
            return decoder(wire.value)
        except ValueError as e:
            raise UnknownTypeError(f"Malformed {wire.type_url} value {wire.value!r}: {e}") from e

    def to_comparable(self, element: Any) -> str:
        """Canonical comparable key for an element.

        Every key is ``<kind>!<text>``, so values of different kinds never
        share a key. JSON values use sorted keys, so dicts that differ only
        in key order share a key.

        Raises:
            UnknownTypeError: If the element's type is not supported.
        """
        if isinstance(element, str):
            return "string!" + element
        if isinstance(element, bool):
            return "bool!" + ("true" if element else "false")
        if isinstance(element, bytes):
            return "bytes!" + base64.b64encode(element).decode("ascii")
        if isinstance(element, int):
            return f"int64!{element}"
        if isinstance(element, float):
            return "double!" + _double_text(element)
        if _is_json_value(element):
            return "json!" + _canonical_json(element)
        raise UnknownTypeError(
            f"Cannot derive a comparable key for type {type(element).__name__}: {element!r}"
        )


DEFAULT_ANY_SUPPORT = AnySupport()
