from __future__ import annotations

"""JSON-like value types used at the command representation boundary.

Stored command parameters are always expressed in this value space; richer
tree values (pointers, placeholders, field operations) only exist between a
decode and the matching encode.
"""

from typing import TypeAlias


JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]
JSONArray: TypeAlias = list[JSONValue]
