from __future__ import annotations

import pytest

from netcommand.exceptions import NeverThrown
from netcommand.order_contract import sort_once
from netcommand.runtime.stable_encode import (
    stable_compact_text,
    stable_digest,
    stable_md5_hex,
)


def test_stable_text_is_order_invariant_for_mappings() -> None:
    left = {"b": 2, "a": {"z": 9, "y": [3, {"k": "v"}]}}
    right = {"a": {"y": [3, {"k": "v"}], "z": 9}, "b": 2}
    assert stable_compact_text(left) == stable_compact_text(right)
    assert stable_compact_text(left) == '{"a":{"y":[3,{"k":"v"}],"z":9},"b":2}'
    assert stable_digest(left) == stable_digest(right)


def test_stable_text_normalizes_tuples_and_sets() -> None:
    assert stable_compact_text(("a", 1)) == '["a",1]'
    assert stable_compact_text({3, 1, 2}) == "[1,2,3]"


def test_stable_text_rejects_objects() -> None:
    with pytest.raises(TypeError):
        stable_compact_text({"x": object()})


def test_md5_hex_is_known_digest() -> None:
    assert stable_md5_hex("") == "d41d8cd98f00b204e9800998ecf8427e"


def test_sort_once_orders_by_key() -> None:
    pairs = [("b", 1), ("a", 2)]
    assert sort_once(pairs, source="test.pairs", key=lambda item: item[0]) == [
        ("a", 2),
        ("b", 1),
    ]


def test_sort_once_rejects_incomparable_items() -> None:
    with pytest.raises(NeverThrown) as excinfo:
        sort_once([1, "a"], source="test.mixed")
    assert excinfo.value.env["source"] == "test.mixed"
