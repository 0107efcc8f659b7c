from __future__ import annotations

import json
from pathlib import Path

import pytest

from netcommand.exceptions import NeverThrown
from netcommand.objects.local_id_store import (
    InMemoryLocalIdStore,
    LocalIdStore,
    load_local_id_store,
)


def test_created_local_ids_are_unique_and_unmapped() -> None:
    store = InMemoryLocalIdStore()
    first = store.create_local_id()
    second = store.create_local_id()
    assert first != second
    assert first.startswith("local_")
    assert store.object_id_for_local_id(first) is None


def test_mapping_is_idempotent_but_not_rebindable() -> None:
    store = InMemoryLocalIdStore({"L1": "srv1"})
    store.set_object_id("L1", "srv1")
    assert store.object_id_for_local_id("L1") == "srv1"
    with pytest.raises(NeverThrown):
        store.set_object_id("L1", "srv2")


def test_snapshot_lists_only_mapped_ids() -> None:
    store = InMemoryLocalIdStore({"b": "2", "a": "1"})
    store.create_local_id()
    assert store.snapshot() == {"a": "1", "b": "2"}
    assert list(store.snapshot()) == ["a", "b"]
    store.clear()
    assert store.snapshot() == {}


def test_store_satisfies_protocol() -> None:
    assert isinstance(InMemoryLocalIdStore(), LocalIdStore)


def test_load_local_id_store_from_json(tmp_path: Path) -> None:
    path = tmp_path / "ids.json"
    path.write_text(json.dumps({"L1": "srv1", "L2": None, "L3": ""}), encoding="utf-8")
    store = load_local_id_store(path)
    assert store.snapshot() == {"L1": "srv1"}


def test_load_local_id_store_tolerates_missing_file(tmp_path: Path) -> None:
    store = load_local_id_store(tmp_path / "missing.json")
    assert store.snapshot() == {}
