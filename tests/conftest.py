from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))


import pytest

from netcommand.commands.local_id_resolver import LocalIdResolver
from netcommand.objects.local_id_store import InMemoryLocalIdStore


@pytest.fixture
def store() -> InMemoryLocalIdStore:
    return InMemoryLocalIdStore()


@pytest.fixture
def resolver(store: InMemoryLocalIdStore) -> LocalIdResolver:
    return LocalIdResolver(store)


@pytest.fixture
def local_pointer():
    def _make(local_id: str, class_name: str = "Foo") -> dict[str, object]:
        return {"__type": "Pointer", "className": class_name, "localId": local_id}

    return _make


@pytest.fixture
def server_pointer():
    def _make(object_id: str, class_name: str = "Foo") -> dict[str, object]:
        return {"__type": "Pointer", "className": class_name, "objectId": object_id}

    return _make

