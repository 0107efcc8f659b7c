from __future__ import annotations

import logging
import secrets
import threading
from pathlib import Path
from typing import Mapping, Protocol, runtime_checkable

from netcommand.invariants import never
from netcommand.order_contract import sort_once
from netcommand.runtime.json_io import load_json_object_path

logger = logging.getLogger(__name__)

LOCAL_ID_PREFIX = "local_"


@runtime_checkable
class LocalIdStore(Protocol):
    def object_id_for_local_id(self, local_id: str) -> str | None: ...


class InMemoryLocalIdStore:
    """Local-id to server-id map shared by the commands of one session."""

    def __init__(self, mapping: Mapping[str, str] | None = None):
        self._lock = threading.Lock()
        self._object_ids: dict[str, str | None] = {}
        for local_id, object_id in (mapping or {}).items():
            self.set_object_id(local_id, object_id)

    def create_local_id(self) -> str:
        local_id = f"{LOCAL_ID_PREFIX}{secrets.token_hex(8)}"
        with self._lock:
            self._object_ids[local_id] = None
        return local_id

    def set_object_id(self, local_id: str, object_id: str) -> None:
        with self._lock:
            existing = self._object_ids.get(local_id)
            if existing is not None and existing != object_id:
                never(
                    "local id is already mapped to a different object id",
                    local_id=local_id,
                    existing=existing,
                    object_id=object_id,
                )
            self._object_ids[local_id] = object_id
        logger.debug("mapped %s -> %s", local_id, object_id)

    def object_id_for_local_id(self, local_id: str) -> str | None:
        with self._lock:
            return self._object_ids.get(local_id)

    def clear(self) -> None:
        with self._lock:
            self._object_ids.clear()

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            items = [
                (local_id, object_id)
                for local_id, object_id in self._object_ids.items()
                if object_id is not None
            ]
        ordered = sort_once(
            items,
            source="local_id_store.snapshot",
            key=lambda item: item[0],
        )
        return dict(ordered)


def load_local_id_store(path: Path) -> InMemoryLocalIdStore:
    """Build a store from a JSON object of ``{local_id: object_id}`` pairs.

    Missing or unreadable files yield an empty store; entries whose value is
    not a string are skipped.
    """
    payload = load_json_object_path(path)
    mapping: dict[str, str] = {}
    for local_id, object_id in payload.items():
        if isinstance(object_id, str) and object_id:
            mapping[str(local_id)] = object_id
        else:
            logger.debug("skipping local id %s without object id", local_id)
    return InMemoryLocalIdStore(mapping)
