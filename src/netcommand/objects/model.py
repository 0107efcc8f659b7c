from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Tuple

from netcommand.exceptions import ResolutionFailure

if TYPE_CHECKING:
    from netcommand.objects.local_id_store import LocalIdStore


@dataclass(frozen=True)
class Pointer:
    """Reference to an object that already has a server-issued id."""

    class_name: str
    object_id: str


@dataclass(frozen=True)
class Placeholder:
    """Reference to an object known only by its client-generated local id.

    Once the server id is known the placeholder is retained, now carrying
    ``object_id``; the encoder then writes it out as an ordinary pointer.
    """

    class_name: str
    local_id: str
    object_id: str | None = None

    @property
    def is_resolved(self) -> bool:
        return self.object_id is not None

    def with_object_id(self, object_id: str) -> Placeholder:
        return replace(self, object_id=object_id)

    def resolved(self, store: LocalIdStore) -> Placeholder:
        if self.is_resolved:
            return self
        object_id = store.object_id_for_local_id(self.local_id)
        if object_id is None:
            raise ResolutionFailure(
                "Tried to save an object with a pointer to a new, unsaved object.",
                class_name=self.class_name,
                local_id=self.local_id,
            )
        return self.with_object_id(object_id)


class FieldOperationKind(str, Enum):
    ADD = "Add"
    ADD_UNIQUE = "AddUnique"
    REMOVE = "Remove"


@dataclass(frozen=True)
class FieldOperation:
    kind: FieldOperationKind
    objects: Tuple[object, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", FieldOperationKind(self.kind))
        object.__setattr__(self, "objects", tuple(self.objects))

    def with_objects(self, objects: Tuple[object, ...]) -> FieldOperation:
        return FieldOperation(kind=self.kind, objects=objects)


def add_operation(*objects: object) -> FieldOperation:
    return FieldOperation(FieldOperationKind.ADD, objects)


def add_unique_operation(*objects: object) -> FieldOperation:
    return FieldOperation(FieldOperationKind.ADD_UNIQUE, objects)


def remove_operation(*objects: object) -> FieldOperation:
    return FieldOperation(FieldOperationKind.REMOVE, objects)
