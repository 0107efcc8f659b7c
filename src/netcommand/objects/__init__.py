from netcommand.objects.codec import (
    ObjectDecoder,
    PointerObjectEncoder,
    PointerOrLocalIdEncoder,
)
from netcommand.objects.local_id_store import (
    InMemoryLocalIdStore,
    LocalIdStore,
    load_local_id_store,
)
from netcommand.objects.model import (
    FieldOperation,
    FieldOperationKind,
    Placeholder,
    Pointer,
    add_operation,
    add_unique_operation,
    remove_operation,
)

__all__ = [
    "FieldOperation",
    "FieldOperationKind",
    "InMemoryLocalIdStore",
    "LocalIdStore",
    "ObjectDecoder",
    "Placeholder",
    "Pointer",
    "PointerObjectEncoder",
    "PointerOrLocalIdEncoder",
    "add_operation",
    "add_unique_operation",
    "load_local_id_store",
    "remove_operation",
]
