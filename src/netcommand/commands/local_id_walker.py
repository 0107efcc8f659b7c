"""Traversal of parameter trees for placeholders that still lack a server id.

Traversal order is deterministic: mapping values in insertion order, sequence
elements in index order, field-operation elements in index order. The first
exception raised by the visitor aborts the walk, so callers observe the error
of the first unresolvable placeholder in that order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass

from netcommand.objects.model import FieldOperation, Placeholder, Pointer

PlaceholderVisitor = Callable[[Placeholder], object]


@dataclass(frozen=True)
class WalkResult:
    value: object
    modified: bool


def walk_local_ids(value: object, visit: PlaceholderVisitor) -> WalkResult:
    """Replace every unresolved placeholder in ``value`` with ``visit(placeholder)``.

    The walk is copy-on-write: a container is rebuilt only when one of its
    descendants was replaced, otherwise the original object is returned and
    ``modified`` is False.
    """
    match value:
        case Placeholder(object_id=None):
            return WalkResult(visit(value), True)
        case Placeholder() | Pointer():
            return WalkResult(value, False)
        case FieldOperation(objects=objects):
            items, modified = _walk_items(objects, visit)
            if not modified:
                return WalkResult(value, False)
            return WalkResult(value.with_objects(tuple(items)), True)
        case Mapping():
            return _walk_mapping(value, visit)
        case list():
            items, modified = _walk_items(value, visit)
            return WalkResult(items if modified else value, modified)
        case tuple():
            items, modified = _walk_items(value, visit)
            return WalkResult(tuple(items) if modified else value, modified)
        case _:
            return WalkResult(value, False)


def _walk_mapping(value: Mapping[str, object], visit: PlaceholderVisitor) -> WalkResult:
    rewritten: dict[str, object] | None = None
    for key, item in value.items():
        result = walk_local_ids(item, visit)
        if not result.modified:
            continue
        if rewritten is None:
            rewritten = dict(value)
        rewritten[key] = result.value
    if rewritten is None:
        return WalkResult(value, False)
    return WalkResult(rewritten, True)


def _walk_items(
    values: list[object] | tuple[object, ...],
    visit: PlaceholderVisitor,
) -> tuple[list[object], bool]:
    items: list[object] = []
    modified = False
    for item in values:
        result = walk_local_ids(item, visit)
        modified = modified or result.modified
        items.append(result.value)
    return items, modified


def iter_placeholders(value: object) -> Iterator[Placeholder]:
    """Yield unresolved placeholders in walk order without rewriting anything."""
    match value:
        case Placeholder(object_id=None):
            yield value
        case FieldOperation(objects=objects):
            for item in objects:
                yield from iter_placeholders(item)
        case Mapping():
            for item in value.values():
                yield from iter_placeholders(item)
        case list() | tuple():
            for item in value:
                yield from iter_placeholders(item)
        case _:
            return
