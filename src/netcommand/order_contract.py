from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from netcommand.invariants import never


T = TypeVar("T")


def sort_once(
    values: Iterable[T],
    *,
    source: str,
    key: Callable[[T], Any] | None = None,
    reverse: bool = False,
) -> list[T]:
    """Sort a carrier exactly once for a canonical encoding.

    ``source`` names the call site so an incomparable carrier can be traced
    back to the encoding that produced it.
    """
    items = list(values)
    try:
        return sorted(items, key=key, reverse=reverse)
    except TypeError as exc:
        never("sort keys are not comparable", source=source, error=str(exc))
