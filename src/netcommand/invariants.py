"""Invariant markers for command handling."""

from __future__ import annotations

from typing import NoReturn

from netcommand.exceptions import ConsistencyViolation, NeverThrown


def never(reason: str = "", **env: object) -> NoReturn:
    """Mark a code path as intentionally unreachable.

    The optional env payload is metadata only; it is attached to the raised
    exception for diagnostics.
    """
    raise NeverThrown(reason or "never() marker reached", **env)


def consistency_assert(condition: object, reason: str, **env: object) -> None:
    if not condition:
        raise ConsistencyViolation(reason, **env)
