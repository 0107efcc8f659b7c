"""Exception protocol for network command handling."""

from __future__ import annotations


class NetCommandError(Exception):
    """Base class for recoverable command errors.

    ``context`` carries the structured metadata the raising site attached
    (local ids, class names, value types) so callers can log without parsing
    the message.
    """

    def __init__(self, message: str, **context: object):
        super().__init__(message)
        self.message = message
        self.context = dict(context)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class MalformedRepresentation(NetCommandError):
    """A stored dictionary representation is missing a required field."""


class EncodingFailure(NetCommandError):
    """A value inside the parameter tree cannot be represented on the wire."""


class ResolutionFailure(NetCommandError):
    """A placeholder could not be mapped to a server-issued object id."""


class NeverThrown(RuntimeError):
    """Sentinel exception for code paths that must be unreachable.

    Reaching one means an internal invariant was broken; it is never a
    retryable condition.
    """

    def __init__(self, message: str, **env: object):
        super().__init__(message)
        self.reason = message
        self.env = dict(env)


class ConsistencyViolation(NeverThrown):
    """The command graph is inconsistent, e.g. deleting an object never created."""
