"""netcommand package root."""

from netcommand.commands import HTTPMethod, LocalIdResolver, RESTCommand
from netcommand.exceptions import (
    ConsistencyViolation,
    EncodingFailure,
    MalformedRepresentation,
    NetCommandError,
    NeverThrown,
    ResolutionFailure,
)
from netcommand.invariants import never

__all__ = [
    "__version__",
    "ConsistencyViolation",
    "EncodingFailure",
    "HTTPMethod",
    "LocalIdResolver",
    "MalformedRepresentation",
    "NetCommandError",
    "NeverThrown",
    "RESTCommand",
    "ResolutionFailure",
    "never",
]

__version__ = "0.1.0"
