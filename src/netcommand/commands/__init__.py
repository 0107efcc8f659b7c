from netcommand.commands.cache_key import (
    CACHE_KEY_API_VERSION,
    CACHE_KEY_FORMAT_VERSION,
    CACHE_KEY_NAMESPACE,
    compute_cache_key,
)
from netcommand.commands.local_id_resolver import (
    LocalIdResolver,
    maybe_change_server_operation,
)
from netcommand.commands.local_id_walker import (
    WalkResult,
    iter_placeholders,
    walk_local_ids,
)
from netcommand.commands.rest_command import HTTPMethod, RESTCommand

__all__ = [
    "CACHE_KEY_API_VERSION",
    "CACHE_KEY_FORMAT_VERSION",
    "CACHE_KEY_NAMESPACE",
    "HTTPMethod",
    "LocalIdResolver",
    "RESTCommand",
    "WalkResult",
    "compute_cache_key",
    "iter_placeholders",
    "maybe_change_server_operation",
    "walk_local_ids",
]
