from __future__ import annotations

from typing import TYPE_CHECKING

from netcommand.json_types import JSONObject
from netcommand.objects.codec import PointerOrLocalIdEncoder
from netcommand.runtime.stable_encode import stable_compact_text, stable_md5_hex

if TYPE_CHECKING:
    from netcommand.commands.rest_command import RESTCommand

CACHE_KEY_NAMESPACE = "RESTCommand"
# Increment when the format of cached values changes.
CACHE_KEY_FORMAT_VERSION = 1
# Increment when the remote API contract changes.
CACHE_KEY_API_VERSION = 2

PARAMETERS_LABEL = "parameters"
SESSION_TOKEN_LABEL = "sessionToken"


def cache_key_parameters(
    command: RESTCommand,
    *,
    encoder: PointerOrLocalIdEncoder | None = None,
) -> JSONObject:
    """Identity-relevant payload of a command.

    Only parameters and the session token participate; the local id and the
    operation set uuid are volatile and excluded.
    """
    payload: JSONObject = {}
    if command.parameters is not None:
        payload[PARAMETERS_LABEL] = (encoder or PointerOrLocalIdEncoder()).encode(
            command.parameters
        )
    if command.session_token is not None:
        payload[SESSION_TOKEN_LABEL] = command.session_token
    return payload


def compute_cache_key(
    command: RESTCommand,
    *,
    namespace: str = CACHE_KEY_NAMESPACE,
) -> str:
    parameters_text = stable_compact_text(cache_key_parameters(command))
    method = command.http_method.value if command.http_method is not None else ""
    return ".".join(
        (
            namespace,
            str(CACHE_KEY_FORMAT_VERSION),
            method,
            stable_md5_hex(command.http_path),
            str(CACHE_KEY_API_VERSION),
            stable_md5_hex(parameters_text),
        )
    )
