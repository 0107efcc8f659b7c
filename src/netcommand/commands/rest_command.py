from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping

from pydantic import ValidationError

from netcommand.commands.cache_key import compute_cache_key
from netcommand.exceptions import MalformedRepresentation
from netcommand.objects.codec import PointerOrLocalIdEncoder
from netcommand.schema import RESTCommandRepresentation

if TYPE_CHECKING:
    from netcommand.commands.local_id_resolver import LocalIdResolver

logger = logging.getLogger(__name__)


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


def normalize_http_method(method: HTTPMethod | str | None) -> HTTPMethod | None:
    if method is None or isinstance(method, HTTPMethod):
        return method
    try:
        return HTTPMethod(str(method).strip().upper())
    except ValueError:
        raise MalformedRepresentation("unsupported http method", method=method) from None


@dataclass
class RESTCommand:
    """A pending REST request, possibly created while offline.

    ``parameters`` holds the request body in stored form. It may still contain
    pointers carrying a ``localId`` until :meth:`resolve_local_ids` succeeds.
    """

    http_path: str
    http_method: HTTPMethod | None = None
    parameters: dict[str, Any] | None = None
    session_token: str | None = None
    local_id: str | None = None
    operation_set_uuid: str | None = None
    _cache_key: str | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.http_method = normalize_http_method(self.http_method)

    @property
    def cache_key(self) -> str:
        # Memoized: identity fields are treated as frozen once the key is taken.
        if self._cache_key is None:
            self._cache_key = compute_cache_key(self)
        return self._cache_key

    @classmethod
    def from_dictionary_representation(
        cls, dictionary: Mapping[str, Any]
    ) -> RESTCommand | None:
        try:
            representation = parse_representation(dictionary)
            return cls(
                http_path=representation.http_path,
                http_method=representation.http_method,
                parameters=representation.parameters,
                session_token=representation.session_token,
                local_id=representation.local_id,
            )
        except MalformedRepresentation as exc:
            logger.debug("rejecting command representation: %s", exc)
            return None

    def dictionary_representation(
        self,
        *,
        encoder: PointerOrLocalIdEncoder | None = None,
    ) -> dict[str, Any]:
        parameters = None
        if self.parameters is not None:
            parameters = (encoder or PointerOrLocalIdEncoder()).encode(self.parameters)
        representation = RESTCommandRepresentation(
            http_path=self.http_path,
            http_method=self.http_method.value if self.http_method else None,
            parameters=parameters,
            session_token=self.session_token,
            local_id=self.local_id,
        )
        return representation.to_payload()

    def resolve_local_ids(self, resolver: LocalIdResolver) -> None:
        resolver.resolve_local_ids(self)


def parse_representation(dictionary: Mapping[str, Any]) -> RESTCommandRepresentation:
    if not isinstance(dictionary, Mapping):
        raise MalformedRepresentation(
            "command representation must be a mapping",
            value_type=type(dictionary).__name__,
        )
    if dictionary.get("httpPath") is None:
        raise MalformedRepresentation("command representation is missing httpPath")
    try:
        representation = RESTCommandRepresentation.model_validate(dict(dictionary))
    except ValidationError as exc:
        raise MalformedRepresentation(
            "command representation failed validation",
            errors=exc.error_count(),
        ) from exc
    normalize_http_method(representation.http_method)
    return representation
