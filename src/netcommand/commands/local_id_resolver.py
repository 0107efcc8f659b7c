from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import PurePosixPath

from netcommand.commands.local_id_walker import walk_local_ids
from netcommand.commands.rest_command import HTTPMethod, RESTCommand
from netcommand.exceptions import ResolutionFailure
from netcommand.invariants import consistency_assert
from netcommand.objects.codec import ObjectDecoder, PointerOrLocalIdEncoder
from netcommand.objects.local_id_store import LocalIdStore
from netcommand.objects.model import Placeholder

logger = logging.getLogger(__name__)

ResolveHook = Callable[[Placeholder], Placeholder]

CLASSES_PATH_PREFIX = "classes"


class LocalIdResolver:
    """Rewrites a command once the server ids behind its local ids are known.

    The store is an explicit dependency scoped to the application session.
    ``resolve_hook`` defaults to looking the placeholder up in that store and
    must raise :class:`ResolutionFailure` when no server id exists yet.
    """

    def __init__(
        self,
        store: LocalIdStore,
        *,
        decoder: ObjectDecoder | None = None,
        encoder: PointerOrLocalIdEncoder | None = None,
        resolve_hook: ResolveHook | None = None,
    ):
        self.store = store
        self.decoder = decoder or ObjectDecoder()
        self.encoder = encoder or PointerOrLocalIdEncoder()
        self.resolve_hook = resolve_hook or self._resolve_from_store

    def resolve_local_ids(self, command: RESTCommand) -> None:
        """Resolve embedded placeholders, then promote create to update.

        Raises the first :class:`ResolutionFailure` in traversal order, or the
        :class:`EncodingFailure` of the re-encode. On error the command's
        parameters are left untouched and it must not be sent.
        """
        self._resolve_parameters(command)
        maybe_change_server_operation(command, self.store)

    def _resolve_parameters(self, command: RESTCommand) -> None:
        if command.parameters is None:
            return
        tree = self.decoder.decode(command.parameters)
        try:
            result = walk_local_ids(tree, self._visit)
        except ResolutionFailure as exc:
            logger.warning("local id resolution failed for %s: %s", command.http_path, exc)
            raise
        if not result.modified:
            return
        command.parameters = self.encoder.encode(result.value)
        logger.debug("rewrote parameters of %s with resolved pointers", command.http_path)

    def _visit(self, placeholder: Placeholder) -> Placeholder:
        resolved = self.resolve_hook(placeholder)
        logger.debug(
            "resolved %s:%s -> %s",
            placeholder.class_name,
            placeholder.local_id,
            resolved.object_id,
        )
        return resolved

    def _resolve_from_store(self, placeholder: Placeholder) -> Placeholder:
        return placeholder.resolved(self.store)


def maybe_change_server_operation(command: RESTCommand, store: LocalIdStore) -> None:
    """Turn a create into an update when its subject was created meanwhile.

    A second save of a new object made while offline was recorded as a create
    because no object id existed yet. Once the first save succeeds the store
    maps the command's local id to that object id, and the request has to
    target the existing object instead.
    """
    if command.local_id is None:
        return
    object_id = store.object_id_for_local_id(command.local_id)
    if object_id is not None:
        logger.debug("promoting %s %s to update of %s", command.http_method, command.http_path, object_id)
        command.local_id = None
        components = path_components(command.http_path)
        if len(components) == 2:
            command.http_path = str(PurePosixPath(*components, object_id))
        if (
            command.http_path.startswith(CLASSES_PATH_PREFIX)
            and command.http_method is HTTPMethod.POST
        ):
            command.http_method = HTTPMethod.PUT

    consistency_assert(
        command.http_method is not HTTPMethod.DELETE or object_id is not None,
        "Attempt to delete non-existent object.",
        http_path=command.http_path,
        local_id=command.local_id,
    )


def path_components(path: str) -> tuple[str, ...]:
    """Split a request path the way collection/object paths are counted.

    A leading slash and a trailing slash each count as a component of their
    own, so neither "/classes/Foo" nor "classes/Foo/" is a two-segment
    collection path.
    """
    parts = PurePosixPath(path).parts
    if len(path) > 1 and path.endswith("/"):
        parts = (*parts, "/")
    return parts
