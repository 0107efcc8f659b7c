from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from netcommand.commands.cache_key import CACHE_KEY_NAMESPACE, compute_cache_key
from netcommand.commands.local_id_resolver import LocalIdResolver
from netcommand.commands.local_id_walker import iter_placeholders
from netcommand.commands.rest_command import RESTCommand
from netcommand.config import (
    cache_defaults,
    cache_namespace,
    merge_payload,
    store_defaults,
    store_path,
)
from netcommand.exceptions import (
    ConsistencyViolation,
    EncodingFailure,
    MalformedRepresentation,
    ResolutionFailure,
)
from netcommand.objects.codec import ObjectDecoder
from netcommand.objects.local_id_store import InMemoryLocalIdStore, load_local_id_store
from netcommand.runtime.json_io import dump_json_pretty, load_json_object_text
from netcommand.schema import InspectResponse, PlaceholderDTO

app = typer.Typer(add_completion=False)

_EXIT_FAILURE = 1
_EXIT_INVALID = 2


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at debug level."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_command(path: Path) -> RESTCommand:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise typer.BadParameter(f"cannot read {path}: {exc}") from exc
    command = RESTCommand.from_dictionary_representation(load_json_object_text(text))
    if command is None:
        typer.echo(f"{path}: not a valid command representation", err=True)
        raise typer.Exit(code=_EXIT_INVALID)
    return command


def _resolve_store(
    store: Path | None,
    *,
    root: Path,
    config: Path | None,
) -> InMemoryLocalIdStore:
    section = merge_payload(
        {"path": str(store) if store is not None else None},
        store_defaults(root=root, config_path=config),
    )
    resolved = store_path(section, root=root)
    if resolved is None:
        return InMemoryLocalIdStore()
    return load_local_id_store(resolved)


@app.command("cache-key")
def cache_key(
    command_path: Path = typer.Argument(..., help="Command JSON file."),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    """Print the cache key of a stored command."""
    command = _load_command(command_path)
    namespace = cache_namespace(
        cache_defaults(root=root, config_path=config),
        CACHE_KEY_NAMESPACE,
    )
    try:
        key = compute_cache_key(command, namespace=namespace)
    except EncodingFailure as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=_EXIT_FAILURE) from exc
    typer.echo(key)


@app.command()
def resolve(
    command_path: Path = typer.Argument(..., help="Command JSON file."),
    store: Optional[Path] = typer.Option(
        None, "--store", help="JSON object mapping local ids to object ids."
    ),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    """Resolve local ids of a stored command and print the rewritten command."""
    command = _load_command(command_path)
    resolver = LocalIdResolver(_resolve_store(store, root=root, config=config))
    try:
        command.resolve_local_ids(resolver)
        payload = command.dictionary_representation()
    except (ResolutionFailure, EncodingFailure, MalformedRepresentation) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=_EXIT_FAILURE) from exc
    except ConsistencyViolation as exc:
        typer.echo(f"inconsistent command: {exc}", err=True)
        raise typer.Exit(code=_EXIT_INVALID) from exc
    typer.echo(dump_json_pretty(payload))


@app.command()
def inspect(
    command_path: Path = typer.Argument(..., help="Command JSON file."),
) -> None:
    """Show the cache key and pending placeholders of a stored command."""
    command = _load_command(command_path)
    try:
        tree = ObjectDecoder().decode(command.parameters)
        response = InspectResponse(
            http_path=command.http_path,
            http_method=command.http_method.value if command.http_method else None,
            local_id=command.local_id,
            cache_key=command.cache_key,
            placeholders=[
                PlaceholderDTO(class_name=item.class_name, local_id=item.local_id)
                for item in iter_placeholders(tree)
            ],
        )
    except (MalformedRepresentation, EncodingFailure) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=_EXIT_FAILURE) from exc
    typer.echo(response.model_dump_json(indent=2))


if __name__ == "__main__":  # pragma: no cover
    app()
