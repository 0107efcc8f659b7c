from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from netcommand import cli
from netcommand.commands.rest_command import RESTCommand


def _write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _create_payload(local_pointer) -> dict[str, object]:
    return {
        "httpPath": "classes/Foo",
        "httpMethod": "POST",
        "parameters": {"parent": local_pointer("L5")},
        "localId": "L1",
    }


def test_cache_key_command_prints_key(tmp_path: Path, local_pointer) -> None:
    payload = _create_payload(local_pointer)
    command_path = _write_json(tmp_path / "command.json", payload)
    result = CliRunner().invoke(cli.app, ["cache-key", str(command_path), "--root", str(tmp_path)])
    assert result.exit_code == 0
    expected = RESTCommand.from_dictionary_representation(payload).cache_key
    assert result.output.strip() == expected


def test_cache_key_command_honors_configured_namespace(tmp_path: Path, local_pointer) -> None:
    command_path = _write_json(tmp_path / "command.json", _create_payload(local_pointer))
    (tmp_path / "netcommand.toml").write_text('[cache]\nnamespace = "Queued"\n', encoding="utf-8")
    result = CliRunner().invoke(cli.app, ["cache-key", str(command_path), "--root", str(tmp_path)])
    assert result.exit_code == 0
    assert result.output.startswith("Queued.1.POST.")


def test_invalid_command_file_exits_with_usage_error(tmp_path: Path) -> None:
    command_path = _write_json(tmp_path / "command.json", {"httpMethod": "GET"})
    result = CliRunner().invoke(cli.app, ["cache-key", str(command_path)])
    assert result.exit_code == 2


def test_resolve_promotes_create_to_update(tmp_path: Path, local_pointer, server_pointer) -> None:
    command_path = _write_json(tmp_path / "command.json", _create_payload(local_pointer))
    store_path = _write_json(tmp_path / "ids.json", {"L1": "srv1", "L5": "srv5"})
    result = CliRunner().invoke(
        cli.app,
        ["resolve", str(command_path), "--store", str(store_path), "--root", str(tmp_path)],
    )
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "httpMethod": "PUT",
        "httpPath": "classes/Foo/srv1",
        "parameters": {"parent": server_pointer("srv5")},
    }


def test_resolve_reads_store_from_config(tmp_path: Path, local_pointer) -> None:
    command_path = _write_json(tmp_path / "command.json", _create_payload(local_pointer))
    _write_json(tmp_path / "ids.json", {"L5": "srv5"})
    (tmp_path / "netcommand.toml").write_text('[store]\npath = "ids.json"\n', encoding="utf-8")
    result = CliRunner().invoke(cli.app, ["resolve", str(command_path), "--root", str(tmp_path)])
    assert result.exit_code == 0
    resolved = json.loads(result.output)
    assert resolved["localId"] == "L1"
    assert resolved["httpPath"] == "classes/Foo"


def test_resolve_reports_unresolved_pointer(tmp_path: Path, local_pointer) -> None:
    command_path = _write_json(tmp_path / "command.json", _create_payload(local_pointer))
    result = CliRunner().invoke(cli.app, ["resolve", str(command_path), "--root", str(tmp_path)])
    assert result.exit_code == 1


def test_resolve_rejects_delete_of_unsaved_object(tmp_path: Path) -> None:
    command_path = _write_json(
        tmp_path / "command.json",
        {"httpPath": "classes/Foo", "httpMethod": "DELETE", "localId": "L2"},
    )
    result = CliRunner().invoke(cli.app, ["resolve", str(command_path), "--root", str(tmp_path)])
    assert result.exit_code == 2


def test_inspect_lists_pending_placeholders(tmp_path: Path, local_pointer) -> None:
    command_path = _write_json(tmp_path / "command.json", _create_payload(local_pointer))
    result = CliRunner().invoke(cli.app, ["inspect", str(command_path)])
    assert result.exit_code == 0
    report = json.loads(result.output)
    assert report["http_path"] == "classes/Foo"
    assert report["local_id"] == "L1"
    assert report["placeholders"] == [{"class_name": "Foo", "local_id": "L5"}]
