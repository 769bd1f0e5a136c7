import httpx
import pytest
import typer

from keplog.commands.delete import DeleteCommand
from keplog.utils.deletion_manager import DeletionManager

LISTING = {
    "release": "v1",
    "count": 3,
    "source_maps": [
        {"Filename": "a.js.map", "Size": 10},
        {"Filename": "b.js.map", "Size": 20},
        {"Filename": "c.js.map", "Size": 30},
    ],
}


def _handler(fail_on=()):
    def handler(request):
        if request.method == "GET":
            return httpx.Response(200, json=LISTING)
        name = request.url.path.rsplit("/", 1)[-1]
        if name in fail_on:
            return httpx.Response(404, json={"error": "Source map not found"})
        return httpx.Response(200, json={"message": "deleted"})

    return handler


def test_delete_single_file_with_yes(configured_store, wire_command):
    cmd = DeleteCommand(configured_store)
    transport = wire_command(cmd, _handler())

    summary = cmd.run("v1", filename="a.js.map", yes=True)

    assert summary.deleted == ["a.js.map"]
    assert [r.method for r in transport.requests] == ["DELETE"]
    assert transport.requests[0].url.params["release"] == "v1"


def test_delete_all_files_in_release(configured_store, wire_command):
    cmd = DeleteCommand(configured_store)
    transport = wire_command(cmd, _handler())

    summary = cmd.run("v1", yes=True)

    assert summary.deleted == ["a.js.map", "b.js.map", "c.js.map"]
    assert [r.method for r in transport.requests] == ["GET", "DELETE", "DELETE", "DELETE"]


def test_delete_partial_failure_exits_nonzero(configured_store, wire_command):
    manager = DeletionManager()
    cmd = DeleteCommand(configured_store, deletion_manager=manager)
    wire_command(cmd, _handler(fail_on=("b.js.map",)))
    summaries = []
    original = manager.execute_deletions

    def capture(files, delete_func):
        summary = original(files, delete_func)
        summaries.append(summary)
        return summary

    manager.execute_deletions = capture

    with pytest.raises(typer.Exit) as exc_info:
        cmd.run("v1", yes=True)

    assert exc_info.value.exit_code == 1
    summary = summaries[0]
    assert summary.deleted == ["a.js.map", "c.js.map"]
    assert summary.failed[0].file == "b.js.map"
    assert summary.failed[0].message == "Source map not found"


def test_delete_cancelled(configured_store, wire_command, mocker):
    mocker.patch("typer.confirm", return_value=False)
    cmd = DeleteCommand(configured_store)
    transport = wire_command(cmd, _handler())

    assert cmd.run("v1", filename="a.js.map") is None
    assert transport.requests == []


def test_delete_empty_release(configured_store, wire_command):
    cmd = DeleteCommand(configured_store)
    transport = wire_command(
        cmd, lambda request: httpx.Response(200, json={"source_maps": [], "count": 0})
    )

    assert cmd.run("v1", yes=True) is None
    assert [r.method for r in transport.requests] == ["GET"]


def test_delete_listing_failure_exits(configured_store, wire_command):
    cmd = DeleteCommand(configured_store)
    wire_command(cmd, lambda request: httpx.Response(403, json={"error": "Forbidden"}))

    with pytest.raises(typer.Exit) as exc_info:
        cmd.run("v1", yes=True)

    assert exc_info.value.exit_code == 1
