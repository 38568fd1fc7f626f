from __future__ import annotations

import pytest

from gatekeeper_shell.process_manager.server import create_server
from gatekeeper_shell.process_manager.supervisor import WorkerSupervisor

from .conftest import FakeProcess, FakeSpawner


def _tool(server, name):
    return server._tool_manager.get_tool(name).fn


@pytest.fixture
def proc():
    return FakeProcess(pid=321)


@pytest.fixture
def server(tmp_path, proc):
    sv = WorkerSupervisor(app_dir=tmp_path, spawn=FakeSpawner(proc))
    return create_server(supervisor=sv)


def test_server_registers_three_tools(server):
    names = {tool.name for tool in server._tool_manager.list_tools()}
    assert names == {"start_gatekeeper", "stop_gatekeeper", "gatekeeper_status"}


@pytest.mark.asyncio
async def test_start_then_status_then_stop(server):
    started = await _tool(server, "start_gatekeeper")()
    assert started == {
        "status": "started",
        "pid": 321,
        "message": "gatekeeper started (pid 321)",
    }

    assert await _tool(server, "gatekeeper_status")() == {"status": "running"}

    stopped = await _tool(server, "stop_gatekeeper")()
    assert stopped == {"status": "stopped", "message": "gatekeeper stopped"}

    assert await _tool(server, "gatekeeper_status")() == {"status": "stopped"}


@pytest.mark.asyncio
async def test_errors_are_rendered_not_raised(server):
    assert await _tool(server, "stop_gatekeeper")() == {
        "status": "error",
        "error": "gatekeeper not running",
    }

    await _tool(server, "start_gatekeeper")()
    assert await _tool(server, "start_gatekeeper")() == {
        "status": "error",
        "error": "gatekeeper already running",
    }


@pytest.mark.asyncio
async def test_status_check_failure_is_rendered(server, proc):
    await _tool(server, "start_gatekeeper")()
    proc.poll_error = OSError("bad poll")

    result = await _tool(server, "gatekeeper_status")()

    assert result == {"status": "error", "error": "error checking status: bad poll"}
