"""MCP Server exposing gatekeeper control tools over HTTP."""

from __future__ import annotations

import asyncio

from mcp.server.fastmcp import FastMCP

from gatekeeper_shell.config import DEFAULT_HOST, DEFAULT_PORT
from gatekeeper_shell.process_manager.errors import SupervisorError
from gatekeeper_shell.process_manager.supervisor import WorkerSupervisor


def create_server(
    supervisor: WorkerSupervisor | None = None,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> FastMCP:
    """Create and configure the gatekeeper control server."""

    sv = supervisor or WorkerSupervisor()

    mcp = FastMCP(
        name="gatekeeper-shell",
        instructions=(
            "Controls the local gatekeeper worker process. "
            "Use gatekeeper_status to check whether it is running, "
            "start_gatekeeper to launch it and stop_gatekeeper to kill it."
        ),
        host=host,
        port=port,
        stateless_http=True,
    )

    # ------------------------------------------------------------------
    # Tool: start_gatekeeper
    # ------------------------------------------------------------------
    @mcp.tool()
    async def start_gatekeeper() -> dict:
        """Start the gatekeeper worker.

        Fails if a gatekeeper is already tracked; call gatekeeper_status
        first if unsure.
        """
        try:
            pid = await asyncio.to_thread(sv.start)
        except SupervisorError as exc:
            return {"status": "error", "error": str(exc)}
        return {
            "status": "started",
            "pid": pid,
            "message": f"gatekeeper started (pid {pid})",
        }

    # ------------------------------------------------------------------
    # Tool: stop_gatekeeper
    # ------------------------------------------------------------------
    @mcp.tool()
    async def stop_gatekeeper() -> dict:
        """Kill the gatekeeper worker and wait until it has exited."""
        try:
            await asyncio.to_thread(sv.stop)
        except SupervisorError as exc:
            return {"status": "error", "error": str(exc)}
        return {"status": "stopped", "message": "gatekeeper stopped"}

    # ------------------------------------------------------------------
    # Tool: gatekeeper_status
    # ------------------------------------------------------------------
    @mcp.tool()
    async def gatekeeper_status() -> dict:
        """Report whether the gatekeeper is running or stopped."""
        try:
            status = await asyncio.to_thread(sv.status)
        except SupervisorError as exc:
            return {"status": "error", "error": str(exc)}
        return {"status": status.value}

    return mcp
