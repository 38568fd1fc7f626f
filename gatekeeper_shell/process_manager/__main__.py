"""Run the gatekeeper control daemon over HTTP.

This is the top-level entry point.  It starts the MCP server and, when
asked, launches the gatekeeper once at boot.

Usage:
    python -m gatekeeper_shell.process_manager [--port PORT] [--app-dir DIR] [--autostart]

On SIGINT/SIGTERM the daemon stops serving and kills the gatekeeper so it
is not left running without a supervisor.
"""

import argparse
import asyncio
import logging
import signal

import uvicorn

from gatekeeper_shell.config import Config
from gatekeeper_shell.process_manager.errors import SupervisorError
from gatekeeper_shell.process_manager.server import create_server
from gatekeeper_shell.process_manager.supervisor import WorkerSupervisor

log = logging.getLogger(__name__)


async def _run(config: Config, autostart: bool) -> None:
    supervisor = WorkerSupervisor(app_dir=config.resolve_app_dir())
    server = create_server(supervisor=supervisor, host=config.host, port=config.port)

    if autostart:
        try:
            supervisor.start()
        except SupervisorError:
            log.exception("Autostart failed")

    app = server.streamable_http_app()
    uvi_config = uvicorn.Config(
        app, host=config.host, port=config.port,
        log_level=config.log_level.lower(),
    )
    uvi = uvicorn.Server(uvi_config)

    # Use _serve() instead of serve() so uvicorn does not install its own
    # signal handlers over ours.
    shutdown = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown.set)

    serve_task = asyncio.create_task(uvi._serve())

    await shutdown.wait()
    log.info("Signal received, shutting down")

    uvi.should_exit = True
    await serve_task
    if await asyncio.to_thread(supervisor.shutdown):
        log.info("Gatekeeper stopped")


def main() -> None:
    config = Config.from_env()

    parser = argparse.ArgumentParser(description="Gatekeeper control daemon")
    parser.add_argument(
        "--port", type=int, default=config.port,
        help=f"Port to listen on (default: {config.port})",
    )
    parser.add_argument(
        "--app-dir", default=config.app_dir,
        help="Install location the gatekeeper is launched from "
             f"(default: {config.app_dir})",
    )
    parser.add_argument(
        "--autostart", action="store_true",
        help="Start the gatekeeper as soon as the daemon is up",
    )
    args = parser.parse_args()

    config = Config(
        app_dir=args.app_dir,
        host=config.host,
        port=args.port,
        log_level=config.log_level,
    )

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [process-manager] %(levelname)s %(message)s",
    )

    # The MCP SDK logs a full traceback when the HTTP client disconnects
    # before the response is sent (ClosedResourceError). Downgrade it.
    class _SuppressDisconnect(logging.Filter):
        def filter(self, record: logging.LogRecord) -> bool:
            if record.exc_info and record.exc_info[1] is not None:
                if "ClosedResourceError" in str(record.exc_info[1]):
                    record.levelno = logging.DEBUG
                    record.levelname = "DEBUG"
                    record.msg = "Client disconnected before response completed"
                    record.exc_info = None
                    record.exc_text = None
            return True

    logging.getLogger("mcp.server.streamable_http_manager").addFilter(
        _SuppressDisconnect()
    )

    log.info("Starting gatekeeper control on http://%s:%d/mcp", config.host, config.port)
    asyncio.run(_run(config, args.autostart))


if __name__ == "__main__":
    main()
