"""Keep-alive tuning for the local JSON-RPC server."""

from __future__ import annotations

from typing import Any

# Up from the server's 5 seconds so tests with long pauses between
# requests don't lose their connection.
KEEP_ALIVE_TIMEOUT_MS = 5 * 60 * 1000


def on_server_created(server: Any) -> None:
    server.http_server.keep_alive_timeout = KEEP_ALIVE_TIMEOUT_MS


def handle_server_created(args, runtime, run_super):
    on_server_created(args["server"])
    return run_super()
