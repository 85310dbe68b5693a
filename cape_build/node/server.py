"""
Local JSON-RPC node.

Listens on localhost and forwards JSON-RPC requests to an upstream
endpoint (e.g. an anvil or ganache instance). Creating the server fires the
``node:server-created`` extension point exactly once.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

import requests

from cape_build.runtime.tasks import TASK_NODE_SERVER_CREATED

logger = logging.getLogger(__name__)

DEFAULT_KEEP_ALIVE_TIMEOUT_MS = 5_000
UPSTREAM_TIMEOUT = 120  # seconds


def _rpc_error(code: int, message: str) -> bytes:
    return json.dumps({"jsonrpc": "2.0", "id": None, "error": {"code": code, "message": message}}).encode()


class JsonRpcForwardingHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    def setup(self) -> None:
        # Idle keep-alive connections are closed after this many seconds
        self.timeout = self.server.keep_alive_timeout / 1000
        super().setup()

    def do_POST(self) -> None:
        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            length = -1
        if length < 0:
            logger.warning("Rejecting request with Content-Length %r", self.headers.get("Content-Length"))
            # The body boundary is unknown, so the connection cannot be reused
            self.close_connection = True
            self._respond(400, _rpc_error(-32600, "Invalid Content-Length header"))
            return

        body = self.rfile.read(length)
        try:
            upstream = self.server.session.post(
                self.server.upstream_url,
                data=body,
                headers={"Content-Type": "application/json"},
                timeout=UPSTREAM_TIMEOUT,
            )
            status, payload = upstream.status_code, upstream.content
        except requests.RequestException as e:
            logger.error("Upstream %s failed: %s", self.server.upstream_url, e)
            status, payload = 502, _rpc_error(-32603, f"Upstream error: {e}")
        self._respond(status, payload)

    def _respond(self, status: int, payload: bytes) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        if self.close_connection:
            self.send_header("Connection", "close")
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)


class LocalNodeServer(ThreadingHTTPServer):
    """HTTP server forwarding JSON-RPC to ``upstream_url``."""

    daemon_threads = True

    def __init__(self, address: tuple[str, int], upstream_url: str):
        self.upstream_url = upstream_url
        self.keep_alive_timeout = DEFAULT_KEEP_ALIVE_TIMEOUT_MS
        self.session = requests.Session()
        super().__init__(address, JsonRpcForwardingHandler)

    def server_close(self) -> None:
        super().server_close()
        self.session.close()


@dataclass(frozen=True)
class ServerHandle:
    http_server: LocalNodeServer
    host: str
    port: int

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"


def start_node(runtime: Any, upstream_url: str, host: str = "127.0.0.1", port: int | None = None) -> ServerHandle:
    """Create the local server and dispatch the server-created hooks.

    The caller owns the returned server and is responsible for
    ``serve_forever()`` and ``server_close()``.
    """
    if port is None:
        port = runtime.config.rpc_port
    server = LocalNodeServer((host, port), upstream_url)
    handle = ServerHandle(http_server=server, host=host, port=server.server_address[1])
    runtime.run(TASK_NODE_SERVER_CREATED, server=handle)
    logger.info(
        "Started JSON-RPC server at %s forwarding to %s (keep-alive %d ms)",
        handle.url, upstream_url, server.keep_alive_timeout,
    )
    return handle
