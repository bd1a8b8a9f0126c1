"""Shared fixtures: a local HTTP server that serves canned responses."""

from __future__ import annotations

import socket
import threading
from collections import deque
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Deque, Tuple

import pytest


class _RecordingHandler(BaseHTTPRequestHandler):
    """HTTP handler that replays queued responses and records requests."""

    responses: Deque[Tuple[int, dict[str, str], bytes]] = deque()
    requests: list[dict[str, object]] = []
    lock = threading.Lock()

    def _handle(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        with self.lock:
            type(self).requests.append(
                {
                    "method": self.command,
                    "path": self.path,
                    "headers": dict(self.headers),
                    "body": body,
                }
            )
            if self.responses:
                status, headers, payload = self.responses.popleft()
            else:
                status, headers, payload = 200, {}, b"{}"
        self.send_response(status)
        for key, value in headers.items():
            self.send_header(key, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = _handle
    do_POST = _handle

    def log_message(self, *_args, **_kwargs):  # pragma: no cover - silence server logs
        return None


@pytest.fixture
def http_server():
    """Run a local server; yields ``(base_url, handler_class)``."""

    _RecordingHandler.responses = deque()
    _RecordingHandler.requests = []
    server = HTTPServer(("127.0.0.1", 0), _RecordingHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address
        yield f"http://{host}:{port}", _RecordingHandler
    finally:
        server.shutdown()
        server.server_close()
        thread.join()


@pytest.fixture
def closed_port():
    """Return a local port with nothing listening on it."""

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
