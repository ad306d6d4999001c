"""Shared fixtures for the file operations service tests."""

import http.server
import json
import threading
import time

import pytest
from fastapi.testclient import TestClient

from fileserver.service import app


@pytest.fixture
def client():
    """TestClient with the startup hook run (server identity initialized)."""
    with TestClient(app) as test_client:
        yield test_client


class UpstreamHandler(http.server.BaseHTTPRequestHandler):
    def _reply(self, status, headers, body: bytes):
        self.send_response(status)
        for name, value in headers:
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _handle(self):
        length = int(self.headers.get("Content-Length", "0"))
        body = self.rfile.read(length) if length else b""

        if self.path == "/created":
            self._reply(201, [("X-Test", "v1")], b"ok")
        elif self.path == "/slow":
            time.sleep(3)
            self._reply(200, [], b"late")
        elif self.path == "/trickle":
            self.send_response(200)
            self.send_header("Content-Length", "10")
            self.end_headers()
            try:
                for _ in range(10):
                    self.wfile.write(b"x")
                    time.sleep(0.6)
            except OSError:
                return  # client gave up
        elif self.path == "/multi":
            self._reply(200, [("X-Multi", "one"), ("X-Multi", "two")], b"")
        elif self.path == "/echo":
            payload = {
                "method": self.command,
                "body": body.decode("utf-8"),
                "xMulti": self.headers.get_all("X-Multi") or [],
                "xName": self.headers.get("X-Name"),
                "contentLength": self.headers.get("Content-Length"),
            }
            self._reply(200, [("Content-Type", "application/json")], json.dumps(payload).encode("utf-8"))
        else:
            self._reply(404, [], b"no such upstream path")

    do_GET = _handle
    do_POST = _handle
    do_PUT = _handle
    do_DELETE = _handle

    def log_message(self, fmt, *args):
        return  # quiet


@pytest.fixture
def upstream():
    """Local HTTP server on an ephemeral port; yields its base URL."""
    server = http.server.ThreadingHTTPServer(("127.0.0.1", 0), UpstreamHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture(autouse=True)
def no_env_proxies(monkeypatch):
    """Keep outbound test requests off any proxy configured in the environment."""
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
