"""Shared fixtures for HTTP server tests.

server_factory starts an EmployeeServer on an OS-assigned port in a
background thread; call_api sends one request with http.client.
"""
from __future__ import annotations

import http.client
import json
import socket

import pytest

from staffstore_lite.api.server import EmployeeServer
from staffstore_lite.config import ServerConfig
from staffstore_lite.repository.memory import InMemoryEmployeeRepository


@pytest.fixture()
def server_factory():
    """Create, start and (after the test) stop EmployeeServers."""
    servers: list[EmployeeServer] = []

    def _create(repo: InMemoryEmployeeRepository | None = None, default_limit: int = 10):
        srv = EmployeeServer(
            ServerConfig(host="127.0.0.1", port=0, default_limit=default_limit),
            repo=repo,
        )
        srv.start()
        servers.append(srv)
        return srv

    yield _create

    for s in servers:
        s.stop()


@pytest.fixture()
def server(server_factory) -> EmployeeServer:
    return server_factory()


def call_api(
    server: EmployeeServer,
    method: str,
    path: str,
    body=None,
    raw: bytes | None = None,
    timeout: float = 5.0,
):
    """Send one request. Returns (status, decoded body or None)."""
    host, port = server.address
    conn = http.client.HTTPConnection(host, port, timeout=timeout)
    try:
        headers = {}
        payload = raw
        if body is not None:
            payload = json.dumps(body).encode("utf-8")
        if payload is not None:
            headers["Content-Type"] = "application/json"
        conn.request(method, path, body=payload, headers=headers)
        resp = conn.getresponse()
        data = resp.read()
        if not data:
            return resp.status, None
        if resp.getheader("Content-Type", "").startswith("application/json"):
            return resp.status, json.loads(data)
        return resp.status, data.decode("utf-8")
    finally:
        conn.close()


def send_raw(server: EmployeeServer, data: bytes, timeout: float = 1.0) -> bytes:
    """Write raw bytes on one connection and collect whatever comes back.

    Reading stops when the server closes the connection or nothing
    arrives for `timeout` seconds (a keep-alive connection left open).
    """
    host, port = server.address
    sock = socket.create_connection((host, port), timeout=5.0)
    try:
        sock.sendall(data)
        sock.settimeout(timeout)
        chunks = []
        while True:
            try:
                chunk = sock.recv(65536)
            except socket.timeout:
                break
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks)
    finally:
        sock.close()
