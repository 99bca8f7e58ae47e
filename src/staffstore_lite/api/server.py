"""JSON-over-HTTP front end for the employee repository.

Architecture:
    http.server.ThreadingHTTPServer: one thread per connection
    _Handler: parse path/query/body, dispatch to EmployeeController
    EmployeeController: validation + repository call -> ApiResponse

Thread-per-connection means the repository really is hit from many
threads at once; its ReadWriteLock is what keeps that safe.

Routes:
    POST   /api/v1/employees
    GET    /api/v1/employees?page=&limit=
    GET    /api/v1/employees/{id}
    PUT    /api/v1/employees/{id}
    DELETE /api/v1/employees/{id}
    GET    /ping
    GET    /
"""
from __future__ import annotations

import json
import logging
import re
import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, urlsplit

from staffstore_lite.api.controller import ApiResponse, EmployeeController
from staffstore_lite.config import ServerConfig
from staffstore_lite.repository.base import EmployeeRepository
from staffstore_lite.repository.memory import InMemoryEmployeeRepository

log = logging.getLogger(__name__)

API_PREFIX = "/api/v1/employees"
_ITEM_RE = re.compile(r"^/api/v1/employees/([^/]+)$")
_LENGTH_RE = re.compile(r"[0-9]+")

MAX_BODY_BYTES = 1 << 20


class _BadBody(Exception):
    """Request body framing cannot be trusted; the connection must be dropped."""

    def __init__(self, status: HTTPStatus) -> None:
        self.status = status
        super().__init__(status.phrase)


ROUTES = [
    {"method": "PUT", "path": API_PREFIX + "/:id", "name": "employee.update"},
    {"method": "DELETE", "path": API_PREFIX + "/:id", "name": "employee.delete"},
    {"method": "GET", "path": API_PREFIX + "/:id", "name": "employee.get"},
    {"method": "POST", "path": API_PREFIX, "name": "employee.create"},
    {"method": "GET", "path": API_PREFIX, "name": "employee.list"},
    {"method": "GET", "path": "/ping", "name": "ping"},
    {"method": "GET", "path": "/", "name": "index"},
]


class _Handler(BaseHTTPRequestHandler):
    # Set on the per-server subclass built in EmployeeServer.__init__.
    controller: EmployeeController
    _body: bytes = b""

    protocol_version = "HTTP/1.1"
    server_version = "staffstore-lite"

    def do_GET(self) -> None:
        self._dispatch("GET")

    def do_POST(self) -> None:
        self._dispatch("POST")

    def do_PUT(self) -> None:
        self._dispatch("PUT")

    def do_DELETE(self) -> None:
        self._dispatch("DELETE")

    def log_message(self, format: str, *args) -> None:
        log.info("%s - %s", self.address_string(), format % args)

    def _dispatch(self, method: str) -> None:
        # Consume the body before routing: no branch may leave unread bytes
        # on a keep-alive connection.
        try:
            self._body = self._read_body()
        except _BadBody as exc:
            self.close_connection = True
            self._send(ApiResponse(exc.status, {"error": "invalid request body"}))
            return
        try:
            response = self._route(method)
        except Exception:
            log.exception("Error handling %s %s", method, self.path)
            response = ApiResponse(
                HTTPStatus.INTERNAL_SERVER_ERROR, {"error": "internal server error"}
            )
        self._send(response)

    def _route(self, method: str) -> ApiResponse:
        url = urlsplit(self.path)
        path = url.path.rstrip("/") or "/"

        if path == "/ping" and method == "GET":
            return ApiResponse(HTTPStatus.OK, "pong")
        if path == "/" and method == "GET":
            return ApiResponse(HTTPStatus.OK, ROUTES)

        if path == API_PREFIX:
            if method == "GET":
                query = parse_qs(url.query)
                return self.controller.list_employees(
                    _first(query, "page"), _first(query, "limit")
                )
            if method == "POST":
                body, error = self._read_json()
                return error or self.controller.create_employee(body)
            return _method_not_allowed()

        match = _ITEM_RE.match(path)
        if match:
            raw_id = match.group(1)
            if method == "GET":
                return self.controller.get_employee(raw_id)
            if method == "PUT":
                body, error = self._read_json()
                return error or self.controller.update_employee(raw_id, body)
            if method == "DELETE":
                return self.controller.delete_employee(raw_id)
            return _method_not_allowed()

        return ApiResponse(HTTPStatus.NOT_FOUND, {"message": "Not Found"})

    def _read_body(self) -> bytes:
        """Read exactly Content-Length bytes. Raises _BadBody if the framing is unusable."""
        if self.headers.get("Transfer-Encoding"):
            raise _BadBody(HTTPStatus.BAD_REQUEST)
        header = self.headers.get("Content-Length")
        if header is None or header.strip() == "":
            return b""
        if not _LENGTH_RE.fullmatch(header.strip()):
            raise _BadBody(HTTPStatus.BAD_REQUEST)
        length = int(header.strip())
        if length > MAX_BODY_BYTES:
            raise _BadBody(HTTPStatus.REQUEST_ENTITY_TOO_LARGE)
        return self.rfile.read(length) if length else b""

    def _read_json(self) -> tuple[object, ApiResponse | None]:
        raw = self._body
        try:
            return json.loads(raw or b"null"), None
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None, ApiResponse(HTTPStatus.BAD_REQUEST, {"error": "invalid request body"})

    def _send(self, response: ApiResponse) -> None:
        self.send_response(response.status)
        if self.close_connection:
            self.send_header("Connection", "close")
        if response.status == HTTPStatus.NO_CONTENT:
            self.send_header("Content-Length", "0")
            self.end_headers()
            return
        if isinstance(response.body, str):
            payload = response.body.encode("utf-8")
            content_type = "text/plain; charset=utf-8"
        else:
            payload = json.dumps(response.body).encode("utf-8")
            content_type = "application/json"
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)


def _first(query: dict[str, list[str]], key: str) -> str | None:
    values = query.get(key)
    return values[0] if values else None


def _method_not_allowed() -> ApiResponse:
    return ApiResponse(HTTPStatus.METHOD_NOT_ALLOWED, {"message": "Method Not Allowed"})


class EmployeeServer:
    """Threaded HTTP server exposing an EmployeeRepository.

    Args:
        config: bind address, default page size.
        repo: backing repository (a fresh in-memory one if None).
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        repo: EmployeeRepository | None = None,
    ) -> None:
        self._config = config or ServerConfig()
        self._repo = repo or InMemoryEmployeeRepository()
        controller = EmployeeController(self._repo, default_limit=self._config.default_limit)
        handler = type("EmployeeHandler", (_Handler,), {"controller": controller})
        self._httpd = ThreadingHTTPServer((self._config.host, self._config.port), handler)
        self._httpd.daemon_threads = True
        self._thread: threading.Thread | None = None

    @property
    def address(self) -> tuple[str, int]:
        """(host, port) actually bound. Useful with port=0."""
        host, port = self._httpd.server_address[:2]
        return host, port

    @property
    def repository(self) -> EmployeeRepository:
        return self._repo

    def serve_forever(self) -> None:
        """Block serving requests until shutdown() is called from another thread."""
        host, port = self.address
        log.info("Listening on http://%s:%d", host, port)
        self._httpd.serve_forever(poll_interval=0.5)

    def start(self) -> None:
        """Serve from a background thread."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self.serve_forever, daemon=True, name="staffstore-http"
        )
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Stop accepting, wait for the serving thread, close the socket."""
        if self._thread is not None:
            self._httpd.shutdown()
            self._thread.join(timeout=timeout)
            self._thread = None
        self._httpd.server_close()
