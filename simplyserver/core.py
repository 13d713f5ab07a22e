from __future__ import annotations
import logging
import socket
from dataclasses import dataclass
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable

logger = logging.getLogger(__name__)

# Upper bound for a single read while discarding request bodies.
READ_CHUNK = 64 * 1024


@dataclass(frozen=True)
class ServerCfg:
    host: str = ""
    port: int = 25252
    body: bytes = b"simply proxy server"


DEFAULT_CFG = ServerCfg()


class ServerError(RuntimeError):
    pass


def _display_host(host: str) -> str:
    if not host:
        return "[::]" if socket.has_ipv6 else "0.0.0.0"
    if ":" in host:
        return f"[{host}]"
    return host


class Handler(BaseHTTPRequestHandler):
    """
    Answers every request with the configured body:
      - any method, including non-standard tokens
      - any path, headers and body (the body is read and dropped)
      - HEAD gets the headers only
    """

    protocol_version = "HTTP/1.1"

    def _respond(self) -> None:
        self._discard_body()
        body = self.server.cfg.body

        self.send_response(HTTPStatus.OK)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    do_GET = do_HEAD = do_POST = do_PUT = do_DELETE = _respond
    do_PATCH = do_OPTIONS = do_TRACE = do_CONNECT = _respond

    def __getattr__(self, name: str) -> Callable[[], None]:
        # Extension methods (e.g. PROPFIND) have no do_ attribute;
        # without this the stdlib answers them with 501.
        if name.startswith("do_"):
            return self._respond
        raise AttributeError(name)

    # ---------- request body ----------
    def _discard_body(self) -> None:
        encoding = self.headers.get("Transfer-Encoding", "")
        if "chunked" in encoding.lower():
            self._discard_chunked()
            return

        length = self.headers.get("Content-Length")
        if length is None:
            return
        try:
            remaining = int(length)
        except ValueError:
            remaining = -1
        if remaining < 0:
            # Framing is unknown, the connection cannot be reused.
            self.close_connection = True
            return
        self._discard(remaining)

    def _discard(self, remaining: int) -> None:
        while remaining > 0:
            chunk = self.rfile.read(min(remaining, READ_CHUNK))
            if not chunk:
                self.close_connection = True
                return
            remaining -= len(chunk)

    def _discard_chunked(self) -> None:
        while True:
            line = self.rfile.readline(READ_CHUNK + 1)
            try:
                size = int(line.split(b";", 1)[0].strip(), 16)
            except ValueError:
                self.close_connection = True
                return

            if size == 0:
                # Trailer section ends with an empty line.
                while line not in (b"\r\n", b"\n", b""):
                    line = self.rfile.readline(READ_CHUNK + 1)
                return
            self._discard(size + 2)

    # ---------- logging ----------
    def log_message(self, format: str, *args) -> None:
        logger.info("%s - %s", self.address_string(), format % args)

    def log_error(self, format: str, *args) -> None:
        logger.warning("%s - %s", self.address_string(), format % args)


class SimplyHTTPServer(ThreadingHTTPServer):
    # A second instance on the same port must fail to bind.
    allow_reuse_port = False
    # socketserver defaults to 5; bursts of connects would stall on SYN retries.
    request_queue_size = 128

    def __init__(self, cfg: ServerCfg):
        self.cfg = cfg
        host = cfg.host
        if not host and socket.has_ipv6:
            # All interfaces: one [::] socket that also accepts IPv4.
            self.address_family = socket.AF_INET6
            host = "::"
        elif ":" in host:
            self.address_family = socket.AF_INET6
        super().__init__((host, cfg.port), Handler)

    def server_bind(self) -> None:
        if self.address_family == socket.AF_INET6 and hasattr(socket, "IPV6_V6ONLY"):
            self.socket.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 0)
        super().server_bind()


def build_server(cfg: ServerCfg = DEFAULT_CFG) -> SimplyHTTPServer:
    try:
        return SimplyHTTPServer(cfg)
    except OSError as e:
        raise ServerError(
            f"Cannot listen on {_display_host(cfg.host)}:{cfg.port}: {e}"
        ) from e


def serve(cfg: ServerCfg = DEFAULT_CFG) -> None:
    httpd = build_server(cfg)
    host, port = httpd.server_address[:2]
    logger.info("Listening on http://%s:%d", _display_host(host), port)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Interrupted, closing listener")
    finally:
        httpd.server_close()
