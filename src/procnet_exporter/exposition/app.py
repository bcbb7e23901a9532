"""
WSGI application and HTTP server for the metrics endpoint.

`/metrics` serves the MetricStore's registry in the Prometheus text format.
In on-demand mode the handler runs one refresh cycle first. Every other path
answers 404 with a pointer to `/metrics`.
"""

import logging
import threading
from datetime import datetime, timezone
from socketserver import ThreadingMixIn
from typing import Callable, Iterable, Optional
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from prometheus_client import make_wsgi_app

from ..models.config import REFRESH_ON_DEMAND
from ..monitoring.scheduler import RefreshScheduler
from ..validation import ErrorSeverity, handle_error

logger = logging.getLogger(__name__)

METRICS_PATH = "/metrics"
NOT_FOUND_BODY = (
    b"404 page not found. Metrics are available at " + METRICS_PATH.encode() + b"\n"
)


def log_request(environ: dict) -> None:
    """Log client address and requested URI of one request."""
    timestamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
    client_ip = environ.get("REMOTE_ADDR", "-")
    uri = environ.get("PATH_INFO", "")
    if environ.get("QUERY_STRING"):
        uri = f"{uri}?{environ['QUERY_STRING']}"
    logger.debug(f"[{timestamp}] Client IP: {client_ip} Requested URI: {uri}")


def create_app(scheduler: RefreshScheduler, debug: bool = False) -> Callable:
    """
    Build the WSGI application for the exporter.

    Args:
        scheduler: Scheduler owning the store to expose; in on-demand mode it
            is also used to refresh before each scrape.
        debug: Log every incoming request.

    Returns:
        A WSGI callable.
    """
    metrics_app = make_wsgi_app(scheduler.store.registry)
    refresh_on_scrape = scheduler.mode == REFRESH_ON_DEMAND

    def app(environ: dict, start_response: Callable) -> Iterable[bytes]:
        if debug:
            log_request(environ)

        path = environ.get("PATH_INFO", "").rstrip("/")
        if path != METRICS_PATH:
            start_response(
                "404 Not Found",
                [
                    ("Content-Type", "text/plain; charset=utf-8"),
                    ("Content-Length", str(len(NOT_FOUND_BODY))),
                ],
            )
            return [NOT_FOUND_BODY]

        if refresh_on_scrape:
            # The scrape always gets whatever the store currently holds.
            try:
                scheduler.refresh_once()
            except Exception as e:
                handle_error(
                    error=e,
                    context="on-demand refresh",
                    severity=ErrorSeverity.ERROR,
                    reraise=False,
                    logger=logger,
                )
        return metrics_app(environ, start_response)

    return app


class _LoggingRequestHandler(WSGIRequestHandler):
    """Routes wsgiref's per-request stderr lines into logging."""

    def log_message(self, format, *args):
        logger.debug(f"{self.address_string()} - {format % args}")


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """WSGI server handling each request in its own thread."""

    daemon_threads = True


class MetricsServer:
    """
    Serves the exporter application on a background thread.

    Attributes:
        host: Bind address; empty string binds all interfaces.
        port: TCP port.
    """

    def __init__(self, app: Callable, host: str = "", port: int = 9042):
        self.app = app
        self.host = host
        self.port = port
        self._server: Optional[WSGIServer] = None
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Bind the socket and start serving in a daemon thread."""
        if self._server is not None:
            raise RuntimeError("MetricsServer is already running")

        self._server = make_server(
            self.host,
            self.port,
            self.app,
            server_class=ThreadingWSGIServer,
            handler_class=_LoggingRequestHandler,
        )
        # Port 0 binds an ephemeral port; report the real one.
        self.port = self._server.server_port
        self._thread = threading.Thread(
            target=self._server.serve_forever, name="MetricsServer", daemon=True
        )
        self._thread.start()
        logger.info(f"Serving metrics on {self.host or '0.0.0.0'}:{self.port}{METRICS_PATH}")

    def stop(self) -> None:
        """Stop serving and close the listening socket."""
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._server = None
        self._thread = None
        logger.info("Metrics server stopped")
