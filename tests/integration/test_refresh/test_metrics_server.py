"""
Integration tests for the threaded metrics HTTP server.
"""

import urllib.error
import urllib.request

import pytest

from procnet_exporter.exposition import MetricsServer, create_app
from procnet_exporter.monitoring import MetricStore, RefreshScheduler


@pytest.fixture
def running_server(static_source, test_utils):
    source = static_source([test_utils.make_record("sshd")])
    scheduler = RefreshScheduler(source, MetricStore(), ["sshd", "redis"])
    server = MetricsServer(create_app(scheduler), host="127.0.0.1", port=0)
    server.start()
    yield server, source
    server.stop()


@pytest.mark.integration
class TestMetricsServer:
    """Requests against a real listening socket."""

    def test_serves_metrics(self, running_server):
        server, source = running_server

        with urllib.request.urlopen(f"http://127.0.0.1:{server.port}/metrics", timeout=5) as response:
            body = response.read().decode()

        assert response.status == 200
        assert 'process_exists{process_name="sshd"} 1.0' in body
        assert 'process_exists{process_name="redis"} 0.0' in body
        assert source.calls == 1

    def test_unknown_path_is_404(self, running_server):
        server, _ = running_server

        with pytest.raises(urllib.error.HTTPError) as exc_info:
            urllib.request.urlopen(f"http://127.0.0.1:{server.port}/", timeout=5)

        assert exc_info.value.code == 404
        assert b"/metrics" in exc_info.value.read()

    def test_start_twice(self, running_server):
        server, _ = running_server
        with pytest.raises(RuntimeError):
            server.start()

    def test_stop_is_idempotent(self, running_server):
        server, _ = running_server
        server.stop()
        server.stop()
