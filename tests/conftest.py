"""
Pytest configuration and shared fixtures for the exporter test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules.
"""

import shutil
import socket
import sys
import tempfile
from pathlib import Path
from typing import List, Optional
from unittest.mock import Mock

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_config_data():
    """Sample raw configuration data, as parsed from config.toml."""
    return {
        "processes": ["sshd", "nginx", "redis"],
        "exporter_addr": "127.0.0.1",
        "exporter_port": "9042",
        "source": "netstat",
        "refresh_mode": "on_demand",
        "refresh_interval": 5.0,
        "acquisition_timeout": 2.0,
        "netstat_command": ["netstat", "-tanup"],
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write sample_config_data to a temporary config.toml."""
    import toml

    path = temp_dir / "config.toml"
    with open(path, "w") as f:
        toml.dump(sample_config_data, f)
    return path


@pytest.fixture
def netstat_output():
    """Captured `netstat -tanup` output with headers and unowned lines."""
    return (
        "Active Internet connections (servers and established)\n"
        "Proto Recv-Q Send-Q Local Address           Foreign Address         State       PID/Program name\n"
        "tcp        0      0 0.0.0.0:22              0.0.0.0:*               LISTEN      812/sshd\n"
        "tcp        0      0 10.0.0.5:22             10.0.0.9:51544          ESTABLISHED 4021/sshd: alice\n"
        "tcp        0      0 127.0.0.1:6379          0.0.0.0:*               LISTEN      977/redis-server\n"
        "tcp        0      0 0.0.0.0:80              0.0.0.0:*               LISTEN      -\n"
        "tcp6       0      0 :::80                   :::*                    LISTEN      1300/nginx: master\n"
        "tcp6       0      0 ::1:6379                ::1:40122               ESTABLISHED 977/redis-server\n"
        "udp        0      0 0.0.0.0:68              0.0.0.0:*                           655/dhclient\n"
    )


# ============================================================================
# Test Utilities
# ============================================================================


class TestUtils:
    """Utility functions for testing."""

    @staticmethod
    def make_record(
        process_name: Optional[str],
        state: str = "ESTABLISHED",
        protocol: str = "6",
        pid: int = 100,
        local: str = "10.0.0.1:22",
        remote: str = "10.0.0.2:40000",
    ):
        """Create a ConnectionRecord with sensible defaults."""
        from procnet_exporter.models import ConnectionRecord

        local_address, local_port = local.rsplit(":", 1)
        remote_address, remote_port = remote.rsplit(":", 1)
        return ConnectionRecord(
            protocol=protocol,
            local_address=local_address,
            local_port=local_port,
            remote_address=remote_address,
            remote_port=remote_port,
            state=state,
            pid=pid,
            process_name=process_name,
        )

    @staticmethod
    def make_psutil_connection(
        status: str = "ESTABLISHED",
        sock_type=socket.SOCK_STREAM,
        laddr=("10.0.0.1", 22),
        raddr=("10.0.0.2", 40000),
        family=socket.AF_INET,
    ):
        """Create an object shaped like psutil's connection namedtuple."""
        return Mock(family=family, type=sock_type, laddr=laddr, raddr=raddr, status=status)

    @staticmethod
    def make_psutil_process(pid: int, name: Optional[str], connections: List = None):
        """Create a mock psutil.Process as yielded by process_iter."""
        proc = Mock()
        proc.pid = pid
        proc.info = {"pid": pid, "name": name}
        proc.net_connections.return_value = connections or []
        return proc


@pytest.fixture
def test_utils():
    """Provide test utility functions."""
    return TestUtils


class StaticSource:
    """Connection source returning a fixed batch, or raising a given error."""

    name = "static"

    def __init__(self, records=None, error: Optional[Exception] = None):
        self.records = list(records or [])
        self.error = error
        self.calls = 0

    def acquire(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)

    def __repr__(self):
        return "StaticSource()"


@pytest.fixture
def static_source():
    """Factory for StaticSource instances."""
    return StaticSource


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    yield

    from procnet_exporter.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(Path("config.toml"))
