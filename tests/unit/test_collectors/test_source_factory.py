"""
Unit tests for the connection source factory.
"""

import pytest

from procnet_exporter.collectors import (
    NetstatConnectionSource,
    PsutilConnectionSource,
    create_connection_source,
)
from procnet_exporter.config import validate_exporter_config


class TestSourceFactory:
    """Test cases for create_connection_source."""

    def test_create_netstat_source(self, sample_config_data):
        sample_config_data["netstat_command"] = ["netstat", "-tanp"]
        config = validate_exporter_config(sample_config_data)

        source = create_connection_source(config)

        assert isinstance(source, NetstatConnectionSource)
        assert source.command == ["netstat", "-tanp"]
        assert source.acquisition_timeout == 2.0

    def test_create_psutil_source(self, sample_config_data):
        sample_config_data["source"] = "psutil"
        config = validate_exporter_config(sample_config_data)

        source = create_connection_source(config)

        assert isinstance(source, PsutilConnectionSource)
        assert source.process_filter == ("sshd", "nginx", "redis")

    def test_unknown_source(self, sample_config_data):
        config = validate_exporter_config(sample_config_data)
        object.__setattr__(config, "source", "ebpf")

        with pytest.raises(ValueError) as excinfo:
            create_connection_source(config)

        assert "Unknown connection source" in str(excinfo.value)

    def test_sources_keep_only_declared_settings(self, sample_config_data):
        config = validate_exporter_config(sample_config_data)

        source = create_connection_source(config)

        assert not hasattr(source, "source_kwargs")
        assert repr(source) == "NetstatConnectionSource(timeout=2.0)"
