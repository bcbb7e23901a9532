"""
Unit tests for protocol and state normalization.
"""

import pytest

from procnet_exporter.classification import PROTOCOL_MAP, normalize_protocol, normalize_state


@pytest.mark.unit
class TestNormalizeProtocol:
    """Test cases for normalize_protocol."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("0", "ip"),
            ("1", "icmp"),
            ("6", "tcp"),
            ("17", "udp"),
            ("41", "ipv6"),
            ("58", "ipv6-icmp"),
            ("132", "sctp"),
            ("162", "ethernet-over-ip"),
        ],
    )
    def test_known_codes(self, raw, expected):
        assert normalize_protocol(raw) == expected

    @pytest.mark.parametrize("raw", ["9999", "tcp6", "udp", "", "TCP"])
    def test_unknown_codes_pass_through(self, raw):
        assert normalize_protocol(raw) == raw

    @pytest.mark.parametrize("raw", list(PROTOCOL_MAP) + ["tcp", "9999", "tcp6", ""])
    def test_idempotent(self, raw):
        once = normalize_protocol(raw)
        assert normalize_protocol(once) == once


@pytest.mark.unit
class TestNormalizeState:
    """Test cases for normalize_state."""

    def test_uppercases(self):
        assert normalize_state("established") == "ESTABLISHED"

    def test_missing_state_is_none(self):
        assert normalize_state("") == "NONE"
        assert normalize_state(None) == "NONE"

    def test_known_state_unchanged(self):
        assert normalize_state("TIME_WAIT") == "TIME_WAIT"
