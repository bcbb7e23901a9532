"""
Unit tests for the refresh scheduler.
"""

import threading
import time

import pytest

from procnet_exporter.monitoring import MetricStore, RefreshScheduler, RefreshState
from procnet_exporter.validation import SourceUnavailable


@pytest.mark.unit
class TestRefreshOnce:
    """Test cases for a single refresh cycle."""

    def test_publishes_aggregated_result(self, static_source, test_utils):
        store = MetricStore()
        source = static_source([test_utils.make_record("sshd"), test_utils.make_record("sshd", "LISTEN")])
        scheduler = RefreshScheduler(source, store, ["sshd"])

        assert scheduler.refresh_once() is True

        snapshot = store.snapshot()
        assert snapshot.count_for("sshd", "ESTABLISHED") == 1
        assert snapshot.count_for("sshd", "LISTEN") == 1
        assert snapshot.is_present("sshd") is True
        assert scheduler.stats["cycles_completed"] == 1
        assert scheduler.state is RefreshState.IDLE

    def test_second_empty_cycle_clears_previous_samples(self, static_source, test_utils):
        store = MetricStore()
        source = static_source([test_utils.make_record("sshd")])
        scheduler = RefreshScheduler(source, store, ["sshd"])
        scheduler.refresh_once()

        source.records = []
        scheduler.refresh_once()

        assert store.snapshot().samples == ()
        assert store.snapshot().is_present("sshd") is False

    def test_failed_acquisition_leaves_store_untouched(self, static_source, test_utils):
        store = MetricStore()
        source = static_source([test_utils.make_record("sshd")])
        scheduler = RefreshScheduler(source, store, ["sshd"])
        scheduler.refresh_once()
        before = store.snapshot()
        rendered_before = store.render()
        generation_before = store.generation

        source.error = SourceUnavailable("netstat not found")
        assert scheduler.refresh_once() is False

        assert store.snapshot() is before
        assert store.render() == rendered_before
        assert store.generation == generation_before
        assert scheduler.stats["cycles_failed"] == 1
        assert scheduler.state is RefreshState.IDLE

    def test_unexpected_errors_propagate(self, static_source):
        source = static_source(error=RuntimeError("boom"))
        scheduler = RefreshScheduler(source, MetricStore(), ["sshd"])

        with pytest.raises(RuntimeError):
            scheduler.refresh_once()
        assert scheduler.state is RefreshState.IDLE

    def test_concurrent_refreshes_are_serialized(self, test_utils):
        active = []
        overlap = []

        class SlowSource:
            name = "slow"

            def acquire(self):
                if active:
                    overlap.append(True)
                active.append(True)
                time.sleep(0.01)
                active.pop()
                return [test_utils.make_record("sshd")]

        scheduler = RefreshScheduler(SlowSource(), MetricStore(), ["sshd"])
        threads = [threading.Thread(target=scheduler.refresh_once) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert overlap == []
        assert scheduler.stats["cycles_completed"] == 5

    def test_invalid_mode(self, static_source):
        with pytest.raises(ValueError):
            RefreshScheduler(static_source(), MetricStore(), ["sshd"], mode="push")


@pytest.mark.unit
class TestIntervalMode:
    """Test cases for the background refresh thread."""

    def test_start_refreshes_immediately_and_repeatedly(self, static_source, test_utils):
        source = static_source([test_utils.make_record("sshd")])
        store = MetricStore()
        scheduler = RefreshScheduler(source, store, ["sshd"], mode="interval", interval=0.02)

        scheduler.start()
        try:
            deadline = time.monotonic() + 2.0
            while source.calls < 3 and time.monotonic() < deadline:
                time.sleep(0.01)
            assert scheduler.is_running
        finally:
            assert scheduler.stop(timeout=2.0) is True

        assert source.calls >= 3
        assert store.snapshot().is_present("sshd") is True
        assert not scheduler.is_running

    def test_loop_survives_failing_cycles(self, static_source):
        source = static_source(error=SourceUnavailable("down"))
        scheduler = RefreshScheduler(source, MetricStore(), ["sshd"], mode="interval", interval=0.01)

        scheduler.start()
        try:
            deadline = time.monotonic() + 2.0
            while source.calls < 2 and time.monotonic() < deadline:
                time.sleep(0.01)
        finally:
            scheduler.stop(timeout=2.0)

        assert source.calls >= 2
        assert scheduler.stats["cycles_failed"] >= 2

    def test_start_twice(self, static_source):
        scheduler = RefreshScheduler(static_source(), MetricStore(), ["sshd"], mode="interval", interval=10)
        scheduler.start()
        try:
            with pytest.raises(RuntimeError):
                scheduler.start()
        finally:
            scheduler.stop(timeout=2.0)

    def test_start_in_on_demand_mode(self, static_source):
        scheduler = RefreshScheduler(static_source(), MetricStore(), ["sshd"])
        with pytest.raises(RuntimeError):
            scheduler.start()

    def test_stop_without_start(self, static_source):
        scheduler = RefreshScheduler(static_source(), MetricStore(), ["sshd"], mode="interval")
        assert scheduler.stop() is True
