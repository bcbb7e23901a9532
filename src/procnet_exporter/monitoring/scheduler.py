"""
Refresh scheduling for the connection metrics.

A refresh cycle runs acquire -> aggregate -> publish. The RefreshScheduler
drives cycles either from a background thread on a fixed interval, or
synchronously whenever a scrape asks for one (on-demand mode).
"""

import logging
import threading
import time
from enum import Enum
from typing import Dict, Optional, Sequence

from ..collectors.base import AbstractConnectionSource
from ..models.config import REFRESH_INTERVAL, REFRESH_MODE_CHOICES, REFRESH_ON_DEMAND
from ..validation import ErrorSeverity, SourceUnavailable, handle_error
from .aggregator import aggregate
from .store import MetricStore

logger = logging.getLogger(__name__)


class RefreshState(Enum):
    """Phase of the refresh cycle currently in progress."""
    IDLE = "idle"
    ACQUIRING = "acquiring"
    PUBLISHING = "publishing"


class RefreshScheduler:
    """
    Runs refresh cycles and owns the MetricStore they write to.

    Cycles are serialized by a lock, so two concurrent on-demand scrapes
    never interleave their acquisitions or publishes. A failed acquisition
    leaves the store exactly as it was.

    Attributes:
        source: Connection source used for acquisition.
        store: Store the aggregated results are published to.
        specs: Configured process name fragments.
        mode: "interval" or "on_demand".
        interval: Seconds between cycles in interval mode.
        debug: Log every matched connection.
    """

    def __init__(
        self,
        source: AbstractConnectionSource,
        store: MetricStore,
        specs: Sequence[str],
        mode: str = REFRESH_ON_DEMAND,
        interval: float = 15.0,
        debug: bool = False,
    ):
        if mode not in REFRESH_MODE_CHOICES:
            raise ValueError(f"Invalid refresh mode: {mode}")

        self.source = source
        self.store = store
        self.specs = tuple(specs)
        self.mode = mode
        self.interval = interval
        self.debug = debug

        self._state = RefreshState.IDLE
        self._refresh_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.stats: Dict[str, float] = {
            "cycles_completed": 0,
            "cycles_failed": 0,
            "last_success_time": 0.0,
            "last_duration": 0.0,
        }

        logger.info(
            f"RefreshScheduler initialized in '{mode}' mode with source "
            f"{source!r}, {len(self.specs)} processes"
            + (f", interval {interval}s" if mode == REFRESH_INTERVAL else "")
        )

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def is_running(self) -> bool:
        """True while the interval thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def refresh_once(self) -> bool:
        """
        Run one acquire -> aggregate -> publish cycle.

        Returns:
            True if new metrics were published, False if the source was
            unavailable and the previous metrics were kept.
        """
        with self._refresh_lock:
            start = time.monotonic()
            self._state = RefreshState.ACQUIRING
            try:
                records = self.source.acquire()
            except SourceUnavailable as e:
                self.stats["cycles_failed"] += 1
                handle_error(
                    error=e,
                    context=f"acquiring connections from {self.source.name}",
                    severity=ErrorSeverity.WARNING,
                    reraise=False,
                    logger=logger,
                )
                return False
            finally:
                self._state = RefreshState.IDLE

            self._state = RefreshState.PUBLISHING
            try:
                result = aggregate(records, self.specs, debug=self.debug)
                self.store.publish(result)
            finally:
                self._state = RefreshState.IDLE

            duration = time.monotonic() - start
            self.stats["cycles_completed"] += 1
            self.stats["last_success_time"] = time.time()
            self.stats["last_duration"] = duration
            logger.debug(
                f"Refresh cycle finished in {duration:.3f}s: {len(records)} connections, "
                f"{len(result.samples)} series"
            )
            return True

    def start(self) -> None:
        """
        Start the background refresh thread (interval mode only).

        The first cycle runs immediately so the endpoint is populated before
        the first interval elapses.

        Raises:
            RuntimeError: If already running or not in interval mode.
        """
        if self.mode != REFRESH_INTERVAL:
            raise RuntimeError(f"Background refresh is not used in '{self.mode}' mode")
        if self.is_running:
            raise RuntimeError("RefreshScheduler is already running")

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop, name="RefreshScheduler", daemon=True
        )
        self._thread.start()
        logger.info(f"Started background refresh every {self.interval}s")

    def stop(self, timeout: float = 10.0) -> bool:
        """
        Signal the background thread to exit and wait for it.

        Returns:
            True if the thread has stopped (or was never started), False if
            it is still running after `timeout`.
        """
        self._stop_event.set()
        if self._thread is None:
            return True

        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning(f"Refresh thread did not stop within {timeout}s")
            return False

        self._thread = None
        logger.info("Background refresh stopped")
        return True

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.refresh_once()
            except Exception as e:
                # Keep the thread alive; the next cycle may succeed.
                handle_error(
                    error=e,
                    context="background refresh cycle",
                    severity=ErrorSeverity.ERROR,
                    reraise=False,
                    logger=logger,
                )
            if self._stop_event.wait(self.interval):
                break
