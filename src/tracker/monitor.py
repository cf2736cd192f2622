"""Monitor Loop — periodic refresh on a background thread.

Each firing runs the supplied ``tick`` callable (metrics refresh, then an
alert draw).  The loop waits on a stop event, so ``stop()`` wakes it
immediately instead of sleeping out the interval.  A tick that finds the
previous one still running is skipped rather than queued.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

log = logging.getLogger(__name__)

DEFAULT_INTERVAL_SEC = 30.0


class Monitor:
    """Cancellable fixed-rate trigger; also the handle returned to callers."""

    def __init__(
        self,
        tick: Callable[[], None],
        interval_sec: float = DEFAULT_INTERVAL_SEC,
        name: str = "incident-monitor",
    ) -> None:
        if interval_sec <= 0:
            raise ValueError(f"interval_sec must be positive, got {interval_sec}")
        self._tick = tick
        self.interval_sec = interval_sec
        self.name = name
        self.ticks = 0
        self.skipped = 0
        self._stop = threading.Event()
        self._tick_lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Launch the loop thread; a no-op while an earlier one is still alive."""
        if self.is_running:
            if self._stop.is_set():
                log.warning("Monitor start ignored: previous loop is still finishing a tick")
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        log.info("Monitoring started (every %.1fs)", self.interval_sec)

    def stop(self, timeout: float | None = 5.0) -> None:
        """Signal the loop and wait up to *timeout* for it to exit.

        A thread still busy in a tick stays referenced, so ``is_running``
        keeps reporting it and ``start()`` cannot launch a second loop.
        """
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                log.warning("Monitor thread did not stop within %.1fs", timeout)
                return
            self._thread = None
        log.info("Monitoring stopped after %d ticks (%d skipped)", self.ticks, self.skipped)

    def fire(self) -> bool:
        """Run one tick now. Returns False when a tick is already in flight."""
        if not self._tick_lock.acquire(blocking=False):
            self.skipped += 1
            log.warning("Monitor tick skipped: previous tick still running")
            return False
        try:
            self._tick()
            self.ticks += 1
        finally:
            self._tick_lock.release()
        return True

    def _run(self) -> None:
        while not self._stop.wait(self.interval_sec):
            try:
                self.fire()
            except Exception:
                log.exception("Monitor tick failed")
