"""
Fixed-rate loop thread.

Runs a callback (typically Elevator.periodic) every period_s seconds. The
elevator backends serialize refresh and commands internally, so commands may
be issued from another thread while this loop is running.
"""

import logging
import threading
import time
from typing import Callable, Optional


class PeriodicRunner:
    """Calls a function at a fixed rate on a daemon thread."""

    def __init__(self, callback: Callable[[], None], period_s: float = 0.02, name: str = "elevator-loop"):
        if period_s <= 0:
            raise ValueError("period_s must be > 0")
        self.callback = callback
        self.period_s = period_s
        self.name = name

        self.logger = logging.getLogger("elevator_io.periodic_runner")

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._cycles = 0
        self._overruns = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def cycles(self) -> int:
        return self._cycles

    @property
    def overruns(self) -> int:
        return self._overruns

    def start(self) -> bool:
        """
        Start the loop.

        Returns:
            False if it was already running
        """
        if self.is_running:
            self.logger.warning("Periodic loop already running")
            return False

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name=self.name, daemon=True)
        self._thread.start()
        self.logger.info(f"Periodic loop started at {1.0 / self.period_s:.1f} Hz")
        return True

    def stop(self, timeout_s: float = 2.0):
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=timeout_s)
            self._thread = None
        self.logger.info(f"Periodic loop stopped after {self._cycles} cycles")

    def _loop(self):
        next_deadline = time.monotonic()
        while not self._stop_event.is_set():
            start_time = time.monotonic()

            try:
                self.callback()
            except Exception as e:
                self.logger.error(f"Periodic callback error: {e}", exc_info=True)
            self._cycles += 1

            next_deadline += self.period_s
            sleep_time = next_deadline - time.monotonic()
            if sleep_time < 0:
                self._overruns += 1
                self.logger.debug(
                    f"Loop overrun: cycle took {time.monotonic() - start_time:.4f}s "
                    f"(period {self.period_s}s)"
                )
                next_deadline = time.monotonic()
                continue
            self._stop_event.wait(sleep_time)
