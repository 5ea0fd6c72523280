"""Fixed-interval background ticker driving continuous decay."""

from __future__ import annotations

import threading
from typing import Callable


class DecayTicker:
    """Invokes *callback* every *interval* seconds on a daemon thread.

    ``start`` and ``stop`` are idempotent.  Each ``start`` after a ``stop``
    runs on a fresh thread with its own stop flag, so a thread that is
    still finishing a callback from before the stop exits on its own.

    Parameters
    ----------
    interval:
        Seconds between callbacks.
    callback:
        Zero-argument callable.  It is responsible for its own locking.
    """

    def __init__(self, interval: float, callback: Callable[[], object]) -> None:
        if interval <= 0.0:
            raise ValueError("interval must be > 0.")
        self._interval = interval
        self._callback = callback
        self._stop_event = threading.Event()
        self._stop_event.set()
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and not self._stop_event.is_set()
        )

    def start(self) -> None:
        """Start ticking; no-op if already running."""
        if self.running:
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), daemon=True, name="DecayTicker"
        )
        self._thread.start()

    def stop(self, join: bool = False) -> None:
        """Signal the ticker thread to stop.

        With *join*, wait for the thread to exit unless called from the
        ticker thread itself.  Callers holding a lock the callback needs
        must not join.
        """
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if join and thread is not None and thread is not threading.current_thread():
            thread.join(timeout=2.0)

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            self._callback()
