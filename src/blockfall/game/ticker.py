from __future__ import annotations

import logging
import queue
import threading
from typing import Optional

from .events import GameEvent

logger = logging.getLogger(__name__)


class GravityTicker:
    """Pushes MOVE_DOWN into the event queue every ``interval_ms``.

    Only one schedule runs at a time: ``rearm`` stops and joins the previous
    thread before starting the next one.
    """

    def __init__(self, events: "queue.Queue[GameEvent]", put_timeout_s: float = 0.05) -> None:
        self.events = events
        self.put_timeout_s = put_timeout_s
        self.interval_ms: Optional[int] = None
        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None

    def rearm(self, interval_ms: int) -> None:
        self.stop()
        self.interval_ms = int(interval_ms)
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop, self.interval_ms / 1000.0),
            name="gravity-ticker",
            daemon=True,
        )
        self._thread.start()
        logger.debug("gravity armed at %d ms", self.interval_ms)

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop.set()
        if self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        logger.debug("gravity stopped")

    def _run(self, stop: threading.Event, interval_s: float) -> None:
        # Event.wait returns True once stop is set
        while not stop.wait(interval_s):
            while not stop.is_set():
                try:
                    self.events.put(GameEvent.MOVE_DOWN, timeout=self.put_timeout_s)
                    break
                except queue.Full:
                    continue
