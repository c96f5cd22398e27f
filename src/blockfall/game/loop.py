from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from blockfall.errors import InputSourceError
from .core import Game, Snapshot
from .events import GameEvent
from .ticker import GravityTicker

logger = logging.getLogger(__name__)


InputSource = Callable[[], GameEvent]


@dataclass
class LoopConfig:
    queue_size: int = 100
    put_timeout_s: float = 0.05


class Renderer(Protocol):
    def render(self, snapshot: Snapshot, full: bool = False) -> None: ...

    def flash_rows(self, snapshot: Snapshot, rows: List[int]) -> None: ...


class InputProducer:
    """Blocks on an input source and pushes one event per input into the queue.

    If the source raises, the exception is kept on ``error`` and QUIT is
    queued so the loop shuts down.
    """

    def __init__(self, source: InputSource, events: "queue.Queue[GameEvent]", put_timeout_s: float = 0.05) -> None:
        self.source = source
        self.events = events
        self.put_timeout_s = put_timeout_s
        self.error: Optional[BaseException] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        self._thread = threading.Thread(target=self._run, name="input-producer", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        # A source blocked on input cannot be interrupted; the thread is a daemon
        self._stop.set()

    def _put(self, event: GameEvent) -> None:
        while not self._stop.is_set():
            try:
                self.events.put(event, timeout=self.put_timeout_s)
                return
            except queue.Full:
                continue

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                event = self.source()
            except Exception as exc:
                logger.exception("input source failed")
                self.error = exc
                self._put(GameEvent.QUIT)
                return
            self._put(event)
            if event == GameEvent.QUIT:
                return


class EventLoop:
    """Single consumer of game events.

    Gravity ticks and classified input share one bounded queue. Each event is
    handled to completion before the next one is taken, and the game is only
    ever touched from the thread calling ``run``.
    """

    def __init__(
        self,
        game: Game,
        renderer: Renderer,
        input_source: Optional[InputSource] = None,
        config: Optional[LoopConfig] = None,
    ) -> None:
        self.game = game
        self.renderer = renderer
        self.config = config or LoopConfig()
        self.events: "queue.Queue[GameEvent]" = queue.Queue(maxsize=self.config.queue_size)
        self.ticker = GravityTicker(self.events, self.config.put_timeout_s)
        self.producer = InputProducer(input_source, self.events, self.config.put_timeout_s) if input_source is not None else None
        self.game.on_rows_cleared = self._rows_cleared

    def post(self, event: GameEvent) -> None:
        self.events.put(event)

    def _rows_cleared(self, snapshot: Snapshot, rows: List[int]) -> None:
        # No gravity while the flicker plays; input keeps queueing
        self.ticker.stop()
        self.renderer.flash_rows(snapshot, rows)

    def _sync_ticker(self) -> None:
        if not self.game.playing:
            self.ticker.stop()
            return
        interval = self.game.gravity_interval_ms
        if not self.ticker.running or self.ticker.interval_ms != interval:
            self.ticker.rearm(interval)

    def _play(self) -> bool:
        """Process events until QUIT (returns True) or game over (returns False)."""
        self._sync_ticker()
        while True:
            event = self.events.get()
            if event == GameEvent.QUIT:
                return True
            if self.game.handle(event):
                self.renderer.render(self.game.snapshot(), full=event == GameEvent.REDRAW)
            self._sync_ticker()
            if self.game.over:
                return False

    def _wait_for_quit(self) -> None:
        while self.events.get() != GameEvent.QUIT:
            pass

    def run(self) -> None:
        if self.producer is not None:
            self.producer.start()
        self.renderer.render(self.game.snapshot(), full=True)
        try:
            if not self._play():
                logger.info("game over, waiting for quit")
                self._wait_for_quit()
        finally:
            self.ticker.stop()
            if self.producer is not None:
                self.producer.stop()
        if self.producer is not None and self.producer.error is not None:
            raise InputSourceError("input source failed") from self.producer.error
