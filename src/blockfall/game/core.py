from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional, Tuple

import numpy as np

from .bag import Bag
from .events import PAUSED_EVENTS, GameEvent
from .geometry import DOWN, LEFT, RIGHT, Vector
from .grid import Board
from .pieces import FallingPiece, PieceKind
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Direction(IntEnum):
    LEFT = 0
    RIGHT = 1
    DOWN = 2


_DELTAS = {
    Direction.LEFT: LEFT,
    Direction.RIGHT: RIGHT,
    Direction.DOWN: DOWN,
}


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the game handed to renderers."""

    cells: np.ndarray
    next_kind: str
    next_cells: Tuple[Vector, ...]
    next_color: int
    score: int
    paused: bool
    over: bool
    gravity_interval_ms: int

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])


RowsClearedHook = Callable[[Snapshot, List[int]], None]


class Game:
    """Authoritative game state: board, supply, score, speed and pause/over flags.

    A Game is not thread safe; exactly one control flow (the event loop) may
    call its mutating methods.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        bag: Optional[Bag] = None,
        on_rows_cleared: Optional[RowsClearedHook] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.bag = bag or Bag(random.Random(self.config.random_seed))
        self.board = Board(self.config.width, self.config.height)
        self.on_rows_cleared = on_rows_cleared
        self.score = 0
        self.paused = False
        self.over = False
        self.gravity_interval_ms = self.rules.gravity_interval_ms(self.score)
        self.next_piece: PieceKind = self.bag.draw()
        self.spawn_next()
        logger.info("game started on %dx%d board", self.board.width, self.board.height)

    @property
    def current_piece(self) -> FallingPiece:
        assert self.board.current_piece is not None
        return self.board.current_piece

    def spawn_next(self) -> None:
        self.board.current_piece = FallingPiece.spawn(self.next_piece)
        self.next_piece = self.bag.draw()
        logger.debug("spawned %s, next is %s", self.current_piece.kind.name, self.next_piece.name)
        if self.board.current_piece_in_collision():
            self.over = True
            logger.info("game over with score %d", self.score)

    def anchor(self) -> None:
        self.board.merge_current_piece()
        rows = self.board.cleared_rows()
        if rows:
            if self.on_rows_cleared is not None:
                self.on_rows_cleared(self.snapshot(), rows)
            points = self.rules.score_for_lines(len(rows))
            self.score += points
            self.board.clear_rows()
            logger.debug("cleared rows %s for %d points (score %d)", rows, points, self.score)
        self.gravity_interval_ms = self.rules.gravity_interval_ms(self.score)
        self.spawn_next()

    def move(self, direction: Direction) -> bool:
        moved = self.board.move_if_possible(_DELTAS[direction])
        if direction == Direction.DOWN and not moved:
            self.anchor()
        return moved

    def quick_drop(self) -> None:
        while self.board.move_if_possible(DOWN):
            pass
        self.anchor()

    def _rotate(self, steps: int) -> bool:
        piece = self.current_piece
        previous = piece.rotation
        piece.rotate_by(steps)
        if self.board.current_piece_in_collision():
            piece.rotation = previous
            return False
        return True

    def rotate_cw(self) -> bool:
        return self._rotate(1)

    def rotate_ccw(self) -> bool:
        return self._rotate(-1)

    def rotate_180(self) -> bool:
        return self._rotate(2)

    def pause_toggle(self) -> None:
        if self.over:
            return
        self.paused = not self.paused
        logger.debug("paused" if self.paused else "resumed")

    @property
    def playing(self) -> bool:
        return not (self.paused or self.over)

    def handle(self, event: GameEvent) -> bool:
        """Apply one classified event. Returns False when nothing changed."""
        if self.over or event == GameEvent.QUIT:
            return False
        if self.paused and event not in PAUSED_EVENTS:
            return False

        if event == GameEvent.MOVE_LEFT:
            return self.move(Direction.LEFT)
        if event == GameEvent.MOVE_RIGHT:
            return self.move(Direction.RIGHT)
        if event == GameEvent.MOVE_DOWN:
            # a blocked move still anchors the piece
            self.move(Direction.DOWN)
            return True
        if event == GameEvent.ROTATE_CW:
            return self.rotate_cw()
        if event == GameEvent.ROTATE_CCW:
            return self.rotate_ccw()
        if event == GameEvent.ROTATE_180:
            return self.rotate_180()
        if event == GameEvent.QUICK_DROP:
            self.quick_drop()
            return True
        if event == GameEvent.PAUSE_TOGGLE:
            self.pause_toggle()
            return True
        if event == GameEvent.REDRAW:
            return True
        return False

    def snapshot(self) -> Snapshot:
        cells = self.board.cells()
        cells.setflags(write=False)
        return Snapshot(
            cells=cells,
            next_kind=self.next_piece.name,
            next_cells=self.next_piece.rotations[0],
            next_color=int(self.next_piece.color),
            score=self.score,
            paused=self.paused,
            over=self.over,
            gravity_interval_ms=self.gravity_interval_ms,
        )
