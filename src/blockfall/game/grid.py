from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np

from .geometry import ZERO, Vector
from .pieces import FallingPiece


EMPTY = 0


class Board:
    """Grid of settled cells plus the piece currently falling through it.

    The grid uses 0 for empty cells and a piece color tag for settled cells.
    Row 0 is the top. Pieces may stick out above row 0 (negative y); those
    cells are never checked against the grid.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"board size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
        self.current_piece: Optional[FallingPiece] = None

    def reset(self) -> None:
        self.grid.fill(EMPTY)
        self.current_piece = None

    def _piece(self) -> FallingPiece:
        if self.current_piece is None:
            raise RuntimeError("no piece in play")
        return self.current_piece

    def _cells_free(self, cells: Iterable[Vector]) -> bool:
        for x, y in cells:
            if x < 0 or x >= self.width or y >= self.height:
                return False
            if y >= 0 and self.grid[y, x] != EMPTY:
                return False
        return True

    def can_place(self, delta: Vector, rotation: int) -> bool:
        piece = self._piece()
        return self._cells_free(piece.cells_at(piece.position + delta, rotation))

    def move_if_possible(self, delta: Vector) -> bool:
        piece = self._piece()
        if not self.can_place(delta, piece.rotation):
            return False
        piece.translate(delta)
        return True

    def rotate(self) -> None:
        self._piece().rotate()

    def unrotate(self) -> None:
        self._piece().unrotate()

    def rotate_by(self, steps: int) -> None:
        self._piece().rotate_by(steps)

    def current_piece_in_collision(self) -> bool:
        return not self.can_place(ZERO, self._piece().rotation)

    def merge_current_piece(self) -> None:
        piece = self._piece()
        for x, y in piece.cells():
            if 0 <= y < self.height:
                self.grid[y, x] = int(piece.color)

    def cleared_rows(self) -> List[int]:
        return [int(y) for y in np.flatnonzero(np.all(self.grid != EMPTY, axis=1))]

    def clear_rows(self) -> int:
        """Remove every full row in one pass and return how many went."""
        full = np.all(self.grid != EMPTY, axis=1)
        num = int(full.sum())
        if num == 0:
            return 0
        kept = self.grid[~full]
        new_rows = np.zeros((num, self.width), dtype=self.grid.dtype)
        self.grid = np.vstack((new_rows, kept))
        return num

    def cell_color(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return EMPTY
        if self.current_piece is not None and Vector(x, y) in self.current_piece.cells():
            return int(self.current_piece.color)
        return int(self.grid[y, x])

    def cells(self) -> np.ndarray:
        """Copy of the grid with the falling piece drawn in."""
        state = self.grid.copy()
        if self.current_piece is not None:
            color = int(self.current_piece.color)
            for x, y in self.current_piece.cells():
                if 0 <= y < self.height and 0 <= x < self.width:
                    state[y, x] = color
        return state
