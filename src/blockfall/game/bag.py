from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from .pieces import PieceKind, kinds

logger = logging.getLogger(__name__)


class Bag:
    """7-bag randomizer.

    Each bag is a uniformly shuffled permutation of every kind. Pieces are
    handed out from the end of the permutation; when the countdown goes
    negative a fresh bag is shuffled first, so a draw never sees an empty bag.
    """

    def __init__(self, rng: Optional[random.Random] = None, catalog: Sequence[PieceKind] | None = None) -> None:
        self.rng = rng or random.Random()
        self.catalog = tuple(catalog or kinds())
        self.pieces: List[int] = []
        self.piece_number = -1
        self.bag_number = 0

    def _refill(self) -> None:
        self.pieces = list(range(len(self.catalog)))
        self.rng.shuffle(self.pieces)
        self.piece_number = len(self.pieces) - 1
        self.bag_number += 1
        logger.debug("bag %d shuffled: %s", self.bag_number, [self.catalog[i].name for i in self.pieces])

    def draw(self) -> PieceKind:
        if self.piece_number < 0:
            self._refill()
        kind = self.catalog[self.pieces[self.piece_number]]
        self.piece_number -= 1
        return kind

    @property
    def remaining(self) -> int:
        return self.piece_number + 1
