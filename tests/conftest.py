from __future__ import annotations

from typing import Iterable, List

import pytest

from blockfall.game import Game, GameConfig, PieceKind, ScoringRules, kind_by_name


class ScriptedBag:
    """Hands out kinds in a fixed order, repeating the last one forever."""

    def __init__(self, names: Iterable[str]) -> None:
        self.kinds: List[PieceKind] = [kind_by_name(n) for n in names]
        self.drawn = 0

    def draw(self) -> PieceKind:
        kind = self.kinds[min(self.drawn, len(self.kinds) - 1)]
        self.drawn += 1
        return kind


# Long enough that no gravity tick fires while a test runs
SLOW_RULES = ScoringRules(initial_interval_ms=60_000, min_interval_ms=60_000)


@pytest.fixture
def make_game():
    def factory(*names: str, rules: ScoringRules = SLOW_RULES, **config) -> Game:
        return Game(GameConfig(**config), rules=rules, bag=ScriptedBag(names or ("O",)))

    return factory
