from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_base: int = 100
    initial_interval_ms: int = 800
    min_interval_ms: int = 200
    score_divisor: int = 5

    def score_for_lines(self, lines: int) -> int:
        # 1 -> 100, 2 -> 200, 3 -> 400, 4 -> 800
        if lines <= 0:
            return 0
        return self.line_clear_base * 2 ** (lines - 1)

    def gravity_interval_ms(self, score: int) -> int:
        return max(self.min_interval_ms, self.initial_interval_ms - score // self.score_divisor)
