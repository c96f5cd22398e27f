from __future__ import annotations

import pytest

from blockfall.game import ScoringRules


@pytest.mark.parametrize("lines, points", [(0, 0), (1, 100), (2, 200), (3, 400), (4, 800)])
def test_score_for_lines(lines, points):
    assert ScoringRules().score_for_lines(lines) == points


@pytest.mark.parametrize(
    "score, interval",
    [(0, 800), (100, 780), (500, 700), (1000, 600), (2995, 201), (3000, 200), (4000, 200), (100_000, 200)],
)
def test_gravity_interval(score, interval):
    assert ScoringRules().gravity_interval_ms(score) == interval
