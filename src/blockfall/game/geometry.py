from __future__ import annotations

from typing import NamedTuple


class Vector(NamedTuple):
    """Integer grid coordinate or translation delta."""

    x: int
    y: int

    def __add__(self, other: "Vector") -> "Vector":  # type: ignore[override]
        return Vector(self.x + other.x, self.y + other.y)


ZERO = Vector(0, 0)
LEFT = Vector(-1, 0)
RIGHT = Vector(1, 0)
DOWN = Vector(0, 1)
