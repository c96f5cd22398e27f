from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

from .geometry import Vector


class Color(IntEnum):
    """Display color tags. 0 is reserved for empty grid cells."""

    YELLOW = 1
    RED = 2
    GREEN = 3
    MAGENTA = 4
    WHITE = 5
    BLUE = 6
    CYAN = 7


RotationState = Tuple[Vector, ...]


def _state(*offsets: Tuple[int, int]) -> RotationState:
    return tuple(Vector(x, y) for x, y in offsets)


@dataclass(frozen=True)
class PieceKind:
    name: str
    rotations: Tuple[RotationState, ...]
    spawn: Vector
    color: Color

    def __post_init__(self) -> None:
        if not self.rotations:
            raise ValueError(f"piece {self.name!r} has no rotation states")
        for state in self.rotations:
            if len(set(state)) != 4:
                raise ValueError(f"piece {self.name!r} rotation states must hold exactly 4 cells")
            if any(v.x < 0 or v.y < 0 for v in state):
                raise ValueError(f"piece {self.name!r} has negative offsets")

    @property
    def rotation_count(self) -> int:
        return len(self.rotations)


_CATALOG: Tuple[PieceKind, ...] = (
    PieceKind(
        "O",
        (_state((0, 0), (1, 0), (0, 1), (1, 1)),),
        Vector(4, 0),
        Color.YELLOW,
    ),
    PieceKind(
        "Z",
        (
            _state((0, 0), (1, 0), (1, 1), (2, 1)),
            _state((1, 0), (0, 1), (1, 1), (0, 2)),
        ),
        Vector(3, 0),
        Color.RED,
    ),
    PieceKind(
        "S",
        (
            _state((1, 0), (2, 0), (0, 1), (1, 1)),
            _state((0, 0), (0, 1), (1, 1), (1, 2)),
        ),
        Vector(3, 0),
        Color.GREEN,
    ),
    PieceKind(
        "T",
        (
            _state((0, 0), (1, 0), (2, 0), (1, 1)),
            _state((1, 0), (0, 1), (1, 1), (1, 2)),
            _state((1, 0), (0, 1), (1, 1), (2, 1)),
            _state((0, 0), (0, 1), (1, 1), (0, 2)),
        ),
        Vector(3, 0),
        Color.MAGENTA,
    ),
    PieceKind(
        "L",
        (
            _state((0, 1), (1, 1), (2, 1), (0, 2)),
            _state((0, 0), (1, 0), (1, 1), (1, 2)),
            _state((2, 0), (0, 1), (1, 1), (2, 1)),
            _state((1, 0), (1, 1), (1, 2), (2, 2)),
        ),
        Vector(3, -1),
        Color.WHITE,
    ),
    PieceKind(
        "J",
        (
            _state((0, 1), (1, 1), (2, 1), (2, 2)),
            _state((1, 0), (1, 1), (1, 2), (0, 2)),
            _state((0, 1), (1, 1), (2, 1), (0, 0)),
            _state((1, 0), (2, 0), (1, 1), (1, 2)),
        ),
        Vector(3, -1),
        Color.BLUE,
    ),
    PieceKind(
        "I",
        (
            _state((0, 1), (1, 1), (2, 1), (3, 1)),
            _state((1, 0), (1, 1), (1, 2), (1, 3)),
        ),
        Vector(3, -1),
        Color.CYAN,
    ),
)


def kinds() -> Tuple[PieceKind, ...]:
    """The seven piece kinds, in catalog order."""
    return _CATALOG


def kind_by_name(name: str) -> PieceKind:
    for kind in _CATALOG:
        if kind.name == name:
            return kind
    raise ValueError(f"unknown piece kind {name!r}")


@dataclass
class FallingPiece:
    """A piece in play: a catalog kind plus its own rotation index and position."""

    kind: PieceKind
    position: Vector
    rotation: int = 0

    @classmethod
    def spawn(cls, kind: PieceKind) -> "FallingPiece":
        return cls(kind=kind, position=kind.spawn, rotation=0)

    @property
    def color(self) -> Color:
        return self.kind.color

    def offsets(self, rotation: int | None = None) -> RotationState:
        if rotation is None:
            rotation = self.rotation
        return self.kind.rotations[rotation]

    def cells_at(self, origin: Vector, rotation: int | None = None) -> List[Vector]:
        return [origin + offset for offset in self.offsets(rotation)]

    def cells(self) -> List[Vector]:
        return self.cells_at(self.position)

    def rotate(self) -> None:
        self.rotate_by(1)

    def unrotate(self) -> None:
        self.rotate_by(-1)

    def rotate_by(self, steps: int) -> None:
        # Python's modulo keeps the index non-negative
        self.rotation = (self.rotation + steps) % self.kind.rotation_count

    def translate(self, delta: Vector) -> None:
        self.position = self.position + delta
