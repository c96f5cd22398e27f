"""Game module for Blockfall.

Exports the core game engine and supporting classes:
- Vector: Grid coordinates and translation deltas
- PieceKind / FallingPiece: Piece catalog and the piece in play
- Bag: 7-bag piece supply
- Board: Settled grid, collision, merge and row clearing
- ScoringRules: Line-clear scoring and gravity speed curve
- Game: State owner, event handling and snapshots
- EventLoop: Gravity ticker + input queue driving a Game
"""

from .geometry import Vector
from .pieces import Color, FallingPiece, PieceKind, kind_by_name, kinds
from .bag import Bag
from .grid import Board
from .rules import ScoringRules
from .events import GameEvent
from .core import Direction, Game, GameConfig, Snapshot
from .ticker import GravityTicker
from .loop import EventLoop, InputProducer, LoopConfig, Renderer

__all__ = [
    "Vector",
    "Color",
    "FallingPiece",
    "PieceKind",
    "kind_by_name",
    "kinds",
    "Bag",
    "Board",
    "ScoringRules",
    "GameEvent",
    "Direction",
    "Game",
    "GameConfig",
    "Snapshot",
    "GravityTicker",
    "EventLoop",
    "InputProducer",
    "LoopConfig",
    "Renderer",
]
