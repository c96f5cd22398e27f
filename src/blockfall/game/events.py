from __future__ import annotations

from enum import Enum


class GameEvent(Enum):
    """Classified input events consumed by the game loop."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_DOWN = "move_down"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    ROTATE_180 = "rotate_180"
    QUICK_DROP = "quick_drop"
    PAUSE_TOGGLE = "pause_toggle"
    QUIT = "quit"
    # No state change; asks the renderer for a full repaint (e.g. terminal resize)
    REDRAW = "redraw"


# Events that still act while the game is paused
PAUSED_EVENTS = frozenset({GameEvent.PAUSE_TOGGLE, GameEvent.QUIT, GameEvent.REDRAW})
