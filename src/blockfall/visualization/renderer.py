from __future__ import annotations

import curses
import time
from typing import Dict, List, Tuple

from blockfall.game import Color, Snapshot


CELL = "██"
EMPTY_CELL = "  "
HEADER_HEIGHT = 1
PREVIEW_HEIGHT = 4
SCORE_DIGITS = 7

# 3x5 glyphs for the score readout
_DIGIT_GLYPHS: Dict[str, Tuple[str, ...]] = {
    "0": ("###", "# #", "# #", "# #", "###"),
    "1": ("  #", "  #", "  #", "  #", "  #"),
    "2": ("###", "  #", "###", "#  ", "###"),
    "3": ("###", "  #", "###", "  #", "###"),
    "4": ("# #", "# #", "###", "  #", "  #"),
    "5": ("###", "#  ", "###", "  #", "###"),
    "6": ("###", "#  ", "###", "# #", "###"),
    "7": ("###", "  #", "  #", "  #", "  #"),
    "8": ("###", "# #", "###", "# #", "###"),
    "9": ("###", "# #", "###", "  #", "###"),
}
DIGIT_HEIGHT = 5

_CURSES_COLORS: Dict[Color, int] = {
    Color.YELLOW: curses.COLOR_YELLOW,
    Color.RED: curses.COLOR_RED,
    Color.GREEN: curses.COLOR_GREEN,
    Color.MAGENTA: curses.COLOR_MAGENTA,
    Color.WHITE: curses.COLOR_WHITE,
    Color.BLUE: curses.COLOR_BLUE,
    Color.CYAN: curses.COLOR_CYAN,
}
_OVERLAY_PAIR = len(_CURSES_COLORS) + 1


def init_colors() -> None:
    curses.start_color()
    curses.use_default_colors()
    # pair number == color tag
    for color, fg in _CURSES_COLORS.items():
        curses.init_pair(int(color), fg, -1)
    curses.init_pair(_OVERLAY_PAIR, curses.COLOR_WHITE, curses.COLOR_BLUE)


def score_rows(score: int, width: int = SCORE_DIGITS) -> List[str]:
    """Render a score as DIGIT_HEIGHT text rows, right-aligned in ``width`` digits."""
    text = str(score)[-width:].rjust(width)
    return [
        " ".join(_DIGIT_GLYPHS[ch][row] if ch != " " else "   " for ch in text)
        for row in range(DIGIT_HEIGHT)
    ]


def safe_addstr(win: "curses.window", y: int, x: int, s: str, attr: int = 0) -> None:
    try:
        win.addstr(y, x, s, attr)
    except curses.error:
        pass


class TerminalRenderer:
    """Draws snapshots onto a curses window, two columns per board cell."""

    def __init__(self, stdscr: "curses.window", flash_count: int = 5, flash_delay_ms: int = 80) -> None:
        self.stdscr = stdscr
        self.flash_count = flash_count
        self.flash_delay_ms = flash_delay_ms

    def _cell(self, x: int, y: int, color: int) -> None:
        sx = 2 + x * 2
        sy = HEADER_HEIGHT + 2 + y
        if color:
            safe_addstr(self.stdscr, sy, sx, CELL, curses.color_pair(color))
        else:
            safe_addstr(self.stdscr, sy, sx, EMPTY_CELL)

    def _frame(self, snapshot: Snapshot) -> None:
        w = snapshot.width * 2
        safe_addstr(self.stdscr, HEADER_HEIGHT - 1, 2, "BLOCKFALL", curses.A_BOLD)
        safe_addstr(self.stdscr, HEADER_HEIGHT + 1, 1, "┌" + "─" * w + "┐")
        for y in range(snapshot.height):
            safe_addstr(self.stdscr, HEADER_HEIGHT + 2 + y, 1, "│")
            safe_addstr(self.stdscr, HEADER_HEIGHT + 2 + y, 2 + w, "│")
        safe_addstr(self.stdscr, HEADER_HEIGHT + 2 + snapshot.height, 1, "└" + "─" * w + "┘")

    def _panel(self, snapshot: Snapshot, hide: bool) -> None:
        px = snapshot.width * 2 + 6
        py = HEADER_HEIGHT + 2
        safe_addstr(self.stdscr, py, px, "NEXT")
        for y in range(PREVIEW_HEIGHT):
            safe_addstr(self.stdscr, py + 2 + y, px, " " * 8)
        if not hide:
            for cell in snapshot.next_cells:
                safe_addstr(
                    self.stdscr, py + 2 + cell.y, px + cell.x * 2, CELL, curses.color_pair(snapshot.next_color)
                )
        safe_addstr(self.stdscr, py + PREVIEW_HEIGHT + 4, px, "SCORE")
        for i, line in enumerate(score_rows(snapshot.score)):
            safe_addstr(self.stdscr, py + PREVIEW_HEIGHT + 6 + i, px, line)

    def _banner(self, snapshot: Snapshot, text: str) -> None:
        w = snapshot.width * 2 + 2
        mid = HEADER_HEIGHT + 2 + snapshot.height // 2
        attr = curses.color_pair(_OVERLAY_PAIR) | curses.A_BOLD
        for y in (mid - 1, mid, mid + 1):
            safe_addstr(self.stdscr, y, 1, " " * w, attr)
        safe_addstr(self.stdscr, mid, 1 + (w - len(text)) // 2, text, attr)

    def render(self, snapshot: Snapshot, full: bool = False) -> None:
        if full:
            # after a resize the old frame may sit anywhere on screen
            self.stdscr.erase()
        self._frame(snapshot)
        for y in range(snapshot.height):
            for x in range(snapshot.width):
                # the board is hidden while paused
                self._cell(x, y, 0 if snapshot.paused else int(snapshot.cells[y, x]))
        self._panel(snapshot, hide=snapshot.paused)
        if snapshot.paused:
            self._banner(snapshot, "PAUSED")
        elif snapshot.over:
            self._banner(snapshot, "GAME OVER")
        self.stdscr.refresh()

    def flash_rows(self, snapshot: Snapshot, rows: List[int]) -> None:
        for i in range(self.flash_count):
            for y in rows:
                for x in range(snapshot.width):
                    self._cell(x, y, 0 if i % 2 == 0 else int(snapshot.cells[y, x]))
            self.stdscr.refresh()
            time.sleep(self.flash_delay_ms / 1000.0)
