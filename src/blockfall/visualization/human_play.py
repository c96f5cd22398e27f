from __future__ import annotations

import argparse
import curses
import logging
from typing import Dict, List, Optional

from blockfall.game import EventLoop, Game, GameConfig, GameEvent
from blockfall.game.loop import InputSource
from .renderer import TerminalRenderer, init_colors


KEY_TO_EVENT: Dict[int, GameEvent] = {
    curses.KEY_LEFT: GameEvent.MOVE_LEFT,
    curses.KEY_RIGHT: GameEvent.MOVE_RIGHT,
    curses.KEY_DOWN: GameEvent.MOVE_DOWN,
    curses.KEY_UP: GameEvent.ROTATE_CW,
    ord("h"): GameEvent.MOVE_LEFT,
    ord("l"): GameEvent.MOVE_RIGHT,
    ord("j"): GameEvent.MOVE_DOWN,
    ord("k"): GameEvent.ROTATE_CW,
    ord("z"): GameEvent.ROTATE_CCW,
    ord("x"): GameEvent.ROTATE_180,
    ord(" "): GameEvent.QUICK_DROP,
    ord("p"): GameEvent.PAUSE_TOGGLE,
    ord("q"): GameEvent.QUIT,
    3: GameEvent.QUIT,  # Ctrl-C in raw mode
    curses.KEY_RESIZE: GameEvent.REDRAW,
}


def classify(key: int) -> Optional[GameEvent]:
    return KEY_TO_EVENT.get(key)


def key_source(win: "curses.window") -> InputSource:
    def next_event() -> GameEvent:
        while True:
            event = classify(win.getch())
            if event is not None:
                return event

    return next_event


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="blockfall", description="Falling-block puzzle in the terminal")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-file", type=str, default=None)
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO")
    return p


def play(stdscr: "curses.window", config: GameConfig) -> int:
    curses.curs_set(0)
    curses.raw()
    init_colors()
    stdscr.clear()
    # Keys are read on their own window so getch never refreshes stdscr
    # while the loop thread is drawing on it
    keys = curses.newwin(1, 1, 0, 0)
    keys.keypad(True)
    keys.noutrefresh()

    game = Game(config)
    loop = EventLoop(game, TerminalRenderer(stdscr), key_source(keys))
    loop.run()
    return game.score


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, args.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    config = GameConfig(width=args.width, height=args.height, random_seed=args.seed)
    score = curses.wrapper(play, config)
    print(f"Final score: {score}")
    print("Bye!")


if __name__ == "__main__":  # pragma: no cover
    main()
