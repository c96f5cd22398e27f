from __future__ import annotations

import curses

from blockfall.game import GameConfig, GameEvent
from blockfall.visualization import human_play
from blockfall.visualization.human_play import build_parser, classify, key_source


class FakeScreen:
    def __init__(self, keys=()):
        self.keys = list(keys)
        self.calls = []

    def getch(self) -> int:
        self.calls.append("getch")
        return self.keys.pop(0)

    def keypad(self, flag: bool) -> None:
        self.calls.append(("keypad", flag))

    def noutrefresh(self) -> None:
        self.calls.append("noutrefresh")

    def clear(self) -> None:
        self.calls.append("clear")


def test_classify_keys():
    assert classify(curses.KEY_LEFT) == GameEvent.MOVE_LEFT
    assert classify(ord("l")) == GameEvent.MOVE_RIGHT
    assert classify(ord(" ")) == GameEvent.QUICK_DROP
    assert classify(ord("x")) == GameEvent.ROTATE_180
    assert classify(curses.KEY_RESIZE) == GameEvent.REDRAW
    assert classify(3) == GameEvent.QUIT
    assert classify(ord("?")) is None


def test_key_source_skips_unmapped_keys():
    source = key_source(FakeScreen([ord("?"), -1, ord("p"), ord("q")]))
    assert source() == GameEvent.PAUSE_TOGGLE
    assert source() == GameEvent.QUIT


def test_play_reads_keys_from_separate_window(monkeypatch):
    stdscr = FakeScreen()
    keys = FakeScreen([ord("h"), ord("q")])
    created = []
    loops = []

    def newwin(*args):
        created.append(args)
        return keys

    class FakeLoop:
        def __init__(self, game, renderer, input_source):
            self.renderer = renderer
            self.input_source = input_source
            loops.append(self)

        def run(self) -> None:
            pass

    monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
    monkeypatch.setattr(curses, "raw", lambda: None)
    monkeypatch.setattr(curses, "newwin", newwin)
    monkeypatch.setattr(human_play, "init_colors", lambda: None)
    monkeypatch.setattr(human_play, "EventLoop", FakeLoop)

    assert human_play.play(stdscr, GameConfig(random_seed=1)) == 0
    assert created == [(1, 1, 0, 0)]
    assert ("keypad", True) in keys.calls
    (loop,) = loops
    assert loop.renderer.stdscr is stdscr
    assert loop.input_source() == GameEvent.MOVE_LEFT
    assert loop.input_source() == GameEvent.QUIT
    assert "getch" not in stdscr.calls


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert (args.width, args.height, args.seed, args.log_file) == (10, 20, None, None)
    args = build_parser().parse_args(["--seed", "4", "--log-level", "DEBUG"])
    assert args.seed == 4
    assert args.log_level == "DEBUG"
