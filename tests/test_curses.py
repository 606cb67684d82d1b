import curses

import pytest

from termtris.board import BORDER, EMPTY
from termtris.render import (
    EMPTY_PAIR,
    OVER_BORDER,
    OVER_PAIR,
    TEXT_PAIR,
    WINDOW_WIDTH,
    CursesInput,
    CursesRenderer,
    TerminalError,
)


class FakeScreen:
    def __init__(self, keys=(), cols=80):
        self.keys = list(keys)
        self.cols = cols
        self.calls = []
        self.writes = []

    def nodelay(self, flag):
        self.calls.append(("nodelay", flag))

    def keypad(self, flag):
        self.calls.append(("keypad", flag))

    def getch(self):
        return self.keys.pop(0) if self.keys else -1

    def getmaxyx(self):
        return 24, self.cols

    def erase(self):
        self.calls.append("erase")

    def refresh(self):
        self.calls.append("refresh")

    def addstr(self, row, col, text, attr):
        if row > 23:
            raise curses.error("addstr() returned ERR")
        self.writes.append((row, col, text, attr))


@pytest.fixture
def fake_curses(monkeypatch):
    pairs = {}
    monkeypatch.setattr(curses, "curs_set", lambda _visibility: None)
    monkeypatch.setattr(curses, "has_colors", lambda: True)
    monkeypatch.setattr(curses, "start_color", lambda: None)
    monkeypatch.setattr(curses, "init_pair", lambda pair, fg, bg: pairs.__setitem__(pair, (fg, bg)))
    monkeypatch.setattr(curses, "color_pair", lambda pair: pair * 256)
    return pairs


def test_poll_key_reports_no_key_as_none():
    keys = CursesInput(FakeScreen(keys=[curses.KEY_LEFT]))
    assert keys.poll_key() == curses.KEY_LEFT
    assert keys.poll_key() is None
    assert keys.poll_key() is None


def test_renderer_sets_up_screen_and_colors(fake_curses):
    screen = FakeScreen()
    CursesRenderer(screen)
    assert ("nodelay", True) in screen.calls
    assert ("keypad", True) in screen.calls
    assert set(fake_curses) == set(range(1, 11))
    assert fake_curses[EMPTY_PAIR] == (curses.COLOR_BLACK, curses.COLOR_BLACK)
    assert fake_curses[OVER_PAIR] == (curses.COLOR_RED, curses.COLOR_BLACK)


def test_renderer_rejects_terminal_without_colors(fake_curses, monkeypatch):
    monkeypatch.setattr(curses, "has_colors", lambda: False)
    with pytest.raises(TerminalError):
        CursesRenderer(FakeScreen())


def test_draw_cell_maps_kinds_to_characters_and_pairs(fake_curses):
    screen = FakeScreen(cols=80)
    renderer = CursesRenderer(screen)
    renderer.clear_screen()
    margin = (80 - WINDOW_WIDTH) // 2
    assert renderer.x_margin == margin

    renderer.draw_cell(0, 1, BORDER)
    renderer.draw_cell(0, 2, OVER_BORDER)
    renderer.draw_cell(1, 3, EMPTY)
    renderer.draw_cell(2, 4, 3)

    assert screen.writes == [
        (1, margin, "||", TEXT_PAIR * 256),
        (2, margin, "||", OVER_PAIR * 256),
        (3, margin + 2, "  ", EMPTY_PAIR * 256),
        (4, margin + 4, "  ", 3 * 256),
    ]


def test_narrow_terminal_keeps_board_at_left_edge(fake_curses):
    renderer = CursesRenderer(FakeScreen(cols=20))
    renderer.clear_screen()
    assert renderer.x_margin == 0


def test_writes_past_the_screen_are_clipped(fake_curses):
    screen = FakeScreen()
    renderer = CursesRenderer(screen)
    renderer.draw_text(30, 0, "Game Over")
    renderer.draw_text(16, 5, "Game Over")
    assert screen.writes == [(16, 5, "Game Over", TEXT_PAIR * 256)]


def test_close_can_be_called_twice(fake_curses):
    screen = FakeScreen()
    with CursesRenderer(screen) as renderer:
        pass
    renderer.close()
    assert screen.calls.count("erase") == 1
    assert screen.calls.count("refresh") == 1
