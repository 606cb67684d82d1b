"""Terminal front-end: screen layout and the curses renderer.

:func:`draw_screen` decides *what* goes where and talks to any object
implementing :class:`Renderer`.  :class:`CursesRenderer` is the real terminal
implementation; tests use lightweight fakes.

Cells are addressed in board coordinates and text columns are relative to the
left edge of the board, so a renderer is free to centre the board however it
likes.
"""

from __future__ import annotations

from typing import Optional, Protocol
import curses
import logging

from .board import BORDER, EMPTY, WIDTH
from .game_state import GameState, GameStatus
from .tetromino import Tetromino


LOGGER = logging.getLogger(__name__)

# Border drawn in the game-over colour.  Only used for display.
OVER_BORDER = -2

# Characters of room to the right of the board for stats and the preview.
SIDEBAR_WIDTH = 16
WINDOW_WIDTH = 2 * (WIDTH + 2) + SIDEBAR_WIDTH
LABEL_COL = WINDOW_WIDTH - 10

# Board-space anchor of the next-piece preview.
PREVIEW_X = WIDTH + 5
PREVIEW_Y = 3


class Renderer(Protocol):
    def clear_screen(self) -> None: ...

    def draw_cell(self, x: int, y: int, kind: int) -> None: ...

    def draw_text(self, row: int, col: int, text: str) -> None: ...

    def flash(self) -> None: ...

    def refresh(self) -> None: ...

    def close(self) -> None: ...


class InputSource(Protocol):
    def poll_key(self) -> Optional[int]: ...


class TerminalError(RuntimeError):
    """Raised when the terminal cannot display the game."""


def draw_screen(state: GameState, renderer: Renderer) -> None:
    """Draw one frame: board, moving piece, stats and next piece.

    While paused only the border and the word ``paused`` are shown so the
    player cannot study the board.
    """

    renderer.clear_screen()
    if state.consume_flash():
        renderer.flash()

    paused = state.status is GameStatus.PAUSED
    over = state.status is GameStatus.OVER
    board = state.board

    for x in range(0, board.width + 2):
        for y in range(1, board.height + 2):
            value = board.cell_at(x, y)
            if value == BORDER:
                renderer.draw_cell(x, y, OVER_BORDER if over else BORDER)
            elif not paused:
                renderer.draw_cell(x, y, value)

    if paused:
        renderer.draw_text(board.height // 2, board.width - 1, "paused")
    elif state.active is not None:
        _draw_piece(renderer, state.active)

    renderer.draw_text(9, LABEL_COL, f"Level {state.stats.level}")
    renderer.draw_text(11, LABEL_COL, f"Lines {state.stats.lines}")
    renderer.draw_text(13, LABEL_COL, f"Score {state.stats.score}")
    if over:
        renderer.draw_text(16, LABEL_COL, "Game Over")

    renderer.draw_text(2, LABEL_COL, "----------")
    renderer.draw_text(7, LABEL_COL, "---Next---")
    if not paused and state.upcoming is not None:
        _draw_piece(renderer, Tetromino(state.upcoming, 1, PREVIEW_X, PREVIEW_Y))
    renderer.refresh()


def _draw_piece(renderer: Renderer, piece: Tetromino) -> None:
    for x, y in piece.cells():
        renderer.draw_cell(x, y, piece.shape)


# Colour pair numbers.  Pairs 1-7 double as the shape ids.
COLOR_PAIRS = {
    1: curses.COLOR_WHITE,
    2: curses.COLOR_BLUE,
    3: curses.COLOR_CYAN,
    4: curses.COLOR_GREEN,
    5: curses.COLOR_MAGENTA,
    6: curses.COLOR_RED,
    7: curses.COLOR_YELLOW,
    8: curses.COLOR_BLACK,
}
EMPTY_PAIR = 8
TEXT_PAIR = 9
OVER_PAIR = 10


class CursesRenderer:
    """Draw the game with coloured spaces in a curses screen.

    Every board cell is two characters wide so cells look roughly square.
    The screen comes from :func:`curses.wrapper`, which owns terminal setup
    and teardown.  :meth:`close` blanks the screen and may be called more
    than once.
    """

    def __init__(self, stdscr) -> None:
        self.stdscr = stdscr
        self._closed = False
        self.stdscr.nodelay(True)
        self.stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            LOGGER.debug("Terminal cannot hide the cursor")

        if not curses.has_colors():
            raise TerminalError("Looks like your terminal doesn't support colors")
        curses.start_color()
        for pair, color in COLOR_PAIRS.items():
            curses.init_pair(pair, color, color)
        curses.init_pair(TEXT_PAIR, curses.COLOR_WHITE, curses.COLOR_BLACK)
        curses.init_pair(OVER_PAIR, curses.COLOR_RED, curses.COLOR_BLACK)
        self.x_margin = 0

    def __enter__(self) -> "CursesRenderer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def clear_screen(self) -> None:
        self.stdscr.erase()
        # The terminal may be resized at any time.
        _, cols = self.stdscr.getmaxyx()
        self.x_margin = max(0, (cols - WINDOW_WIDTH) // 2)

    def draw_cell(self, x: int, y: int, kind: int) -> None:
        if kind == BORDER:
            char, pair = "|", TEXT_PAIR
        elif kind == OVER_BORDER:
            char, pair = "|", OVER_PAIR
        elif kind == EMPTY:
            char, pair = " ", EMPTY_PAIR
        else:
            char, pair = " ", kind
        self._addstr(y, self.x_margin + 2 * x, char * 2, curses.color_pair(pair))

    def draw_text(self, row: int, col: int, text: str) -> None:
        self._addstr(row, self.x_margin + col, text, curses.color_pair(TEXT_PAIR))

    def flash(self) -> None:
        curses.flash()

    def refresh(self) -> None:
        self.stdscr.refresh()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.stdscr.erase()
        self.stdscr.refresh()

    def _addstr(self, row: int, col: int, text: str, attr: int) -> None:
        # Writing past the edge of a small terminal raises; the frame is
        # simply clipped.
        try:
            self.stdscr.addstr(row, col, text, attr)
        except curses.error:
            pass


class CursesInput:
    """Non-blocking key source reading from a curses screen."""

    def __init__(self, stdscr) -> None:
        self.stdscr = stdscr

    def poll_key(self) -> Optional[int]:
        key = self.stdscr.getch()
        return None if key == -1 else key
