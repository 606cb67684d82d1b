"""Keyboard handling: turn key codes into moves and state changes."""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional
import curses
import logging

from .game_state import GameState


LOGGER = logging.getLogger(__name__)


class Action(Enum):
    """Everything a key press can ask for."""

    QUIT = "quit"
    PAUSE = "pause"
    LEFT = "left"
    RIGHT = "right"
    ROTATE = "rotate"
    DROP = "drop"


DEFAULT_KEY_BINDINGS: Mapping[int, Action] = {
    ord("q"): Action.QUIT,
    ord("p"): Action.PAUSE,
    curses.KEY_LEFT: Action.LEFT,
    curses.KEY_RIGHT: Action.RIGHT,
    curses.KEY_UP: Action.ROTATE,
    curses.KEY_DOWN: Action.DROP,
}


def handle_key(
    state: GameState,
    key: Optional[int],
    now: float,
    bindings: Optional[Mapping[int, Action]] = None,
) -> bool:
    """Apply one key press to ``state``.

    Movement keys only work while the game is playing and are silently
    ignored when the move is blocked.  Returns ``False`` when the player asked
    to quit and ``True`` otherwise.
    """

    if key is None:
        return True
    if bindings is None:
        bindings = DEFAULT_KEY_BINDINGS
    action = bindings.get(key)
    if action is None:
        return True

    if action is Action.QUIT:
        LOGGER.info("Quit requested")
        return False
    if action is Action.PAUSE:
        state.toggle_pause(now)
        return True

    if not state.is_playing():
        return True

    if action is Action.LEFT:
        state.shift(dx=-1)
    elif action is Action.RIGHT:
        state.shift(dx=1)
    elif action is Action.ROTATE:
        state.rotate()
    elif action is Action.DROP:
        state.hard_drop()
    return True
