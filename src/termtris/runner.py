"""Main loop gluing the game state to a renderer, a key source and a clock."""

from __future__ import annotations

from typing import Callable, Mapping, Optional
import logging
import time

from .controls import Action, handle_key
from .game_state import GameState
from .render import InputSource, Renderer, draw_screen


LOGGER = logging.getLogger(__name__)


class GameRunner:
    """Run ticks of input handling, falling and drawing until the player quits.

    Every collaborator is injected so the loop can be driven step by step in
    tests with fake clocks and renderers.
    """

    def __init__(
        self,
        state: GameState,
        renderer: Renderer,
        keys: InputSource,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        bindings: Optional[Mapping[int, Action]] = None,
    ) -> None:
        self.state = state
        self.renderer = renderer
        self.keys = keys
        self._clock = clock
        self._sleep = sleep
        self._bindings = bindings
        self.running = False

    def tick(self) -> bool:
        """Handle at most one key, let the piece fall if due, then redraw.

        Returns ``False`` once the player has asked to quit.
        """

        key = self.keys.poll_key()
        if not handle_key(self.state, key, self._clock(), self._bindings):
            self.running = False
            return False
        self.state.lower_piece_at_right_time(self._clock())
        draw_screen(self.state, self.renderer)
        return True

    def run(self) -> None:
        """Loop until quit, then release the renderer."""

        LOGGER.info("Game started")
        self.running = True
        try:
            while self.tick():
                self._sleep(self.state.config.tick_interval)
        finally:
            self.running = False
            self.renderer.close()
            LOGGER.info(
                "Game stopped. Level %d, lines %d, score %d",
                self.state.stats.level,
                self.state.stats.lines,
                self.state.stats.score,
            )
