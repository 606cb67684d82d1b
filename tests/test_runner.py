import curses

from termtris.board import HEIGHT, WIDTH
from termtris.config import GameConfig
from termtris.game_state import GameState, GameStatus
from termtris.runner import GameRunner
from termtris.tetromino import Tetromino


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


class FakeKeys:
    def __init__(self, keys):
        self.keys = list(keys)

    def poll_key(self):
        return self.keys.pop(0) if self.keys else None


class FakeRenderer:
    def __init__(self):
        self.events = []

    def clear_screen(self):
        self.events.append("clear")

    def draw_cell(self, x, y, kind):
        pass

    def draw_text(self, row, col, text):
        pass

    def flash(self):
        self.events.append("flash")

    def refresh(self):
        self.events.append("refresh")

    def close(self):
        self.events.append("close")


def _runner(keys, clock=None, sleeps=None):
    state = GameState(config=GameConfig(seed=5))
    state.reset_game()
    state.active = Tetromino(4, rotation=1, x=4, y=0)
    state.upcoming = 5
    renderer = FakeRenderer()
    runner = GameRunner(
        state,
        renderer,
        FakeKeys(keys),
        clock=clock or FakeClock(),
        sleep=(sleeps.append if sleeps is not None else lambda _s: None),
    )
    return runner, state, renderer


def test_tick_handles_key_then_draws():
    runner, state, renderer = _runner([curses.KEY_LEFT])
    assert runner.tick() is True
    assert state.active.x == 3
    assert renderer.events == ["clear", "refresh"]


def test_one_key_per_tick():
    runner, state, _ = _runner([curses.KEY_LEFT, curses.KEY_LEFT])
    runner.tick()
    assert state.active.x == 3
    runner.tick()
    assert state.active.x == 2


def test_tick_applies_gravity():
    clock = FakeClock()
    runner, state, _ = _runner([], clock=clock)
    runner.tick()
    clock.advance(0.75)
    runner.tick()
    assert state.active.y == 1


def test_paused_runner_keeps_drawing_without_falling():
    clock = FakeClock()
    runner, state, renderer = _runner([ord("p")], clock=clock)
    runner.tick()
    clock.advance(5.0)
    runner.tick()
    assert state.status is GameStatus.PAUSED
    assert state.active.y == 0
    assert renderer.events.count("refresh") == 2


def test_drop_that_clears_a_line_flashes():
    runner, state, renderer = _runner([curses.KEY_DOWN])
    for x in range(1, WIDTH - 3):
        state.board.set_cell(x, HEIGHT, 2)
    state.active = Tetromino(4, rotation=1, x=WIDTH - 4, y=0)

    runner.tick()

    assert state.stats.lines == 1
    assert "flash" in renderer.events


def test_run_stops_on_quit_and_closes_renderer():
    sleeps = []
    runner, state, renderer = _runner([None, None, ord("q")], sleeps=sleeps)

    runner.run()

    assert runner.running is False
    assert renderer.events[-1] == "close"
    assert renderer.events.count("refresh") == 2
    assert sleeps == [state.config.tick_interval] * 2
