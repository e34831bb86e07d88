from __future__ import annotations

import numpy as np
import pytest

from blockfall.config import GameConfig
from blockfall.game import Game, Mode
from blockfall.shape import SHAPES, ShapeKind
from blockfall.utils import score_for_rows


def fill_row(game: Game, row: int, skip: tuple[int, ...] = ()) -> None:
    for x in range(game.grid.width):
        if x not in skip:
            game.grid.set(x, row, 1)


def test_score_for_rows_accumulates_previous_award() -> None:
    assert score_for_rows(0) == 0
    assert score_for_rows(1) == 1000
    assert score_for_rows(2) == 2500
    assert score_for_rows(3) == 4750
    assert score_for_rows(4) == 8125


def test_score_for_rows_rounds_each_award() -> None:
    # 1000, 1500, 2250, 3375, then 5062.5 rounds to 5062.
    assert score_for_rows(5) == 13187
    assert score_for_rows(3, multiplier=1.1) == 3310
    assert score_for_rows(2, base=10, multiplier=1.25) == 22


def test_landing_clears_two_rows_for_2500(squares) -> None:
    game = Game(rng=squares)
    fill_row(game, 16, skip=(0, 1))
    fill_row(game, 17, skip=(0, 1))
    game.figure.reset(SHAPES[ShapeKind.O], 0, 16)

    game.step()

    assert game.score == 2500
    assert game.lines_cleared == 2
    assert game.pieces == 1
    assert not game.grid.cells.any()
    assert (game.figure.x, game.figure.y) == (4, -1)
    assert game.mode is Mode.PLAYING


def test_landing_clears_three_rows_for_4750(squares) -> None:
    game = Game(rng=squares)
    for row in (15, 16, 17):
        fill_row(game, row, skip=(0,))
    # Vertical I covering rows 14 to 17 of column 0.
    game.figure.reset(SHAPES[ShapeKind.I], 0, 15)

    game.step()

    assert game.score == 4750
    # Only the top block of the I survives and drops to the floor.
    assert game.grid.get(0, 17) != 0
    assert int(np.count_nonzero(game.grid.cells)) == 1


def test_score_accumulates_over_landings(squares) -> None:
    game = Game(rng=squares)
    fill_row(game, 17, skip=(0, 1))
    game.figure.reset(SHAPES[ShapeKind.O], 0, 16)
    game.step()
    assert game.score == 1000
    fill_row(game, 17, skip=(6, 7))
    game.figure.reset(SHAPES[ShapeKind.O], 6, 16)
    game.step()
    assert game.score == 2000


def test_advance_runs_one_step_per_whole_interval(squares) -> None:
    game = Game(rng=squares)
    assert game.advance(149) == 0
    assert game.figure.y == -1
    assert game.advance(1) == 1
    assert game.figure.y == 0
    assert game.tick_accumulator == pytest.approx(0.0)


def test_advance_drains_backlog_in_a_burst(squares) -> None:
    game = Game(rng=squares)
    assert game.advance(150 * 3 + 20) == 3
    assert game.figure.y == 2
    assert game.tick_accumulator == pytest.approx(20.0)


def test_update_measures_time_between_calls(squares) -> None:
    game = Game(rng=squares)
    assert game.update(1000.0) == 0
    assert game.update(1300.0) == 2
    assert game.update(1310.0) == 0
    assert game.last_timestamp == 1310.0


def test_fast_fall_is_idempotent() -> None:
    game = Game(seed=1)
    game.tick_accumulator = 100.0

    game.start_fast_fall()
    once = (game.tick_interval_ms, game.tick_accumulator)
    game.start_fast_fall()
    assert (game.tick_interval_ms, game.tick_accumulator) == once
    assert game.tick_interval_ms == pytest.approx(15.0)
    assert game.tick_accumulator == pytest.approx(10.0)
    assert game.fast_fall_active

    game.stop_fast_fall()
    game.stop_fast_fall()
    assert game.tick_interval_ms == pytest.approx(150.0)
    assert game.tick_accumulator == pytest.approx(100.0)
    assert not game.fast_fall_active


def test_accelerate_key_toggles_fast_fall(squares) -> None:
    game = Game(rng=squares)
    assert game.process_input("ArrowDown_down") is True
    assert game.process_input("ArrowDown_down") is True
    assert game.tick_interval_ms == pytest.approx(15.0)
    assert game.advance(30) == 2
    assert game.process_input("ArrowDown_up") is True
    assert game.tick_interval_ms == pytest.approx(150.0)


def test_movement_inputs(squares) -> None:
    game = Game(rng=squares)
    game.figure.reset(SHAPES[ShapeKind.T], 4, 5)
    assert game.process_input("ArrowLeft_down") is True
    assert game.figure.x == 3
    assert game.process_input("ArrowRight_down") is True
    assert game.process_input("ArrowRight_down") is True
    assert game.figure.x == 5
    assert game.process_input(" _down") is True
    assert game.figure.shape == SHAPES[ShapeKind.T].rotate()
    assert game.process_input("ArrowUp_down") is True
    assert game.figure.shape == SHAPES[ShapeKind.T].rotate().rotate()


def test_blocked_move_is_still_handled(squares) -> None:
    game = Game(rng=squares)
    game.figure.reset(SHAPES[ShapeKind.O], 0, 5)
    assert game.process_input("ArrowLeft_down") is True
    assert game.figure.x == 0


@pytest.mark.parametrize("name", ["KeyQ_down", "ArrowLeft_up", " _up", "ArrowLeft", "", "_down"])
def test_unrecognised_inputs_are_not_handled(name: str) -> None:
    game = Game(seed=3)
    before = (game.figure.x, game.figure.y, game.figure.shape)
    assert game.process_input(name) is False
    assert game.enqueue_input(name) is False
    assert (game.figure.x, game.figure.y, game.figure.shape) == before


def test_spawn_collision_ends_game(squares) -> None:
    game = Game(rng=squares)
    # Occupies a cell the next square needs at the spawn point.
    game.grid.set(4, 0, 1)
    game.figure.reset(SHAPES[ShapeKind.O], 0, 16)

    game.step()

    assert game.mode is Mode.GAME_OVER
    cells = game.grid.cells.copy()
    position = (game.figure.x, game.figure.y)
    assert game.advance(10_000) == 0
    assert game.update(0) == 0
    assert game.update(10_000) == 0
    assert np.array_equal(game.grid.cells, cells)
    assert (game.figure.x, game.figure.y) == position
    assert game.score == 0


def test_game_over_rejects_input(squares) -> None:
    game = Game(rng=squares)
    game.mode = Mode.GAME_OVER
    for name in ("ArrowLeft_down", "ArrowRight_down", " _down", "ArrowDown_down", "ArrowDown_up"):
        assert game.process_input(name) is False
        assert game.enqueue_input(name) is False
    assert not game.fast_fall_active


def test_game_over_stops_backlog(squares) -> None:
    game = Game(rng=squares)
    game.grid.set(4, 0, 1)
    game.figure.reset(SHAPES[ShapeKind.O], 0, 16)
    assert game.advance(150 * 10) == 1
    assert game.mode is Mode.GAME_OVER


def test_begin_mode_waits_for_begin(squares) -> None:
    game = Game(rng=squares, mode=Mode.BEGIN)
    assert game.advance(1000) == 0
    assert game.figure.y == -1
    assert game.process_input("ArrowLeft_down") is False
    game.begin()
    assert game.mode is Mode.PLAYING
    assert game.advance(150) == 1


def test_frame_applies_queued_inputs_in_order(squares) -> None:
    game = Game(rng=squares)
    assert game.enqueue_input("ArrowLeft_down") is True
    assert game.enqueue_input("ArrowLeft_down") is True
    assert game.enqueue_input("ArrowRight_down") is True
    assert game.figure.x == 4
    game.frame(0.0)
    assert game.figure.x == 3
    assert len(game.inputs) == 0


def test_queued_input_dropped_after_game_over(squares) -> None:
    game = Game(rng=squares)
    game.enqueue_input("ArrowLeft_down")
    game.mode = Mode.GAME_OVER
    game.frame(0.0)
    assert game.figure.x == 4


def test_restart_resets_session(squares) -> None:
    game = Game(rng=squares)
    game.grid.set(4, 0, 1)
    game.figure.reset(SHAPES[ShapeKind.O], 0, 16)
    game.score = 1234
    game.start_fast_fall()
    game.step()
    assert game.mode is Mode.GAME_OVER

    game.restart()

    assert game.mode is Mode.PLAYING
    assert game.score == 0
    assert game.pieces == 0
    assert not game.grid.cells.any()
    assert game.tick_interval_ms == pytest.approx(150.0)
    assert not game.fast_fall_active
    assert game.last_timestamp is None
    assert (game.figure.x, game.figure.y) == (4, -1)


def test_custom_key_bindings_and_dimensions(squares) -> None:
    from blockfall.controls import Command

    config = GameConfig(width=10, height=20, key_bindings={"a": Command.LEFT})
    game = Game(config, rng=squares)
    assert game.grid.cells.shape == (20, 10)
    assert game.figure.x == 5
    assert game.process_input("a_down") is True
    assert game.figure.x == 4
    assert game.process_input("ArrowLeft_down") is False


def test_seeded_games_pick_the_same_shapes() -> None:
    first = Game(seed=42)
    second = Game(seed=42)
    for _ in range(5):
        assert first.figure.shape == second.figure.shape
        first.spawn()
        second.spawn()


def test_narrow_grid_spawns_inside_the_walls(squares) -> None:
    game = Game(GameConfig(width=4), rng=squares)
    assert game.figure.x == 2
    assert not game.figure.collides(game.collides_at)
    game.step()
    assert game.mode is Mode.PLAYING
    assert not game.grid.cells.any()


def test_first_figure_overlapping_the_grid_ends_the_game(squares) -> None:
    class BlockedGame(Game):
        def spawn(self) -> bool:
            self.grid.set(4, 0, 1)
            return super().spawn()

    game = BlockedGame(rng=squares)
    assert game.mode is Mode.GAME_OVER
    assert game.advance(1000) == 0
