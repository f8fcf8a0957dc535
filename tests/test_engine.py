import random

from glitch_snake.config import DIFFICULTY_CONFIG, MIN_TICK_MS, Difficulty
from glitch_snake.engine import (
    StepEvent,
    advance,
    initial_snake,
    new_game,
    resolve_direction,
    step,
)
from glitch_snake.grid import Direction


def test_advance_prepends_new_head():
    head, candidate = advance(((5, 5), (4, 5)), Direction.UP)
    assert head == (5, 4)
    assert candidate == ((5, 4), (5, 5), (4, 5))


def test_move_keeps_length(make_state, rng):
    state = make_state([(5, 5), (4, 5), (3, 5)], food=(0, 0))
    result = step(state, Direction.RIGHT, rng)
    assert result.event is StepEvent.MOVED
    assert result.state.snake == ((6, 5), (5, 5), (4, 5))
    assert result.state.score == 0
    assert result.state.tick_ms == state.tick_ms


def test_eating_grows_scores_and_speeds_up(make_state, rng):
    state = make_state([(5, 5), (4, 5), (3, 5)], food=(6, 5))
    result = step(state, Direction.RIGHT, rng)
    assert result.event is StepEvent.ATE
    assert result.state.snake == ((6, 5), (5, 5), (4, 5), (3, 5))
    assert result.state.score == 10
    assert result.state.tick_ms == 128


def test_tick_interval_is_floored(make_state, rng):
    state = make_state(
        [(5, 5), (4, 5)], food=(6, 5), difficulty=Difficulty.HARD, tick_ms=42
    )
    result = step(state, Direction.RIGHT, rng)
    assert result.state.tick_ms == MIN_TICK_MS


def test_wall_collision_leaves_snake_unchanged(make_state, rng):
    snake = [(19, 10), (18, 10), (17, 10)]
    state = make_state(snake, food=(0, 0), score=30)
    result = step(state, Direction.RIGHT, rng)
    assert result.event is StepEvent.WALL
    assert result.state.snake == tuple(snake)
    assert result.state.score == 30
    assert result.state.food == (0, 0)


def test_wall_beats_food(make_state, rng):
    state = make_state([(0, 3), (1, 3)], food=(0, 3), direction=Direction.LEFT)
    result = step(state, Direction.LEFT, rng)
    assert result.event is StepEvent.WALL
    assert result.state.score == 0


def test_self_collision(make_state, rng):
    # Head at (5, 5) moving up into its own body at (5, 4).
    snake = [(5, 5), (6, 5), (6, 4), (5, 4), (4, 4)]
    state = make_state(snake, direction=Direction.LEFT, food=(5, 4))
    result = step(state, Direction.UP, rng)
    assert result.event is StepEvent.SELF
    assert result.state.snake == tuple(snake)
    assert result.state.score == 0


def test_self_collision_includes_the_tail(make_state, rng):
    snake = [(5, 5), (6, 5), (6, 4), (5, 4)]
    state = make_state(snake, direction=Direction.LEFT, food=(0, 0))
    assert step(state, Direction.UP, rng).event is StepEvent.SELF


def test_reversal_is_rejected_while_longer_than_one():
    assert resolve_direction(Direction.RIGHT, Direction.LEFT, 3) is Direction.RIGHT
    assert resolve_direction(Direction.RIGHT, Direction.UP, 3) is Direction.UP
    assert resolve_direction(Direction.RIGHT, Direction.LEFT, 1) is Direction.LEFT


def test_step_ignores_reversal_request(make_state, rng):
    state = make_state([(5, 5), (4, 5), (3, 5)])
    result = step(state, Direction.LEFT, rng)
    assert result.state.direction is Direction.RIGHT
    assert result.state.snake[0] == (6, 5)


def test_random_walk_properties():
    rng = random.Random(5)
    state = new_game(DIFFICULTY_CONFIG[Difficulty.EASY], rng)
    for _ in range(500):
        before = state
        pending = rng.choice(list(Direction))
        result = step(before, pending, rng)
        after = result.state
        assert after.direction is not before.direction.opposite
        if result.event.is_collision:
            assert after.snake == before.snake
            state = new_game(DIFFICULTY_CONFIG[Difficulty.EASY], rng)
            continue
        dx = after.head[0] - before.head[0]
        dy = after.head[1] - before.head[1]
        assert (dx, dy) == after.direction.value
        growth = len(after.snake) - len(before.snake)
        assert growth == (1 if result.event is StepEvent.ATE else 0)
        assert after.score - before.score == (10 if growth else 0)
        assert MIN_TICK_MS <= after.tick_ms <= before.tick_ms
        state = after


def test_new_game_layout(rng):
    state = new_game(DIFFICULTY_CONFIG[Difficulty.MEDIUM], rng)
    assert state.snake == initial_snake(5)
    assert state.snake == ((10, 10), (9, 10), (8, 10), (7, 10), (6, 10))
    assert state.direction is Direction.RIGHT
    assert state.score == 0
    assert state.tick_ms == 130
