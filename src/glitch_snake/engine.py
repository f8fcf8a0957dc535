"""Pure snake simulation: movement, growth, collisions and scoring.

The game state is an immutable record. :func:`step` takes the current
record plus the pending direction and returns the next record together
with what happened during the tick; nothing here touches timers, input
or rendering.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum

from .config import GRID_SIZE, MIN_TICK_MS, SCORE_PER_FOOD, DifficultyConfig
from .food import place_food
from .grid import Coordinate, Direction, in_bounds, offset

Snake = tuple[Coordinate, ...]


class StepEvent(Enum):
    MOVED = "moved"
    ATE = "ate"
    WALL = "wall"
    SELF = "self"

    @property
    def is_collision(self) -> bool:
        return self in (StepEvent.WALL, StepEvent.SELF)


@dataclass(frozen=True, slots=True)
class GameState:
    snake: Snake  # head at index 0
    food: Coordinate
    direction: Direction
    score: int
    tick_ms: int
    config: DifficultyConfig

    @property
    def head(self) -> Coordinate:
        return self.snake[0]


@dataclass(frozen=True, slots=True)
class StepResult:
    state: GameState
    event: StepEvent


def initial_snake(length: int, size: int = GRID_SIZE) -> Snake:
    """Lay the snake out horizontally from the centre, heading right."""
    centre = size // 2
    return tuple((centre - i, centre) for i in range(length))


def new_game(config: DifficultyConfig, rng: random.Random) -> GameState:
    """Build the state a freshly started game begins with."""
    return GameState(
        snake=initial_snake(config.length),
        food=place_food(rng),
        direction=Direction.RIGHT,
        score=0,
        tick_ms=config.tick_ms,
        config=config,
    )


def is_reversal(active: Direction, requested: Direction, length: int) -> bool:
    return length > 1 and requested is active.opposite


def resolve_direction(active: Direction, pending: Direction, length: int) -> Direction:
    """Commit the pending direction unless it would turn the snake back on itself."""
    if is_reversal(active, pending, length):
        return active
    return pending


def advance(snake: Snake, direction: Direction) -> tuple[Coordinate, Snake]:
    """Return the candidate head and the snake with that head prepended."""
    new_head = offset(snake[0], direction)
    return new_head, (new_head,) + snake


def step(state: GameState, pending: Direction, rng: random.Random) -> StepResult:
    """Advance the game by exactly one grid cell.

    Checks run in order: wall, self, food. A collision leaves the snake,
    food and score untouched; only the committed direction is recorded.
    """
    direction = resolve_direction(state.direction, pending, len(state.snake))
    new_head, candidate = advance(state.snake, direction)

    if not in_bounds(new_head):
        return StepResult(replace(state, direction=direction), StepEvent.WALL)

    # Tested against the pre-move body, tail included.
    if new_head in state.snake:
        return StepResult(replace(state, direction=direction), StepEvent.SELF)

    if new_head == state.food:
        grown = replace(
            state,
            snake=candidate,
            food=place_food(rng),
            direction=direction,
            score=state.score + SCORE_PER_FOOD,
            tick_ms=max(MIN_TICK_MS, state.tick_ms - state.config.increment),
        )
        return StepResult(grown, StepEvent.ATE)

    moved = replace(state, snake=candidate[:-1], direction=direction)
    return StepResult(moved, StepEvent.MOVED)
