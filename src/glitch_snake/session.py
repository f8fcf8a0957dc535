"""Game state machine tying the pure engine to the tick scheduler."""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .config import (
    DEFAULT_DIFFICULTY,
    DIFFICULTY_CONFIG,
    GRID_SIZE,
    Difficulty,
)
from .engine import GameState, Snake, StepEvent, is_reversal, new_game, step
from .food import place_food
from .grid import Coordinate, Direction
from .scheduler import TickScheduler

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"


class Command(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    TOGGLE_PAUSE = "toggle_pause"
    SELECT_DIFFICULTY = "select_difficulty"


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of everything an observer needs to redraw the board."""

    snake: Snake
    food: Coordinate
    direction: Direction
    score: int
    status: GameStatus
    tick_ms: int
    difficulty: Difficulty


ScoreCallback = Callable[[int], None]
ChangeCallback = Callable[[Snapshot], None]


class GameSession:
    """Owns the game state, the status and the scheduler that drives ticks.

    Commands issued in a state that does not accept them are ignored.
    Input handlers should only call :meth:`set_pending_direction` or
    :meth:`post`; the state itself only changes inside :meth:`update`
    or an explicit command.
    """

    def __init__(
        self,
        difficulty: Difficulty = DEFAULT_DIFFICULTY,
        *,
        rng: random.Random | None = None,
        on_score: ScoreCallback | None = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.difficulty = difficulty
        self.status = GameStatus.IDLE
        self._on_score = on_score
        self._observers: list[ChangeCallback] = []
        self._commands: deque[tuple[Command, Difficulty | None]] = deque()
        self.scheduler = TickScheduler(self._tick, lambda: self.state.tick_ms)

        config = DIFFICULTY_CONFIG[difficulty]
        centre = GRID_SIZE // 2
        self.state = GameState(
            snake=((centre, centre),),
            food=place_food(self.rng),
            direction=Direction.RIGHT,
            score=0,
            tick_ms=config.tick_ms,
            config=config,
        )
        self.pending_direction = Direction.RIGHT

    # --- Observers -----------------------------------------------------

    def subscribe(self, callback: ChangeCallback) -> None:
        self._observers.append(callback)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            snake=self.state.snake,
            food=self.state.food,
            direction=self.state.direction,
            score=self.state.score,
            status=self.status,
            tick_ms=self.state.tick_ms,
            difficulty=self.difficulty,
        )

    def _notify(self) -> None:
        if not self._observers:
            return
        snap = self.snapshot()
        for callback in self._observers:
            callback(snap)

    def _report_score(self) -> None:
        if self._on_score is not None:
            self._on_score(self.state.score)

    # --- Commands ------------------------------------------------------

    def set_pending_direction(self, direction: Direction) -> None:
        """Remember the latest requested turn; applied at the next tick."""
        if self.status is not GameStatus.RUNNING:
            return
        if is_reversal(self.state.direction, direction, len(self.state.snake)):
            return
        self.pending_direction = direction

    def select_difficulty(self, difficulty: Difficulty) -> None:
        """Pick the difficulty used by the next :meth:`start`."""
        if self.status not in (GameStatus.IDLE, GameStatus.GAME_OVER):
            logger.debug("Ignoring difficulty change while %s", self.status.value)
            return
        self.difficulty = difficulty

    def start(self) -> None:
        """Reset everything and begin a new run."""
        if self.status not in (GameStatus.IDLE, GameStatus.GAME_OVER):
            logger.debug("Ignoring start while %s", self.status.value)
            return
        self.state = new_game(DIFFICULTY_CONFIG[self.difficulty], self.rng)
        self.pending_direction = self.state.direction
        self.status = GameStatus.RUNNING
        self.scheduler.restart()
        logger.info(
            "Game started on %s (%d ms/tick)",
            self.state.config.label,
            self.state.tick_ms,
        )
        self._report_score()
        self._notify()

    def pause(self) -> None:
        if self.status is not GameStatus.RUNNING:
            logger.debug("Ignoring pause while %s", self.status.value)
            return
        self.status = GameStatus.PAUSED
        self.scheduler.cancel()
        self._notify()

    def resume(self) -> None:
        if self.status is not GameStatus.PAUSED:
            logger.debug("Ignoring resume while %s", self.status.value)
            return
        self.status = GameStatus.RUNNING
        self.scheduler.start()
        self._notify()

    def toggle_pause(self) -> None:
        """Pause, resume or start depending on the current status."""
        if self.status is GameStatus.RUNNING:
            self.pause()
        elif self.status is GameStatus.PAUSED:
            self.resume()
        else:
            self.start()

    # --- Queued input --------------------------------------------------

    def post(self, command: Command, difficulty: Difficulty | None = None) -> None:
        """Queue a command; it is applied on the next :meth:`update`."""
        if command is Command.SELECT_DIFFICULTY and difficulty is None:
            raise ValueError("SELECT_DIFFICULTY needs a difficulty")
        self._commands.append((command, difficulty))

    def update(self, elapsed_ms: float) -> int:
        """Apply queued commands in order, then let the scheduler run."""
        while self._commands:
            command, difficulty = self._commands.popleft()
            self._dispatch(command, difficulty)
        return self.scheduler.advance(elapsed_ms)

    def _dispatch(self, command: Command, difficulty: Difficulty | None) -> None:
        if command is Command.SELECT_DIFFICULTY and difficulty is not None:
            self.select_difficulty(difficulty)
        elif command is Command.START:
            self.start()
        elif command is Command.PAUSE:
            self.pause()
        elif command is Command.RESUME:
            self.resume()
        elif command is Command.TOGGLE_PAUSE:
            self.toggle_pause()

    # --- Tick ----------------------------------------------------------

    def _tick(self) -> None:
        if self.status is not GameStatus.RUNNING:
            return
        result = step(self.state, self.pending_direction, self.rng)
        self.state = result.state
        self.pending_direction = result.state.direction

        if result.event.is_collision:
            self._game_over(result.event)
        elif result.event is StepEvent.ATE:
            logger.debug(
                "Food eaten: score %d, %d ms/tick", self.state.score, self.state.tick_ms
            )
            self._report_score()
        self._notify()

    def _game_over(self, cause: StepEvent) -> None:
        self.status = GameStatus.GAME_OVER
        self.scheduler.cancel()
        logger.info(
            "Game over (%s collision) with score %d", cause.value, self.state.score
        )
