"""Glitch Snake shell: window, event loop, high score and command line."""

from __future__ import annotations

import argparse
import logging
import random

import pygame

from .config import (
    DEFAULT_DIFFICULTY,
    FPS,
    LOG_LEVEL,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    Difficulty,
)
from .grid import Direction
from .player import MusicPlayer
from .render import Renderer
from .session import Command, GameSession, GameStatus, Snapshot

logger = logging.getLogger(__name__)

KEY_TO_DIRECTION: dict[int, Direction] = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}
KEY_TO_DIFFICULTY: dict[int, Difficulty] = {
    pygame.K_1: Difficulty.EASY,
    pygame.K_2: Difficulty.MEDIUM,
    pygame.K_3: Difficulty.HARD,
}


class GlitchSnakeApp:
    """Owns the window and wires input, the game session, music and rendering."""

    def __init__(
        self,
        difficulty: Difficulty = DEFAULT_DIFFICULTY,
        *,
        seed: int | None = None,
        music: bool = True,
        fullscreen: bool = False,
    ) -> None:
        pygame.init()
        self._base_window_flags = pygame.DOUBLEBUF | pygame.SCALED
        self.fullscreen = fullscreen
        self._apply_display_mode()

        self.rng = random.Random(seed)
        self.high_score: int = 0
        self.session = GameSession(difficulty, rng=self.rng, on_score=self._on_score)
        self.session.subscribe(self._on_change)
        self.player = MusicPlayer(enabled=music)
        self.renderer = Renderer(self.window, rng=random.Random(seed))
        self._last_score = 0
        self._last_status = self.session.status

    def _apply_display_mode(self) -> None:
        """Recreate the main window honoring the fullscreen toggle."""
        flags = self._base_window_flags
        if self.fullscreen:
            flags |= pygame.FULLSCREEN
        size = (WINDOW_WIDTH, WINDOW_HEIGHT)
        try:
            self.window = pygame.display.set_mode(size, flags)
        except pygame.error as exc:
            # Headless and software-only drivers reject SCALED.
            logger.warning("Falling back to an unscaled window: %s", exc)
            self.window = pygame.display.set_mode(size, flags & ~pygame.SCALED)
        title = "Glitch Snake" + (" [Fullscreen]" if self.fullscreen else "")
        pygame.display.set_caption(title)

    # --- Core callbacks ------------------------------------------------

    def _on_score(self, score: int) -> None:
        if score > self.high_score:
            self.high_score = score

    def _on_change(self, snap: Snapshot) -> None:
        if snap.score > self._last_score:
            self.renderer.burst(snap.snake[0])
        if (
            snap.status is GameStatus.GAME_OVER
            and self._last_status is not GameStatus.GAME_OVER
        ):
            self.renderer.crash()
        self._last_score = snap.score
        self._last_status = snap.status

    # --- Input ---------------------------------------------------------

    def handle_events(self) -> bool:
        """Translate window/keyboard events into commands. Return False to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if self.player.handle_event(event):
                continue
            if event.type != pygame.KEYDOWN:
                continue

            if event.key in (pygame.K_ESCAPE, pygame.K_q):
                return False
            if event.key == pygame.K_SPACE:
                self.session.post(Command.TOGGLE_PAUSE)
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                if self.session.status is GameStatus.PAUSED:
                    self.session.post(Command.RESUME)
                else:
                    self.session.post(Command.START)
            elif event.key in KEY_TO_DIFFICULTY:
                self.session.post(
                    Command.SELECT_DIFFICULTY, KEY_TO_DIFFICULTY[event.key]
                )
            elif event.key in KEY_TO_DIRECTION:
                self.session.set_pending_direction(KEY_TO_DIRECTION[event.key])
            elif event.key == pygame.K_m:
                self.player.toggle()
            elif event.key == pygame.K_n:
                self.player.next()
            elif event.key == pygame.K_b:
                self.player.previous()
            elif event.key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
                self.player.volume_up()
            elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                self.player.volume_down()
            elif event.key in (pygame.K_f, pygame.K_F11):
                self.fullscreen = not self.fullscreen
                self._apply_display_mode()
                self.renderer.target = self.window
            elif event.key == pygame.K_c:
                self.renderer.scanlines_enabled = not self.renderer.scanlines_enabled
        return True

    # --- Main loop -----------------------------------------------------

    def run(self) -> None:
        """Run the main loop: handle events, feed the clock to the session, render."""
        clock = pygame.time.Clock()
        running = True

        while running:
            elapsed_ms = clock.tick(FPS)
            running = self.handle_events()
            self.session.update(elapsed_ms)

            fx_dt = elapsed_ms / 1000.0
            if self.session.status is GameStatus.PAUSED:
                fx_dt = 0.0
            self.renderer.update(fx_dt)
            self.renderer.draw(
                self.session.snapshot(), high_score=self.high_score, player=self.player
            )
            pygame.display.update()

        logger.info("Session ended, best score %d", self.high_score)
        pygame.quit()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Glitch Snake")
    parser.add_argument(
        "--difficulty",
        choices=[d.value.lower() for d in Difficulty],
        default=DEFAULT_DIFFICULTY.value.lower(),
        help="Initial difficulty selection",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for food placement")
    parser.add_argument("--mute", action="store_true", help="Disable the music player")
    parser.add_argument(
        "--fullscreen", action="store_true", help="Start in fullscreen mode"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    level = getattr(logging, LOG_LEVEL, logging.INFO)
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    app = GlitchSnakeApp(
        Difficulty(args.difficulty.upper()),
        seed=args.seed,
        music=not args.mute,
        fullscreen=args.fullscreen,
    )
    app.run()


if __name__ == "__main__":
    main()
