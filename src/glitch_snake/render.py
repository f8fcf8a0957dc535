"""Draws the board, the HUD panel and the status overlays from a snapshot."""

from __future__ import annotations

import random

import pygame

from .config import (
    BOARD_SIZE,
    BURST_COLORS,
    CELL_SIZE,
    DIFFICULTY_CONFIG,
    FONT_NAME,
    FONT_SIZE,
    GRID_SIZE,
    PALETTE,
    PANEL_HEIGHT,
    SMALL_FONT_SIZE,
    VOLUME_STEPS,
    Difficulty,
)
from .effects import Particle, Shake, draw_particles, spawn_burst, update_particles
from .grid import Direction
from .player import MusicPlayer
from .session import GameStatus, Snapshot

HEAD_ANGLES = {
    Direction.RIGHT: 0,
    Direction.UP: 90,
    Direction.LEFT: 180,
    Direction.DOWN: -90,
}


class Renderer:
    """Encapsulates the off-screen board, cached layers and fx state."""

    def __init__(self, target: pygame.Surface, rng: random.Random | None = None) -> None:
        self.target = target
        self.rng = rng or random.Random()
        self.scene = pygame.Surface((BOARD_SIZE, BOARD_SIZE))
        self.background = self._build_background()
        self.scanlines = self._build_scanlines()
        self.scanlines_enabled: bool = True
        self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE, bold=True)
        self.small_font = pygame.font.SysFont(FONT_NAME, SMALL_FONT_SIZE)
        self.particles: list[Particle] = []
        self.shake = Shake()
        self.head_sprite = self._build_head_sprite()

    # --- Cached layers -------------------------------------------------

    def _build_background(self) -> pygame.Surface:
        """Dark board with a dashed grid, built once."""
        surface = pygame.Surface((BOARD_SIZE, BOARD_SIZE))
        surface.fill(PALETTE["bg"])
        dash = 2
        for i in range(GRID_SIZE + 1):
            pos = min(i * CELL_SIZE, BOARD_SIZE - 1)
            for start in range(0, BOARD_SIZE, dash * 2):
                pygame.draw.line(
                    surface, PALETTE["grid"], (pos, start), (pos, start + dash - 1)
                )
                pygame.draw.line(
                    surface, PALETTE["grid"], (start, pos), (start + dash - 1, pos)
                )
        return surface

    def _build_scanlines(self) -> pygame.Surface:
        """Build a subtle CRT-style scanline overlay."""
        overlay = pygame.Surface((BOARD_SIZE, BOARD_SIZE), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 0))
        for y in range(0, BOARD_SIZE, 2):
            pygame.draw.line(overlay, (0, 0, 0, 60), (0, y), (BOARD_SIZE, y))
        return overlay

    def _build_head_sprite(self) -> pygame.Surface:
        """Head facing right on a 2x2 cell canvas; rotated per direction."""
        size = CELL_SIZE * 2
        sprite = pygame.Surface((size, size), pygame.SRCALPHA)
        c = size // 2

        tongue = PALETTE["tongue"]
        pygame.draw.line(sprite, tongue, (c + 8, c), (c + 16, c), 2)
        pygame.draw.line(sprite, tongue, (c + 16, c), (c + 19, c - 3), 1)
        pygame.draw.line(sprite, tongue, (c + 16, c), (c + 19, c + 3), 1)

        pygame.draw.ellipse(sprite, PALETTE["head_dark"], pygame.Rect(c - 9, c - 7, 18, 14))
        pygame.draw.ellipse(
            sprite, PALETTE["snake_light"], pygame.Rect(c - 7, c - 5, 11, 8)
        )

        for eye_y in (c - 4, c + 4):
            pygame.draw.circle(sprite, (255, 255, 255), (c + 3, eye_y), 2)
            pygame.draw.circle(sprite, (0, 0, 0), (c + 4, eye_y), 1)
        return sprite

    # --- Fx ------------------------------------------------------------

    def burst(self, cell: tuple[int, int]) -> None:
        spawn_burst(self.particles, cell, BURST_COLORS, self.rng)
        self.shake.start(intensity=3.0, duration=0.2)

    def crash(self) -> None:
        self.shake.start(intensity=8.0, duration=0.6)

    def update(self, dt: float) -> None:
        """Advance fx timers; pass zero while paused."""
        if dt <= 0:
            return
        self.particles = update_particles(self.particles, dt)
        self.shake.update(dt)

    # --- Sprites -------------------------------------------------------

    def _cell_origin(self, cell: tuple[int, int]) -> tuple[int, int]:
        return cell[0] * CELL_SIZE, cell[1] * CELL_SIZE

    def _draw_mouse(self, cell: tuple[int, int]) -> None:
        x, y = self._cell_origin(cell)
        cx, cy = x + CELL_SIZE // 2, y + CELL_SIZE // 2
        body = PALETTE["mouse"]
        pygame.draw.lines(
            self.scene, body, False, [(cx + 4, cy + 4), (cx + 8, cy + 1), (cx + 8, cy - 8)], 2
        )
        pygame.draw.ellipse(self.scene, body, pygame.Rect(cx - 7, cy - 3, 14, 10))
        pygame.draw.circle(self.scene, PALETTE["mouse_ear"], (cx - 5, cy - 2), 2)
        pygame.draw.circle(self.scene, PALETTE["mouse_ear"], (cx + 5, cy - 2), 2)
        pygame.draw.circle(self.scene, (0, 0, 0), (cx, cy + 7), 1)

    def _draw_body(self, cell: tuple[int, int]) -> None:
        x, y = self._cell_origin(cell)
        cx, cy = x + CELL_SIZE // 2, y + CELL_SIZE // 2
        pygame.draw.circle(self.scene, PALETTE["snake_dark"], (cx, cy), 9)
        pygame.draw.circle(self.scene, PALETTE["snake_light"], (cx - 2, cy - 2), 5)

    def _draw_head(self, cell: tuple[int, int], direction: Direction) -> None:
        sprite = pygame.transform.rotate(self.head_sprite, HEAD_ANGLES[direction])
        x, y = self._cell_origin(cell)
        rect = sprite.get_rect(center=(x + CELL_SIZE // 2, y + CELL_SIZE // 2))
        self.scene.blit(sprite, rect)

    # --- Overlay -------------------------------------------------------

    def _overlay_lines(self, snap: Snapshot) -> list[tuple[str, pygame.Color]]:
        if snap.status is GameStatus.PAUSED:
            return [
                ("SYSTEM_HALTED", PALETTE["yellow"]),
                ("", PALETTE["text"]),
                (">> RESUME_PROCESS [SPACE]", PALETTE["magenta"]),
            ]
        if snap.status is GameStatus.GAME_OVER:
            title = [
                ("FATAL_ERROR", PALETTE["red"]),
                ("SNAKE.EXE HAS STOPPED WORKING", PALETTE["red"]),
            ]
        else:
            title = [("INIT_GAME_SEQ", PALETTE["cyan"])]
        picker = "  ".join(
            f"[{idx}]{'>' if diff is snap.difficulty else ' '}{DIFFICULTY_CONFIG[diff].label}"
            for idx, diff in enumerate(Difficulty, start=1)
        )
        return title + [
            ("", PALETTE["text"]),
            (picker, PALETTE["cyan"]),
            ("", PALETTE["text"]),
            (">> EXECUTE_RUN [ENTER]", PALETTE["magenta"]),
        ]

    def _draw_overlay(self, snap: Snapshot) -> None:
        overlay = pygame.Surface((BOARD_SIZE, BOARD_SIZE), pygame.SRCALPHA)
        overlay.fill(PALETTE["overlay"])
        lines = self._overlay_lines(snap)
        line_height = FONT_SIZE + 6
        top = BOARD_SIZE // 2 - (len(lines) * line_height) // 2
        for idx, (text, color) in enumerate(lines):
            if not text:
                continue
            font = self.font if idx == 0 else self.small_font
            surf = font.render(text, True, color)
            rect = surf.get_rect(center=(BOARD_SIZE // 2, top + idx * line_height))
            overlay.blit(surf, rect)
        self.scene.blit(overlay, (0, 0))

    # --- Panel ---------------------------------------------------------

    def _draw_panel(self, snap: Snapshot, high_score: int, player: MusicPlayer) -> None:
        panel = pygame.Rect(0, BOARD_SIZE, BOARD_SIZE, PANEL_HEIGHT)
        self.target.fill(PALETTE["panel"], panel)
        pygame.draw.line(
            self.target, PALETTE["cyan"], panel.topleft, (panel.right, panel.top), 2
        )

        score = self.font.render(f"SCORE {snap.score:06}", True, PALETTE["cyan"])
        best = self.small_font.render(f"HI {high_score:06}", True, PALETTE["dim"])
        speed = self.small_font.render(
            f"{DIFFICULTY_CONFIG[snap.difficulty].label} {snap.tick_ms}MS",
            True,
            PALETTE["magenta"],
        )
        self.target.blit(score, (10, panel.top + 8))
        self.target.blit(best, (10, panel.top + 8 + FONT_SIZE + 2))
        self.target.blit(speed, speed.get_rect(topright=(panel.right - 10, panel.top + 10)))

        track = player.current_track
        state = "PLAYING" if player.is_playing else "STOPPED"
        title = self.small_font.render(
            f"{track.title} - {track.artist}", True, PALETTE["text"]
        )
        status = self.small_font.render(state, True, PALETTE["yellow"])
        info_top = panel.top + 58
        self.target.blit(title, (10, info_top))
        self.target.blit(status, status.get_rect(topright=(panel.right - 10, info_top)))

        bar = pygame.Rect(10, info_top + 22, BOARD_SIZE - 20, 6)
        pygame.draw.rect(self.target, PALETTE["grid"], bar)
        filled = bar.copy()
        filled.width = int(bar.width * player.progress() / 100.0)
        if filled.width > 0:
            pygame.draw.rect(self.target, PALETTE["magenta"], filled)

        levels = player.visualizer_levels(self.rng)
        vis_top = bar.bottom + 8
        vis_height = 34
        bar_width = max(1, (BOARD_SIZE - 120) // max(1, len(levels)))
        for idx, level in enumerate(levels):
            height = max(1, int(vis_height * level))
            pygame.draw.rect(
                self.target,
                PALETTE["cyan"],
                pygame.Rect(10 + idx * bar_width, vis_top + vis_height - height, bar_width - 1, height),
            )

        for idx, step in enumerate(VOLUME_STEPS):
            color = PALETTE["magenta"] if player.volume >= step - 1e-6 else PALETTE["grid"]
            pip = pygame.Rect(panel.right - 90 + idx * 16, vis_top + vis_height - 10, 12, 10)
            pygame.draw.rect(self.target, color, pip)

    # --- Draw ----------------------------------------------------------

    def draw(self, snap: Snapshot, *, high_score: int, player: MusicPlayer) -> None:
        """Render one frame: board, food, snake, fx, overlay, then the panel."""
        self.scene.blit(self.background, (0, 0))
        self._draw_mouse(snap.food)
        for cell in reversed(snap.snake[1:]):
            self._draw_body(cell)
        self._draw_head(snap.snake[0], snap.direction)
        draw_particles(self.scene, self.particles)

        if snap.status is not GameStatus.RUNNING:
            self._draw_overlay(snap)
        if self.scanlines_enabled:
            self.scene.blit(self.scanlines, (0, 0))

        ox, oy = self.shake.offset(self.rng)
        self.target.fill((0, 0, 0), pygame.Rect(0, 0, BOARD_SIZE, BOARD_SIZE))
        self.target.blit(self.scene, (ox, oy))
        self._draw_panel(snap, high_score, player)
