"""Particle bursts and screen shake for the board renderer."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Sequence

import pygame

from .config import CELL_SIZE, PARTICLE_DIRECTIONS, PARTICLE_LIFE


@dataclass(slots=True)
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: float
    size: float
    color: pygame.Color


@dataclass(slots=True)
class Shake:
    intensity: float = 0.0
    duration: float = 0.0
    timer: float = 0.0

    def start(self, intensity: float, duration: float) -> None:
        self.intensity = max(self.intensity, intensity)
        self.duration = max(self.duration, duration)
        self.timer = self.duration

    def update(self, dt: float) -> None:
        if self.timer <= 0.0:
            return
        self.timer = max(0.0, self.timer - dt)
        if self.timer <= 0.0:
            self.intensity = 0.0
            self.duration = 0.0

    def offset(self, rng: random.Random) -> tuple[int, int]:
        if self.timer <= 0.0 or self.duration <= 0.0:
            return 0, 0
        strength = self.intensity * (self.timer / self.duration)
        return (
            int(rng.uniform(-strength, strength)),
            int(rng.uniform(-strength, strength)),
        )


def spawn_burst(
    particles: list[Particle],
    cell: tuple[int, int],
    color_choices: Sequence[pygame.Color],
    rng: random.Random,
    count: int = 18,
) -> None:
    """Emit a burst of square pixels from the centre of a grid cell."""

    cx = cell[0] * CELL_SIZE + CELL_SIZE / 2
    cy = cell[1] * CELL_SIZE + CELL_SIZE / 2

    for _ in range(count):
        dir_x, dir_y = rng.choice(PARTICLE_DIRECTIONS)
        speed = rng.uniform(80, 210)
        particles.append(
            Particle(
                x=cx,
                y=cy,
                vx=dir_x * speed,
                vy=dir_y * speed,
                life=PARTICLE_LIFE,
                size=rng.uniform(3.0, 7.0),
                color=pygame.Color(rng.choice(color_choices)),
            )
        )


def update_particles(particles: list[Particle], dt: float) -> list[Particle]:
    for particle in particles:
        particle.x += particle.vx * dt
        particle.y += particle.vy * dt
        particle.life = max(0.0, particle.life - dt)
    return [p for p in particles if p.life > 0]


def draw_particles(surface: pygame.Surface, particles: Iterable[Particle]) -> None:
    for particle in particles:
        alpha = int(255 * (particle.life / PARTICLE_LIFE))
        if alpha <= 0:
            continue
        side = max(1, int(particle.size))
        color = pygame.Color(particle.color.r, particle.color.g, particle.color.b, alpha)
        surf = pygame.Surface((side, side), pygame.SRCALPHA)
        surf.fill(color)
        surface.blit(surf, (int(particle.x) - side // 2, int(particle.y) - side // 2))
