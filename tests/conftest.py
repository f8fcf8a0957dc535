from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import math
import random
import wave
from array import array

import pygame
import pytest

from glitch_snake.config import DIFFICULTY_CONFIG, Difficulty, Track
from glitch_snake.engine import GameState
from glitch_snake.grid import Direction
from glitch_snake.player import MusicPlayer
from glitch_snake.session import GameSession


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_state():
    def _make(
        snake,
        food=(0, 0),
        direction=Direction.RIGHT,
        score=0,
        difficulty=Difficulty.MEDIUM,
        tick_ms=None,
    ) -> GameState:
        config = DIFFICULTY_CONFIG[difficulty]
        return GameState(
            snake=tuple(snake),
            food=food,
            direction=direction,
            score=score,
            tick_ms=config.tick_ms if tick_ms is None else tick_ms,
            config=config,
        )

    return _make


@pytest.fixture
def session(rng) -> GameSession:
    return GameSession(Difficulty.MEDIUM, rng=rng)


@pytest.fixture
def pygame_ready():
    pygame.init()
    yield
    pygame.quit()


def write_tone(path, seconds: float, freq: float = 440.0, rate: int = 22050) -> None:
    """Write a mono 16-bit sine tone as a WAV file."""
    samples = array(
        "h",
        (
            int(8000 * math.sin(2 * math.pi * freq * idx / rate))
            for idx in range(int(seconds * rate))
        ),
    )
    with wave.open(str(path), "wb") as handle:
        handle.setnchannels(1)
        handle.setsampwidth(2)
        handle.setframerate(rate)
        handle.writeframes(samples.tobytes())


@pytest.fixture
def tone_tracks(tmp_path):
    tracks = []
    for idx, freq in enumerate((330.0, 440.0, 550.0), start=1):
        path = tmp_path / f"tone-{idx}.wav"
        write_tone(path, seconds=4.0, freq=freq)
        tracks.append(Track(idx, f"Tone {idx}", "Test Bench", str(path)))
    return tuple(tracks)


@pytest.fixture
def live_player(pygame_ready, tone_tracks):
    player = MusicPlayer(tracks=tone_tracks)
    if not player.enabled:
        pytest.skip("no audio mixer available")
    pygame.event.clear()
    yield player
    pygame.mixer.music.stop()
