"""Playlist widget backed by pygame's streaming music mixer."""

from __future__ import annotations

import logging
import random
from typing import Sequence

import pygame

from .config import DEFAULT_VOLUME, TRACKS, VISUALIZER_BARS, VOLUME_STEPS, Track

logger = logging.getLogger(__name__)

MUSIC_END_EVENT = pygame.USEREVENT + 1


class MusicPlayer:
    """Plays a fixed track list; navigation works even with audio disabled.

    Mixer failures never escape this class: a mixer that will not start
    disables the player, and a track that fails to load or play just leaves
    the player stopped.
    """

    def __init__(
        self,
        tracks: Sequence[Track] = TRACKS,
        *,
        enabled: bool = True,
        volume: float = DEFAULT_VOLUME,
    ) -> None:
        if not tracks:
            raise ValueError("MusicPlayer needs at least one track")
        self.tracks: tuple[Track, ...] = tuple(tracks)
        self.index: int = 0
        self.is_playing: bool = False
        self.volume: float = max(0.0, min(1.0, volume))
        self.enabled = False
        self._loaded: int | None = None
        self._start_offset: float = 0.0
        self._lengths: dict[int, float] = {}

        if enabled:
            self._init_audio()

    def _init_audio(self) -> None:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            pygame.mixer.music.set_endevent(MUSIC_END_EVENT)
            pygame.mixer.music.set_volume(self.volume)
        except pygame.error as exc:
            logger.warning("Audio disabled, mixer failed to start: %s", exc)
            self.enabled = False
            return
        self.enabled = True

    @property
    def current_track(self) -> Track:
        return self.tracks[self.index]

    # --- Transport -----------------------------------------------------

    def play(self) -> None:
        """Start or continue the current track."""
        if not self.enabled:
            self.is_playing = False
            return
        track = self.current_track
        try:
            if self._loaded == self.index:
                pygame.mixer.music.unpause()
            else:
                pygame.mixer.music.load(str(track.path))
                pygame.mixer.music.play()
                self._loaded = self.index
                self._start_offset = 0.0
                self._measure_length()
            pygame.mixer.music.set_volume(self.volume)
        except (pygame.error, OSError) as exc:
            logger.warning("Could not play %r: %s", track.title, exc)
            self._loaded = None
            self.is_playing = False
            return
        self.is_playing = True
        logger.info("Now playing %s by %s", track.title, track.artist)

    def pause(self) -> None:
        if not self.is_playing:
            return
        self.is_playing = False
        if not self.enabled:
            return
        try:
            pygame.mixer.music.pause()
        except pygame.error as exc:
            logger.warning("Could not pause playback: %s", exc)

    def toggle(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def select(self, index: int) -> None:
        """Jump to a track; keeps playing if music was already playing."""
        was_playing = self.is_playing
        self._stop()
        self.index = index % len(self.tracks)
        if was_playing:
            self.play()

    def next(self) -> None:
        self.select(self.index + 1)

    def previous(self) -> None:
        self.select(self.index - 1)

    def _stop(self) -> None:
        self.is_playing = False
        self._loaded = None
        self._start_offset = 0.0
        if not self.enabled:
            return
        try:
            pygame.mixer.music.stop()
            # Stopping a playing track posts an end event of its own.
            pygame.event.clear(MUSIC_END_EVENT)
        except pygame.error as exc:
            logger.warning("Could not stop playback: %s", exc)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Advance to the next track when the mixer reports the end of one."""
        if event.type != MUSIC_END_EVENT:
            return False
        if self._loaded is None:
            return True
        self.is_playing = True
        self.next()
        return True

    # --- Volume --------------------------------------------------------

    def set_volume(self, volume: float) -> None:
        self.volume = max(0.0, min(1.0, volume))
        if not self.enabled:
            return
        try:
            pygame.mixer.music.set_volume(self.volume)
        except pygame.error as exc:
            logger.warning("Could not change volume: %s", exc)

    def volume_up(self) -> None:
        louder = [step for step in VOLUME_STEPS if step > self.volume + 1e-6]
        self.set_volume(louder[0] if louder else VOLUME_STEPS[-1])

    def volume_down(self) -> None:
        quieter = [step for step in VOLUME_STEPS if step < self.volume - 1e-6]
        self.set_volume(quieter[-1] if quieter else VOLUME_STEPS[0])

    # --- Progress ------------------------------------------------------

    def _measure_length(self) -> None:
        """Decode the loaded track once to learn its duration."""
        if self.index in self._lengths:
            return
        try:
            sound = pygame.mixer.Sound(str(self.current_track.path))
            self._lengths[self.index] = sound.get_length()
        except (pygame.error, OSError) as exc:
            logger.debug("Unknown length for %r: %s", self.current_track.title, exc)
            self._lengths[self.index] = 0.0

    def _track_length(self) -> float:
        return self._lengths.get(self.index, 0.0)

    def progress(self) -> float:
        """Percent of the current track played so far (0 to 100)."""
        if not self.enabled or self._loaded is None:
            return 0.0
        length = self._track_length()
        if length <= 0.0:
            return 0.0
        played_ms = pygame.mixer.music.get_pos()
        if played_ms < 0:
            return 0.0
        position = self._start_offset + played_ms / 1000.0
        return max(0.0, min(100.0, position / length * 100.0))

    def seek(self, percent: float) -> None:
        """Move the current track to ``percent`` of its length."""
        if not self.enabled or self._loaded is None:
            return
        length = self._track_length()
        if length <= 0.0:
            return
        start = length * max(0.0, min(100.0, percent)) / 100.0
        try:
            pygame.mixer.music.play(start=start)
            if not self.is_playing:
                pygame.mixer.music.pause()
        except pygame.error as exc:
            logger.warning("Could not seek %r: %s", self.current_track.title, exc)
            return
        self._start_offset = start

    def visualizer_levels(
        self, rng: random.Random, count: int = VISUALIZER_BARS
    ) -> list[float]:
        """Bar heights (0..1) for the decorative spectrum display."""
        if not self.is_playing:
            return [0.05] * count
        return [rng.random() for _ in range(count)]
