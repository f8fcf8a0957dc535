"""Fixed-step tick scheduler driven by the frame clock."""

from __future__ import annotations

from typing import Callable


class TickScheduler:
    """Fire ``on_tick`` once per interval while active.

    Time is fed in by the caller through :meth:`advance` (milliseconds since
    the previous frame), the same accumulator approach a fixed-step game loop
    uses. The interval is read from ``interval_ms`` before each tick is
    scheduled, so a change only affects ticks that have not started yet.
    """

    def __init__(
        self, on_tick: Callable[[], None], interval_ms: Callable[[], int]
    ) -> None:
        self._on_tick = on_tick
        self._interval_ms = interval_ms
        self._accumulator: float = 0.0
        self._active: bool = False
        self._ticking: bool = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        """Begin ticking; the first tick fires one full interval from now."""
        self._active = True
        self._accumulator = 0.0

    def restart(self) -> None:
        self.cancel()
        self.start()

    def cancel(self) -> None:
        """Stop ticking and forget any time already accumulated."""
        self._active = False
        self._accumulator = 0.0

    def advance(self, elapsed_ms: float) -> int:
        """Account for ``elapsed_ms`` of wall time; return how many ticks fired."""
        if self._ticking:
            raise RuntimeError("advance() called from inside a tick")
        if not self._active or elapsed_ms <= 0:
            return 0

        self._accumulator += elapsed_ms
        fired = 0
        while self._active:
            interval = max(1, int(self._interval_ms()))
            if self._accumulator < interval:
                break
            self._accumulator -= interval
            self._ticking = True
            try:
                self._on_tick()
            finally:
                self._ticking = False
            fired += 1
        return fired
