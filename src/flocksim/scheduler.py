from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

# Absorbs rounding when frame times sum to a whole number of ticks.
_ACCUMULATOR_TOLERANCE = 1e-9


class FixedTimestep:
    """Runs `step_fn` at a fixed rate regardless of how time arrives.

    Each `advance` adds a frame's elapsed seconds to the accumulator and then
    runs as many whole ticks as it holds. The remainder carries over to the
    next frame; no interpolation is done for rendering.
    """

    def __init__(self, time_step: float, step_fn: Callable[[], object]):
        if time_step <= 0.0:
            raise ValueError(f"time_step must be > 0, got {time_step}")
        self._time_step = time_step
        self._step_fn = step_fn
        self._accumulator = 0.0
        self._ticks = 0

    @property
    def time_step(self) -> float:
        return self._time_step

    @property
    def accumulator(self) -> float:
        return self._accumulator

    @property
    def ticks(self) -> int:
        return self._ticks

    def advance(self, frame_seconds: float) -> int:
        if frame_seconds < 0.0:
            raise ValueError(f"frame time must be >= 0, got {frame_seconds}")
        self._accumulator += frame_seconds
        ran = 0
        while self._accumulator + _ACCUMULATOR_TOLERANCE >= self._time_step:
            self._step_fn()
            self._accumulator -= self._time_step
            ran += 1
        if self._accumulator < 0.0:
            self._accumulator = 0.0
        self._ticks += ran
        if ran > 1:
            logger.debug("frame of %.4fs ran %d ticks", frame_seconds, ran)
        return ran

    def reset(self) -> None:
        self._accumulator = 0.0
        self._ticks = 0
