from __future__ import annotations

import math
import random
from typing import Optional

from pygame.math import Vector2

from .vector import unit_from_angle


class DeterministicRng:
    """Uniform float source for initial conditions; unseeded when seed is None."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def next_range(self, low: float, high: float) -> float:
        return self._random.uniform(low, high)

    def next_angle(self) -> float:
        return self._random.uniform(0.0, 2.0 * math.pi)

    def next_unit_circle(self) -> Vector2:
        return unit_from_angle(self.next_angle())
