from __future__ import annotations

import math

from pygame.math import Vector2

NORMALIZE_EPSILON_SQ = 1e-10


def safe_normalize(vector: Vector2) -> Vector2:
    return safe_normalize_xy(vector.x, vector.y)


def safe_normalize_xy(x: float, y: float) -> Vector2:
    """Unit vector along (x, y), or the zero vector when (x, y) is degenerate."""
    magnitude_sq = x * x + y * y
    if magnitude_sq < NORMALIZE_EPSILON_SQ:
        return Vector2()
    inv = 1.0 / math.sqrt(magnitude_sq)
    return Vector2(x * inv, y * inv)


def unit_from_angle(angle: float) -> Vector2:
    return Vector2(math.cos(angle), math.sin(angle))


def is_finite(vector: Vector2) -> bool:
    return math.isfinite(vector.x) and math.isfinite(vector.y)
