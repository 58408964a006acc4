from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from pygame.math import Vector2

from .agent import Boid


@dataclass(slots=True)
class TickMetrics:
    tick: int
    population: int
    neighbor_checks: int
    polarization: float
    spread: float
    goal_distance: float
    tick_duration_ms: float = 0.0


def create_metrics(
    tick: int,
    boids: Sequence[Boid],
    goal: Vector2,
    neighbor_checks: int,
    duration_ms: float,
) -> TickMetrics:
    population = len(boids)
    if population == 0:
        return TickMetrics(
            tick=tick,
            population=0,
            neighbor_checks=neighbor_checks,
            polarization=0.0,
            spread=0.0,
            goal_distance=0.0,
            tick_duration_ms=duration_ms,
        )

    sum_px = sum_py = sum_hx = sum_hy = 0.0
    for boid in boids:
        sum_px += boid.position.x
        sum_py += boid.position.y
        sum_hx += boid.heading.x
        sum_hy += boid.heading.y
    centroid_x = sum_px / population
    centroid_y = sum_py / population

    sq_sum = 0.0
    for boid in boids:
        dx = boid.position.x - centroid_x
        dy = boid.position.y - centroid_y
        sq_sum += dx * dx + dy * dy

    return TickMetrics(
        tick=tick,
        population=population,
        neighbor_checks=neighbor_checks,
        polarization=math.hypot(sum_hx, sum_hy) / population,
        spread=math.sqrt(sq_sum / population),
        goal_distance=math.hypot(goal.x - centroid_x, goal.y - centroid_y),
        tick_duration_ms=duration_ms,
    )
