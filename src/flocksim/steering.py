from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from pygame.math import Vector2

from .agent import Boid
from .config import SteeringConfig
from .neighbors import NeighborSet
from .vector import safe_normalize_xy


@dataclass(frozen=True)
class SteeringBreakdown:
    cohesion: Vector2
    separation: Vector2
    alignment: Vector2
    goal: Vector2

    @property
    def total(self) -> Vector2:
        return Vector2(
            self.cohesion.x + self.separation.x + self.alignment.x + self.goal.x,
            self.cohesion.y + self.separation.y + self.alignment.y + self.goal.y,
        )


def cohesion(index: int, boids: Sequence[Boid], neighbors: NeighborSet, weight: float) -> Vector2:
    """Steer toward the centroid of the boid and its neighbors."""
    if not neighbors.indices or weight == 0.0:
        return Vector2()
    position = boids[index].position
    sum_x = position.x
    sum_y = position.y
    for other_index in neighbors.indices:
        other = boids[other_index].position
        sum_x += other.x
        sum_y += other.y
    count = len(neighbors.indices) + 1
    direction = safe_normalize_xy(sum_x / count - position.x, sum_y / count - position.y)
    return direction * weight


def separation(index: int, boids: Sequence[Boid], neighbors: NeighborSet, weight: float) -> Vector2:
    # Only the single nearest intruder is considered.
    if neighbors.nearest_protected is None or weight == 0.0:
        return Vector2()
    position = boids[index].position
    nearest = boids[neighbors.nearest_protected].position
    direction = safe_normalize_xy(position.x - nearest.x, position.y - nearest.y)
    return direction * weight


def alignment(index: int, boids: Sequence[Boid], neighbors: NeighborSet, weight: float) -> Vector2:
    """Steer toward the mean heading of the boid and its neighbors."""
    if not neighbors.indices or weight == 0.0:
        return Vector2()
    heading = boids[index].heading
    sum_x = heading.x
    sum_y = heading.y
    for other_index in neighbors.indices:
        other = boids[other_index].heading
        sum_x += other.x
        sum_y += other.y
    count = len(neighbors.indices) + 1
    return safe_normalize_xy(sum_x / count, sum_y / count) * weight


def goal_seeking(position: Vector2, goal: Vector2, weight: float) -> Vector2:
    if weight == 0.0:
        return Vector2()
    return safe_normalize_xy(goal.x - position.x, goal.y - position.y) * weight


def explain_steering(
    index: int,
    boids: Sequence[Boid],
    neighbors: NeighborSet,
    steering: SteeringConfig,
    dt: float,
) -> SteeringBreakdown:
    """Per-rule contributions for one boid.

    Weights are turn rates per second, so each contribution is scaled by `dt`.
    """
    return SteeringBreakdown(
        cohesion=cohesion(index, boids, neighbors, steering.cohesion_weight * dt),
        separation=separation(index, boids, neighbors, steering.separation_weight * dt),
        alignment=alignment(index, boids, neighbors, steering.alignment_weight * dt),
        goal=goal_seeking(boids[index].position, steering.goal_vector, steering.goal_weight * dt),
    )


def compute_steering(
    index: int,
    boids: Sequence[Boid],
    neighbors: NeighborSet,
    steering: SteeringConfig,
    dt: float,
) -> Vector2:
    return explain_steering(index, boids, neighbors, steering, dt).total
