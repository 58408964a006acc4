from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .agent import Boid
from .config import SteeringConfig
from .spatial_grid import SpatialGrid


@dataclass(frozen=True)
class NeighborSet:
    """Per-tick neighbor data for one boid.

    `indices` holds every other boid within the neighbor radius, in ascending
    index order. `nearest_protected` is the closest other boid within the
    protected radius; on equal distances the lower index wins.
    """

    indices: Tuple[int, ...]
    nearest_protected: Optional[int]
    checks: int = 0


def find_neighbors(index: int, boids: Sequence[Boid], steering: SteeringConfig) -> NeighborSet:
    """Linear scan over the whole flock. O(population) per boid."""
    return _scan(index, boids, range(len(boids)), steering)


def find_neighbors_in_grid(
    index: int,
    boids: Sequence[Boid],
    grid: SpatialGrid,
    cell_offsets: List[Tuple[int, int]],
    steering: SteeringConfig,
) -> NeighborSet:
    """Same selection as `find_neighbors`, restricted to nearby grid cells."""
    return _scan(index, boids, grid.candidates(boids[index].position, cell_offsets), steering)


def _scan(
    index: int,
    boids: Sequence[Boid],
    candidates: Iterable[int],
    steering: SteeringConfig,
) -> NeighborSet:
    position = boids[index].position
    pos_x = position.x
    pos_y = position.y
    neighbor_radius_sq = steering.neighbor_radius_sq
    protected_radius_sq = steering.protected_radius_sq

    found: List[int] = []
    nearest: Optional[int] = None
    nearest_dist_sq = protected_radius_sq
    checks = 0
    for other_index in candidates:
        if other_index == index:
            continue
        checks += 1
        other = boids[other_index].position
        offset_x = other.x - pos_x
        offset_y = other.y - pos_y
        dist_sq = offset_x * offset_x + offset_y * offset_y
        if dist_sq > neighbor_radius_sq:
            continue
        found.append(other_index)
        if dist_sq <= protected_radius_sq and (nearest is None or dist_sq < nearest_dist_sq):
            nearest = other_index
            nearest_dist_sq = dist_sq
    return NeighborSet(indices=tuple(found), nearest_protected=nearest, checks=checks)
