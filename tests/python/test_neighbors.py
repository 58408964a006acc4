from __future__ import annotations

import random

from pygame.math import Vector2

from flocksim.agent import Boid
from flocksim.config import SteeringConfig
from flocksim.neighbors import find_neighbors, find_neighbors_in_grid
from flocksim.spatial_grid import SpatialGrid


def _boids(*points: tuple[float, float]) -> list[Boid]:
    return [Boid(position=Vector2(x, y), heading=Vector2(1.0, 0.0)) for x, y in points]


def test_self_is_excluded_by_index():
    boids = _boids((0.0, 0.0), (0.0, 0.0))
    result = find_neighbors(0, boids, SteeringConfig())
    assert result.indices == (1,)
    assert result.nearest_protected == 1


def test_neighbor_radius_is_inclusive():
    steering = SteeringConfig(neighbor_radius=25.0, protected_radius=5.0)
    boids = _boids((0.0, 0.0), (25.0, 0.0), (25.001, 0.0))
    result = find_neighbors(0, boids, steering)
    assert result.indices == (1,)
    assert result.nearest_protected is None


def test_nearest_protected_picks_closest_intruder():
    steering = SteeringConfig(neighbor_radius=25.0, protected_radius=5.0)
    boids = _boids((0.0, 0.0), (4.0, 0.0), (10.0, 0.0), (0.0, 2.0), (0.0, -3.0))
    result = find_neighbors(0, boids, steering)
    assert result.indices == (1, 2, 3, 4)
    assert result.nearest_protected == 3
    assert result.checks == 4


def test_nearest_protected_tie_keeps_first_found():
    steering = SteeringConfig(neighbor_radius=25.0, protected_radius=5.0)
    boids = _boids((0.0, 0.0), (3.0, 0.0), (-3.0, 0.0), (0.0, 3.0))
    assert find_neighbors(0, boids, steering).nearest_protected == 1


def test_lonely_boid_has_no_neighbors():
    boids = _boids((0.0, 0.0), (500.0, 500.0))
    result = find_neighbors(0, boids, SteeringConfig())
    assert result.indices == ()
    assert result.nearest_protected is None


def test_grid_query_matches_linear_scan():
    rng = random.Random(5)
    steering = SteeringConfig(neighbor_radius=25.0, protected_radius=5.0)
    boids = _boids(*[(rng.uniform(-50.0, 250.0), rng.uniform(-50.0, 250.0)) for _ in range(300)])
    # Force some exact ties and coincident boids.
    boids.append(Boid(position=Vector2(boids[0].position), heading=Vector2(0.0, 1.0)))
    boids.append(Boid(position=Vector2(boids[0].position), heading=Vector2(0.0, -1.0)))

    grid = SpatialGrid(steering.neighbor_radius)
    grid.rebuild([boid.position for boid in boids])
    offsets = grid.build_neighbor_cell_offsets(steering.neighbor_radius)

    for index in range(len(boids)):
        linear = find_neighbors(index, boids, steering)
        hashed = find_neighbors_in_grid(index, boids, grid, offsets, steering)
        assert hashed.indices == linear.indices
        assert hashed.nearest_protected == linear.nearest_protected
        assert hashed.checks <= linear.checks
