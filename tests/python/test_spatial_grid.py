from __future__ import annotations

import pytest
from pygame.math import Vector2

from flocksim.spatial_grid import SpatialGrid


def test_candidates_cover_bruteforce_and_are_sorted():
    grid = SpatialGrid(cell_size=2.5)
    positions = [
        Vector2(6, 6),
        Vector2(1, 1),
        Vector2(0, 0),
        Vector2(3, 0.5),
    ]
    grid.rebuild(positions)

    center = Vector2(1, 1)
    radius = 3.0
    found = grid.candidates(center, grid.build_neighbor_cell_offsets(radius))
    brute = [idx for idx, pos in enumerate(positions) if (pos - center).length_squared() <= radius * radius]
    assert found == sorted(found)
    assert set(brute) <= set(found)


def test_rebuild_clears_previous_positions():
    grid = SpatialGrid(cell_size=2.0)
    offsets = grid.build_neighbor_cell_offsets(1.6)
    grid.rebuild([Vector2(0.0, 0.0)])
    assert grid.candidates(Vector2(0.5, 0.0), offsets) == [0]

    grid.rebuild([Vector2(50.0, 50.0)])
    assert grid.candidates(Vector2(0.5, 0.0), offsets) == []
    assert grid.candidates(Vector2(50.0, 50.0), offsets) == [0]


def test_negative_coordinates_hash_to_distinct_cells():
    grid = SpatialGrid(cell_size=1.0)
    grid.rebuild([Vector2(-0.5, -0.5), Vector2(0.5, 0.5)])
    assert grid.candidates(Vector2(-0.5, -0.5), [(0, 0)]) == [0]
    assert grid.candidates(Vector2(0.5, 0.5), [(0, 0)]) == [1]


def test_cell_size_must_be_positive():
    with pytest.raises(ValueError):
        SpatialGrid(cell_size=0.0)
