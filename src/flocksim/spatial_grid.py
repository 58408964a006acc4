from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

from pygame.math import Vector2


class SpatialGrid:
    """Uniform hash grid over boid indices.

    Buckets keep indices in insertion order; `rebuild` inserts in ascending
    index order so candidate lists can be merged back into index order cheaply.
    """

    def __init__(self, cell_size: float) -> None:
        if cell_size <= 0.0:
            raise ValueError(f"cell_size must be > 0, got {cell_size}")
        self._cell_size = cell_size
        self._cells: Dict[Tuple[int, int], List[int]] = {}
        self._active_keys: List[Tuple[int, int]] = []

    def build_neighbor_cell_offsets(self, radius: float) -> List[Tuple[int, int]]:
        cell_range = int(math.ceil(radius / self._cell_size))
        return [(dx, dy) for dx in range(-cell_range, cell_range + 1) for dy in range(-cell_range, cell_range + 1)]

    def clear(self) -> None:
        for key in self._active_keys:
            bucket = self._cells.get(key)
            if bucket:
                bucket.clear()
        self._active_keys.clear()

    def insert(self, index: int, position: Vector2) -> None:
        key = self._cell_key(position)
        bucket = self._cells.get(key)
        if bucket is None:
            bucket = []
            self._cells[key] = bucket
            self._active_keys.append(key)
        elif not bucket:
            # Bucket exists but was cleared by the last rebuild; mark it active again.
            self._active_keys.append(key)
        bucket.append(index)

    def rebuild(self, positions: Sequence[Vector2]) -> None:
        self.clear()
        for index, position in enumerate(positions):
            self.insert(index, position)

    def candidates(self, position: Vector2, cell_offsets: List[Tuple[int, int]]) -> List[int]:
        """Indices in the cells around `position`, sorted ascending.

        This is a superset of the indices within the radius the offsets were
        built for; callers still apply the exact distance test.
        """
        base_x, base_y = self._cell_key(position)
        cells = self._cells
        found: List[int] = []
        for dx, dy in cell_offsets:
            bucket = cells.get((base_x + dx, base_y + dy))
            if bucket:
                found.extend(bucket)
        found.sort()
        return found

    def _cell_key(self, position: Vector2) -> Tuple[int, int]:
        return (int(position.x // self._cell_size), int(position.y // self._cell_size))
