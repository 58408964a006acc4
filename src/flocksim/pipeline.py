from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from time import perf_counter
from typing import List, Optional, Sequence, Tuple

from pygame.math import Vector2

from .agent import Boid
from .config import SimulationConfig
from .flock import Flock
from .metrics import TickMetrics, create_metrics
from .neighbors import find_neighbors, find_neighbors_in_grid
from .rng import DeterministicRng
from .spatial_grid import SpatialGrid
from .steering import compute_steering

logger = logging.getLogger(__name__)


class FlockUpdater:
    """Runs simulation ticks over a flock it owns.

    A tick is a read-only compute phase (neighbor scan and steering for every
    boid, fanned out over a thread pool) followed by a sequential apply phase.
    Workers never touch the flock's mutable state; they only return deltas.
    """

    def __init__(self, config: SimulationConfig, flock: Optional[Flock] = None):
        self._config = config.validate()
        self._rng = DeterministicRng(config.seed)
        self._flock = flock if flock is not None else Flock.spawn(config, self._rng)
        self._workers = config.worker_count
        self._executor: ThreadPoolExecutor | None = None
        if self._workers > 1:
            self._executor = ThreadPoolExecutor(max_workers=self._workers, thread_name_prefix="flocksim")
        self._grid: SpatialGrid | None = None
        self._cell_offsets: List[Tuple[int, int]] = []
        if config.use_spatial_grid:
            radius = config.steering.neighbor_radius
            self._grid = SpatialGrid(max(radius, 1.0))
            self._cell_offsets = self._grid.build_neighbor_cell_offsets(radius)
        self._tick = 0
        self._neighbor_checks = 0
        self._metrics: TickMetrics | None = None
        logger.info(
            "flock updater ready: population=%d workers=%d spatial_grid=%s",
            len(self._flock),
            self._workers,
            config.use_spatial_grid,
        )

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def flock(self) -> Flock:
        return self._flock

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    def compute_deltas(self) -> List[Vector2]:
        """Compute phase: one steering delta per boid, in index order."""
        boids = self._flock.boids
        count = len(boids)
        if count == 0:
            self._neighbor_checks = 0
            return []
        if self._grid is not None:
            self._grid.rebuild([boid.position for boid in boids])

        if self._executor is None:
            results = [self._compute_chunk(boids, 0, count)]
        else:
            chunk_size = max(1, -(-count // self._workers))
            bounds = [(start, min(start + chunk_size, count)) for start in range(0, count, chunk_size)]
            results = list(
                self._executor.map(lambda span: self._compute_chunk(boids, span[0], span[1]), bounds)
            )

        deltas: List[Vector2] = []
        checks = 0
        for chunk_deltas, chunk_checks in results:
            deltas.extend(chunk_deltas)
            checks += chunk_checks
        self._neighbor_checks = checks
        return deltas

    def apply_deltas(self, deltas: Sequence[Vector2]) -> None:
        """Apply phase: sole writer of the flock."""
        steering = self._config.steering
        self._flock.apply(deltas, steering.speed, self._config.time_step)

    def step(self) -> TickMetrics:
        start = perf_counter()
        deltas = self.compute_deltas()
        self.apply_deltas(deltas)
        elapsed_ms = (perf_counter() - start) * 1000.0
        metrics = create_metrics(
            self._tick,
            self._flock.boids,
            self._config.steering.goal_vector,
            self._neighbor_checks,
            elapsed_ms,
        )
        self._metrics = metrics
        self._tick += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "tick %d: checks=%d polarization=%.3f spread=%.2f %.2fms",
                metrics.tick,
                metrics.neighbor_checks,
                metrics.polarization,
                metrics.spread,
                elapsed_ms,
            )
        return metrics

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            logger.info("flock updater stopped after %d ticks", self._tick)

    def __enter__(self) -> "FlockUpdater":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _compute_chunk(self, boids: Sequence[Boid], start: int, stop: int) -> Tuple[List[Vector2], int]:
        steering = self._config.steering
        dt = self._config.time_step
        grid = self._grid
        cell_offsets = self._cell_offsets
        deltas: List[Vector2] = []
        checks = 0
        for index in range(start, stop):
            if grid is None:
                neighbors = find_neighbors(index, boids, steering)
            else:
                neighbors = find_neighbors_in_grid(index, boids, grid, cell_offsets, steering)
            checks += neighbors.checks
            deltas.append(compute_steering(index, boids, neighbors, steering, dt))
        return deltas, checks
