from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Sequence

from pygame.math import Vector2

from .agent import Boid
from .config import SimulationConfig
from .errors import SimulationError
from .rng import DeterministicRng
from .snapshot import Snapshot, SnapshotMetadata
from .vector import is_finite, safe_normalize_xy

logger = logging.getLogger(__name__)


class Flock:
    """Ordered, fixed-size boid collection; a boid's identity is its index."""

    def __init__(self, boids: Iterable[Boid] = ()):
        self._boids: List[Boid] = list(boids)

    @classmethod
    def spawn(cls, config: SimulationConfig, rng: DeterministicRng) -> "Flock":
        boids = []
        for _ in range(config.population):
            position = Vector2(
                rng.next_range(0.0, float(config.width)),
                rng.next_range(0.0, float(config.height)),
            )
            boids.append(Boid(position=position, heading=rng.next_unit_circle()))
        logger.debug("spawned %d boids in %dx%d", len(boids), config.width, config.height)
        return cls(boids)

    @classmethod
    def from_boids(cls, boids: Iterable[Boid]) -> "Flock":
        return cls(boid.copy() for boid in boids)

    @property
    def boids(self) -> Sequence[Boid]:
        return self._boids

    def __len__(self) -> int:
        return len(self._boids)

    def __iter__(self) -> Iterator[Boid]:
        return iter(self._boids)

    def __getitem__(self, index: int) -> Boid:
        return self._boids[index]

    def positions(self) -> List[Vector2]:
        return [Vector2(boid.position) for boid in self._boids]

    def headings(self) -> List[Vector2]:
        return [Vector2(boid.heading) for boid in self._boids]

    def apply(self, deltas: Sequence[Vector2], speed: float, dt: float) -> None:
        """Turn each boid by its delta, then move it along the new heading.

        A degenerate heading + delta sum keeps the previous heading.
        """
        if len(deltas) != len(self._boids):
            raise SimulationError(f"expected {len(self._boids)} deltas, got {len(deltas)}")
        step = speed * dt
        for index, (boid, delta) in enumerate(zip(self._boids, deltas)):
            heading = boid.heading
            turned = safe_normalize_xy(heading.x + delta.x, heading.y + delta.y)
            if turned.x != 0.0 or turned.y != 0.0:
                heading.update(turned.x, turned.y)
            boid.position.update(
                boid.position.x + heading.x * step,
                boid.position.y + heading.y * step,
            )
            if not (is_finite(boid.position) and is_finite(heading)):
                raise SimulationError(
                    f"boid {index} left the finite domain: position={tuple(boid.position)} "
                    f"heading={tuple(heading)} delta={tuple(delta)}"
                )

    def snapshot(self, tick: int, config: SimulationConfig) -> Snapshot:
        boids = [
            {
                "index": index,
                "x": boid.position.x,
                "y": boid.position.y,
                "hx": boid.heading.x,
                "hy": boid.heading.y,
            }
            for index, boid in enumerate(self._boids)
        ]
        metadata = SnapshotMetadata(
            width=config.width,
            height=config.height,
            sim_dt=config.time_step,
            tick_rate=1.0 / config.time_step,
            seed=config.seed,
        )
        return Snapshot(tick=tick, boids=boids, metadata=metadata)
