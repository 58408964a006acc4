from __future__ import annotations

from dataclasses import dataclass

from pygame.math import Vector2


@dataclass(slots=True)
class Boid:
    position: Vector2
    heading: Vector2

    def copy(self) -> "Boid":
        return Boid(position=Vector2(self.position), heading=Vector2(self.heading))
