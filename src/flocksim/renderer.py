from __future__ import annotations

from typing import Iterable

import pygame

from .agent import Boid
from .config import RenderConfig, SteeringConfig


class PygameRenderer:
    """Draws the flock onto a pygame surface. Read-only over the boids."""

    def __init__(self, surface: pygame.Surface, render: RenderConfig, steering: SteeringConfig):
        self._surface = surface
        self._render = render
        self._steering = steering

    def draw(self, boids: Iterable[Boid]) -> None:
        render = self._render
        surface = self._surface
        surface.fill(render.background_color)
        half = render.boid_size / 2.0
        for boid in boids:
            x = int(boid.position.x)
            y = int(boid.position.y)
            if render.draw_neighbor_radius:
                pygame.draw.circle(surface, render.neighbor_radius_color, (x, y), self._steering.neighbor_radius, 1)
            if render.draw_protected_radius:
                pygame.draw.circle(surface, render.protected_radius_color, (x, y), self._steering.protected_radius, 1)
            if render.draw_direction:
                tip = (
                    int(boid.position.x + boid.heading.x * render.direction_length),
                    int(boid.position.y + boid.heading.y * render.direction_length),
                )
                pygame.draw.line(surface, render.direction_color, (x, y), tip)
            if render.draw_pixels:
                if 0 <= x < surface.get_width() and 0 <= y < surface.get_height():
                    surface.set_at((x, y), render.boid_color)
            else:
                rect = pygame.Rect(
                    int(boid.position.x - half),
                    int(boid.position.y - half),
                    render.boid_size,
                    render.boid_size,
                )
                pygame.draw.rect(surface, render.boid_color, rect)
