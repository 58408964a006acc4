from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from pygame.math import Vector2

from .errors import ConfigError


@dataclass(frozen=True)
class SteeringConfig:
    neighbor_radius: float = 25.0
    protected_radius: float = 5.0
    separation_weight: float = 10.0
    alignment_weight: float = 1.5
    cohesion_weight: float = 3.9
    goal_weight: float = 1.9
    goal: tuple[float, float] = (320.0, 240.0)
    speed: float = 170.0

    @property
    def goal_vector(self) -> Vector2:
        return Vector2(self.goal[0], self.goal[1])

    @property
    def neighbor_radius_sq(self) -> float:
        return self.neighbor_radius * self.neighbor_radius

    @property
    def protected_radius_sq(self) -> float:
        return self.protected_radius * self.protected_radius


@dataclass(frozen=True)
class RenderConfig:
    boid_size: int = 2
    background_color: tuple[int, int, int] = (255, 255, 255)
    boid_color: tuple[int, int, int] = (0, 0, 0)
    neighbor_radius_color: tuple[int, int, int] = (0, 228, 48)
    protected_radius_color: tuple[int, int, int] = (230, 41, 55)
    direction_color: tuple[int, int, int] = (0, 121, 241)
    direction_length: float = 5.0
    draw_pixels: bool = False
    draw_neighbor_radius: bool = False
    draw_protected_radius: bool = False
    draw_direction: bool = False
    target_fps: int = 60
    title: str = "flocksim"


@dataclass(frozen=True)
class SimulationConfig:
    population: int = 250
    width: int = 640
    height: int = 480
    time_step: float = 1.0 / 60.0
    seed: Optional[int] = None
    workers: Optional[int] = None
    use_spatial_grid: bool = False
    steering: SteeringConfig = field(default_factory=SteeringConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    @property
    def worker_count(self) -> int:
        if self.workers is not None:
            return self.workers
        return os.cpu_count() or 1

    def validate(self) -> "SimulationConfig":
        steering = self.steering
        if self.population < 0:
            raise ConfigError(f"population must be >= 0, got {self.population}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"simulation bounds must be positive, got {self.width}x{self.height}")
        if self.time_step <= 0.0:
            raise ConfigError(f"time_step must be > 0, got {self.time_step}")
        if self.workers is not None and self.workers < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")
        if steering.neighbor_radius < 0.0 or steering.protected_radius < 0.0:
            raise ConfigError("radii must be >= 0")
        if steering.protected_radius > steering.neighbor_radius:
            raise ConfigError(
                f"protected_radius ({steering.protected_radius}) must not exceed "
                f"neighbor_radius ({steering.neighbor_radius})"
            )
        if steering.speed < 0.0:
            raise ConfigError(f"speed must be >= 0, got {steering.speed}")
        if self.render.boid_size < 1:
            raise ConfigError(f"boid_size must be >= 1, got {self.render.boid_size}")
        return self

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return load_config(data)


def load_config(raw: dict) -> SimulationConfig:
    def _color(value: list[int] | tuple[int, ...] | None, default: tuple[int, int, int]) -> tuple[int, int, int]:
        if isinstance(value, (tuple, list)) and len(value) == 3:
            return (int(value[0]), int(value[1]), int(value[2]))
        return default

    if not isinstance(raw, dict):
        raise ConfigError(f"configuration must be a mapping, got {type(raw).__name__}")

    steering_raw = _section(raw, "steering")
    if "goal" in steering_raw:
        goal = steering_raw["goal"]
        if not isinstance(goal, (tuple, list)) or len(goal) != 2:
            raise ConfigError(f"steering.goal must be a pair of numbers, got {goal!r}")
        steering_raw["goal"] = (float(goal[0]), float(goal[1]))

    render_raw = _section(raw, "render")
    default_render = RenderConfig()
    for key in ("background_color", "boid_color", "neighbor_radius_color", "protected_radius_color", "direction_color"):
        if key in render_raw:
            render_raw[key] = _color(render_raw[key], getattr(default_render, key))

    try:
        steering = SteeringConfig(**steering_raw)
        render = RenderConfig(**render_raw)
        sim_values = {k: v for k, v in raw.items() if k not in {"steering", "render"}}
        config = SimulationConfig(steering=steering, render=render, **sim_values)
    except TypeError as exc:
        raise ConfigError(f"unknown configuration key: {exc}") from exc
    return config.validate()


def _section(raw: dict, name: str) -> dict:
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping, got {type(value).__name__}")
    return dict(value)
