from __future__ import annotations

from .agent import Boid
from .config import RenderConfig, SimulationConfig, SteeringConfig, load_config
from .errors import ConfigError, FlockError, SimulationError
from .flock import Flock
from .neighbors import NeighborSet, find_neighbors, find_neighbors_in_grid
from .pipeline import FlockUpdater
from .scheduler import FixedTimestep
from .steering import compute_steering, explain_steering

__all__ = [
    "Boid",
    "ConfigError",
    "FixedTimestep",
    "Flock",
    "FlockError",
    "FlockUpdater",
    "NeighborSet",
    "RenderConfig",
    "SimulationConfig",
    "SimulationError",
    "SteeringConfig",
    "compute_steering",
    "explain_steering",
    "find_neighbors",
    "find_neighbors_in_grid",
    "load_config",
]
