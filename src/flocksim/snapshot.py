from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(slots=True)
class SnapshotMetadata:
    width: int
    height: int
    sim_dt: float
    tick_rate: float
    seed: int | None


@dataclass(slots=True)
class Snapshot:
    tick: int
    boids: List[Dict[str, Any]]
    metadata: SnapshotMetadata
