from __future__ import annotations

import argparse
import csv
import json
import logging
import math
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .app import add_common_arguments, build_config
from .config import SimulationConfig
from .metrics import TickMetrics
from .pipeline import FlockUpdater

logger = logging.getLogger(__name__)

_HEADER = [
    "tick",
    "population",
    "neighbor_checks",
    "neighbor_checks_per_boid",
    "polarization",
    "spread",
    "goal_distance",
    "tick_ms",
]


def _format_row(metrics: TickMetrics, tick_ms: float) -> list[object]:
    population = metrics.population
    checks_per_boid = 0.0 if population <= 0 else metrics.neighbor_checks / population
    return [
        metrics.tick,
        population,
        metrics.neighbor_checks,
        f"{checks_per_boid:.4f}",
        f"{metrics.polarization:.6f}",
        f"{metrics.spread:.4f}",
        f"{metrics.goal_distance:.4f}",
        f"{tick_ms:.3f}",
    ]


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    pos = (len(sorted_values) - 1) * percentile
    low = int(math.floor(pos))
    high = int(math.ceil(pos))
    if low == high:
        return float(sorted_values[low])
    weight = pos - low
    return float(sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight)


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p90": 0.0, "p99": 0.0}
    sorted_values = sorted(values)
    return {
        "min": float(sorted_values[0]),
        "max": float(sorted_values[-1]),
        "avg": float(sum(values) / len(values)),
        "p50": _percentile(sorted_values, 0.50),
        "p90": _percentile(sorted_values, 0.90),
        "p99": _percentile(sorted_values, 0.99),
    }


def run_headless(
    steps: int,
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    summary_path: Optional[Path] = None,
    config: Optional[SimulationConfig] = None,
) -> Optional[TickMetrics]:
    """Step the simulation without a window. Returns the last tick's metrics."""
    config = config if config is not None else SimulationConfig()
    if seed is not None:
        config = replace(config, seed=seed)

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    tick_ms_series: list[float] = []
    polarization_series: list[float] = []
    spread_series: list[float] = []
    metrics: Optional[TickMetrics] = None
    try:
        with FlockUpdater(config) as updater:
            for _ in range(steps):
                metrics = updater.step()
                tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
                tick_ms_series.append(tick_ms)
                polarization_series.append(metrics.polarization)
                spread_series.append(metrics.spread)
                if writer:
                    writer.writerow(_format_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    logger.info("headless run finished: %d ticks, population=%d", steps, config.population)

    if summary_path:
        summary = {
            "steps": steps,
            "seed": config.seed,
            "population": config.population,
            "time_step": config.time_step,
            "deterministic_log": deterministic_log,
            "tick_ms": _summary_stats(tick_ms_series),
            "polarization": _summary_stats(polarization_series),
            "spread": _summary_stats(spread_series),
            "final": {
                "polarization": metrics.polarization if metrics else 0.0,
                "spread": metrics.spread if metrics else 0.0,
                "goal_distance": metrics.goal_distance if metrics else 0.0,
            },
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))
    return metrics


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless flocking simulation")
    add_common_arguments(parser)
    parser.add_argument("--steps", type=int, default=3000)
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write metrics")
    parser.add_argument("--summary", type=Path, default=None, help="Optional JSON file to write summary stats")
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_headless(
        args.steps,
        None,
        args.log,
        deterministic_log=args.deterministic_log,
        summary_path=args.summary,
        config=build_config(args),
    )


if __name__ == "__main__":
    main()
