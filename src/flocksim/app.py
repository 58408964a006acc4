from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import pygame

from .config import SimulationConfig
from .pipeline import FlockUpdater
from .renderer import PygameRenderer
from .scheduler import FixedTimestep

logger = logging.getLogger(__name__)


def run_window(config: SimulationConfig, max_frames: Optional[int] = None) -> int:
    """Open a window and run until it is closed. Returns the number of ticks run."""
    config.validate()
    pygame.init()
    try:
        surface = pygame.display.set_mode((config.width, config.height))
        pygame.display.set_caption(config.render.title)
        clock = pygame.time.Clock()
        renderer = PygameRenderer(surface, config.render, config.steering)
        with FlockUpdater(config) as updater:
            scheduler = FixedTimestep(config.time_step, updater.step)
            running = True
            frames = 0
            clock.tick()
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        running = False
                scheduler.advance(clock.tick(config.render.target_fps) / 1000.0)
                renderer.draw(updater.flock)
                pygame.display.flip()
                frames += 1
                if max_frames is not None and frames >= max_frames:
                    running = False
            logger.info("window closed after %d frames, %d ticks", frames, scheduler.ticks)
            return scheduler.ticks
    finally:
        pygame.quit()


def build_config(args: argparse.Namespace) -> SimulationConfig:
    config = SimulationConfig.from_yaml(args.config) if args.config else SimulationConfig()
    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.population is not None:
        overrides["population"] = args.population
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.spatial_grid:
        overrides["use_spatial_grid"] = True
    render_overrides = {
        name: True
        for name in ("draw_neighbor_radius", "draw_protected_radius", "draw_direction", "draw_pixels")
        if getattr(args, name, False)
    }
    if render_overrides:
        overrides["render"] = replace(config.render, **render_overrides)
    return replace(config, **overrides).validate()


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--population", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None, help="compute-phase thread count")
    parser.add_argument("--spatial-grid", action="store_true", help="use the hash grid for neighbor queries")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])


def main() -> None:
    parser = argparse.ArgumentParser(description="Boids flocking simulation")
    add_common_arguments(parser)
    parser.add_argument("--draw-neighbor-radius", action="store_true")
    parser.add_argument("--draw-protected-radius", action="store_true")
    parser.add_argument("--draw-direction", action="store_true")
    parser.add_argument("--draw-pixels", action="store_true", help="draw each boid as a single pixel")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_window(build_config(args))


if __name__ == "__main__":
    main()
