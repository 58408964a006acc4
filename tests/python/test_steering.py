from __future__ import annotations

import math

from pygame.math import Vector2
from pytest import approx

from flocksim.agent import Boid
from flocksim.config import SteeringConfig
from flocksim.neighbors import NeighborSet, find_neighbors
from flocksim.steering import alignment, cohesion, compute_steering, explain_steering, goal_seeking, separation


def _boid(x: float, y: float, hx: float = 1.0, hy: float = 0.0) -> Boid:
    return Boid(position=Vector2(x, y), heading=Vector2(hx, hy))


def test_cohesion_targets_centroid_including_self():
    boids = [_boid(0.0, 0.0), _boid(10.0, 0.0), _boid(10.0, 30.0)]
    neighbors = NeighborSet(indices=(1, 2), nearest_protected=None)
    result = cohesion(0, boids, neighbors, 2.0)
    # centroid of all three is (20/3, 10)
    expected = Vector2(20.0 / 3.0, 10.0).normalize() * 2.0
    assert result.x == approx(expected.x)
    assert result.y == approx(expected.y)


def test_cohesion_is_zero_without_neighbors():
    boids = [_boid(0.0, 0.0)]
    assert cohesion(0, boids, NeighborSet(indices=(), nearest_protected=None), 3.0) == Vector2()


def test_separation_reacts_to_nearest_only():
    boids = [_boid(0.0, 0.0), _boid(0.0, 2.0), _boid(-1.0, 0.0)]
    neighbors = NeighborSet(indices=(1, 2), nearest_protected=2)
    result = separation(0, boids, neighbors, 4.0)
    assert result.x == approx(4.0)
    assert result.y == approx(0.0)


def test_separation_is_zero_without_intruder():
    boids = [_boid(0.0, 0.0), _boid(10.0, 0.0)]
    assert separation(0, boids, NeighborSet(indices=(1,), nearest_protected=None), 4.0) == Vector2()


def test_alignment_averages_self_and_neighbor_headings():
    boids = [_boid(0.0, 0.0, 1.0, 0.0), _boid(5.0, 0.0, 0.0, 1.0)]
    neighbors = NeighborSet(indices=(1,), nearest_protected=None)
    result = alignment(0, boids, neighbors, 1.0)
    assert result.x == approx(math.sqrt(0.5))
    assert result.y == approx(math.sqrt(0.5))


def test_alignment_of_opposed_headings_is_zero():
    boids = [_boid(0.0, 0.0, 1.0, 0.0), _boid(5.0, 0.0, -1.0, 0.0)]
    result = alignment(0, boids, NeighborSet(indices=(1,), nearest_protected=None), 1.0)
    assert result == Vector2()


def test_goal_seeking_always_points_at_goal():
    result = goal_seeking(Vector2(0.0, 0.0), Vector2(30.0, 40.0), 2.0)
    assert result.x == approx(1.2)
    assert result.y == approx(1.6)


def test_goal_seeking_at_goal_is_zero():
    assert goal_seeking(Vector2(5.0, 5.0), Vector2(5.0, 5.0), 2.0) == Vector2()


def test_weights_are_scaled_by_tick_duration():
    steering = SteeringConfig(goal=(100.0, 0.0), goal_weight=3.0)
    boids = [_boid(0.0, 0.0)]
    neighbors = find_neighbors(0, boids, steering)
    delta = compute_steering(0, boids, neighbors, steering, 0.5)
    assert delta.x == approx(1.5)
    assert delta.y == approx(0.0)


def test_breakdown_sums_to_delta():
    steering = SteeringConfig()
    boids = [_boid(100.0, 100.0, 0.0, 1.0), _boid(103.0, 100.0, 1.0, 0.0), _boid(110.0, 112.0, -1.0, 0.0)]
    neighbors = find_neighbors(0, boids, steering)
    breakdown = explain_steering(0, boids, neighbors, steering, 1.0 / 60.0)
    delta = compute_steering(0, boids, neighbors, steering, 1.0 / 60.0)
    assert breakdown.total == delta
    assert breakdown.separation.x < 0.0
    assert breakdown.cohesion.length() == approx(steering.cohesion_weight / 60.0)
    assert breakdown.goal.length() == approx(steering.goal_weight / 60.0)


def test_steering_does_not_mutate_boids():
    steering = SteeringConfig()
    boids = [_boid(100.0, 100.0), _boid(101.0, 100.0, 0.0, 1.0)]
    before = [(tuple(b.position), tuple(b.heading)) for b in boids]
    compute_steering(0, boids, find_neighbors(0, boids, steering), steering, 1.0 / 60.0)
    assert [(tuple(b.position), tuple(b.heading)) for b in boids] == before
