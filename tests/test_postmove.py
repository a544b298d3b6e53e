import math
import random

import pytest

from heuristic_optimizer.initializing import (
    RandomCoordinatesInitializer,
    RandomVelocityInitializer,
    ZeroVelocityInitializer,
)
from heuristic_optimizer.postmove import MoveToBoundary, RandomTeleport


def test_move_to_boundary_clamps_in_place() -> None:
    corrector = MoveToBoundary([(-1.0, 1.0), (0.0, 5.0), (-3.0, 3.0), (0.0, 1.0)])
    coordinates = [2.0, -1.0, 0.5, math.nan]
    corrector.post_move(coordinates)
    assert coordinates == [1.0, 0.0, 0.5, 0.0]


def test_move_to_boundary_sends_infinities_to_lower_bound() -> None:
    corrector = MoveToBoundary([(-1.0, 1.0), (-1.0, 1.0)])
    coordinates = [math.inf, -math.inf]
    corrector.post_move(coordinates)
    assert coordinates == [-1.0, -1.0]


def test_move_to_boundary_dimension_mismatch() -> None:
    with pytest.raises(ValueError):
        MoveToBoundary([(0.0, 1.0)]).post_move([0.5, 0.5])


def test_random_teleport_probability_extremes() -> None:
    intervals = [(10.0, 20.0), (-5.0, -4.0)]
    never = RandomTeleport(intervals, 0.0, rng=random.Random(0))  # noqa: S311
    coordinates = [0.0, 0.0]
    for _ in range(20):
        never.post_move(coordinates)
    assert coordinates == [0.0, 0.0]

    always = RandomTeleport(intervals, 1.0, rng=random.Random(0))  # noqa: S311
    always.post_move(coordinates)
    assert 10.0 <= coordinates[0] <= 20.0
    assert -5.0 <= coordinates[1] <= -4.0


@pytest.mark.parametrize("probability", [-0.1, 1.5])
def test_random_teleport_rejects_bad_probability(probability) -> None:
    with pytest.raises(ValueError):
        RandomTeleport([(0.0, 1.0)], probability)


def test_random_initializers_respect_intervals() -> None:
    rng = random.Random(3)  # noqa: S311 - deterministic unit tests
    intervals = [(0.0, 1.0), (-10.0, -9.0), (100.0, 200.0)]
    coordinates = RandomCoordinatesInitializer(intervals, 25, rng=rng).get_coordinates()
    velocities = RandomVelocityInitializer(intervals, 25, rng=rng).get_velocity()
    assert len(coordinates) == len(velocities) == 25
    for point in coordinates + velocities:
        assert len(point) == 3
        assert all(low <= x <= high for x, (low, high) in zip(point, intervals))


def test_zero_velocity_initializer() -> None:
    velocities = ZeroVelocityInitializer(3, 2).get_velocity()
    assert velocities == [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]
    velocities[0][0] = 1.0
    assert velocities[1][0] == 0.0


@pytest.mark.parametrize(
    "factory",
    [
        lambda: ZeroVelocityInitializer(0, 5),
        lambda: ZeroVelocityInitializer(2, 0),
        lambda: RandomCoordinatesInitializer([(0.0, 1.0)], 0),
        lambda: RandomVelocityInitializer([(1.0, 0.0)], 3),
    ],
)
def test_initializer_validation(factory) -> None:
    with pytest.raises(ValueError):
        factory()
