"""Position correctors applied to particle coordinates after each move."""

from __future__ import annotations

import math
import random

from .core import Interval, validate_intervals
from .creation import RandomVectorCreator
from .swarm import Vector


def _check_dimension(coordinates: Vector, intervals: list[Interval]) -> None:
    if len(coordinates) != len(intervals):
        raise ValueError(
            f"Coordinates have {len(coordinates)} dimensions, expected {len(intervals)}"
        )


class MoveToBoundary:
    """Clamps every coordinate into its interval; non-finite values go to the lower bound."""

    def __init__(self, intervals: list[Interval]) -> None:
        self.intervals = validate_intervals(intervals)

    def post_move(self, coordinates: Vector) -> None:
        _check_dimension(coordinates, self.intervals)
        for i, (low, high) in enumerate(self.intervals):
            value = coordinates[i]
            if not math.isfinite(value):
                value = low
            coordinates[i] = min(max(value, low), high)


class RandomTeleport:
    """With ``probability`` (0..1) moves the particle to a uniformly random point."""

    def __init__(
        self,
        intervals: list[Interval],
        probability: float,
        rng: random.Random | None = None,
    ) -> None:
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Teleport probability must lie in [0, 1], got {probability}")
        self.intervals = validate_intervals(intervals)
        self.probability = probability
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto
        self.vector_creator = RandomVectorCreator(self.rng)

    def post_move(self, coordinates: Vector) -> None:
        _check_dimension(coordinates, self.intervals)
        if self.rng.random() < self.probability:
            coordinates[:] = self.vector_creator.create_vec(self.intervals)
