"""Initial coordinates and velocities for particle swarms."""

from __future__ import annotations

import random

from .core import Interval, validate_intervals
from .creation import RandomVectorCreator
from .swarm import Vector


def _check_count(particles_count: int) -> None:
    if particles_count <= 0:
        raise ValueError("particles_count must be > 0")


class RandomCoordinatesInitializer:
    def __init__(
        self,
        intervals: list[Interval],
        particles_count: int,
        rng: random.Random | None = None,
    ) -> None:
        _check_count(particles_count)
        self.intervals = validate_intervals(intervals)
        self.particles_count = particles_count
        self.vector_creator = RandomVectorCreator(rng)

    def get_coordinates(self) -> list[Vector]:
        return [
            self.vector_creator.create_vec(self.intervals) for _ in range(self.particles_count)
        ]


class RandomVelocityInitializer:
    """Velocities drawn uniformly from per-dimension intervals."""

    def __init__(
        self,
        intervals: list[Interval],
        particles_count: int,
        rng: random.Random | None = None,
    ) -> None:
        _check_count(particles_count)
        self.intervals = validate_intervals(intervals)
        self.particles_count = particles_count
        self.vector_creator = RandomVectorCreator(rng)

    def get_velocity(self) -> list[Vector]:
        return [
            self.vector_creator.create_vec(self.intervals) for _ in range(self.particles_count)
        ]


class ZeroVelocityInitializer:
    def __init__(self, dimension: int, particles_count: int) -> None:
        _check_count(particles_count)
        if dimension <= 0:
            raise ValueError("dimension must be > 0")
        self.dimension = dimension
        self.particles_count = particles_count

    def get_velocity(self) -> list[Vector]:
        return [[0.0] * self.dimension for _ in range(self.particles_count)]
