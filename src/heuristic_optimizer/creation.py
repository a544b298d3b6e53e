"""Initial population creators."""

from __future__ import annotations

import random
from typing import Any, Protocol

from .core import Interval, validate_intervals


class Creator(Protocol):
    """Returns the chromosomes of the first generation."""

    def create(self) -> list[Any]: ...


class RandomVectorCreator:
    """Draws vectors uniformly from per-dimension intervals."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto

    def create_vec(self, intervals: list[Interval]) -> list[float]:
        for low, high in intervals:
            if not low < high:
                raise ValueError(f"Interval is empty or inverted: ({low}, {high})")
        return [self.rng.uniform(low, high) for low, high in intervals]


class RandomCreator:
    """Creates ``population_size`` random chromosomes inside ``intervals``."""

    def __init__(
        self,
        population_size: int,
        intervals: list[Interval],
        rng: random.Random | None = None,
    ) -> None:
        if population_size <= 0:
            raise ValueError("population_size must be > 0")
        self.population_size = population_size
        self.intervals = validate_intervals(intervals)
        self.vector_creator = RandomVectorCreator(rng)

    def create(self) -> list[list[float]]:
        return [
            self.vector_creator.create_vec(self.intervals) for _ in range(self.population_size)
        ]
