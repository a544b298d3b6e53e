"""Parent selection for crossover."""

from __future__ import annotations

import random
from typing import Protocol

from .core import is_better
from .population import Population


class Pairing(Protocol):
    """Returns groups of population indices; each group becomes one crossover call."""

    def get_pairs(self, population: Population) -> list[list[int]]: ...


class RandomPairing:
    """Draws ``alive // 2`` pairs uniformly with replacement."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto

    def get_pairs(self, population: Population) -> list[list[int]]:
        size = len(population)
        if size == 0:
            return []
        return [
            [self.rng.randrange(size), self.rng.randrange(size)]
            for _ in range(population.len_alive() // 2)
        ]


class Tournament:
    """Tournament selection of ``partners_count`` parents for each of ``families_count`` families.

    Every parent starts as a random incumbent which then faces ``rounds_count``
    random challengers; the better score survives each round.
    """

    def __init__(
        self,
        families_count: int,
        partners_count: int = 2,
        rounds_count: int = 1,
        rng: random.Random | None = None,
    ) -> None:
        if families_count < 1:
            raise ValueError("families_count must be >= 1")
        if partners_count < 1:
            raise ValueError("partners_count must be >= 1")
        if rounds_count < 1:
            raise ValueError("rounds_count must be >= 1")
        self.families_count = families_count
        self.partners_count = partners_count
        self.rounds_count = rounds_count
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto

    def get_pairs(self, population: Population) -> list[list[int]]:
        size = len(population)
        if size == 0:
            return []
        families: list[list[int]] = []
        for _ in range(self.families_count):
            family = []
            for _ in range(self.partners_count):
                winner = self.rng.randrange(size)
                for _ in range(self.rounds_count):
                    challenger = self.rng.randrange(size)
                    if is_better(population[challenger].score, population[winner].score):
                        winner = challenger
                family.append(winner)
            families.append(family)
        return families
