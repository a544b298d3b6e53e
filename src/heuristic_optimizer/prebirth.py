"""Filters applied to new chromosomes after mutation and before birth."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any, Protocol

from .core import Interval, validate_intervals
from .population import Population


class PreBirth(Protocol):
    def pre_birth(self, population: Population, new_chromosomes: list[Any]) -> None: ...


class CheckChromoInterval:
    """Drops children with a non-finite coordinate or one outside its interval."""

    def __init__(self, intervals: list[Interval]) -> None:
        self.intervals = validate_intervals(intervals)

    def pre_birth(self, population: Population, new_chromosomes: list[Any]) -> None:
        new_chromosomes[:] = [
            chromosomes for chromosomes in new_chromosomes if self.check_chromo(chromosomes)
        ]

    def check_chromo(self, chromosomes: Sequence[float]) -> bool:
        if len(chromosomes) != len(self.intervals):
            raise ValueError(
                f"Chromosome has {len(chromosomes)} genes, expected {len(self.intervals)}"
            )
        for gene, (low, high) in zip(chromosomes, self.intervals):
            if not math.isfinite(gene) or gene < low or gene > high:
                return False
        return True
