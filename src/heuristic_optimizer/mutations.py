"""Mutation operators flipping bits of chromosomes."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Any, Protocol

from .bits import bit_view, flip_bits


class Mutation(Protocol):
    """Returns new (possibly changed) chromosomes for a single individual."""

    def mutation(self, chromosomes: Any) -> Any: ...


class BitwiseMutation:
    """Flips ``change_gene_count`` random bits of a gene's bit pattern.

    A single flip of an exponent bit can move a float by hundreds of orders of
    magnitude; keeping the result feasible is left to pre-birth filters and selection.
    """

    def __init__(
        self,
        change_gene_count: int,
        dtype: str = "float64",
        rng: random.Random | None = None,
    ) -> None:
        if change_gene_count < 1:
            raise ValueError("change_gene_count must be >= 1")
        self.change_gene_count = change_gene_count
        self.view = bit_view(dtype)
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto

    def mutation(self, chromosomes: Any) -> Any:
        width = self.view.width
        positions = [self.rng.randrange(width) for _ in range(self.change_gene_count)]
        return self.view.from_bits(flip_bits(self.view.to_bits(chromosomes), positions))


class VecMutation:
    """Mutates each gene of a vector independently with ``probability`` percent."""

    def __init__(
        self,
        probability: float,
        single_mutation: Mutation,
        rng: random.Random | None = None,
    ) -> None:
        if not 0.0 <= probability <= 100.0:
            raise ValueError(f"Mutation probability must lie in [0, 100], got {probability}")
        self.probability = probability
        self.single_mutation = single_mutation
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto

    def mutation(self, chromosomes: Sequence[Any]) -> list[Any]:
        result = []
        for gene in chromosomes:
            if self.rng.uniform(0.0, 100.0) < self.probability:
                result.append(self.single_mutation.mutation(gene))
            else:
                result.append(gene)
        return result
