"""Crossover operators combining parent chromosomes into children."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import Any, Protocol

from .bits import (
    FloatParts,
    bit_view,
    integer_decode,
    integer_encode,
    single_point_bitswap,
    to_signed,
    to_unsigned,
)

MANTISSA_WIDTH = 64
EXPONENT_WIDTH = 16


class Cross(Protocol):
    """Produces child chromosomes from a group of parents."""

    def cross(self, parents: Sequence[Any]) -> list[Any]: ...


def _require_parents(parents: Sequence[Any], exact: int | None = None) -> None:
    if exact is not None and len(parents) != exact:
        raise ValueError(f"Expected exactly {exact} parents, got {len(parents)}")
    if len(parents) < 2:
        raise ValueError(f"Crossover needs at least two parents, got {len(parents)}")


class VecCrossAllGenes:
    """Applies a scalar crossover to every coordinate and returns one child vector."""

    def __init__(self, single_cross: Cross) -> None:
        self.single_cross = single_cross

    def cross(self, parents: Sequence[Sequence[Any]]) -> list[list[Any]]:
        _require_parents(parents)
        gene_count = len(parents[0])
        if any(len(parent) != gene_count for parent in parents):
            raise ValueError("Parents must have the same number of genes.")
        child = [
            self.single_cross.cross([parent[n] for parent in parents])[0]
            for n in range(gene_count)
        ]
        return [child]


class CrossMean:
    """Arithmetic mean of all parents."""

    def cross(self, parents: Sequence[float]) -> list[float]:
        _require_parents(parents)
        return [sum(parents) / len(parents)]


class FloatCrossGeometricMean:
    """Geometric mean of all parents."""

    def cross(self, parents: Sequence[float]) -> list[float]:
        _require_parents(parents)
        product = 1.0
        for value in parents:
            product *= value
        # Real roots only; a negative product has none.
        if product < 0.0:
            return [math.nan]
        return [product ** (1.0 / len(parents))]


class CrossBitwise:
    """Single-point crossover on the raw bits of a gene.

    The child takes the bits of the first parent at positions ``>= pos`` and the bits
    of the second parent below ``pos`` where ``pos`` is drawn from ``[1, width)``.
    """

    def __init__(self, dtype: str = "float64", rng: random.Random | None = None) -> None:
        self.view = bit_view(dtype)
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto

    def cross(self, parents: Sequence[Any]) -> list[Any]:
        _require_parents(parents, exact=2)
        width = self.view.width
        pos = self.rng.randrange(1, width)
        bits = single_point_bitswap(
            self.view.to_bits(parents[0]), self.view.to_bits(parents[1]), pos, width
        )
        return [self.view.from_bits(bits)]


class FloatCrossExp:
    """Crosses mantissas and exponents of two floats independently.

    Each parent is decoded to ``sign * mantissa * 2**exponent``; mantissas are crossed
    as 64-bit patterns, exponents as 16-bit two's complement patterns and the sign is
    taken from a randomly chosen parent.
    """

    def __init__(self, dtype: str = "float64", rng: random.Random | None = None) -> None:
        if not bit_view(dtype).is_float:
            raise ValueError(f"FloatCrossExp expects a float dtype, got '{dtype}'")
        self.dtype = dtype
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto

    def cross(self, parents: Sequence[float]) -> list[float]:
        _require_parents(parents, exact=2)
        parts_1 = integer_decode(parents[0], self.dtype)
        parts_2 = integer_decode(parents[1], self.dtype)

        mantissa_pos = self.rng.randrange(1, MANTISSA_WIDTH)
        exponent_pos = self.rng.randrange(1, EXPONENT_WIDTH)

        mantissa = single_point_bitswap(
            parts_1.mantissa, parts_2.mantissa, mantissa_pos, MANTISSA_WIDTH
        )
        exponent_bits = single_point_bitswap(
            to_unsigned(parts_1.exponent, EXPONENT_WIDTH),
            to_unsigned(parts_2.exponent, EXPONENT_WIDTH),
            exponent_pos,
            EXPONENT_WIDTH,
        )
        sign = parts_1.sign if self.rng.randint(0, 1) == 0 else parts_2.sign
        child = FloatParts(
            mantissa=mantissa,
            exponent=to_signed(exponent_bits, EXPONENT_WIDTH),
            sign=sign,
        )
        return [integer_encode(child, self.dtype)]
