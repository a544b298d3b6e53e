"""Fixed-width bit-pattern views of numeric genes.

Crossover and mutation work on the raw IEEE-754 (or two's complement) bits of a
value rather than on its arithmetic value. ``BitView`` converts a Python number to
an unsigned integer holding those bits and back again, so each operator is
written once for every supported width.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import numpy as np

_UNSIGNED = {1: np.uint8, 2: np.uint16, 4: np.uint32, 8: np.uint64}

SUPPORTED_DTYPES = (
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",
)


@dataclass(frozen=True)
class BitView:
    """Encode/decode between values of ``dtype`` and their bit patterns."""

    dtype: np.dtype
    unsigned: np.dtype

    @property
    def width(self) -> int:
        return self.dtype.itemsize * 8

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    @property
    def is_float(self) -> bool:
        return self.dtype.kind == "f"

    def to_bits(self, value: Any) -> int:
        return int(np.asarray(value, dtype=self.dtype).view(self.unsigned))

    def from_bits(self, bits: int) -> Any:
        return np.asarray(bits & self.mask, dtype=self.unsigned).view(self.dtype).item()

    def cast(self, value: float) -> Any:
        """Round a Python number to ``dtype`` (overflowing floats become infinities)."""
        with np.errstate(over="ignore"):
            return np.asarray(value, dtype=self.dtype).item()


@lru_cache(maxsize=None)
def bit_view(dtype: str = "float64") -> BitView:
    if dtype not in SUPPORTED_DTYPES:
        raise ValueError(f"Unsupported gene dtype '{dtype}'")
    np_dtype = np.dtype(dtype)
    return BitView(dtype=np_dtype, unsigned=np.dtype(_UNSIGNED[np_dtype.itemsize]))


def single_point_bitswap(parent_1: int, parent_2: int, pos: int, width: int) -> int:
    """Bits of ``parent_1`` at positions >= ``pos`` joined with the bits of ``parent_2`` below it."""
    if not 0 < pos < width:
        raise ValueError(f"Crossover position must lie in [1, {width}), got {pos}")
    full = (1 << width) - 1
    high_mask = (full << pos) & full
    low_mask = full >> (width - pos)
    return (parent_1 & high_mask) | (parent_2 & low_mask)


def flip_bits(bits: int, positions: list[int]) -> int:
    for pos in positions:
        bits ^= 1 << pos
    return bits


@dataclass(frozen=True)
class FloatParts:
    """``value == sign * mantissa * 2**exponent`` for finite floats."""

    mantissa: int
    exponent: int
    sign: int


@lru_cache(maxsize=None)
def _float_layout(dtype: str) -> tuple[int, int]:
    view = bit_view(dtype)
    if not view.is_float:
        raise ValueError(f"Expected a float dtype, got '{dtype}'")
    info = np.finfo(view.dtype)
    return int(info.nmant), int(info.nexp)


def integer_decode(value: float, dtype: str = "float64") -> FloatParts:
    view = bit_view(dtype)
    mant_bits, exp_bits = _float_layout(dtype)
    bits = view.to_bits(value)
    sign = -1 if bits >> (view.width - 1) else 1
    biased = (bits >> mant_bits) & ((1 << exp_bits) - 1)
    fraction = bits & ((1 << mant_bits) - 1)
    if biased == 0:
        mantissa = fraction << 1
    else:
        mantissa = fraction | (1 << mant_bits)
    bias = (1 << (exp_bits - 1)) - 1
    return FloatParts(mantissa=mantissa, exponent=biased - bias - mant_bits, sign=sign)


def integer_encode(parts: FloatParts, dtype: str = "float64") -> float:
    view = bit_view(dtype)
    try:
        magnitude = math.ldexp(float(parts.mantissa), parts.exponent)
    except OverflowError:
        magnitude = math.inf
    return view.cast(parts.sign * magnitude)


def to_signed(bits: int, width: int) -> int:
    if bits >> (width - 1):
        return bits - (1 << width)
    return bits


def to_unsigned(value: int, width: int) -> int:
    return value & ((1 << width) - 1)
